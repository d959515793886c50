"""
Shared fixtures.
"""

import pytest

from newsai.config import reset_config

CONFIG_ENV_VARS = [
    'NEWS_API_KEY',
    'NEWS_API_BASE_URL',
    'NEWS_PAGE_SIZE',
    'NEWS_LANGUAGE',
    'NEWS_SORT_BY',
    'NEWS_TIMEOUT',
    'OLLAMA_LLM_MODEL',
    'OLLAMA_BASE_URL',
    'SUMMARY_TEMPERATURE',
    'CHAT_TEMPERATURE',
    'CHAT_MAX_TOKENS',
    'READING_WPM',
    'MAX_HISTORY_TURNS',
    'SEARCH_MODE_DEFAULT',
]


@pytest.fixture(autouse=True)
def clean_config(monkeypatch):
    """Run every test against default configuration."""
    for key in CONFIG_ENV_VARS:
        monkeypatch.delenv(key, raising=False)
    reset_config()
    yield
    reset_config()
