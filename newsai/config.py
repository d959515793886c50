"""
Centralized Configuration Module

Provides a single source of truth for all system configuration parameters.
Loads settings from environment variables with sensible defaults and validation.
"""

import os
from dataclasses import dataclass, field, asdict
from typing import Dict, Any, Optional
from urllib.parse import urlparse
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


class ConfigValidationError(Exception):
    """Raised when configuration validation fails."""
    pass


@dataclass
class Config:
    """
    Centralized configuration for NewsAI.

    All configuration parameters are loaded from environment variables
    with sensible defaults. Validation is performed on initialization.
    """

    # News API Settings
    news_api_key: str = field(default="")
    news_api_base_url: str = field(default="https://newsapi.org/v2")
    news_page_size: int = field(default=30)
    news_language: str = field(default="en")
    news_sort_by: str = field(default="publishedAt")
    news_timeout: int = field(default=30)

    # Ollama Settings
    ollama_llm_model: str = field(default="llama3.1:latest")
    ollama_base_url: str = field(default="http://localhost:11434")

    # Assistant Parameters
    summary_temperature: float = field(default=0.3)
    chat_temperature: float = field(default=0.2)
    chat_max_tokens: int = field(default=800)
    reading_words_per_minute: int = field(default=200)
    max_history_turns: int = field(default=10)

    # Search Settings
    search_mode_default: str = field(default="text")

    def __post_init__(self):
        """Load configuration from environment and validate."""
        self._load_from_environment()
        self._validate()

    def _load_from_environment(self):
        """Load configuration from environment variables."""
        # News API Settings
        self.news_api_key = self._get_env_str('NEWS_API_KEY', self.news_api_key)
        self.news_api_base_url = self._get_env_str('NEWS_API_BASE_URL', self.news_api_base_url)
        self.news_page_size = self._get_env_int('NEWS_PAGE_SIZE', self.news_page_size)
        self.news_language = self._get_env_str('NEWS_LANGUAGE', self.news_language)
        self.news_sort_by = self._get_env_str('NEWS_SORT_BY', self.news_sort_by)
        self.news_timeout = self._get_env_int('NEWS_TIMEOUT', self.news_timeout)

        # Ollama Settings
        self.ollama_llm_model = self._get_env_str('OLLAMA_LLM_MODEL', self.ollama_llm_model)
        self.ollama_base_url = self._get_env_str('OLLAMA_BASE_URL', self.ollama_base_url)

        # Assistant Parameters
        self.summary_temperature = self._get_env_float('SUMMARY_TEMPERATURE', self.summary_temperature)
        self.chat_temperature = self._get_env_float('CHAT_TEMPERATURE', self.chat_temperature)
        self.chat_max_tokens = self._get_env_int('CHAT_MAX_TOKENS', self.chat_max_tokens)
        self.reading_words_per_minute = self._get_env_int('READING_WPM', self.reading_words_per_minute)
        self.max_history_turns = self._get_env_int('MAX_HISTORY_TURNS', self.max_history_turns)

        # Search Settings
        self.search_mode_default = self._get_env_str('SEARCH_MODE_DEFAULT', self.search_mode_default)

    def _get_env_str(self, key: str, default: str) -> str:
        """Get string value from environment."""
        value = os.getenv(key, default)
        if isinstance(value, str):
            value = value.strip()
        return value

    def _get_env_int(self, key: str, default: int) -> int:
        """Get integer value from environment."""
        value = os.getenv(key)
        if value is None:
            return default

        try:
            return int(value)
        except ValueError:
            raise ConfigValidationError(
                f"Invalid integer value for {key}: '{value}'"
            )

    def _get_env_float(self, key: str, default: float) -> float:
        """Get float value from environment."""
        value = os.getenv(key)
        if value is None:
            return default

        try:
            return float(value)
        except ValueError:
            raise ConfigValidationError(
                f"Invalid float value for {key}: '{value}'"
            )

    def _validate(self):
        """Validate configuration parameters."""
        # Validate non-empty strings
        if not self.ollama_llm_model:
            raise ConfigValidationError("ollama_llm_model cannot be empty")
        if not self.news_language:
            raise ConfigValidationError("news_language cannot be empty")

        # Validate positive integers
        positive_int_fields = [
            ('news_page_size', self.news_page_size),
            ('chat_max_tokens', self.chat_max_tokens),
            ('reading_words_per_minute', self.reading_words_per_minute),
            ('max_history_turns', self.max_history_turns),
        ]

        for field_name, value in positive_int_fields:
            if value <= 0:
                raise ConfigValidationError(
                    f"{field_name} must be positive, got {value}"
                )

        # NewsAPI caps pageSize at 100
        if self.news_page_size > 100:
            raise ConfigValidationError(
                f"news_page_size must be at most 100, got {self.news_page_size}"
            )

        # Validate timeouts (at least 1 second)
        if self.news_timeout < 1:
            raise ConfigValidationError(
                f"news_timeout must be at least 1, got {self.news_timeout}"
            )

        # Validate temperatures
        for field_name, value in [
            ('summary_temperature', self.summary_temperature),
            ('chat_temperature', self.chat_temperature),
        ]:
            if not 0.0 <= value <= 2.0:
                raise ConfigValidationError(
                    f"{field_name} must be between 0.0 and 2.0, got {value}"
                )

        if self.search_mode_default not in ('text', 'semantic'):
            raise ConfigValidationError(
                f"search_mode_default must be 'text' or 'semantic', got '{self.search_mode_default}'"
            )

        # Validate URL format
        for field_name, url in [
            ('news_api_base_url', self.news_api_base_url),
            ('ollama_base_url', self.ollama_base_url),
        ]:
            parsed = urlparse(url)
            if not all([parsed.scheme, parsed.netloc]):
                raise ConfigValidationError(
                    f"Invalid URL for {field_name}: {url}"
                )

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return asdict(self)

    def __repr__(self) -> str:
        """String representation of configuration with the API key masked."""
        items = []
        for key, value in self.to_dict().items():
            if key == 'news_api_key' and value:
                value = '***'
            items.append(f"{key}={value!r}")
        return f"Config({', '.join(items)})"

    def update(self, **kwargs):
        """
        Update configuration values with validation.

        Args:
            **kwargs: Configuration parameters to update

        Raises:
            ConfigValidationError: If validation fails
        """
        # Store original values for rollback
        original_values = {}

        try:
            # Update values
            for key, value in kwargs.items():
                if not hasattr(self, key):
                    raise ConfigValidationError(f"Unknown configuration parameter: {key}")
                original_values[key] = getattr(self, key)
                setattr(self, key, value)

            # Validate new configuration
            self._validate()

        except Exception:
            # Rollback on validation failure
            for key, value in original_values.items():
                setattr(self, key, value)
            raise

    def get_news_config(self) -> Dict[str, Any]:
        """Get news-API-related configuration."""
        return {
            'base_url': self.news_api_base_url,
            'page_size': self.news_page_size,
            'language': self.news_language,
            'sort_by': self.news_sort_by,
            'timeout': self.news_timeout,
        }

    def get_assistant_config(self) -> Dict[str, Any]:
        """Get assistant-related configuration."""
        return {
            'llm_model': self.ollama_llm_model,
            'base_url': self.ollama_base_url,
            'summary_temperature': self.summary_temperature,
            'chat_temperature': self.chat_temperature,
            'chat_max_tokens': self.chat_max_tokens,
            'reading_words_per_minute': self.reading_words_per_minute,
        }


# Singleton instance
_config_instance: Optional[Config] = None


def get_config() -> Config:
    """
    Get the global configuration instance (singleton pattern).

    Returns:
        Config: Global configuration instance
    """
    global _config_instance
    if _config_instance is None:
        _config_instance = Config()
    return _config_instance


def reset_config():
    """Reset the global configuration instance."""
    global _config_instance
    _config_instance = None
