"""
Test Suite for the Article Summarizer

The chat model is mocked; tests check prompt construction, JSON handling,
fallbacks and the reading-time estimate.
"""

import json

import pytest
from unittest.mock import Mock

from newsai.assistant.summarizer import (
    ArticleSummarizer,
    SummarizationError,
    SUMMARY_FALLBACK,
    estimate_reading_time,
)
from newsai.models import ArticleSummary, SummarizeRequest


def llm_returning(payload):
    llm = Mock()
    text = payload if isinstance(payload, str) else json.dumps(payload)
    llm.invoke.return_value = Mock(content=text)
    return llm


class TestReadingTime:
    """Test the reading-time estimate."""

    def test_minimum_one_minute(self):
        assert estimate_reading_time("short text") == 1
        assert estimate_reading_time("") == 1

    def test_rounds_up(self):
        assert estimate_reading_time("word " * 200) == 1
        assert estimate_reading_time("word " * 201) == 2
        assert estimate_reading_time("word " * 1000) == 5

    def test_custom_speed(self):
        assert estimate_reading_time("word " * 300, words_per_minute=100) == 3

    def test_any_whitespace_separates_words(self):
        assert estimate_reading_time("a\nb\tc  d", words_per_minute=2) == 2


class TestSummarizerInitialization:
    """Test summarizer configuration."""

    def test_defaults_from_config(self):
        summarizer = ArticleSummarizer(llm=Mock())

        assert summarizer.llm_model == "llama3.1:latest"
        assert summarizer.temperature == 0.3
        assert summarizer.words_per_minute == 200

    def test_builds_ollama_model(self):
        summarizer = ArticleSummarizer(llm_model="llama3.1")

        assert summarizer.llm is not None
        assert hasattr(summarizer.llm, 'invoke')


class TestSummarize:
    """Test summary generation."""

    def test_returns_summary(self):
        llm = llm_returning({
            'summary': "Central bank cuts rates.",
            'keyPoints': ["Rates cut by 0.25%", "Inflation cooling", "Markets up"],
        })
        summarizer = ArticleSummarizer(llm=llm)

        result = summarizer.summarize("Rates cut", "word " * 450, "Bank acts")

        assert isinstance(result, ArticleSummary)
        assert result.summary == "Central bank cuts rates."
        assert result.key_points == ["Rates cut by 0.25%", "Inflation cooling", "Markets up"]
        assert result.reading_time == 3

    def test_prompt_contains_article(self):
        llm = llm_returning({'summary': "s", 'keyPoints': []})
        summarizer = ArticleSummarizer(llm=llm)

        summarizer.summarize("Big Title", "Body text", "Short desc")

        prompt = llm.invoke.call_args[0][0]
        assert "Title: Big Title" in prompt
        assert "Description: Short desc" in prompt
        assert "Content: Body text" in prompt
        assert '"keyPoints"' in prompt

    def test_prompt_omits_missing_description(self):
        llm = llm_returning({'summary': "s", 'keyPoints': []})
        summarizer = ArticleSummarizer(llm=llm)

        summarizer.summarize("Title", "Body")

        assert "Description:" not in llm.invoke.call_args[0][0]

    def test_falls_back_to_description(self):
        llm = llm_returning({'summary': "s", 'keyPoints': []})
        summarizer = ArticleSummarizer(llm=llm)

        summarizer.summarize("Title", "", "Only a description")

        assert "Content: Only a description" in llm.invoke.call_args[0][0]

    def test_no_content_raises(self):
        llm = Mock()
        summarizer = ArticleSummarizer(llm=llm)

        with pytest.raises(ValueError, match="no content"):
            summarizer.summarize("Title", "", "")

        llm.invoke.assert_not_called()

    def test_missing_fields_use_fallbacks(self):
        summarizer = ArticleSummarizer(llm=llm_returning({}))

        result = summarizer.summarize("Title", "Body")

        assert result.summary == SUMMARY_FALLBACK
        assert result.key_points == []

    def test_invalid_json_raises(self):
        summarizer = ArticleSummarizer(llm=llm_returning("not json at all"))

        with pytest.raises(SummarizationError, match="Failed to generate article summary"):
            summarizer.summarize("Title", "Body")

    def test_llm_failure_raises(self):
        llm = Mock()
        llm.invoke.side_effect = RuntimeError("connection refused")
        summarizer = ArticleSummarizer(llm=llm)

        with pytest.raises(SummarizationError) as exc_info:
            summarizer.summarize("Title", "Body")

        assert isinstance(exc_info.value.__cause__, RuntimeError)

    def test_summarize_request(self):
        llm = llm_returning({'summary': "s", 'keyPoints': ["k"]})
        summarizer = ArticleSummarizer(llm=llm)

        result = summarizer.summarize_request(
            SummarizeRequest(title="T", content="Body", description="D")
        )

        assert result.key_points == ["k"]

    def test_to_dict_uses_api_field_names(self):
        summary = ArticleSummary(summary="s", key_points=["a"], reading_time=2)

        assert summary.to_dict() == {'summary': "s", 'keyPoints': ["a"], 'readingTime': 2}
