"""
Article Summarizer

Asks a local Ollama chat model for a short summary and key points of a
news article, and estimates the reading time from the article body.
"""

import json
import math
import logging
from typing import Optional

from langchain_ollama import ChatOllama

from ..config import get_config
from ..models import ArticleSummary, SummarizeRequest

logger = logging.getLogger(__name__)

SUMMARY_FALLBACK = "Summary not available"


class SummarizationError(Exception):
    """Raised when the model fails to produce a usable summary."""
    pass


def estimate_reading_time(content: str, words_per_minute: int = 200) -> int:
    """
    Estimate reading time in whole minutes.

    Args:
        content: Article body
        words_per_minute: Assumed reading speed

    Returns:
        Minutes, rounded up, at least 1
    """
    word_count = len(content.split())
    return max(1, math.ceil(word_count / words_per_minute))


class ArticleSummarizer:
    """
    Generates article summaries with an Ollama chat model in JSON mode.
    """

    def __init__(
        self,
        llm_model: Optional[str] = None,
        temperature: Optional[float] = None,
        ollama_base_url: Optional[str] = None,
        words_per_minute: Optional[int] = None,
        llm=None
    ):
        """
        Initialize the summarizer.

        Args:
            llm_model: Ollama model name
            temperature: Sampling temperature
            ollama_base_url: Base URL for Ollama service
            words_per_minute: Reading speed for the reading-time estimate
            llm: Pre-built chat model (mainly for tests)
        """
        config = get_config()
        self.llm_model = llm_model or config.ollama_llm_model
        self.temperature = temperature if temperature is not None else config.summary_temperature
        self.words_per_minute = words_per_minute or config.reading_words_per_minute

        self.llm = llm or ChatOllama(
            model=self.llm_model,
            temperature=self.temperature,
            base_url=ollama_base_url or config.ollama_base_url,
            format="json"
        )

    def _build_prompt(self, title: str, content: str, description: Optional[str] = None) -> str:
        """Build the analysis prompt for one article."""
        article_text = f"Title: {title}\n\n"
        if description:
            article_text += f"Description: {description}\n\n"
        article_text += f"Content: {content}"

        return f"""You are a professional news analyst. Analyze the following news article and provide:
1. A concise summary (2-3 sentences) that captures the main story
2. 3-5 key points as bullet points highlighting the most important facts

Article:
{article_text}

Respond in JSON format:
{{
  "summary": "your concise summary here",
  "keyPoints": ["point 1", "point 2", "point 3"]
}}"""

    def _parse_response(self, text: str) -> dict:
        result = json.loads(text or '{}')
        if not isinstance(result, dict):
            raise ValueError("Expected a JSON object")
        return result

    def summarize(
        self,
        title: str,
        content: Optional[str],
        description: Optional[str] = None
    ) -> ArticleSummary:
        """
        Summarize an article.

        Args:
            title: Article title
            content: Article body (falls back to description when empty)
            description: Article description

        Returns:
            ArticleSummary with summary, key points and reading time

        Raises:
            ValueError: If the article has neither content nor description
            SummarizationError: If the model call or its JSON fails
        """
        content = content or description or ''
        if not content:
            raise ValueError("Article has no content to summarize")

        prompt = self._build_prompt(title, content, description)

        try:
            response = self.llm.invoke(prompt)
            text = response.content if hasattr(response, 'content') else str(response)
            result = self._parse_response(text)
        except Exception as e:
            logger.error(f"Error summarizing article '{title}': {e}")
            raise SummarizationError("Failed to generate article summary") from e

        key_points = result.get('keyPoints') or []
        if not isinstance(key_points, list):
            key_points = [str(key_points)]

        return ArticleSummary(
            summary=result.get('summary') or SUMMARY_FALLBACK,
            key_points=[str(point) for point in key_points],
            reading_time=estimate_reading_time(content, self.words_per_minute)
        )

    def summarize_request(self, request: SummarizeRequest) -> ArticleSummary:
        """Summarize from a validated request record."""
        return self.summarize(request.title, request.content, request.description)
