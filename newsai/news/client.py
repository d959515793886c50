"""
News API Client

Fetches articles from NewsAPI's `/everything` endpoint by keyword.
Results come back in the provider's sort order (newest first by default);
no ranking happens here.
"""

import logging
from typing import Any, Dict, List, Optional

import requests

from ..config import get_config
from ..models import NewsArticle

logger = logging.getLogger(__name__)

DEFAULT_QUERY = "latest"


class NewsAPIError(Exception):
    """Raised when the news API rejects a request or returns an error payload."""

    def __init__(self, message: str, code: Optional[str] = None, status_code: Optional[int] = None):
        super().__init__(message)
        self.code = code
        self.status_code = status_code


class NewsAPIConnectionError(NewsAPIError):
    """Raised when the news API cannot be reached."""
    pass


class NewsClient:
    """
    Thin client for the NewsAPI `/everything` search.

    Settings not passed explicitly are taken from the global Config.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        page_size: Optional[int] = None,
        language: Optional[str] = None,
        sort_by: Optional[str] = None,
        timeout: Optional[int] = None,
        session: Optional[requests.Session] = None
    ):
        """
        Initialize the news client.

        Args:
            api_key: NewsAPI key (default: NEWS_API_KEY)
            base_url: API base URL (default: https://newsapi.org/v2)
            page_size: Articles per request (default: 30)
            language: Article language filter (default: en)
            sort_by: Provider-side sort order (default: publishedAt)
            timeout: Request timeout in seconds
            session: Optional requests session to reuse connections
        """
        config = get_config()
        self.api_key = api_key if api_key is not None else config.news_api_key
        self.base_url = (base_url or config.news_api_base_url).rstrip('/')
        self.page_size = page_size or config.news_page_size
        self.language = language or config.news_language
        self.sort_by = sort_by or config.news_sort_by
        self.timeout = timeout or config.news_timeout
        self.session = session or requests.Session()

    def _build_params(self, query: str, page_size: int) -> Dict[str, Any]:
        return {
            'q': query,
            'pageSize': page_size,
            'language': self.language,
            'sortBy': self.sort_by,
            'apiKey': self.api_key,
        }

    def _error_from_response(self, response: requests.Response) -> NewsAPIError:
        """Translate an HTTP error response into a NewsAPIError."""
        try:
            payload = response.json()
        except ValueError:
            payload = {}

        message = payload.get('message') or f"News API returned HTTP {response.status_code}"
        return NewsAPIError(
            message,
            code=payload.get('code'),
            status_code=response.status_code
        )

    def fetch_articles(
        self,
        query: Optional[str] = None,
        page_size: Optional[int] = None
    ) -> List[NewsArticle]:
        """
        Fetch articles matching a keyword query.

        Args:
            query: Search keywords (blank means "latest")
            page_size: Override the default page size

        Returns:
            List of NewsArticle in provider order

        Raises:
            NewsAPIError: If the API key is missing or the API reports an error
            NewsAPIConnectionError: If the API cannot be reached
        """
        if not self.api_key:
            raise NewsAPIError("NEWS_API_KEY is not set")

        query = (query or '').strip() or DEFAULT_QUERY
        size = page_size or self.page_size

        logger.info(f"Fetching up to {size} articles for '{query}'")

        try:
            response = self.session.get(
                f"{self.base_url}/everything",
                params=self._build_params(query, size),
                timeout=self.timeout
            )
        except requests.exceptions.Timeout as e:
            raise NewsAPIConnectionError(
                f"News API request timed out after {self.timeout}s"
            ) from e
        except requests.exceptions.ConnectionError as e:
            raise NewsAPIConnectionError(
                f"Unable to connect to News API at {self.base_url}"
            ) from e
        except requests.exceptions.RequestException as e:
            raise NewsAPIConnectionError(f"Error calling News API: {str(e)}") from e

        if not response.ok:
            error = self._error_from_response(response)
            logger.error(f"Error fetching news: {error}")
            raise error

        try:
            payload = response.json()
        except ValueError as e:
            raise NewsAPIError("News API returned invalid JSON") from e

        if payload.get('status') != 'ok':
            logger.error(f"Error fetching news: {payload.get('message')}")
            raise NewsAPIError(
                payload.get('message') or "Failed to fetch news articles",
                code=payload.get('code'),
                status_code=response.status_code
            )

        articles = [NewsArticle.from_api(item) for item in payload.get('articles') or []]
        logger.info(f"Fetched {len(articles)} articles")
        return articles
