"""
Article Search

Front door used by the reader and CLI to narrow or reorder a fetched
article set. Two modes:

- text: case-insensitive substring match on title or description
- semantic: TF-IDF relevance ranking over title, description and content
"""

import logging
from typing import List, Sequence

from ..models import NewsArticle
from .relevance import rank

logger = logging.getLogger(__name__)

TEXT_MODE = 'text'
SEMANTIC_MODE = 'semantic'
SEARCH_MODES = (TEXT_MODE, SEMANTIC_MODE)


def filter_articles(articles: Sequence[NewsArticle], query: str) -> List[NewsArticle]:
    """
    Keep articles whose title or description contains the query.

    Args:
        articles: Articles to filter
        query: Substring to look for (case-insensitive)

    Returns:
        Matching articles in their original order
    """
    if not query:
        return list(articles)

    needle = query.lower()
    return [
        article for article in articles
        if needle in (article.title or '').lower()
        or needle in (article.description or '').lower()
    ]


def search_articles(
    articles: Sequence[NewsArticle],
    query: str,
    mode: str = TEXT_MODE
) -> List[NewsArticle]:
    """
    Search a fetched article set.

    Args:
        articles: Articles to search
        query: User-entered query
        mode: 'text' to filter, 'semantic' to rank

    Returns:
        Filtered or reordered articles

    Raises:
        ValueError: If mode is unknown
    """
    if mode not in SEARCH_MODES:
        raise ValueError(f"Unknown search mode '{mode}', expected one of {SEARCH_MODES}")

    if mode == SEMANTIC_MODE:
        results = rank(articles, query)
    else:
        results = filter_articles(articles, query)

    logger.info(f"{mode} search for '{query}' returned {len(results)} of {len(articles)} articles")
    return results
