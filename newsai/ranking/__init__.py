"""
Ranking Module

Local relevance ranking and search over fetched articles.
"""

from .relevance import (
    DEFAULT_TEXT_FIELDS,
    RankedDocument,
    build_idf,
    cosine_similarity,
    document_text,
    rank,
    score_documents,
    term_frequency,
    tokenize,
    vectorize,
)
from .search import SEARCH_MODES, SEMANTIC_MODE, TEXT_MODE, filter_articles, search_articles

__all__ = [
    'DEFAULT_TEXT_FIELDS',
    'RankedDocument',
    'build_idf',
    'cosine_similarity',
    'document_text',
    'rank',
    'score_documents',
    'term_frequency',
    'tokenize',
    'vectorize',
    'SEARCH_MODES',
    'SEMANTIC_MODE',
    'TEXT_MODE',
    'filter_articles',
    'search_articles',
]
