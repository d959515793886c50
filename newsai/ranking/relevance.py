"""
Relevance Ranking Module

TF-IDF vectorizer and cosine-similarity ranker for a small, already-fetched
set of articles. Everything is recomputed on every call:

1. Text extraction (title, description, content)
2. Tokenization
3. Smoothed IDF over the supplied collection
4. TF-IDF vectors for each document and the query
5. Cosine scoring and a stable descending sort
"""

import math
import re
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Sequence

logger = logging.getLogger(__name__)

DEFAULT_TEXT_FIELDS = ('title', 'description', 'content')

_DELIMITER_PATTERN = re.compile(r'[^a-z0-9]+')


@dataclass(frozen=True)
class RankedDocument:
    """A document paired with its relevance score and original position."""
    document: Any
    score: float
    position: int


def tokenize(text: str) -> List[str]:
    """
    Split text into lower-cased alphanumeric tokens.

    Args:
        text: Input text

    Returns:
        Tokens in order of appearance, duplicates retained
    """
    if not isinstance(text, str):
        raise TypeError(f"Expected text to be str, got {type(text).__name__}")

    return [token for token in _DELIMITER_PATTERN.split(text.lower()) if token]


def term_frequency(tokens: Iterable[str]) -> Dict[str, int]:
    """Count raw occurrences of each token."""
    tf: Dict[str, int] = {}
    for token in tokens:
        tf[token] = tf.get(token, 0) + 1
    return tf


def build_idf(token_sequences: Sequence[Sequence[str]]) -> Dict[str, float]:
    """
    Build smoothed inverse document frequencies for a collection.

    Weight for each token is ln((N + 1) / (df + 1)) + 1, where N is the
    number of documents and df the number of documents containing it.

    Args:
        token_sequences: One token sequence per document

    Returns:
        Mapping of token to IDF weight
    """
    df: Dict[str, int] = {}
    for tokens in token_sequences:
        for token in set(tokens):
            df[token] = df.get(token, 0) + 1

    n_docs = len(token_sequences)
    return {
        token: math.log((n_docs + 1) / (count + 1)) + 1
        for token, count in df.items()
    }


def vectorize(tf: Mapping, idf: Mapping) -> Dict[str, float]:
    """Weight term counts by IDF; unknown tokens get weight 0."""
    return {token: count * idf.get(token, 0) for token, count in tf.items()}


def _dot(a: Mapping, b: Mapping) -> float:
    if len(b) < len(a):
        a, b = b, a
    total = 0.0
    for key, value in a.items():
        if key in b:
            total += value * b[key]
    return total


def _norm(vector: Mapping) -> float:
    return math.sqrt(sum(value * value for value in vector.values()))


def cosine_similarity(a: Mapping, b: Mapping) -> float:
    """
    Cosine similarity between two sparse vectors.

    A zero norm on either side is treated as 1, so vectors without
    scoreable terms score 0 instead of NaN.
    """
    norm_a = _norm(a) or 1.0
    norm_b = _norm(b) or 1.0
    return _dot(a, b) / (norm_a * norm_b)


def _field_value(document: Any, field: str) -> Any:
    if isinstance(document, Mapping):
        return document.get(field)
    return getattr(document, field, None)


def document_text(document: Any, fields: Sequence[str] = DEFAULT_TEXT_FIELDS) -> str:
    """
    Concatenate a document's text fields into one blob.

    Works with mappings and attribute-style records. Missing or None
    fields become empty strings.

    Raises:
        TypeError: If a field holds something other than str or None
    """
    parts = []
    for field in fields:
        value = _field_value(document, field)
        if value is None:
            value = ''
        elif not isinstance(value, str):
            raise TypeError(
                f"Field '{field}' must be str or None, got {type(value).__name__}"
            )
        parts.append(value)
    return ' '.join(parts)


def score_documents(
    documents: Sequence[Any],
    query: str,
    fields: Sequence[str] = DEFAULT_TEXT_FIELDS
) -> List[RankedDocument]:
    """
    Score every document against the query and sort by relevance.

    Args:
        documents: Caller-supplied records (not mutated)
        query: Free-text query
        fields: Names of the text-bearing fields to concatenate

    Returns:
        RankedDocument entries sorted by descending score; ties keep
        their input order
    """
    if not isinstance(query, str):
        raise TypeError(f"Expected query to be str, got {type(query).__name__}")

    documents = list(documents)
    docs_tokens = [tokenize(document_text(doc, fields)) for doc in documents]
    idf = build_idf(docs_tokens)
    query_vector = vectorize(term_frequency(tokenize(query)), idf)

    scored = []
    for position, (document, tokens) in enumerate(zip(documents, docs_tokens)):
        doc_vector = vectorize(term_frequency(tokens), idf)
        scored.append(RankedDocument(
            document=document,
            score=cosine_similarity(doc_vector, query_vector),
            position=position
        ))

    # sorted() is stable, equal scores keep input order
    ranked = sorted(scored, key=lambda item: item.score, reverse=True)

    logger.debug(
        f"Ranked {len(ranked)} documents for query '{query}' "
        f"({len(idf)} terms in vocabulary)"
    )
    return ranked


def rank(
    documents: Sequence[Any],
    query: str,
    fields: Sequence[str] = DEFAULT_TEXT_FIELDS
) -> List[Any]:
    """
    Reorder documents by TF-IDF cosine similarity to the query.

    Returns a new list holding the same document objects.
    """
    return [item.document for item in score_documents(documents, query, fields)]
