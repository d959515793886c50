"""
Data Models

Plain records exchanged between the news client, the search layer and the
AI assistant. Field names follow Python conventions; `from_api`/`to_dict`
translate to and from the NewsAPI camelCase payloads.
"""

import time
import uuid
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Optional

CHAT_ROLES = ('user', 'assistant')


@dataclass
class ArticleSource:
    """Publisher of an article."""
    name: str = ''
    id: Optional[str] = None


@dataclass
class NewsArticle:
    """A news article as returned by the news API."""
    title: str
    url: str = ''
    description: Optional[str] = None
    content: Optional[str] = None
    author: Optional[str] = None
    url_to_image: Optional[str] = None
    published_at: str = ''
    source: ArticleSource = field(default_factory=ArticleSource)

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> 'NewsArticle':
        """
        Build an article from a NewsAPI article object.

        Args:
            data: Raw article dictionary

        Returns:
            NewsArticle instance
        """
        source = data.get('source') or {}
        return cls(
            title=data.get('title') or '',
            url=data.get('url') or '',
            description=data.get('description'),
            content=data.get('content'),
            author=data.get('author'),
            url_to_image=data.get('urlToImage'),
            published_at=data.get('publishedAt') or '',
            source=ArticleSource(
                name=source.get('name') or '',
                id=source.get('id')
            )
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a NewsAPI-shaped dictionary."""
        return {
            'source': {'id': self.source.id, 'name': self.source.name},
            'author': self.author,
            'title': self.title,
            'description': self.description,
            'url': self.url,
            'urlToImage': self.url_to_image,
            'publishedAt': self.published_at,
            'content': self.content,
        }


@dataclass
class ArticleSummary:
    """AI-generated summary of an article."""
    summary: str
    key_points: List[str] = field(default_factory=list)
    reading_time: int = 1

    def to_dict(self) -> Dict[str, Any]:
        return {
            'summary': self.summary,
            'keyPoints': list(self.key_points),
            'readingTime': self.reading_time,
        }


@dataclass
class ChatMessage:
    """A single message in an article conversation."""
    role: str
    content: str
    id: str = ''
    timestamp: float = field(default_factory=time.time)

    def __post_init__(self):
        if self.role not in CHAT_ROLES:
            raise ValueError(f"role must be one of {CHAT_ROLES}, got '{self.role}'")
        if not self.id:
            self.id = f"{self.role}-{uuid.uuid4().hex}"

    def to_turn(self) -> Dict[str, str]:
        """Reduce to the role/content pair used in prompts."""
        return {'role': self.role, 'content': self.content}

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class SummarizeRequest:
    """Input for the summarization collaborator."""
    title: str
    content: str
    description: Optional[str] = None

    def __post_init__(self):
        if not isinstance(self.title, str):
            raise ValueError("title must be a string")
        if not isinstance(self.content, str):
            raise ValueError("content must be a string")
        if self.description is not None and not isinstance(self.description, str):
            raise ValueError("description must be a string")

    @classmethod
    def from_article(cls, article: NewsArticle) -> 'SummarizeRequest':
        return cls(
            title=article.title,
            content=article.content or '',
            description=article.description or ''
        )


@dataclass
class ChatRequest:
    """Input for the chat collaborator."""
    article_context: str
    message: str
    conversation_history: List[Dict[str, str]] = field(default_factory=list)

    def __post_init__(self):
        if not isinstance(self.article_context, str):
            raise ValueError("article_context must be a string")
        if not isinstance(self.message, str):
            raise ValueError("message must be a string")

        for turn in self.conversation_history:
            if turn.get('role') not in CHAT_ROLES:
                raise ValueError(
                    f"conversation_history role must be one of {CHAT_ROLES}, "
                    f"got '{turn.get('role')}'"
                )
            if not isinstance(turn.get('content'), str):
                raise ValueError("conversation_history content must be a string")
