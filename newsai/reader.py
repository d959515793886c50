"""
News Reader

Orchestrates the collaborators into one reading session:
- Fetching articles from the news API
- Searching or ranking the fetched set
- Summarizing an article (memoized per URL)
- Chatting about the currently selected article
"""

import logging
from typing import Any, Dict, List, Optional

from .config import get_config
from .models import ArticleSummary, ChatMessage, NewsArticle
from .news.client import NewsClient
from .ranking.relevance import RankedDocument, score_documents
from .ranking.search import search_articles
from .assistant.summarizer import ArticleSummarizer
from .assistant.chat import ArticleChatService, build_article_context
from .assistant.conversation_manager import ConversationManager

logger = logging.getLogger(__name__)


class NewsReader:
    """
    Main entry point tying the news client, search and AI assistant together.

    Collaborators are created lazily from the global Config unless injected.
    """

    def __init__(
        self,
        news_client: Optional[NewsClient] = None,
        summarizer: Optional[ArticleSummarizer] = None,
        chat_service: Optional[ArticleChatService] = None,
        conversation_manager: Optional[ConversationManager] = None
    ):
        """
        Initialize the reader.

        Args:
            news_client: NewsClient instance (or None for default)
            summarizer: ArticleSummarizer instance (or None for default)
            chat_service: ArticleChatService instance (or None for default)
            conversation_manager: ConversationManager instance (or None for default)
        """
        self.config = get_config()
        self._news_client = news_client
        self._summarizer = summarizer
        self._chat_service = chat_service
        self.conversation_manager = conversation_manager or ConversationManager(
            max_history_turns=self.config.max_history_turns
        )

        self.articles: List[NewsArticle] = []
        self.selected_article: Optional[NewsArticle] = None
        self.session_id: Optional[str] = None
        self._summary_cache: Dict[str, ArticleSummary] = {}

    @property
    def news_client(self) -> NewsClient:
        if self._news_client is None:
            self._news_client = NewsClient()
        return self._news_client

    @property
    def summarizer(self) -> ArticleSummarizer:
        if self._summarizer is None:
            self._summarizer = ArticleSummarizer()
        return self._summarizer

    @property
    def chat_service(self) -> ArticleChatService:
        if self._chat_service is None:
            self._chat_service = ArticleChatService()
        return self._chat_service

    def fetch_news(self, query: Optional[str] = None) -> List[NewsArticle]:
        """
        Fetch articles and remember them as the current set.

        Args:
            query: Keyword query (blank means latest news)

        Returns:
            Fetched articles in provider order
        """
        self.articles = self.news_client.fetch_articles(query)
        return self.articles

    def search(
        self,
        query: str,
        mode: Optional[str] = None,
        articles: Optional[List[NewsArticle]] = None
    ) -> List[NewsArticle]:
        """
        Search the current (or given) article set.

        Args:
            query: User-entered query
            mode: 'text' or 'semantic' (default from config)
            articles: Articles to search instead of the current set

        Returns:
            Filtered or reordered articles
        """
        pool = self.articles if articles is None else articles
        return search_articles(pool, query, mode or self.config.search_mode_default)

    def rank_with_scores(
        self,
        query: str,
        articles: Optional[List[NewsArticle]] = None
    ) -> List[RankedDocument]:
        """Relevance-rank articles and keep the scores."""
        pool = self.articles if articles is None else articles
        return score_documents(pool, query)

    def summarize(self, article: NewsArticle) -> ArticleSummary:
        """
        Summarize an article, reusing an earlier summary for the same URL.

        Args:
            article: Article to summarize

        Returns:
            ArticleSummary
        """
        if article.url and article.url in self._summary_cache:
            logger.debug(f"Summary cache hit for {article.url}")
            return self._summary_cache[article.url]

        summary = self.summarizer.summarize(
            article.title,
            article.content or '',
            article.description or ''
        )

        if article.url:
            self._summary_cache[article.url] = summary
        return summary

    def select_article(self, article: NewsArticle) -> str:
        """
        Open an article for chatting; starts a fresh conversation.

        Returns:
            New session ID
        """
        if self.session_id is not None:
            self.conversation_manager.delete_session(self.session_id)

        self.selected_article = article
        self.session_id = self.conversation_manager.create_session()
        logger.info(f"Selected article: {article.title}")
        return self.session_id

    def back(self) -> None:
        """Close the selected article and drop its conversation."""
        if self.session_id is not None:
            self.conversation_manager.delete_session(self.session_id)
        self.selected_article = None
        self.session_id = None

    def ask(self, message: str) -> str:
        """
        Ask a question about the selected article.

        The turn is recorded only when the model answers.

        Raises:
            RuntimeError: If no article is selected
        """
        if self.selected_article is None or self.session_id is None:
            raise RuntimeError("No article selected")

        history = self.conversation_manager.get_history(self.session_id)
        reply = self.chat_service.chat(
            build_article_context(self.selected_article),
            message,
            history
        )
        self.conversation_manager.add_turn(self.session_id, message, reply)
        return reply

    def get_messages(self) -> List[ChatMessage]:
        """Messages of the current conversation."""
        if self.session_id is None:
            return []
        return self.conversation_manager.get_messages(self.session_id)

    def get_stats(self) -> Dict[str, Any]:
        """Snapshot of the reader's state."""
        return {
            'total_articles': len(self.articles),
            'cached_summaries': len(self._summary_cache),
            'selected_article': self.selected_article.title if self.selected_article else None,
            'messages': len(self.get_messages()),
        }
