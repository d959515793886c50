from .summarizer import ArticleSummarizer, SummarizationError, estimate_reading_time
from .chat import ArticleChatService, ChatError, build_article_context
from .conversation_manager import ConversationManager

__all__ = [
    'ArticleSummarizer',
    'SummarizationError',
    'estimate_reading_time',
    'ArticleChatService',
    'ChatError',
    'build_article_context',
    'ConversationManager',
]
