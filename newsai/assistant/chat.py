"""
Article Chat Service

Conversational Q&A about a single article. The article text is the only
grounding context; prior turns are replayed into the prompt on every call.
"""

import logging
from typing import Dict, List, Optional

from langchain_ollama import ChatOllama

from ..config import get_config
from ..models import ChatRequest, NewsArticle

logger = logging.getLogger(__name__)

EMPTY_REPLY_FALLBACK = "I'm sorry, I couldn't generate a response. Please try again."

SYSTEM_PROMPT = """You are a helpful, patient AI assistant specialized in explaining news articles to readers of all backgrounds.
You have access to the following article (use this as your ONLY source for factual claims):

{article_context}

Behavior instructions:
- Answer questions accurately and concisely based on the article content.
- When the user asks about terminology, technical concepts, or industry jargon, first give a simple plain-language explanation (one or two sentences) suitable for someone without background knowledge.
- After the simple explanation, provide a short everyday example or analogy to illustrate the term.
- If the user wants more depth, offer an optional "Deeper explanation" section that goes into technical detail.
- If the user's question is ambiguous, ask a clarifying question before assuming details.
- If the user's question cannot be answered from the article, say so and (briefly) offer related background knowledge while clearly marking it as outside the article's scope.
- Keep answers friendly, avoid unnecessary jargon, and prefer short paragraphs and bullet lists when appropriate.

Now answer the user's latest question.
"""


class ChatError(Exception):
    """Raised when the model fails to answer a chat message."""
    pass


def build_article_context(article: NewsArticle) -> str:
    """Render an article as the grounding text for a conversation."""
    body = article.content or article.description or ''
    return f"Title: {article.title}\n\nContent: {body}"


class ArticleChatService:
    """
    Answers questions about an article using an Ollama chat model.
    """

    def __init__(
        self,
        llm_model: Optional[str] = None,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
        ollama_base_url: Optional[str] = None,
        llm=None
    ):
        """
        Initialize the chat service.

        Args:
            llm_model: Ollama model name
            temperature: LLM temperature (low keeps answers close to the article)
            max_tokens: Maximum tokens in a reply
            ollama_base_url: Base URL for Ollama service
            llm: Pre-built chat model (mainly for tests)
        """
        config = get_config()
        self.llm_model = llm_model or config.ollama_llm_model
        self.temperature = temperature if temperature is not None else config.chat_temperature
        self.max_tokens = max_tokens or config.chat_max_tokens

        self.llm = llm or ChatOllama(
            model=self.llm_model,
            temperature=self.temperature,
            base_url=ollama_base_url or config.ollama_base_url,
            num_predict=self.max_tokens
        )

    def build_prompt(
        self,
        article_context: str,
        message: str,
        conversation_history: Optional[List[Dict[str, str]]] = None
    ) -> str:
        """
        Build the full conversation prompt.

        Args:
            article_context: Article text used as grounding
            message: Latest user message
            conversation_history: Prior turns as role/content dicts

        Returns:
            Prompt string with blank lines between turns
        """
        parts = [SYSTEM_PROMPT.format(article_context=article_context)]
        for turn in conversation_history or []:
            speaker = 'User' if turn['role'] == 'user' else 'Assistant'
            parts.append(f"{speaker}: {turn['content']}")
        parts.append(f"User: {message}")
        return "\n\n".join(parts)

    def chat(
        self,
        article_context: str,
        message: str,
        conversation_history: Optional[List[Dict[str, str]]] = None
    ) -> str:
        """
        Answer a message about an article.

        Args:
            article_context: Article text used as grounding
            message: User's message
            conversation_history: Prior turns

        Returns:
            Assistant reply

        Raises:
            ValueError: If message is empty
            ChatError: If the model call fails
        """
        if not message or not message.strip():
            raise ValueError("Message cannot be empty")

        prompt = self.build_prompt(article_context, message, conversation_history)

        try:
            response = self.llm.invoke(prompt)
        except Exception as e:
            logger.error(f"Error in chat: {e}")
            raise ChatError("Failed to get chat response") from e

        reply = response.content if hasattr(response, 'content') else str(response)
        if not reply or not reply.strip():
            logger.warning("Model returned an empty reply")
            return EMPTY_REPLY_FALLBACK
        return reply

    def chat_request(self, request: ChatRequest) -> str:
        """Answer from a validated request record."""
        return self.chat(
            request.article_context,
            request.message,
            request.conversation_history
        )
