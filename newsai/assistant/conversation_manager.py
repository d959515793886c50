"""
Conversation Manager for Article Chats

Keeps the message history of each article conversation in memory, with a
sliding window on the number of turns.
"""

import uuid
import logging
from typing import Dict, List, Optional

from ..models import ChatMessage

logger = logging.getLogger(__name__)


class ConversationManager:
    """
    Manages chat sessions for multi-turn dialogues about articles.

    Features:
    - Session creation and management
    - Conversation history tracking with sliding window
    - Support for multiple concurrent sessions
    """

    def __init__(self, max_history_turns: int = 10):
        """
        Initialize the conversation manager.

        Args:
            max_history_turns: Maximum number of conversation turns to keep
        """
        self.max_history_turns = max_history_turns

        # Session storage: {session_id: [messages]}
        self.sessions: Dict[str, List[ChatMessage]] = {}

    def create_session(self) -> str:
        """
        Create a new conversation session.

        Returns:
            Unique session ID
        """
        session_id = str(uuid.uuid4())
        self.sessions[session_id] = []

        logger.info(f"Created new session: {session_id}")
        return session_id

    def add_turn(
        self,
        session_id: str,
        question: str,
        answer: str
    ) -> None:
        """
        Add a conversation turn (question + answer) to a session.

        Args:
            session_id: Session identifier
            question: User's question
            answer: Assistant's answer
        """
        if session_id not in self.sessions:
            logger.warning(f"Session {session_id} not found, creating new session")
            self.sessions[session_id] = []

        messages = self.sessions[session_id]
        messages.append(ChatMessage(role='user', content=question))
        messages.append(ChatMessage(role='assistant', content=answer))

        # Enforce max history limit (keep last N turns = 2N messages)
        max_messages = self.max_history_turns * 2
        if len(messages) > max_messages:
            self.sessions[session_id] = messages[-max_messages:]

        logger.debug(f"Added turn to session {session_id}")

    def get_messages(
        self,
        session_id: str,
        max_turns: Optional[int] = None
    ) -> List[ChatMessage]:
        """
        Get the messages of a session.

        Args:
            session_id: Session identifier
            max_turns: Maximum number of turns to return (overrides default)

        Returns:
            List of ChatMessage, oldest first
        """
        if session_id not in self.sessions:
            return []

        messages = self.sessions[session_id]

        if max_turns is not None:
            messages = messages[-max_turns * 2:] if max_turns > 0 else []

        return list(messages)

    def get_history(
        self,
        session_id: str,
        max_turns: Optional[int] = None
    ) -> List[Dict[str, str]]:
        """
        Get conversation history as role/content dicts for prompts.

        Args:
            session_id: Session identifier
            max_turns: Maximum number of turns to return

        Returns:
            List of message dictionaries with 'role' and 'content'
        """
        return [message.to_turn() for message in self.get_messages(session_id, max_turns)]

    def clear_session(self, session_id: str) -> None:
        """
        Clear all history for a session.

        Args:
            session_id: Session identifier
        """
        if session_id in self.sessions:
            self.sessions[session_id] = []
            logger.info(f"Cleared session {session_id}")

    def delete_session(self, session_id: str) -> None:
        """Forget a session entirely."""
        self.sessions.pop(session_id, None)
