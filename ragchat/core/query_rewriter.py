"""
History-aware query rewriting.

Turns the latest user turn into a standalone search query using the
conversation history. With no history the input is already standalone
and is passed through verbatim without a model call.

Dependencies: langchain_core.prompts, ragchat.core.interfaces
System role: Rewrite stage ahead of retrieval
"""

import logging
from typing import Sequence

from langchain_core.prompts import ChatPromptTemplate

from ragchat.core.exceptions import FatalError
from ragchat.core.interfaces import Generator
from ragchat.core.prompts import REWRITE_PROMPT
from ragchat.models.conversation import ConversationTurn, turns_to_messages

logger = logging.getLogger(__name__)


class HistoryAwareQueryRewriter:
    """Produce a standalone retrieval query from history and the latest turn."""

    def __init__(self, generator: Generator, prompt: ChatPromptTemplate = REWRITE_PROMPT) -> None:
        """
        Initialize rewriter.

        Args:
            generator: Model used for the rewrite call
            prompt: Template with chat_history and input variables
        """
        self._generator = generator
        self._prompt = prompt

    def rewrite(self, history: Sequence[ConversationTurn], latest_input: str) -> str:
        """
        Rewrite the latest turn into a search query.

        Args:
            history: Conversation turns, oldest first
            latest_input: Latest user turn

        Returns:
            str: Standalone query (latest_input verbatim when history is empty)

        Raises:
            TransientError: Generator network failure (propagated for retry)
            FatalError: Generator failure or a tool-call response
        """
        if not history:
            return latest_input

        messages = self._prompt.invoke({
            "chat_history": turns_to_messages(list(history)),
            "input": latest_input,
        }).to_messages()

        response = self._generator.invoke(messages)
        if not response.is_final:
            raise FatalError(
                "Query rewrite returned tool calls instead of a query",
                collaborator="generator",
                details={"tool_calls": [call.name for call in response.tool_calls]},
            )

        query = response.content.strip()
        if not query:
            logger.warning(f"{__name__}:rewrite - Empty rewrite, falling back to raw input")
            return latest_input

        logger.info(f"{__name__}:rewrite - Rewrote query (input_len={len(latest_input)}, query_len={len(query)})")
        return query
