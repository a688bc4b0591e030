"""
Prompt assembly for the generation stage.

Renders system instructions, retrieved context, conversation history,
the current user turn and the tool scratchpad into the message list
passed to the generator.

Dependencies: langchain_core.prompts, ragchat.core.prompts
System role: Prompt assembler of the conversational pipeline
"""

import logging
from typing import Sequence

from langchain_core.messages import BaseMessage
from langchain_core.prompts import ChatPromptTemplate
from pydantic import BaseModel, Field

from ragchat.core.prompts import ANSWER_PROMPT, DEFAULT_SYSTEM_PROMPT, NO_CONTEXT_PLACEHOLDER
from ragchat.models.chunk import RetrievalResult
from ragchat.models.conversation import ConversationTurn, turns_to_messages

logger = logging.getLogger(__name__)


class AssembledPrompt(BaseModel):
    """Structured prompt with its rendered messages."""

    system: str
    context: str = Field(default="", description="Retrieved chunk texts, verbatim")
    history: list[ConversationTurn] = Field(default_factory=list)
    user_input: str
    scratchpad: list[BaseMessage] = Field(default_factory=list)
    messages: list[BaseMessage] = Field(default_factory=list)

    def to_messages(self) -> list[BaseMessage]:
        """Return the rendered messages for the generator."""
        return list(self.messages)


class PromptAssembler:
    """Build generator prompts from pipeline state."""

    def __init__(
        self,
        system_prompt: str = DEFAULT_SYSTEM_PROMPT,
        template: ChatPromptTemplate = ANSWER_PROMPT,
        context_separator: str = "\n\n",
    ) -> None:
        """
        Initialize assembler.

        Args:
            system_prompt: Instructions placed in the system message
            template: Chat template with system_prompt, context, chat_history,
                input and agent_scratchpad variables
            context_separator: Separator between retrieved chunk texts
        """
        self.system_prompt = system_prompt
        self._template = template
        self._separator = context_separator

    def format_context(self, retrieved: RetrievalResult | None) -> str:
        """Join retrieved chunk texts in rank order."""
        if retrieved is None or retrieved.is_empty():
            return ""
        return self._separator.join(retrieved.texts)

    def assemble(
        self,
        user_input: str,
        history: Sequence[ConversationTurn] = (),
        retrieved: RetrievalResult | None = None,
        scratchpad: Sequence[BaseMessage] = (),
    ) -> AssembledPrompt:
        """
        Render the prompt for one generator call.

        Args:
            user_input: Current user turn
            history: Conversation turns, oldest first
            retrieved: Retrieved chunks (None or empty for no context)
            scratchpad: Tool call and tool result messages of the current turn

        Returns:
            AssembledPrompt: Structured fields plus rendered messages
        """
        context = self.format_context(retrieved)
        messages = self._template.invoke({
            "system_prompt": self.system_prompt,
            "context": context or NO_CONTEXT_PLACEHOLDER,
            "chat_history": turns_to_messages(list(history)),
            "input": user_input,
            "agent_scratchpad": list(scratchpad),
        }).to_messages()

        logger.debug(
            f"{__name__}:assemble - Built {len(messages)} messages "
            f"(context_len={len(context)}, history={len(history)}, scratchpad={len(scratchpad)})"
        )
        return AssembledPrompt(
            system=self.system_prompt,
            context=context,
            history=list(history),
            user_input=user_input,
            scratchpad=list(scratchpad),
            messages=messages,
        )
