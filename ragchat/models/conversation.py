"""
Conversation domain models.

Represents ordered user/assistant turns kept by conversation memory
and their conversion to LangChain chat messages.

Dependencies: pydantic, langchain_core.messages
System role: Conversation turn data structure
"""

from datetime import datetime, timezone
from enum import Enum

from langchain_core.messages import AIMessage, BaseMessage, HumanMessage
from pydantic import BaseModel, ConfigDict, Field


class ConversationRole(str, Enum):
    """Author of a conversation turn."""

    USER = "user"
    ASSISTANT = "assistant"


class ConversationTurn(BaseModel):
    """Single immutable turn of a conversation."""

    model_config = ConfigDict(frozen=True)

    role: ConversationRole = Field(description="Turn author: 'user' or 'assistant'")
    content: str = Field(description="Turn text")
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Creation time, used for ordering only",
    )

    @classmethod
    def user(cls, content: str) -> "ConversationTurn":
        """Create a user turn."""
        return cls(role=ConversationRole.USER, content=content)

    @classmethod
    def assistant(cls, content: str) -> "ConversationTurn":
        """Create an assistant turn."""
        return cls(role=ConversationRole.ASSISTANT, content=content)

    def to_message(self) -> BaseMessage:
        """Convert to the LangChain message used in prompt placeholders."""
        if self.role is ConversationRole.USER:
            return HumanMessage(content=self.content)
        return AIMessage(content=self.content)


def turns_to_messages(turns: list[ConversationTurn]) -> list[BaseMessage]:
    """
    Convert turns to LangChain messages preserving order.

    Args:
        turns: Ordered conversation turns

    Returns:
        list[BaseMessage]: HumanMessage/AIMessage sequence
    """
    return [turn.to_message() for turn in turns]
