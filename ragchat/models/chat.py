"""
Chat API models and schemas.

Request/response schemas for chat operations.

Dependencies: pydantic
System role: Chat API contracts
"""

from typing import Any

from pydantic import BaseModel, Field


class ChatRequest(BaseModel):
    """Request schema for chat messages."""

    message: str = Field(min_length=1, description="User question or message")


class ChatSource(BaseModel):
    """Retrieved chunk surfaced with an answer."""

    text: str
    score: float
    sequence_index: int
    source: str | None = None


class ChatToolCall(BaseModel):
    """Tool call made while answering."""

    name: str
    arguments: dict[str, Any] = Field(default_factory=dict)
    is_error: bool = False


class ChatResponse(BaseModel):
    """Response schema for chat messages."""

    answer: str
    query: str = Field(default="", description="Standalone query used for retrieval")
    sources: list[ChatSource] = Field(default_factory=list)
    tool_calls: list[ChatToolCall] = Field(default_factory=list)
    shutdown: bool = False


class ChatMessageResponse(BaseModel):
    """Single chat message in history."""

    role: str = Field(description="Message role: 'user' or 'assistant'")
    content: str = Field(description="Message content")


class ChatHistoryResponse(BaseModel):
    """Response schema for chat history."""

    messages: list[ChatMessageResponse]
    total: int = Field(description="Total number of messages")
