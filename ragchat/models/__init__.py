"""
Domain models.

Pydantic data structures shared by the pipeline stages and the API.
"""

from ragchat.models.agent import AgentState, TurnResult
from ragchat.models.chunk import (
    Chunk,
    EmbeddedChunk,
    RetrievalResult,
    ScoredChunk,
    SourceDocument,
)
from ragchat.models.conversation import ConversationRole, ConversationTurn, turns_to_messages
from ragchat.models.generation import GeneratorResponse, ToolCallRequest, ToolInvocation

__all__ = [
    "AgentState",
    "TurnResult",
    "Chunk",
    "EmbeddedChunk",
    "RetrievalResult",
    "ScoredChunk",
    "SourceDocument",
    "ConversationRole",
    "ConversationTurn",
    "turns_to_messages",
    "GeneratorResponse",
    "ToolCallRequest",
    "ToolInvocation",
]
