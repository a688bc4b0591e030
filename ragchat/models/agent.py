"""
Agent loop models.

State enumeration of the conversational agent loop and the result
returned for each processed turn.

Dependencies: pydantic
System role: Agent loop state and turn result contracts
"""

from enum import Enum

from pydantic import BaseModel, Field

from ragchat.models.chunk import RetrievalResult
from ragchat.models.generation import ToolInvocation


class AgentState(str, Enum):
    """States of the per-turn agent state machine."""

    AWAITING_INPUT = "awaiting_input"
    REWRITING = "rewriting"
    RETRIEVING = "retrieving"
    GENERATING = "generating"
    TOOL_DISPATCH = "tool_dispatch"
    RESPONDING = "responding"
    ERROR = "error"
    SHUTDOWN = "shutdown"


class TurnResult(BaseModel):
    """Outcome of one processed user turn."""

    answer: str = Field(default="", description="Final assistant answer")
    query: str = Field(default="", description="Standalone query sent to the retriever")
    retrieved: RetrievalResult = Field(default_factory=RetrievalResult)
    tool_invocations: list[ToolInvocation] = Field(default_factory=list)
    state: AgentState = Field(default=AgentState.AWAITING_INPUT)
    shutdown: bool = Field(default=False, description="True when the exit command ended the session")
