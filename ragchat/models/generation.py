"""
Generation domain models.

Represents generator responses, tool call requests and completed tool
invocations exchanged between the agent loop and its collaborators.

Dependencies: pydantic, langchain_core.messages
System role: Generator and tool-call data structures
"""

import json
import uuid
from typing import Any

from langchain_core.messages import AIMessage, ToolMessage
from pydantic import BaseModel, Field


class ToolCallRequest(BaseModel):
    """Structured request from the model to run one tool."""

    id: str = Field(default_factory=lambda: f"call_{uuid.uuid4().hex[:12]}", description="Tool call identifier")
    name: str = Field(description="Requested tool name")
    arguments: dict[str, Any] = Field(default_factory=dict, description="Tool arguments")


class GeneratorResponse(BaseModel):
    """Either a final answer or a set of tool call requests."""

    content: str = Field(default="", description="Answer text (may be empty when tools are requested)")
    tool_calls: list[ToolCallRequest] = Field(default_factory=list)

    @property
    def is_final(self) -> bool:
        """Return True when the model produced an answer instead of tool calls."""
        return not self.tool_calls

    def to_ai_message(self) -> AIMessage:
        """Convert to the AIMessage replayed in the agent scratchpad."""
        return AIMessage(
            content=self.content,
            tool_calls=[
                {"id": call.id, "name": call.name, "args": call.arguments}
                for call in self.tool_calls
            ],
        )


class ToolInvocation(BaseModel):
    """Completed tool call, folded back into the next generator call."""

    call_id: str
    tool_name: str
    arguments: dict[str, Any] = Field(default_factory=dict)
    result: Any = Field(default=None, description="Tool output (string or structured data)")
    is_error: bool = Field(default=False, description="True when the tool failed or was unknown")

    def result_text(self) -> str:
        """Render the result as text for the model."""
        if isinstance(self.result, str):
            return self.result
        try:
            return json.dumps(self.result, default=str)
        except (TypeError, ValueError):
            return str(self.result)

    def to_tool_message(self) -> ToolMessage:
        """Convert to the ToolMessage replayed in the agent scratchpad."""
        return ToolMessage(
            content=self.result_text(),
            tool_call_id=self.call_id,
            name=self.tool_name,
            status="error" if self.is_error else "success",
        )
