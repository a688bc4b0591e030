"""
Agent loop configuration settings.

Dependencies: pydantic, pydantic_settings
System role: Agent loop bounds, memory backend and retry policy configuration
"""

from typing import Literal

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from ragchat.configs.base import BaseSettings


class AgentSettings(BaseSettings):
    """Agent loop configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="AGENT_",
        case_sensitive=False,
        extra="ignore",
    )

    system_prompt: str | None = Field(default=None, description="Override of the default system prompt")
    max_tool_iterations: int = Field(default=5, ge=0, description="Tool dispatch rounds per turn")
    history_window: int | None = Field(
        default=10,
        ge=0,
        description="Most recent turns passed to the model (unset for the whole log)",
    )
    exit_commands: list[str] = Field(default=["exit"], description="Inputs that end a session")
    query_rewrite_enabled: bool = Field(default=True, description="Rewrite follow-up questions before retrieval")
    memory_backend: Literal["memory", "sql"] = Field(default="memory", description="Conversation memory store")

    retry_attempts: int = Field(default=3, ge=1, description="Attempts per external call")
    retry_initial_wait: float = Field(default=1.0, ge=0.0, description="First backoff in seconds")
    retry_max_wait: float = Field(default=30.0, ge=0.0, description="Maximum backoff in seconds")
    retry_jitter: float = Field(default=1.0, ge=0.0, description="Maximum random jitter in seconds")
