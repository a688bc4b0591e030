"""
LLM and embedding configuration settings.

Manages Gemini chat and embedding model parameters.

Dependencies: pydantic, pydantic_settings
System role: Model configuration for generation and embeddings
"""

from pydantic import AliasChoices, Field
from pydantic_settings import SettingsConfigDict

from ragchat.configs.base import BaseSettings


class LLMSettings(BaseSettings):
    """Google Gemini model configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="GEMINI_",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("GEMINI_API_KEY", "GOOGLE_API_KEY"),
        description="Google AI API key (falls back to GOOGLE_API_KEY)",
    )
    chat_model: str = Field(default="gemini-2.0-flash", description="Gemini chat model ID")
    temperature: float = Field(default=0.7, ge=0.0, le=2.0, description="Sampling temperature")
    max_output_tokens: int = Field(default=2048, gt=0, description="Maximum tokens per answer")
    timeout: float | None = Field(default=60.0, description="Request timeout in seconds")
    client_max_retries: int = Field(
        default=0,
        ge=0,
        description="Retries inside the Google client (agent retries are configured separately)",
    )

    embedding_model: str = Field(
        default="models/gemini-embedding-001",
        description="Google Gemini embedding model ID",
    )
    embedding_dimension: int = Field(default=768, gt=0, description="Embedding vector dimension")
