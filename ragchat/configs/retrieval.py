"""
Retrieval configuration settings.

Manages document sources, chunking, top-k retrieval and tool settings.

Dependencies: pydantic, pydantic_settings, ragchat.core.exceptions
System role: Index construction and retrieval configuration
"""

from pydantic import Field, model_validator
from pydantic_settings import SettingsConfigDict

from ragchat.configs.base import BaseSettings
from ragchat.core.exceptions import ConfigError


class RetrievalSettings(BaseSettings):
    """Chunking, indexing and retrieval configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="RETRIEVAL_",
        case_sensitive=False,
        extra="ignore",
    )

    source_urls: list[str] = Field(
        default=["https://js.langchain.com/v0.1/docs/expression_language/"],
        description="Web pages indexed at startup",
    )
    source_paths: list[str] = Field(default_factory=list, description="Local text files indexed at startup")

    chunk_size: int = Field(default=100, gt=0, description="Chunk window size in characters")
    chunk_overlap: int = Field(default=20, ge=0, description="Characters shared by consecutive chunks")
    chunking_strategy: str = Field(default="window", description="'window' or 'recursive'")
    top_k: int = Field(default=2, ge=0, description="Number of chunks retrieved per query")
    embed_concurrency: int = Field(default=4, gt=0, description="Parallel embedding calls during indexing")

    retriever_tool_enabled: bool = Field(default=False, description="Expose the retriever as a tool")
    retriever_tool_name: str = Field(default="lcel_search", description="Retriever tool name")
    retriever_tool_description: str = Field(
        default="Use this tool when searching for information about LangChain Expression Language (LCEL)",
        description="Retriever tool description shown to the model",
    )
    web_search_enabled: bool = Field(default=False, description="Expose Tavily web search as a tool")
    web_search_max_results: int = Field(default=3, gt=0, description="Tavily results per search")

    @model_validator(mode="after")
    def _check_overlap(self) -> "RetrievalSettings":
        if self.chunk_overlap >= self.chunk_size:
            raise ConfigError(
                f"chunk_overlap ({self.chunk_overlap}) must be smaller than chunk_size ({self.chunk_size})",
                field="chunk_overlap",
                details={"chunk_size": self.chunk_size, "chunk_overlap": self.chunk_overlap},
            )
        return self
