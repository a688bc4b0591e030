"""
Chunk domain models.

Represents source documents, retrievable chunks, embedded chunks and
retrieval results flowing between pipeline stages.

Dependencies: pydantic
System role: Data structures for indexing and retrieval
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class SourceDocument(BaseModel):
    """Raw text block yielded by a document source."""

    text: str = Field(description="Document text content")
    metadata: dict[str, Any] = Field(default_factory=dict, description="Source metadata (url, title, path)")


class Chunk(BaseModel):
    """Immutable window of a source document."""

    model_config = ConfigDict(frozen=True)

    text: str = Field(description="Chunk text content")
    source_metadata: dict[str, Any] = Field(
        default_factory=dict,
        description="Metadata copied from the source document",
    )
    sequence_index: int = Field(ge=0, description="0-based position within its document")


class EmbeddedChunk(BaseModel):
    """Chunk paired with its embedding vector."""

    model_config = ConfigDict(frozen=True)

    chunk: Chunk
    vector: list[float] = Field(min_length=1, description="Embedding vector")

    @property
    def dimension(self) -> int:
        """Return the vector dimensionality."""
        return len(self.vector)


class ScoredChunk(BaseModel):
    """Chunk returned by a similarity query."""

    model_config = ConfigDict(frozen=True)

    chunk: Chunk
    score: float = Field(description="Cosine similarity to the query (-1.0 to 1.0)")


class RetrievalResult(BaseModel):
    """Chunks ordered by descending similarity, at most k long."""

    query: str = Field(default="", description="Query the result was computed for")
    items: list[ScoredChunk] = Field(default_factory=list)

    @property
    def chunks(self) -> list[Chunk]:
        """Return the chunks without scores."""
        return [item.chunk for item in self.items]

    @property
    def texts(self) -> list[str]:
        """Return the chunk texts in rank order."""
        return [item.chunk.text for item in self.items]

    def __len__(self) -> int:
        return len(self.items)

    def is_empty(self) -> bool:
        """Return True when nothing was retrieved."""
        return not self.items
