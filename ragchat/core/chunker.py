"""
Text chunking into overlapping windows.

Splits document text into retrievable chunks. The default window strategy
produces fixed-size character windows where consecutive chunks overlap by
exactly the configured amount. The recursive strategy delegates to
RecursiveCharacterTextSplitter for separator-aware splitting.

Dependencies: langchain_text_splitters, ragchat.models.chunk
System role: Chunking stage of index construction
"""

import logging
from enum import Enum
from typing import Any

from langchain_text_splitters import RecursiveCharacterTextSplitter

from ragchat.core.exceptions import ConfigError
from ragchat.models.chunk import Chunk, SourceDocument

logger = logging.getLogger(__name__)


class ChunkingStrategy(str, Enum):
    """Supported chunking strategies."""

    WINDOW = "window"
    RECURSIVE = "recursive"


class TextChunker:
    """Split text into overlapping windows of at most window_size characters."""

    def __init__(
        self,
        window_size: int = 100,
        overlap: int = 20,
        strategy: ChunkingStrategy | str = ChunkingStrategy.WINDOW,
    ) -> None:
        """
        Initialize chunker and validate its configuration.

        Args:
            window_size: Maximum chunk size in characters (> 0)
            overlap: Characters shared by consecutive chunks (0 <= overlap < window_size)
            strategy: 'window' for exact fixed windows, 'recursive' for separator-aware splitting

        Raises:
            ConfigError: When the window or overlap is out of range or the strategy is unknown
        """
        if isinstance(window_size, bool) or not isinstance(window_size, int) or window_size <= 0:
            raise ConfigError(
                f"window_size must be a positive integer, got {window_size!r}",
                field="window_size",
            )
        if isinstance(overlap, bool) or not isinstance(overlap, int) or overlap < 0:
            raise ConfigError(
                f"overlap must be a non-negative integer, got {overlap!r}",
                field="overlap",
            )
        if overlap >= window_size:
            raise ConfigError(
                f"overlap ({overlap}) must be smaller than window_size ({window_size})",
                field="overlap",
                details={"window_size": window_size, "overlap": overlap},
            )
        try:
            self.strategy = ChunkingStrategy(strategy)
        except ValueError as e:
            raise ConfigError(f"Unknown chunking strategy: {strategy}", field="strategy") from e

        self.window_size = window_size
        self.overlap = overlap

        self._splitter: RecursiveCharacterTextSplitter | None = None
        if self.strategy is ChunkingStrategy.RECURSIVE:
            self._splitter = RecursiveCharacterTextSplitter(
                chunk_size=window_size,
                chunk_overlap=overlap,
                length_function=len,
            )

    @property
    def step(self) -> int:
        """Distance between the starts of consecutive windows."""
        return self.window_size - self.overlap

    def split_text(self, text: str) -> list[str]:
        """
        Split text into window strings.

        Args:
            text: Full document text

        Returns:
            list[str]: Ordered windows; empty for empty text
        """
        if not text:
            return []
        if self._splitter is not None:
            return self._splitter.split_text(text)

        windows = []
        start = 0
        while True:
            end = min(start + self.window_size, len(text))
            windows.append(text[start:end])
            if end >= len(text):
                break
            start += self.step
        return windows

    def split(self, text: str, metadata: dict[str, Any] | None = None) -> list[Chunk]:
        """
        Split text into chunks carrying source metadata.

        Args:
            text: Full document text
            metadata: Source metadata copied into every chunk

        Returns:
            list[Chunk]: Chunks with contiguous 0-based sequence indexes
        """
        metadata = metadata or {}
        return [
            Chunk(text=window, source_metadata=dict(metadata), sequence_index=i)
            for i, window in enumerate(self.split_text(text))
        ]

    def chunk_documents(self, documents: list[SourceDocument]) -> list[Chunk]:
        """
        Chunk multiple documents, numbering chunks per document.

        Args:
            documents: Documents to split

        Returns:
            list[Chunk]: All chunks in document order
        """
        chunks: list[Chunk] = []
        for document in documents:
            chunks.extend(self.split(document.text, document.metadata))
        logger.info(
            f"{__name__}:chunk_documents - Split {len(documents)} documents into {len(chunks)} chunks "
            f"(strategy={self.strategy.value}, window={self.window_size}, overlap={self.overlap})"
        )
        return chunks
