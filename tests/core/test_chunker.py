"""
Test suite for the text chunker.

Verifies window coverage, exact overlap, configuration validation and
per-document numbering.

System role: Verification of the chunking stage
"""

import pytest

from ragchat.core.chunker import ChunkingStrategy, TextChunker
from ragchat.core.exceptions import ConfigError
from ragchat.models.chunk import SourceDocument


class TestChunkerConfiguration:
    """Construction-time validation."""

    @pytest.mark.parametrize(
        ("window_size", "overlap"),
        [(10, 10), (10, 15), (0, 0), (-5, 0), (10, -1)],
    )
    def test_invalid_window_or_overlap_raises_config_error(self, window_size: int, overlap: int) -> None:
        """Overlap must be smaller than a positive window."""
        with pytest.raises(ConfigError):
            TextChunker(window_size=window_size, overlap=overlap)

    def test_unknown_strategy_raises_config_error(self) -> None:
        """Unknown strategy names are rejected."""
        with pytest.raises(ConfigError) as exc_info:
            TextChunker(strategy="semantic")

        assert exc_info.value.details["field"] == "strategy"

    def test_defaults_match_reference_pipeline(self) -> None:
        """Default chunker uses 100-character windows with 20 characters of overlap."""
        chunker = TextChunker()

        assert chunker.window_size == 100
        assert chunker.overlap == 20
        assert chunker.step == 80
        assert chunker.strategy is ChunkingStrategy.WINDOW


class TestWindowSplitting:
    """Fixed window semantics."""

    def test_empty_text_produces_no_chunks(self) -> None:
        """Empty input yields an empty list."""
        assert TextChunker(window_size=10, overlap=2).split("") == []

    def test_text_shorter_than_window_is_single_chunk(self) -> None:
        """Short text becomes exactly one chunk."""
        chunks = TextChunker(window_size=50, overlap=10).split("short text")

        assert [chunk.text for chunk in chunks] == ["short text"]
        assert chunks[0].sequence_index == 0

    def test_consecutive_chunks_overlap_exactly(self) -> None:
        """Each pair of neighbours shares exactly `overlap` characters."""
        text = "abcdefghijklmnopqrstuvwxyz0123456789"
        chunker = TextChunker(window_size=10, overlap=3)

        windows = chunker.split_text(text)

        for previous, current in zip(windows, windows[1:]):
            assert previous[-3:] == current[:3]
        assert all(len(window) <= 10 for window in windows)

    def test_chunks_cover_input_in_order(self) -> None:
        """Removing the overlaps reconstructs the input."""
        text = "The quick brown fox jumps over the lazy dog. " * 5
        chunker = TextChunker(window_size=17, overlap=4)

        windows = chunker.split_text(text)
        rebuilt = windows[0] + "".join(window[4:] for window in windows[1:])

        assert rebuilt == text

    def test_final_chunk_may_be_shorter(self) -> None:
        """The last window holds the remainder."""
        windows = TextChunker(window_size=4, overlap=1).split_text("abcdefghij")

        assert windows == ["abcd", "defg", "ghij"]

    def test_zero_overlap_partitions_text(self) -> None:
        """Without overlap the windows partition the text."""
        windows = TextChunker(window_size=3, overlap=0).split_text("abcdefgh")

        assert windows == ["abc", "def", "gh"]

    def test_split_is_deterministic(self) -> None:
        """Same input and configuration produce identical chunks."""
        chunker = TextChunker(window_size=8, overlap=2)
        text = "deterministic chunking output"

        assert chunker.split(text) == chunker.split(text)


class TestChunkDocuments:
    """Metadata and numbering across documents."""

    def test_metadata_copied_and_indexes_restart_per_document(self) -> None:
        """Chunks carry their document metadata with 0-based per-document indexes."""
        chunker = TextChunker(window_size=5, overlap=1)
        documents = [
            SourceDocument(text="abcdefghi", metadata={"source": "a"}),
            SourceDocument(text="xyz", metadata={"source": "b"}),
        ]

        chunks = chunker.chunk_documents(documents)

        assert [chunk.sequence_index for chunk in chunks] == [0, 1, 0]
        assert [chunk.source_metadata["source"] for chunk in chunks] == ["a", "a", "b"]


class TestRecursiveStrategy:
    """Separator-aware splitting."""

    def test_recursive_chunks_respect_window_size(self) -> None:
        """Recursive splitting never exceeds the window size."""
        chunker = TextChunker(window_size=40, overlap=5, strategy="recursive")
        text = "LangChain Expression Language composes runnables.\n\nIt supports streaming and batching out of the box."

        chunks = chunker.split(text)

        assert chunks
        assert all(len(chunk.text) <= 40 for chunk in chunks)
        assert [chunk.sequence_index for chunk in chunks] == list(range(len(chunks)))
