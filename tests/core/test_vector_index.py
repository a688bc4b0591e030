"""
Test suite for the in-memory vector index.

System role: Verification of vector storage and similarity search
"""

import threading

import pytest

from ragchat.core.exceptions import ConfigError, DimensionMismatchError, EmptyIndexError
from ragchat.core.vector_index import InMemoryVectorIndex
from ragchat.models.chunk import Chunk, EmbeddedChunk


def make_entry(text: str, vector: list[float], index: int = 0) -> EmbeddedChunk:
    return EmbeddedChunk(chunk=Chunk(text=text, sequence_index=index), vector=vector)


class TestInsertion:
    """Append-only insertion with fixed dimensionality."""

    def test_dimension_fixed_by_first_insert(self) -> None:
        """First vector fixes the dimensionality."""
        index = InMemoryVectorIndex()
        index.add(make_entry("a", [1.0, 0.0, 0.0]))

        assert index.dimension == 3
        assert len(index) == 1

    def test_mismatched_vector_rejected(self) -> None:
        """A vector of another length raises DimensionMismatchError."""
        index = InMemoryVectorIndex(dimension=2)

        with pytest.raises(DimensionMismatchError) as exc_info:
            index.add(make_entry("a", [1.0, 0.0, 0.0]))

        assert exc_info.value.details == {"expected": 2, "actual": 3, "collaborator": "vector_index"}
        assert len(index) == 0

    def test_batch_validated_before_storing(self) -> None:
        """A bad vector anywhere in a batch stores nothing."""
        index = InMemoryVectorIndex()

        with pytest.raises(DimensionMismatchError):
            index.add_many([make_entry("a", [1.0, 0.0]), make_entry("b", [1.0])])

        assert len(index) == 0

    def test_non_positive_dimension_rejected(self) -> None:
        """Constructor dimension must be positive."""
        with pytest.raises(ConfigError):
            InMemoryVectorIndex(dimension=0)

    def test_entries_keep_insertion_order(self) -> None:
        """entries() returns chunks in insertion order."""
        index = InMemoryVectorIndex()
        index.add_many([make_entry(text, [1.0, float(i)], i) for i, text in enumerate("abc")])

        assert [entry.chunk.text for entry in index.entries()] == ["a", "b", "c"]


class TestSearch:
    """Cosine similarity queries."""

    @pytest.fixture
    def index(self) -> InMemoryVectorIndex:
        index = InMemoryVectorIndex()
        index.add_many([
            make_entry("x-axis", [1.0, 0.0], 0),
            make_entry("diagonal", [1.0, 1.0], 1),
            make_entry("y-axis", [0.0, 1.0], 2),
        ])
        return index

    def test_results_ordered_by_descending_similarity(self, index: InMemoryVectorIndex) -> None:
        """Closest vectors come first."""
        results = index.search([1.0, 0.1], k=3)

        assert [item.chunk.text for item in results] == ["x-axis", "diagonal", "y-axis"]
        assert results[0].score == pytest.approx(0.995, abs=1e-3)
        assert results[0].score >= results[1].score >= results[2].score

    def test_k_limits_results(self, index: InMemoryVectorIndex) -> None:
        """At most k results are returned."""
        assert len(index.search([0.0, 1.0], k=1)) == 1

    def test_k_zero_returns_empty(self, index: InMemoryVectorIndex) -> None:
        """k=0 returns no results."""
        assert index.search([1.0, 0.0], k=0) == []

    def test_k_larger_than_size_returns_all(self, index: InMemoryVectorIndex) -> None:
        """k beyond the index size returns every entry."""
        assert len(index.search([1.0, 0.0], k=10)) == 3

    def test_ties_keep_insertion_order(self) -> None:
        """Equal scores are ordered by insertion."""
        index = InMemoryVectorIndex()
        index.add_many([make_entry(f"dup-{i}", [2.0, 0.0], i) for i in range(4)])

        results = index.search([1.0, 0.0], k=4)

        assert [item.chunk.text for item in results] == ["dup-0", "dup-1", "dup-2", "dup-3"]

    def test_empty_index_raises(self) -> None:
        """Searching an empty index raises EmptyIndexError."""
        with pytest.raises(EmptyIndexError):
            InMemoryVectorIndex().search([1.0], k=1)

    def test_query_dimension_checked(self, index: InMemoryVectorIndex) -> None:
        """Query vectors must match the index dimensionality."""
        with pytest.raises(DimensionMismatchError):
            index.search([1.0, 0.0, 0.0], k=1)

    def test_negative_k_rejected(self, index: InMemoryVectorIndex) -> None:
        """Negative k is a configuration error."""
        with pytest.raises(ConfigError):
            index.search([1.0, 0.0], k=-1)

    def test_zero_query_scores_zero_in_insertion_order(self, index: InMemoryVectorIndex) -> None:
        """A zero query vector scores everything 0.0."""
        results = index.search([0.0, 0.0], k=3)

        assert [item.score for item in results] == [0.0, 0.0, 0.0]
        assert [item.chunk.text for item in results] == ["x-axis", "diagonal", "y-axis"]

    def test_search_after_additional_insert_sees_new_entry(self, index: InMemoryVectorIndex) -> None:
        """Cached matrix is rebuilt after insertion."""
        index.search([1.0, 0.0], k=1)
        index.add(make_entry("negative-x", [-1.0, 0.0], 3))

        results = index.search([-1.0, 0.0], k=1)

        assert results[0].chunk.text == "negative-x"

    def test_concurrent_reads_return_same_results(self, index: InMemoryVectorIndex) -> None:
        """Parallel searches on a built index agree."""
        outcomes: list[list[str]] = []

        def search() -> None:
            outcomes.append([item.chunk.text for item in index.search([1.0, 0.2], k=3)])

        threads = [threading.Thread(target=search) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(outcomes) == 8
        assert all(outcome == outcomes[0] for outcome in outcomes)
