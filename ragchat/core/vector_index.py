"""
In-memory vector index.

Stores (vector, chunk, metadata) entries for one retrieval session and
answers cosine-similarity queries. Insertion is append-only and the
vector dimensionality is fixed by the first insertion (or the constructor).

Dependencies: numpy, ragchat.models.chunk
System role: Vector storage for RAG retrieval
"""

import logging
import threading
from typing import Iterable, Sequence

import numpy as np

from ragchat.core.exceptions import ConfigError, DimensionMismatchError, EmptyIndexError
from ragchat.models.chunk import Chunk, EmbeddedChunk, ScoredChunk

logger = logging.getLogger(__name__)


class InMemoryVectorIndex:
    """
    Append-only cosine-similarity index.

    Safe for concurrent reads once construction is finished; insertions
    are serialized with an internal lock.
    """

    def __init__(self, dimension: int | None = None) -> None:
        """
        Initialize an empty index.

        Args:
            dimension: Expected vector dimensionality (inferred from first insert if None)

        Raises:
            ConfigError: When dimension is not positive
        """
        if dimension is not None and dimension <= 0:
            raise ConfigError(f"dimension must be positive, got {dimension}", field="dimension")
        self._dimension = dimension
        self._entries: list[EmbeddedChunk] = []
        self._matrix: np.ndarray | None = None
        self._lock = threading.Lock()

    @property
    def dimension(self) -> int | None:
        """Vector dimensionality, None until the first insertion."""
        return self._dimension

    def __len__(self) -> int:
        return len(self._entries)

    def entries(self) -> list[EmbeddedChunk]:
        """Return stored entries in insertion order."""
        return list(self._entries)

    def add(self, embedded: EmbeddedChunk) -> None:
        """
        Append one embedded chunk.

        Args:
            embedded: Chunk with its vector

        Raises:
            DimensionMismatchError: When the vector length differs from the index dimensionality
        """
        self.add_many([embedded])

    def add_many(self, embedded_chunks: Iterable[EmbeddedChunk]) -> None:
        """
        Append embedded chunks preserving their order.

        The batch is validated before anything is stored.

        Args:
            embedded_chunks: Chunks with vectors

        Raises:
            DimensionMismatchError: When any vector length differs from the index dimensionality
        """
        batch = list(embedded_chunks)
        if not batch:
            return

        with self._lock:
            dimension = self._dimension or batch[0].dimension
            for embedded in batch:
                if embedded.dimension != dimension:
                    raise DimensionMismatchError(expected=dimension, actual=embedded.dimension)
            self._dimension = dimension
            self._entries.extend(batch)
            self._matrix = None

        logger.debug(f"{__name__}:add_many - Added {len(batch)} entries (total={len(self._entries)})")

    def add_chunk(self, chunk: Chunk, vector: Sequence[float]) -> None:
        """Append a chunk with its vector."""
        self.add(EmbeddedChunk(chunk=chunk, vector=list(vector)))

    def _normalized_matrix(self) -> np.ndarray:
        """Return row-normalized vectors, built lazily after insertions."""
        with self._lock:
            if self._matrix is None:
                matrix = np.asarray([entry.vector for entry in self._entries], dtype=np.float64)
                norms = np.linalg.norm(matrix, axis=1, keepdims=True)
                norms[norms == 0.0] = 1.0
                self._matrix = matrix / norms
            return self._matrix

    def search(self, vector: Sequence[float], k: int) -> list[ScoredChunk]:
        """
        Return the k entries most similar to vector.

        Results are ordered by descending cosine similarity; equal scores
        keep insertion order.

        Args:
            vector: Query embedding
            k: Maximum number of results (>= 0)

        Returns:
            list[ScoredChunk]: At most k scored chunks

        Raises:
            EmptyIndexError: When the index holds zero chunks
            DimensionMismatchError: When the query vector has the wrong dimensionality
            ConfigError: When k is negative
        """
        if k < 0:
            raise ConfigError(f"k must be non-negative, got {k}", field="k")
        if not self._entries:
            raise EmptyIndexError("Vector index holds zero chunks")
        if len(vector) != self._dimension:
            raise DimensionMismatchError(expected=self._dimension, actual=len(vector))
        if k == 0:
            return []

        query = np.asarray(vector, dtype=np.float64)
        query_norm = np.linalg.norm(query)
        if query_norm == 0.0:
            scores = np.zeros(len(self._entries))
        else:
            scores = self._normalized_matrix() @ (query / query_norm)

        order = np.argsort(-scores, kind="stable")[:k]
        return [
            ScoredChunk(chunk=self._entries[i].chunk, score=float(scores[i]))
            for i in order
        ]
