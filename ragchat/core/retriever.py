"""
Top-k retrieval over the vector index.

Embeds the query, ranks stored chunks by cosine similarity and returns a
RetrievalResult of at most k chunks. An empty index degrades to an empty
result so downstream prompt assembly stays total.

Dependencies: ragchat.core.vector_index, ragchat.core.interfaces
System role: RAG retrieval business logic
"""

import logging

from ragchat.core.exceptions import ConfigError
from ragchat.core.interfaces import Embedder
from ragchat.core.vector_index import InMemoryVectorIndex
from ragchat.models.chunk import RetrievalResult

logger = logging.getLogger(__name__)


class Retriever:
    """Fetch the chunks most relevant to a query."""

    def __init__(self, index: InMemoryVectorIndex, embedder: Embedder, k: int = 2) -> None:
        """
        Initialize retriever.

        Args:
            index: Vector index to search
            embedder: Embedder used for query vectors
            k: Default number of chunks to return

        Raises:
            ConfigError: When k is negative
        """
        if k < 0:
            raise ConfigError(f"k must be non-negative, got {k}", field="k")
        self._index = index
        self._embedder = embedder
        self.k = k

    @property
    def index(self) -> InMemoryVectorIndex:
        return self._index

    def retrieve(self, query: str, k: int | None = None) -> RetrievalResult:
        """
        Retrieve the top-k chunks for a query.

        Embedder failures (TransientError, FatalError) propagate unchanged;
        retry decisions belong to the caller.

        Args:
            query: Search query
            k: Override of the default result count

        Returns:
            RetrievalResult: Chunks by descending similarity, ties in insertion order

        Raises:
            ConfigError: When k is negative
        """
        k = self.k if k is None else k
        if k < 0:
            raise ConfigError(f"k must be non-negative, got {k}", field="k")

        if k == 0:
            return RetrievalResult(query=query)
        if len(self._index) == 0:
            logger.warning(f"{__name__}:retrieve - Index is empty, returning no context")
            return RetrievalResult(query=query)

        query_vector = self._embedder.embed(query)
        items = self._index.search(query_vector, k=k)
        logger.info(
            f"{__name__}:retrieve - Retrieved {len(items)}/{len(self._index)} chunks "
            f"(k={k}, query_len={len(query)})"
        )
        return RetrievalResult(query=query, items=items)
