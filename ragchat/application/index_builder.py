"""
Vector index construction.

Loads documents, chunks them, embeds the chunks concurrently and inserts
them into a fresh index in original chunk order.

Dependencies: concurrent.futures, ragchat.core
System role: Index construction service run once per retrieval session
"""

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from contextvars import copy_context
from typing import Iterable, Sequence

from ragchat.core.chunker import TextChunker
from ragchat.core.exceptions import ConfigError
from ragchat.core.interfaces import DocumentSource, Embedder
from ragchat.core.retry import RetryPolicy
from ragchat.core.vector_index import InMemoryVectorIndex
from ragchat.models.chunk import Chunk, EmbeddedChunk, SourceDocument

logger = logging.getLogger(__name__)


class IndexBuilder:
    """Build an in-memory vector index from documents."""

    def __init__(
        self,
        chunker: TextChunker,
        embedder: Embedder,
        embed_concurrency: int = 4,
        retry_policy: RetryPolicy | None = None,
    ) -> None:
        """
        Initialize index builder.

        Args:
            chunker: Chunker applied to every document
            embedder: Embedder for chunk vectors
            embed_concurrency: Parallel embedding calls
            retry_policy: Retry policy for each embedding call

        Raises:
            ConfigError: When embed_concurrency is not positive
        """
        if embed_concurrency <= 0:
            raise ConfigError(
                f"embed_concurrency must be positive, got {embed_concurrency}",
                field="embed_concurrency",
            )
        self._chunker = chunker
        self._embedder = embedder
        self._concurrency = embed_concurrency
        self._retry = retry_policy or RetryPolicy()

    def _embed_one(self, chunk: Chunk) -> EmbeddedChunk:
        vector = self._retry.call("embed", self._embedder.embed, chunk.text)
        return EmbeddedChunk(chunk=chunk, vector=vector)

    def embed_chunks(self, chunks: Sequence[Chunk]) -> list[EmbeddedChunk]:
        """
        Embed chunks concurrently, returning results in input order.

        Raises:
            TransientError: When retries are exhausted for any chunk
            FatalError: On the first non-retryable embedding failure
        """
        if not chunks:
            return []
        if self._concurrency == 1 or len(chunks) == 1:
            return [self._embed_one(chunk) for chunk in chunks]

        # Each worker runs in a copy of the caller's context so log records keep the correlation ID
        with ThreadPoolExecutor(max_workers=min(self._concurrency, len(chunks))) as executor:
            futures = [executor.submit(copy_context().run, self._embed_one, chunk) for chunk in chunks]
            return [future.result() for future in futures]

    def build(
        self,
        documents: Iterable[SourceDocument],
        index: InMemoryVectorIndex | None = None,
    ) -> InMemoryVectorIndex:
        """
        Chunk, embed and index documents.

        Args:
            documents: Source documents in the order their chunks should be inserted
            index: Index to extend (new index when None)

        Returns:
            InMemoryVectorIndex: Index holding every chunk
        """
        start_time = time.time()
        index = index if index is not None else InMemoryVectorIndex()
        chunks = self._chunker.chunk_documents(list(documents))

        embedded = self.embed_chunks(chunks)
        index.add_many(embedded)

        logger.info(
            f"{__name__}:build - Indexed {len(embedded)} chunks "
            f"in {round((time.time() - start_time) * 1000, 2)}ms (total={len(index)})"
        )
        return index

    def build_from_locators(
        self,
        source: DocumentSource,
        locators: Iterable[str],
        index: InMemoryVectorIndex | None = None,
    ) -> InMemoryVectorIndex:
        """Load each locator from source and build the index."""
        documents: list[SourceDocument] = []
        for locator in locators:
            documents.extend(self._retry.call("load", source.load, locator))
        return self.build(documents, index=index)

    def build_from_texts(
        self,
        texts: Iterable[str],
        index: InMemoryVectorIndex | None = None,
    ) -> InMemoryVectorIndex:
        """Build the index from raw texts, one document per text."""
        return self.build([SourceDocument(text=text) for text in texts], index=index)
