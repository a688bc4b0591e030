"""
Gemini embeddings pinned to one vector size.

GoogleGenerativeAIEmbeddings accepts output_dimensionality per call only;
this subclass fills it in on every query and document call so the vector
index never sees vectors of mixed length.

Dependencies: langchain_google_genai
System role: Embedding dimension consistency for the vector index
"""

import logging

from langchain_google_genai import GoogleGenerativeAIEmbeddings

logger = logging.getLogger(__name__)


class FixedDimensionEmbeddings(GoogleGenerativeAIEmbeddings):
    """Embeddings model that always requests the same dimensionality."""

    _output_dimensionality: int = 768

    def __init__(
        self,
        model: str = "models/gemini-embedding-001",
        output_dimensionality: int = 768,
        **kwargs,
    ) -> None:
        """
        Args:
            model: Gemini embedding model ID
            output_dimensionality: Vector length requested on every call
            **kwargs: Passed through to GoogleGenerativeAIEmbeddings (google_api_key, task_type, ...)
        """
        super().__init__(model=model, **kwargs)
        self._output_dimensionality = output_dimensionality
        logger.info(f"{__name__}:__init__ - model={model}, dimension={output_dimensionality}")

    @property
    def output_dimension(self) -> int:
        return self._output_dimensionality

    def _resolve(self, requested: int | None) -> int:
        return requested or self._output_dimensionality

    def embed_query(
        self,
        text: str,
        task_type: str | None = None,
        title: str | None = None,
        output_dimensionality: int | None = None,
    ) -> list[float]:
        return super().embed_query(
            text,
            task_type=task_type,
            title=title,
            output_dimensionality=self._resolve(output_dimensionality),
        )

    def embed_documents(
        self,
        texts: list[str],
        *,
        batch_size: int = 100,
        task_type: str | None = None,
        titles: list[str] | None = None,
        output_dimensionality: int | None = None,
    ) -> list[list[float]]:
        return super().embed_documents(
            texts,
            batch_size=batch_size,
            task_type=task_type,
            titles=titles,
            output_dimensionality=self._resolve(output_dimensionality),
        )
