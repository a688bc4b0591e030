"""
Gemini embedder.

Adapts a LangChain Embeddings model to the Embedder interface and maps
provider failures onto TransientError / FatalError.

Dependencies: langchain_core.embeddings, ragchat.boundary.embeddings.embeddings_wrapper
System role: Embedder adapter for indexing and retrieval
"""

import logging
from typing import Any

from dotenv import load_dotenv
from langchain_core.embeddings import Embeddings

from ragchat.boundary.embeddings.embeddings_wrapper import FixedDimensionEmbeddings
from ragchat.boundary.llm.errors import map_provider_error
from ragchat.configs import LLMSettings
from ragchat.core.exceptions import DimensionMismatchError, RagChatError

load_dotenv()
logger = logging.getLogger(__name__)


class GeminiEmbedder:
    """Embedder producing fixed-length vectors."""

    def __init__(
        self,
        model: str = "models/gemini-embedding-001",
        dimension: int = 768,
        api_key: str | None = None,
        embeddings: Embeddings | None = None,
    ) -> None:
        """
        Initialize embedder.

        Args:
            model: Gemini embedding model ID
            dimension: Vector length every call must return
            api_key: Google AI API key (GOOGLE_API_KEY from the environment when None)
            embeddings: Preconfigured LangChain embeddings, overrides model and api_key
        """
        if embeddings is None:
            kwargs: dict[str, Any] = {}
            if api_key:
                kwargs["google_api_key"] = api_key
            embeddings = FixedDimensionEmbeddings(model=model, output_dimensionality=dimension, **kwargs)
        self._embeddings = embeddings
        self.dimension = dimension

    @classmethod
    def from_settings(cls, settings: LLMSettings) -> "GeminiEmbedder":
        return cls(
            model=settings.embedding_model,
            dimension=settings.embedding_dimension,
            api_key=settings.api_key,
        )

    def embed(self, text: str) -> list[float]:
        """
        Embed one text.

        Raises:
            TransientError: Retryable provider failure
            FatalError: Other provider failure or a vector of the wrong length
        """
        try:
            vector = self._embeddings.embed_query(text)
        except RagChatError:
            raise
        except Exception as e:
            error = map_provider_error(e, collaborator="embedder")
            logger.error(f"{__name__}:embed - {type(error).__name__}: {type(e).__name__}: {e}")
            raise error from e

        if len(vector) != self.dimension:
            raise DimensionMismatchError(expected=self.dimension, actual=len(vector))
        return list(vector)
