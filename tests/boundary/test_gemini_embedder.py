"""
Test suite for the Gemini embedder adapter.

System role: Verification of the embedding boundary
"""

from unittest.mock import MagicMock, patch

import pytest
from google.api_core import exceptions as google_exceptions
from langchain_google_genai import GoogleGenerativeAIEmbeddings

from ragchat.boundary.embeddings.embeddings_wrapper import FixedDimensionEmbeddings
from ragchat.boundary.embeddings.gemini_embedder import GeminiEmbedder
from ragchat.core.exceptions import DimensionMismatchError, FatalError, TransientError


class TestGeminiEmbedder:
    """Adapter behaviour."""

    def test_embed_returns_vector(self) -> None:
        """Vectors of the configured length are returned as lists."""
        embeddings = MagicMock()
        embeddings.embed_query.return_value = (0.1, 0.2, 0.3)

        vector = GeminiEmbedder(dimension=3, embeddings=embeddings).embed("text")

        assert vector == [0.1, 0.2, 0.3]
        embeddings.embed_query.assert_called_once_with("text")

    def test_wrong_length_rejected(self) -> None:
        """A vector of another length raises DimensionMismatchError."""
        embeddings = MagicMock()
        embeddings.embed_query.return_value = [0.1, 0.2]

        with pytest.raises(DimensionMismatchError):
            GeminiEmbedder(dimension=3, embeddings=embeddings).embed("text")

    def test_rate_limit_is_transient(self) -> None:
        """Quota errors become TransientError."""
        embeddings = MagicMock()
        embeddings.embed_query.side_effect = google_exceptions.ResourceExhausted("quota")

        with pytest.raises(TransientError):
            GeminiEmbedder(dimension=3, embeddings=embeddings).embed("text")

    def test_permission_error_is_fatal(self) -> None:
        """Authorization failures become FatalError."""
        embeddings = MagicMock()
        embeddings.embed_query.side_effect = google_exceptions.PermissionDenied("bad key")

        with pytest.raises(FatalError):
            GeminiEmbedder(dimension=3, embeddings=embeddings).embed("text")


class TestFixedDimensionEmbeddings:
    """Dimension pinning of the LangChain wrapper."""

    def test_embed_query_requests_configured_dimension(self) -> None:
        """Every query embedding requests the configured output dimensionality."""
        embeddings = FixedDimensionEmbeddings(output_dimensionality=8, google_api_key="test-key")

        with patch.object(GoogleGenerativeAIEmbeddings, "embed_query", return_value=[0.0] * 8) as parent:
            embeddings.embed_query("hello")

        assert parent.call_args.kwargs["output_dimensionality"] == 8
        assert embeddings.output_dimension == 8

    def test_embed_documents_requests_configured_dimension(self) -> None:
        """Batch embeddings use the same dimensionality."""
        embeddings = FixedDimensionEmbeddings(output_dimensionality=8, google_api_key="test-key")

        with patch.object(GoogleGenerativeAIEmbeddings, "embed_documents", return_value=[[0.0] * 8]) as parent:
            embeddings.embed_documents(["hello"])

        assert parent.call_args.kwargs["output_dimensionality"] == 8
