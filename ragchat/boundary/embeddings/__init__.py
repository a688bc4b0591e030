"""
Embedding boundary modules.

Exports: FixedDimensionEmbeddings, GeminiEmbedder
"""

from ragchat.boundary.embeddings.embeddings_wrapper import FixedDimensionEmbeddings
from ragchat.boundary.embeddings.gemini_embedder import GeminiEmbedder

__all__ = ["FixedDimensionEmbeddings", "GeminiEmbedder"]
