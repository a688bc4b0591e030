"""
Document source adapters.

Exports: TextFileDocumentSource, WebDocumentSource
"""

from ragchat.boundary.loaders.text_loader import TextFileDocumentSource
from ragchat.boundary.loaders.web_loader import WebDocumentSource

__all__ = ["TextFileDocumentSource", "WebDocumentSource"]
