"""
Local text file document source.

Dependencies: langchain_community.document_loaders
System role: Document source for local files
"""

import logging
from pathlib import Path

from langchain_community.document_loaders import TextLoader

from ragchat.boundary.loaders.web_loader import to_source_documents
from ragchat.core.exceptions import FatalError
from ragchat.models.chunk import SourceDocument

logger = logging.getLogger(__name__)


class TextFileDocumentSource:
    """Load UTF-8 text files as source documents."""

    def __init__(self, encoding: str = "utf-8") -> None:
        self._encoding = encoding

    def load(self, locator: str) -> list[SourceDocument]:
        """
        Read one file.

        Raises:
            FatalError: When the file is missing or cannot be decoded
        """
        path = Path(locator)
        if not path.is_file():
            raise FatalError(
                f"File not found: {locator}",
                collaborator="document_source",
                details={"locator": locator},
            )

        try:
            documents = TextLoader(str(path), encoding=self._encoding).load()
        except RuntimeError as e:
            raise FatalError(
                f"Failed to read {locator}: {e}",
                collaborator="document_source",
                details={"locator": locator},
            ) from e

        logger.info(f"{__name__}:load - Loaded {path.name}")
        return to_source_documents(documents)
