"""
Web page document source.

Fetches a page with LangChain's WebBaseLoader (requests + BeautifulSoup)
and returns its visible text as source documents.

Dependencies: langchain_community.document_loaders, requests
System role: Document source for web content
"""

import logging

import requests
from langchain_community.document_loaders import WebBaseLoader
from langchain_core.documents import Document

from ragchat.core.exceptions import FatalError, TransientError
from ragchat.models.chunk import SourceDocument

logger = logging.getLogger(__name__)


def to_source_documents(documents: list[Document]) -> list[SourceDocument]:
    """Convert LangChain documents, dropping empty pages."""
    return [
        SourceDocument(text=doc.page_content, metadata=dict(doc.metadata))
        for doc in documents
        if doc.page_content and doc.page_content.strip()
    ]


class WebDocumentSource:
    """Load web pages as source documents."""

    def __init__(self, requests_kwargs: dict | None = None, raise_for_status: bool = True) -> None:
        """
        Initialize web source.

        Args:
            requests_kwargs: Extra arguments for requests (timeout, headers)
            raise_for_status: Treat HTTP error statuses as failures
        """
        self._requests_kwargs = {"timeout": 30, **(requests_kwargs or {})}
        self._raise_for_status = raise_for_status

    def load(self, locator: str) -> list[SourceDocument]:
        """
        Fetch one URL.

        Args:
            locator: Page URL

        Returns:
            list[SourceDocument]: Page text with source metadata

        Raises:
            TransientError: Connection failure or timeout
            FatalError: HTTP error status or unparsable page
        """
        loader = WebBaseLoader(
            web_path=locator,
            requests_kwargs=self._requests_kwargs,
            raise_for_status=self._raise_for_status,
        )
        try:
            documents = loader.load()
        except (requests.ConnectionError, requests.Timeout) as e:
            logger.warning(f"{__name__}:load - Transient failure fetching {locator}: {e}")
            raise TransientError(
                f"Failed to fetch {locator}: {e}",
                collaborator="document_source",
                details={"locator": locator},
            ) from e
        except requests.RequestException as e:
            logger.error(f"{__name__}:load - Failed to fetch {locator}: {e}")
            raise FatalError(
                f"Failed to fetch {locator}: {e}",
                collaborator="document_source",
                details={"locator": locator},
            ) from e

        source_documents = to_source_documents(documents)
        logger.info(f"{__name__}:load - Loaded {len(source_documents)} documents from {locator}")
        return source_documents
