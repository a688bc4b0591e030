"""
Test suite for document sources.

System role: Verification of web and text file loading
"""

from unittest.mock import patch

import pytest
import requests
from langchain_core.documents import Document

from ragchat.boundary.loaders import TextFileDocumentSource, WebDocumentSource
from ragchat.core.exceptions import FatalError, TransientError

LCEL_URL = "https://js.langchain.com/v0.1/docs/expression_language/"


class TestWebDocumentSource:
    """Web page loading through WebBaseLoader."""

    @patch("ragchat.boundary.loaders.web_loader.WebBaseLoader")
    def test_load_converts_documents(self, loader_cls) -> None:
        """Page text and metadata are preserved; blank pages are dropped."""
        loader_cls.return_value.load.return_value = [
            Document(page_content="LCEL is a declarative way to compose chains.", metadata={"source": LCEL_URL}),
            Document(page_content="   ", metadata={"source": LCEL_URL}),
        ]

        documents = WebDocumentSource().load(LCEL_URL)

        assert len(documents) == 1
        assert documents[0].text.startswith("LCEL")
        assert documents[0].metadata["source"] == LCEL_URL
        assert loader_cls.call_args.kwargs["web_path"] == LCEL_URL
        assert loader_cls.call_args.kwargs["requests_kwargs"]["timeout"] == 30

    @patch("ragchat.boundary.loaders.web_loader.WebBaseLoader")
    def test_connection_failure_is_transient(self, loader_cls) -> None:
        loader_cls.return_value.load.side_effect = requests.ConnectionError("unreachable")

        with pytest.raises(TransientError) as exc_info:
            WebDocumentSource().load(LCEL_URL)

        assert exc_info.value.details["locator"] == LCEL_URL

    @patch("ragchat.boundary.loaders.web_loader.WebBaseLoader")
    def test_http_error_is_fatal(self, loader_cls) -> None:
        loader_cls.return_value.load.side_effect = requests.HTTPError("404 Not Found")

        with pytest.raises(FatalError):
            WebDocumentSource().load(LCEL_URL)


class TestTextFileDocumentSource:
    """Local file loading."""

    def test_load_file(self, tmp_path) -> None:
        path = tmp_path / "notes.txt"
        path.write_text("It supports sync, async, and streaming.", encoding="utf-8")

        documents = TextFileDocumentSource().load(str(path))

        assert [doc.text for doc in documents] == ["It supports sync, async, and streaming."]
        assert documents[0].metadata["source"] == str(path)

    def test_missing_file_is_fatal(self, tmp_path) -> None:
        with pytest.raises(FatalError):
            TextFileDocumentSource().load(str(tmp_path / "missing.txt"))
