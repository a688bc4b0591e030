"""
Agent tools.

Exports: create_retriever_tool, create_web_search_tool
"""

from ragchat.boundary.tools.retriever_tool import create_retriever_tool
from ragchat.boundary.tools.web_search_tool import create_web_search_tool

__all__ = ["create_retriever_tool", "create_web_search_tool"]
