"""
Retriever search tool.

Exposes the retriever to the model as a callable tool so it can decide
when to consult the indexed documents.

Dependencies: langchain_core.tools, ragchat.core.retriever
System role: Knowledge-base search tool for the agent loop
"""

import logging

from langchain_core.tools import BaseTool, StructuredTool
from pydantic import BaseModel, Field

from ragchat.core.exceptions import RagChatError, ToolError
from ragchat.core.retriever import Retriever

logger = logging.getLogger(__name__)

DEFAULT_DESCRIPTION = (
    "Use this tool when searching for information about LangChain Expression Language (LCEL)"
)
NO_RESULTS = "No relevant documents found."


class RetrieverToolInput(BaseModel):
    """Arguments of the retriever tool."""

    query: str = Field(description="Search query to find relevant documents")


def create_retriever_tool(
    retriever: Retriever,
    name: str = "lcel_search",
    description: str = DEFAULT_DESCRIPTION,
    k: int | None = None,
) -> BaseTool:
    """
    Create a search tool bound to a retriever.

    Args:
        retriever: Retriever to query
        name: Tool name shown to the model
        description: When the model should use the tool
        k: Result count override (retriever default when None)

    Returns:
        BaseTool: Tool returning retrieved chunk texts separated by blank lines
    """

    def search_documents(query: str) -> str:
        logger.info(f"{__name__}:{name} - START query_len={len(query)}")
        try:
            result = retriever.retrieve(query, k=k)
        except RagChatError as e:
            logger.error(f"{__name__}:{name} - retrieve FAILED: {type(e).__name__}: {e}")
            raise ToolError(f"Retrieval failed: {e.message}", tool_name=name) from e

        if result.is_empty():
            logger.warning(f"{__name__}:{name} - No results found")
            return NO_RESULTS

        output = "\n\n".join(result.texts)
        logger.info(f"{__name__}:{name} - END results={len(result)}, output_len={len(output)}")
        return output

    return StructuredTool.from_function(
        func=search_documents,
        name=name,
        description=description,
        args_schema=RetrieverToolInput,
    )
