"""
Web search tool.

Tavily search for questions the indexed documents cannot answer.

Dependencies: langchain_community.tools.tavily_search
System role: Internet search tool for the agent loop
"""

import logging

from dotenv import load_dotenv
from langchain_community.tools.tavily_search import TavilySearchResults
from langchain_community.utilities.tavily_search import TavilySearchAPIWrapper
from langchain_core.tools import BaseTool

from ragchat.core.exceptions import ConfigError

load_dotenv()
logger = logging.getLogger(__name__)


def create_web_search_tool(max_results: int = 3, api_key: str | None = None) -> BaseTool:
    """
    Create a Tavily search tool.

    Args:
        max_results: Results returned per search
        api_key: Tavily API key (TAVILY_API_KEY from the environment when None)

    Returns:
        BaseTool: Tool named 'tavily_search_results_json'

    Raises:
        ConfigError: When max_results is not positive or no API key is available
    """
    if max_results <= 0:
        raise ConfigError(f"max_results must be positive, got {max_results}", field="max_results")

    try:
        wrapper = TavilySearchAPIWrapper(tavily_api_key=api_key) if api_key else TavilySearchAPIWrapper()
    except ValueError as e:
        raise ConfigError("Tavily API key missing; set TAVILY_API_KEY", field="tavily_api_key") from e

    logger.info(f"{__name__}:create_web_search_tool - Created with max_results={max_results}")
    return TavilySearchResults(max_results=max_results, api_wrapper=wrapper)
