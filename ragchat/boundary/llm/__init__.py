"""
LLM boundary modules.

Exports: GeminiChatGenerator, map_provider_error
"""

from ragchat.boundary.llm.errors import map_provider_error
from ragchat.boundary.llm.gemini_generator import GeminiChatGenerator

__all__ = ["GeminiChatGenerator", "map_provider_error"]
