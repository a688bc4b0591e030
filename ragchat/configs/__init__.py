"""
Configuration module.

Exports: Settings, get_settings and the per-concern settings classes.
"""

from ragchat.configs.agent import AgentSettings
from ragchat.configs.database import DatabaseSettings
from ragchat.configs.llm import LLMSettings
from ragchat.configs.retrieval import RetrievalSettings
from ragchat.configs.settings import Settings, get_settings

__all__ = [
    "AgentSettings",
    "DatabaseSettings",
    "LLMSettings",
    "RetrievalSettings",
    "Settings",
    "get_settings",
]
