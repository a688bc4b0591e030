"""
Database boundary modules.

Exports: Base, ChatMessageModel, SQLConversationMemory, get_engine, get_session_factory
"""

from ragchat.boundary.db.base import Base
from ragchat.boundary.db.chat_message_model import ChatMessageModel
from ragchat.boundary.db.connection import create_tables, get_engine, get_session_factory
from ragchat.boundary.db.sql_memory import SQLConversationMemory

__all__ = [
    "Base",
    "ChatMessageModel",
    "SQLConversationMemory",
    "create_tables",
    "get_engine",
    "get_session_factory",
]
