"""
Chat message ORM model.

One row per conversation turn, ordered by position within a session.

Dependencies: sqlalchemy, ragchat.boundary.db.base
System role: Persistent storage of conversation memory
"""

from datetime import datetime

from sqlalchemy import DateTime, Index, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from ragchat.boundary.db.base import Base, TimestampMixin


class ChatMessageModel(TimestampMixin, Base):
    """
    Conversation turn row.

    Attributes:
        id: Autoincrement primary key
        session_id: Conversation the turn belongs to
        position: 0-based order of the turn within the session
        role: 'user' or 'assistant'
        content: Turn text
        turn_timestamp: Timestamp carried by the turn itself
    """

    __tablename__ = "chat_messages"
    __table_args__ = (
        UniqueConstraint("session_id", "position", name="uq_chat_messages_session_position"),
        Index("ix_chat_messages_session_id", "session_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    session_id: Mapped[str] = mapped_column(String(255), nullable=False)
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    role: Mapped[str] = mapped_column(String(16), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    turn_timestamp: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    def __repr__(self) -> str:
        return f"<ChatMessageModel(session_id={self.session_id}, position={self.position}, role={self.role})>"
