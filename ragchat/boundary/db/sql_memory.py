"""
SQL-backed conversation memory.

Persists the turn log of one session so conversations survive process
restarts. Counterpart of the in-memory memory with the same contract.
Every database failure surfaces as FatalError.

Dependencies: sqlalchemy, ragchat.boundary.db
System role: Persistent session memory for the agent loop
"""

import logging
from contextlib import contextmanager
from typing import Iterator, Sequence

from sqlalchemy import delete, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from ragchat.boundary.db.chat_message_model import ChatMessageModel
from ragchat.core.exceptions import FatalError
from ragchat.models.conversation import ConversationRole, ConversationTurn

logger = logging.getLogger(__name__)


class SQLConversationMemory:
    """Conversation memory stored as one row per turn."""

    def __init__(self, session_factory: sessionmaker, session_id: str) -> None:
        """
        Initialize memory for one session.

        Args:
            session_factory: SQLAlchemy session factory
            session_id: Conversation identifier
        """
        self._session_factory = session_factory
        self.session_id = session_id

    @contextmanager
    def _database_errors(self, operation: str) -> Iterator[None]:
        """Translate SQLAlchemy failures of one operation into FatalError."""
        try:
            yield
        except SQLAlchemyError as e:
            logger.error(f"{__name__}:{operation} - Database failure for session {self.session_id}: {e}")
            raise FatalError(
                f"Conversation memory {operation} failed",
                collaborator="conversation_memory",
                details={"session_id": self.session_id, "operation": operation},
            ) from e

    def __len__(self) -> int:
        with self._database_errors("count"), self._session_factory() as db:
            stmt = select(func.count()).select_from(ChatMessageModel).where(
                ChatMessageModel.session_id == self.session_id
            )
            return db.execute(stmt).scalar_one()

    def append(self, turn: ConversationTurn) -> None:
        """Append one turn at the end of the log."""
        self.extend([turn])

    def extend(self, turns: Sequence[ConversationTurn]) -> None:
        """
        Append turns in order within one transaction.

        Args:
            turns: Turns to append, oldest first

        Raises:
            FatalError: When the database write fails (nothing is stored)
        """
        batch = list(turns)
        if not batch:
            return

        with self._database_errors("extend"), self._session_factory.begin() as db:
            next_position = db.execute(
                select(func.coalesce(func.max(ChatMessageModel.position), -1)).where(
                    ChatMessageModel.session_id == self.session_id
                )
            ).scalar_one() + 1
            db.add_all([
                ChatMessageModel(
                    session_id=self.session_id,
                    position=next_position + offset,
                    role=turn.role.value,
                    content=turn.content,
                    turn_timestamp=turn.timestamp,
                )
                for offset, turn in enumerate(batch)
            ])

        logger.debug(f"{__name__}:extend - Stored {len(batch)} turns for session {self.session_id}")

    def snapshot(self) -> list[ConversationTurn]:
        """
        Return all turns of the session, oldest first.

        Raises:
            FatalError: When the database read fails
        """
        with self._database_errors("snapshot"), self._session_factory() as db:
            rows = db.execute(
                select(ChatMessageModel)
                .where(ChatMessageModel.session_id == self.session_id)
                .order_by(ChatMessageModel.position)
            ).scalars().all()
            return [
                ConversationTurn(
                    role=ConversationRole(row.role),
                    content=row.content,
                    timestamp=row.turn_timestamp,
                )
                for row in rows
            ]

    def clear(self) -> None:
        """Delete every turn of the session."""
        with self._database_errors("clear"), self._session_factory.begin() as db:
            db.execute(delete(ChatMessageModel).where(ChatMessageModel.session_id == self.session_id))
        logger.info(f"{__name__}:clear - Cleared memory for session {self.session_id}")
