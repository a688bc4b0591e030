"""
In-memory conversation memory.

Append-only ordered log of conversation turns for one session. Writes are
serialized with a lock so extend() is all-or-nothing for concurrent readers.

Dependencies: ragchat.models.conversation
System role: Session memory for the agent loop
"""

import logging
import threading
from typing import Sequence

from ragchat.models.conversation import ConversationTurn

logger = logging.getLogger(__name__)


class InMemoryConversationMemory:
    """Ordered list of turns kept in process memory."""

    def __init__(self, turns: Sequence[ConversationTurn] = ()) -> None:
        self._turns: list[ConversationTurn] = list(turns)
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._turns)

    def append(self, turn: ConversationTurn) -> None:
        """Append one turn at the end of the log."""
        self.extend([turn])

    def extend(self, turns: Sequence[ConversationTurn]) -> None:
        """
        Append turns in order as one atomic write.

        Args:
            turns: Turns to append, oldest first

        Raises:
            TypeError: When any item is not a ConversationTurn (nothing is stored)
        """
        batch = list(turns)
        for turn in batch:
            if not isinstance(turn, ConversationTurn):
                raise TypeError(f"Expected ConversationTurn, got {type(turn).__name__}")
        with self._lock:
            self._turns.extend(batch)
        logger.debug(f"{__name__}:extend - Appended {len(batch)} turns (total={len(self._turns)})")

    def snapshot(self) -> list[ConversationTurn]:
        """Return a copy of all turns, oldest first."""
        with self._lock:
            return list(self._turns)

    def clear(self) -> None:
        """Remove every turn."""
        with self._lock:
            self._turns.clear()
        logger.debug(f"{__name__}:clear - Memory cleared")
