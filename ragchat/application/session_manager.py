"""
Session business logic.

Owns one agent loop per session id over shared pipeline components and
serializes turns within a session. Only chat turns register a session;
history reads and resets of unknown ids go straight to memory.

Dependencies: ragchat.core.agent_loop, ragchat.application.pipeline_factory
System role: Session domain business logic
"""

import logging
import threading
from typing import Callable

from ragchat.core.agent_loop import AgentLoop
from ragchat.core.interfaces import ConversationMemory
from ragchat.models.agent import TurnResult
from ragchat.models.conversation import ConversationTurn

logger = logging.getLogger(__name__)


class SessionManager:
    """Registry of per-session agent loops."""

    def __init__(
        self,
        loop_factory: Callable[[str], AgentLoop],
        memory_factory: Callable[[str], ConversationMemory] | None = None,
    ) -> None:
        """
        Initialize session manager.

        Args:
            loop_factory: Creates the agent loop for a new session id
            memory_factory: Opens the stored memory of a session without
                registering it (persistent backends); None when sessions
                only live in this process
        """
        self._loop_factory = loop_factory
        self._memory_factory = memory_factory
        self._loops: dict[str, AgentLoop] = {}
        self._turn_locks: dict[str, threading.Lock] = {}
        self._registry_lock = threading.Lock()

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._loops

    def __len__(self) -> int:
        return len(self._loops)

    def get_or_create(self, session_id: str) -> AgentLoop:
        """Return the agent loop of a session, creating it on first use."""
        with self._registry_lock:
            loop = self._loops.get(session_id)
            if loop is None:
                loop = self._loop_factory(session_id)
                self._loops[session_id] = loop
                self._turn_locks[session_id] = threading.Lock()
                logger.info(f"{__name__}:get_or_create - Created session {session_id}")
            return loop

    def _registered(self, session_id: str) -> tuple[AgentLoop, threading.Lock] | None:
        with self._registry_lock:
            loop = self._loops.get(session_id)
            return None if loop is None else (loop, self._turn_locks[session_id])

    def process_turn(self, session_id: str, user_input: str) -> TurnResult:
        """
        Process one turn; turns of the same session run one at a time.

        Raises:
            SessionClosedError: When the session was shut down
            RagChatError: Any failure raised by the agent loop
        """
        loop = self.get_or_create(session_id)
        with self._turn_locks[session_id]:
            return loop.process_turn(user_input)

    def history(self, session_id: str) -> list[ConversationTurn]:
        """
        Return the conversation log of a session.

        Unknown sessions are not registered: their stored log is read
        through memory_factory, or is empty without one.
        """
        registered = self._registered(session_id)
        if registered is not None:
            return registered[0].history()
        if self._memory_factory is None:
            return []
        return self._memory_factory(session_id).snapshot()

    def reset(self, session_id: str) -> None:
        """Clear a session's memory and reopen it if it was shut down."""
        registered = self._registered(session_id)
        if registered is None:
            if self._memory_factory is not None:
                self._memory_factory(session_id).clear()
            logger.info(f"{__name__}:reset - Session {session_id} not active, nothing to reopen")
            return

        loop, turn_lock = registered
        with turn_lock:
            loop.reset()
