"""
Dependency injection container.

Lazily builds the shared pipeline and session manager for FastAPI routes.

Dependencies: ragchat.configs, ragchat.application
System role: DI container for service injection
"""

import logging
import threading

from ragchat.application.pipeline_factory import build_pipeline_components
from ragchat.application.session_manager import SessionManager
from ragchat.configs import get_settings

logger = logging.getLogger(__name__)


class ServiceCache:
    """Container for cached service instances."""

    def __init__(self) -> None:
        self._session_manager: SessionManager | None = None
        self._lock = threading.Lock()

    @property
    def session_manager(self) -> SessionManager:
        """Get cached session manager, building the pipeline on first access."""
        with self._lock:
            if self._session_manager is None:
                components = build_pipeline_components(get_settings())
                self._session_manager = SessionManager(
                    components.create_agent_loop,
                    memory_factory=components.stored_memory_factory,
                )
                logger.info(f"{__name__}:session_manager - Pipeline built")
            return self._session_manager

    def clear(self) -> None:
        """Clear all cached instances."""
        with self._lock:
            self._session_manager = None


_service_cache = ServiceCache()


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache


def get_session_manager() -> SessionManager:
    """FastAPI dependency returning the shared session manager."""
    return get_service_cache().session_manager
