"""
Exception hierarchy for the ragchat pipeline.

Provides layered exception structure for pipeline and collaborator errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the pipeline
"""

from typing import Any


class RagChatError(Exception):
    """Base exception for all ragchat errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ConfigError(RagChatError):
    """Raised when construction parameters are invalid."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize configuration error.

        Args:
            message: Error message
            field: Parameter name that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details)


class CollaboratorError(RagChatError):
    """Base for failures reported by an external collaborator."""

    def __init__(
        self,
        message: str,
        collaborator: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize collaborator error.

        Args:
            message: Error message
            collaborator: Collaborator that failed (generator, embedder, ...)
            details: Additional context
        """
        details = details or {}
        if collaborator:
            details["collaborator"] = collaborator
        super().__init__(message, details)


class TransientError(CollaboratorError):
    """Raised on network or rate-limit failures. Eligible for retry."""

    pass


class FatalError(CollaboratorError):
    """Raised on malformed responses or invalid requests. Never retried."""

    pass


class DimensionMismatchError(FatalError):
    """Raised when a vector does not match the index dimensionality."""

    def __init__(self, expected: int, actual: int) -> None:
        """
        Initialize dimension mismatch error.

        Args:
            expected: Dimensionality fixed by the index
            actual: Dimensionality of the rejected vector
        """
        super().__init__(
            f"Vector dimensionality {actual} does not match index dimensionality {expected}",
            collaborator="vector_index",
            details={"expected": expected, "actual": actual},
        )


class EmptyIndexError(RagChatError):
    """Raised when searching an index that holds zero chunks."""

    pass


class ToolError(RagChatError):
    """Raised when a tool invocation fails."""

    def __init__(
        self,
        message: str,
        tool_name: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize tool error.

        Args:
            message: Error message
            tool_name: Name of the failing tool
            details: Additional context
        """
        details = details or {}
        if tool_name:
            details["tool_name"] = tool_name
        super().__init__(message, details)


class ToolLoopExceeded(RagChatError):
    """Raised when the model keeps requesting tools past the iteration bound."""

    def __init__(self, max_iterations: int, details: dict[str, Any] | None = None) -> None:
        """
        Initialize tool loop error.

        Args:
            max_iterations: Configured maximum of tool dispatch rounds
            details: Additional context
        """
        details = details or {}
        details["max_iterations"] = max_iterations
        self.max_iterations = max_iterations
        super().__init__(f"Tool loop exceeded after {max_iterations} iterations", details)


class SessionClosedError(RagChatError):
    """Raised when a turn is submitted to a session that was shut down."""

    def __init__(self, session_id: str | None = None) -> None:
        """
        Initialize session closed error.

        Args:
            session_id: Session that received the exit command
        """
        details = {"session_id": session_id} if session_id else {}
        super().__init__("Session is shut down; reset it to continue", details)
