"""
Correlation ID context manager.

Tags every log record of one request or agent turn with a shared id.
Propagates across threads started with contextvars.copy_context and across
async boundaries.

Dependencies: contextvars
System role: Request and turn tracing
"""

import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator

correlation_id_ctx: ContextVar[str] = ContextVar("correlation_id", default="")


def set_correlation_id(correlation_id: str | None = None) -> str:
    """
    Set correlation ID in context.

    Args:
        correlation_id: Optional correlation ID (generates new if None)

    Returns:
        str: The correlation ID that was set
    """
    correlation_id = correlation_id or uuid.uuid4().hex
    correlation_id_ctx.set(correlation_id)
    return correlation_id


def get_correlation_id() -> str:
    """Get current correlation ID from context ("" when unset)."""
    return correlation_id_ctx.get()


def clear_correlation_id() -> None:
    """Clear correlation ID from context."""
    correlation_id_ctx.set("")


@contextmanager
def correlation_scope(correlation_id: str | None = None) -> Iterator[str]:
    """
    Bind a correlation ID for the duration of a block.

    Reuses the enclosing ID when one is already set and none is given.

    Yields:
        str: Active correlation ID
    """
    active = correlation_id or get_correlation_id() or uuid.uuid4().hex
    token = correlation_id_ctx.set(active)
    try:
        yield active
    finally:
        correlation_id_ctx.reset(token)
