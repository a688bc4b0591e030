"""
Retry policy for external collaborator calls.

Only TransientError is retried, with bounded exponential backoff and
jitter. Every other exception propagates on the first attempt.

Dependencies: tenacity
System role: Shared retry policy for generator and embedder calls
"""

import logging
from typing import Any, Callable, TypeVar

from tenacity import (
    RetryCallState,
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential_jitter,
)

from ragchat.core.exceptions import ConfigError, TransientError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RetryPolicy:
    """Bounded exponential backoff for TransientError."""

    def __init__(
        self,
        attempts: int = 3,
        initial_wait: float = 1.0,
        max_wait: float = 30.0,
        jitter: float = 1.0,
    ) -> None:
        """
        Initialize retry policy.

        Args:
            attempts: Total attempts including the first call (>= 1)
            initial_wait: First backoff in seconds
            max_wait: Upper bound of a single backoff in seconds
            jitter: Maximum random jitter added to each backoff

        Raises:
            ConfigError: When attempts is below 1 or a wait is negative
        """
        if attempts < 1:
            raise ConfigError(f"attempts must be at least 1, got {attempts}", field="attempts")
        if min(initial_wait, max_wait, jitter) < 0:
            raise ConfigError("retry waits must be non-negative", field="initial_wait")
        self.attempts = attempts
        self.initial_wait = initial_wait
        self.max_wait = max_wait
        self.jitter = jitter

    @classmethod
    def no_wait(cls, attempts: int = 3) -> "RetryPolicy":
        """Policy without backoff delays."""
        return cls(attempts=attempts, initial_wait=0.0, max_wait=0.0, jitter=0.0)

    def call(self, operation: str, fn: Callable[..., T], *args: Any, **kwargs: Any) -> T:
        """
        Call fn, retrying on TransientError.

        Args:
            operation: Name used in retry log messages
            fn: Callable to invoke
            *args: Positional arguments for fn
            **kwargs: Keyword arguments for fn

        Returns:
            Result of fn

        Raises:
            TransientError: When every attempt failed transiently (last error)
            Exception: Any non-transient error, on first occurrence
        """

        def _log_retry(retry_state: RetryCallState) -> None:
            error = retry_state.outcome.exception() if retry_state.outcome else None
            logger.warning(
                f"{__name__}:{operation} - Retry {retry_state.attempt_number}/{self.attempts} "
                f"after transient error: {error}"
            )

        retrying = Retrying(
            retry=retry_if_exception_type(TransientError),
            stop=stop_after_attempt(self.attempts),
            wait=wait_exponential_jitter(initial=self.initial_wait, max=self.max_wait, jitter=self.jitter),
            before_sleep=_log_retry,
            reraise=True,
        )
        return retrying(fn, *args, **kwargs)
