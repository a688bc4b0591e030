"""
Provider error classification.

Maps exceptions raised by the Google client stack onto the pipeline's
TransientError / FatalError taxonomy.

Dependencies: google.api_core.exceptions
System role: Error translation at the model boundary
"""

from google.api_core import exceptions as google_exceptions

from ragchat.core.exceptions import CollaboratorError, FatalError, TransientError

TRANSIENT_GOOGLE_ERRORS = (
    google_exceptions.ResourceExhausted,
    google_exceptions.ServiceUnavailable,
    google_exceptions.DeadlineExceeded,
    google_exceptions.InternalServerError,
    google_exceptions.TooManyRequests,
    google_exceptions.GatewayTimeout,
    google_exceptions.BadGateway,
)

TRANSIENT_STATUS_CODES = frozenset({408, 429, 500, 502, 503, 504})


def _status_code(exc: BaseException) -> int | None:
    for attr in ("status_code", "code"):
        value = getattr(exc, attr, None)
        if isinstance(value, int):
            return value
    return None


def is_transient(exc: BaseException) -> bool:
    """
    Decide whether an exception (or anything in its cause chain) is retryable.

    Args:
        exc: Exception raised by a provider client

    Returns:
        bool: True for rate limits, unavailability, timeouts and connection failures
    """
    seen: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        if isinstance(current, TRANSIENT_GOOGLE_ERRORS):
            return True
        if isinstance(current, (ConnectionError, TimeoutError)):
            return True
        if _status_code(current) in TRANSIENT_STATUS_CODES:
            return True
        current = current.__cause__ or current.__context__
    return False


def map_provider_error(exc: Exception, collaborator: str) -> CollaboratorError:
    """
    Translate a provider exception into TransientError or FatalError.

    Args:
        exc: Original exception
        collaborator: Collaborator name recorded in error details

    Returns:
        CollaboratorError: TransientError when retryable, FatalError otherwise
    """
    details = {"error_type": type(exc).__name__}
    if is_transient(exc):
        return TransientError(f"Transient {collaborator} failure: {exc}", collaborator=collaborator, details=details)
    return FatalError(f"{collaborator} request failed: {exc}", collaborator=collaborator, details=details)
