"""
HTTP middleware.

Binds one correlation ID per request (taken from the X-Correlation-ID
header when the client sends one) and logs every request with its status
and duration.

Dependencies: fastapi, ragchat.observability
System role: Request tracing for the chat API
"""

import logging
import time

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from ragchat.observability.correlation import correlation_scope
from ragchat.observability.log_utils import log_with_context

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"


class CorrelationMiddleware(BaseHTTPMiddleware):
    """Bind the request correlation ID and echo it in the response."""

    async def dispatch(self, request: Request, call_next):
        with correlation_scope(request.headers.get(CORRELATION_HEADER)) as correlation_id:
            response: Response = await call_next(request)
        response.headers[CORRELATION_HEADER] = correlation_id
        return response


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log method, path, status and elapsed milliseconds of each request."""

    async def dispatch(self, request: Request, call_next):
        started = time.perf_counter()
        try:
            response: Response = await call_next(request)
        except Exception as e:
            logger.exception(
                f"{__name__}:dispatch - {request.method} {request.url.path} raised {type(e).__name__}"
            )
            raise

        log_with_context(
            logger,
            logging.INFO,
            f"{__name__}:dispatch - {request.method} {request.url.path}",
            status=response.status_code,
            elapsed_ms=round((time.perf_counter() - started) * 1000, 2),
        )
        return response
