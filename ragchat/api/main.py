"""
FastAPI application with assembled routers.

Dependencies: fastapi, ragchat.api.routers, uvicorn
System role: API entry point with router assembly and server launch
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ragchat import __version__
from ragchat.api.deps import get_service_cache
from ragchat.api.routers import chat_router, health_router
from ragchat.configs import get_settings
from ragchat.observability import configure_logging
from ragchat.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Builds the pipeline (index included) at startup and drops it at shutdown.
    """
    logger = logging.getLogger("uvicorn")

    logger.info("Building pipeline...")
    cache = get_service_cache()
    _ = cache.session_manager
    logger.info("Pipeline ready")

    yield

    cache.clear()
    logger.info("Service cache cleared")


def create_app(prewarm: bool = True) -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Args:
        prewarm: Build the pipeline at startup instead of on the first request

    Returns:
        FastAPI: Configured application instance with all routers registered
    """
    app = FastAPI(
        title="ragchat API",
        description="Retrieval-augmented conversational pipeline with session memory",
        version=__version__,
        lifespan=lifespan if prewarm else None,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Correlation runs outermost so request logs carry the ID
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    # Register all routers with /api/v1 prefix for versioning
    app.include_router(health_router, prefix="/api/v1")
    app.include_router(chat_router, prefix="/api/v1")

    return app


app = create_app()


def run() -> None:
    """Launch the API server."""
    configure_logging(get_settings().log_level)
    uvicorn.run("ragchat.api.main:app", host="0.0.0.0", port=8000)


if __name__ == "__main__":
    run()
