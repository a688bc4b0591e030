"""
Shared test fixtures and configuration for entire test suite.

Provides: deterministic embedder, retry policy without waits, LCEL sample
corpus, in-memory SQLite session factory
Dependencies: pytest, sqlalchemy
System role: Test infrastructure and fixture management
"""

import pytest

from ragchat.core.retry import RetryPolicy
from tests.fakes import FakeEmbedder


@pytest.fixture
def fake_embedder() -> FakeEmbedder:
    """Provide a deterministic bag-of-words embedder."""
    return FakeEmbedder()


@pytest.fixture
def fast_retry() -> RetryPolicy:
    """Provide a retry policy without backoff delays."""
    return RetryPolicy.no_wait(attempts=3)


@pytest.fixture
def lcel_chunks() -> list[str]:
    """Provide the two-chunk LCEL corpus."""
    return [
        "LCEL is a declarative way to compose chains.",
        "It supports sync, async, and streaming.",
    ]


@pytest.fixture
def session_factory():
    """
    Create an in-memory SQLite session factory with all tables.

    Yields:
        sessionmaker: Session factory bound to a shared in-memory engine
    """
    from sqlalchemy import create_engine
    from sqlalchemy.orm import sessionmaker
    from sqlalchemy.pool import StaticPool

    from ragchat.boundary.db.base import Base

    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
    engine.dispose()
