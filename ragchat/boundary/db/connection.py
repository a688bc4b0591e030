"""
Database connection management.

Provides SQLAlchemy engine and session factory for persistent
conversation memory.

Dependencies: sqlalchemy, ragchat.configs
System role: Database connection lifecycle management
"""

import logging

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from ragchat.boundary.db.base import Base
from ragchat.configs import DatabaseSettings, get_settings

logger = logging.getLogger(__name__)


def get_engine(db_config: DatabaseSettings | None = None) -> Engine:
    """
    Create SQLAlchemy engine with health checks.

    SQLite URLs get check_same_thread disabled (sessions run turns in a
    thread pool); in-memory SQLite shares one connection across threads.

    Args:
        db_config: Database settings (application settings when None)

    Returns:
        Engine: Configured SQLAlchemy engine
    """
    db_config = db_config or get_settings().database

    if db_config.is_sqlite:
        kwargs = {"connect_args": {"check_same_thread": False}}
        if ":memory:" in db_config.url or db_config.url.rstrip("/") == "sqlite:":
            kwargs["poolclass"] = StaticPool
        return create_engine(db_config.url, echo=db_config.echo_sql, **kwargs)

    return create_engine(
        db_config.url,
        echo=db_config.echo_sql,
        pool_size=db_config.pool_size,
        max_overflow=db_config.max_overflow,
        pool_pre_ping=True,  # Verify connections before using
    )


def get_session_factory(engine: Engine | None = None) -> sessionmaker:
    """
    Create session factory for database operations.

    Args:
        engine: Engine to bind (created from settings when None)

    Returns:
        sessionmaker: Session factory with autoflush disabled and
            expire_on_commit disabled for explicit transaction control
    """
    engine = engine or get_engine()
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


def create_tables(engine: Engine) -> None:
    """Create all registered tables that do not exist yet."""
    Base.metadata.create_all(engine)
    logger.info(f"{__name__}:create_tables - Tables ensured on {engine.url.render_as_string(hide_password=True)}")
