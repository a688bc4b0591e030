"""
Database configuration settings.

Manages the SQLAlchemy connection used by persistent conversation memory.

Dependencies: pydantic, pydantic_settings
System role: Database connection configuration for ORM
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from ragchat.configs.base import BaseSettings


class DatabaseSettings(BaseSettings):
    """Conversation memory database configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="DATABASE_",
        case_sensitive=False,
        extra="ignore",
    )

    url: str = Field(default="sqlite:///./ragchat.db", description="SQLAlchemy database URL")
    pool_size: int = Field(default=5, description="Connection pool size (ignored for SQLite)")
    max_overflow: int = Field(default=10, description="Maximum overflow connections (ignored for SQLite)")
    echo_sql: bool = Field(default=False, description="Echo SQL statements to logs")

    @property
    def is_sqlite(self) -> bool:
        return self.url.startswith("sqlite")
