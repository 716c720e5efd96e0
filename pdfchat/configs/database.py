"""
Database configuration settings.

Connection parameters for the SQLAlchemy async engine that persists
documents, their chunks and chat history.

Dependencies: pydantic, pydantic_settings
System role: Database connection configuration for ORM
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from pdfchat.configs.base import BaseSettings


class DatabaseSettings(BaseSettings):
    """Async database configuration (SQLite by default)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="DATABASE_",
        case_sensitive=False,
        extra="ignore",
    )

    url: str = Field(
        default="sqlite+aiosqlite:///./pdfchat.db",
        description="SQLAlchemy async database URL",
    )
    echo_sql: bool = Field(default=False, description="Echo SQL statements to logs")

    @property
    def is_sqlite(self) -> bool:
        """Whether the configured backend is SQLite."""
        return self.url.startswith("sqlite")
