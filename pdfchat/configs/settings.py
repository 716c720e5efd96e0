"""
Unified application settings.

Aggregates all configuration modules into a single Settings class.

Dependencies: All config modules
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from pydantic import Field

from pdfchat.configs.base import BaseSettings
from pdfchat.configs.database import DatabaseSettings
from pdfchat.configs.rag import RAGSettings
from pdfchat.configs.storage import UploadSettings
from pdfchat.core.document_processing.configs import DocumentPipelineSettings


class Settings(BaseSettings):
    """Unified application settings aggregating all config modules."""

    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    upload: UploadSettings = Field(default_factory=UploadSettings)
    rag: RAGSettings = Field(default_factory=RAGSettings)
    pipeline: DocumentPipelineSettings = Field(default_factory=DocumentPipelineSettings)


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Environment variables are read once, on first call.

    Returns:
        Settings: Application settings instance

    Usage:
        from pdfchat.configs import get_settings
        settings = get_settings()
    """
    return Settings()
