"""
Configuration settings for the document ingestion pipeline.

Provides environment-based configuration for extraction and chunking.

Dependencies: pydantic, pydantic_settings
System role: Centralized pipeline configuration
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DocumentPipelineSettings(BaseSettings):
    """Settings for document ingestion pipeline."""

    model_config = SettingsConfigDict(
        env_prefix="DOC_PIPELINE_",
        case_sensitive=False,
        extra="ignore",
    )

    chunk_size: int = Field(
        default=2000,
        gt=0,
        description="Maximum chunk size in characters",
    )
    chunk_overlap: int = Field(
        default=100,
        ge=0,
        description="Overlap between consecutive chunks",
    )
    chunks_per_page: int = Field(
        default=2,
        gt=0,
        description="Chunks attributed to each page when estimating page numbers",
    )


@lru_cache
def get_pipeline_settings() -> DocumentPipelineSettings:
    """
    Get cached pipeline settings instance.

    Returns:
        DocumentPipelineSettings: Singleton settings loaded from environment
    """
    return DocumentPipelineSettings()
