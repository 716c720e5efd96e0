"""
RAG configuration settings.

Embedding model, chat model, retrieval and answer cache parameters.

Dependencies: pydantic, pydantic_settings
System role: Configuration for retrieval and answer generation
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from pdfchat.configs.base import BaseSettings


class RAGSettings(BaseSettings):
    """Retrieval-augmented generation configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="RAG_",
        case_sensitive=False,
        extra="ignore",
    )

    google_api_key: str | None = Field(
        default=None,
        validation_alias="GOOGLE_API_KEY",
        description="Google Generative AI API key",
    )

    embedding_model: str = Field(
        default="models/gemini-embedding-001",
        description="Google embedding model ID",
    )
    embedding_batch_size: int = Field(
        default=100,
        gt=0,
        description="Number of texts sent per embedding request",
    )

    llm_model: str = Field(default="gemini-2.0-flash", description="Google chat model ID")
    temperature: float = Field(default=0.0, ge=0.0, le=2.0, description="LLM temperature")

    top_k: int = Field(default=3, gt=0, description="Chunks retrieved per question")
    excerpt_length: int = Field(
        default=150,
        gt=0,
        description="Characters of each retrieved chunk returned as a source excerpt",
    )

    cache_ttl_seconds: float = Field(
        default=3600,
        gt=0,
        description="Lifetime of a cached answer in seconds",
    )
    cache_max_entries: int = Field(
        default=1024,
        gt=0,
        description="Maximum number of cached answers",
    )
