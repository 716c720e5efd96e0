"""
Document processing pipeline for ingestion.

Extraction, chunking and embedding of uploaded PDFs.

Dependencies: langchain_community, langchain_text_splitters, langchain_google_genai, pydantic
System role: Document ingestion pipeline entrypoint
"""

from .configs import (
    DocumentPipelineSettings,
    get_pipeline_settings,
)
from .entrypoint import DocumentPipeline
from .models import DocumentChunk, EmbeddedChunk, IngestionResult
from .tasks import ChunkingTask, EmbeddingTask, TextExtractor

__all__ = [
    "DocumentPipeline",
    "DocumentPipelineSettings",
    "get_pipeline_settings",
    "DocumentChunk",
    "EmbeddedChunk",
    "IngestionResult",
    "ChunkingTask",
    "EmbeddingTask",
    "TextExtractor",
]
