"""
Models for document processing pipeline.

Exports: DocumentChunk, EmbeddedChunk, ExtractedDocument, IngestionResult
"""

from .chunk import DocumentChunk, EmbeddedChunk
from .pipeline_result import ExtractedDocument, IngestionResult

__all__ = [
    "DocumentChunk",
    "EmbeddedChunk",
    "ExtractedDocument",
    "IngestionResult",
]
