"""
Core business logic module.

Contains the ingestion pipeline, retrieval, answer generation and the
exception hierarchy shared by every layer.
"""

from pdfchat.core.exceptions import (
    DocumentProcessingError,
    EmbeddingError,
    ExtractionError,
    GenerationError,
    NotFoundError,
    PdfChatException,
    RetrievalError,
    ValidationError,
)

__all__ = [
    "PdfChatException",
    "ValidationError",
    "NotFoundError",
    "DocumentProcessingError",
    "ExtractionError",
    "EmbeddingError",
    "RetrievalError",
    "GenerationError",
]
