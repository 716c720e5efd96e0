"""
Task modules for document processing pipeline.

Exports: TextExtractor, ChunkingTask, EmbeddingTask
"""

from .chunking_task import ChunkingTask
from .embedding_task import EmbeddingTask
from .parsing_task import TextExtractor

__all__ = [
    "TextExtractor",
    "ChunkingTask",
    "EmbeddingTask",
]
