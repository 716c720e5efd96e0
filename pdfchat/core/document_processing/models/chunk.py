"""
Chunk domain models for document processing pipeline.

A DocumentChunk is a contiguous span of extracted text attributed to a page
of its source document. An EmbeddedChunk pairs a chunk with its vector and
only ever lives in memory.

Dependencies: pydantic
System role: Data structures for document chunks in ingestion and retrieval
"""

from pydantic import BaseModel, ConfigDict, Field


class DocumentChunk(BaseModel):
    """Immutable chunk of document text with its estimated page."""

    model_config = ConfigDict(frozen=True)

    text: str = Field(min_length=1, description="Chunk text content")
    page_number: int = Field(ge=1, description="Estimated 1-based page number")
    source_id: str = Field(description="Stored filename of the source document")


class EmbeddedChunk(BaseModel):
    """Document chunk with its embedding vector."""

    model_config = ConfigDict(frozen=True)

    chunk: DocumentChunk
    vector: list[float] = Field(min_length=1, description="Embedding vector")
