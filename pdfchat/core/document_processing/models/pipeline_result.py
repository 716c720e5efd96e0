"""
Pipeline result models for document processing.

Dependencies: pydantic
System role: Return types for TextExtractor.extract() and DocumentPipeline.process()
"""

from pydantic import BaseModel, Field

from .chunk import DocumentChunk


class ExtractedDocument(BaseModel):
    """Plain text extracted from a PDF together with its page count."""

    text: str = Field(description="Page texts joined in page order")
    page_count: int = Field(ge=0, description="Number of pages reported by the PDF")


class IngestionResult(BaseModel):
    """Result of extracting and chunking one document."""

    source_id: str = Field(description="Stored filename of the processed document")
    chunks: list[DocumentChunk] = Field(description="Chunks in document order")
    page_count: int = Field(ge=1, description="Page count, estimated from chunks when unknown")
    processing_time_ms: float = Field(description="Total processing time in milliseconds")

    @property
    def chunk_count(self) -> int:
        return len(self.chunks)
