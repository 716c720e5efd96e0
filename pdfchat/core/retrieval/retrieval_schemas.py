"""
Retrieval result schemas.

Dependencies: pydantic
System role: Data structures returned by vector similarity search
"""

from pydantic import BaseModel, ConfigDict, Field

from pdfchat.core.document_processing.models import DocumentChunk


class RetrievedChunk(BaseModel):
    """A chunk returned by similarity search with its score and rank."""

    model_config = ConfigDict(frozen=True)

    chunk: DocumentChunk
    score: float = Field(description="Cosine similarity to the question (-1.0 to 1.0)")
    rank: int = Field(ge=0, description="Zero-based position in the result list")
