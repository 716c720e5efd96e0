"""
Document domain models and schemas.

Response schemas for document operations.

Dependencies: pydantic
System role: Document API contracts
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class DocumentResponse(BaseModel):
    """Response schema for an uploaded document."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    filename: str = Field(description="Stored filename")
    original_name: str
    size_bytes: int
    page_count: int
    created_at: datetime


class DocumentListResponse(BaseModel):
    """Document list response, newest first."""

    documents: list[DocumentResponse]
    total: int
