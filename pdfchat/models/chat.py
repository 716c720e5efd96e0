"""
Chat domain models and schemas.

Chat turns as stored and returned, plus request/response schemas for chat
operations.

Dependencies: pydantic
System role: Chat API contracts
"""

from datetime import datetime, timezone
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from pdfchat.core.rag_query.rag_schema import SourceExcerpt


class ChatTurn(BaseModel):
    """One message of a document conversation."""

    model_config = ConfigDict(frozen=True)

    role: Literal["user", "assistant"] = Field(description="Message role")
    content: str = Field(description="Message content")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    source_pages: list[int] | None = Field(
        default=None,
        description="Ascending unique pages backing an assistant answer",
    )
    sources: list[SourceExcerpt] | None = Field(
        default=None,
        description="Page excerpts backing an assistant answer",
    )


class ChatRequest(BaseModel):
    """Request schema for chat messages."""

    content: str = Field(default="", description="User question")


class ChatResponse(BaseModel):
    """Response schema for a chat exchange."""

    message: str = Field(description="Generated answer")
    source_pages: list[int]
    sources: list[SourceExcerpt]
    chat_history: list[ChatTurn] = Field(description="Full history including this exchange")


class ChatHistoryResponse(BaseModel):
    """Response schema for chat history."""

    messages: list[ChatTurn]
    total: int = Field(description="Total number of messages")
