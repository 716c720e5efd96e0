"""
Chat message ORM model.

One persisted chat turn of a document conversation. Turns are append-only and
ordered by a per-document position.

Dependencies: sqlalchemy, pdfchat.boundary.db.base
System role: Chat history persistence
"""

import uuid
from datetime import datetime
from typing import TYPE_CHECKING, Any

from sqlalchemy import JSON, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from pdfchat.boundary.db.base import Base, UUIDMixin, utc_now

if TYPE_CHECKING:
    from pdfchat.boundary.db.models.document_model import DocumentModel


class ChatMessageModel(Base, UUIDMixin):
    """
    Chat message ORM model.

    Attributes:
        id: UUID primary key (auto-generated)
        document_id: Foreign key to DocumentModel (cascade delete)
        position: Zero-based order of the turn within the document history
        role: "user" or "assistant"
        content: Turn text
        source_pages: Ascending unique pages (assistant turns only)
        sources: Page excerpts (assistant turns only)
        timestamp: Time the turn was recorded (UTC)

    Constraints:
        (document_id, position) is unique
    """

    __tablename__ = "chat_messages"
    __table_args__ = (
        UniqueConstraint("document_id", "position", name="uq_chat_messages_document_position"),
    )

    document_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("documents.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    position: Mapped[int] = mapped_column(Integer, nullable=False)

    role: Mapped[str] = mapped_column(String(16), nullable=False)

    content: Mapped[str] = mapped_column(Text, nullable=False)

    source_pages: Mapped[list[int] | None] = mapped_column(JSON, nullable=True)

    sources: Mapped[list[dict[str, Any]] | None] = mapped_column(JSON, nullable=True)

    timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        nullable=False,
    )

    document: Mapped["DocumentModel"] = relationship(back_populates="messages")
