"""
Document ORM model.

Represents an uploaded PDF owned by one user, together with the chunks
produced at ingestion.

Dependencies: sqlalchemy, pdfchat.boundary.db.base
System role: Document persistence for upload, retrieval rebuilds and listing
"""

from typing import TYPE_CHECKING, Any

from sqlalchemy import JSON, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from pdfchat.boundary.db.base import Base, TimestampMixin, UUIDMixin

if TYPE_CHECKING:
    from pdfchat.boundary.db.models.chat_message_model import ChatMessageModel


class DocumentModel(Base, UUIDMixin, TimestampMixin):
    """
    Document ORM model.

    Attributes:
        id: UUID primary key (auto-generated)
        user_id: Owner identifier (from the X-User-Id header)
        filename: Unique stored filename; also the index registry key
        original_name: Filename as uploaded by the user
        content_type: Upload MIME type
        size_bytes: Stored file size
        page_count: Page count reported by the PDF, or estimated from chunks
        chunks: Serialized DocumentChunk list in document order
        created_at: Upload timestamp (UTC)
        updated_at: Last modification timestamp (UTC)

    Relationships:
        messages: Chat turns ordered by position (deleted with the document)
    """

    __tablename__ = "documents"

    user_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)

    filename: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        doc="Stored filename",
    )

    original_name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        doc="Original filename",
    )

    content_type: Mapped[str] = mapped_column(String(127), nullable=False, default="application/pdf")

    size_bytes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    page_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    chunks: Mapped[list[dict[str, Any]]] = mapped_column(
        JSON,
        nullable=False,
        default=list,
        doc="Persisted chunks: text, page_number, source_id",
    )

    messages: Mapped[list["ChatMessageModel"]] = relationship(
        back_populates="document",
        order_by="ChatMessageModel.position",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
