"""
Document CRUD operations.

Provides Create, Read, Update, Delete operations for DocumentModel
with owner-scoped queries and lookup by stored filename.

Dependencies: sqlalchemy, pdfchat.boundary.db.models
System role: Document persistence operations
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from pdfchat.boundary.db.CRUD.base_crud import BaseCRUD
from pdfchat.boundary.db.models.chat_message_model import ChatMessageModel
from pdfchat.boundary.db.models.document_model import DocumentModel


class DocumentCRUD(BaseCRUD[DocumentModel]):
    """
    CRUD operations for DocumentModel.

    Extends BaseCRUD with queries by stored filename and by owner.
    """

    def __init__(self) -> None:
        """Initialize DocumentCRUD with DocumentModel."""
        super().__init__(DocumentModel)

    async def get_by_filename(
        self,
        session: AsyncSession,
        filename: str,
    ) -> DocumentModel | None:
        """
        Retrieve a document by its stored filename.

        Args:
            session: Async database session
            filename: Unique stored filename

        Returns:
            DocumentModel if found, None otherwise
        """
        stmt = select(DocumentModel).where(DocumentModel.filename == filename)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_for_user(
        self,
        session: AsyncSession,
        id: UUID,
        user_id: str,
    ) -> DocumentModel | None:
        """
        Retrieve a document only if it belongs to the given user.

        Args:
            session: Async database session
            id: Document UUID
            user_id: Owner identifier

        Returns:
            DocumentModel if found and owned by user_id, None otherwise
        """
        stmt = select(DocumentModel).where(
            DocumentModel.id == id,
            DocumentModel.user_id == user_id,
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_for_user(
        self,
        session: AsyncSession,
        user_id: str,
        limit: int | None = None,
        offset: int = 0,
    ) -> Sequence[DocumentModel]:
        """
        Retrieve a user's documents, newest first.

        Args:
            session: Async database session
            user_id: Owner identifier
            limit: Maximum number of documents to return
            offset: Number of documents to skip

        Returns:
            Sequence of DocumentModels ordered by upload time descending
        """
        stmt = (
            select(DocumentModel)
            .where(DocumentModel.user_id == user_id)
            .order_by(DocumentModel.created_at.desc())
            .offset(offset)
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await session.execute(stmt)
        return result.scalars().all()

    async def delete_with_history(self, session: AsyncSession, id: UUID) -> bool:
        """
        Delete a document together with its chat history.

        Args:
            session: Async database session
            id: Document UUID

        Returns:
            True if the document was deleted, False if not found
        """
        await session.execute(
            delete(ChatMessageModel).where(ChatMessageModel.document_id == id)
        )
        return await self.delete_by_id(session, id)


document_crud = DocumentCRUD()
