"""
Chat history CRUD operations.

Append-only persistence of document-scoped chat turns. Each turn gets the next
position within its document; (document_id, position) is unique.

Dependencies: sqlalchemy, pdfchat.boundary.db.models
System role: Chat message persistence
"""

from typing import Any, Sequence
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from pdfchat.boundary.db.base import utc_now
from pdfchat.boundary.db.CRUD.base_crud import BaseCRUD
from pdfchat.boundary.db.models.chat_message_model import ChatMessageModel


class ChatHistoryCRUD(BaseCRUD[ChatMessageModel]):
    """CRUD operations for ChatMessageModel, scoped by document."""

    def __init__(self) -> None:
        """Initialize ChatHistoryCRUD with ChatMessageModel."""
        super().__init__(ChatMessageModel)

    async def get_messages(
        self,
        session: AsyncSession,
        document_id: UUID,
    ) -> Sequence[ChatMessageModel]:
        """
        Retrieve all turns of a document in order.

        Args:
            session: Async database session
            document_id: Document UUID

        Returns:
            Sequence of ChatMessageModels ordered by position
        """
        stmt = (
            select(ChatMessageModel)
            .where(ChatMessageModel.document_id == document_id)
            .order_by(ChatMessageModel.position)
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def count(self, session: AsyncSession, document_id: UUID) -> int:
        """Number of stored turns for a document."""
        stmt = select(func.count(ChatMessageModel.id)).where(
            ChatMessageModel.document_id == document_id
        )
        result = await session.execute(stmt)
        return int(result.scalar_one())

    async def next_position(self, session: AsyncSession, document_id: UUID) -> int:
        """Position the next appended turn will take."""
        stmt = select(func.max(ChatMessageModel.position)).where(
            ChatMessageModel.document_id == document_id
        )
        result = await session.execute(stmt)
        last = result.scalar_one_or_none()
        return 0 if last is None else last + 1

    async def append_turns(
        self,
        session: AsyncSession,
        document_id: UUID,
        turns: list[dict[str, Any]],
    ) -> list[ChatMessageModel]:
        """
        Append turns after the current last position.

        Does not commit: callers own the transaction so that several turns
        land atomically.

        Args:
            session: Async database session
            document_id: Document UUID
            turns: Turn fields (role, content, timestamp, source_pages, sources)

        Returns:
            list[ChatMessageModel]: Created rows in append order
        """
        position = await self.next_position(session, document_id)
        rows = []
        for offset, turn in enumerate(turns):
            row = ChatMessageModel(
                document_id=document_id,
                position=position + offset,
                role=turn["role"],
                content=turn["content"],
                timestamp=turn.get("timestamp") or utc_now(),
                source_pages=turn.get("source_pages"),
                sources=turn.get("sources"),
            )
            session.add(row)
            rows.append(row)
        await session.flush()
        return rows


chat_history_crud = ChatHistoryCRUD()
