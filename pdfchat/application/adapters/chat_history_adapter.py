"""
Chat history adapter.

Business-level access to a document's chat history: atomic append of a
question/answer pair and ordered retrieval.

Dependencies: pdfchat.boundary.db.CRUD.chat_history_crud
System role: Chat history business logic adapter
"""

import asyncio
import logging
from collections import defaultdict
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from pdfchat.boundary.db.CRUD.chat_history_crud import chat_history_crud
from pdfchat.boundary.db.models.chat_message_model import ChatMessageModel
from pdfchat.core.rag_query.rag_schema import SourceExcerpt
from pdfchat.models.chat import ChatTurn

logger = logging.getLogger(__name__)

# Appends to one document's history are serialized within the process
_document_locks: defaultdict[UUID, asyncio.Lock] = defaultdict(asyncio.Lock)


def _to_row_fields(turn: ChatTurn) -> dict:
    return {
        "role": turn.role,
        "content": turn.content,
        "timestamp": turn.timestamp,
        "source_pages": list(turn.source_pages) if turn.source_pages is not None else None,
        "sources": (
            [source.model_dump() for source in turn.sources]
            if turn.sources is not None
            else None
        ),
    }


def _to_turn(row: ChatMessageModel) -> ChatTurn:
    return ChatTurn(
        role=row.role,
        content=row.content,
        timestamp=row.timestamp,
        source_pages=row.source_pages,
        sources=(
            [SourceExcerpt.model_validate(source) for source in row.sources]
            if row.sources is not None
            else None
        ),
    )


class ChatHistoryAdapter:
    """
    High-level adapter for one document's chat history.

    History is append-only: turns are never edited, removed or truncated.
    """

    def __init__(self, document_id: UUID, db: AsyncSession) -> None:
        """
        Initialize chat history adapter.

        Args:
            document_id: Document UUID for chat history scope
            db: AsyncSession for database operations
        """
        self.document_id = document_id
        self.db = db

    async def append_turns(self, user_turn: ChatTurn, assistant_turn: ChatTurn) -> list[ChatTurn]:
        """
        Append a question and its answer in one transaction.

        Args:
            user_turn: The user's question
            assistant_turn: The generated answer with its sources

        Returns:
            list[ChatTurn]: Full updated history

        Raises:
            ValueError: If the turns are not a user turn followed by an assistant turn
        """
        if user_turn.role != "user" or assistant_turn.role != "assistant":
            raise ValueError("Expected a user turn followed by an assistant turn")

        async with _document_locks[self.document_id]:
            try:
                await chat_history_crud.append_turns(
                    self.db,
                    self.document_id,
                    [_to_row_fields(user_turn), _to_row_fields(assistant_turn)],
                )
                await self.db.commit()
            except Exception:
                await self.db.rollback()
                raise

        logger.debug(f"Appended chat turns for document {self.document_id}")
        return await self.get_history()

    async def get_history(self) -> list[ChatTurn]:
        """Return all turns in order, unmodified."""
        rows = await chat_history_crud.get_messages(self.db, self.document_id)
        return [_to_turn(row) for row in rows]

    async def count(self) -> int:
        """Number of stored turns."""
        return await chat_history_crud.count(self.db, self.document_id)


def release_document_lock(document_id: UUID) -> None:
    """Forget the append lock of a deleted document."""
    _document_locks.pop(document_id, None)
