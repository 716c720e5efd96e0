"""
Chat service for question answering over one document.

Orchestrates the chat flow: ownership check, answer generation through the
RAG orchestrator, and persistence of the question/answer pair.

Dependencies: pdfchat.core.rag_query, pdfchat.application.adapters, pdfchat.boundary.db
System role: Chat service orchestration layer
"""

import logging
from uuid import UUID

from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from pdfchat.application.adapters.chat_history_adapter import ChatHistoryAdapter
from pdfchat.boundary.db.CRUD.document_crud import document_crud
from pdfchat.boundary.db.models.document_model import DocumentModel
from pdfchat.core.exceptions import NotFoundError, ValidationError
from pdfchat.core.rag_query.rag_orchestrator import RAGOrchestrator
from pdfchat.core.rag_query.rag_schema import SourceExcerpt
from pdfchat.models.chat import ChatTurn

logger = logging.getLogger(__name__)


class ChatResult(BaseModel):
    """Outcome of one chat exchange."""

    answer: str
    source_pages: list[int]
    sources: list[SourceExcerpt]
    history: list[ChatTurn]


class ChatService:
    """
    Chat service for document Q&A.

    Prior turns are not sent to the model. Their count is part of the answer
    cache key, so the same question asked later in a conversation is
    answered afresh.
    """

    def __init__(self, db: AsyncSession, orchestrator: RAGOrchestrator) -> None:
        """
        Initialize chat service.

        Args:
            db: AsyncSession for database operations
            orchestrator: RAG orchestrator shared across requests
        """
        self.db = db
        self.orchestrator = orchestrator

    async def _get_owned_document(self, document_id: UUID, user_id: str) -> DocumentModel:
        document = await document_crud.get_for_user(self.db, document_id, user_id)
        if document is None:
            raise NotFoundError("document", str(document_id))
        return document

    async def process_chat(self, document_id: UUID, user_id: str, content: str) -> ChatResult:
        """
        Answer a question and record the exchange.

        Flow:
        1. Validate the question and document ownership
        2. Read the current history length
        3. Answer through the orchestrator (cache, retrieval, generation)
        4. Append the user and assistant turns atomically

        Nothing is appended when any step fails.

        Args:
            document_id: Document UUID
            user_id: Requesting user
            content: Question text

        Returns:
            ChatResult: Answer, source pages, excerpts and the full history

        Raises:
            ValidationError: Blank question
            NotFoundError: Unknown document, or its data is gone
        """
        if not content or not content.strip():
            raise ValidationError("Message content is required", field="content")

        document = await self._get_owned_document(document_id, user_id)
        chat_adapter = ChatHistoryAdapter(document_id=document.id, db=self.db)
        history_length = await chat_adapter.count()

        user_turn = ChatTurn(role="user", content=content)
        answer = await self.orchestrator.answer(document.filename, content, history_length)
        assistant_turn = ChatTurn(
            role="assistant",
            content=answer.answer,
            source_pages=list(answer.source_pages),
            sources=list(answer.sources),
        )

        history = await chat_adapter.append_turns(user_turn, assistant_turn)
        logger.info(
            f"{__name__}:process_chat - Answered question for {document.filename}",
            extra={"source_pages": list(answer.source_pages), "history_length": len(history)},
        )

        return ChatResult(
            answer=answer.answer,
            source_pages=list(answer.source_pages),
            sources=list(answer.sources),
            history=history,
        )

    async def get_history(self, document_id: UUID, user_id: str) -> list[ChatTurn]:
        """
        Return a document's chat history, unmodified.

        Raises:
            NotFoundError: Unknown document or owned by another user
        """
        document = await self._get_owned_document(document_id, user_id)
        return await ChatHistoryAdapter(document_id=document.id, db=self.db).get_history()
