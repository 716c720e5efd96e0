"""Chat API endpoints.

Routes:
- POST /pdfs/{document_id}/chat - Ask a question about a document
- GET /pdfs/{document_id}/history - Full chat history of a document

Dependencies: pdfchat.application.services.chat_service
System role: Chat messaging HTTP API
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends

from pdfchat.api.deps import get_chat_service, get_user_id
from pdfchat.api.routers.router_utils import handle_pdfchat_errors
from pdfchat.application.services.chat_service import ChatService
from pdfchat.models.chat import ChatHistoryResponse, ChatRequest, ChatResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/pdfs", tags=["chat"])


@router.post("/{document_id}/chat", response_model=ChatResponse)
@handle_pdfchat_errors
async def chat(
    document_id: UUID,
    request: ChatRequest,
    user_id: str = Depends(get_user_id),
    chat_service: ChatService = Depends(get_chat_service),
) -> ChatResponse:
    """Answer a question from the document and append the exchange to its history.

    Raises:
        HTTPException(400): Blank question
        HTTPException(404): Document not found
        HTTPException(502): Embedding or generation provider failure
    """
    result = await chat_service.process_chat(
        document_id=document_id,
        user_id=user_id,
        content=request.content,
    )
    return ChatResponse(
        message=result.answer,
        source_pages=result.source_pages,
        sources=result.sources,
        chat_history=result.history,
    )


@router.get("/{document_id}/history", response_model=ChatHistoryResponse)
@handle_pdfchat_errors
async def get_chat_history(
    document_id: UUID,
    user_id: str = Depends(get_user_id),
    chat_service: ChatService = Depends(get_chat_service),
) -> ChatHistoryResponse:
    """Return the chat history of a document."""
    messages = await chat_service.get_history(document_id, user_id)
    return ChatHistoryResponse(messages=messages, total=len(messages))
