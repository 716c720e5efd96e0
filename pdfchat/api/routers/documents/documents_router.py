"""
Document API endpoints.

Routes:
- GET /pdfs - List the user's documents, newest first
- POST /pdfs/upload - Upload, ingest and index a PDF (multipart field "pdf")
- GET /pdfs/{document_id} - Stream the stored PDF
- DELETE /pdfs/{document_id} - Delete a document with its history and index

Dependencies: pdfchat.application.services, pdfchat.models
System role: Document HTTP API
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, File, UploadFile, status
from fastapi.responses import FileResponse

from pdfchat.api.deps import (
    get_document_service,
    get_settings_dependency,
    get_user_id,
)
from pdfchat.api.routers.router_utils import handle_pdfchat_errors
from pdfchat.application.services.document_service import DocumentService
from pdfchat.configs import Settings
from pdfchat.core.exceptions import ValidationError
from pdfchat.models.common import MessageResponse
from pdfchat.models.document import DocumentListResponse, DocumentResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/pdfs", tags=["documents"])


@router.get("", response_model=DocumentListResponse)
@handle_pdfchat_errors
async def list_documents(
    user_id: str = Depends(get_user_id),
    document_service: DocumentService = Depends(get_document_service),
) -> DocumentListResponse:
    """List the requesting user's documents, newest first."""
    documents = await document_service.list_documents(user_id)
    return DocumentListResponse(
        documents=[DocumentResponse.model_validate(document) for document in documents],
        total=len(documents),
    )


@router.post(
    "/upload",
    response_model=DocumentResponse,
    status_code=status.HTTP_201_CREATED,
)
@handle_pdfchat_errors
async def upload_document(
    pdf: UploadFile | None = File(default=None),
    user_id: str = Depends(get_user_id),
    settings: Settings = Depends(get_settings_dependency),
    document_service: DocumentService = Depends(get_document_service),
) -> DocumentResponse:
    """
    Upload a PDF and make it ready for chat.

    The file is extracted, chunked and embedded before the response is sent.

    Raises:
        HTTPException(400): Missing file, wrong type or too large
        HTTPException(422): No extractable text
        HTTPException(502): Embedding provider failure
    """
    if pdf is None or not pdf.filename:
        raise ValidationError("No file uploaded", field="pdf")

    # Read one byte past the limit so oversize uploads are detected without buffering them whole
    data = await pdf.read(settings.upload.max_file_size_bytes + 1)

    document = await document_service.upload_document(
        user_id=user_id,
        original_name=pdf.filename,
        content_type=pdf.content_type,
        data=data,
    )
    return DocumentResponse.model_validate(document)


@router.get("/{document_id}", response_class=FileResponse)
@handle_pdfchat_errors
async def get_document_file(
    document_id: UUID,
    user_id: str = Depends(get_user_id),
    document_service: DocumentService = Depends(get_document_service),
) -> FileResponse:
    """Stream the stored PDF of a document."""
    document, path = await document_service.get_document_path(document_id, user_id)
    return FileResponse(
        path,
        media_type=document.content_type,
        filename=document.original_name,
        content_disposition_type="inline",
    )


@router.delete("/{document_id}", response_model=MessageResponse)
@handle_pdfchat_errors
async def delete_document(
    document_id: UUID,
    user_id: str = Depends(get_user_id),
    document_service: DocumentService = Depends(get_document_service),
) -> MessageResponse:
    """Delete a document, its chat history, its index and its stored file."""
    await document_service.delete_document(document_id, user_id)
    logger.info("Document deleted", extra={"document_id": str(document_id), "user_id": user_id})
    return MessageResponse(message="PDF deleted successfully")
