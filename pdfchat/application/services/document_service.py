"""
Document service orchestrator.

Coordinates document upload, ingestion, listing, retrieval of the stored
file, and deletion.

Dependencies: pdfchat.boundary.db, pdfchat.boundary.storage, pdfchat.core
System role: Document management orchestration
"""

import logging
from pathlib import Path
from typing import Sequence
from uuid import UUID

from fastapi.concurrency import run_in_threadpool
from sqlalchemy.ext.asyncio import AsyncSession

from pdfchat.application.adapters.chat_history_adapter import release_document_lock
from pdfchat.boundary.db.CRUD.document_crud import document_crud
from pdfchat.boundary.db.models.document_model import DocumentModel
from pdfchat.boundary.storage.local_file_store import LocalFileStore
from pdfchat.configs.storage import UploadSettings
from pdfchat.core.document_processing.entrypoint import DocumentPipeline
from pdfchat.core.exceptions import NotFoundError, ValidationError
from pdfchat.core.retrieval.index_registry import IndexRegistry
from pdfchat.core.retrieval.query_cache import QueryCache
from pdfchat.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)


class DocumentService:
    """
    Document service orchestrator.

    Upload runs extraction, chunking and embedding before anything is
    persisted. A failure at any step leaves no record, no index and no file.
    """

    def __init__(
        self,
        db: AsyncSession,
        file_store: LocalFileStore,
        registry: IndexRegistry,
        pipeline: DocumentPipeline | None = None,
        upload_settings: UploadSettings | None = None,
        cache: QueryCache | None = None,
    ) -> None:
        """
        Initialize document service.

        Args:
            db: AsyncSession for document records
            file_store: Raw file storage
            registry: Index registry receiving freshly built indexes
            pipeline: Optional DocumentPipeline (created if None)
            upload_settings: Upload limits (defaults if None)
            cache: Optional answer cache invalidated on deletion
        """
        self.db = db
        self._file_store = file_store
        self._registry = registry
        self._pipeline = pipeline or DocumentPipeline()
        self._upload_settings = upload_settings or UploadSettings()
        self._cache = cache

    def validate_upload(self, original_name: str, content_type: str | None, size: int) -> None:
        """
        Check an upload against the accepted types and size limit.

        Raises:
            ValidationError: Missing name, wrong content type, empty or oversized file
        """
        if not original_name:
            raise ValidationError("No file uploaded", field="pdf")

        if content_type not in self._upload_settings.allowed_content_types:
            raise ValidationError(
                "Only PDF files are allowed",
                field="pdf",
                details={"content_type": content_type},
            )

        if size == 0:
            raise ValidationError("Uploaded file is empty", field="pdf")

        if size > self._upload_settings.max_file_size_bytes:
            raise ValidationError(
                "File exceeds the maximum upload size",
                field="pdf",
                details={"size": size, "max_size": self._upload_settings.max_file_size_bytes},
            )

    async def upload_document(
        self,
        user_id: str,
        original_name: str,
        content_type: str | None,
        data: bytes,
    ) -> DocumentModel:
        """
        Store, ingest and index an uploaded PDF.

        Steps:
        1. Validate type and size
        2. Store raw bytes under a unique filename
        3. Extract and chunk (worker thread)
        4. Embed chunks and register the index
        5. Persist the document record with its chunks and page count

        Args:
            user_id: Owner identifier
            original_name: Filename as uploaded
            content_type: Upload MIME type
            data: File content

        Returns:
            DocumentModel: The persisted document

        Raises:
            ValidationError: Upload rejected before storage
            ExtractionError: No extractable text
            EmbeddingError: Chunk embedding failed
        """
        self.validate_upload(original_name, content_type, len(data))

        filename = await run_in_threadpool(self._file_store.save, data, original_name)

        try:
            result = await run_in_threadpool(self._pipeline.process, data, filename)
            await self._registry.build_from_chunks(filename, result.chunks)

            document = await document_crud.create(
                self.db,
                user_id=user_id,
                filename=filename,
                original_name=original_name,
                content_type=content_type,
                size_bytes=len(data),
                page_count=result.page_count,
                chunks=[chunk.model_dump() for chunk in result.chunks],
            )
            await self.db.commit()
        except BaseException as e:
            # Also runs on cancellation; index and file are dropped before any await
            self._registry.evict(filename)
            self._file_store.delete(filename)
            log_exception_with_context(
                logger,
                f"{__name__}:upload_document - Upload failed",
                e,
                filename=filename,
                original_name=original_name,
                user_id=user_id,
            )
            await self.db.rollback()
            raise

        logger.info(
            f"{__name__}:upload_document - Stored {original_name} as {filename}",
            extra={"chunk_count": result.chunk_count, "page_count": result.page_count},
        )
        return document

    async def list_documents(self, user_id: str) -> Sequence[DocumentModel]:
        """List a user's documents, newest first."""
        return await document_crud.list_for_user(self.db, user_id)

    async def get_document(self, document_id: UUID, user_id: str) -> DocumentModel:
        """
        Get a document owned by the user.

        Raises:
            NotFoundError: Unknown document or owned by another user
        """
        document = await document_crud.get_for_user(self.db, document_id, user_id)
        if document is None:
            raise NotFoundError("document", str(document_id))
        return document

    async def get_document_path(self, document_id: UUID, user_id: str) -> tuple[DocumentModel, Path]:
        """
        Resolve the stored PDF of a document for streaming.

        Raises:
            NotFoundError: Unknown document or missing file
        """
        document = await self.get_document(document_id, user_id)
        if not self._file_store.exists(document.filename):
            raise NotFoundError("file", document.filename)
        return document, self._file_store.path_for(document.filename)

    async def delete_document(self, document_id: UUID, user_id: str) -> None:
        """
        Delete a document, its chunks, its chat history, its index and its file.

        Raises:
            NotFoundError: Unknown document or owned by another user
        """
        document = await self.get_document(document_id, user_id)
        filename = document.filename

        await document_crud.delete_with_history(self.db, document.id)
        await self.db.commit()

        release_document_lock(document_id)
        self._registry.evict(filename)
        if self._cache is not None:
            self._cache.invalidate_document(filename)
        await run_in_threadpool(self._file_store.delete, filename)
        logger.info(f"{__name__}:delete_document - Deleted {filename}")
