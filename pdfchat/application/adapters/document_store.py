"""
Document store adapter.

Read access to persisted chunks and raw files keyed by stored filename, in
the shape the index registry expects.

Dependencies: sqlalchemy, pdfchat.boundary
System role: Persistence collaborator for index rebuilds
"""

import logging

from fastapi.concurrency import run_in_threadpool
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from pdfchat.boundary.db.CRUD.document_crud import document_crud
from pdfchat.boundary.storage.local_file_store import LocalFileStore
from pdfchat.core.document_processing.models import DocumentChunk
from pdfchat.core.exceptions import NotFoundError

logger = logging.getLogger(__name__)


class DocumentStore:
    """
    DocumentSource backed by the documents table and the local file store.

    Opens its own short-lived session per call because index builds outlive
    the request that triggered them.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        file_store: LocalFileStore,
    ) -> None:
        self._session_factory = session_factory
        self._file_store = file_store

    async def load_chunks(self, document_id: str) -> list[DocumentChunk]:
        """
        Load the persisted chunks of a document.

        Args:
            document_id: Stored filename

        Returns:
            list[DocumentChunk]: Chunks in document order (empty when none stored)

        Raises:
            NotFoundError: When no document has this filename
        """
        async with self._session_factory() as session:
            document = await document_crud.get_by_filename(session, document_id)
            if document is None:
                raise NotFoundError("document", document_id)
            stored = list(document.chunks or [])

        logger.debug(f"Loaded {len(stored)} stored chunks for {document_id}")
        return [DocumentChunk.model_validate(chunk) for chunk in stored]

    async def load_raw_file(self, document_id: str) -> bytes:
        """
        Read the stored PDF bytes.

        Raises:
            NotFoundError: When the file is missing
        """
        return await run_in_threadpool(self._file_store.read, document_id)
