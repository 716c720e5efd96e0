"""
Integration tests for DocumentStore.

System role: Verification of the persistence collaborator used for index rebuilds
"""

import pytest

from pdfchat.application.adapters.document_store import DocumentStore
from pdfchat.boundary.db.CRUD.document_crud import document_crud
from pdfchat.boundary.storage.local_file_store import LocalFileStore
from pdfchat.core.document_processing.models import DocumentChunk
from pdfchat.core.exceptions import NotFoundError


@pytest.fixture
def file_store(temp_dir) -> LocalFileStore:
    return LocalFileStore(temp_dir)


@pytest.fixture
def document_store(test_session_factory, file_store: LocalFileStore) -> DocumentStore:
    return DocumentStore(test_session_factory, file_store)


async def persist_document(session_factory, filename: str, chunks: list[dict]) -> None:
    async with session_factory() as session:
        await document_crud.create(
            session,
            user_id="user-123",
            filename=filename,
            original_name="notes.pdf",
            content_type="application/pdf",
            size_bytes=10,
            page_count=1,
            chunks=chunks,
        )
        await session.commit()


class TestDocumentStoreLoadChunks:
    """Test suite for DocumentStore.load_chunks()."""

    @pytest.mark.asyncio
    async def test_load_chunks_should_return_persisted_chunks(
        self, document_store: DocumentStore, test_session_factory
    ) -> None:
        """Test stored chunk dictionaries are returned as DocumentChunks in order."""
        # Arrange
        chunks = [
            {"text": "alpha", "page_number": 1, "source_id": "3-1.pdf"},
            {"text": "beta", "page_number": 1, "source_id": "3-1.pdf"},
            {"text": "gamma", "page_number": 2, "source_id": "3-1.pdf"},
        ]
        await persist_document(test_session_factory, "3-1.pdf", chunks)

        # Act
        loaded = await document_store.load_chunks("3-1.pdf")

        # Assert
        assert loaded == [DocumentChunk(**chunk) for chunk in chunks]

    @pytest.mark.asyncio
    async def test_load_chunks_should_return_empty_when_none_stored(
        self, document_store: DocumentStore, test_session_factory
    ) -> None:
        """Test a record without chunks yields an empty list."""
        await persist_document(test_session_factory, "3-2.pdf", [])

        assert await document_store.load_chunks("3-2.pdf") == []

    @pytest.mark.asyncio
    async def test_load_chunks_should_raise_for_unknown_document(self, document_store: DocumentStore) -> None:
        """Test unknown filenames raise NotFoundError."""
        with pytest.raises(NotFoundError, match="Document not found"):
            await document_store.load_chunks("missing.pdf")


class TestDocumentStoreLoadRawFile:
    """Test suite for DocumentStore.load_raw_file()."""

    @pytest.mark.asyncio
    async def test_load_raw_file_should_read_stored_bytes(
        self, document_store: DocumentStore, file_store: LocalFileStore, sample_pdf_bytes: bytes
    ) -> None:
        """Test raw PDF bytes are read back from the upload directory."""
        filename = file_store.save(sample_pdf_bytes, "notes.pdf")

        assert await document_store.load_raw_file(filename) == sample_pdf_bytes

    @pytest.mark.asyncio
    async def test_load_raw_file_should_raise_when_missing(self, document_store: DocumentStore) -> None:
        """Test a missing file raises NotFoundError."""
        with pytest.raises(NotFoundError, match="File not found"):
            await document_store.load_raw_file("missing.pdf")
