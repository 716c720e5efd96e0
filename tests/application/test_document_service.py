"""
Test suite for DocumentService.

Runs against the in-memory database, a temporary upload directory and a real
index registry backed by deterministic embeddings.

System role: Verification of upload, listing and deletion
"""

import asyncio
import uuid
from unittest.mock import MagicMock

import pytest
from langchain_core.embeddings import Embeddings

from pdfchat.application.adapters.chat_history_adapter import ChatHistoryAdapter, _document_locks
from pdfchat.application.adapters.document_store import DocumentStore
from pdfchat.application.services.document_service import DocumentService
from pdfchat.boundary.db.CRUD.document_crud import document_crud
from pdfchat.boundary.storage.local_file_store import LocalFileStore
from pdfchat.configs.storage import UploadSettings
from pdfchat.core.document_processing import DocumentPipeline, DocumentPipelineSettings
from pdfchat.core.document_processing.tasks import EmbeddingTask
from pdfchat.core.exceptions import (
    EmbeddingError,
    ExtractionError,
    NotFoundError,
    ValidationError,
)
from pdfchat.core.rag_query.rag_schema import RAGAnswer
from pdfchat.core.retrieval import IndexRegistry, QueryCache
from pdfchat.models.chat import ChatTurn


class BlockingEmbeddings(Embeddings):
    """Embeddings whose async document call waits until released."""

    def __init__(self) -> None:
        self.started = asyncio.Event()
        self.release = asyncio.Event()

    def embed_documents(self, texts: list[str]) -> list[list[float]]:
        return [[1.0, 0.0] for _ in texts]

    def embed_query(self, text: str) -> list[float]:
        return [1.0, 0.0]

    async def aembed_documents(self, texts: list[str]) -> list[list[float]]:
        self.started.set()
        await self.release.wait()
        return self.embed_documents(texts)


@pytest.fixture
def file_store(temp_dir) -> LocalFileStore:
    return LocalFileStore(temp_dir / "uploads")


@pytest.fixture
def query_cache() -> QueryCache:
    return QueryCache()


def make_service(db, session_factory, file_store, embeddings, cache) -> DocumentService:
    pipeline = DocumentPipeline(DocumentPipelineSettings())
    registry = IndexRegistry(
        DocumentStore(session_factory, file_store),
        EmbeddingTask(embeddings),
        pipeline,
    )
    return DocumentService(
        db=db,
        file_store=file_store,
        registry=registry,
        pipeline=pipeline,
        upload_settings=UploadSettings(max_file_size_bytes=1024 * 1024),
        cache=cache,
    )


@pytest.fixture
def document_service(
    test_async_db, test_session_factory, file_store, keyword_embeddings, query_cache
) -> DocumentService:
    """Provide DocumentService wired to working embeddings."""
    return make_service(test_async_db, test_session_factory, file_store, keyword_embeddings, query_cache)


@pytest.fixture
def failing_document_service(
    test_async_db, test_session_factory, file_store, failing_embeddings, query_cache
) -> DocumentService:
    """Provide DocumentService whose embedding provider fails."""
    return make_service(test_async_db, test_session_factory, file_store, failing_embeddings, query_cache)


class TestDocumentServiceValidateUpload:
    """Test suite for DocumentService.validate_upload()."""

    @pytest.fixture
    def document_service(self, file_store: LocalFileStore) -> DocumentService:
        """Provide DocumentService with mocked collaborators; validation touches none of them."""
        return DocumentService(
            db=MagicMock(),
            file_store=file_store,
            registry=MagicMock(),
            pipeline=MagicMock(),
            upload_settings=UploadSettings(max_file_size_bytes=1024 * 1024),
        )

    @pytest.mark.parametrize(
        ("name", "content_type", "size", "message"),
        [
            ("", "application/pdf", 10, "No file uploaded"),
            ("notes.txt", "text/plain", 10, "Only PDF files are allowed"),
            ("notes.pdf", None, 10, "Only PDF files are allowed"),
            ("notes.pdf", "application/pdf", 0, "Uploaded file is empty"),
            ("notes.pdf", "application/pdf", 1024 * 1024 + 1, "maximum upload size"),
        ],
    )
    def test_validate_upload_should_reject_invalid_uploads(
        self, document_service: DocumentService, name, content_type, size, message
    ) -> None:
        """Test each rejection rule raises ValidationError on the pdf field."""
        with pytest.raises(ValidationError, match=message) as exc_info:
            document_service.validate_upload(name, content_type, size)

        assert exc_info.value.details["field"] == "pdf"

    def test_validate_upload_should_accept_pdf_at_size_limit(
        self, document_service: DocumentService
    ) -> None:
        """Test a PDF exactly at the limit is accepted."""
        document_service.validate_upload("notes.pdf", "application/pdf", 1024 * 1024)


class TestDocumentServiceUpload:
    """Test suite for DocumentService.upload_document()."""

    @pytest.mark.asyncio
    async def test_upload_document_should_store_ingest_and_index(
        self,
        document_service: DocumentService,
        file_store: LocalFileStore,
        sample_pdf_bytes: bytes,
        user_id: str,
    ) -> None:
        """Test a valid upload is persisted with chunks, page count and an index."""
        # Act
        document = await document_service.upload_document(
            user_id, "notes.pdf", "application/pdf", sample_pdf_bytes
        )

        # Assert
        assert document.user_id == user_id
        assert document.original_name == "notes.pdf"
        assert document.filename.endswith(".pdf")
        assert document.page_count == 2
        assert document.size_bytes == len(sample_pdf_bytes)
        assert document.chunks[0]["source_id"] == document.filename
        assert file_store.read(document.filename) == sample_pdf_bytes
        assert document.filename in document_service._registry

    @pytest.mark.asyncio
    async def test_upload_document_should_leave_nothing_on_embedding_failure(
        self,
        failing_document_service: DocumentService,
        file_store: LocalFileStore,
        sample_pdf_bytes: bytes,
        user_id: str,
        test_async_db,
    ) -> None:
        """Test a failed embedding rejects the upload without residue."""
        # Act
        with pytest.raises(EmbeddingError):
            await failing_document_service.upload_document(
                user_id, "notes.pdf", "application/pdf", sample_pdf_bytes
            )

        # Assert
        assert list(file_store.root.iterdir()) == []
        assert await failing_document_service.list_documents(user_id) == []
        assert len(failing_document_service._registry) == 0

    @pytest.mark.asyncio
    async def test_upload_document_should_leave_nothing_when_cancelled_during_embedding(
        self,
        test_async_db,
        test_session_factory,
        file_store: LocalFileStore,
        query_cache: QueryCache,
        sample_pdf_bytes: bytes,
        user_id: str,
    ) -> None:
        """Test a cancelled upload removes its file and never registers the index."""
        # Arrange
        embeddings = BlockingEmbeddings()
        service = make_service(test_async_db, test_session_factory, file_store, embeddings, query_cache)
        upload = asyncio.create_task(
            service.upload_document(user_id, "notes.pdf", "application/pdf", sample_pdf_bytes)
        )
        await embeddings.started.wait()

        # Act
        upload.cancel()
        with pytest.raises(asyncio.CancelledError):
            await upload
        embeddings.release.set()
        for _ in range(10):
            await asyncio.sleep(0)

        # Assert
        assert list(file_store.root.iterdir()) == []
        assert len(service._registry) == 0
        assert await service.list_documents(user_id) == []

    @pytest.mark.asyncio
    async def test_upload_document_should_reject_pdf_without_text(
        self,
        document_service: DocumentService,
        file_store: LocalFileStore,
        pdf_factory,
        user_id: str,
    ) -> None:
        """Test extraction failures remove the stored file."""
        with pytest.raises(ExtractionError):
            await document_service.upload_document(
                user_id, "scan.pdf", "application/pdf", pdf_factory([""])
            )

        assert list(file_store.root.iterdir()) == []

    @pytest.mark.asyncio
    async def test_upload_document_should_not_store_invalid_upload(
        self,
        document_service: DocumentService,
        file_store: LocalFileStore,
        user_id: str,
    ) -> None:
        """Test validation happens before anything is written."""
        with pytest.raises(ValidationError):
            await document_service.upload_document(user_id, "notes.txt", "text/plain", b"hello")

        assert list(file_store.root.iterdir()) == []


class TestDocumentServiceQueries:
    """Test suite for listing and fetching documents."""

    @pytest.mark.asyncio
    async def test_list_documents_should_return_only_users_documents(
        self, document_service: DocumentService, sample_pdf_bytes: bytes, user_id: str
    ) -> None:
        """Test listing is scoped to the owner."""
        await document_service.upload_document(user_id, "a.pdf", "application/pdf", sample_pdf_bytes)
        await document_service.upload_document("someone-else", "b.pdf", "application/pdf", sample_pdf_bytes)

        documents = await document_service.list_documents(user_id)

        assert [d.original_name for d in documents] == ["a.pdf"]

    @pytest.mark.asyncio
    async def test_get_document_should_hide_other_users_documents(
        self, document_service: DocumentService, sample_pdf_bytes: bytes, user_id: str
    ) -> None:
        """Test a document owned by another user is reported as not found."""
        document = await document_service.upload_document(
            user_id, "a.pdf", "application/pdf", sample_pdf_bytes
        )

        with pytest.raises(NotFoundError):
            await document_service.get_document(document.id, "intruder")

    @pytest.mark.asyncio
    async def test_get_document_path_should_resolve_stored_file(
        self, document_service: DocumentService, sample_pdf_bytes: bytes, user_id: str
    ) -> None:
        """Test the stored PDF path is returned for streaming."""
        document = await document_service.upload_document(
            user_id, "a.pdf", "application/pdf", sample_pdf_bytes
        )

        found, path = await document_service.get_document_path(document.id, user_id)

        assert found.id == document.id
        assert path.read_bytes() == sample_pdf_bytes

    @pytest.mark.asyncio
    async def test_get_document_path_should_raise_when_file_missing(
        self,
        document_service: DocumentService,
        file_store: LocalFileStore,
        sample_pdf_bytes: bytes,
        user_id: str,
    ) -> None:
        """Test a record whose file was removed raises NotFoundError."""
        document = await document_service.upload_document(
            user_id, "a.pdf", "application/pdf", sample_pdf_bytes
        )
        file_store.delete(document.filename)

        with pytest.raises(NotFoundError, match="File not found"):
            await document_service.get_document_path(document.id, user_id)


class TestDocumentServiceDelete:
    """Test suite for DocumentService.delete_document()."""

    @pytest.mark.asyncio
    async def test_delete_document_should_remove_record_file_index_and_cache(
        self,
        document_service: DocumentService,
        file_store: LocalFileStore,
        query_cache: QueryCache,
        sample_pdf_bytes: bytes,
        user_id: str,
        test_async_db,
    ) -> None:
        """Test deletion removes every trace of the document."""
        # Arrange
        document = await document_service.upload_document(
            user_id, "a.pdf", "application/pdf", sample_pdf_bytes
        )
        filename = document.filename
        query_cache.store(query_cache.build_key(filename, "q", 0), RAGAnswer(answer="a"))

        # Act
        await document_service.delete_document(document.id, user_id)

        # Assert
        assert await document_crud.get_by_filename(test_async_db, filename) is None
        assert not file_store.exists(filename)
        assert filename not in document_service._registry
        assert len(query_cache) == 0

    @pytest.mark.asyncio
    async def test_delete_document_should_release_history_lock(
        self,
        document_service: DocumentService,
        sample_pdf_bytes: bytes,
        user_id: str,
        test_async_db,
    ) -> None:
        """Test the per-document append lock is dropped with the document."""
        # Arrange
        document = await document_service.upload_document(
            user_id, "a.pdf", "application/pdf", sample_pdf_bytes
        )
        document_id = document.id
        await ChatHistoryAdapter(document_id, test_async_db).append_turns(
            ChatTurn(role="user", content="What is alpha?"),
            ChatTurn(role="assistant", content="A letter.", source_pages=[1]),
        )
        assert document_id in _document_locks

        # Act
        await document_service.delete_document(document_id, user_id)

        # Assert
        assert document_id not in _document_locks

    @pytest.mark.asyncio
    async def test_delete_document_should_raise_for_unknown_document(
        self, document_service: DocumentService, user_id: str
    ) -> None:
        """Test deleting an unknown document raises NotFoundError."""
        with pytest.raises(NotFoundError):
            await document_service.delete_document(uuid.uuid4(), user_id)
