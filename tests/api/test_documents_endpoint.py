"""
Tests for document API endpoints.

The document service and settings are replaced through dependency_overrides.

System role: Verification of upload, listing, streaming and deletion routes
"""

import uuid
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from pdfchat.api.deps import get_document_service, get_settings_dependency
from pdfchat.api.main import create_app
from pdfchat.boundary.db.models.document_model import DocumentModel
from pdfchat.configs import Settings
from pdfchat.configs.storage import UploadSettings
from pdfchat.core.exceptions import EmbeddingError, ExtractionError, NotFoundError, ValidationError

HEADERS = {"X-User-Id": "user-123"}
MAX_UPLOAD_BYTES = 64


def make_document(**overrides) -> DocumentModel:
    fields = {
        "id": uuid.uuid4(),
        "user_id": "user-123",
        "filename": "1700000000000-7.pdf",
        "original_name": "notes.pdf",
        "content_type": "application/pdf",
        "size_bytes": 42,
        "page_count": 2,
        "chunks": [],
        "created_at": datetime(2024, 5, 1, tzinfo=timezone.utc),
    }
    fields.update(overrides)
    return DocumentModel(**fields)


@pytest.fixture
def mock_document_service() -> MagicMock:
    """Create mock DocumentService."""
    service = MagicMock()
    service.list_documents = AsyncMock(return_value=[])
    service.upload_document = AsyncMock()
    service.get_document_path = AsyncMock()
    service.delete_document = AsyncMock()
    return service


@pytest.fixture
def client(mock_document_service: MagicMock) -> TestClient:
    """Create test client with mocked document service and a small upload limit."""
    app = create_app()
    settings = Settings(upload=UploadSettings(max_file_size_bytes=MAX_UPLOAD_BYTES))
    app.dependency_overrides[get_document_service] = lambda: mock_document_service
    app.dependency_overrides[get_settings_dependency] = lambda: settings
    return TestClient(app)


class TestListDocumentsEndpoint:
    """Test suite for GET /pdfs."""

    def test_list_should_return_documents_and_total(
        self, client: TestClient, mock_document_service: MagicMock
    ) -> None:
        """Test the user's documents are returned in service order."""
        # Arrange
        newer = make_document(original_name="new.pdf", filename="2-2.pdf")
        older = make_document(original_name="old.pdf", filename="1-1.pdf")
        mock_document_service.list_documents.return_value = [newer, older]

        # Act
        response = client.get("/api/v1/pdfs", headers=HEADERS)

        # Assert
        assert response.status_code == 200
        body = response.json()
        assert body["total"] == 2
        assert [d["original_name"] for d in body["documents"]] == ["new.pdf", "old.pdf"]
        mock_document_service.list_documents.assert_awaited_once_with("user-123")

    def test_list_should_require_user_id(self, client: TestClient) -> None:
        """Test listing without X-User-Id is rejected."""
        response = client.get("/api/v1/pdfs")

        assert response.status_code == 400


class TestUploadDocumentEndpoint:
    """Test suite for POST /pdfs/upload."""

    def test_upload_should_return_created_document(
        self, client: TestClient, mock_document_service: MagicMock, sample_pdf_bytes: bytes
    ) -> None:
        """Test a valid upload returns 201 with the document record."""
        # Arrange
        document = make_document(size_bytes=len(sample_pdf_bytes))
        mock_document_service.upload_document.return_value = document

        # Act
        response = client.post(
            "/api/v1/pdfs/upload",
            files={"pdf": ("notes.pdf", sample_pdf_bytes[:MAX_UPLOAD_BYTES], "application/pdf")},
            headers=HEADERS,
        )

        # Assert
        assert response.status_code == 201
        body = response.json()
        assert body["id"] == str(document.id)
        assert body["filename"] == "1700000000000-7.pdf"
        assert body["page_count"] == 2
        kwargs = mock_document_service.upload_document.await_args.kwargs
        assert kwargs["user_id"] == "user-123"
        assert kwargs["original_name"] == "notes.pdf"
        assert kwargs["content_type"] == "application/pdf"

    def test_upload_should_read_at_most_one_byte_past_limit(
        self, client: TestClient, mock_document_service: MagicMock
    ) -> None:
        """Test oversize uploads are truncated to limit + 1 before validation."""
        mock_document_service.upload_document.side_effect = ValidationError(
            "File exceeds the maximum upload size", field="pdf"
        )

        response = client.post(
            "/api/v1/pdfs/upload",
            files={"pdf": ("big.pdf", b"%PDF-" + b"x" * 500, "application/pdf")},
            headers=HEADERS,
        )

        assert response.status_code == 400
        assert len(mock_document_service.upload_document.await_args.kwargs["data"]) == MAX_UPLOAD_BYTES + 1

    def test_upload_should_reject_missing_file(
        self, client: TestClient, mock_document_service: MagicMock
    ) -> None:
        """Test a request without the pdf field is rejected with 400."""
        response = client.post("/api/v1/pdfs/upload", data={"other": "x"}, headers=HEADERS)

        assert response.status_code == 400
        assert response.json() == {"detail": "No file uploaded"}
        mock_document_service.upload_document.assert_not_awaited()

    @pytest.mark.parametrize(
        ("error", "status_code"),
        [
            (ValidationError("Only PDF files are allowed", field="pdf"), 400),
            (ExtractionError("PDF document contains no extractable text"), 422),
            (EmbeddingError("Failed to generate embeddings"), 502),
        ],
    )
    def test_upload_should_map_errors_to_status_codes(
        self, client: TestClient, mock_document_service: MagicMock, error, status_code
    ) -> None:
        """Test ingestion failures map to their HTTP status."""
        mock_document_service.upload_document.side_effect = error

        response = client.post(
            "/api/v1/pdfs/upload",
            files={"pdf": ("notes.pdf", b"%PDF-1.4 data", "application/pdf")},
            headers=HEADERS,
        )

        assert response.status_code == status_code
        assert response.json() == {"detail": error.message}


class TestGetDocumentFileEndpoint:
    """Test suite for GET /pdfs/{document_id}."""

    def test_get_should_stream_stored_pdf(
        self,
        client: TestClient,
        mock_document_service: MagicMock,
        temp_dir,
        sample_pdf_bytes: bytes,
    ) -> None:
        """Test the stored file is streamed inline as application/pdf."""
        # Arrange
        path = temp_dir / "1700000000000-7.pdf"
        path.write_bytes(sample_pdf_bytes)
        document = make_document()
        mock_document_service.get_document_path.return_value = (document, path)

        # Act
        response = client.get(f"/api/v1/pdfs/{document.id}", headers=HEADERS)

        # Assert
        assert response.status_code == 200
        assert response.content == sample_pdf_bytes
        assert response.headers["content-type"] == "application/pdf"
        assert response.headers["content-disposition"].startswith("inline")

    def test_get_should_return_404_when_missing(
        self, client: TestClient, mock_document_service: MagicMock
    ) -> None:
        """Test unknown documents yield 404."""
        mock_document_service.get_document_path.side_effect = NotFoundError("document", "x")

        response = client.get(f"/api/v1/pdfs/{uuid.uuid4()}", headers=HEADERS)

        assert response.status_code == 404
        assert response.json() == {"detail": "Document not found: x"}


class TestDeleteDocumentEndpoint:
    """Test suite for DELETE /pdfs/{document_id}."""

    def test_delete_should_confirm_deletion(
        self, client: TestClient, mock_document_service: MagicMock
    ) -> None:
        """Test successful deletion returns a confirmation message."""
        document_id = uuid.uuid4()

        response = client.delete(f"/api/v1/pdfs/{document_id}", headers=HEADERS)

        assert response.status_code == 200
        assert response.json() == {"message": "PDF deleted successfully"}
        mock_document_service.delete_document.assert_awaited_once_with(document_id, "user-123")

    def test_delete_should_return_404_for_unknown_document(
        self, client: TestClient, mock_document_service: MagicMock
    ) -> None:
        """Test deleting an unknown document yields 404."""
        mock_document_service.delete_document.side_effect = NotFoundError("document", "x")

        response = client.delete(f"/api/v1/pdfs/{uuid.uuid4()}", headers=HEADERS)

        assert response.status_code == 404
