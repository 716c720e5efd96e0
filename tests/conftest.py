"""
Shared test fixtures and configuration for entire test suite.

Provides: in-memory async database, deterministic embeddings, generated PDFs,
temporary upload directories
Dependencies: pytest, pytest-asyncio, sqlalchemy, langchain_core
System role: Test infrastructure and fixture management
"""

import shutil
import tempfile
import uuid
from pathlib import Path

import pytest
from langchain_core.embeddings import Embeddings


class KeywordEmbeddings(Embeddings):
    """
    Deterministic embeddings over a fixed vocabulary.

    Each dimension counts occurrences of one vocabulary word, plus a constant
    bias dimension so no vector is all zeros. Records every call.
    """

    VOCABULARY = ("alpha", "beta", "gamma", "delta", "omega")

    def __init__(self, fail_on_call: int | None = None) -> None:
        self.document_calls: list[list[str]] = []
        self.query_calls: list[str] = []
        self._fail_on_call = fail_on_call

    def _vector(self, text: str) -> list[float]:
        words = text.lower().replace(".", " ").split()
        return [float(words.count(word)) for word in self.VOCABULARY] + [0.1]

    def embed_documents(self, texts: list[str]) -> list[list[float]]:
        self.document_calls.append(list(texts))
        if self._fail_on_call is not None and len(self.document_calls) == self._fail_on_call:
            raise RuntimeError("embedding provider unavailable")
        return [self._vector(text) for text in texts]

    def embed_query(self, text: str) -> list[float]:
        self.query_calls.append(text)
        return self._vector(text)


def build_pdf(pages: list[str]) -> bytes:
    """
    Build a minimal valid PDF with one line of Helvetica text per page.

    Empty strings produce pages without a text layer.
    """
    objects: list[bytes] = []
    page_count = len(pages)
    font_id = 3 + 2 * page_count
    kids = " ".join(f"{3 + 2 * i} 0 R" for i in range(page_count))

    objects.append(b"<< /Type /Catalog /Pages 2 0 R >>")
    objects.append(f"<< /Type /Pages /Kids [{kids}] /Count {page_count} >>".encode())
    for i, text in enumerate(pages):
        content_id = 4 + 2 * i
        objects.append(
            (
                f"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
                f"/Contents {content_id} 0 R /Resources << /Font << /F1 {font_id} 0 R >> >> >>"
            ).encode()
        )
        stream = f"BT /F1 12 Tf 72 720 Td ({text}) Tj ET".encode() if text else b""
        objects.append(
            f"<< /Length {len(stream)} >>\nstream\n".encode() + stream + b"\nendstream"
        )
    objects.append(b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>")

    output = bytearray(b"%PDF-1.4\n")
    offsets = []
    for number, body in enumerate(objects, start=1):
        offsets.append(len(output))
        output += f"{number} 0 obj\n".encode() + body + b"\nendobj\n"

    xref_offset = len(output)
    output += f"xref\n0 {len(objects) + 1}\n".encode()
    output += b"0000000000 65535 f \n"
    for offset in offsets:
        output += f"{offset:010d} 00000 n \n".encode()
    output += (
        f"trailer\n<< /Size {len(objects) + 1} /Root 1 0 R >>\n"
        f"startxref\n{xref_offset}\n%%EOF\n"
    ).encode()
    return bytes(output)


@pytest.fixture
def keyword_embeddings() -> KeywordEmbeddings:
    """Provide deterministic keyword embeddings."""
    return KeywordEmbeddings()


@pytest.fixture
def failing_embeddings() -> KeywordEmbeddings:
    """Provide embeddings whose first document call fails."""
    return KeywordEmbeddings(fail_on_call=1)


@pytest.fixture
def pdf_factory():
    """Provide the PDF builder."""
    return build_pdf


@pytest.fixture
def sample_pdf_bytes() -> bytes:
    """Provide a two-page PDF with extractable text."""
    return build_pdf(["Alpha study notes on page one", "Beta review material on page two"])


@pytest.fixture
async def test_engine():
    """
    Create an in-memory SQLite async engine with all tables.

    Yields:
        AsyncEngine: Engine shared by every session of the test
    """
    from sqlalchemy.ext.asyncio import create_async_engine
    from sqlalchemy.pool import StaticPool

    from pdfchat.boundary.db.base import Base
    from pdfchat.boundary.db.create_tables import create_all_tables

    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await create_all_tables(engine)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def test_session_factory(test_engine):
    """Provide a session factory bound to the test engine."""
    from pdfchat.boundary.db.connection import create_session_factory

    return create_session_factory(test_engine)


@pytest.fixture
async def test_async_db(test_session_factory):
    """
    Create an async session on the in-memory database.

    Yields:
        AsyncSession: Test database session
    """
    async with test_session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def temp_dir():
    """
    Create a temporary directory for test files.

    Yields:
        Path: Path to temporary directory
    """
    temp_path = Path(tempfile.mkdtemp(prefix="pdfchat_test_"))
    yield temp_path

    if temp_path.exists():
        shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def user_id() -> str:
    """Provide a test user ID."""
    return "user-123"


@pytest.fixture
def document_id() -> uuid.UUID:
    """Generate a test document ID."""
    return uuid.uuid4()
