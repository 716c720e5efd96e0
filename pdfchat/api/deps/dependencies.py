"""
Dependency injection container.

Process-wide service objects (index registry, answer cache, orchestrator,
models) and per-request factories for FastAPI dependencies.

Dependencies: pdfchat.configs, pdfchat.application, pdfchat.boundary, pdfchat.core
System role: DI container for service injection
"""

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from pdfchat.application.adapters.document_store import DocumentStore
from pdfchat.application.services import ChatService, DocumentService
from pdfchat.boundary.db import get_async_db, get_async_session_factory
from pdfchat.boundary.storage import LocalFileStore
from pdfchat.configs import Settings, get_settings
from pdfchat.core.document_processing.embeddings_provider import (
    create_chat_model,
    create_embeddings,
)
from pdfchat.core.document_processing.entrypoint import DocumentPipeline
from pdfchat.core.document_processing.tasks import EmbeddingTask
from pdfchat.core.rag_query import RAGOrchestrator
from pdfchat.core.retrieval import IndexRegistry, QueryCache


class ServiceCache:
    """Container for process-wide service instances, built lazily."""

    def __init__(self, settings: Settings | None = None):
        self._settings = settings
        self._file_store = None
        self._document_pipeline = None
        self._embedder = None
        self._llm = None
        self._query_cache = None
        self._index_registry = None
        self._orchestrator = None

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    @property
    def file_store(self) -> LocalFileStore:
        """Get cached upload file store."""
        if self._file_store is None:
            self._file_store = LocalFileStore(self.settings.upload.directory)
        return self._file_store

    @property
    def document_pipeline(self) -> DocumentPipeline:
        """Get cached document pipeline."""
        if self._document_pipeline is None:
            self._document_pipeline = DocumentPipeline(self.settings.pipeline)
        return self._document_pipeline

    @property
    def embedder(self) -> EmbeddingTask:
        """Get cached embedder, shared by ingestion and query encoding."""
        if self._embedder is None:
            rag = self.settings.rag
            self._embedder = EmbeddingTask(
                create_embeddings(rag),
                batch_size=rag.embedding_batch_size,
            )
        return self._embedder

    @property
    def llm(self):
        """Get cached chat model."""
        if self._llm is None:
            self._llm = create_chat_model(self.settings.rag)
        return self._llm

    @property
    def query_cache(self) -> QueryCache:
        """Get cached answer cache."""
        if self._query_cache is None:
            rag = self.settings.rag
            self._query_cache = QueryCache(
                ttl_seconds=rag.cache_ttl_seconds,
                max_entries=rag.cache_max_entries,
            )
        return self._query_cache

    @property
    def index_registry(self) -> IndexRegistry:
        """Get cached index registry."""
        if self._index_registry is None:
            source = DocumentStore(get_async_session_factory(), self.file_store)
            self._index_registry = IndexRegistry(
                source=source,
                embedder=self.embedder,
                pipeline=self.document_pipeline,
            )
        return self._index_registry

    @property
    def orchestrator(self) -> RAGOrchestrator:
        """Get cached RAG orchestrator."""
        if self._orchestrator is None:
            rag = self.settings.rag
            self._orchestrator = RAGOrchestrator(
                registry=self.index_registry,
                embedder=self.embedder,
                cache=self.query_cache,
                llm=self.llm,
                top_k=rag.top_k,
                excerpt_length=rag.excerpt_length,
            )
        return self._orchestrator

    def clear(self) -> None:
        """Drop all cached instances (indexes and cached answers included)."""
        if self._index_registry is not None:
            self._index_registry.clear()
        if self._query_cache is not None:
            self._query_cache.clear()
        self._file_store = None
        self._document_pipeline = None
        self._embedder = None
        self._llm = None
        self._query_cache = None
        self._index_registry = None
        self._orchestrator = None


# Global service cache
_service_cache = ServiceCache()


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache


def get_settings_dependency() -> Settings:
    """Get settings singleton."""
    return get_settings()


def get_user_id(x_user_id: str | None = Header(default=None)) -> str:
    """
    Read the requesting user from the X-User-Id header.

    Raises:
        HTTPException(400): Header missing or blank
    """
    if not x_user_id or not x_user_id.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="User ID is required",
        )
    return x_user_id.strip()


def get_document_service(db: AsyncSession = Depends(get_async_db)) -> DocumentService:
    """
    Get document service instance.

    Args:
        db: Async database session (injected via Depends)

    Returns:
        DocumentService: Document service wired to the shared registry and cache
    """
    cache = get_service_cache()
    return DocumentService(
        db=db,
        file_store=cache.file_store,
        registry=cache.index_registry,
        pipeline=cache.document_pipeline,
        upload_settings=cache.settings.upload,
        cache=cache.query_cache,
    )


def get_chat_service(db: AsyncSession = Depends(get_async_db)) -> ChatService:
    """
    Get chat service instance with the shared orchestrator.

    Args:
        db: Async database session (injected via Depends)

    Returns:
        ChatService: Chat service
    """
    cache = get_service_cache()
    return ChatService(db=db, orchestrator=cache.orchestrator)
