"""
Process-wide registry of per-document vector indexes.

Resolves the index for a document, building it on first use from persisted
chunks (or, when none are stored, by re-ingesting the raw file). Concurrent
requests for the same missing index share one build.

Dependencies: asyncio, fastapi.concurrency, pdfchat.core.document_processing
System role: Index lifecycle management for retrieval
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Protocol

from fastapi.concurrency import run_in_threadpool

from pdfchat.core.document_processing.entrypoint import DocumentPipeline
from pdfchat.core.document_processing.models import DocumentChunk
from pdfchat.core.document_processing.tasks import EmbeddingTask

from .vector_index import VectorIndex

logger = logging.getLogger(__name__)


class DocumentSource(Protocol):
    """Read access to persisted documents, keyed by stored filename."""

    async def load_chunks(self, document_id: str) -> list[DocumentChunk]:
        """Return persisted chunks (empty when none were stored). Raise NotFoundError for unknown documents."""
        ...

    async def load_raw_file(self, document_id: str) -> bytes:
        """Return the stored PDF bytes. Raise NotFoundError when the file is gone."""
        ...


class IndexRegistry:
    """
    Map of document id to VectorIndex with single-flight builds.

    At most one build runs per document at a time. Callers that arrive while a
    build is running await the same task and observe its result or its error.
    A cancelled caller does not cancel the shared build. A failed build leaves
    no entry so the next call retries.
    """

    def __init__(
        self,
        source: DocumentSource,
        embedder: EmbeddingTask,
        pipeline: DocumentPipeline | None = None,
    ) -> None:
        """
        Initialize registry.

        Args:
            source: Persistence collaborator for chunks and raw files
            embedder: Embedding task shared with query encoding
            pipeline: Ingestion pipeline used when no chunks are persisted
        """
        self._source = source
        self._embedder = embedder
        self._pipeline = pipeline or DocumentPipeline()
        self._indexes: dict[str, VectorIndex] = {}
        self._builds: dict[str, asyncio.Task[VectorIndex]] = {}

    def get(self, document_id: str) -> VectorIndex | None:
        """Return the built index for a document, if any."""
        return self._indexes.get(document_id)

    def __contains__(self, document_id: str) -> bool:
        return document_id in self._indexes

    def __len__(self) -> int:
        return len(self._indexes)

    async def get_or_build(self, document_id: str) -> VectorIndex:
        """
        Return the index for a document, building it on a miss.

        Args:
            document_id: Stored filename of the document

        Returns:
            VectorIndex: Fully built index

        Raises:
            NotFoundError: Document record or raw file is missing
            ExtractionError: Re-ingesting the raw file failed
            EmbeddingError: Chunk embedding failed
        """
        index = self._indexes.get(document_id)
        if index is not None:
            return index
        return await self._single_flight(document_id, lambda: self._build(document_id))

    async def build_from_chunks(self, document_id: str, chunks: list[DocumentChunk]) -> VectorIndex:
        """
        Embed freshly ingested chunks and register the resulting index.

        Joins a build already running for the same document.

        Raises:
            EmbeddingError: Chunk embedding failed
        """
        return await self._single_flight(
            document_id,
            lambda: self._embed(document_id, chunks),
        )

    def evict(self, document_id: str) -> bool:
        """
        Drop the index of a document.

        A build still running for the document will not be registered.

        Returns:
            bool: Whether an index or running build was dropped
        """
        removed_index = self._indexes.pop(document_id, None)
        removed_build = self._builds.pop(document_id, None)
        if removed_index is not None or removed_build is not None:
            logger.info(f"{__name__}:evict - Evicted index for {document_id}")
            return True
        return False

    def clear(self) -> None:
        """Drop every index. Running builds finish but are not registered."""
        self._indexes.clear()
        self._builds.clear()

    async def _single_flight(
        self,
        document_id: str,
        build: Callable[[], Awaitable[VectorIndex]],
    ) -> VectorIndex:
        task = self._builds.get(document_id)
        if task is None:
            task = asyncio.create_task(build(), name=f"index-build:{document_id}")
            self._builds[document_id] = task
            task.add_done_callback(lambda done: self._on_build_done(document_id, done))
        else:
            logger.debug(f"Joining running index build for {document_id}")

        return await asyncio.shield(task)

    def _on_build_done(self, document_id: str, task: asyncio.Task[VectorIndex]) -> None:
        error = None if task.cancelled() else task.exception()

        # Only the build still tracked for this key may register; evict() untracks it
        if self._builds.get(document_id) is not task:
            return
        del self._builds[document_id]

        if task.cancelled():
            return
        if error is not None:
            logger.warning(
                f"{__name__}:build - Index build failed for {document_id}: {error}",
                extra={"document_id": document_id, "error_type": type(error).__name__},
            )
            return
        self._indexes[document_id] = task.result()

    async def _build(self, document_id: str) -> VectorIndex:
        chunks = await self._source.load_chunks(document_id)
        if not chunks:
            logger.info(f"No stored chunks for {document_id}, re-ingesting raw file")
            data = await self._source.load_raw_file(document_id)
            result = await run_in_threadpool(self._pipeline.process, data, document_id)
            chunks = result.chunks

        return await self._embed(document_id, chunks)

    async def _embed(self, document_id: str, chunks: list[DocumentChunk]) -> VectorIndex:
        embedded = await self._embedder.embed_chunks(chunks)
        index = VectorIndex.from_embedded(document_id, embedded)
        logger.info(
            f"{__name__}:build - Built index for {document_id}",
            extra={"document_id": document_id, "chunk_count": len(index), "dimension": index.dimension},
        )
        return index
