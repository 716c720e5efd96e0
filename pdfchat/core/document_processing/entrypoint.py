"""
Document pipeline orchestrator.

Coordinates text extraction and chunking. Embedding is async and is driven by
the index registry, so this pipeline is synchronous and safe to run in a
worker thread.

Dependencies: All task modules, configs
System role: Pipeline orchestration (coordinates only)
"""

import logging
import math
import time

from .configs import (
    DocumentPipelineSettings,
    get_pipeline_settings,
)
from .models import IngestionResult
from .tasks import (
    ChunkingTask,
    TextExtractor,
)

logger = logging.getLogger(__name__)


class DocumentPipeline:
    """Orchestrate document ingestion: extract -> chunk."""

    def __init__(self, settings: DocumentPipelineSettings | None = None) -> None:
        """
        Initialize pipeline with configuration.

        Args:
            settings: Pipeline settings (uses defaults if None)
        """
        self._settings = settings or get_pipeline_settings()

        self._extractor = TextExtractor()
        self._chunking_task = ChunkingTask(
            chunk_size=self._settings.chunk_size,
            chunk_overlap=self._settings.chunk_overlap,
            chunks_per_page=self._settings.chunks_per_page,
        )

    def process(self, data: bytes, source_id: str) -> IngestionResult:
        """
        Process a PDF through extraction and chunking.

        When the PDF does not report a page count, it is estimated from the
        number of chunks.

        Args:
            data: Raw PDF bytes
            source_id: Stored filename of the document

        Returns:
            IngestionResult: Chunks, page count and timing

        Raises:
            ExtractionError: Document text extraction failed
        """
        start_time = time.perf_counter()

        extracted = self._extractor.extract(data, source_id)
        chunks = self._chunking_task.chunk(extracted.text, source_id)

        page_count = extracted.page_count or math.ceil(
            len(chunks) / self._settings.chunks_per_page
        )

        elapsed_ms = (time.perf_counter() - start_time) * 1000
        logger.info(
            f"Processed {source_id}: {len(chunks)} chunks, {page_count} pages "
            f"in {elapsed_ms:.1f}ms"
        )

        return IngestionResult(
            source_id=source_id,
            chunks=chunks,
            page_count=page_count,
            processing_time_ms=elapsed_ms,
        )
