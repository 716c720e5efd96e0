"""
Text chunking task using RecursiveCharacterTextSplitter.

Splits extracted text into retrievable chunks and attributes each chunk to an
estimated page.

Dependencies: langchain_text_splitters
System role: Second stage of document ingestion pipeline
"""

from langchain_text_splitters import RecursiveCharacterTextSplitter

from ..models import DocumentChunk

SEPARATORS = ["\n\n", "\n", ". ", " ", ""]


class ChunkingTask:
    """Split text into page-attributed chunks."""

    def __init__(
        self,
        chunk_size: int = 2000,
        chunk_overlap: int = 100,
        chunks_per_page: int = 2,
    ) -> None:
        """
        Initialize chunking task with splitter configuration.

        Args:
            chunk_size: Maximum chunk size in characters
            chunk_overlap: Overlap between consecutive chunks
            chunks_per_page: Chunks attributed to each page

        Raises:
            ValueError: When chunks_per_page is not positive
        """
        if chunks_per_page < 1:
            raise ValueError("chunks_per_page must be at least 1")

        self._chunks_per_page = chunks_per_page
        self._splitter = RecursiveCharacterTextSplitter(
            chunk_size=chunk_size,
            chunk_overlap=chunk_overlap,
            separators=SEPARATORS,
            length_function=len,
        )

    def page_for_ordinal(self, ordinal: int) -> int:
        """Estimated 1-based page number of the chunk at zero-based ``ordinal``."""
        return ordinal // self._chunks_per_page + 1

    def chunk(self, text: str, source_id: str) -> list[DocumentChunk]:
        """
        Split text into chunks.

        Page attribution is a heuristic: the chunk at ordinal i is assigned
        page i // chunks_per_page + 1, so page numbers never decrease.

        Args:
            text: Extracted document text
            source_id: Stored filename of the document

        Returns:
            list[DocumentChunk]: Chunks in document order

        Raises:
            ValueError: When text is empty
        """
        if not text or not text.strip():
            raise ValueError("No text to chunk")

        pieces = [piece for piece in self._splitter.split_text(text) if piece.strip()]
        return [
            DocumentChunk(
                text=piece,
                page_number=self.page_for_ordinal(i),
                source_id=source_id,
            )
            for i, piece in enumerate(pieces)
        ]
