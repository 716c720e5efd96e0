"""
Text extraction task using LangChain PyPDFParser.

Converts raw PDF bytes into plain text plus the page count reported by the file.

Dependencies: langchain_community.document_loaders.parsers, pypdf
System role: First stage of document ingestion pipeline
"""

import logging

from langchain_community.document_loaders.parsers import PyPDFParser
from langchain_core.document_loaders import Blob

from pdfchat.core.exceptions import ExtractionError

from ..models import ExtractedDocument

logger = logging.getLogger(__name__)

PDF_HEADER = b"%PDF-"
# The PDF header may be preceded by junk within the first kilobyte
HEADER_SEARCH_WINDOW = 1024
PAGE_SEPARATOR = "\n\n"


class TextExtractor:
    """Extract the text layer of a PDF held in memory."""

    def __init__(self, parser: PyPDFParser | None = None) -> None:
        """
        Initialize extractor.

        Args:
            parser: PDF parser (page-mode PyPDFParser if None)
        """
        self._parser = parser or PyPDFParser()

    def extract(self, data: bytes, source_name: str | None = None) -> ExtractedDocument:
        """
        Extract plain text from PDF bytes.

        Page texts are joined with a blank line, in page order.

        Args:
            data: Raw PDF bytes
            source_name: Optional name used in error context

        Returns:
            ExtractedDocument: Extracted text and page count

        Raises:
            ExtractionError: Empty input, missing PDF header, unreadable file,
                or no extractable text
        """
        if not data:
            raise ExtractionError("Uploaded file is empty", source_name, file_type="pdf")

        if data[:HEADER_SEARCH_WINDOW].find(PDF_HEADER) == -1:
            raise ExtractionError(
                "File is not a PDF document",
                source_name,
                file_type="pdf",
            )

        try:
            blob = Blob.from_data(data, mime_type="application/pdf", path=source_name)
            pages = list(self._parser.lazy_parse(blob))
        except Exception as e:
            raise ExtractionError(f"Failed to parse PDF: {e}", source_name, file_type="pdf") from e

        text = PAGE_SEPARATOR.join(page.page_content for page in pages)
        if not text.strip():
            raise ExtractionError(
                "PDF document contains no extractable text",
                source_name,
                file_type="pdf",
                details={"page_count": len(pages)},
            )

        logger.debug(f"Extracted {len(text)} characters from {len(pages)} pages")
        return ExtractedDocument(text=text, page_count=len(pages))
