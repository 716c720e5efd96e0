"""
Exception hierarchy for the PDF chat application.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class PdfChatException(Exception):
    """Base exception for all PDF chat application errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ValidationError(PdfChatException):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize validation error.

        Args:
            message: Error message
            field: Field name that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details)


class NotFoundError(PdfChatException):
    """Raised when a document, its chunks or its stored file cannot be found."""

    def __init__(
        self,
        resource: str,
        identifier: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize not found error.

        Args:
            resource: Kind of resource that is missing (document, file)
            identifier: Identifier that was looked up
            details: Additional context
        """
        details = details or {}
        details["resource"] = resource
        details["identifier"] = identifier
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource.capitalize()} not found: {identifier}", details)


class DocumentProcessingError(PdfChatException):
    """Base exception for document ingestion errors."""

    def __init__(
        self,
        message: str,
        document_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize document processing error.

        Args:
            message: Error message
            document_id: ID of the document that failed
            details: Additional context
        """
        details = details or {}
        if document_id:
            details["document_id"] = document_id
        super().__init__(message, details)


class ExtractionError(DocumentProcessingError):
    """Raised when text cannot be extracted from an uploaded file."""

    def __init__(
        self,
        message: str,
        document_id: str | None = None,
        file_type: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize extraction error.

        Args:
            message: Error message
            document_id: ID of the document
            file_type: Type of file that failed extraction
            details: Additional context
        """
        details = details or {}
        if file_type:
            details["file_type"] = file_type
        super().__init__(message, document_id, details)


class EmbeddingError(DocumentProcessingError):
    """Raised when embedding generation fails."""

    pass


class RetrievalError(PdfChatException):
    """Raised when index resolution or similarity search fails."""

    def __init__(
        self,
        message: str,
        document_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize retrieval error.

        Args:
            message: Error message
            document_id: Document the retrieval ran against
            details: Additional context
        """
        details = details or {}
        if document_id:
            details["document_id"] = document_id
        super().__init__(message, details)


class GenerationError(PdfChatException):
    """Raised when the language model fails to produce an answer."""

    def __init__(
        self,
        message: str,
        document_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if document_id:
            details["document_id"] = document_id
        super().__init__(message, details)
