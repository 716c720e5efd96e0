"""
Error handling for PDF chat API endpoints.

A decorator that maps the domain exception hierarchy to HTTP responses, so
endpoints only deal with the success path.
"""

import functools
import logging
from typing import Any, Callable, TypeVar

from fastapi import HTTPException, status

from pdfchat.core.exceptions import (
    EmbeddingError,
    ExtractionError,
    GenerationError,
    NotFoundError,
    PdfChatException,
    RetrievalError,
    ValidationError,
)

logger = logging.getLogger(__name__)

# Type for the decorated function
F = TypeVar("F", bound=Callable[..., Any])

# Most specific classes first
_STATUS_BY_ERROR: tuple[tuple[type[PdfChatException], int], ...] = (
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ExtractionError, status.HTTP_422_UNPROCESSABLE_ENTITY),
    (EmbeddingError, status.HTTP_502_BAD_GATEWAY),
    (GenerationError, status.HTTP_502_BAD_GATEWAY),
    (RetrievalError, status.HTTP_500_INTERNAL_SERVER_ERROR),
)


def status_code_for(error: PdfChatException) -> int:
    """HTTP status code for a domain exception."""
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def handle_pdfchat_errors(func: F) -> F:
    """
    Decorator to transform domain errors into HTTPExceptions.

    Client errors (4xx) are logged as warnings with their details; upstream
    and internal failures are logged with a traceback.
    """
    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)

        except HTTPException:
            raise

        except PdfChatException as e:
            status_code = status_code_for(e)
            extra = {"error_type": type(e).__name__, "error_details": repr(e.details)}
            if status_code < status.HTTP_500_INTERNAL_SERVER_ERROR:
                logger.warning(f"Request rejected: {e.message}", extra=extra)
            else:
                logger.exception(f"Request failed: {e.message}", extra=extra)
            raise HTTPException(status_code=status_code, detail=e.message)

        except Exception as e:
            logger.exception(
                "Unexpected failure in request",
                extra={"error_type": type(e).__name__},
            )
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Internal server error",
            )

    return wrapper  # type: ignore
