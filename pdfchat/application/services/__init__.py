"""Service orchestrators."""

from .chat_service import ChatResult, ChatService
from .document_service import DocumentService

__all__ = [
    "ChatResult",
    "ChatService",
    "DocumentService",
]
