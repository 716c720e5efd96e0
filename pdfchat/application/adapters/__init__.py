"""Supporting adapters."""

from .chat_history_adapter import ChatHistoryAdapter
from .document_store import DocumentStore

__all__ = ["ChatHistoryAdapter", "DocumentStore"]
