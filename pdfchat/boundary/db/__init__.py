"""
Database boundary layer: ORM models, CRUD operations, and connection management.

Exports:
  - Base, UUIDMixin, TimestampMixin: Model building blocks
  - get_async_engine(), get_async_session_factory(), get_async_db(): Async connection management
  - DocumentModel, ChatMessageModel: Domain entities
  - document_crud, chat_history_crud: CRUD operation singletons

Dependencies: sqlalchemy, pdfchat.configs
System role: Database adapter providing persistent storage for documents,
their chunks and chat history.
"""

from pdfchat.boundary.db.base import Base, TimestampMixin, UUIDMixin
from pdfchat.boundary.db.connection import (
    create_engine_for_url,
    create_session_factory,
    dispose_engine,
    get_async_db,
    get_async_engine,
    get_async_session_factory,
)
from pdfchat.boundary.db.models import ChatMessageModel, DocumentModel
from pdfchat.boundary.db.CRUD import (
    BaseCRUD,
    ChatHistoryCRUD,
    DocumentCRUD,
    chat_history_crud,
    document_crud,
)
from pdfchat.boundary.db.create_tables import create_all_tables

__all__ = [
    # Base classes
    "Base",
    "TimestampMixin",
    "UUIDMixin",
    # Connection
    "create_engine_for_url",
    "create_session_factory",
    "dispose_engine",
    "get_async_db",
    "get_async_engine",
    "get_async_session_factory",
    "create_all_tables",
    # Models
    "DocumentModel",
    "ChatMessageModel",
    # CRUD classes
    "BaseCRUD",
    "DocumentCRUD",
    "ChatHistoryCRUD",
    # CRUD singletons
    "document_crud",
    "chat_history_crud",
]
