"""
CRUD operations for database models.

Exports base CRUD class and model-specific CRUD implementations
with pre-instantiated singletons for direct use.

Usage:
    from pdfchat.boundary.db.CRUD import document_crud, chat_history_crud

    document = await document_crud.get_by_filename(db, filename)
"""

from pdfchat.boundary.db.CRUD.base_crud import BaseCRUD
from pdfchat.boundary.db.CRUD.chat_history_crud import ChatHistoryCRUD, chat_history_crud
from pdfchat.boundary.db.CRUD.document_crud import DocumentCRUD, document_crud

__all__ = [
    "BaseCRUD",
    "DocumentCRUD",
    "document_crud",
    "ChatHistoryCRUD",
    "chat_history_crud",
]
