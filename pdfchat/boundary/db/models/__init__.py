"""
Database models package.

Exports:
  - DocumentModel: Uploaded PDF with its persisted chunks
  - ChatMessageModel: One chat turn of a document conversation

Dependencies: sqlalchemy, pdfchat.boundary.db.base
System role: Database model definitions for domain entities
"""

from pdfchat.boundary.db.models.chat_message_model import ChatMessageModel
from pdfchat.boundary.db.models.document_model import DocumentModel

__all__ = [
    "DocumentModel",
    "ChatMessageModel",
]
