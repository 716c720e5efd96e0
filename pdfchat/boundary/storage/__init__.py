"""
Raw file storage for uploaded documents.

Exports: LocalFileStore
"""

from pdfchat.boundary.storage.local_file_store import LocalFileStore

__all__ = ["LocalFileStore"]
