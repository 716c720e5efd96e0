"""
Time-bounded cache of generated answers.

Entries are keyed by document, question text and the chat history length at
the time of asking, and expire a fixed time after insertion. The cache is
advisory: a miss only costs a recomputation.

Dependencies: cachetools
System role: Short-circuit repeated questions before retrieval and generation
"""

import logging
import time
from collections.abc import Callable
from typing import TYPE_CHECKING, NamedTuple

from cachetools import TTLCache

if TYPE_CHECKING:
    from pdfchat.core.rag_query.rag_schema import RAGAnswer

logger = logging.getLogger(__name__)


class CacheKey(NamedTuple):
    """Identity of a cached answer."""

    document_id: str
    question: str
    history_length: int


class QueryCache:
    """TTL + LRU bounded map of CacheKey to RAGAnswer."""

    def __init__(
        self,
        ttl_seconds: float = 3600,
        max_entries: int = 1024,
        timer: Callable[[], float] = time.monotonic,
    ) -> None:
        """
        Initialize cache.

        Args:
            ttl_seconds: Lifetime of an entry from insertion
            max_entries: Size bound; least recently used entries go first
            timer: Clock used for expiry
        """
        self._entries: TTLCache = TTLCache(maxsize=max_entries, ttl=ttl_seconds, timer=timer)

    @staticmethod
    def build_key(document_id: str, question: str, history_length: int) -> CacheKey:
        """Build the cache key for a question asked against a document."""
        return CacheKey(document_id, question, history_length)

    def lookup(self, key: CacheKey) -> "RAGAnswer | None":
        """Return the cached answer, or None when absent or expired."""
        entry = self._entries.get(key)
        if entry is not None:
            logger.debug(f"Cache hit for {key.document_id}")
        return entry

    def store(self, key: CacheKey, entry: "RAGAnswer") -> None:
        """Insert or replace an entry, restarting its lifetime."""
        self._entries[key] = entry

    def invalidate_document(self, document_id: str) -> int:
        """Drop every entry of a document. Returns the number dropped."""
        stale = [key for key in list(self._entries.keys()) if key.document_id == document_id]
        for key in stale:
            self._entries.pop(key, None)
        return len(stale)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
