"""
Retrieval over per-document vector indexes.

Exports: VectorIndex, IndexRegistry, DocumentSource, QueryCache, CacheKey, RetrievedChunk
"""

from .index_registry import DocumentSource, IndexRegistry
from .query_cache import CacheKey, QueryCache
from .retrieval_schemas import RetrievedChunk
from .vector_index import VectorIndex

__all__ = [
    "VectorIndex",
    "IndexRegistry",
    "DocumentSource",
    "QueryCache",
    "CacheKey",
    "RetrievedChunk",
]
