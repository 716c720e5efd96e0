"""RAG query business logic.

Includes the answer orchestrator, its prompt and its answer schema.
"""

from .rag_orchestrator import RAGOrchestrator
from .rag_schema import RAGAnswer, SourceExcerpt

__all__ = ["RAGOrchestrator", "RAGAnswer", "SourceExcerpt"]
