"""
RAG question answering orchestration.

Answers one question against one document: cache lookup, index resolution,
question embedding, top-k retrieval, prompt assembly, a single chat model call
and page attribution. Successful answers are cached.

Dependencies: langchain_core, pdfchat.core.retrieval, pdfchat.core.document_processing
System role: RAG Q&A orchestration
"""

import asyncio
import logging

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.output_parsers import StrOutputParser
from langchain_core.prompts import ChatPromptTemplate

from pdfchat.core.document_processing.tasks import EmbeddingTask
from pdfchat.core.exceptions import (
    GenerationError,
    PdfChatException,
    RetrievalError,
    ValidationError,
)
from pdfchat.core.rag_query.rag_prompt import build_context, get_rag_prompt
from pdfchat.core.rag_query.rag_schema import RAGAnswer, SourceExcerpt
from pdfchat.core.retrieval.index_registry import IndexRegistry
from pdfchat.core.retrieval.query_cache import CacheKey, QueryCache
from pdfchat.core.retrieval.retrieval_schemas import RetrievedChunk

logger = logging.getLogger(__name__)

ELLIPSIS = "..."


class RAGOrchestrator:
    """
    Retrieve-then-generate pipeline over per-document indexes.

    Chat history is not fed into the prompt; it only participates in the cache
    key through its length. Failures are never cached and never retried.
    """

    def __init__(
        self,
        registry: IndexRegistry,
        embedder: EmbeddingTask,
        cache: QueryCache,
        llm: BaseChatModel,
        top_k: int = 3,
        excerpt_length: int = 150,
        prompt: ChatPromptTemplate | None = None,
    ) -> None:
        """
        Initialize orchestrator.

        Args:
            registry: Index registry (builds indexes on a miss)
            embedder: Embedding task, the same one used to build indexes
            cache: Answer cache
            llm: Chat model used for generation
            top_k: Number of chunks retrieved per question
            excerpt_length: Characters kept in each source excerpt
            prompt: Prompt template (default answer prompt if None)
        """
        self._registry = registry
        self._embedder = embedder
        self._cache = cache
        self._top_k = top_k
        self._excerpt_length = excerpt_length
        self._chain = (prompt or get_rag_prompt()) | llm | StrOutputParser()
        self._running: set[asyncio.Task[RAGAnswer]] = set()

    async def answer(self, document_id: str, question: str, history_length: int = 0) -> RAGAnswer:
        """
        Answer a question from the content of one document.

        The work runs in its own task: a caller that is cancelled does not stop
        it, so the answer still lands in the cache.

        Args:
            document_id: Stored filename of the document
            question: User question
            history_length: Number of stored chat turns before this question

        Returns:
            RAGAnswer: Answer with source pages and excerpts

        Raises:
            ValidationError: Blank question
            NotFoundError: Document or raw file missing
            ExtractionError: Rebuilding the index from the raw file failed
            EmbeddingError: Chunk or question embedding failed
            RetrievalError: Any other index or search failure
            GenerationError: Prompting or the model call failed
        """
        if not question or not question.strip():
            raise ValidationError("Question cannot be empty", field="content")

        key = self._cache.build_key(document_id, question, history_length)
        cached = self._cache.lookup(key)
        if cached is not None:
            logger.info(f"{__name__}:answer - Cache hit for {document_id}")
            return cached

        task = asyncio.create_task(self._compute(key), name=f"rag-answer:{document_id}")
        self._running.add(task)
        task.add_done_callback(self._on_done)
        return await asyncio.shield(task)

    def _on_done(self, task: asyncio.Task[RAGAnswer]) -> None:
        self._running.discard(task)
        if not task.cancelled() and task.exception() is not None:
            logger.debug(f"Answer task {task.get_name()} failed: {task.exception()}")

    async def _compute(self, key: CacheKey) -> RAGAnswer:
        document_id = key.document_id

        try:
            index = await self._registry.get_or_build(document_id)
            query_vector = await self._embedder.embed_query(key.question)
            hits = index.search(query_vector, self._top_k)
        except PdfChatException:
            raise
        except Exception as e:
            raise RetrievalError(f"Retrieval failed: {e}", document_id) from e

        logger.info(
            f"{__name__}:answer - Retrieved {len(hits)} chunks",
            extra={"document_id": document_id, "pages": [hit.chunk.page_number for hit in hits]},
        )

        try:
            answer_text = await self._chain.ainvoke({
                "context": build_context(hits),
                "question": key.question,
            })
        except PdfChatException:
            raise
        except Exception as e:
            raise GenerationError(f"Answer generation failed: {e}", document_id) from e

        result = RAGAnswer(
            answer=answer_text,
            source_pages=sorted({hit.chunk.page_number for hit in hits}),
            sources=[self._to_excerpt(hit) for hit in hits],
        )
        self._cache.store(key, result)
        return result

    def _to_excerpt(self, hit: RetrievedChunk) -> SourceExcerpt:
        text = hit.chunk.text
        if len(text) > self._excerpt_length:
            text = text[: self._excerpt_length] + ELLIPSIS
        return SourceExcerpt(page=hit.chunk.page_number, excerpt=text)
