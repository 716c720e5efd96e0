"""
Embedding generation task over a LangChain Embeddings model.

Generates vectors for chunks at ingestion/rebuild time and for questions at
query time. Both paths must go through the same model so vectors are comparable.

Dependencies: langchain_core.embeddings
System role: Third stage of document ingestion pipeline, query encoder for retrieval
"""

import logging

from langchain_core.embeddings import Embeddings

from pdfchat.core.exceptions import EmbeddingError

from ..models import DocumentChunk, EmbeddedChunk

logger = logging.getLogger(__name__)


def _normalize_text(text: str) -> str:
    """Replace newlines with spaces before embedding."""
    return text.replace("\r\n", " ").replace("\n", " ")


class EmbeddingTask:
    """Generate embeddings through an injected LangChain Embeddings model."""

    def __init__(self, embeddings: Embeddings, batch_size: int = 100) -> None:
        """
        Initialize embedding task.

        Args:
            embeddings: LangChain embeddings model
            batch_size: Number of texts per embedding request

        Raises:
            ValueError: When batch_size is not positive
        """
        if batch_size < 1:
            raise ValueError("batch_size must be at least 1")

        self._embeddings = embeddings
        self._batch_size = batch_size

    async def embed_texts(self, texts: list[str], source_id: str | None = None) -> list[list[float]]:
        """
        Embed texts in batches.

        Args:
            texts: Texts to embed
            source_id: Optional document identifier for error context

        Returns:
            list[list[float]]: One vector per text, in input order

        Raises:
            EmbeddingError: Upstream failure, missing vectors, or inconsistent dimensions
        """
        if not texts:
            return []

        vectors: list[list[float]] = []
        for start in range(0, len(texts), self._batch_size):
            batch = [_normalize_text(text) for text in texts[start : start + self._batch_size]]
            try:
                batch_vectors = await self._embeddings.aembed_documents(batch)
            except Exception as e:
                raise EmbeddingError(
                    f"Failed to generate embeddings: {e}",
                    source_id,
                    details={"batch_start": start, "batch_size": len(batch)},
                ) from e

            if len(batch_vectors) != len(batch):
                raise EmbeddingError(
                    "Embedding model returned an unexpected number of vectors",
                    source_id,
                    details={"expected": len(batch), "received": len(batch_vectors)},
                )
            vectors.extend(list(vector) for vector in batch_vectors)

        self._check_dimensions(vectors, source_id)
        logger.debug(f"Embedded {len(vectors)} texts")
        return vectors

    async def embed_chunks(self, chunks: list[DocumentChunk]) -> list[EmbeddedChunk]:
        """
        Embed document chunks.

        A single failed chunk fails the whole call.

        Args:
            chunks: Chunks to embed

        Returns:
            list[EmbeddedChunk]: Chunks paired with their vectors, in input order

        Raises:
            EmbeddingError: When any chunk cannot be embedded
        """
        source_id = chunks[0].source_id if chunks else None
        vectors = await self.embed_texts([chunk.text for chunk in chunks], source_id)
        return [
            EmbeddedChunk(chunk=chunk, vector=vector)
            for chunk, vector in zip(chunks, vectors)
        ]

    async def embed_query(self, question: str) -> list[float]:
        """
        Embed a question.

        Raises:
            EmbeddingError: When the model fails or returns an empty vector
        """
        try:
            vector = await self._embeddings.aembed_query(_normalize_text(question))
        except Exception as e:
            raise EmbeddingError(f"Failed to embed question: {e}") from e

        if not vector:
            raise EmbeddingError("Embedding model returned an empty query vector")
        return list(vector)

    @staticmethod
    def _check_dimensions(vectors: list[list[float]], source_id: str | None) -> None:
        dimensions = {len(vector) for vector in vectors}
        if 0 in dimensions or len(dimensions) > 1:
            raise EmbeddingError(
                "Embedding vectors have inconsistent dimensions",
                source_id,
                details={"dimensions": sorted(dimensions)},
            )
