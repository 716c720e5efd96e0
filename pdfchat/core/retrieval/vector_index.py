"""
In-memory vector index for a single document.

Stores the chunk vectors of one document as a row-normalized matrix and
answers top-k cosine similarity queries.

Dependencies: numpy
System role: Per-document similarity search
"""

import numpy as np

from pdfchat.core.document_processing.models import DocumentChunk, EmbeddedChunk
from pdfchat.core.exceptions import EmbeddingError

from .retrieval_schemas import RetrievedChunk


def _normalize_rows(matrix: np.ndarray) -> np.ndarray:
    norms = np.linalg.norm(matrix, axis=1, keepdims=True)
    norms[norms == 0] = 1.0
    return matrix / norms


class VectorIndex:
    """
    Immutable set of embedded chunks belonging to exactly one document.

    An index is only handed out once fully built, so readers never observe a
    partially populated index.
    """

    def __init__(self, document_id: str, chunks: list[DocumentChunk], vectors: list[list[float]]) -> None:
        """
        Build the index.

        Args:
            document_id: Stored filename of the document
            chunks: Chunks in document order
            vectors: One vector per chunk, all of the same length

        Raises:
            ValueError: No chunks, or chunk and vector counts differ
            EmbeddingError: Vectors have inconsistent dimensions
        """
        if not chunks:
            raise ValueError(f"Cannot build an empty index for {document_id}")
        if len(chunks) != len(vectors):
            raise ValueError(
                f"Chunk/vector count mismatch for {document_id}: "
                f"{len(chunks)} chunks, {len(vectors)} vectors"
            )
        if len({len(vector) for vector in vectors}) != 1:
            raise EmbeddingError(
                "Embedding vectors have inconsistent dimensions",
                document_id,
            )

        self._document_id = document_id
        self._chunks = tuple(chunks)
        self._matrix = _normalize_rows(np.asarray(vectors, dtype=np.float32))
        self._matrix.setflags(write=False)

    @classmethod
    def from_embedded(cls, document_id: str, embedded: list[EmbeddedChunk]) -> "VectorIndex":
        """Build an index from embedded chunks."""
        return cls(
            document_id,
            [item.chunk for item in embedded],
            [item.vector for item in embedded],
        )

    @property
    def document_id(self) -> str:
        return self._document_id

    @property
    def dimension(self) -> int:
        return int(self._matrix.shape[1])

    @property
    def chunks(self) -> tuple[DocumentChunk, ...]:
        return self._chunks

    def __len__(self) -> int:
        return len(self._chunks)

    def search(self, query_vector: list[float], k: int) -> list[RetrievedChunk]:
        """
        Return the k chunks most similar to the query vector.

        Results are ordered by descending cosine similarity. Equal scores keep
        the original chunk order. Fewer than k results are returned when the
        index holds fewer chunks.

        Args:
            query_vector: Question embedding
            k: Number of chunks to return

        Returns:
            list[RetrievedChunk]: Ranked chunks

        Raises:
            ValueError: When k is not positive
            EmbeddingError: When the query dimension differs from the index
        """
        if k < 1:
            raise ValueError("k must be at least 1")

        query = np.asarray(query_vector, dtype=np.float32)
        if query.ndim != 1 or query.shape[0] != self.dimension:
            raise EmbeddingError(
                "Query vector dimension does not match the index",
                self._document_id,
                details={"expected": self.dimension, "received": int(query.size)},
            )

        norm = np.linalg.norm(query)
        if norm > 0:
            query = query / norm

        scores = self._matrix @ query
        order = np.argsort(-scores, kind="stable")[:k]
        return [
            RetrievedChunk(chunk=self._chunks[i], score=float(scores[i]), rank=rank)
            for rank, i in enumerate(order)
        ]
