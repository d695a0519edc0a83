"""Embedding service — the embed / similarity contract used by the store.

Wraps any ``EmbeddingProvider`` and adds what the rest of the pipeline
relies on: a fixed output dimension, zero-vector substitution for failed
items, cosine similarity, and brute-force top-k ranking over chunks.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

import numpy as np

from arbitration_rag.chunking.schemas import Chunk
from arbitration_rag.embeddings.base import EmbeddingProvider
from arbitration_rag.vectorstore.schemas import SearchResult

logger = logging.getLogger(__name__)


class EmbeddingService:
    """Embed text with a provider and score vectors by cosine similarity."""

    def __init__(self, provider: EmbeddingProvider):
        self.provider = provider

    @property
    def dimension(self) -> int:
        return self.provider.dimension

    # ------------------------------------------------------------------
    # Embedding
    # ------------------------------------------------------------------

    def embed(self, text: str) -> list[float]:
        """Embed a single string.

        Raises:
            ValueError: If the provider returns a vector of the wrong size.
        """
        vector = list(self.provider.embed_query(text))
        self._check_dimension(vector)
        return vector

    def embed_many(self, texts: Sequence[str]) -> list[list[float]]:
        """Embed a batch, substituting a zero vector for any failed item.

        The provider's batch call is tried first. If it raises or returns the
        wrong number of vectors, each text is embedded on its own.
        """
        texts = list(texts)
        if not texts:
            return []

        try:
            vectors = self.provider.embed_texts(texts)
        except Exception as exc:
            logger.warning(
                "Batch embedding of %d texts failed (%s); embedding one at a time",
                len(texts), exc,
            )
            vectors = None

        if vectors is not None and len(vectors) != len(texts):
            logger.warning(
                "Provider returned %d vectors for %d texts; embedding one at a time",
                len(vectors), len(texts),
            )
            vectors = None

        if vectors is None:
            return [self._embed_or_zero(t) for t in texts]

        results: list[list[float]] = []
        for text, vector in zip(texts, vectors, strict=True):
            vector = list(vector)
            if len(vector) != self.dimension:
                logger.warning(
                    "Embedding for %r has dimension %d, expected %d; using zero vector",
                    text[:100], len(vector), self.dimension,
                )
                vector = self._zero_vector()
            results.append(vector)
        return results

    def embed_chunks(self, chunks: Sequence[Chunk]) -> list[Chunk]:
        """Return copies of ``chunks`` with embeddings attached."""
        embeddings = self.embed_many([c.content for c in chunks])
        return [
            chunk.with_embedding(emb)
            for chunk, emb in zip(chunks, embeddings, strict=True)
        ]

    # ------------------------------------------------------------------
    # Similarity
    # ------------------------------------------------------------------

    @staticmethod
    def similarity(vec_a: Sequence[float], vec_b: Sequence[float]) -> float:
        """Cosine similarity of two vectors.

        Returns 0.0 when either vector has zero magnitude.

        Raises:
            ValueError: If the vectors differ in length.
        """
        if len(vec_a) != len(vec_b):
            raise ValueError(
                f"Vectors must have the same length ({len(vec_a)} != {len(vec_b)})"
            )

        a = np.asarray(vec_a, dtype=np.float64)
        b = np.asarray(vec_b, dtype=np.float64)
        norm_a = np.linalg.norm(a)
        norm_b = np.linalg.norm(b)
        if norm_a == 0 or norm_b == 0:
            return 0.0

        score = float(np.dot(a, b) / (norm_a * norm_b))
        return max(-1.0, min(1.0, score))

    def find_similar(
        self,
        query: str,
        chunks: Sequence[Chunk],
        top_k: int = 5,
    ) -> list[SearchResult]:
        """Rank embedded chunks by cosine similarity to ``query``.

        Chunks without an embedding are skipped. Ties keep input order.

        Args:
            query: The search text.
            chunks: Candidate chunks.
            top_k: Maximum number of results; ``<= 0`` returns nothing.

        Returns:
            ``SearchResult`` list sorted by descending score.
        """
        if top_k <= 0:
            return []

        candidates = [c for c in chunks if c.embedding is not None]
        if not candidates:
            return []

        query_vec = np.asarray(self.embed(query), dtype=np.float64)
        matrix = np.asarray([c.embedding for c in candidates], dtype=np.float64)
        if matrix.shape[1] != query_vec.shape[0]:
            raise ValueError(
                f"Stored embeddings have dimension {matrix.shape[1]}, "
                f"query has {query_vec.shape[0]}"
            )

        query_norm = np.linalg.norm(query_vec)
        row_norms = np.linalg.norm(matrix, axis=1)
        denom = row_norms * query_norm
        dots = matrix @ query_vec
        scores = np.divide(dots, denom, out=np.zeros_like(dots), where=denom > 0)
        np.clip(scores, -1.0, 1.0, out=scores)

        order = np.argsort(-scores, kind="stable")[:top_k]
        return [
            SearchResult(chunk=candidates[i], score=float(scores[i]))
            for i in order
        ]

    # ------------------------------------------------------------------
    # Private
    # ------------------------------------------------------------------

    def _zero_vector(self) -> list[float]:
        return [0.0] * self.dimension

    def _embed_or_zero(self, text: str) -> list[float]:
        try:
            return self.embed(text)
        except Exception as exc:
            logger.warning(
                "Error embedding text %r (%s); using zero vector", text[:100], exc,
            )
            return self._zero_vector()

    def _check_dimension(self, vector: Sequence[float]) -> None:
        if len(vector) != self.dimension:
            raise ValueError(
                f"Embedding has dimension {len(vector)}, expected {self.dimension}"
            )
