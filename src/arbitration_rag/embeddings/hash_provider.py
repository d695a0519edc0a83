"""Deterministic offline embedding provider — signed feature hashing.

Each lowercase word token is hashed to a bucket and a sign; the counts are
accumulated into a fixed-size vector and L2-normalised. Texts that share
vocabulary get a higher cosine similarity, which is enough to exercise the
retrieval pipeline without a model server. Identical input always yields an
identical vector, across processes.
"""

from __future__ import annotations

import hashlib
import re

import numpy as np

from arbitration_rag.embeddings.base import EmbeddingProvider

DEFAULT_DIM = 1536

_TOKEN_RE = re.compile(r"\w+", re.UNICODE)


class HashEmbeddingProvider(EmbeddingProvider):
    """Bag-of-words vectors via the hashing trick. No network, no model."""

    def __init__(self, dimension: int = DEFAULT_DIM, model: str | None = None):
        if dimension <= 0:
            raise ValueError(f"dimension must be positive, got {dimension}")
        self._dim = dimension
        # Accepted for settings compatibility; there is no model to load.
        self.model = model or "feature-hash"

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def embed_texts(self, texts: list[str]) -> list[list[float]]:
        return [self._hash_embed(t) for t in texts]

    def embed_query(self, query: str) -> list[float]:
        return self._hash_embed(query)

    @property
    def dimension(self) -> int:
        return self._dim

    # ------------------------------------------------------------------
    # Private
    # ------------------------------------------------------------------

    def _hash_embed(self, text: str) -> list[float]:
        vec = np.zeros(self._dim, dtype=np.float64)
        for token in _TOKEN_RE.findall(text.lower()):
            digest = hashlib.blake2b(token.encode("utf-8"), digest_size=8).digest()
            value = int.from_bytes(digest, "little")
            bucket = value % self._dim
            sign = 1.0 if (value >> 63) & 1 else -1.0
            vec[bucket] += sign

        norm = np.linalg.norm(vec)
        if norm > 0:
            vec /= norm
        return vec.tolist()
