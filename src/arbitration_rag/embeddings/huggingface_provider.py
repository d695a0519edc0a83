"""sentence-transformers embedding provider.

Runs a local model; requires the ``huggingface`` extra. The vector size is
fixed by the chosen model, so ``dimension`` is not a constructor argument.
"""

from __future__ import annotations

import logging
from typing import Any

from arbitration_rag.embeddings.base import EmbeddingProvider

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "all-MiniLM-L6-v2"


class HuggingFaceEmbeddingProvider(EmbeddingProvider):
    """Embed text locally using sentence-transformers."""

    def __init__(
        self,
        model: str = DEFAULT_MODEL,
        device: str | None = None,
        batch_size: int = 32,
    ):
        try:
            from sentence_transformers import SentenceTransformer
        except ImportError as exc:
            raise ImportError(
                "sentence-transformers required: pip install arbitration-rag[huggingface]"
            ) from exc

        self.model = model
        self.batch_size = batch_size
        self._encoder: Any = SentenceTransformer(model, device=device)
        self._dim: int = self._encoder.get_sentence_embedding_dimension()
        logger.info("Loaded sentence-transformers model %s (dim=%d)", model, self._dim)

    @property
    def dimension(self) -> int:
        return self._dim

    def embed_texts(self, texts: list[str]) -> list[list[float]]:
        if not texts:
            return []
        matrix = self._encoder.encode(
            texts,
            batch_size=self.batch_size,
            normalize_embeddings=True,
            show_progress_bar=False,
        )
        return matrix.tolist()
