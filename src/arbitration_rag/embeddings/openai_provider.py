"""OpenAI embedding provider — text-embedding-3 family.

Requires the ``openai`` extra; the key is read from ``OPENAI_API_KEY``
unless passed explicitly. The v3 models can shorten their output, so a
``dimension`` below the model's native size is requested from the API.
"""

from __future__ import annotations

import logging
from typing import Any

from arbitration_rag.embeddings.base import EmbeddingProvider

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "text-embedding-3-small"

NATIVE_DIMENSIONS = {
    "text-embedding-3-small": 1536,
    "text-embedding-3-large": 3072,
    "text-embedding-ada-002": 1536,
}

# Upper bound on inputs per embeddings request
MAX_BATCH = 2048


class OpenAIEmbeddingProvider(EmbeddingProvider):
    """Embed text via the OpenAI Embeddings API."""

    def __init__(
        self,
        model: str = DEFAULT_MODEL,
        api_key: str | None = None,
        dimension: int | None = None,
        timeout: float = 60.0,
    ):
        try:
            import openai
        except ImportError as exc:
            raise ImportError(
                "openai package required: pip install arbitration-rag[openai]"
            ) from exc

        self.model = model
        native = NATIVE_DIMENSIONS.get(model, 1536)
        self._dimension = dimension or native
        # Only send `dimensions` when shortening; ada-002 rejects the argument
        self._shorten = self._dimension != native
        self._client: Any = openai.OpenAI(api_key=api_key, timeout=timeout)

    @property
    def dimension(self) -> int:
        return self._dimension

    def embed_texts(self, texts: list[str]) -> list[list[float]]:
        vectors: list[list[float]] = []
        for start in range(0, len(texts), MAX_BATCH):
            batch = texts[start : start + MAX_BATCH]
            request: dict[str, Any] = {"model": self.model, "input": batch}
            if self._shorten:
                request["dimensions"] = self._dimension
            response = self._client.embeddings.create(**request)
            vectors.extend(item.embedding for item in sorted(response.data, key=lambda d: d.index))
        logger.debug("Embedded %d texts with %s", len(texts), self.model)
        return vectors
