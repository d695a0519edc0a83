"""Ollama embedding provider — local model server, no API keys needed.

Models such as ``nomic-embed-text`` are trained with task prefixes; pass
``query_prefix="search_query: "`` and ``document_prefix="search_document: "``
to use them.
"""

from __future__ import annotations

import logging

import httpx

from arbitration_rag.embeddings.base import EmbeddingProvider

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "nomic-embed-text"
DEFAULT_BASE_URL = "http://localhost:11434"
DEFAULT_DIM = 768


class OllamaEmbeddingProvider(EmbeddingProvider):
    """Embed text via a local Ollama server."""

    def __init__(
        self,
        model: str = DEFAULT_MODEL,
        base_url: str = DEFAULT_BASE_URL,
        dimension: int = DEFAULT_DIM,
        timeout: float = 60.0,
        query_prefix: str = "",
        document_prefix: str = "",
    ):
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.query_prefix = query_prefix
        self.document_prefix = document_prefix
        self._dimension = dimension
        self._client = httpx.Client(base_url=self.base_url, timeout=timeout)
        self._batch_supported = True

    @property
    def dimension(self) -> int:
        return self._dimension

    def embed_texts(self, texts: list[str]) -> list[list[float]]:
        if not texts:
            return []
        return self._embed([self.document_prefix + t for t in texts])

    def embed_query(self, query: str) -> list[float]:
        return self._embed([self.query_prefix + query])[0]

    def _embed(self, inputs: list[str]) -> list[list[float]]:
        # /api/embed takes a list; servers before 0.3 only have /api/embeddings
        if self._batch_supported:
            resp = self._client.post("/api/embed", json={"model": self.model, "input": inputs})
            if resp.status_code != 404:
                resp.raise_for_status()
                return resp.json()["embeddings"]
            logger.info("Ollama at %s has no /api/embed; using /api/embeddings", self.base_url)
            self._batch_supported = False

        vectors = []
        for text in inputs:
            resp = self._client.post("/api/embeddings", json={"model": self.model, "prompt": text})
            resp.raise_for_status()
            vectors.append(resp.json()["embedding"])
        return vectors
