"""Abstract base class for embedding providers."""

from __future__ import annotations

from abc import ABC, abstractmethod


class EmbeddingProvider(ABC):
    """Turns text into fixed-size vectors.

    Implementations only have to embed. Batch fallbacks, dimension checks
    and similarity scoring live in ``EmbeddingService``.
    """

    model: str = "unknown"

    @abstractmethod
    def embed_texts(self, texts: list[str]) -> list[list[float]]:
        """Embed a batch of passages, returning vectors in input order."""

    def embed_query(self, query: str) -> list[float]:
        """Embed a search query. Override when queries need their own prefix."""
        return self.embed_texts([query])[0]

    @property
    @abstractmethod
    def dimension(self) -> int:
        """Length of every vector this provider returns."""

    @classmethod
    def provider_name(cls) -> str:
        """Return human-readable provider name."""
        return cls.__name__
