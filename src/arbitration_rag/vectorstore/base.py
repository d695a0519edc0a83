"""Abstract base class for vector stores."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence

from arbitration_rag.chunking.schemas import Chunk
from arbitration_rag.vectorstore.schemas import MetadataFilter, SearchResult, StoreStats


class VectorStore(ABC):
    """Interface for chunk stores with similarity and metadata search.

    Operations on an empty store return empty results rather than raising.
    """

    @abstractmethod
    def add_chunks(self, chunks: Sequence[Chunk]) -> int:
        """Insert chunks, embedding those that do not carry a vector yet.

        Returns:
            Number of chunks added.
        """

    @abstractmethod
    def search(self, query: str, top_k: int = 5) -> list[SearchResult]:
        """Return up to ``top_k`` chunks most similar to ``query``.

        Results are sorted by descending score.
        """

    @abstractmethod
    def search_by_metadata(
        self,
        filters: MetadataFilter | None = None,
        top_k: int = 10,
    ) -> list[Chunk]:
        """Return up to ``top_k`` chunks matching ``filters``, in storage order."""

    @abstractmethod
    def get_chunk_by_id(self, chunk_id: str) -> Chunk | None:
        """Look up a chunk by id."""

    @abstractmethod
    def get_chunks_by_case(self, case_id: str) -> list[Chunk]:
        """Return every stored chunk of a case."""

    @abstractmethod
    def stats(self) -> StoreStats:
        """Summarise the store's contents."""

    @abstractmethod
    def count(self) -> int:
        """Return the number of chunks in the store."""

    @abstractmethod
    def clear(self) -> None:
        """Delete all chunks."""

    @classmethod
    def store_name(cls) -> str:
        """Return human-readable store name."""
        return cls.__name__
