"""In-memory vector store — exact linear-scan search over a chunk list.

Sized for a bounded case corpus held in one process. Chunks are appended
under a lock only once a whole batch has been embedded, and searches run on
a snapshot of the list, so readers never observe a half-populated batch.
"""

from __future__ import annotations

import logging
import threading
from collections import Counter
from collections.abc import Sequence
from typing import TYPE_CHECKING

from arbitration_rag.chunking.schemas import Chunk
from arbitration_rag.vectorstore.base import VectorStore
from arbitration_rag.vectorstore.schemas import MetadataFilter, SearchResult, StoreStats

if TYPE_CHECKING:
    from arbitration_rag.embeddings.service import EmbeddingService

logger = logging.getLogger(__name__)


class InMemoryVectorStore(VectorStore):
    """List-backed vector store with cosine search and metadata filtering."""

    def __init__(self, embedding_service: EmbeddingService):
        self._embeddings = embedding_service
        self._dimension = embedding_service.dimension
        self._chunks: list[Chunk] = []
        self._by_id: dict[str, Chunk] = {}
        self._lock = threading.Lock()

    @property
    def dimension(self) -> int:
        return self._dimension

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def add_chunks(self, chunks: Sequence[Chunk]) -> int:
        if not chunks:
            return 0

        logger.info("Adding %d chunks to vector store", len(chunks))

        to_embed: list[int] = []
        for i, chunk in enumerate(chunks):
            if chunk.embedding is None:
                to_embed.append(i)
            elif len(chunk.embedding) != self._dimension:
                logger.warning(
                    "Chunk %s has a %d-dim embedding, store expects %d; re-embedding",
                    chunk.id, len(chunk.embedding), self._dimension,
                )
                to_embed.append(i)

        ready = list(chunks)
        if to_embed:
            embedded = self._embeddings.embed_chunks([chunks[i] for i in to_embed])
            for i, chunk in zip(to_embed, embedded, strict=True):
                ready[i] = chunk

        with self._lock:
            self._chunks = self._chunks + ready
            for chunk in ready:
                self._by_id.setdefault(chunk.id, chunk)
            total = len(self._chunks)

        logger.info(
            "Vector store now contains %d chunks (%d embedded in this batch)",
            total, len(to_embed),
        )
        return len(ready)

    def search(self, query: str, top_k: int = 5) -> list[SearchResult]:
        chunks = self._chunks
        if not chunks:
            return []
        return self._embeddings.find_similar(query, chunks, top_k)

    def search_by_metadata(
        self,
        filters: MetadataFilter | None = None,
        top_k: int = 10,
    ) -> list[Chunk]:
        if top_k <= 0:
            return []
        mf = filters or MetadataFilter()

        matches: list[Chunk] = []
        for chunk in self._chunks:
            if mf.matches(chunk.metadata):
                matches.append(chunk)
                if len(matches) >= top_k:
                    break
        return matches

    def get_chunk_by_id(self, chunk_id: str) -> Chunk | None:
        return self._by_id.get(chunk_id)

    def get_chunks_by_case(self, case_id: str) -> list[Chunk]:
        return [c for c in self._chunks if c.metadata.case_id == case_id]

    def stats(self) -> StoreStats:
        chunks = self._chunks
        return StoreStats(
            total_chunks=len(chunks),
            chunks_with_embeddings=sum(1 for c in chunks if c.embedding is not None),
            unique_cases=len({c.metadata.case_id for c in chunks}),
            chunks_by_type=dict(Counter(str(c.metadata.document_type) for c in chunks)),
        )

    def count(self) -> int:
        return len(self._chunks)

    def clear(self) -> None:
        with self._lock:
            self._chunks = []
            self._by_id = {}
        logger.info("Vector store cleared")
