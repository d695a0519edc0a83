"""Data models for vector store operations."""

from __future__ import annotations

from dataclasses import dataclass, field

from arbitration_rag.chunking.schemas import Chunk, ChunkMetadata


@dataclass(frozen=True)
class SearchResult:
    """A single similarity hit: the stored chunk and its cosine score."""

    chunk: Chunk
    score: float


@dataclass
class MetadataFilter:
    """Filter chunks by metadata fields.

    All specified fields must match (AND logic). Unset fields match anything.
    """

    case_id: str | None = None
    document_type: str | None = None
    date: str | None = None

    def matches(self, meta: ChunkMetadata) -> bool:
        """Check if a chunk's metadata matches this filter."""
        if self.case_id and meta.case_id != self.case_id:
            return False
        if self.document_type and meta.document_type != self.document_type:
            return False
        return not (self.date and meta.date != self.date)


@dataclass(frozen=True)
class StoreStats:
    """Snapshot of vector store contents."""

    total_chunks: int = 0
    chunks_with_embeddings: int = 0
    unique_cases: int = 0
    chunks_by_type: dict[str, int] = field(default_factory=dict)
