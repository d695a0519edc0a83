"""Data models for chunks."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import StrEnum


class DocumentType(StrEnum):
    """Kind of case section a chunk was cut from."""

    DECISION = "Decision"
    OPINION = "Opinion"


@dataclass(frozen=True)
class ChunkMetadata:
    """Provenance carried by each chunk — stored alongside embeddings."""

    case_id: str
    case_title: str = ""
    document_type: str = DocumentType.DECISION
    document_title: str = ""
    date: str | None = None
    chunk_index: int = 0
    total_chunks: int = 0


@dataclass(frozen=True)
class Chunk:
    """A single retrievable piece of a case document."""

    id: str
    content: str
    metadata: ChunkMetadata
    embedding: list[float] | None = None

    def with_embedding(self, embedding: list[float]) -> Chunk:
        """Return a copy of this chunk carrying ``embedding``."""
        return replace(self, embedding=embedding)


@dataclass(frozen=True)
class ChunkingStats:
    """Length and type distribution of a chunk set."""

    total_chunks: int = 0
    avg_chunk_length: int = 0
    min_chunk_length: int = 0
    max_chunk_length: int = 0
    chunks_by_type: dict[str, int] = field(default_factory=dict)
