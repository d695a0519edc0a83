"""Sentence-aware chunking of arbitration case documents."""

from arbitration_rag.chunking.base import BaseChunker
from arbitration_rag.chunking.schemas import (
    Chunk,
    ChunkingStats,
    ChunkMetadata,
    DocumentType,
)
from arbitration_rag.chunking.sentence_chunker import SentenceChunker

__all__ = [
    "BaseChunker",
    "Chunk",
    "ChunkMetadata",
    "ChunkingStats",
    "DocumentType",
    "SentenceChunker",
]
