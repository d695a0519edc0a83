"""Abstract base class for case chunkers.

Subclasses decide how a section's raw text is split; the base class walks
the case structure, assigns deterministic ids and attaches provenance.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections import Counter
from collections.abc import Iterable, Sequence

from arbitration_rag.chunking.schemas import (
    Chunk,
    ChunkingStats,
    ChunkMetadata,
    DocumentType,
)
from arbitration_rag.corpus.schemas import CaseDocument

logger = logging.getLogger(__name__)


class BaseChunker(ABC):
    """Interface for case document chunking strategies."""

    @abstractmethod
    def split_text(self, text: str) -> list[str]:
        """Split one section's text into trimmed, non-empty pieces.

        Args:
            text: Raw section content.

        Returns:
            Ordered list of chunk texts.
        """

    def chunk(self, document: CaseDocument) -> list[Chunk]:
        """Split every decision and opinion of a case into chunks.

        Sections are visited in document order: each decision's own content,
        then the opinions attached to it. Opinions filed at case level are
        not chunked.
        """
        chunks: list[Chunk] = []

        for d_idx, decision in enumerate(document.decisions):
            chunks.extend(self._chunk_section(
                document,
                decision.content,
                id_prefix=f"{document.identifier}-decision-{d_idx}",
                document_type=DocumentType.DECISION,
                title=decision.title,
                date=decision.date,
            ))
            for o_idx, opinion in enumerate(decision.opinions):
                chunks.extend(self._chunk_section(
                    document,
                    opinion.content,
                    id_prefix=f"{document.identifier}-opinion-{d_idx}-{o_idx}",
                    document_type=DocumentType.OPINION,
                    title=opinion.title,
                    date=opinion.date,
                ))

        return chunks

    def chunk_all(self, documents: Iterable[CaseDocument]) -> list[Chunk]:
        """Chunk several cases, preserving case order."""
        chunks: list[Chunk] = []
        for document in documents:
            chunks.extend(self.chunk(document))
        logger.info("%s produced %d chunks", self.strategy_name(), len(chunks))
        return chunks

    @staticmethod
    def stats(chunks: Sequence[Chunk]) -> ChunkingStats:
        if not chunks:
            return ChunkingStats()

        lengths = [len(c.content) for c in chunks]
        by_type = Counter(str(c.metadata.document_type) for c in chunks)
        return ChunkingStats(
            total_chunks=len(chunks),
            avg_chunk_length=round(sum(lengths) / len(lengths)),
            min_chunk_length=min(lengths),
            max_chunk_length=max(lengths),
            chunks_by_type=dict(by_type),
        )

    @classmethod
    def strategy_name(cls) -> str:
        """Return human-readable strategy name."""
        return cls.__name__

    # ------------------------------------------------------------------
    # Private
    # ------------------------------------------------------------------

    def _chunk_section(
        self,
        document: CaseDocument,
        text: str,
        *,
        id_prefix: str,
        document_type: DocumentType,
        title: str,
        date: str | None,
    ) -> list[Chunk]:
        pieces = self.split_text(text)
        total = len(pieces)
        return [
            Chunk(
                id=f"{id_prefix}-{i}",
                content=piece,
                metadata=ChunkMetadata(
                    case_id=document.identifier,
                    case_title=document.title,
                    document_type=document_type,
                    document_title=title,
                    date=date,
                    chunk_index=i,
                    total_chunks=total,
                ),
            )
            for i, piece in enumerate(pieces)
        ]
