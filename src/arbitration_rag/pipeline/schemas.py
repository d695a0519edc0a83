"""Data models for the retrieval service."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

from arbitration_rag.vectorstore.schemas import SearchResult


class AnswerStatus(StrEnum):
    """How a query was resolved."""

    ANSWERED = "answered"
    NO_RELEVANT_SOURCES = "no_relevant_sources"
    GENERATION_FAILED = "generation_failed"


@dataclass
class Citation:
    """A ranked source referenced by a generated answer."""

    index: int
    chunk_id: str
    case_id: str
    case_title: str
    text: str
    document_title: str = ""
    score: float = 0.0


@dataclass
class RAGResponse:
    """Answer plus the ranked sources it was grounded on."""

    query: str
    answer: str
    sources: list[SearchResult] = field(default_factory=list)
    status: AnswerStatus = AnswerStatus.ANSWERED
    citations: list[Citation] = field(default_factory=list)
    model: str = ""


@dataclass
class IngestResult:
    """Result of populating the store from the corpus."""

    cases_loaded: int = 0
    files_skipped: list[str] = field(default_factory=list)
    chunks_created: int = 0
    chunks_stored: int = 0
