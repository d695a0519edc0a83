"""Retrieval service — indexing lifecycle, prompts, citations."""

from arbitration_rag.pipeline.schemas import AnswerStatus, Citation, IngestResult, RAGResponse
from arbitration_rag.pipeline.service import NotInitializedError, RetrievalService

__all__ = [
    "AnswerStatus",
    "Citation",
    "IngestResult",
    "NotInitializedError",
    "RAGResponse",
    "RetrievalService",
]
