"""Arbitration case corpus — record models and directory loader."""

from arbitration_rag.corpus.loader import CaseLoader
from arbitration_rag.corpus.schemas import (
    CaseDocument,
    CorpusStats,
    Decision,
    LoadResult,
    Opinion,
)

__all__ = [
    "CaseDocument",
    "CaseLoader",
    "CorpusStats",
    "Decision",
    "LoadResult",
    "Opinion",
]
