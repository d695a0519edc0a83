"""Prompt templates for grounded answers over arbitration case passages."""

from __future__ import annotations

from collections.abc import Sequence

from arbitration_rag.vectorstore.schemas import SearchResult

# ---------------------------------------------------------------------------
# System prompt
# ---------------------------------------------------------------------------

RAG_SYSTEM_PROMPT = """\
You are a legal research assistant specialising in international arbitration. \
Answer questions using ONLY the numbered case passages supplied as context. \
If the passages do not contain enough information to answer, say so \
explicitly instead of drawing on outside knowledge.

Rules:
1. Cite the passages you rely on as [1], [2], etc., matching the source numbers.
2. Name the case and the decision or opinion when you rely on a passage.
3. Distinguish what a tribunal held from what a party argued.
4. Be concise but thorough, and use legal terminology accurately.
"""

RAG_QUERY_TEMPLATE = """\
Context:
{context}

User Question: {question}

Answer based only on the context above, citing sources as [1], [2], etc. \
If the context is insufficient, say so.

Answer:"""

UNKNOWN_DATE = "Unknown"


def format_source(index: int, result: SearchResult) -> str:
    """Render one ranked search result as a numbered context block."""
    meta = result.chunk.metadata
    return (
        f"Source {index} (Score: {result.score:.3f}):\n"
        f"Case: {meta.case_title}\n"
        f"Document: {meta.document_type} - {meta.document_title}\n"
        f"Date: {meta.date or UNKNOWN_DATE}\n"
        f"Content: {result.chunk.content}\n"
        "\n---"
    )


def format_context(results: Sequence[SearchResult]) -> str:
    """Concatenate ranked results into the context block, best first."""
    return "\n".join(format_source(i, r) for i, r in enumerate(results, 1))


def build_rag_prompt(question: str, results: Sequence[SearchResult]) -> str:
    """Build the full generation prompt for ``question``."""
    return RAG_QUERY_TEMPLATE.format(context=format_context(results), question=question)
