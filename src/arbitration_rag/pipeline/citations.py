"""Citation extraction and source mapping.

Parses [1], [2,3], [1-3] and "Source 2" references from generated answers
and maps them back to the ranked search results given as context.
"""

from __future__ import annotations

import re
from collections.abc import Sequence

from arbitration_rag.pipeline.schemas import Citation
from arbitration_rag.vectorstore.schemas import SearchResult

# Matches [1], [2], [3,4], [1-3], etc.
_BRACKET_RE = re.compile(r"\[(\d+(?:\s*[,\-]\s*\d+)*)\]")
_SOURCE_RE = re.compile(r"\bSources?\s+(\d+)", re.IGNORECASE)

SNIPPET_LENGTH = 200


def _cited_numbers(answer: str, limit: int) -> set[int]:
    numbers: set[int] = set()
    for match in _BRACKET_RE.finditer(answer):
        for part in match.group(1).split(","):
            part = part.strip()
            if "-" in part:
                start, end = (int(p) for p in part.split("-", 1))
                numbers.update(range(start, min(end, limit) + 1))
            else:
                numbers.add(int(part))
    for match in _SOURCE_RE.finditer(answer):
        numbers.add(int(match.group(1)))
    return numbers


def extract_citations(
    answer: str,
    search_results: Sequence[SearchResult],
) -> list[Citation]:
    """Map citation numbers in ``answer`` to the 1-indexed ``search_results``.

    Numbers outside the result range are ignored.
    """
    citations: list[Citation] = []
    for idx in sorted(_cited_numbers(answer, len(search_results))):
        if not 1 <= idx <= len(search_results):
            continue
        result = search_results[idx - 1]
        chunk = result.chunk
        content = chunk.content
        snippet = content[:SNIPPET_LENGTH] + "..." if len(content) > SNIPPET_LENGTH else content
        citations.append(Citation(
            index=idx,
            chunk_id=chunk.id,
            case_id=chunk.metadata.case_id,
            case_title=chunk.metadata.case_title,
            document_title=chunk.metadata.document_title,
            text=snippet,
            score=result.score,
        ))
    return citations


def format_citations(citations: Sequence[Citation]) -> str:
    """Format citations as a markdown source list."""
    if not citations:
        return ""

    lines = ["\n---\n**Sources:**"]
    for c in citations:
        parts = [f"[{c.index}]", c.case_title or c.case_id]
        if c.document_title:
            parts.append(c.document_title)
        lines.append(f"- {' | '.join(parts)}")
    return "\n".join(lines)
