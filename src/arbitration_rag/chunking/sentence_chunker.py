"""Character-window chunker that prefers sentence and paragraph breaks.

A fixed-size window slides over the section text. When the last period or
newline inside the window falls in its final 30%, the chunk is cut there so
that passages end on a sentence; otherwise the full window is kept and the
next one starts ``overlap`` characters before its end.
"""

from __future__ import annotations

import logging

from arbitration_rag.chunking.base import BaseChunker

logger = logging.getLogger(__name__)

CHUNK_SIZE = 500
OVERLAP = 50

# A break point must lie past this fraction of the window to be used
BREAK_THRESHOLD = 0.7


class SentenceChunker(BaseChunker):
    """Chunker for free-text award and opinion sections."""

    def __init__(self, chunk_size: int = CHUNK_SIZE, overlap: int = OVERLAP):
        if chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive, got {chunk_size}")
        if not 0 <= overlap < chunk_size:
            raise ValueError(
                f"overlap must be in [0, chunk_size), got {overlap} for chunk_size {chunk_size}"
            )
        self.chunk_size = chunk_size
        self.overlap = overlap

    def split_text(self, text: str) -> list[str]:
        if len(text) <= self.chunk_size:
            stripped = text.strip()
            return [stripped] if stripped else []

        pieces: list[str] = []
        start = 0
        length = len(text)

        while start < length:
            end = min(start + self.chunk_size, length)
            window = text[start:end]

            if end < length:
                break_point = max(window.rfind("."), window.rfind("\n"))
                if break_point > self.chunk_size * BREAK_THRESHOLD:
                    window = window[: break_point + 1]
                    start += break_point + 1
                else:
                    start = end - self.overlap
            else:
                start = end

            window = window.strip()
            if window:
                pieces.append(window)

        return pieces
