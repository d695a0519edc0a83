"""Case corpus loader — one JSON file per arbitration case.

A corpus directory is read file by file. Files that cannot be decoded or
do not match the case schema are logged and skipped so that a single bad
record never blocks the rest of the corpus.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from pathlib import Path

from pydantic import ValidationError

from arbitration_rag.corpus.schemas import CaseDocument, CorpusStats, LoadResult

logger = logging.getLogger(__name__)

DEFAULT_DATA_PATH = "data/cases"


class CaseLoader:
    """Load ``CaseDocument`` records from a directory of JSON files."""

    def __init__(self, data_path: str | Path = DEFAULT_DATA_PATH):
        self.data_path = Path(data_path)

    def load_all(self) -> LoadResult:
        """Load every ``*.json`` case file in the data directory.

        Raises:
            FileNotFoundError: If the data directory does not exist.
        """
        if not self.data_path.is_dir():
            raise FileNotFoundError(f"Case directory not found: {self.data_path}")

        files = sorted(self.data_path.glob("*.json"))
        logger.info("Found %d case files in %s", len(files), self.data_path)

        result = LoadResult()
        for path in files:
            case = self._load_path(path)
            if case is None:
                result.skipped.append(path.name)
            else:
                result.cases.append(case)

        logger.info(
            "Loaded %d cases (%d skipped)", len(result.cases), len(result.skipped),
        )
        return result

    def load_case(self, case_id: str) -> CaseDocument | None:
        """Load a single case by identifier, or ``None`` if unavailable."""
        return self._load_path(self.data_path / f"{case_id}.json")

    @staticmethod
    def data_stats(cases: Sequence[CaseDocument]) -> CorpusStats:
        decisions = 0
        opinions = 0
        content_length = 0

        for case in cases:
            decisions += len(case.decisions)
            opinions += len(case.opinions)
            content_length += sum(len(o.content) for o in case.opinions)
            for decision in case.decisions:
                opinions += len(decision.opinions)
                content_length += len(decision.content)
                content_length += sum(len(o.content) for o in decision.opinions)

        return CorpusStats(
            total_cases=len(cases),
            total_decisions=decisions,
            total_opinions=opinions,
            total_content_length=content_length,
        )

    # ------------------------------------------------------------------
    # Private
    # ------------------------------------------------------------------

    @staticmethod
    def _load_path(path: Path) -> CaseDocument | None:
        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            logger.error("Error loading case file %s: %s", path.name, exc)
            return None

        try:
            return CaseDocument.model_validate(raw)
        except ValidationError as exc:
            logger.error(
                "Case file %s does not match the case schema (%d errors)",
                path.name, exc.error_count(),
            )
            return None
