"""Shared fixtures for tests — synthetic case records, no network calls."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from arbitration_rag.corpus.schemas import CaseDocument

# ---------------------------------------------------------------------------
# Synthetic text
# ---------------------------------------------------------------------------


def sentence_text(count: int = 12) -> str:
    """``count`` sentences of exactly 100 characters, each ending in a period."""
    sentences = []
    for i in range(count):
        prefix = f"Paragraph {i:02d} "
        sentences.append(prefix + "a" * (99 - len(prefix)) + ".")
    return "".join(sentences)


@pytest.fixture
def award_text() -> str:
    """A 1200-character decision body with a period every 100 characters."""
    return sentence_text(12)


# ---------------------------------------------------------------------------
# Case records
# ---------------------------------------------------------------------------


def make_case_dict(
    identifier: str = "C1",
    title: str = "Claimant v. Respondent",
    decisions: list[dict[str, Any]] | None = None,
    **extra: Any,
) -> dict[str, Any]:
    record: dict[str, Any] = {
        "Identifier": identifier,
        "Title": title,
        "CaseNumber": f"ARB/{identifier}",
        "Industries": ["Energy"],
        "Status": "Concluded",
        "PartyNationalities": ["Spain", "Netherlands"],
        "Institution": "ICSID",
        "RulesOfArbitration": ["ICSID Arbitration Rules"],
        "ApplicableTreaties": ["Energy Charter Treaty"],
        "Decisions": decisions if decisions is not None else [],
    }
    record.update(extra)
    return record


@pytest.fixture
def expropriation_case_dict() -> dict[str, Any]:
    return make_case_dict(
        identifier="ICSID-ARB-01",
        title="Solar Holdings v. Kingdom of Spain",
        decisions=[
            {
                "Title": "Award",
                "Type": "Award",
                "Date": "2019-05-16",
                "Content": (
                    "The tribunal finds that the respondent breached the fair and "
                    "equitable treatment standard. The regulatory changes to the "
                    "solar feed-in tariff regime frustrated legitimate expectations."
                ),
                "Opinions": [
                    {
                        "Title": "Dissenting Opinion of Arbitrator Smith",
                        "Type": "Dissenting Opinion",
                        "Date": "2019-05-16",
                        "Content": (
                            "I respectfully dissent. A sovereign retains the right to "
                            "regulate and the claimant could not expect the tariff "
                            "regime to remain frozen."
                        ),
                    }
                ],
            },
            {
                "Title": "Decision on Annulment",
                "Type": "Decision on Annulment",
                "Date": None,
                "Content": "The ad hoc committee rejects the application for annulment.",
                "Opinions": [],
            },
        ],
    )


@pytest.fixture
def tribunal_case_dict() -> dict[str, Any]:
    return make_case_dict(
        identifier="PCA-2012-02",
        title="Mining Corp v. Republic of Ecuador",
        decisions=[
            {
                "Title": "Decision on Jurisdiction",
                "Type": "Decision on Jurisdiction",
                "Date": "2014-02-10",
                "Content": (
                    "The tribunal upholds its jurisdiction over the mining concession "
                    "dispute. The cooling-off period was satisfied."
                ),
                "Opinions": [],
            }
        ],
    )


@pytest.fixture
def expropriation_case(expropriation_case_dict: dict[str, Any]) -> CaseDocument:
    return CaseDocument.model_validate(expropriation_case_dict)


@pytest.fixture
def corpus_dir(
    tmp_path: Path,
    expropriation_case_dict: dict[str, Any],
    tribunal_case_dict: dict[str, Any],
) -> Path:
    """Case directory with two valid records and two broken files."""
    cases = tmp_path / "cases"
    cases.mkdir()
    (cases / "ICSID-ARB-01.json").write_text(json.dumps(expropriation_case_dict))
    (cases / "PCA-2012-02.json").write_text(json.dumps(tribunal_case_dict))
    (cases / "broken.json").write_text("{not valid json")
    (cases / "no_identifier.json").write_text(json.dumps({"Title": "Missing id"}))
    (cases / "notes.txt").write_text("not a case file")
    return cases


@pytest.fixture
def empty_corpus_dir(tmp_path: Path) -> Path:
    cases = tmp_path / "empty_cases"
    cases.mkdir()
    return cases
