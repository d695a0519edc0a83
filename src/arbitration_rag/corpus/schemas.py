"""Data models for arbitration case records.

Case files on disk use the PascalCase keys of the published case schema
(``Identifier``, ``Decisions``, ...). The models accept those keys and
expose snake_case attributes.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from pydantic import BaseModel, ConfigDict, Field


class _CaseRecord(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


class Opinion(_CaseRecord):
    """A separate, concurring or dissenting opinion."""

    title: str = Field(default="", alias="Title")
    type: str = Field(default="", alias="Type")
    date: str | None = Field(default=None, alias="Date")
    content: str = Field(default="", alias="Content")


class Decision(_CaseRecord):
    """An award, decision or procedural order, with its attached opinions."""

    title: str = Field(default="", alias="Title")
    type: str = Field(default="", alias="Type")
    date: str | None = Field(default=None, alias="Date")
    content: str = Field(default="", alias="Content")
    opinions: list[Opinion] = Field(default_factory=list, alias="Opinions")


class CaseDocument(_CaseRecord):
    """A single arbitration case as loaded from the corpus."""

    identifier: str = Field(alias="Identifier", min_length=1)
    title: str = Field(default="", alias="Title")
    case_number: str | None = Field(default=None, alias="CaseNumber")
    industries: list[str] = Field(default_factory=list, alias="Industries")
    status: str = Field(default="", alias="Status")
    party_nationalities: list[str] = Field(default_factory=list, alias="PartyNationalities")
    institution: str = Field(default="", alias="Institution")
    rules_of_arbitration: list[str] = Field(default_factory=list, alias="RulesOfArbitration")
    applicable_treaties: list[str] = Field(default_factory=list, alias="ApplicableTreaties")
    decisions: list[Decision] = Field(default_factory=list, alias="Decisions")
    opinions: list[Opinion] = Field(default_factory=list, alias="Opinions")


@dataclass
class LoadResult:
    """Result of loading a corpus directory.

    Attributes:
        cases: Successfully parsed cases, in filename order.
        skipped: Filenames that could not be read or validated.
    """

    cases: list[CaseDocument] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class CorpusStats:
    """Size summary of a set of loaded cases."""

    total_cases: int = 0
    total_decisions: int = 0
    total_opinions: int = 0
    total_content_length: int = 0
