"""Application settings loaded from YAML with an optional profile override.

Lookup order: an explicit path, else the nearest ``settings-{ARBRAG_PROFILE}.yaml``
or ``settings.yaml`` found walking up from the working directory, else defaults.
"""

from __future__ import annotations

import os
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, model_validator

PROFILE_ENV = "ARBRAG_PROFILE"
SETTINGS_FILENAME = "settings.yaml"

# ---------------------------------------------------------------------------
# Settings sections
# ---------------------------------------------------------------------------


class CorpusSettings(BaseModel):
    data_path: str = "data/cases"


class ChunkingSettings(BaseModel):
    chunk_size: int = Field(default=500, gt=0)
    overlap: int = Field(default=50, ge=0)

    @model_validator(mode="after")
    def _overlap_below_size(self) -> ChunkingSettings:
        if self.overlap >= self.chunk_size:
            raise ValueError(
                f"chunking.overlap ({self.overlap}) must be smaller than "
                f"chunking.chunk_size ({self.chunk_size})"
            )
        return self


class EmbeddingSettings(BaseModel):
    provider: str = "hash"
    model: str | None = None
    # Unset keeps the provider's native size
    dimension: int | None = Field(default=None, gt=0)


class LLMSettings(BaseModel):
    provider: str = "ollama"
    model: str = "llama3.1:8b"
    temperature: float = Field(default=0.2, ge=0.0)
    max_tokens: int = Field(default=2048, gt=0)
    timeout: float = Field(default=120.0, gt=0)


class RetrievalSettings(BaseModel):
    top_k: int = Field(default=5, gt=0)
    metadata_top_k: int = Field(default=10, gt=0)


class LoggingSettings(BaseModel):
    level: str = "INFO"


# ---------------------------------------------------------------------------
# Root settings
# ---------------------------------------------------------------------------


class Settings(BaseModel):
    corpus: CorpusSettings = Field(default_factory=CorpusSettings)
    chunking: ChunkingSettings = Field(default_factory=ChunkingSettings)
    embedding: EmbeddingSettings = Field(default_factory=EmbeddingSettings)
    llm: LLMSettings = Field(default_factory=LLMSettings)
    retrieval: RetrievalSettings = Field(default_factory=RetrievalSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


def _find_settings_file() -> Path | None:
    """Nearest settings file from cwd upwards; the profile file wins per directory."""
    profile = os.getenv(PROFILE_ENV, "").strip()
    names = [SETTINGS_FILENAME]
    if profile:
        names.insert(0, f"settings-{profile}.yaml")

    here = Path.cwd()
    for directory in (here, *here.parents):
        found = next((directory / n for n in names if (directory / n).is_file()), None)
        if found is not None:
            return found
    return None


def load_settings(path: str | Path | None = None) -> Settings:
    """Load settings, falling back to defaults when no file is found.

    Raises:
        pydantic.ValidationError: If the file contains invalid values.
    """
    settings_path = Path(path) if path is not None else _find_settings_file()
    if settings_path is None:
        return Settings()

    raw = yaml.safe_load(settings_path.read_text(encoding="utf-8")) or {}
    return Settings.model_validate(raw)
