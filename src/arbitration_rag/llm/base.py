"""Abstract base class for LLM providers."""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from typing import ClassVar

logger = logging.getLogger(__name__)


class LLMProvider(ABC):
    """Answer generator: prompt and optional system prompt in, text out.

    Holds the sampling settings every backend shares. Subclasses implement
    ``_complete``; ``generate`` wraps it with timing and debug logging.
    """

    default_model: ClassVar[str] = "unknown"

    def __init__(
        self,
        model: str | None = None,
        temperature: float = 0.2,
        max_tokens: int = 2048,
        timeout: float = 120.0,
    ):
        self.model = model or self.default_model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.timeout = timeout

    def generate(self, prompt: str, system: str | None = None) -> str:
        """Generate a response from the LLM.

        Args:
            prompt: The user prompt, including any retrieved context.
            system: Optional system prompt.

        Returns:
            Generated text; empty if the backend returned nothing.
        """
        started = time.perf_counter()
        text = self._complete(prompt, system)
        logger.debug(
            "%s (%s) returned %d chars in %.2fs",
            self.provider_name(), self.model, len(text), time.perf_counter() - started,
        )
        return text

    @abstractmethod
    def _complete(self, prompt: str, system: str | None) -> str:
        """Call the backend once and return its text."""

    @classmethod
    def provider_name(cls) -> str:
        """Return human-readable provider name."""
        return cls.__name__
