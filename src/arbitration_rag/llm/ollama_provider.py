"""Ollama LLM provider — local model server, no API keys.

Talks to the ``/api/chat`` endpoint so the system prompt travels as its own
message rather than being spliced into the user turn.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from arbitration_rag.llm.base import LLMProvider

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:11434"


class OllamaLLMProvider(LLMProvider):
    """Generate answers via a local Ollama server."""

    default_model = "llama3.1:8b"

    def __init__(self, model: str | None = None, base_url: str = DEFAULT_BASE_URL, **sampling: Any):
        super().__init__(model, **sampling)
        self.base_url = base_url.rstrip("/")
        self._client = httpx.Client(base_url=self.base_url, timeout=self.timeout)

    def _complete(self, prompt: str, system: str | None) -> str:
        messages = [{"role": "user", "content": prompt}]
        if system:
            messages.insert(0, {"role": "system", "content": system})

        resp = self._client.post(
            "/api/chat",
            json={
                "model": self.model,
                "messages": messages,
                "stream": False,
                "options": {"temperature": self.temperature, "num_predict": self.max_tokens},
            },
        )
        resp.raise_for_status()
        return resp.json().get("message", {}).get("content", "")
