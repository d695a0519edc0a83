"""Anthropic Claude LLM provider.

Requires the ``anthropic`` extra; the key is read from ``ANTHROPIC_API_KEY``
unless passed explicitly.
"""

from __future__ import annotations

from typing import Any

from arbitration_rag.llm.base import LLMProvider


class AnthropicLLMProvider(LLMProvider):
    """Generate answers via the Anthropic Messages API."""

    default_model = "claude-sonnet-4-20250514"

    def __init__(self, model: str | None = None, api_key: str | None = None, **sampling: Any):
        try:
            import anthropic
        except ImportError as exc:
            raise ImportError(
                "anthropic package required: pip install arbitration-rag[anthropic]"
            ) from exc

        super().__init__(model, **sampling)
        self._client: Any = anthropic.Anthropic(api_key=api_key, timeout=self.timeout)

    def _complete(self, prompt: str, system: str | None) -> str:
        request: dict[str, Any] = {
            "model": self.model,
            "max_tokens": self.max_tokens,
            "temperature": self.temperature,
            "messages": [{"role": "user", "content": prompt}],
        }
        if system:
            request["system"] = system

        message = self._client.messages.create(**request)
        # Only text blocks carry answer prose
        return "".join(b.text for b in message.content if getattr(b, "type", "") == "text")
