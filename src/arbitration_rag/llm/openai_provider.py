"""OpenAI LLM provider — GPT-4o family and OpenAI-compatible endpoints.

Requires the ``openai`` extra. ``base_url`` points the client at any
server speaking the Chat Completions protocol (vLLM, LM Studio, ...).
"""

from __future__ import annotations

from typing import Any

from arbitration_rag.llm.base import LLMProvider


class OpenAILLMProvider(LLMProvider):
    """Generate answers via the OpenAI Chat Completions API."""

    default_model = "gpt-4o-mini"

    def __init__(
        self,
        model: str | None = None,
        api_key: str | None = None,
        base_url: str | None = None,
        **sampling: Any,
    ):
        try:
            import openai
        except ImportError as exc:
            raise ImportError(
                "openai package required: pip install arbitration-rag[openai]"
            ) from exc

        super().__init__(model, **sampling)
        client_args: dict[str, Any] = {"timeout": self.timeout}
        if api_key:
            client_args["api_key"] = api_key
        if base_url:
            client_args["base_url"] = base_url
        self._client: Any = openai.OpenAI(**client_args)

    def _complete(self, prompt: str, system: str | None) -> str:
        messages = [{"role": "user", "content": prompt}]
        if system:
            messages.insert(0, {"role": "system", "content": system})

        completion = self._client.chat.completions.create(
            model=self.model,
            messages=messages,
            max_tokens=self.max_tokens,
            temperature=self.temperature,
        )
        return completion.choices[0].message.content or ""
