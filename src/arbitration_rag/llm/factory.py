"""LLM provider factory."""

from __future__ import annotations

from arbitration_rag.llm.base import LLMProvider
from arbitration_rag.registry import ProviderRegistry

_REGISTRY: ProviderRegistry[LLMProvider] = ProviderRegistry(
    "LLM provider",
    [
        ("ollama", "arbitration_rag.llm.ollama_provider", "OllamaLLMProvider"),
        ("anthropic", "arbitration_rag.llm.anthropic_provider", "AnthropicLLMProvider"),
        ("openai", "arbitration_rag.llm.openai_provider", "OpenAILLMProvider"),
    ],
)


def get_llm_provider(provider: str = "ollama", **kwargs) -> LLMProvider:
    """Get an LLM provider by name.

    Args:
        provider: One of ``ollama``, ``anthropic``, ``openai``.
        **kwargs: Passed to the provider constructor.
    """
    return _REGISTRY.get(provider, **kwargs)


def available_providers() -> list[str]:
    """Return names of registered LLM providers."""
    return _REGISTRY.available()


def clear_cache() -> None:
    """Clear singleton cache (for testing)."""
    _REGISTRY.clear_cache()
