"""Embedding provider factory."""

from __future__ import annotations

from arbitration_rag.embeddings.base import EmbeddingProvider
from arbitration_rag.registry import ProviderRegistry

_REGISTRY: ProviderRegistry[EmbeddingProvider] = ProviderRegistry(
    "embedding provider",
    [
        ("hash", "arbitration_rag.embeddings.hash_provider", "HashEmbeddingProvider"),
        ("ollama", "arbitration_rag.embeddings.ollama_provider", "OllamaEmbeddingProvider"),
        ("openai", "arbitration_rag.embeddings.openai_provider", "OpenAIEmbeddingProvider"),
        (
            "huggingface",
            "arbitration_rag.embeddings.huggingface_provider",
            "HuggingFaceEmbeddingProvider",
        ),
    ],
)

# Providers whose vector size is fixed by the model rather than configurable
MODEL_SIZED_PROVIDERS = frozenset({"huggingface"})


def get_embedding_provider(provider: str = "hash", **kwargs) -> EmbeddingProvider:
    """Get an embedding provider by name.

    Args:
        provider: One of ``hash``, ``ollama``, ``openai``, ``huggingface``.
        **kwargs: Passed to the provider constructor.
    """
    return _REGISTRY.get(provider, **kwargs)


def available_providers() -> list[str]:
    """Return names of registered embedding providers."""
    return _REGISTRY.available()


def clear_cache() -> None:
    """Clear singleton cache (for testing)."""
    _REGISTRY.clear_cache()
