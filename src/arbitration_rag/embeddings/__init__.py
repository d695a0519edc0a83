"""Embedding providers and the cosine-similarity embedding service."""

from arbitration_rag.embeddings.base import EmbeddingProvider
from arbitration_rag.embeddings.factory import available_providers, get_embedding_provider
from arbitration_rag.embeddings.service import EmbeddingService

__all__ = [
    "EmbeddingProvider",
    "EmbeddingService",
    "available_providers",
    "get_embedding_provider",
]
