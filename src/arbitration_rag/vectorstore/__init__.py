"""Vector store — in-memory similarity and metadata search over chunks."""

from arbitration_rag.vectorstore.base import VectorStore
from arbitration_rag.vectorstore.memory_store import InMemoryVectorStore
from arbitration_rag.vectorstore.schemas import MetadataFilter, SearchResult, StoreStats

__all__ = [
    "InMemoryVectorStore",
    "MetadataFilter",
    "SearchResult",
    "StoreStats",
    "VectorStore",
]
