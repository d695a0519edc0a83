"""Answer generators — Ollama, Anthropic, OpenAI."""

from arbitration_rag.llm.base import LLMProvider
from arbitration_rag.llm.factory import available_providers, get_llm_provider

__all__ = ["LLMProvider", "available_providers", "get_llm_provider"]
