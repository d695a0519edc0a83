"""Named provider registry with lazy imports and a per-name singleton cache.

Optional backends (OpenAI, Anthropic, sentence-transformers) are only
imported when first requested, so a missing extra fails at use, not at
import time.
"""

from __future__ import annotations

import importlib
import logging
from typing import Any, Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ProviderRegistry(Generic[T]):
    """Map provider keys to ``(module_path, class_name)`` pairs.

    Instances built without constructor kwargs are cached by key; any
    kwargs bypass the cache.
    """

    def __init__(self, kind: str, entries: list[tuple[str, str, str]]):
        self.kind = kind
        self._entries = {key: (module_path, cls_name) for key, module_path, cls_name in entries}
        self._cache: dict[str, T] = {}

    def get(self, name: str, **kwargs: Any) -> T:
        key = name.lower()

        if not kwargs and key in self._cache:
            return self._cache[key]

        if key not in self._entries:
            raise ValueError(
                f"Unknown {self.kind} '{name}'. Available: {self.available()}"
            )

        module_path, cls_name = self._entries[key]
        cls = getattr(importlib.import_module(module_path), cls_name)
        instance = cls(**kwargs)
        if not kwargs:
            self._cache[key] = instance
        logger.debug("Created %s %s", self.kind, cls_name)
        return instance

    def available(self) -> list[str]:
        return list(self._entries)

    def clear_cache(self) -> None:
        self._cache.clear()
