# src/cache/base_cache_store.py — v1
"""Abstract render cache interface.

The store is a plain key -> bytes map. Building keys is the renderer's job;
stores never inspect or expire them.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from adrgen.cache.models import CacheEntry, CacheStats


class BaseCacheStore(ABC):
    """Unified interface for render cache backends.

    Implementations must be safe for concurrent callers.
    """

    @abstractmethod
    def get(self, key: str) -> CacheEntry | None:
        """Return the entry stored under ``key``, or None on a miss."""

    @abstractmethod
    def put(self, key: str, content: bytes, fingerprints: tuple[str, ...] = ()) -> CacheEntry:
        """Store rendered bytes under ``key`` (last writer wins)."""

    @abstractmethod
    def clear(self) -> None:
        """Drop every entry."""

    @abstractmethod
    def stats(self) -> CacheStats:
        """Snapshot of counters."""

    @abstractmethod
    def __len__(self) -> int:
        """Number of stored entries."""

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.get(key) is not None
