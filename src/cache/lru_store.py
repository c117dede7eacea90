# src/cache/lru_store.py — v1
"""Bounded render cache with least-recently-used eviction (CACHE_BACKEND=lru).

Same contract as MemoryRenderCache. A hit reorders the recency list, so
reads take the write side of the lock.
"""

from __future__ import annotations

import logging
from collections import OrderedDict

from adrgen.cache.base_cache_store import BaseCacheStore
from adrgen.cache.models import CacheEntry, CacheStats
from adrgen.cache.rwlock import ReadWriteLock

logger = logging.getLogger(__name__)


class LruRenderCache(BaseCacheStore):
    """Key -> bytes map holding at most ``max_entries`` entries."""

    def __init__(self, max_entries: int = 256) -> None:
        if max_entries <= 0:
            raise ValueError("max_entries must be > 0")
        self._max_entries = max_entries
        self._entries: OrderedDict[str, CacheEntry] = OrderedDict()
        self._lock = ReadWriteLock()
        self._hits = 0
        self._misses = 0
        self._evictions = 0

    @property
    def max_entries(self) -> int:
        return self._max_entries

    def get(self, key: str) -> CacheEntry | None:
        with self._lock.write_locked():
            entry = self._entries.get(key)
            if entry is None:
                self._misses += 1
            else:
                self._entries.move_to_end(key)
                self._hits += 1
        logger.debug("Cache %s: %s", "miss" if entry is None else "hit", key)
        return entry

    def put(self, key: str, content: bytes, fingerprints: tuple[str, ...] = ()) -> CacheEntry:
        entry = CacheEntry(key=key, content=bytes(content), fingerprints=tuple(fingerprints))
        with self._lock.write_locked():
            self._entries[key] = entry
            self._entries.move_to_end(key)
            while len(self._entries) > self._max_entries:
                evicted, _ = self._entries.popitem(last=False)
                self._evictions += 1
                logger.debug("Cache evict: %s", evicted)
        return entry

    def clear(self) -> None:
        with self._lock.write_locked():
            self._entries.clear()

    def stats(self) -> CacheStats:
        with self._lock.read_locked():
            return CacheStats(
                entries=len(self._entries),
                hits=self._hits,
                misses=self._misses,
                evictions=self._evictions,
            )

    def __len__(self) -> int:
        with self._lock.read_locked():
            return len(self._entries)
