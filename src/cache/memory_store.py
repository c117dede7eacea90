# src/cache/memory_store.py — v1
"""Unbounded in-memory render cache (default CACHE_BACKEND=memory).

No expiry and no size bound: an ADR corpus is small and keys already encode
content identity, so superseded entries are unreachable rather than wrong.
Use the lru backend when reusing this at a larger scale.
"""

from __future__ import annotations

import logging
import threading

from adrgen.cache.base_cache_store import BaseCacheStore
from adrgen.cache.models import CacheEntry, CacheStats
from adrgen.cache.rwlock import ReadWriteLock

logger = logging.getLogger(__name__)


class MemoryRenderCache(BaseCacheStore):
    """Process-lifetime key -> bytes map guarded by a reader/writer lock."""

    def __init__(self) -> None:
        self._entries: dict[str, CacheEntry] = {}
        self._lock = ReadWriteLock()
        self._hits = 0
        self._misses = 0
        self._counter_lock = threading.Lock()

    def get(self, key: str) -> CacheEntry | None:
        with self._lock.read_locked():
            entry = self._entries.get(key)
        with self._counter_lock:
            if entry is None:
                self._misses += 1
            else:
                self._hits += 1
        logger.debug("Cache %s: %s", "miss" if entry is None else "hit", key)
        return entry

    def put(self, key: str, content: bytes, fingerprints: tuple[str, ...] = ()) -> CacheEntry:
        entry = CacheEntry(key=key, content=bytes(content), fingerprints=tuple(fingerprints))
        with self._lock.write_locked():
            self._entries[key] = entry
        return entry

    def clear(self) -> None:
        with self._lock.write_locked():
            self._entries.clear()

    def stats(self) -> CacheStats:
        with self._lock.read_locked():
            size = len(self._entries)
        with self._counter_lock:
            return CacheStats(entries=size, hits=self._hits, misses=self._misses)

    def __len__(self) -> int:
        with self._lock.read_locked():
            return len(self._entries)
