# tests/unit/cache/test_unit_lru_store.py — v1
"""Tests for cache/lru_store.py — bounded render cache."""

from __future__ import annotations

import pytest

from adrgen.cache.lru_store import LruRenderCache


class TestLruRenderCache:
    def test_rejects_non_positive_size(self):
        with pytest.raises(ValueError, match="max_entries"):
            LruRenderCache(max_entries=0)

    def test_evicts_least_recently_used(self):
        cache = LruRenderCache(max_entries=2)
        cache.put("a", b"1")
        cache.put("b", b"2")
        cache.get("a")  # b is now oldest
        cache.put("c", b"3")
        assert "b" not in cache
        assert cache.get("a").content == b"1"
        assert cache.get("c").content == b"3"
        assert cache.stats().evictions == 1

    def test_overwrite_does_not_evict(self):
        cache = LruRenderCache(max_entries=2)
        cache.put("a", b"1")
        cache.put("b", b"2")
        cache.put("a", b"1b")
        assert len(cache) == 2
        assert cache.stats().evictions == 0

    def test_hit_and_miss_counters(self):
        cache = LruRenderCache(max_entries=4)
        cache.get("x")
        cache.put("x", b"")
        cache.get("x")
        stats = cache.stats()
        assert (stats.hits, stats.misses, stats.entries) == (1, 1, 1)

    def test_clear(self):
        cache = LruRenderCache(max_entries=4)
        cache.put("x", b"1")
        cache.clear()
        assert len(cache) == 0
