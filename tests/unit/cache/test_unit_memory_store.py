# tests/unit/cache/test_unit_memory_store.py — v1
"""Tests for cache/memory_store.py — unbounded render cache."""

from __future__ import annotations

import threading

from adrgen.cache.memory_store import MemoryRenderCache


class TestMemoryRenderCache:
    def test_miss_then_hit(self):
        cache = MemoryRenderCache()
        assert cache.get("index-x") is None
        cache.put("index-x", b"<html>", ("fp",))
        entry = cache.get("index-x")
        assert entry is not None
        assert entry.content == b"<html>"
        assert entry.fingerprints == ("fp",)
        assert entry.size_bytes == 6

    def test_stats(self):
        cache = MemoryRenderCache()
        cache.get("k")
        cache.put("k", b"v")
        cache.get("k")
        stats = cache.stats()
        assert stats.entries == 1
        assert stats.hits == 1
        assert stats.misses == 1

    def test_last_writer_wins(self):
        cache = MemoryRenderCache()
        cache.put("k", b"one")
        cache.put("k", b"two")
        assert cache.get("k").content == b"two"
        assert len(cache) == 1

    def test_contains_and_clear(self):
        cache = MemoryRenderCache()
        cache.put("adr-0001-abc", b"x")
        assert "adr-0001-abc" in cache
        cache.clear()
        assert "adr-0001-abc" not in cache
        assert len(cache) == 0

    def test_stores_a_copy(self):
        cache = MemoryRenderCache()
        data = bytearray(b"abc")
        cache.put("k", data)
        data[0] = ord("z")
        assert cache.get("k").content == b"abc"

    def test_concurrent_access(self):
        cache = MemoryRenderCache()
        errors: list[Exception] = []

        def _worker(n: int) -> None:
            try:
                for i in range(200):
                    key = f"k{i % 10}"
                    cache.put(key, f"{n}-{i}".encode())
                    assert cache.get(key) is not None
            except Exception as e:  # surfaced through the list below
                errors.append(e)

        threads = [threading.Thread(target=_worker, args=(n,)) for n in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert errors == []
        assert len(cache) == 10

    def test_concurrent_counters_are_exact(self):
        cache = MemoryRenderCache()
        cache.put("hit", b"v")

        def _worker() -> None:
            for _ in range(500):
                cache.get("hit")
                cache.get("miss")

        threads = [threading.Thread(target=_worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        stats = cache.stats()
        assert stats.hits == 4000
        assert stats.misses == 4000
