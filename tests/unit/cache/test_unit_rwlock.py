# tests/unit/cache/test_unit_rwlock.py — v1
"""Tests for cache/rwlock.py — reader/writer exclusion."""

from __future__ import annotations

import threading
import time

import pytest

from adrgen.cache.rwlock import ReadWriteLock


class TestReadWriteLock:
    def test_readers_share(self):
        lock = ReadWriteLock()
        lock.acquire_read()
        lock.acquire_read()
        assert lock.active_readers == 2
        lock.release_read()
        lock.release_read()
        assert lock.active_readers == 0

    def test_writer_waits_for_readers(self):
        lock = ReadWriteLock()
        acquired = threading.Event()

        def _writer() -> None:
            with lock.write_locked():
                acquired.set()

        lock.acquire_read()
        t = threading.Thread(target=_writer)
        t.start()
        time.sleep(0.05)
        assert not acquired.is_set()
        lock.release_read()
        t.join(timeout=2)
        assert acquired.is_set()

    def test_reader_waits_for_writer(self):
        lock = ReadWriteLock()
        acquired = threading.Event()

        def _reader() -> None:
            with lock.read_locked():
                acquired.set()

        lock.acquire_write()
        t = threading.Thread(target=_reader)
        t.start()
        time.sleep(0.05)
        assert not acquired.is_set()
        lock.release_write()
        t.join(timeout=2)
        assert acquired.is_set()

    def test_context_manager_releases_on_error(self):
        lock = ReadWriteLock()
        with pytest.raises(KeyError):
            with lock.read_locked():
                raise KeyError("x")
        assert lock.active_readers == 0
        with lock.write_locked():
            pass
