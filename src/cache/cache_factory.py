# src/cache/cache_factory.py — v1
"""Factory for render cache instantiation."""

from __future__ import annotations

from adrgen.cache.base_cache_store import BaseCacheStore
from adrgen.config.settings import Settings


def create_render_cache(settings: Settings | None = None) -> BaseCacheStore:
    """Instantiate the configured cache backend.

    Args:
        settings: Application settings. Defaults to the unbounded memory backend.

    Returns:
        Configured BaseCacheStore implementation.
    """
    backend = "memory" if settings is None else settings.cache_backend

    if backend == "memory":
        from adrgen.cache.memory_store import MemoryRenderCache
        return MemoryRenderCache()

    if backend == "lru":
        from adrgen.cache.lru_store import LruRenderCache
        return LruRenderCache(max_entries=settings.cache_max_entries)

    raise ValueError(f"Unsupported cache backend: {backend!r}")
