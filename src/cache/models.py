# src/cache/models.py — v1
"""Render cache domain models: CacheEntry, CacheStats."""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field


class CacheEntry(BaseModel):
    """Rendered bytes plus the fingerprint(s) that produced them."""

    model_config = ConfigDict(frozen=True)

    key: str
    content: bytes
    fingerprints: tuple[str, ...] = ()
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def size_bytes(self) -> int:
        return len(self.content)


class CacheStats(BaseModel):
    """Hit/miss counters, for logging and tests."""

    entries: int = 0
    hits: int = 0
    misses: int = 0
    evictions: int = 0
