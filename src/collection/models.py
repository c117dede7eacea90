# src/collection/models.py — v1
"""The loaded ADR collection: sorted records plus aggregate stats."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

from adrgen.core.models import AdrRecord, CollectionStats


@dataclass(frozen=True)
class Neighbors:
    """Previous/next records around one ADR (None at either end)."""

    previous: AdrRecord | None
    next: AdrRecord | None


@dataclass
class AdrCollection:
    """Records sorted by number, read-only once loaded."""

    records: tuple[AdrRecord, ...] = ()
    stats: CollectionStats = field(default_factory=CollectionStats)

    def __iter__(self) -> Iterator[AdrRecord]:
        return iter(self.records)

    def __len__(self) -> int:
        return len(self.records)

    @property
    def fingerprints(self) -> list[str]:
        return [r.content_fingerprint for r in self.records]

    def index_of(self, number: str) -> int | None:
        for i, record in enumerate(self.records):
            if record.number == number:
                return i
        return None

    def find(self, number: str) -> AdrRecord | None:
        idx = self.index_of(number)
        return None if idx is None else self.records[idx]

    def neighbors(self, number: str) -> Neighbors | None:
        idx = self.index_of(number)
        if idx is None:
            return None
        previous = self.records[idx - 1] if idx > 0 else None
        following = self.records[idx + 1] if idx < len(self.records) - 1 else None
        return Neighbors(previous=previous, next=following)

    def count_by_status(self, status: str) -> int:
        """Linear scan; not cached."""
        return sum(1 for r in self.records if r.status == status)

    def status_counts(self, statuses: list[str]) -> dict[str, int]:
        return {status: self.count_by_status(status) for status in statuses}
