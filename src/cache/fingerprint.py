# src/cache/fingerprint.py — v1
"""Content fingerprints and the composite digests used to build render cache keys.

A record's fingerprint is SHA-256 over its raw file bytes. Pages built from
several records (index, search) are keyed by a digest over the ordered
fingerprints of every record, so any single change invalidates them.
"""

from __future__ import annotations

import hashlib
from collections.abc import Iterable


def content_fingerprint(raw_bytes: bytes) -> str:
    """SHA-256 on raw document bytes, hex-encoded."""
    return hashlib.sha256(raw_bytes).hexdigest()


def text_fingerprint(text: str) -> str:
    """SHA-256 of UTF-8 encoded text (docs page, ad-hoc markdown)."""
    return content_fingerprint(text.encode("utf-8"))


def combined_fingerprint(fingerprints: Iterable[str]) -> str:
    """SHA-256 over an ordered sequence of fingerprints.

    Order matters: the collection is always sorted by number, so the same
    collection yields the same digest.
    """
    digest = hashlib.sha256()
    for fp in fingerprints:
        digest.update(fp.encode("ascii"))
    return digest.hexdigest()
