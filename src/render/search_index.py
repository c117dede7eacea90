# src/render/search_index.py — v1
"""Search index built from the loaded ADRs (``search-index.json``)."""

from __future__ import annotations

from collections.abc import Iterable

from adrgen.core.models import AdrRecord, SearchIndex, SearchItem

EXCERPT_LIMIT = 500
_ELLIPSIS = "..."
_MARKDOWN_MARKERS = ("#", "*", "_")


def make_excerpt(content: str, limit: int = EXCERPT_LIMIT) -> str:
    """Strip markdown markers and cap at ``limit`` characters (ellipsis included)."""
    for marker in _MARKDOWN_MARKERS:
        content = content.replace(marker, "")
    if len(content) > limit:
        content = content[: limit - len(_ELLIPSIS)] + _ELLIPSIS
    return content


def build_search_index(records: Iterable[AdrRecord]) -> SearchIndex:
    items = [
        SearchItem(
            number=record.number,
            title=record.title,
            status=record.status,
            content=make_excerpt(record.raw_content),
            diagram_type=record.diagram_type,
            url=record.page_name,
        )
        for record in records
    ]
    return SearchIndex(generated=len(items), items=items)
