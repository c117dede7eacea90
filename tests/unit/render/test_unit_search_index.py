# tests/unit/render/test_unit_search_index.py — v1
"""Tests for render/search_index.py — excerpt building and the JSON index."""

from __future__ import annotations

import json

from adrgen.collection.loader import CollectionLoader
from adrgen.render.search_index import EXCERPT_LIMIT, build_search_index, make_excerpt


class TestMakeExcerpt:
    def test_strips_markers(self):
        assert make_excerpt("# Title\n\n**bold** _it_") == " Title\n\nbold it"

    def test_short_content_untouched(self):
        assert make_excerpt("plain") == "plain"

    def test_truncated_with_ellipsis(self):
        excerpt = make_excerpt("a" * 1000)
        assert len(excerpt) == EXCERPT_LIMIT
        assert excerpt.endswith("...")

    def test_exact_limit_not_truncated(self):
        assert make_excerpt("b" * EXCERPT_LIMIT) == "b" * EXCERPT_LIMIT


class TestBuildSearchIndex:
    def test_items(self, settings, adr_dir):
        collection = CollectionLoader(settings).load()
        index = build_search_index(collection)
        assert index.generated == 3
        item = index.items[1]
        assert item.number == "0002"
        assert item.title == "Use PostgreSQL"
        assert item.url == "adr-0002.html"
        assert item.diagram_type == "Flowchart"
        assert "#" not in item.content

    def test_json_shape(self, settings, adr_dir):
        collection = CollectionLoader(settings).load()
        parsed = json.loads(build_search_index(collection).to_json())
        assert set(parsed) == {"generated", "items"}
        assert set(parsed["items"][0]) == {"number", "title", "status", "content", "diagramType", "url"}

    def test_empty(self):
        assert build_search_index([]).generated == 0
