# tests/unit/core/test_unit_models.py — v1
"""Tests for core/models.py — shared domain models."""

from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from adrgen.core.models import NO_DIAGRAM, AdrRecord, PageKind, SearchIndex, SearchItem


def _record(**overrides) -> AdrRecord:
    data = {
        "number": "0007",
        "title": "Use Kafka",
        "status": "Accepted",
        "category": "Infrastructure",
        "raw_content": "# Use Kafka",
        "rendered_html": "<h1>Use Kafka</h1>",
        "content_fingerprint": "f" * 64,
        "file_path": "adr/0007-use-kafka.md",
        "file_name": "0007-use-kafka.md",
    }
    data.update(overrides)
    return AdrRecord(**data)


class TestAdrRecord:
    def test_page_name(self):
        assert _record().page_name == "adr-0007.html"

    def test_defaults(self):
        record = _record()
        assert record.diagram_type == NO_DIAGRAM
        assert record.diagram_count == 0
        assert record.has_diagram is False
        assert record.modified_at is None

    def test_has_diagram(self):
        assert _record(diagram_type="Sequence", diagram_count=1).has_diagram is True

    @pytest.mark.parametrize("number", ["7", "007", "00007", "abcd"])
    def test_number_must_be_four_digits(self, number):
        with pytest.raises(ValidationError):
            _record(number=number)

    def test_frozen(self):
        record = _record()
        with pytest.raises(ValidationError):
            record.title = "Changed"


class TestPageKind:
    def test_values(self):
        assert [k.value for k in PageKind] == ["index", "adr", "search", "docs"]


class TestSearchIndex:
    def test_json_uses_camel_case_diagram_type(self):
        index = SearchIndex(
            generated=1,
            items=[SearchItem(
                number="0001", title="T", status="Accepted",
                content="body", diagram_type="none", url="adr-0001.html",
            )],
        )
        parsed = json.loads(index.to_json())
        assert parsed["generated"] == 1
        item = parsed["items"][0]
        assert item["diagramType"] == "none"
        assert "diagram_type" not in item
        assert item["url"] == "adr-0001.html"

    def test_empty(self):
        assert json.loads(SearchIndex(generated=0).to_json()) == {"generated": 0, "items": []}
