# tests/unit/site/test_unit_builder.py — v1
"""Tests for site/builder.py — batch build orchestration."""

from __future__ import annotations

import json
from unittest.mock import Mock

import pytest

from adrgen.collection.loader import CollectionLoadError, CollectionLoader
from adrgen.site.builder import SEARCH_INDEX_FILE, SiteBuilder, build_site


class TestSiteBuilder:
    def test_writes_pages(self, settings, adr_dir):
        stats = SiteBuilder(settings).build()
        out = settings.output_directory
        for name in ("index.html", "adr-0001.html", "adr-0002.html", "adr-0003.html", "search.html"):
            assert (out / name).is_file(), name
        assert not (out / "docs.html").exists()
        assert stats.adr_count == 3
        assert stats.page_count == 5
        assert stats.diagram_count == 1
        assert stats.asset_count == 2
        assert stats.duration_seconds >= 0

    def test_docs_page_when_readme_exists(self, settings, adr_dir):
        settings.docs_file.write_text("# Project\n", encoding="utf-8")
        stats = SiteBuilder(settings).build()
        assert (settings.output_directory / "docs.html").is_file()
        assert stats.page_count == 6

    def test_search_index_file(self, settings, adr_dir):
        SiteBuilder(settings).build()
        data = json.loads((settings.output_directory / SEARCH_INDEX_FILE).read_text(encoding="utf-8"))
        assert data["generated"] == 3
        assert [item["url"] for item in data["items"]] == ["adr-0001.html", "adr-0002.html", "adr-0003.html"]

    def test_file_bytes_match_renderer(self, settings, adr_dir):
        builder = SiteBuilder(settings)
        builder.build()
        on_disk = (settings.output_directory / "adr-0002.html").read_bytes()
        assert on_disk == builder.renderer.render_adr("0002")

    def test_skipped_files_reported(self, settings, adr_dir):
        (adr_dir / "scratch.md").write_text("# Scratch", encoding="utf-8")
        stats = build_site(settings)
        assert stats.skipped_files == ["scratch.md"]
        assert stats.adr_count == 3

    def test_load_failure_propagates(self, settings):
        loader = Mock(spec=CollectionLoader)
        loader.load.side_effect = CollectionLoadError("boom")
        with pytest.raises(CollectionLoadError, match="boom"):
            SiteBuilder(settings, loader=loader).build()

    def test_renderer_none_before_build(self, settings):
        assert SiteBuilder(settings).renderer is None
