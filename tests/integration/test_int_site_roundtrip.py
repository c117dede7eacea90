# tests/integration/test_int_site_roundtrip.py — v1
"""End-to-end: static build and dev server produce the same pages.

Covers the full path: load ADRs from disk -> markdown pipeline -> Jinja
templates -> render cache -> file output / HTTP response.
"""

from __future__ import annotations

import json
import threading
import urllib.request
from concurrent.futures import ThreadPoolExecutor

import pytest

from adrgen.server.dev_server import DevServer
from adrgen.site.builder import SiteBuilder


def _fetch(url: str) -> bytes:
    with urllib.request.urlopen(url, timeout=10) as response:
        return response.read()


@pytest.fixture
def running_server(settings, adr_dir):
    server = DevServer(settings)
    httpd = server.create_server(host="127.0.0.1", port=0)
    thread = threading.Thread(target=httpd.serve_forever, daemon=True)
    thread.start()
    yield server
    server.shutdown()
    httpd.server_close()
    thread.join(timeout=5)


class TestBuildAndServe:
    def test_built_files_equal_served_pages(self, settings, adr_dir, running_server):
        settings.output_directory.mkdir(parents=True, exist_ok=True)
        SiteBuilder(settings).build()
        out = settings.output_directory
        for path, name in [
            ("/index.html", "index.html"),
            ("/adr-0001.html", "adr-0001.html"),
            ("/adr-0002", "adr-0002.html"),
            ("/search", "search.html"),
            ("/search-index.json", "search-index.json"),
            ("/static/js/main.js", "static/js/main.js"),
        ]:
            assert _fetch(running_server.url + path) == (out / name).read_bytes(), path

    def test_concurrent_requests_hit_cache(self, running_server):
        paths = ["/index.html", "/adr-0001.html", "/adr-0002.html", "/adr-0003.html", "/search.html"] * 8
        with ThreadPoolExecutor(max_workers=8) as pool:
            bodies = list(pool.map(lambda p: _fetch(running_server.url + p), paths))
        for i, path in enumerate(paths[:5]):
            assert all(body == bodies[i] for body in bodies[i::5]), path
        stats = running_server.httpd.renderer.cache.stats()
        assert stats.entries == 5
        assert stats.hits > 0


class TestBuildFeatures:
    def test_cross_links_and_diagrams(self, settings, adr_dir):
        SiteBuilder(settings).build()
        out = settings.output_directory
        first = (out / "adr-0001.html").read_text(encoding="utf-8")
        second = (out / "adr-0002.html").read_text(encoding="utf-8")
        assert 'href="/adr-0002.html">Use PostgreSQL</a>' in first
        assert 'href="/adr-0001.html#context"' in second
        assert 'id="mermaid-1"' in second
        assert "openMermaidFullscreen" in (out / "static" / "js" / "main.js").read_text(encoding="utf-8")

    def test_lru_backend_build(self, settings, adr_dir):
        bounded = settings.model_copy(update={"cache_backend": "lru", "cache_max_entries": 2})
        builder = SiteBuilder(bounded)
        stats = builder.build()
        assert stats.page_count == 5
        assert len(builder.renderer.cache) == 2

    def test_rebuild_after_edit(self, settings, adr_dir):
        SiteBuilder(settings).build()
        path = adr_dir / "0003-deprecate-soap-gateway.md"
        path.write_text(path.read_text(encoding="utf-8").replace("Deprecated", "Superseded"), encoding="utf-8")
        SiteBuilder(settings).build()
        index = json.loads((settings.output_directory / "search-index.json").read_text(encoding="utf-8"))
        assert index["items"][2]["status"] == "Superseded"
        page = (settings.output_directory / "adr-0003.html").read_text(encoding="utf-8")
        assert "↑ Superseded" in page
