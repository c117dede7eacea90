# src/server/dev_server.py — v1
"""Development server: serve rendered pages straight from memory.

The collection is loaded once when the server is created; every request
goes through the same SiteRenderer (and render cache) as the static build.

Routes:
    /, /index.html                 index page
    /adr-NNNN, /adr-NNNN.html      single ADR
    /search, /search.html          search page
    /search-index.json             search index (application/json)
    /docs, /docs.html              rendered docs file
    /static/<path>                 static assets
Anything else is a 404.
"""

from __future__ import annotations

import logging
import mimetypes
import re
import uuid
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import TYPE_CHECKING
from urllib.parse import unquote, urlparse

from adrgen.collection.loader import CollectionLoader
from adrgen.core.models import PageKind
from adrgen.logging.context import set_request_context
from adrgen.render.assets import resolve_static_file
from adrgen.render.renderer import DocumentNotFoundError, SiteRenderer
from adrgen.render.search_index import build_search_index

if TYPE_CHECKING:
    from adrgen.config.settings import Settings

logger = logging.getLogger(__name__)

HTML_TYPE = "text/html; charset=utf-8"
JSON_TYPE = "application/json"

_PAGE_ROUTES: dict[str, PageKind] = {
    "/": PageKind.INDEX,
    "/index.html": PageKind.INDEX,
    "/search": PageKind.SEARCH,
    "/search.html": PageKind.SEARCH,
    "/docs": PageKind.DOCS,
    "/docs.html": PageKind.DOCS,
}
_ADR_ROUTE = re.compile(r"^/adr-(?P<number>[0-9]{4})(?:\.html)?$")
_STATIC_PREFIX = "/static/"


class AdrHttpServer(ThreadingHTTPServer):
    """ThreadingHTTPServer carrying the shared renderer for its handlers."""

    daemon_threads = True

    def __init__(self, address: tuple[str, int], settings: Settings, renderer: SiteRenderer) -> None:
        super().__init__(address, AdrRequestHandler)
        self.settings = settings
        self.renderer = renderer
        self.search_index = build_search_index(renderer.collection).to_json().encode("utf-8")


class AdrRequestHandler(BaseHTTPRequestHandler):
    """Route GET requests to the renderer."""

    server: AdrHttpServer

    def do_GET(self) -> None:
        """Handle GET requests."""
        set_request_context(uuid.uuid4().hex[:8])
        try:
            self._route(urlparse(self.path).path)
        except DocumentNotFoundError as e:
            self.send_error(404, str(e))
        except Exception as e:
            logger.exception("Request %s failed: %s", self.path, e)
            self.send_error(500, "Internal Server Error")
        finally:
            set_request_context(None)

    def _route(self, path: str) -> None:
        kind = _PAGE_ROUTES.get(path)
        if kind is not None:
            self._serve_bytes(self.server.renderer.render_page(kind), HTML_TYPE)
            return

        match = _ADR_ROUTE.match(path)
        if match:
            page = self.server.renderer.render_page(PageKind.ADR, match.group("number"))
            self._serve_bytes(page, HTML_TYPE)
            return

        if path == "/search-index.json":
            self._serve_bytes(self.server.search_index, JSON_TYPE)
            return

        if path.startswith(_STATIC_PREFIX):
            self._serve_static(unquote(path[len(_STATIC_PREFIX):]))
            return

        self.send_error(404, "Not Found")

    def _serve_static(self, relative: str) -> None:
        target = resolve_static_file(self.server.settings, relative)
        if target is None:
            self.send_error(404, "Not Found")
            return
        content_type = mimetypes.guess_type(target.name)[0] or "application/octet-stream"
        self._serve_bytes(target.read_bytes(), content_type)

    def _serve_bytes(self, body: bytes, content_type: str) -> None:
        self.send_response(200)
        self.send_header("Content-Type", content_type)
        self.send_header("Content-Length", str(len(body)))
        self.send_header("Cache-Control", "no-cache")
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, format: str, *args) -> None:
        logger.info("%s - %s", self.address_string(), format % args)


class DevServer:
    """Load the collection once and serve it over HTTP until interrupted."""

    def __init__(self, settings: Settings, loader: CollectionLoader | None = None) -> None:
        self._settings = settings
        self._loader = loader or CollectionLoader(settings)
        self._httpd: AdrHttpServer | None = None

    @property
    def httpd(self) -> AdrHttpServer | None:
        return self._httpd

    @property
    def url(self) -> str:
        if self._httpd is None:
            return f"http://{self._settings.server_host}:{self._settings.server_port}"
        host, port = self._httpd.server_address[:2]
        return f"http://{host}:{port}"

    def create_server(self, host: str | None = None, port: int | None = None) -> AdrHttpServer:
        """Load ADRs and bind the HTTP server (port 0 picks a free port).

        Raises:
            CollectionLoadError: If the ADR collection cannot be loaded.
            OSError: If the address cannot be bound.
        """
        collection = self._loader.load(self._settings.adr_directory)
        renderer = SiteRenderer(self._settings, collection, pipeline=self._loader.parser.pipeline)
        address = (
            host if host is not None else self._settings.server_host,
            port if port is not None else self._settings.server_port,
        )
        self._httpd = AdrHttpServer(address, self._settings, renderer)
        logger.info("Serving %d ADRs at %s", len(collection), self.url)
        return self._httpd

    def start(self) -> None:
        """Create the server if needed and block serving requests."""
        httpd = self._httpd or self.create_server()
        try:
            httpd.serve_forever()
        finally:
            httpd.server_close()

    def shutdown(self) -> None:
        if self._httpd is not None:
            self._httpd.shutdown()
