# src/render/renderer.py — v1
"""Dual-mode page renderer shared by the static build and the dev server.

Every page goes through the same path:

    1. Build the cache key from content fingerprints
    2. Return cached bytes on a hit
    3. On a miss, assemble page data, run the template, store the bytes
    4. Deliver the bytes to a file (build) or a stream (server)

Cache keys:
    index   index-<sha256 over every record fingerprint, in order>
    search  search-<same digest>
    adr     adr-<number>-<record fingerprint>
    docs    docs-<sha256 of the docs markdown>
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import TYPE_CHECKING, Any, BinaryIO

from jinja2 import TemplateError
from markupsafe import Markup

from adrgen.cache.base_cache_store import BaseCacheStore
from adrgen.cache.cache_factory import create_render_cache
from adrgen.cache.fingerprint import combined_fingerprint, text_fingerprint
from adrgen.collection.models import AdrCollection
from adrgen.core.models import AdrRecord, PageKind
from adrgen.extraction.markdown_pipeline import MarkdownConversionError, MarkdownPipeline
from adrgen.logging.context import set_page_context
from adrgen.render.engine import JinjaTemplateRenderer, TemplateRenderer

if TYPE_CHECKING:
    from adrgen.config.settings import Settings

logger = logging.getLogger(__name__)

TEMPLATE_NAMES: dict[PageKind, str] = {
    PageKind.INDEX: "index.html",
    PageKind.ADR: "adr.html",
    PageKind.SEARCH: "search.html",
    PageKind.DOCS: "docs.html",
}

INDEX_TITLE = "Architecture Decision Records"
SEARCH_TITLE = "Search ADRs"
DOCS_TITLE = "Documentation"


class DocumentNotFoundError(LookupError):
    """Raised when a requested ADR (or the docs file) does not exist."""

    def __init__(self, identifier: str, kind: str = "ADR") -> None:
        super().__init__(f"{kind} {identifier} not found")
        self.identifier = identifier


class RenderError(Exception):
    """Raised when a template cannot be loaded or executed for one page."""


def output_file_name(kind: PageKind, identifier: str | None = None) -> str:
    """File name a page is written to by the static build."""
    if kind is PageKind.ADR:
        return f"adr-{identifier}.html"
    return TEMPLATE_NAMES[kind]


class SiteRenderer:
    """Render pages for one loaded collection, memoized by content fingerprint.

    The cache is private to the renderer; the collection is treated as
    read-only for the renderer's lifetime.
    """

    def __init__(
        self,
        settings: Settings,
        collection: AdrCollection,
        templates: TemplateRenderer | None = None,
        cache: BaseCacheStore | None = None,
        pipeline: MarkdownPipeline | None = None,
    ) -> None:
        self._settings = settings
        self._collection = collection
        self._templates = templates or JinjaTemplateRenderer(settings)
        self._cache = cache if cache is not None else create_render_cache(settings)
        self._pipeline = pipeline or MarkdownPipeline(base_url=settings.base_url)

    @property
    def collection(self) -> AdrCollection:
        return self._collection

    @property
    def cache(self) -> BaseCacheStore:
        return self._cache

    # --- Cache keys ---

    def cache_key(self, kind: PageKind, identifier: str | None = None) -> str:
        if kind is PageKind.INDEX:
            return f"index-{combined_fingerprint(self._collection.fingerprints)}"
        if kind is PageKind.SEARCH:
            return f"search-{combined_fingerprint(self._collection.fingerprints)}"
        if kind is PageKind.ADR:
            record = self._require_record(identifier)
            return f"adr-{record.number}-{record.content_fingerprint}"
        if kind is PageKind.DOCS:
            return f"docs-{text_fingerprint(self._read_docs())}"
        raise ValueError(f"Unsupported page kind: {kind!r}")

    # --- Rendering ---

    def render_page(self, kind: PageKind, identifier: str | None = None) -> bytes:
        """Rendered bytes for a page, from cache when the content is unchanged.

        Raises:
            DocumentNotFoundError: Unknown ADR number or missing docs file.
            RenderError: Template failure for this page.
        """
        if kind is PageKind.INDEX:
            return self.render_index()
        if kind is PageKind.ADR:
            return self.render_adr(self._require_identifier(identifier))
        if kind is PageKind.SEARCH:
            return self.render_search()
        if kind is PageKind.DOCS:
            return self.render_docs(self._read_docs())
        raise ValueError(f"Unsupported page kind: {kind!r}")

    def render_index(self) -> bytes:
        return self._render_cached(
            PageKind.INDEX,
            self.cache_key(PageKind.INDEX),
            self._index_context,
            tuple(self._collection.fingerprints),
        )

    def render_adr(self, number: str) -> bytes:
        record = self._require_record(number)
        return self._render_cached(
            PageKind.ADR,
            self.cache_key(PageKind.ADR, number),
            lambda: self._adr_context(record),
            (record.content_fingerprint,),
        )

    def render_search(self) -> bytes:
        return self._render_cached(
            PageKind.SEARCH,
            self.cache_key(PageKind.SEARCH),
            self._search_context,
            tuple(self._collection.fingerprints),
        )

    def render_docs(self, markdown_text: str) -> bytes:
        fingerprint = text_fingerprint(markdown_text)
        return self._render_cached(
            PageKind.DOCS,
            f"docs-{fingerprint}",
            lambda: self._docs_context(markdown_text),
            (fingerprint,),
        )

    # --- Delivery ---

    def render_to_file(self, kind: PageKind, output_path: Path, identifier: str | None = None) -> Path:
        """Write a page to ``output_path`` (a file, or a directory to put it in)."""
        content = self.render_page(kind, identifier)
        target = output_path
        if output_path.is_dir():
            target = output_path / output_file_name(kind, identifier)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(content)
        logger.debug("Wrote %s (%d bytes)", target, len(content))
        return target

    def render_to_stream(self, kind: PageKind, stream: BinaryIO, identifier: str | None = None) -> int:
        """Write a page into an open binary stream; returns bytes written."""
        content = self.render_page(kind, identifier)
        stream.write(content)
        return len(content)

    # --- Internals ---

    def _render_cached(
        self,
        kind: PageKind,
        key: str,
        context_factory: Callable[[], Mapping[str, Any]],
        fingerprints: tuple[str, ...],
    ) -> bytes:
        cached = self._cache.get(key)
        if cached is not None:
            return cached.content

        template_name = TEMPLATE_NAMES[kind]
        set_page_context(kind.value)
        try:
            text = self._templates.render(template_name, context_factory())
        except TemplateError as e:
            raise RenderError(f"Failed to render template {template_name}: {e}") from e
        finally:
            set_page_context(None)

        content = text.encode("utf-8")
        self._cache.put(key, content, fingerprints)
        logger.debug("Rendered %s (%d bytes) as %s", template_name, len(content), key[:24])
        return content

    def _require_identifier(self, identifier: str | None) -> str:
        if not identifier:
            raise DocumentNotFoundError("<missing>")
        return identifier

    def _require_record(self, identifier: str | None) -> AdrRecord:
        number = self._require_identifier(identifier)
        record = self._collection.find(number)
        if record is None:
            raise DocumentNotFoundError(number)
        return record

    def _read_docs(self) -> str:
        path = self._settings.docs_file
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError as e:
            raise DocumentNotFoundError(str(path), kind="Docs file") from e

    def _base_context(self, title: str, breadcrumb: str) -> dict[str, Any]:
        return {
            "title": title,
            "adrs": self._collection.records,
            "base_url": self._settings.base_url,
            "breadcrumb_type": breadcrumb,
        }

    def _index_context(self) -> dict[str, Any]:
        stats: dict[str, int] = {"Total": len(self._collection)}
        stats.update(self._collection.status_counts(self._settings.allowed_statuses))
        stats["Diagrams"] = self._collection.stats.diagram_count
        context = self._base_context(INDEX_TITLE, "index")
        context["stats"] = stats
        return context

    def _adr_context(self, record: AdrRecord) -> dict[str, Any]:
        neighbors = self._collection.neighbors(record.number)
        context = self._base_context(f"ADR-{record.number}: {record.title}", "adr")
        context.update(
            adr=record,
            content=Markup(record.rendered_html),
            previous=neighbors.previous if neighbors else None,
            next=neighbors.next if neighbors else None,
        )
        return context

    def _search_context(self) -> dict[str, Any]:
        return self._base_context(SEARCH_TITLE, "search")

    def _docs_context(self, markdown_text: str) -> dict[str, Any]:
        try:
            html = self._pipeline.render(markdown_text)
        except MarkdownConversionError as e:
            raise RenderError(f"Failed to convert docs markdown: {e}") from e
        context = self._base_context(DOCS_TITLE, "docs")
        context["content"] = Markup(html)
        return context
