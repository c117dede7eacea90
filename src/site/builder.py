# src/site/builder.py — v1
"""Static site build: load once, render every page to disk.

Output layout (under settings.output_directory):
    index.html
    adr-NNNN.html        one per loaded ADR
    search.html
    docs.html            only when the docs file exists
    search-index.json
    static/              project assets, or the bundled minimal ones
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

from adrgen.collection.loader import CollectionLoader
from adrgen.collection.models import AdrCollection
from adrgen.core.models import PageKind
from adrgen.render.assets import copy_static_assets
from adrgen.render.renderer import SiteRenderer
from adrgen.render.search_index import build_search_index
from adrgen.site.models import BuildStats
from adrgen.storage.local_writer import LocalWriter

if TYPE_CHECKING:
    from adrgen.config.settings import Settings

logger = logging.getLogger(__name__)

SEARCH_INDEX_FILE = "search-index.json"


class SiteBuilder:
    """Orchestrate one batch build. Not reusable across configurations."""

    def __init__(
        self,
        settings: Settings,
        loader: CollectionLoader | None = None,
        writer: LocalWriter | None = None,
    ) -> None:
        self._settings = settings
        self._loader = loader or CollectionLoader(settings)
        self._writer = writer or LocalWriter(settings.output_directory)
        self._renderer: SiteRenderer | None = None

    @property
    def renderer(self) -> SiteRenderer | None:
        """Renderer of the last build, None before ``build`` runs."""
        return self._renderer

    def build(self) -> BuildStats:
        """Build the whole site.

        Raises:
            CollectionLoadError: If the ADR collection cannot be loaded.
            RenderError: If a page template fails.
            OSError: If output cannot be written.
        """
        t0 = time.perf_counter()
        output = self._settings.output_directory
        output.mkdir(parents=True, exist_ok=True)

        collection = self._loader.load(self._settings.adr_directory)
        renderer = SiteRenderer(self._settings, collection, pipeline=self._loader.parser.pipeline)
        self._renderer = renderer

        page_count = self._write_pages(renderer, collection)

        index = build_search_index(collection)
        self._writer.write(SEARCH_INDEX_FILE, index.to_json())
        logger.debug("Wrote %s with %d item(s)", SEARCH_INDEX_FILE, index.generated)

        asset_count = copy_static_assets(self._settings, self._writer)

        stats = BuildStats(
            adr_count=len(collection),
            page_count=page_count,
            asset_count=asset_count,
            diagram_count=collection.stats.diagram_count,
            skipped_files=list(collection.stats.skipped_files),
            duration_seconds=round(time.perf_counter() - t0, 3),
        )
        logger.info(
            "Built %d pages for %d ADRs (%d diagrams, %d assets) in %.2fs -> %s",
            stats.page_count, stats.adr_count, stats.diagram_count,
            stats.asset_count, stats.duration_seconds, output,
        )
        return stats

    def _write_pages(self, renderer: SiteRenderer, collection: AdrCollection) -> int:
        output = self._settings.output_directory
        renderer.render_to_file(PageKind.INDEX, output)
        count = 1

        for record in collection:
            renderer.render_to_file(PageKind.ADR, output, record.number)
            count += 1

        renderer.render_to_file(PageKind.SEARCH, output)
        count += 1

        if self._settings.docs_file.is_file():
            renderer.render_to_file(PageKind.DOCS, output)
            count += 1
        else:
            logger.info("Docs file %s not found, skipping docs page", self._settings.docs_file)

        return count


def build_site(settings: Settings) -> BuildStats:
    """Convenience wrapper: ``SiteBuilder(settings).build()``."""
    return SiteBuilder(settings).build()
