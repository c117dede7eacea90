# src/render/assets.py — v1
"""Static assets for the generated site.

A project ``static/`` directory is copied as-is into ``<output>/static``.
Without one, the minimal bundled stylesheet and script are written instead
so generated pages still render.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from adrgen.storage.base_output_writer import BaseOutputWriter

if TYPE_CHECKING:
    from adrgen.config.settings import Settings

logger = logging.getLogger(__name__)

BUNDLED_STATIC = Path(__file__).with_name("static")
STATIC_OUTPUT = "static"


def static_source(settings: Settings) -> Path:
    """Directory assets are taken from: the project's, else the bundled one."""
    if settings.static_directory.is_dir():
        return settings.static_directory
    return BUNDLED_STATIC


def copy_static_assets(settings: Settings, writer: BaseOutputWriter) -> int:
    """Copy assets under ``static/`` of the writer's root; returns the file count."""
    source = static_source(settings)
    if source == BUNDLED_STATIC:
        logger.info("No %s directory found, writing bundled assets", settings.static_directory)
    count = writer.copy(source, STATIC_OUTPUT)
    logger.debug("Copied %d asset(s) from %s", count, source)
    return count


def resolve_static_file(settings: Settings, relative: str) -> Path | None:
    """Map a ``/static/<relative>`` request onto a file, refusing traversal.

    Returns None when the path escapes the asset directory or is not a file.
    """
    root = static_source(settings).resolve()
    candidate = (root / relative.lstrip("/")).resolve()
    if candidate != root and root not in candidate.parents:
        return None
    if not candidate.is_file():
        return None
    return candidate
