# src/__init__.py — v1
"""adr-gen: render Architecture Decision Records as a static site or a live dev server."""

from adrgen.version import __version__

__all__ = ["__version__"]
