# src/render/engine.py — v1
"""Jinja2 template engine adapter.

Bundled templates live next to this module; a user template directory, when
configured, is searched first so single pages can be overridden.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import TYPE_CHECKING, Any, Protocol

from jinja2 import (
    ChoiceLoader,
    Environment,
    FileSystemLoader,
    StrictUndefined,
    select_autoescape,
)

from adrgen.core.models import AdrRecord

if TYPE_CHECKING:
    from adrgen.config.settings import Settings

BUNDLED_TEMPLATES = Path(__file__).with_name("templates")


class TemplateRenderer(Protocol):
    """Anything that turns (template name, context) into text deterministically."""

    def render(self, template_name: str, context: Mapping[str, Any]) -> str: ...


def group_by_category(records: Iterable[AdrRecord], settings: Settings) -> dict[str, list[AdrRecord]]:
    """Group in allowed-category order; unknown categories last, empty ones omitted."""
    groups: dict[str, list[AdrRecord]] = {}
    for record in records:
        groups.setdefault(record.category or settings.default_category, []).append(record)
    ordered = {c: groups.pop(c) for c in settings.allowed_categories if c in groups}
    ordered.update(sorted(groups.items()))
    return ordered


class JinjaTemplateRenderer:
    """TemplateRenderer backed by a jinja2 Environment."""

    def __init__(self, settings: Settings, template_dirs: Iterable[Path] | None = None) -> None:
        self._settings = settings
        dirs = list(template_dirs or [])
        if settings.template_directory is not None:
            dirs.append(settings.template_directory)
        dirs.append(BUNDLED_TEMPLATES)
        self._env = Environment(
            loader=ChoiceLoader([FileSystemLoader(str(d)) for d in dirs]),
            autoescape=select_autoescape(["html"]),
            undefined=StrictUndefined,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self._env.filters.update(
            status_class=settings.status_class,
            status_icon=settings.status_icon,
            status_color=settings.status_color,
            group_by_category=lambda records: group_by_category(records, settings),
            contains=lambda s, sub: sub.lower() in s.lower(),
        )
        self._env.globals.update(config=settings, base_url=settings.base_url)

    @property
    def environment(self) -> Environment:
        return self._env

    def render(self, template_name: str, context: Mapping[str, Any]) -> str:
        return self._env.get_template(template_name).render(**context)


__all__ = ["JinjaTemplateRenderer", "TemplateRenderer", "group_by_category"]
