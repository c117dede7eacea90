# src/core/models.py — v1
"""Shared Pydantic domain models used across modules.

No module redefines these types; all imports come from core.models.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

NO_DIAGRAM = "none"


class PageKind(str, Enum):
    """Kinds of page the renderer knows how to produce."""

    INDEX = "index"
    ADR = "adr"
    SEARCH = "search"
    DOCS = "docs"


# === DOCUMENT RECORD ===


class AdrRecord(BaseModel):
    """One parsed Architecture Decision Record.

    ``content_fingerprint`` is the SHA-256 of the raw file bytes and is the
    only input used for change detection and render cache keys.
    """

    model_config = ConfigDict(frozen=True)

    number: str = Field(pattern=r"^[0-9]{4}$")
    title: str
    status: str
    category: str
    raw_content: str
    rendered_html: str
    diagram_type: str = NO_DIAGRAM
    diagram_count: int = 0
    content_fingerprint: str
    file_path: str
    file_name: str
    modified_at: datetime | None = None

    @property
    def page_name(self) -> str:
        """Generated HTML file name for this ADR (``adr-NNNN.html``)."""
        return f"adr-{self.number}.html"

    @property
    def has_diagram(self) -> bool:
        return self.diagram_type != NO_DIAGRAM


# === COLLECTION STATS ===


class CollectionStats(BaseModel):
    """Aggregate numbers for one load cycle."""

    adr_count: int = 0
    diagram_count: int = 0
    skipped_files: list[str] = Field(default_factory=list)


# === SEARCH INDEX ===


class SearchItem(BaseModel):
    """One entry of ``search-index.json``."""

    model_config = ConfigDict(populate_by_name=True)

    number: str
    title: str
    status: str
    content: str
    diagram_type: str = Field(serialization_alias="diagramType")
    url: str


class SearchIndex(BaseModel):
    """Search index document served as JSON."""

    generated: int
    items: list[SearchItem] = Field(default_factory=list)

    def to_json(self, indent: int | None = 2) -> str:
        return self.model_dump_json(by_alias=True, indent=indent)
