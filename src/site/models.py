# src/site/models.py — v1
"""Static build result model."""

from __future__ import annotations

from pydantic import BaseModel, Field


class BuildStats(BaseModel):
    """Summary of one static site build."""

    adr_count: int = 0
    page_count: int = 0
    asset_count: int = 0
    diagram_count: int = 0
    skipped_files: list[str] = Field(default_factory=list)
    duration_seconds: float = 0.0
