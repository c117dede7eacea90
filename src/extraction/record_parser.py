# src/extraction/record_parser.py — v1
"""Record parser — turn one raw ADR file into an AdrRecord.

Field extraction follows plain markdown conventions:

* number: the 4-digit filename prefix (``0007-use-kafka.md`` -> ``0007``)
* title: first ``# `` heading, else ``Untitled ADR``
* status: first non-blank line under ``## Status``, else ``Unknown``
* category: ``Category: X`` line or a ``## Category`` section, restricted to
  the configured allow-list, else the configured default
* diagram type: first diagram keyword found, in a fixed priority order
"""

from __future__ import annotations

import re
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING

from adrgen.cache.fingerprint import content_fingerprint
from adrgen.core.models import NO_DIAGRAM, AdrRecord
from adrgen.extraction.markdown_pipeline import MarkdownConversionError, MarkdownPipeline

if TYPE_CHECKING:
    from adrgen.config.settings import Settings

DEFAULT_TITLE = "Untitled ADR"
DEFAULT_STATUS = "Unknown"
STATUS_HEADING = "## Status"
CATEGORY_HEADING = "## Category"
CATEGORY_FIELD = "category:"
# How many lines below "## Category" are searched for the value.
CATEGORY_LOOKAHEAD = 10

DIAGRAM_FENCE = "```mermaid"

# First match wins; content often matches several keywords.
DIAGRAM_KEYWORDS: tuple[tuple[str, str], ...] = (
    ("C4Context", "Context"),
    ("C4Container", "Container"),
    ("C4Component", "Component"),
    ("sequenceDiagram", "Sequence"),
    ("stateDiagram", "State"),
    ("flowchart", "Flowchart"),
    (DIAGRAM_FENCE, "Diagram"),
)


class InvalidFilenameError(ValueError):
    """Raised when a file name does not follow ``NNNN-title<ext>``."""


def is_valid_adr_filename(filename: str, extension: str = ".md") -> bool:
    """Four ASCII digits, a dash, at least one character, then the extension."""
    pattern = rf"[0-9]{{4}}-.+{re.escape(extension)}"
    return re.fullmatch(pattern, filename) is not None


def extract_number(filename: str, extension: str = ".md") -> str:
    """Return the 4-digit number of a valid ADR file name."""
    if not is_valid_adr_filename(filename, extension):
        raise InvalidFilenameError(
            f"Invalid ADR filename {filename!r}: expected NNNN-title{extension}"
        )
    return filename[:4]


def extract_title(content: str) -> str:
    for line in content.splitlines():
        if line.startswith("# "):
            title = line[2:].strip()
            if title:
                return title
    return DEFAULT_TITLE


def extract_status(content: str) -> str:
    in_status = False
    for line in content.splitlines():
        trimmed = line.strip()
        if trimmed == STATUS_HEADING:
            in_status = True
            continue
        if in_status:
            if trimmed.startswith("#"):
                break  # next section
            if trimmed:
                return trimmed
    return DEFAULT_STATUS


def extract_category(content: str, settings: Settings) -> str:
    """Scan once; on each line the ``Category:`` field is tried before the heading."""
    lines = content.splitlines()
    for i, line in enumerate(lines):
        trimmed = line.strip()

        if trimmed.lower().startswith(CATEGORY_FIELD):
            value = trimmed[len(CATEGORY_FIELD):].strip()
            if value and settings.is_valid_category(value):
                return value

        if trimmed == CATEGORY_HEADING:
            for following in lines[i + 1 : i + 1 + CATEGORY_LOOKAHEAD]:
                candidate = following.strip()
                if candidate.startswith("##"):
                    break
                if candidate and settings.is_valid_category(candidate):
                    return candidate

    return settings.default_category


def detect_diagram_type(content: str) -> str:
    for keyword, label in DIAGRAM_KEYWORDS:
        if keyword in content:
            return label
    return NO_DIAGRAM


def count_diagrams(content: str) -> int:
    return content.count(DIAGRAM_FENCE)


class RecordParser:
    """Build AdrRecords from raw bytes using one shared MarkdownPipeline."""

    def __init__(self, settings: Settings, pipeline: MarkdownPipeline | None = None) -> None:
        self._settings = settings
        self._pipeline = pipeline or MarkdownPipeline(base_url=settings.base_url)

    @property
    def pipeline(self) -> MarkdownPipeline:
        return self._pipeline

    def parse(
        self,
        raw_bytes: bytes,
        filename: str,
        file_path: str | Path | None = None,
        modified_at: datetime | None = None,
    ) -> AdrRecord:
        """Parse one ADR.

        Raises:
            InvalidFilenameError: If the name is not ``NNNN-title<ext>``.
            MarkdownConversionError: If the bytes are not UTF-8 or the
                markdown engine fails.
        """
        number = extract_number(filename, self._settings.adr_extension)

        try:
            content = raw_bytes.decode("utf-8")
        except UnicodeDecodeError as e:
            raise MarkdownConversionError(f"{filename} is not valid UTF-8: {e}") from e

        return AdrRecord(
            number=number,
            title=extract_title(content),
            status=extract_status(content),
            category=extract_category(content, self._settings),
            raw_content=content,
            rendered_html=self._pipeline.render(content),
            diagram_type=detect_diagram_type(content),
            diagram_count=count_diagrams(content),
            content_fingerprint=content_fingerprint(raw_bytes),
            file_path=str(file_path) if file_path is not None else filename,
            file_name=filename,
            modified_at=modified_at,
        )

    def parse_file(self, path: Path) -> AdrRecord:
        """Read and parse a file; OSError propagates to the caller."""
        raw = path.read_bytes()
        modified = datetime.fromtimestamp(path.stat().st_mtime)
        return self.parse(raw, path.name, file_path=path, modified_at=modified)
