# src/validation/validator.py — v1
"""Advisory validation sweep over an ADR directory.

Checks, per file:
    * file name is ``NNNN-kebab-case-title.md``
    * required sections: Status, Context, Decision, Consequences
    * one non-empty ``# Title``
    * diagram fences are closed
    * status is one of the allowed statuses (warning)
    * strict mode: lines over 120 characters, trailing whitespace (warnings)
and across files: duplicate numbers and gaps in the numbering.

Issues are collected in a ValidationResult; nothing here raises for content
problems. The build itself does not depend on this sweep.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import TYPE_CHECKING

from adrgen.extraction.record_parser import DEFAULT_STATUS, DIAGRAM_FENCE, extract_status
from adrgen.validation.models import ValidationResult

if TYPE_CHECKING:
    from adrgen.config.settings import Settings

logger = logging.getLogger(__name__)

STRICT_FILENAME_RE = re.compile(r"^[0-9]{4}-[a-z0-9-]+\.md$")
REQUIRED_SECTIONS = ("Status", "Context", "Decision", "Consequences")
MAX_LINE_LENGTH = 120
# A second "# " heading this close to the top is treated as part of the title block.
TITLE_BLOCK_LINES = 10


class AdrValidator:
    """Validate every ADR file in a directory."""

    def __init__(self, settings: Settings, strict: bool = False) -> None:
        self._settings = settings
        self._strict = strict

    def validate_all(self, directory: Path | str | None = None) -> ValidationResult:
        """Run the sweep.

        Raises:
            OSError: If the directory or a file cannot be read.
        """
        root = Path(directory) if directory is not None else self._settings.adr_directory
        result = ValidationResult()

        names: list[str] = []
        for path in sorted(root.iterdir(), key=lambda p: p.name):
            if path.is_dir() or not path.name.endswith(self._settings.adr_extension):
                continue
            if path.name == self._settings.template_file_name:
                continue
            if STRICT_FILENAME_RE.match(path.name):
                names.append(path.name)
            else:
                result.add(
                    path.name, "error",
                    "Invalid ADR filename format. Expected: NNNN-kebab-case-title.md",
                )

        result.file_count = len(names)
        self._check_numbering(names, result)

        for name in names:
            self.validate_file(root / name, result)

        logger.info(
            "Validated %d ADR(s): %d error(s), %d warning(s)",
            result.file_count, result.error_count, result.warning_count,
        )
        return result

    def validate_file(self, path: Path, result: ValidationResult | None = None) -> ValidationResult:
        """Validate a single file, appending to ``result`` when given."""
        result = result if result is not None else ValidationResult(file_count=1)
        content = path.read_text(encoding="utf-8")
        lines = content.split("\n")
        name = path.name

        self._check_sections(name, lines, result)
        self._check_title(name, lines, result)
        result.diagram_count += self._check_diagrams(name, lines, result)
        self._check_status(name, content, result)
        if self._strict:
            self._check_strict(name, lines, result)
        return result

    # --- Checks ---

    @staticmethod
    def _check_numbering(names: list[str], result: ValidationResult) -> None:
        numbers = [int(name[:4]) for name in names]
        seen: set[int] = set()
        for name, number in zip(names, numbers):
            if number in seen:
                result.add(name, "error", f"Duplicate ADR number: {number:04d}")
            seen.add(number)

        unique = sorted(seen)
        for prev, cur in zip(unique, unique[1:]):
            if cur != prev + 1:
                result.add(
                    f"ADR-{cur:04d}", "error",
                    f"Gap in ADR numbering: {cur:04d} follows {prev:04d}",
                )

    @staticmethod
    def _check_sections(name: str, lines: list[str], result: ValidationResult) -> None:
        found: set[str] = set()
        for line in lines:
            trimmed = line.strip()
            if trimmed.startswith("## "):
                section = trimmed[3:].strip().lower()
                found.update(s for s in REQUIRED_SECTIONS if s.lower() == section)
        for section in REQUIRED_SECTIONS:
            if section not in found:
                result.add(name, "error", f"Missing required section: {section}")

    @staticmethod
    def _check_title(name: str, lines: list[str], result: ValidationResult) -> None:
        has_title = False
        for i, line in enumerate(lines):
            trimmed = line.strip()
            if not (trimmed.startswith("# ") or trimmed == "#"):
                continue
            if not has_title:
                has_title = True
                if not trimmed[1:].strip():
                    result.add(name, "error", "ADR title cannot be empty", line=i + 1)
            elif i > TITLE_BLOCK_LINES:
                result.add(
                    name, "warning",
                    "Multiple H1 headings found. ADRs should have only one main title",
                    line=i + 1,
                )
        if not has_title:
            result.add(name, "error", "ADR must have a main title (# Title)")

    @staticmethod
    def _check_diagrams(name: str, lines: list[str], result: ValidationResult) -> int:
        count = 0
        open_at = 0
        for i, line in enumerate(lines):
            trimmed = line.strip()
            if trimmed == DIAGRAM_FENCE:
                count += 1
                open_at = i + 1
            elif trimmed == "```" and open_at:
                open_at = 0
        if open_at:
            result.add(name, "error", "Unclosed Mermaid diagram block", line=open_at)
        return count

    def _check_status(self, name: str, content: str, result: ValidationResult) -> None:
        status = extract_status(content)
        if status == DEFAULT_STATUS:
            return  # reported as a missing section
        if not self._settings.is_valid_status(status):
            allowed = ", ".join(self._settings.allowed_statuses)
            result.add(name, "warning", f"Unknown status {status!r} (allowed: {allowed})")

    @staticmethod
    def _check_strict(name: str, lines: list[str], result: ValidationResult) -> None:
        for i, line in enumerate(lines):
            if len(line) > MAX_LINE_LENGTH:
                result.add(name, "warning", f"Line exceeds {MAX_LINE_LENGTH} characters", line=i + 1)
            if line.endswith((" ", "\t")):
                result.add(name, "warning", "Trailing whitespace", line=i + 1)
