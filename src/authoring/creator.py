# src/authoring/creator.py — v1
"""Scaffold a new ADR file with the next free number.

    0007-use-kafka-for-events.md
    ^^^^ max existing number + 1 (0001 for an empty or missing directory)
         ^^^^^^^^^^^^^^^^^^^^ kebab-cased title
"""

from __future__ import annotations

import logging
import re
from datetime import date
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from adrgen.config.settings import Settings

logger = logging.getLogger(__name__)

DEFAULT_NEW_STATUS = "Proposed"
MAX_ADR_NUMBER = 9999

_NON_ALNUM_RE = re.compile(r"[^a-z0-9]+")

ADR_SKELETON = """# {title}

## Status

{status}
{category_block}
## Context

*Describe the context and problem statement that led to this decision.*

The issue motivating this decision, and any context that influences or constrains the decision.

## Decision

*Describe the decision that was made.*

We will...

### Rationale

*Explain why this decision was made.*

### Alternatives Considered

*List other options that were considered and why they were not chosen.*

## Consequences

### Positive

- *List positive consequences of this decision*

### Negative

- *List negative consequences of this decision*

### Neutral

- *List neutral consequences that should be noted*

## Implementation

### Next Steps

- [ ] Task 1
- [ ] Task 2
- [ ] Task 3

### Timeline

*Describe the implementation timeline and milestones.*

## Related Decisions

*Link to related ADRs or decisions.*

---

*This ADR was created on {created}*
"""


class AdrExistsError(FileExistsError):
    """Raised when the target file exists and ``force`` is not set."""


def to_kebab_case(text: str) -> str:
    """``"Use Kafka (v3) for Events!"`` -> ``"use-kafka-v3-for-events"``."""
    return _NON_ALNUM_RE.sub("-", text.lower()).strip("-")


def render_skeleton(title: str, status: str, category: str | None = None, created: date | None = None) -> str:
    created = created or date.today()
    category_block = f"\n## Category\n\n{category}\n" if category else ""
    return ADR_SKELETON.format(
        title=title,
        status=status,
        category_block=category_block,
        created=f"{created:%B} {created.day}, {created.year}",
    )


class AdrCreator:
    """Create ADR files in settings.adr_directory."""

    def __init__(self, settings: Settings) -> None:
        self._settings = settings

    def next_number(self, directory: Path | None = None) -> int:
        root = directory or self._settings.adr_directory
        if not root.is_dir():
            return 1
        highest = 0
        for path in root.iterdir():
            name = path.name
            if path.is_dir() or not name.endswith(self._settings.adr_extension):
                continue
            if name == self._settings.template_file_name:
                continue
            if name[:4].isdigit():
                highest = max(highest, int(name[:4]))
        return highest + 1

    def create(
        self,
        title: str,
        status: str = DEFAULT_NEW_STATUS,
        category: str | None = None,
        force: bool = False,
    ) -> Path:
        """Write the skeleton and return the new file's path.

        Raises:
            ValueError: Empty title (after kebab-casing) or numbering exhausted.
            AdrExistsError: Target exists and ``force`` is False.
        """
        slug = to_kebab_case(title)
        if not slug:
            raise ValueError(f"Cannot derive a file name from title {title!r}")
        if category is not None and not self._settings.is_valid_category(category):
            logger.warning("Category %r is not in the allowed list", category)
        if not self._settings.is_valid_status(status):
            logger.warning("Status %r is not in the allowed list", status)

        root = self._settings.adr_directory
        number = self.next_number(root)
        if number > MAX_ADR_NUMBER:
            raise ValueError(f"ADR numbering exhausted (next would be {number})")

        path = root / f"{number:04d}-{slug}{self._settings.adr_extension}"
        if path.exists() and not force:
            raise AdrExistsError(f"ADR file already exists: {path.name} (use --force to overwrite)")

        root.mkdir(parents=True, exist_ok=True)
        path.write_text(render_skeleton(title.strip(), status, category), encoding="utf-8")
        logger.info("Created ADR %04d at %s", number, path)
        return path
