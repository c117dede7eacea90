# src/collection/loader.py — v1
"""Collection loader — scan an ADR directory and parse every ADR file.

Workflow:
    1. List the directory (flat, not recursive)
    2. Skip sub-directories, other extensions and the template file
    3. Skip (with a warning) files whose name is not NNNN-title.md
    4. Parse each remaining file; I/O errors are always fatal, markdown
       conversion errors are fatal unless fail_fast is disabled
    5. Reject duplicate numbers, sort by number, compute stats
"""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import TYPE_CHECKING

from adrgen.collection.models import AdrCollection
from adrgen.core.models import AdrRecord, CollectionStats
from adrgen.extraction.markdown_pipeline import MarkdownConversionError
from adrgen.extraction.record_parser import RecordParser, is_valid_adr_filename
from adrgen.logging.context import set_adr_context

if TYPE_CHECKING:
    from adrgen.config.settings import Settings

logger = logging.getLogger(__name__)


class CollectionLoadError(Exception):
    """Raised when the ADR collection cannot be loaded."""

    def __init__(self, message: str, path: Path | str | None = None) -> None:
        super().__init__(message)
        self.path = str(path) if path is not None else None


class DuplicateAdrNumberError(CollectionLoadError):
    """Raised when two files share the same ADR number."""


class CollectionLoader:
    """Load and sort the ADR collection for one build or serving session."""

    def __init__(self, settings: Settings, parser: RecordParser | None = None) -> None:
        self._settings = settings
        self._parser = parser or RecordParser(settings)

    @property
    def parser(self) -> RecordParser:
        return self._parser

    def discover(self, directory: Path) -> tuple[list[Path], list[str]]:
        """Return (candidate ADR paths, skipped file names) in name order.

        Raises:
            CollectionLoadError: If the directory cannot be listed.
        """
        try:
            entries = sorted(directory.iterdir(), key=lambda p: p.name)
        except OSError as e:
            raise CollectionLoadError(
                f"Failed to read ADR directory {directory}: {e}", directory
            ) from e

        extension = self._settings.adr_extension
        candidates: list[Path] = []
        skipped: list[str] = []
        for path in entries:
            if path.is_dir():
                continue
            if not path.name.endswith(extension):
                continue
            if path.name == self._settings.template_file_name:
                continue
            if not is_valid_adr_filename(path.name, extension):
                logger.warning("Skipping invalid ADR filename: %s", path.name)
                skipped.append(path.name)
                continue
            candidates.append(path)
        return candidates, skipped

    def load(self, directory: Path | str | None = None) -> AdrCollection:
        """Load every ADR in ``directory`` (default: settings.adr_directory).

        Returns:
            AdrCollection sorted by number.

        Raises:
            CollectionLoadError: On unreadable directory/file, on conversion
                failure when fail_fast is set, or on duplicate numbers.
        """
        t0 = time.perf_counter()
        root = Path(directory) if directory is not None else self._settings.adr_directory
        candidates, skipped = self.discover(root)

        records: dict[str, AdrRecord] = {}
        for path in candidates:
            record = self._load_one(path, skipped)
            if record is None:
                continue
            existing = records.get(record.number)
            if existing is not None:
                raise DuplicateAdrNumberError(
                    f"Duplicate ADR number {record.number}: "
                    f"{existing.file_name} and {record.file_name}",
                    path,
                )
            records[record.number] = record

        # Fixed 4-digit width: string order equals numeric order.
        ordered = tuple(sorted(records.values(), key=lambda r: r.number))
        stats = CollectionStats(
            adr_count=len(ordered),
            diagram_count=sum(r.diagram_count for r in ordered),
            skipped_files=skipped,
        )

        logger.info(
            "Loaded %d ADRs from %s (%d diagrams, %d skipped) in %.2fs",
            stats.adr_count, root, stats.diagram_count, len(skipped),
            time.perf_counter() - t0,
        )
        return AdrCollection(records=ordered, stats=stats)

    def _load_one(self, path: Path, skipped: list[str]) -> AdrRecord | None:
        set_adr_context(path.name[:4])
        try:
            record = self._parser.parse_file(path)
        except OSError as e:
            raise CollectionLoadError(f"Failed to read ADR {path}: {e}", path) from e
        except MarkdownConversionError as e:
            if self._settings.fail_fast:
                raise CollectionLoadError(f"Failed to parse ADR {path}: {e}", path) from e
            logger.error("Skipping ADR %s: %s", path.name, e)
            skipped.append(path.name)
            return None
        finally:
            set_adr_context(None)

        logger.debug("Parsed %s: %r (%s)", path.name, record.title, record.status)
        return record


def load_collection(directory: Path | str, settings: Settings) -> AdrCollection:
    """Convenience wrapper: ``CollectionLoader(settings).load(directory)``."""
    return CollectionLoader(settings).load(directory)
