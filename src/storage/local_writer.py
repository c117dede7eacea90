# src/storage/local_writer.py — v2
"""Local filesystem output writer (default backend)."""

from __future__ import annotations

import shutil
from pathlib import Path

from adrgen.storage.base_output_writer import BaseOutputWriter


class LocalWriter(BaseOutputWriter):
    """Write site output to the local filesystem."""

    def __init__(self, base_path: str | Path | None = None) -> None:
        """Initialize with optional base path.

        Args:
            base_path: Root directory for all writes. If None, paths are used as given.
        """
        self._base = Path(base_path) if base_path else None

    @property
    def base_path(self) -> Path | None:
        return self._base

    def _resolve(self, path: str | Path) -> Path:
        """Resolve a path relative to base_path."""
        if self._base is not None:
            return self._base / path
        return Path(path)

    def write(self, path: str | Path, content: bytes | str) -> int:
        """Write content to a local file path, creating parent directories."""
        p = self._resolve(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        data = content if isinstance(content, bytes) else content.encode("utf-8")
        p.write_bytes(data)
        return len(data)

    def copy(self, src: str | Path, dst: str | Path) -> int:
        """Copy a file or directory tree; ``src`` is not resolved against base_path."""
        src_path = Path(src)
        dst_path = self._resolve(dst)
        dst_path.parent.mkdir(parents=True, exist_ok=True)
        if src_path.is_dir():
            shutil.copytree(str(src_path), str(dst_path), dirs_exist_ok=True)
            return sum(1 for p in src_path.rglob("*") if p.is_file())
        shutil.copy2(str(src_path), str(dst_path))
        return 1

