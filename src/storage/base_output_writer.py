# src/storage/base_output_writer.py — v1
"""Abstract output writer interface used by the static site build."""

from __future__ import annotations

from abc import ABC, abstractmethod


class BaseOutputWriter(ABC):
    """Unified interface for site output backends."""

    @abstractmethod
    def write(self, path: str, content: bytes | str) -> int:
        """Write content to the given path; returns bytes written."""

    @abstractmethod
    def copy(self, src: str, dst: str) -> int:
        """Copy a file or directory tree; returns the number of files copied."""
