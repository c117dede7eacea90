# src/logging/context.py — v1
"""Contextual logging support — attach adr_number, page, request_id to log records."""

from __future__ import annotations

import contextvars
from dataclasses import dataclass
from typing import Any

# Context variables for structured logging, set per file, page or request.
_adr_number: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "adr_number", default=None
)
_page: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "page", default=None
)
_request_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "request_id", default=None
)


@dataclass
class LogContext:
    """Immutable snapshot of current logging context."""

    adr_number: str | None = None
    page: str | None = None
    request_id: str | None = None

    def as_dict(self) -> dict[str, Any]:
        """Return non-None fields as dict for JSON log injection."""
        return {k: v for k, v in self.__dict__.items() if v is not None}


def get_context() -> LogContext:
    """Snapshot current context variables."""
    return LogContext(
        adr_number=_adr_number.get(),
        page=_page.get(),
        request_id=_request_id.get(),
    )


def set_adr_context(adr_number: str | None) -> None:
    """Set the ADR currently being parsed (None to clear)."""
    _adr_number.set(adr_number)


def set_page_context(page: str | None) -> None:
    """Set the page currently being rendered (None to clear)."""
    _page.set(page)


def set_request_context(request_id: str | None) -> None:
    """Set the dev-server request id (called once per request)."""
    _request_id.set(request_id)


def clear_context() -> None:
    """Reset all context variables."""
    _adr_number.set(None)
    _page.set(None)
    _request_id.set(None)
