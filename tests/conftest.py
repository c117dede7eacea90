# tests/conftest.py — v1
"""Shared test fixtures for all unit and integration tests.

Provides isolated Settings and an on-disk ADR directory with three records.
No network and no working-directory state: every path lives under tmp_path.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from adrgen.config.settings import Settings
from adrgen.logging.context import clear_context


ADR_0001 = """# Record architecture decisions

## Status

Accepted

## Category

Core Architecture

## Context

We need to record the architectural decisions made on this project.

## Decision

We will use Architecture Decision Records. The first one is [Use PostgreSQL](0002-use-postgresql.md).

## Consequences

Decisions are documented next to the code.
"""

ADR_0002 = """# Use PostgreSQL

Category: Data Management

## Status

Proposed

## Context

The service needs a relational store with **strong** consistency.

## Decision

```mermaid
flowchart LR
    A[App] --> B[(PostgreSQL)]
```

## Consequences

Back to [the first record](0001-record-architecture-decisions.md#context).
"""

ADR_0003 = """# Deprecate the SOAP gateway

## Status

Deprecated

## Context

Nobody calls the SOAP endpoints anymore.

## Decision

Remove the gateway.

## Consequences

One less service to run.
"""

SAMPLE_ADRS: dict[str, str] = {
    "0001-record-architecture-decisions.md": ADR_0001,
    "0002-use-postgresql.md": ADR_0002,
    "0003-deprecate-soap-gateway.md": ADR_0003,
}


def _write_files(directory: Path, files: dict[str, str]) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    for name, content in files.items():
        (directory / name).write_text(content, encoding="utf-8")
    return directory


@pytest.fixture(autouse=True)
def _reset_log_context():
    clear_context()
    yield
    clear_context()


@pytest.fixture
def write_adrs() -> Callable[[Path, dict[str, str]], Path]:
    """Write name -> content pairs into a directory (created if needed)."""
    return _write_files


@pytest.fixture
def sample_adrs() -> dict[str, str]:
    return dict(SAMPLE_ADRS)


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Settings rooted in tmp_path, ignoring any .env in the working directory."""
    return Settings(
        _env_file=None,
        adr_directory=tmp_path / "adr",
        output_directory=tmp_path / "site",
        docs_file=tmp_path / "README.md",
        static_directory=tmp_path / "static",
    )


@pytest.fixture
def adr_dir(settings: Settings) -> Path:
    """ADR directory with three valid records plus files the loader must ignore."""
    directory = _write_files(settings.adr_directory, SAMPLE_ADRS)
    (directory / "template.md").write_text("# Title\n\n## Status\n\nProposed\n", encoding="utf-8")
    (directory / "notes.txt").write_text("not an ADR", encoding="utf-8")
    (directory / "drafts").mkdir()
    return directory
