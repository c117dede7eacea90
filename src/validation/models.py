# src/validation/models.py — v1
"""Validation sweep models: ValidationIssue, ValidationResult."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

IssueLevel = Literal["error", "warning"]


class ValidationIssue(BaseModel):
    """One problem found in one file (line 0 means the whole file)."""

    file: str
    line: int = 0
    level: IssueLevel
    message: str

    def __str__(self) -> str:
        location = f"{self.file}:{self.line}" if self.line else self.file
        return f"{self.level.upper()} {location}: {self.message}"


class ValidationResult(BaseModel):
    """All issues of one sweep plus counters."""

    issues: list[ValidationIssue] = Field(default_factory=list)
    file_count: int = 0
    diagram_count: int = 0
    error_count: int = 0
    warning_count: int = 0

    @property
    def has_errors(self) -> bool:
        return self.error_count > 0

    def add(self, file: str, level: IssueLevel, message: str, line: int = 0) -> None:
        self.issues.append(ValidationIssue(file=file, line=line, level=level, message=message))
        if level == "error":
            self.error_count += 1
        else:
            self.warning_count += 1
