# src/config/settings.py — v1
"""Typed configuration loaded from YAML, environment and .env via pydantic-settings.

Precedence (highest first): explicit overrides (CLI flags), the YAML config
file, ``ADRGEN_*`` environment variables, ``.env``, field defaults.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfigurationError(Exception):
    """Raised when configuration is missing, unreadable or internally inconsistent."""


CONFIG_CANDIDATES: tuple[str, ...] = (
    "adr-config.yaml",
    "adr-config.yml",
    ".adr-config.yaml",
    ".adr-config.yml",
)


class StatusStyle(BaseModel):
    """Visual representation of an ADR status."""

    icon: str = "?"
    color: str = "gray"
    css_class: str = "bg-gray-500"


_FALLBACK_STYLE = StatusStyle()


def _default_status_config() -> dict[str, StatusStyle]:
    return {
        "Accepted": StatusStyle(icon="✓", color="green", css_class="bg-green-500"),
        "Proposed": StatusStyle(icon="●", color="yellow", css_class="bg-yellow-500"),
        "Deprecated": StatusStyle(icon="✗", color="red", css_class="bg-red-500"),
        "Superseded": StatusStyle(icon="↑", color="purple", css_class="bg-purple-500"),
    }


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_prefix="ADRGEN_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # === Sources and output ===
    adr_directory: Path = Path("adr")
    output_directory: Path = Path("docs")
    adr_extension: str = ".md"
    template_file_name: str = "template.md"
    docs_file: Path = Path("README.md")
    static_directory: Path = Path("static")
    template_directory: Path | None = None
    base_url: str = ""

    # === Categories and statuses ===
    default_category: str = "General"
    allowed_categories: list[str] = [
        "Core Architecture",
        "Data Management",
        "Frontend Development",
        "Security",
        "Infrastructure",
        "General",
    ]
    allowed_statuses: list[str] = ["Proposed", "Accepted", "Deprecated", "Superseded"]
    status_config: dict[str, StatusStyle] = Field(default_factory=_default_status_config)

    # === Loading ===
    fail_fast: bool = True

    # === Render cache ===
    cache_backend: Literal["memory", "lru"] = "memory"
    cache_max_entries: int = 256

    # === Dev server ===
    server_host: str = "localhost"
    server_port: int = 8080

    # === Logging ===
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["json", "text"] = "text"
    log_file: Path | None = None
    log_rotation: str = "10MB"
    log_retention: int = 5
    verbose: bool = False

    # --- Validators ---

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.strip().rstrip("/")

    @field_validator("adr_extension")
    @classmethod
    def validate_extension(cls, v: str) -> str:
        if not v.startswith("."):
            raise ValueError("adr_extension must start with '.'")
        return v

    @model_validator(mode="after")
    def validate_config_consistency(self) -> Settings:
        """Cross-field rules; fills a fallback style for unstyled statuses."""
        errors: list[str] = []

        if self.cache_max_entries <= 0:
            errors.append("cache_max_entries must be > 0")
        if not self.allowed_categories:
            errors.append("allowed_categories must not be empty")
        if not self.default_category:
            errors.append("default_category must not be empty")

        if errors:
            raise ConfigurationError("; ".join(errors))

        for status in self.allowed_statuses:
            if status not in self.status_config:
                self.status_config[status] = _FALLBACK_STYLE.model_copy()

        return self

    # --- Read accessors ---

    def is_valid_category(self, category: str) -> bool:
        return category in self.allowed_categories

    def is_valid_status(self, status: str) -> bool:
        return status in self.allowed_statuses

    def status_icon(self, status: str) -> str:
        return self.status_config.get(status, _FALLBACK_STYLE).icon

    def status_class(self, status: str) -> str:
        return self.status_config.get(status, _FALLBACK_STYLE).css_class

    def status_color(self, status: str) -> str:
        return self.status_config.get(status, _FALLBACK_STYLE).color


def find_config_file(search_dir: Path | None = None) -> Path | None:
    """Return the first conventional config file in ``search_dir`` (default: cwd)."""
    root = search_dir or Path.cwd()
    for candidate in CONFIG_CANDIDATES:
        path = root / candidate
        if path.is_file():
            return path
    return None


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigurationError(f"Failed to read config file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Failed to parse config file {path}: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {path} must contain a mapping")
    return data


def load_settings(config_path: Path | str | None = None, **overrides: object) -> Settings:
    """Load settings from a YAML config file with optional overrides.

    Args:
        config_path: Explicit config file. When None, the conventional
            candidates in the working directory are tried; no file means
            defaults (plus environment).
        **overrides: Field-level overrides; None values are ignored so CLI
            flags that were not given do not mask file values.

    Returns:
        Validated Settings instance.

    Raises:
        ConfigurationError: If the file is missing/unreadable or settings are
            inconsistent.
    """
    values: dict[str, Any] = {}

    if config_path is not None:
        path = Path(config_path)
        if not path.is_file():
            raise ConfigurationError(f"Config file not found: {path}")
    else:
        path = find_config_file()

    if path is not None:
        values.update(_read_yaml(path))

    values.update({k: v for k, v in overrides.items() if v is not None})

    try:
        return Settings(**values)  # type: ignore[arg-type]
    except ValidationError as e:
        raise ConfigurationError(str(e)) from e
