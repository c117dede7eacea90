# src/main.py — v1
"""CLI entry point — build, serve, validate, new commands.

Usage:
    adr-gen build [options]
    adr-gen serve [--host HOST] [--port PORT]
    adr-gen validate [--strict]
    adr-gen new "<title>" [--status STATUS] [--category CATEGORY] [--force]
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from adrgen.config.settings import ConfigurationError, Settings, load_settings
from adrgen.logging.logger import setup_logging
from adrgen.version import __version__

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    setup_logging("DEBUG" if args.verbose else "INFO")

    if not hasattr(args, "func"):
        parser.print_help()
        return 1

    try:
        settings = _load_settings(args)
    except ConfigurationError as exc:
        logger.error("Invalid configuration: %s", exc)
        return 1
    _setup_logging(settings)

    try:
        return args.func(args, settings)
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except Exception as exc:
        logger.error("%s failed: %s", args.command, exc, exc_info=settings.verbose)
        return 1


def cli() -> None:
    """Console script entry point."""
    sys.exit(main())


def _build_parser() -> argparse.ArgumentParser:
    """Build CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="adr-gen",
        description=f"adr-gen v{__version__} — static site generator for Architecture Decision Records",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "-c", "--config", type=Path, default=None,
        help="Config file (default: adr-config.yaml in the working directory)",
    )

    subparsers = parser.add_subparsers(dest="command")

    # --- build ---
    p_build = subparsers.add_parser(
        "build", help="Generate the static site",
    )
    p_build.add_argument(
        "-i", "--input", dest="adr_directory", type=Path, default=None,
        help="ADR directory (default: adr)",
    )
    p_build.add_argument(
        "-o", "--output", dest="output_directory", type=Path, default=None,
        help="Output directory (default: docs)",
    )
    p_build.add_argument(
        "--base-url", default=None,
        help="URL prefix for generated links (default: root-relative)",
    )
    p_build.set_defaults(func=_cmd_build)

    # --- serve ---
    p_serve = subparsers.add_parser(
        "serve", help="Serve the site from memory for local preview",
    )
    p_serve.add_argument(
        "-i", "--input", dest="adr_directory", type=Path, default=None,
        help="ADR directory (default: adr)",
    )
    p_serve.add_argument(
        "--host", dest="server_host", default=None,
        help="Bind address (default: localhost)",
    )
    p_serve.add_argument(
        "-p", "--port", dest="server_port", type=int, default=None,
        help="Port (default: 8080)",
    )
    p_serve.set_defaults(func=_cmd_serve)

    # --- validate ---
    p_validate = subparsers.add_parser(
        "validate", help="Check ADR files for structural problems",
    )
    p_validate.add_argument(
        "-i", "--input", dest="adr_directory", type=Path, default=None,
        help="ADR directory (default: adr)",
    )
    p_validate.add_argument(
        "--strict", action="store_true",
        help="Also warn on long lines and trailing whitespace",
    )
    p_validate.set_defaults(func=_cmd_validate)

    # --- new ---
    p_new = subparsers.add_parser(
        "new", help="Create a new ADR from the skeleton",
    )
    p_new.add_argument("title", help="Decision title")
    p_new.add_argument(
        "-s", "--status", default="Proposed",
        help="Initial status (default: Proposed)",
    )
    p_new.add_argument(
        "--category", default=None,
        help="Category written into the new ADR",
    )
    p_new.add_argument(
        "-f", "--force", action="store_true",
        help="Overwrite an existing file",
    )
    p_new.set_defaults(func=_cmd_new)

    return parser


def _load_settings(args: argparse.Namespace) -> Settings:
    overrides = {
        key: getattr(args, key, None)
        for key in ("adr_directory", "output_directory", "base_url", "server_host", "server_port")
    }
    if args.verbose:
        overrides["verbose"] = True
        overrides["log_level"] = "DEBUG"
    return load_settings(args.config, **overrides)


def _setup_logging(settings: Settings) -> None:
    """Reconfigure logging from the loaded settings."""
    setup_logging(
        level=settings.log_level,
        log_format=settings.log_format,
        log_file=settings.log_file,
        rotation=settings.log_rotation,
        retention=settings.log_retention,
    )


def _cmd_build(args: argparse.Namespace, settings: Settings) -> int:
    """Execute a full static build."""
    from adrgen.site.builder import SiteBuilder

    if not settings.adr_directory.is_dir():
        logger.error("ADR directory not found: %s", settings.adr_directory)
        return 1

    stats = SiteBuilder(settings).build()

    print("\nBuild complete:")
    print(f"  ADRs:         {stats.adr_count}")
    print(f"  Pages:        {stats.page_count}")
    print(f"  Diagrams:     {stats.diagram_count}")
    print(f"  Assets:       {stats.asset_count}")
    if stats.skipped_files:
        print(f"  Skipped:      {', '.join(stats.skipped_files)}")
    print(f"  Duration:     {stats.duration_seconds:.2f}s")
    print(f"  Output:       {settings.output_directory}")
    return 0


def _cmd_serve(args: argparse.Namespace, settings: Settings) -> int:
    """Run the development server until interrupted."""
    from adrgen.server.dev_server import DevServer

    if not settings.adr_directory.is_dir():
        logger.error("ADR directory not found: %s", settings.adr_directory)
        return 1

    server = DevServer(settings)
    server.create_server()
    print(f"Serving ADRs at {server.url} (Ctrl+C to stop)")
    server.start()
    return 0


def _cmd_validate(args: argparse.Namespace, settings: Settings) -> int:
    """Validate ADR files; non-zero exit when errors are found."""
    from adrgen.validation.validator import AdrValidator

    if not settings.adr_directory.is_dir():
        logger.error("ADR directory not found: %s", settings.adr_directory)
        return 1

    result = AdrValidator(settings, strict=args.strict).validate_all()

    for issue in result.issues:
        print(f"  {issue}")
    print(f"\nValidated {result.file_count} ADR(s), {result.diagram_count} diagram(s):")
    print(f"  Errors:       {result.error_count}")
    print(f"  Warnings:     {result.warning_count}")
    return 1 if result.has_errors else 0


def _cmd_new(args: argparse.Namespace, settings: Settings) -> int:
    """Create a new ADR file."""
    from adrgen.authoring.creator import AdrCreator

    path = AdrCreator(settings).create(
        args.title, status=args.status, category=args.category, force=args.force,
    )
    print(f"Created {path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
