# src/main.py - v2
"""CLI entry point: serve, render, stats commands.

Usage:
    md-serve serve [--host HOST] [--port PORT] [--root DIR] [--cache-dir DIR]
    md-serve render <document>
    md-serve stats
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from md_serve import __version__
from md_serve.config.settings import ConfigurationError, Settings, load_settings
from md_serve.logging.logger import setup_logging

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if not hasattr(args, "func"):
        parser.print_help()
        return 1

    try:
        settings = load_settings(args.config, **_overrides(args))
    except (ConfigurationError, ValidationError) as exc:
        print(f"Invalid configuration: {exc}", file=sys.stderr)
        return 2

    _setup_logging(settings, args.verbose)

    try:
        return asyncio.run(args.func(args, settings))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except Exception as exc:
        logger.error("Fatal error: %s", exc, exc_info=args.verbose)
        return 1


def _build_parser() -> argparse.ArgumentParser:
    """Build CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="md-serve",
        description=f"md-serve v{__version__} - serve markdown as HTML",
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
        help="Settings file (default: ./md_serve.toml if present)",
    )

    subparsers = parser.add_subparsers(dest="command")

    # --- serve ---
    p_serve = subparsers.add_parser("serve", help="Run the HTTP server")
    p_serve.add_argument("--host", default=None, help="Listening host")
    p_serve.add_argument("--port", type=int, default=None, help="Listening port")
    p_serve.add_argument(
        "--root", type=Path, default=None, help="Directory to serve",
    )
    p_serve.add_argument(
        "--cache-dir", type=Path, default=None, help="HTML cache directory",
    )
    p_serve.set_defaults(func=_cmd_serve)

    # --- render ---
    p_render = subparsers.add_parser(
        "render", help="Render one document through the cache",
    )
    p_render.add_argument("document", type=Path, help="Path to markup document")
    p_render.add_argument(
        "--cache-dir", type=Path, default=None, help="HTML cache directory",
    )
    p_render.set_defaults(func=_cmd_render)

    # --- stats ---
    p_stats = subparsers.add_parser("stats", help="Show cache statistics")
    p_stats.add_argument(
        "--cache-dir", type=Path, default=None, help="HTML cache directory",
    )
    p_stats.set_defaults(func=_cmd_stats)

    return parser


def _overrides(args: argparse.Namespace) -> dict[str, object]:
    """Settings overrides from CLI flags that were actually given."""
    mapping = {
        "host": "listening_host",
        "port": "listening_port",
        "root": "document_root",
        "cache_dir": "html_cache_path",
    }
    overrides: dict[str, object] = {}
    for flag, field in mapping.items():
        value = getattr(args, flag, None)
        if value is not None:
            overrides[field] = value
    return overrides


async def _cmd_serve(args: argparse.Namespace, settings: Settings) -> int:
    """Run the server until interrupted."""
    from md_serve.server.app import run_server

    await run_server(settings)
    return 0


async def _cmd_render(args: argparse.Namespace, settings: Settings) -> int:
    """Resolve a single document and print where its HTML is."""
    from md_serve.cache.cache_factory import create_render_cache
    from md_serve.core.errors import MdServeError

    cache = create_render_cache(settings)
    try:
        outcome = await cache.resolve_outcome(args.document)
    except MdServeError as exc:
        logger.error("%s", exc)
        return 1

    print(f"{outcome.status}: {outcome.artifact_path}")
    return 0


async def _cmd_stats(args: argparse.Namespace, settings: Settings) -> int:
    """Display what the cache directory holds."""
    from md_serve.cache.cache_factory import create_render_cache

    cache = create_render_cache(settings)
    artifacts = cache.list_artifacts()
    total_bytes = sum(a.stat().st_size for a in artifacts)

    print(f"\nCache statistics for {cache.directory}:")
    print(f"  Artifacts:  {len(artifacts)}")
    print(f"  Total size: {total_bytes} bytes")
    return 0


def _setup_logging(settings: Settings, verbose: bool) -> None:
    """Configure logging for CLI usage."""
    setup_logging(
        level="DEBUG" if verbose else settings.log_level,
        log_format=settings.log_format,
        log_file=settings.log_file,
        rotation=settings.log_rotation,
        retention=settings.log_retention,
    )


if __name__ == "__main__":
    sys.exit(main())
