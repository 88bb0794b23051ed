"""CLI entry point for the OpenDCAT server and cache builder."""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from opendcat.config.settings import Settings


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="opendcat",
        description="OpenDCAT — DCAT-US catalog publishing for metadata search engines",
    )
    parser.add_argument("--config", "-c", type=str, default=None, help="Path to YAML configuration file")
    parser.add_argument("--host", type=str, default=None, help="Server bind address (overrides config)")
    parser.add_argument("--port", "-p", type=int, default=None, help="Server port (overrides config)")
    parser.add_argument("--workers", "-w", type=int, default=None, help="Number of worker processes")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload for development")
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["debug", "info", "warning", "error"],
        default=None,
        help="Log level (overrides config)",
    )
    parser.add_argument(
        "--build-cache",
        action="store_true",
        help="Harvest the whole index into the DCAT cache and exit",
    )
    parser.add_argument(
        "--adapter",
        type=str,
        default=None,
        help="Adapter used by --build-cache (defaults to search.default_adapter)",
    )
    parser.add_argument("--version", action="version", version=f"OpenDCAT {_get_version()}")

    args = parser.parse_args(argv)

    from opendcat.api.app import load_settings

    if args.config and not Path(args.config).exists():
        print(f"Error: Config file not found: {args.config}", file=sys.stderr)
        sys.exit(1)
    settings = load_settings(args.config)

    if args.host:
        settings.server.host = args.host
    if args.port:
        settings.server.port = args.port
    if args.workers:
        settings.server.workers = args.workers
    if args.log_level:
        settings.observability.log_level = args.log_level

    if args.build_cache:
        from opendcat.observability.logging import setup_logging

        setup_logging(settings.observability)
        path = asyncio.run(_build_cache(settings, args.adapter))
        print(f"DCAT cache written to {path}")
        return

    # uvicorn rebuilds the app in each worker through the factory, which
    # re-reads configuration from the environment
    if args.config:
        os.environ["OPENDCAT_CONFIG_FILE"] = str(Path(args.config).resolve())
    if args.log_level:
        os.environ["OPENDCAT_OBSERVABILITY__LOG_LEVEL"] = args.log_level

    import uvicorn

    log_level = settings.observability.log_level.lower()
    uvicorn.run(
        "opendcat.api.app:create_app",
        factory=True,
        host=settings.server.host,
        port=settings.server.port,
        workers=settings.server.workers if not args.reload else 1,
        reload=args.reload,
        log_level=log_level,
    )


async def _build_cache(settings: Settings, adapter_name: str | None) -> Path:
    """Initialise the engine and its adapters, harvest, then shut down."""
    from opendcat.core.engine import DcatEngine

    engine = DcatEngine(settings)
    await engine.initialize()
    await engine.adapter_registry.configure(settings.search.adapters)
    try:
        return await engine.build_cache(adapter_name)
    except Exception:
        logging.getLogger(__name__).error("Cache build failed", exc_info=True)
        raise
    finally:
        await engine.shutdown()


def _get_version() -> str:
    """Get the package version."""
    try:
        from opendcat import __version__

        return __version__
    except ImportError:
        return "unknown"


if __name__ == "__main__":
    main()
