"""CLI entry point for the HubSearch server."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hubsearch",
        description="HubSearch — search and autocomplete service for the community platform",
    )
    parser.add_argument("--config", "-c", type=str, default=None, help="Path to YAML configuration file")
    parser.add_argument("--host", type=str, default=None, help="Server bind address (overrides config)")
    parser.add_argument("--port", "-p", type=int, default=None, help="Server port (overrides config)")
    parser.add_argument("--workers", "-w", type=int, default=None, help="Number of worker processes")
    parser.add_argument(
        "--store",
        choices=["memory", "http"],
        default=None,
        help="Record store backend (overrides config)",
    )
    parser.add_argument("--seed", type=str, default=None, help="Seed file for the memory store (YAML or JSON)")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload for development")
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["debug", "info", "warning", "error"],
        default=None,
        help="Log level (overrides config)",
    )
    parser.add_argument("--version", action="version", version=f"HubSearch {_get_version()}")
    return parser


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point for the HubSearch server."""
    args = build_parser().parse_args(argv)

    log_level = (args.log_level or "info").upper()
    logging.basicConfig(
        level=getattr(logging, log_level),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    from hubsearch.config.settings import Settings

    if args.config:
        config_path = Path(args.config)
        if not config_path.exists():
            print(f"Error: Config file not found: {config_path}", file=sys.stderr)
            sys.exit(1)
        settings = Settings.from_yaml(config_path)
    else:
        settings = Settings()

    if args.host:
        settings.server.host = args.host
    if args.port:
        settings.server.port = args.port
    if args.workers:
        settings.server.workers = args.workers
    if args.store:
        settings.stores.backend = args.store
    if args.seed:
        if not Path(args.seed).exists():
            print(f"Error: Seed file not found: {args.seed}", file=sys.stderr)
            sys.exit(1)
        settings.stores.seed_path = args.seed
    if args.log_level:
        settings.observability.log_level = args.log_level

    import uvicorn

    from hubsearch.api.app import create_app

    if args.reload or settings.server.workers > 1:
        # Reload and multi-worker modes need an import string; they rebuild
        # settings from the environment in each process.
        uvicorn.run(
            "hubsearch.api.app:create_app",
            factory=True,
            host=settings.server.host,
            port=settings.server.port,
            workers=settings.server.workers if not args.reload else 1,
            reload=args.reload,
            log_level=log_level.lower(),
        )
        return

    uvicorn.run(
        create_app(settings),
        host=settings.server.host,
        port=settings.server.port,
        log_level=log_level.lower(),
    )


def _get_version() -> str:
    try:
        from hubsearch import __version__

        return __version__
    except ImportError:
        return "unknown"


if __name__ == "__main__":
    main()
