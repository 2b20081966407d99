#!/usr/bin/env python3
"""CLI for Exercise Tracker API management tasks.

Usage:
    python -m cli <command>

Commands:
    serve    Run the API with uvicorn on the configured HOST/PORT
    migrate  Run database migrations
"""

import argparse
import logging
import sys
from pathlib import Path

logger = logging.getLogger(__name__)

_API_DIR = Path(__file__).parent


def cmd_serve(reload: bool = False) -> int:
    """Run the API server."""
    import uvicorn

    from core.config import get_settings

    settings = get_settings()
    logger.info("Listening on %s:%d", settings.host, settings.port)
    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        reload=reload,
        log_config=None,
    )
    return 0


def cmd_migrate(target: str = "head") -> int:
    """Run database migrations."""
    from alembic import command
    from alembic.config import Config

    logger.info("Running database migrations...")
    cfg = Config(str(_API_DIR / "alembic.ini"))
    cfg.set_main_option("script_location", str(_API_DIR / "alembic"))
    command.upgrade(cfg, target)
    logger.info("Migrations complete")
    return 0


def main(argv: list[str] | None = None) -> int:
    from core.logger import configure_logging

    configure_logging()

    parser = argparse.ArgumentParser(
        description="Exercise Tracker API CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    serve = subparsers.add_parser("serve", help="Run the API server")
    serve.add_argument(
        "--reload", action="store_true", help="Reload on code changes (development)"
    )

    migrate = subparsers.add_parser("migrate", help="Run database migrations")
    migrate.add_argument(
        "target",
        nargs="?",
        default="head",
        help="Target revision (default: head)",
    )

    args = parser.parse_args(argv)

    if args.command == "serve":
        return cmd_serve(reload=args.reload)
    elif args.command == "migrate":
        return cmd_migrate(args.target)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
