"""Burrow CLI: serve a routes directory and inspect how it resolves.

Entry point registered as ``burrow`` in ``pyproject.toml``::

    [project.scripts]
    burrow = "burrow.cli:main"
"""

import argparse
import logging
import os
import sys

from burrow.config import AppConfig, add_config_arguments, config_from_args, config_from_env
from burrow.errors import ConfigurationError


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``burrow`` command."""
    parser = argparse.ArgumentParser(
        prog="burrow",
        description="Burrow: a web server whose routing table is a directory tree.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- burrow run -------------------------------------------------------
    run_parser = subparsers.add_parser("run", help="Start the server")
    add_config_arguments(run_parser)

    # -- burrow resolve ---------------------------------------------------
    resolve_parser = subparsers.add_parser(
        "resolve",
        help="Show the file, params and middleware a path resolves to",
    )
    resolve_parser.add_argument("path", help="Request path (e.g. /shoes/42)")
    add_config_arguments(resolve_parser)

    # -- burrow routes ----------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List the routing table")
    add_config_arguments(routes_parser)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    try:
        config = config_from_args(config_from_env(AppConfig(), os.environ), args)
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(2) from exc

    configure_logging(config)

    if args.command == "run":
        from burrow.cli._run import run_server

        run_server(config)
    elif args.command == "resolve":
        from burrow.cli._resolve import run_resolve

        run_resolve(config, args.path)
    elif args.command == "routes":
        from burrow.cli._routes import run_routes

        run_routes(config)


def configure_logging(config: AppConfig) -> None:
    """Set up root logging from ``config.log_level`` (``debug`` wins)."""
    level = logging.DEBUG if config.debug else getattr(logging, config.log_level.upper(), None)
    if not isinstance(level, int):
        print(f"Error: unknown log level {config.log_level!r}", file=sys.stderr)
        raise SystemExit(2)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")
