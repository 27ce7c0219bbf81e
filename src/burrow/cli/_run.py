"""``burrow run``: serve the routes directory."""

import sys

from burrow.app import App
from burrow.config import AppConfig
from burrow.errors import ConfigurationError


def run_server(config: AppConfig) -> None:
    """Build the app from *config* and serve until interrupted."""
    try:
        App(config).run()
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
