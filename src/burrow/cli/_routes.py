"""``burrow routes``: list every URL pattern the routes directory serves."""

import sys
from pathlib import Path

from burrow.config import AppConfig
from burrow.routing.filesystem import LocalFileSystem
from burrow.routing.table import list_routes
from burrow.server.terminal import format_route_table


def run_routes(config: AppConfig) -> None:
    """Print the routing table for ``config.routes_path``."""
    if not Path(config.routes_path).is_dir():
        print(f"Error: no routes directory at {config.routes_path}", file=sys.stderr)
        raise SystemExit(1)

    routes = list_routes(LocalFileSystem(), config.routes_path, config.template_suffix)
    print(format_route_table(routes))
