"""``burrow resolve``: explain how one request path resolves.

Prints the file that would serve the path, the response status, the
bound params and the middleware files that would run, in order.
"""

from burrow.app import App
from burrow.config import AppConfig
from burrow.server.terminal import format_resolution


def run_resolve(config: AppConfig, path: str) -> None:
    app = App(config)
    route = app.resolve(path)
    print(format_resolution(path, route, app.middleware_for(route)))
