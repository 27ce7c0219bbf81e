"""Console formatting for the server and the CLI.

Colored output for request log lines, the startup banner and the
``burrow routes`` / ``burrow resolve`` commands.  Respects TTY detection:
no ANSI codes when piped or redirected.

Example request line (with color)::

    GET /shoes/42 << routes/[category]/[id].ejs
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, TextIO

if TYPE_CHECKING:
    from burrow.routing.resolver import ResolvedRoute
    from burrow.routing.table import RouteInfo


def use_color(stream: TextIO | None = None) -> bool:
    """True if the output stream supports ANSI color."""
    s = stream or sys.stderr
    try:
        return s.isatty()
    except (AttributeError, ValueError):
        return False


class Palette:
    """ANSI escape sequences, empty strings when color is disabled."""

    __slots__ = ("blue", "bold", "cyan", "dim", "grey", "red", "reset", "yellow")

    def __init__(self, *, enabled: bool) -> None:
        if enabled:
            self.reset = "\033[0m"
            self.bold = "\033[1m"
            self.dim = "\033[2m"
            self.red = "\033[31m"
            self.yellow = "\033[33m"
            self.blue = "\033[34m"
            self.cyan = "\033[36m"
            self.grey = "\033[90m"
        else:
            self.reset = ""
            self.bold = ""
            self.dim = ""
            self.red = ""
            self.yellow = ""
            self.blue = ""
            self.cyan = ""
            self.grey = ""


def _palette(color: bool | None) -> Palette:
    return Palette(enabled=use_color() if color is None else color)


def format_request_line(
    method: str,
    path: str,
    file_path: str | None,
    *,
    color: bool | None = None,
) -> str:
    """``METHOD path << file`` with the method in blue and the file grey."""
    c = _palette(color)
    line = f"{c.blue}{method}{c.reset} {path}"
    if file_path:
        line += f" {c.grey}<< {file_path}{c.reset}"
    return line


def format_banner(url: str, *, color: bool | None = None) -> str:
    """The startup line printed once the server is listening."""
    c = _palette(color)
    return f"Server is up: {c.cyan}{url}{c.reset}"


def format_route_table(routes: list[RouteInfo], *, color: bool | None = None) -> str:
    """Two-column table of URL patterns and the files that serve them."""
    c = _palette(color)
    if not routes:
        return "No routes found."

    width = max(max(len(r.pattern) for r in routes), len("PATTERN"))
    lines = [f"{c.bold}{'PATTERN':<{width}}  FILE{c.reset}"]
    lines.append("-" * min(width + 2 + max(len(r.file_path) for r in routes), 80))
    for route in routes:
        kind = "" if route.is_template else f" {c.dim}(static){c.reset}"
        lines.append(f"{route.pattern:<{width}}  {c.grey}{route.file_path}{c.reset}{kind}")
    return "\n".join(lines)


def format_resolution(
    path: str,
    route: ResolvedRoute,
    middleware: tuple[str, ...],
    *,
    color: bool | None = None,
) -> str:
    """Human-readable report of how *path* resolves."""
    c = _palette(color)
    status_color = c.red if route.not_found else c.cyan
    lines = [
        f"{c.bold}{path}{c.reset}",
        f"  file    {route.file_path}",
        f"  status  {status_color}{route.status}{c.reset}",
    ]
    if route.params:
        params = ", ".join(f"{k}={v!r}" for k, v in route.params.items())
        lines.append(f"  params  {params}")
    if middleware:
        lines.append("  middleware")
        lines.extend(f"    {i}. {m}" for i, m in enumerate(middleware, 1))
    else:
        lines.append(f"  middleware {c.dim}(none){c.reset}")
    return "\n".join(lines)
