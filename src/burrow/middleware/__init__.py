"""Middleware: per-directory handler files, composed along the route.

A middleware handler is any callable matching::

    async def handler(request: Request, next: Next) -> AnyResponse

Files named ``middleware.py`` guard a whole folder; ``<name>.middleware.py``
guards the ``<name>`` route.  Along a resolved route they run from the
routes root down to the file.
"""

from burrow.middleware.compose import compose
from burrow.middleware.discovery import discover_middleware, route_prefixes
from burrow.middleware.loader import (
    AlwaysFreshLoader,
    CachedLoader,
    HandlerLoader,
    create_loader,
    load_handlers,
)
from burrow.middleware.protocol import AnyResponse, Middleware, Next

__all__ = [
    "AlwaysFreshLoader",
    "AnyResponse",
    "CachedLoader",
    "HandlerLoader",
    "Middleware",
    "Next",
    "compose",
    "create_loader",
    "discover_middleware",
    "load_handlers",
    "route_prefixes",
]
