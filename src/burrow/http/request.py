"""Immutable HTTP request.

Frozen metadata with async body access.  The resolved route and the plugin
registry are attached once per request before middleware runs; the
``state`` dict is the one place middleware may leave data for handlers
further down the chain and for templates.
"""

from __future__ import annotations

import json
from collections.abc import AsyncGenerator
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any

from burrow._internal.asgi import Receive
from burrow.http.multidict import Headers, QueryParams

if TYPE_CHECKING:
    from burrow.plugins import Namespace
    from burrow.routing.resolver import ResolvedRoute


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request.

    Attributes:
        route: The resolved route, set by the request handler before the
            middleware chain runs.
        plugins: The process-wide plugin registry.
        state: Per-request scratch space shared by middleware and templates.
    """

    method: str
    path: str
    headers: Headers
    query: QueryParams
    http_version: str
    server: tuple[str, int] | None
    client: tuple[str, int] | None

    # Private: ASGI receive callable for body streaming
    _receive: Receive = field(repr=False, compare=False)

    route: ResolvedRoute | None = None
    plugins: Namespace | None = field(default=None, repr=False, compare=False)
    state: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    # Private: body cache (the dict is mutable even though the field is frozen)
    _cache: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    # -- Route shortcuts --

    @property
    def file_path(self) -> str | None:
        """The file the request resolved to."""
        return self.route.file_path if self.route is not None else None

    @property
    def path_params(self) -> dict[str, str]:
        """Parameters bound by dynamic and catch-all segments."""
        return self.route.params if self.route is not None else {}

    @property
    def content_type(self) -> str | None:
        """The Content-Type header value."""
        return self.headers.get("content-type")

    def with_route(self, route: ResolvedRoute) -> Request:
        """Return a copy bound to *route*, sharing state and body cache."""
        return replace(self, route=route)

    # -- Async body access --

    async def body(self) -> bytes:
        """Read the full request body.

        Result is cached: the ASGI receive is consumed once, then the same
        bytes are returned on subsequent calls.
        """
        if "_body" in self._cache:
            return self._cache["_body"]
        chunks = [chunk async for chunk in self.stream()]
        result = b"".join(chunks)
        self._cache["_body"] = result
        return result

    async def stream(self) -> AsyncGenerator[bytes]:
        """Stream the request body in chunks."""
        while True:
            message = await self._receive()
            body = message.get("body", b"")
            if body:
                yield body
            if not message.get("more_body", False):
                break

    async def text(self) -> str:
        """Read the body as text (UTF-8)."""
        raw = await self.body()
        return raw.decode("utf-8")

    async def json(self) -> Any:
        """Parse the body as JSON."""
        return json.loads(await self.body())

    # -- Factory --

    @classmethod
    def from_asgi(
        cls,
        scope: dict[str, Any],
        receive: Receive,
        *,
        plugins: Namespace | None = None,
    ) -> Request:
        """Create a Request from an ASGI scope and receive callable."""
        server = scope.get("server")
        client = scope.get("client")
        return cls(
            method=scope["method"],
            path=scope["path"],
            headers=Headers.from_raw(scope.get("headers", ())),
            query=QueryParams.from_query_string(scope.get("query_string", b"")),
            http_version=scope.get("http_version", "1.1"),
            server=tuple(server) if server else None,
            client=tuple(client) if client else None,
            _receive=receive,
            plugins=plugins,
        )
