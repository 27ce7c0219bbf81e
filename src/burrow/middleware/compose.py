"""Chain middleware handlers around a terminal endpoint."""

from collections.abc import Callable, Sequence
from typing import Any

from burrow._internal.invoke import invoke
from burrow.http.request import Request
from burrow.middleware.protocol import AnyResponse, Next


def compose(handlers: Sequence[Callable[..., Any]], endpoint: Next) -> Next:
    """Fold *handlers* around *endpoint* into a single callable.

    The first handler is outermost.  Each handler receives the request and
    the rest of the chain; a handler that returns without awaiting ``next``
    stops every later handler and the endpoint from running.
    """
    pipeline = endpoint
    for handler in reversed(handlers):

        async def link(
            request: Request,
            _handler: Callable[..., Any] = handler,
            _next: Next = pipeline,
        ) -> AnyResponse:
            return await invoke(_handler, request, _next)

        pipeline = link
    return pipeline
