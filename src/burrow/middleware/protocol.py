"""Middleware protocol and Next type alias.

A middleware handler is any callable matching::

    async def handler(request: Request, next: Next) -> AnyResponse: ...

No base class required.  Calling ``await next(request)`` hands the
request to the next handler (or, after the last one, to the terminal
render).  Returning without calling ``next`` ends the request with the
returned response; nothing further down the chain runs.
"""

from collections.abc import Awaitable, Callable
from typing import Protocol

from burrow.http.request import Request
from burrow.http.response import FileResponse, Response

# Any response the pipeline can produce
type AnyResponse = Response | FileResponse

# The rest of the chain, as seen from one handler
type Next = Callable[[Request], Awaitable[AnyResponse]]


class Middleware(Protocol):
    """Protocol for middleware handlers.

    Accepts both functions and callable objects::

        # Function middleware
        async def timing(request: Request, next: Next) -> AnyResponse:
            start = time.monotonic()
            response = await next(request)
            return response.with_header("X-Time", f"{time.monotonic() - start:.3f}")

        # Class middleware
        class RequireLogin:
            async def __call__(self, request: Request, next: Next) -> AnyResponse:
                if "session" not in request.headers.get("cookie", ""):
                    return Response("Unauthorized", status=401)
                return await next(request)
    """

    async def __call__(self, request: Request, next: Next) -> AnyResponse: ...
