"""ASGI handler: one request through resolution, middleware and render.

The only component that touches raw ASGI ``http`` scopes.  For each
request it resolves the path, loads the middleware found along the
resolved route, runs them around the terminal render and sends whatever
comes out through :class:`ResponseSender`.
"""

import logging
from dataclasses import dataclass

from burrow._internal.asgi import Receive, Scope, Send
from burrow.errors import HTTPError, TemplateMissing
from burrow.http.request import Request
from burrow.http.response import FileResponse, Response
from burrow.middleware.compose import compose
from burrow.middleware.discovery import discover_middleware
from burrow.middleware.loader import HandlerLoader
from burrow.middleware.protocol import AnyResponse
from burrow.plugins import Namespace
from burrow.routing.filesystem import FileSystem, join
from burrow.routing.resolver import Resolver
from burrow.server.errors import http_error_response, plain_response, render_error_response
from burrow.server.sender import ResponseSender
from burrow.server.terminal import format_request_line
from burrow.server.terminal_errors import log_error
from burrow.templating.renderer import Renderer, template_context

logger = logging.getLogger("burrow.server")


@dataclass(frozen=True, slots=True)
class Pipeline:
    """Everything a request needs, built once per app."""

    fs: FileSystem
    resolver: Resolver
    loader: HandlerLoader
    renderer: Renderer
    plugins: Namespace
    error_route: str = "500.ejs"

    @property
    def error_path(self) -> str:
        return join(self.resolver.routes_path, self.error_route)

    def middleware_files(self, file_path: str) -> tuple[str, ...]:
        return discover_middleware(
            self.fs,
            file_path,
            self.resolver.routes_path,
            self.resolver.template_suffix,
        )

    async def endpoint(self, request: Request) -> AnyResponse:
        """Terminal render, reached only when every middleware called through."""
        route = request.route
        assert route is not None

        if not route.is_template:
            if route.not_found and not self.fs.is_file(route.file_path):
                return plain_response(404)
            return FileResponse(route.file_path, status=route.status)

        try:
            body = self.renderer.render(route.file_path, template_context(request))
        except TemplateMissing:
            if route.not_found:
                return plain_response(404)
            raise
        return Response(body=body, status=route.status)


async def handle_request(scope: Scope, receive: Receive, send: Send, *, pipeline: Pipeline) -> None:
    """Process a single HTTP request through the full pipeline."""
    if scope["type"] != "http":
        return

    request = Request.from_asgi(scope, receive, plugins=pipeline.plugins)
    route = pipeline.resolver.resolve(request.path)
    request = request.with_route(route)
    logger.debug("%s", format_request_line(request.method, request.path, route.file_path, color=False))

    try:
        handlers = [
            handler
            for path in pipeline.middleware_files(route.file_path)
            for handler in pipeline.loader.load(path)
        ]
        response = await compose(handlers, pipeline.endpoint)(request)
    except HTTPError as exc:
        response = http_error_response(exc, request)
    except Exception as exc:
        log_error(exc, request)
        response = render_error_response(pipeline.renderer, pipeline.error_path, request)

    sender = ResponseSender(send)
    try:
        await sender(response)
    except Exception as exc:
        log_error(exc, request)
        if sender.headers_sent:
            # Too late for an error page; end the body that was started
            await sender.abort()
        else:
            await sender(render_error_response(pipeline.renderer, pipeline.error_path, request))
