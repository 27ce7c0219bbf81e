"""Error responses for burrow requests.

Maps HTTPError exceptions and unexpected failures to Response objects.
Unexpected failures render the configured error template; when that
template is missing or broken the plain-text fallback is used instead.
"""

import logging
from http import HTTPStatus

from burrow.errors import HTTPError, RenderError, TemplateMissing
from burrow.http.request import Request
from burrow.http.response import Response
from burrow.server.terminal_errors import log_error
from burrow.templating.renderer import Renderer, template_context

logger = logging.getLogger("burrow.server")

PLAIN_TEXT = "text/plain; charset=utf-8"


def plain_response(status: int, detail: str | None = None) -> Response:
    """``<status> <reason>`` as a text/plain response."""
    if detail is None:
        try:
            detail = HTTPStatus(status).phrase
        except ValueError:
            detail = "Error"
    return Response(body=f"{status} {detail}", status=status, content_type=PLAIN_TEXT)


def http_error_response(exc: HTTPError, request: Request) -> Response:
    """Turn an HTTPError raised by middleware into a plain response."""
    logger.debug("%d %s %s: %s", exc.status, request.method, request.path, exc.detail)
    response = plain_response(exc.status, exc.detail or None)
    for name, value in exc.headers:
        response = response.with_header(name, value)
    return response


def render_error_response(renderer: Renderer, error_path: str, request: Request) -> Response:
    """Render the error template with status 500.  Never raises."""
    try:
        body = renderer.render(error_path, template_context(request))
    except TemplateMissing:
        logger.debug("No error template at %s", error_path)
        return plain_response(500)
    except RenderError as exc:
        log_error(exc, request)
        return plain_response(500)
    return Response(body=body, status=500)
