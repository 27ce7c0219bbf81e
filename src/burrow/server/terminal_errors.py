"""Terminal error formatting for failed requests.

Replaces a raw ``logger.exception()`` with output that highlights the
useful part.  Template errors from kida use ``exc.format_compact()``;
other errors show only application frames.  ``BURROW_TRACEBACK=full``
restores the complete Python traceback.

Example::

    500 GET /shoes/42
    -- Render Error -------------------------------------------------
    routes/[category]/[id].ejs
    K-RUN-001: Undefined variable 'nmae' in [category]/[id].ejs:3
    -----------------------------------------------------------------
"""

from __future__ import annotations

import logging
import os
import traceback
from typing import TYPE_CHECKING

from burrow.errors import MiddlewareLoadError, RenderError

if TYPE_CHECKING:
    from burrow.http.request import Request

logger = logging.getLogger("burrow.server")

_BANNER_WIDTH = 65


def _is_kida_error(exc: BaseException) -> bool:
    """Check if an exception originates from the kida template engine."""
    return "kida" in (type(exc).__module__ or "")


def _is_app_frame(filename: str) -> bool:
    """True if the frame is from the application (not stdlib/site-packages)."""
    if "site-packages" in filename or filename.startswith("<"):
        return False
    return not filename.startswith(os.path.dirname(os.__file__))


def _banner(title: str, body: list[str]) -> str:
    parts = [f"-- {title} {'-' * (_BANNER_WIDTH - len(title) - 4)}", *body, "-" * _BANNER_WIDTH]
    return "\n".join(parts)


def format_render_error(exc: RenderError) -> str:
    """Banner for a template that failed to render."""
    cause = exc.__cause__
    body = [exc.path]
    if cause is not None:
        compact = getattr(cause, "format_compact", None)
        body.append(compact() if callable(compact) else f"{type(cause).__name__}: {cause}")
    return _banner("Render Error", body)


def format_middleware_error(exc: MiddlewareLoadError) -> str:
    """Banner for a middleware file that could not be loaded."""
    body = [exc.path, exc.reason]
    if exc.__cause__ is not None:
        body.append(format_compact_traceback(exc.__cause__))
    return _banner("Middleware Error", body)


def format_compact_traceback(exc: BaseException) -> str:
    """Error summary plus the last few application frames."""
    frames = traceback.extract_tb(exc.__traceback__) if exc.__traceback__ else []
    app_frames = [f for f in frames if _is_app_frame(f.filename)]
    display = app_frames or frames[-3:]

    parts = [f"{type(exc).__name__}: {exc}"]
    if display:
        parts.append("  Trace (app frames):")
        for frame in display[-5:]:
            parts.append(f"    {frame.filename}:{frame.lineno} in {frame.name}")
            if frame.line:
                parts.append(f"      {frame.line.strip()}")
    return "\n".join(parts)


def log_error(exc: BaseException, request: Request | None = None) -> None:
    """Log a request failure with the formatting that suits it.

    Args:
        exc: The exception that turned the request into a 500.
        request: The request that triggered the error, when known.
    """
    prefix = f"500 {request.method} {request.path}" if request is not None else "Server error"

    if isinstance(exc, RenderError):
        logger.error("%s\n%s", prefix, format_render_error(exc))
        return
    if isinstance(exc, MiddlewareLoadError):
        logger.error("%s\n%s", prefix, format_middleware_error(exc))
        return

    if os.environ.get("BURROW_TRACEBACK", "compact").lower() == "full":
        logger.error(prefix, exc_info=exc)
        return

    compact = getattr(exc, "format_compact", None)
    if _is_kida_error(exc) and callable(compact):
        logger.error("%s\n%s", prefix, _banner("Template Error", [compact()]))
        return
    logger.error("%s\n%s", prefix, format_compact_traceback(exc))
