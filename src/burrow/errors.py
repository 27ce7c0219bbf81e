"""Burrow exception hierarchy.

Shared across the resolver, the middleware loader, the renderer and the
request handler so every module raises and catches the same types.
"""

from dataclasses import dataclass


class BurrowError(Exception):
    """Base for all burrow-specific errors."""


class ConfigurationError(BurrowError):
    """Raised when configuration from the environment or CLI is invalid."""


class DirectoryUnreadable(BurrowError):  # noqa: N818
    """A directory on the resolution path could not be listed.

    The resolver treats this exactly like a missing route.
    """

    def __init__(self, path: str) -> None:
        super().__init__(f"Cannot list directory: {path}")
        self.path = path


class MiddlewareLoadError(BurrowError):
    """A discovered middleware file could not be turned into handlers.

    Fatal for the request that triggered the load, never for the process.
    """

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Cannot load middleware {path}: {reason}")
        self.path = path
        self.reason = reason


class TemplateMissing(BurrowError):  # noqa: N818
    """The template to render does not exist."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Template not found: {path}")
        self.path = path


class RenderError(BurrowError):
    """The template engine raised while rendering a template.

    The original kida exception is chained as ``__cause__``.
    """

    def __init__(self, path: str) -> None:
        super().__init__(f"Failed to render {path}")
        self.path = path


@dataclass(frozen=True, slots=True)
class HTTPError(BurrowError):
    """An error that maps directly to an HTTP status code.

    Middleware may raise it to end a request with that status. The request
    handler turns it into a plain-text response.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818
    """404: nothing can serve the request."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)
