"""HTTP responses with a chainable ``.with_*()`` transformation API.

Each transformation returns a new response.  Middleware receives whatever
the rest of the chain produced and may decorate it::

    async def cache_one_year(request, next):
        response = await next(request)
        return response.with_header("Cache-Control", "public, max-age=31536000")
"""

from __future__ import annotations

import mimetypes
from collections.abc import Mapping
from dataclasses import dataclass, replace


@dataclass(frozen=True, slots=True)
class Response:
    """An in-memory HTTP response."""

    body: str | bytes = ""
    status: int = 200
    content_type: str = "text/html; charset=utf-8"
    headers: tuple[tuple[str, str], ...] = ()

    def with_status(self, status: int) -> Response:
        """Return a new Response with a different status code."""
        return replace(self, status=status)

    def with_header(self, name: str, value: str) -> Response:
        """Return a new Response with an additional header."""
        return replace(self, headers=(*self.headers, (name, value)))

    def with_headers(self, headers: Mapping[str, str]) -> Response:
        """Return a new Response with additional headers."""
        return replace(self, headers=(*self.headers, *headers.items()))

    def with_content_type(self, content_type: str) -> Response:
        """Return a new Response with a different content type."""
        return replace(self, content_type=content_type)

    def header(self, name: str) -> str | None:
        """First value of header *name* (case-insensitive), if set."""
        lowered = name.lower()
        for key, value in self.headers:
            if key.lower() == lowered:
                return value
        return None

    @property
    def body_bytes(self) -> bytes:
        """Body as bytes."""
        if isinstance(self.body, str):
            return self.body.encode("utf-8")
        return self.body

    @property
    def text(self) -> str:
        """Body as string."""
        if isinstance(self.body, bytes):
            return self.body.decode("utf-8")
        return self.body


@dataclass(frozen=True, slots=True)
class FileResponse:
    """A file on disk, streamed to the client in chunks.

    Supports the same ``.with_*()`` API as :class:`Response` so middleware
    can decorate static files and rendered pages alike.
    """

    path: str
    status: int = 200
    content_type: str = ""
    headers: tuple[tuple[str, str], ...] = ()
    chunk_size: int = 64 * 1024

    def __post_init__(self) -> None:
        if not self.content_type:
            guessed, _ = mimetypes.guess_type(self.path)
            object.__setattr__(self, "content_type", guessed or "application/octet-stream")

    def with_status(self, status: int) -> FileResponse:
        """Return a new FileResponse with a different status code."""
        return replace(self, status=status)

    def with_header(self, name: str, value: str) -> FileResponse:
        """Return a new FileResponse with an additional header."""
        return replace(self, headers=(*self.headers, (name, value)))

    def with_headers(self, headers: Mapping[str, str]) -> FileResponse:
        """Return a new FileResponse with additional headers."""
        return replace(self, headers=(*self.headers, *headers.items()))

    def with_content_type(self, content_type: str) -> FileResponse:
        """Return a new FileResponse with a different content type."""
        return replace(self, content_type=content_type)

    def header(self, name: str) -> str | None:
        """First value of header *name* (case-insensitive), if set."""
        lowered = name.lower()
        for key, value in self.headers:
            if key.lower() == lowered:
                return value
        return None
