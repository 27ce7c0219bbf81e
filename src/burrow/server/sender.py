"""ASGI response sending: translates burrow responses to ASGI messages.

:class:`ResponseSender` wraps the ASGI ``send`` callable for one request
and remembers whether the response head has gone out, so error handling
never tries to start a second response on the same connection.
"""

import logging

import anyio

from burrow._internal.asgi import Send
from burrow.http.response import FileResponse, Response
from burrow.middleware.protocol import AnyResponse

logger = logging.getLogger("burrow.server")


def _body_allowed(status: int) -> bool:
    """Whether an HTTP status code permits a response body."""
    # RFC: 1xx, 204, and 304 responses do not include a message body.
    return not (100 <= status < 200 or status in {204, 304})


def _raw_headers(
    content_type: str,
    headers: tuple[tuple[str, str], ...],
    content_length: int,
) -> list[tuple[bytes, bytes]]:
    raw = [(b"content-type", content_type.encode("latin-1"))]
    raw.extend((name.lower().encode("latin-1"), value.encode("latin-1")) for name, value in headers)
    raw.append((b"content-length", str(content_length).encode("latin-1")))
    return raw


class ResponseSender:
    """Sends exactly one response through an ASGI ``send`` callable."""

    __slots__ = ("_send", "completed", "headers_sent")

    def __init__(self, send: Send) -> None:
        self._send = send
        self.headers_sent = False
        self.completed = False

    async def __call__(self, response: AnyResponse) -> None:
        if isinstance(response, FileResponse):
            await self.send_file(response)
        else:
            await self.send_response(response)

    async def start(self, status: int, headers: list[tuple[bytes, bytes]]) -> None:
        if self.headers_sent:
            msg = "Response already started"
            raise RuntimeError(msg)
        self.headers_sent = True
        await self._send({"type": "http.response.start", "status": status, "headers": headers})

    async def body(self, chunk: bytes, *, more_body: bool = False) -> None:
        await self._send({"type": "http.response.body", "body": chunk, "more_body": more_body})
        if not more_body:
            self.completed = True

    async def send_response(self, response: Response) -> None:
        """Send an in-memory response in one body message."""
        body = response.body_bytes if _body_allowed(response.status) else b""
        await self.start(
            response.status,
            _raw_headers(response.content_type, response.headers, len(body)),
        )
        await self.body(body)

    async def send_file(self, response: FileResponse) -> None:
        """Stream a file in ``chunk_size`` pieces."""
        path = anyio.Path(response.path)
        size = (await path.stat()).st_size
        if not _body_allowed(response.status):
            size = 0

        await self.start(
            response.status,
            _raw_headers(response.content_type, response.headers, size),
        )
        if size:
            async with await anyio.open_file(response.path, "rb") as fh:
                while chunk := await fh.read(response.chunk_size):
                    await self.body(chunk, more_body=True)
        await self.body(b"")

    async def abort(self) -> None:
        """Close a response whose body was cut short."""
        if self.headers_sent and not self.completed:
            try:
                await self.body(b"")
            except OSError:
                logger.debug("Client went away before the response was closed")
