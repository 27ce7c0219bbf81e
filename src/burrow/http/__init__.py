"""HTTP types: the immutable request and the responses middleware return."""

from burrow.http.request import Request
from burrow.http.response import FileResponse, Response

__all__ = ["FileResponse", "Request", "Response"]
