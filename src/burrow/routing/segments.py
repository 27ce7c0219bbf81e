"""Request path splitting.

The segments produced here are the only part of the request path that
ever reaches the filesystem.
"""

# Segments that would let a request climb out of the routes directory
_DROPPED = frozenset({"", ".", ".."})


def split_path(path: str) -> tuple[str, ...]:
    """Split a request path into its routable segments.

    Empty segments (from leading, trailing or doubled slashes) and the
    relative segments ``.`` and ``..`` are dropped.  Segments are returned
    exactly as received; no decoding happens here.

    >>> split_path("/blog//posts/../42/")
    ('blog', 'posts', '42')
    """
    return tuple(part for part in path.split("/") if part not in _DROPPED)
