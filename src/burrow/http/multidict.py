"""Read-only multi-valued string mappings for request metadata.

Both request headers and query parameters can repeat a key.  They share
one frozen representation: a dict of key to list of values, where item
access returns the first value and ``get_list`` returns all of them.
"""

from collections.abc import Iterable, Iterator, Mapping
from urllib.parse import parse_qsl


class MultiDict(Mapping[str, str]):
    """Immutable mapping where a key may carry several values."""

    __slots__ = ("_data",)

    _data: dict[str, list[str]]

    def __init__(self, pairs: Iterable[tuple[str, str]] = ()) -> None:
        data: dict[str, list[str]] = {}
        for key, value in pairs:
            data.setdefault(self._normalize(key), []).append(value)
        object.__setattr__(self, "_data", data)

    def __setattr__(self, name: str, value: object) -> None:
        msg = f"{type(self).__name__} is immutable"
        raise AttributeError(msg)

    @staticmethod
    def _normalize(key: str) -> str:
        return key

    def __getitem__(self, key: str) -> str:
        return self._data[self._normalize(key)][0]

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self._normalize(key) in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        items = ", ".join(f"{k!r}: {v!r}" for k, v in self._data.items())
        return f"{type(self).__name__}({{{items}}})"

    def get_list(self, key: str) -> list[str]:
        """Return all values for *key* (empty list if missing)."""
        return list(self._data.get(self._normalize(key), []))


class Headers(MultiDict):
    """Case-insensitive request headers decoded from raw ASGI pairs."""

    __slots__ = ()

    @classmethod
    def from_raw(cls, raw: Iterable[tuple[bytes, bytes]]) -> "Headers":
        return cls((name.decode("latin-1"), value.decode("latin-1")) for name, value in raw)

    @staticmethod
    def _normalize(key: str) -> str:
        return key.lower()


class QueryParams(MultiDict):
    """Parsed query string parameters."""

    __slots__ = ()

    @classmethod
    def from_query_string(cls, query_string: bytes) -> "QueryParams":
        return cls(parse_qsl(query_string.decode("latin-1"), keep_blank_values=True))
