"""Directory-listing capability used by the resolver.

The resolver never touches ``os`` directly; it goes through a
:class:`FileSystem` so it can run against an in-memory tree in tests
(see :class:`burrow.testing.MemoryFileSystem`).

Paths are POSIX strings joined with ``/``.
"""

import os
from typing import Protocol


class FileSystem(Protocol):
    """The three questions route resolution asks of a filesystem."""

    def listdir(self, path: str) -> list[str]:
        """Names of the entries in directory *path*.

        Raises:
            OSError: If *path* is not a readable directory.
        """
        ...

    def is_dir(self, path: str) -> bool: ...

    def is_file(self, path: str) -> bool: ...


class LocalFileSystem:
    """:class:`FileSystem` backed by the real disk."""

    __slots__ = ()

    def listdir(self, path: str) -> list[str]:
        return os.listdir(path)

    def is_dir(self, path: str) -> bool:
        return os.path.isdir(path)

    def is_file(self, path: str) -> bool:
        return os.path.isfile(path)


def join(*parts: str) -> str:
    """Join path parts with ``/``, ignoring empty parts."""
    return "/".join(part for part in parts if part)
