"""Directory route index.

Classifies the entries of one directory of the routes tree.  The index
only labels entries; choosing between them is the resolver's job.

Entry grammar (``<suffix>`` is the template suffix, ``.ejs`` by default)::

    posts, posts<suffix>        exact segment
    [id], [id]<suffix>          dynamic segment, binds ``id``
    [...slug], [...slug]<suffix> catch-all, binds the remaining segments
    (group)                     organisational folder, never matched
    name.middleware.py          middleware for the ``name`` route
    middleware.py               middleware for the whole folder
"""

import re
from dataclasses import dataclass
from enum import Enum

from burrow.errors import DirectoryUnreadable
from burrow.routing.filesystem import FileSystem

MIDDLEWARE_FILE = "middleware.py"
MIDDLEWARE_SUFFIX = ".middleware.py"

_CATCH_ALL_RE = re.compile(r"^\[\.\.\.(\w+)\]$")
_DYNAMIC_RE = re.compile(r"^\[(\w+)\]$")


class EntryKind(Enum):
    IGNORED = "ignored"
    EXACT = "exact"
    DYNAMIC = "dynamic"
    CATCH_ALL = "catch_all"


@dataclass(frozen=True, slots=True)
class DirectoryEntry:
    """One classified entry of a routes directory.

    Attributes:
        name: The entry name as listed.
        kind: How the entry takes part in matching.
        param: Parameter name for dynamic and catch-all entries.
        is_template: True when the name carries the template suffix.
    """

    name: str
    kind: EntryKind
    param: str | None = None
    is_template: bool = False


def classify_entry(name: str, template_suffix: str = ".ejs") -> DirectoryEntry:
    """Classify a single directory entry by its name."""
    if name == MIDDLEWARE_FILE or name.endswith(MIDDLEWARE_SUFFIX):
        return DirectoryEntry(name, EntryKind.IGNORED)
    if name.startswith("(") and name.endswith(")"):
        return DirectoryEntry(name, EntryKind.IGNORED)

    is_template = bool(template_suffix) and name.endswith(template_suffix)
    stem = name[: -len(template_suffix)] if is_template else name

    match = _CATCH_ALL_RE.match(stem)
    if match:
        return DirectoryEntry(name, EntryKind.CATCH_ALL, match.group(1), is_template)

    match = _DYNAMIC_RE.match(stem)
    if match:
        return DirectoryEntry(name, EntryKind.DYNAMIC, match.group(1), is_template)

    return DirectoryEntry(name, EntryKind.EXACT, is_template=is_template)


def index_directory(
    fs: FileSystem,
    directory: str,
    template_suffix: str = ".ejs",
) -> tuple[DirectoryEntry, ...]:
    """List and classify every entry of *directory*.

    Re-reads the directory on every call.  Entries come back sorted by
    name, so when a directory holds several dynamic or catch-all entries
    the lexicographically first one wins, independent of the platform's
    enumeration order.

    Raises:
        DirectoryUnreadable: If the directory cannot be listed.
    """
    try:
        names = fs.listdir(directory)
    except OSError as exc:
        raise DirectoryUnreadable(directory) from exc
    return tuple(classify_entry(name, template_suffix) for name in sorted(names))
