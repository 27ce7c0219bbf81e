"""Routing: the routes directory is the routing table.

Request paths are split into segments and walked one directory level at a
time.  Nothing is compiled or cached: every resolution re-reads the
filesystem, so adding a file under ``routes/`` adds a route immediately.
"""

from burrow.routing.filesystem import FileSystem, LocalFileSystem
from burrow.routing.index import DirectoryEntry, EntryKind, classify_entry, index_directory
from burrow.routing.resolver import ResolvedRoute, Resolver
from burrow.routing.segments import split_path

__all__ = [
    "DirectoryEntry",
    "EntryKind",
    "FileSystem",
    "LocalFileSystem",
    "ResolvedRoute",
    "Resolver",
    "classify_entry",
    "index_directory",
    "split_path",
]
