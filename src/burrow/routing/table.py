"""Routing table listing for the ``burrow routes`` command.

Walks the routes directory and reports every routable file with the URL
pattern that reaches it.  Path parameters are written ``{id}`` and
catch-alls ``{slug...}``.
"""

from dataclasses import dataclass

from burrow.routing.filesystem import FileSystem, join
from burrow.routing.index import DirectoryEntry, EntryKind, index_directory


@dataclass(frozen=True, slots=True)
class RouteInfo:
    """A routable file and the URL pattern that reaches it."""

    pattern: str
    file_path: str
    is_template: bool


def list_routes(
    fs: FileSystem,
    routes_path: str,
    template_suffix: str = ".ejs",
) -> list[RouteInfo]:
    """Return every routable file under *routes_path*, sorted by pattern."""
    routes: list[RouteInfo] = []
    _walk_directory(fs, routes_path.rstrip("/"), [], template_suffix, routes)
    return sorted(routes, key=lambda r: (r.pattern, r.file_path))


def _walk_directory(
    fs: FileSystem,
    directory: str,
    url_parts: list[str],
    suffix: str,
    routes: list[RouteInfo],
) -> None:
    index_name = "index" + suffix
    for entry in index_directory(fs, directory, suffix):
        if entry.kind is EntryKind.IGNORED:
            continue
        path = join(directory, entry.name)
        segment = _url_segment(entry, suffix)

        if fs.is_dir(path):
            if entry.kind is EntryKind.CATCH_ALL:
                # Only the folder's index is reachable through a catch-all
                index = join(path, index_name)
                if fs.is_file(index):
                    routes.append(RouteInfo(_pattern([*url_parts, segment]), index, True))
                continue
            _walk_directory(fs, path, [*url_parts, segment], suffix, routes)
            continue

        if entry.name == index_name:
            routes.append(RouteInfo(_pattern(url_parts), path, True))
        else:
            routes.append(RouteInfo(_pattern([*url_parts, segment]), path, entry.is_template))


def _url_segment(entry: DirectoryEntry, suffix: str) -> str:
    if entry.kind is EntryKind.DYNAMIC:
        return "{" + str(entry.param) + "}"
    if entry.kind is EntryKind.CATCH_ALL:
        return "{" + str(entry.param) + "...}"
    if entry.is_template:
        return entry.name[: -len(suffix)]
    return entry.name


def _pattern(parts: list[str]) -> str:
    return "/" + "/".join(parts)
