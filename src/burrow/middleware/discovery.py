"""Middleware discovery along a resolved route.

Every level of the routes tree between the root and the resolved file
may contribute middleware, in two forms::

    routes/admin.middleware.py   # the "admin" route itself (file or folder)
    routes/admin/middleware.py   # everything inside the "admin" folder

For ``routes/admin/posts.ejs`` the candidates are checked in this order,
most general first::

    routes.middleware.py
    routes/middleware.py
    routes/admin.middleware.py
    routes/admin/middleware.py
    routes/admin/posts.middleware.py
    routes/admin/posts/middleware.py
"""

from burrow.routing.filesystem import FileSystem, join
from burrow.routing.index import MIDDLEWARE_FILE, MIDDLEWARE_SUFFIX


def route_prefixes(file_path: str, routes_path: str, template_suffix: str = ".ejs") -> list[str]:
    """Hierarchical prefixes of *file_path*, from the routes root down.

    The template suffix is stripped from the last prefix so that
    ``posts.ejs`` pairs with ``posts.middleware.py``.

    Raises:
        ValueError: If *file_path* is not inside *routes_path*.
    """
    root = routes_path.rstrip("/") or "/"
    if file_path == root:
        relative = ""
    elif file_path.startswith(root.rstrip("/") + "/"):
        relative = file_path[len(root.rstrip("/")) + 1 :]
    else:
        msg = f"{file_path!r} is not inside the routes directory {routes_path!r}"
        raise ValueError(msg)

    prefixes = [root]
    current = root
    for part in relative.split("/") if relative else ():
        current = join(current, part)
        prefixes.append(current)

    last = prefixes[-1]
    if template_suffix and last.endswith(template_suffix):
        prefixes[-1] = last[: -len(template_suffix)]
    return prefixes


def discover_middleware(
    fs: FileSystem,
    file_path: str,
    routes_path: str,
    template_suffix: str = ".ejs",
) -> tuple[str, ...]:
    """Middleware files that apply to *file_path*, root-most first.

    At each prefix the route-scoped ``<prefix>.middleware.py`` comes before
    the folder-scoped ``<prefix>/middleware.py``.
    """
    found: list[str] = []
    for prefix in route_prefixes(file_path, routes_path, template_suffix):
        for candidate in (prefix + MIDDLEWARE_SUFFIX, join(prefix, MIDDLEWARE_FILE)):
            if fs.is_file(candidate):
                found.append(candidate)
    return tuple(found)
