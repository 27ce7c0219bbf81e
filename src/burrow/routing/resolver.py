"""Route resolution: request path to file under the routes directory.

The resolver walks the routes tree one directory per path segment.  At
each level the first applicable rule wins:

1. An **exact** entry equal to the segment (on the last segment, also
   ``segment + suffix``, except for the literal segment ``index``).
2. A **dynamic** ``[name]`` entry, binding ``name`` to the segment.
   ``[name]<suffix>`` files only match the last segment.
3. The most recently seen **catch-all** ``[...name]``, from this level or
   any level above, binding ``name`` to the remaining segments.  A
   catch-all ends the walk.
4. Otherwise the request is not found.

When the walk ends on a directory, its ``index`` template is served, or
the remembered catch-all, or nothing.
"""

import logging
from dataclasses import dataclass, field

from burrow.errors import DirectoryUnreadable
from burrow.routing.filesystem import FileSystem, join
from burrow.routing.index import DirectoryEntry, EntryKind, index_directory
from burrow.routing.segments import split_path

logger = logging.getLogger("burrow.routing")


@dataclass(frozen=True, slots=True)
class ResolvedRoute:
    """The outcome of resolving one request path.

    Attributes:
        file_path: File to serve: a template (ends with the template suffix)
            or any other file, sent as-is.
        params: Bound path parameters, in the order they were discovered.
        status: 200, or 404 when the path resolved to the not-found route.
        is_template: Whether the file is rendered (it carries the template
            suffix) or sent as-is.
    """

    file_path: str
    params: dict[str, str] = field(default_factory=dict)
    status: int = 200
    is_template: bool = True

    @property
    def not_found(self) -> bool:
        return self.status == 404


@dataclass(frozen=True, slots=True)
class CatchAllCandidate:
    """A catch-all seen during the walk, kept in case nothing else matches."""

    file_path: str
    params: dict[str, str]


@dataclass(slots=True)
class ResolutionState:
    """Mutable state threaded through a single resolution walk."""

    file_path: str
    params: dict[str, str] = field(default_factory=dict)
    catch_all: CatchAllCandidate | None = None
    found: bool = True

    def take_catch_all(self) -> bool:
        """Jump to the remembered catch-all. Returns False if there is none."""
        if self.catch_all is None:
            return False
        self.file_path = self.catch_all.file_path
        self.params = dict(self.catch_all.params)
        return True


class Resolver:
    """Resolves request paths against a routes directory.

    Holds no per-request state; one instance serves every request.

    Usage::

        resolver = Resolver(LocalFileSystem(), "routes")
        route = resolver.resolve("/shoes/42")
        route.file_path  # "routes/[category]/[id].ejs"
        route.params     # {"category": "shoes", "id": "42"}
    """

    __slots__ = ("_fs", "_index_name", "_not_found_route", "_routes_path", "_suffix")

    def __init__(
        self,
        fs: FileSystem,
        routes_path: str,
        *,
        not_found_route: str = "404.ejs",
        template_suffix: str = ".ejs",
    ) -> None:
        self._fs = fs
        self._routes_path = routes_path.rstrip("/") or "/"
        self._not_found_route = not_found_route
        self._suffix = template_suffix
        self._index_name = "index" + template_suffix

    @property
    def routes_path(self) -> str:
        return self._routes_path

    @property
    def template_suffix(self) -> str:
        return self._suffix

    def not_found(self) -> ResolvedRoute:
        """The route served when nothing matches."""
        file_path = join(self._routes_path, self._not_found_route)
        return ResolvedRoute(file_path, {}, status=404, is_template=self._is_template(file_path))

    def resolve(self, path: str) -> ResolvedRoute:
        """Resolve a raw request path.

        Never raises for unmatched paths; those resolve to :meth:`not_found`.
        """
        segments = split_path(path)
        state = ResolutionState(self._routes_path)
        try:
            self._walk(state, segments)
        except DirectoryUnreadable as exc:
            logger.debug("%s -> not found (%s)", path, exc)
            state.found = False

        if not state.found:
            return self.not_found()
        return ResolvedRoute(
            state.file_path,
            state.params,
            is_template=self._is_template(state.file_path),
        )

    def _is_template(self, file_path: str) -> bool:
        return bool(self._suffix) and file_path.endswith(self._suffix)

    # ------------------------------------------------------------------
    # Walk
    # ------------------------------------------------------------------

    def _walk(self, state: ResolutionState, segments: tuple[str, ...]) -> None:
        for i, segment in enumerate(segments):
            is_last = i == len(segments) - 1
            entries = index_directory(self._fs, state.file_path, self._suffix)

            catch_all = _first(entries, EntryKind.CATCH_ALL)
            if catch_all is not None:
                self._remember_catch_all(state, catch_all, "/".join(segments[i:]))

            exact = self._exact_match(entries, segment, is_last=is_last)
            if exact is not None:
                state.file_path = join(state.file_path, exact.name)
                continue

            dynamic = _dynamic_match(entries, is_last=is_last)
            if dynamic is not None:
                assert dynamic.param is not None
                state.params[dynamic.param] = segment
                state.file_path = join(state.file_path, dynamic.name)
                continue

            if not state.take_catch_all():
                state.found = False
            return

        if self._fs.is_dir(state.file_path):
            index = join(state.file_path, self._index_name)
            if self._fs.is_file(index):
                state.file_path = index
            elif not state.take_catch_all():
                state.found = False
        elif not self._fs.is_file(state.file_path):
            # Only reachable when the routes root itself is missing
            state.found = False

    def _remember_catch_all(
        self,
        state: ResolutionState,
        entry: DirectoryEntry,
        remainder: str,
    ) -> None:
        """Replace the remembered catch-all with *entry*.

        A catch-all folder stands for its index template; without one the
        candidate is dropped rather than searched deeper.
        """
        assert entry.param is not None
        file_path = join(state.file_path, entry.name)
        if self._fs.is_dir(file_path):
            index = join(file_path, self._index_name)
            if not self._fs.is_file(index):
                state.catch_all = None
                return
            file_path = index
        state.catch_all = CatchAllCandidate(file_path, {**state.params, entry.param: remainder})

    def _exact_match(
        self,
        entries: tuple[DirectoryEntry, ...],
        segment: str,
        *,
        is_last: bool,
    ) -> DirectoryEntry | None:
        template_name = segment + self._suffix if is_last and segment != "index" else None
        for entry in entries:
            if entry.kind is not EntryKind.EXACT:
                continue
            if entry.name == segment or entry.name == template_name:
                return entry
        return None


def _first(entries: tuple[DirectoryEntry, ...], kind: EntryKind) -> DirectoryEntry | None:
    for entry in entries:
        if entry.kind is kind:
            return entry
    return None


def _dynamic_match(entries: tuple[DirectoryEntry, ...], *, is_last: bool) -> DirectoryEntry | None:
    for entry in entries:
        if entry.kind is EntryKind.DYNAMIC and (is_last or not entry.is_template):
            return entry
    return None
