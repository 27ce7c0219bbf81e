"""Middleware module loading.

A middleware file is a Python module exporting ``middleware``: either one
handler or a list of handlers, run in list order::

    # routes/static/middleware.py
    async def cache_one_year(request, next):
        response = await next(request)
        return response.with_header("Cache-Control", "public, max-age=31536000")

    middleware = [cache_one_year]

Two loading strategies exist.  :class:`AlwaysFreshLoader` executes the
file again on every request, so edits apply without a restart.
:class:`CachedLoader` executes each file once per process.
"""

import hashlib
import importlib.util
import logging
import threading
from collections.abc import Callable
from pathlib import Path
from types import ModuleType
from typing import Any, Protocol

from burrow.errors import MiddlewareLoadError

logger = logging.getLogger("burrow.middleware")

# Name of the module attribute holding the handler(s)
EXPORT_NAME = "middleware"


class HandlerLoader(Protocol):
    """Maps a middleware file path to its ordered handlers."""

    def load(self, path: str) -> tuple[Callable[..., Any], ...]: ...


class AlwaysFreshLoader:
    """Re-executes the middleware module on every :meth:`load`."""

    __slots__ = ()

    def load(self, path: str) -> tuple[Callable[..., Any], ...]:
        return load_handlers(path)


class CachedLoader:
    """Executes each middleware module once and reuses its handlers.

    Thread-safe: concurrent first loads of the same file execute it once.
    A failed load is not cached, so a fixed file is picked up on the next
    request.
    """

    __slots__ = ("_cache", "_lock")

    def __init__(self) -> None:
        self._cache: dict[str, tuple[Callable[..., Any], ...]] = {}
        self._lock = threading.Lock()

    def load(self, path: str) -> tuple[Callable[..., Any], ...]:
        handlers = self._cache.get(path)
        if handlers is not None:
            return handlers
        with self._lock:
            handlers = self._cache.get(path)
            if handlers is None:
                handlers = load_handlers(path)
                self._cache[path] = handlers
        return handlers

    def clear(self) -> None:
        """Forget every loaded module."""
        with self._lock:
            self._cache.clear()


def create_loader(*, cache: bool) -> HandlerLoader:
    """The loader selected by ``AppConfig.cache_middleware``."""
    return CachedLoader() if cache else AlwaysFreshLoader()


def load_handlers(path: str) -> tuple[Callable[..., Any], ...]:
    """Execute the module at *path* and return its exported handlers.

    Raises:
        MiddlewareLoadError: If the file is missing, raises while executing,
            or does not export callable handlers.
    """
    module = _exec_module(path)

    exported = getattr(module, EXPORT_NAME, None)
    if exported is None:
        raise MiddlewareLoadError(path, f"module has no {EXPORT_NAME!r} attribute")

    handlers = tuple(exported) if isinstance(exported, (list, tuple)) else (exported,)
    for handler in handlers:
        if not callable(handler):
            raise MiddlewareLoadError(path, f"{handler!r} is not callable")

    logger.debug("Loaded %d handler(s) from %s", len(handlers), path)
    return handlers


def _exec_module(path: str) -> ModuleType:
    file = Path(path)
    if not file.is_file():
        raise MiddlewareLoadError(path, "file not found")

    # Unique per path so two "middleware.py" files never share a name
    digest = hashlib.sha1(str(file.resolve()).encode(), usedforsecurity=False).hexdigest()[:12]
    spec = importlib.util.spec_from_file_location(f"_burrow_middleware_{digest}", file)
    if spec is None or spec.loader is None:
        raise MiddlewareLoadError(path, "not a loadable Python file")

    module = importlib.util.module_from_spec(spec)
    try:
        spec.loader.exec_module(module)
    except Exception as exc:
        raise MiddlewareLoadError(path, f"{type(exc).__name__}: {exc}") from exc
    return module
