"""Burrow: a web server whose routing table is a directory tree.

Every request path is resolved against ``routes/`` one folder per
segment.  ``[id]`` folders and files bind path parameters, ``[...slug]``
catches the rest, and ``middleware.py`` files guard the routes around
them.

Basic usage::

    from burrow import App, AppConfig

    app = App(AppConfig(routes_path="site/routes"))
    app.run()

Or from a shell::

    burrow run -rp site/routes -p 8080
"""

__version__ = "0.1.0"
__all__ = [
    "AnyResponse",
    "App",
    "AppConfig",
    "BurrowError",
    "ConfigurationError",
    "FileResponse",
    "HTTPError",
    "Middleware",
    "Next",
    "NotFound",
    "Request",
    "Response",
    "load_config",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import burrow`` fast while providing a clean top-level API.
    """
    if name == "App":
        from burrow.app import App

        return App

    if name in ("AppConfig", "load_config"):
        from burrow import config as _config

        return getattr(_config, name)

    if name in ("Request", "Response", "FileResponse"):
        from burrow import http as _http

        return getattr(_http, name)

    if name in ("AnyResponse", "Middleware", "Next"):
        from burrow.middleware import protocol as _mw

        return getattr(_mw, name)

    if name in ("BurrowError", "ConfigurationError", "HTTPError", "NotFound"):
        from burrow import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
