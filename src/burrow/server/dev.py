"""Development server.

Starts a pounce ASGI server with the live burrow App object.  Uses
single-worker mode; ``reload`` is enabled with ``--debug``.
"""

from burrow.errors import ConfigurationError


def run_server(
    app: object,
    host: str,
    port: int,
    *,
    reload: bool = False,
    reload_dirs: tuple[str, ...] = (),
) -> None:
    """Serve *app* with pounce until interrupted.

    Pounce's ``run()`` takes an import string, but burrow has a live
    ``App`` object, so ``pounce.Server`` is used directly.

    Raises:
        ConfigurationError: If pounce is not installed.
    """
    try:
        from pounce.config import ServerConfig
        from pounce.server import Server
    except ImportError as exc:
        msg = "The burrow server needs pounce. Install it with: pip install burrow[server]"
        raise ConfigurationError(msg) from exc

    config = ServerConfig(
        host=host,
        port=port,
        workers=1,
        reload=reload,
        reload_include=(".ejs", ".py"),
        reload_dirs=reload_dirs,
    )
    Server(config, app).run()
