"""The burrow application: an ASGI app served from a routes directory."""

import logging
import threading

from kida import Environment

from burrow._internal.asgi import Receive, Scope, Send
from burrow.config import AppConfig
from burrow.middleware.loader import HandlerLoader, create_loader
from burrow.plugins import Namespace, load_plugins
from burrow.routing.filesystem import FileSystem, LocalFileSystem
from burrow.routing.resolver import ResolvedRoute, Resolver
from burrow.server.handler import Pipeline, handle_request
from burrow.templating.renderer import Renderer, create_environment

logger = logging.getLogger("burrow.server")


class App:
    """The burrow application.

    There is nothing to register: the routes directory is the routing
    table, middleware files sit next to the routes they guard, and plugins
    are discovered from the plugins directory.  The app compiles that
    setup into its runtime state the first time it is called (or at ASGI
    lifespan startup, or in :meth:`run`).

    Thread safety:
        The freeze transition uses a Lock + double-check so exactly one
        thread loads plugins and builds the pipeline, even when several
        workers call ``__call__()`` concurrently on first request.
    """

    __slots__ = (
        "_freeze_lock",
        "_frozen",
        "_fs",
        "_kida_env",
        "_loader",
        "_pipeline",
        "_plugins",
        "_resolver",
        "config",
    )

    def __init__(self, config: AppConfig | None = None, *, fs: FileSystem | None = None) -> None:
        self.config: AppConfig = config or AppConfig()
        self._fs: FileSystem = fs or LocalFileSystem()
        self._frozen: bool = False
        self._freeze_lock: threading.Lock = threading.Lock()

        # The resolver holds no state worth deferring; the rest waits for freeze
        self._resolver = Resolver(
            self._fs,
            self.config.routes_path,
            not_found_route=self.config.not_found_route,
            template_suffix=self.config.template_suffix,
        )
        self._loader: HandlerLoader | None = None
        self._plugins: Namespace | None = None
        self._kida_env: Environment | None = None
        self._pipeline: Pipeline | None = None

    # -- Introspection --

    @property
    def resolver(self) -> Resolver:
        return self._resolver

    @property
    def plugins(self) -> Namespace:
        """The plugin registry (loads plugins on first access)."""
        self._ensure_frozen()
        assert self._plugins is not None
        return self._plugins

    def resolve(self, path: str) -> ResolvedRoute:
        """Resolve *path* the way a request for it would be."""
        return self._resolver.resolve(path)

    def middleware_for(self, route: ResolvedRoute) -> tuple[str, ...]:
        """Middleware files that run for *route*, outermost first."""
        from burrow.middleware.discovery import discover_middleware

        return discover_middleware(
            self._fs,
            route.file_path,
            self._resolver.routes_path,
            self._resolver.template_suffix,
        )

    # -- Server --

    def run(self, host: str | None = None, port: int | None = None) -> None:
        """Start serving requests with pounce.

        Args:
            host: Override bind host.
            port: Override bind port.
        """
        from burrow.server.dev import run_server
        from burrow.server.terminal import format_banner

        self._ensure_frozen()

        _host = host or self.config.host
        _port = port or self.config.port

        print(format_banner(f"http://localhost:{_port}"), flush=True)
        run_server(
            self,
            _host,
            _port,
            reload=self.config.debug,
            reload_dirs=(self.config.plugins_path,) if self.config.debug else (),
        )

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point."""
        if scope["type"] == "lifespan":
            await self._handle_lifespan(scope, receive, send)
            return

        self._ensure_frozen()
        assert self._pipeline is not None
        await handle_request(scope, receive, send, pipeline=self._pipeline)

    async def _handle_lifespan(self, scope: Scope, receive: Receive, send: Send) -> None:
        """Run the ASGI lifespan protocol, freezing the app at startup."""
        while True:
            message = await receive()
            msg_type = message["type"]

            if msg_type == "lifespan.startup":
                try:
                    self._ensure_frozen()
                except Exception as exc:
                    logger.exception("Startup failed")
                    await send({"type": "lifespan.startup.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.startup.complete"})

            elif msg_type == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return

    # -- Internal --

    def _ensure_frozen(self) -> None:
        """Thread-safe freeze with double-check locking."""
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self._freeze()

    def _freeze(self) -> None:
        """Build the runtime state.  MUST only be called while holding _freeze_lock."""
        self._plugins = load_plugins(self.config.plugins_path)
        self._loader = create_loader(cache=self.config.cache_middleware)
        self._kida_env = create_environment(self.config)
        self._pipeline = Pipeline(
            fs=self._fs,
            resolver=self._resolver,
            loader=self._loader,
            renderer=Renderer(self._kida_env, self._fs, self._resolver.routes_path),
            plugins=self._plugins,
            error_route=self.config.error_route,
        )
        logger.debug(
            "Serving %s (plugins: %s, middleware cache: %s)",
            self.config.routes_path,
            ", ".join(self._plugins) or "none",
            "on" if self.config.cache_middleware else "off",
        )
        self._frozen = True
