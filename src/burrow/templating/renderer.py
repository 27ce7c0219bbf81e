"""Kida environment setup and route template rendering.

Route templates live inside the routes directory and keep the routes'
template suffix (``.ejs`` by default); their content is kida syntax::

    {# routes/[category]/[id].ejs #}
    <h1>{{ category }} #{{ id }}</h1>
    <p>Viewed {{ plugins.store.get("views") }} times</p>

The environment is created once per app, with ``auto_reload`` on so that
edited templates are picked up without a restart.
"""

from typing import Any

from kida import Environment, FileSystemLoader

from burrow.config import AppConfig
from burrow.errors import RenderError, TemplateMissing
from burrow.http.request import Request
from burrow.routing.filesystem import FileSystem

# Context names that route params can never shadow
RESERVED_NAMES = frozenset({"request", "params", "plugins", "state"})


def create_environment(config: AppConfig) -> Environment:
    """Create the kida Environment rooted at the routes directory."""
    return Environment(
        loader=FileSystemLoader(str(config.routes_path)),
        autoescape=True,
        auto_reload=True,
    )


def template_context(request: Request) -> dict[str, Any]:
    """Variables available to a route template.

    Every path parameter is a top-level variable, alongside ``request``,
    ``params`` (all parameters), ``plugins`` and ``state`` (whatever
    middleware left on the request).
    """
    params = dict(request.path_params)
    context: dict[str, Any] = {k: v for k, v in params.items() if k not in RESERVED_NAMES}
    context.update(
        request=request,
        params=params,
        plugins=request.plugins,
        state=request.state,
    )
    return context


class Renderer:
    """Renders template files of the routes tree by path."""

    __slots__ = ("_env", "_fs", "_routes_path")

    def __init__(self, env: Environment, fs: FileSystem, routes_path: str) -> None:
        self._env = env
        self._fs = fs
        self._routes_path = routes_path.rstrip("/")

    def render(self, file_path: str, context: dict[str, Any]) -> str:
        """Render the template at *file_path*.

        Raises:
            TemplateMissing: If no such template file exists.
            RenderError: If kida fails to load or render it.
        """
        if not self._fs.is_file(file_path):
            raise TemplateMissing(file_path)
        try:
            template = self._env.get_template(self.template_name(file_path))
            return template.render(context)
        except Exception as exc:
            raise RenderError(file_path) from exc

    def template_name(self, file_path: str) -> str:
        """Loader-relative name of a file under the routes directory."""
        prefix = self._routes_path + "/"
        if file_path.startswith(prefix):
            return file_path[len(prefix) :]
        return file_path
