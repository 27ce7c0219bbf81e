"""End-to-end tests: routes trees on disk served through the ASGI app."""

from collections.abc import Callable
from dataclasses import replace
from pathlib import Path
from typing import Any

import pytest

from burrow.app import App
from burrow.config import AppConfig
from burrow.testing import TestClient

type WriteTree = Callable[[dict[str, str]], Path]

TRACE = """
async def middleware(request, next):
    request.state.setdefault("trace", []).append({name!r})
    return await next(request)
"""


@pytest.fixture
def site(write_tree: WriteTree, site_config: AppConfig) -> Callable[[dict[str, str]], App]:
    """Write a routes tree (paths relative to tmp_path) and build an App for it."""

    def build(files: dict[str, str], **overrides: Any) -> App:
        write_tree(files)
        return App(replace(site_config, **overrides))

    return build


class TestRendering:
    async def test_index(self, site) -> None:
        app = site({"routes/index.ejs": "<h1>Home</h1>"})
        async with TestClient(app) as client:
            response = await client.get("/")
        assert response.status == 200
        assert response.text == "<h1>Home</h1>"
        assert response.content_type == "text/html; charset=utf-8"

    async def test_params_are_template_variables(self, site) -> None:
        app = site({"routes/[category]/[id].ejs": "{{ category }}/{{ id }}"})
        async with TestClient(app) as client:
            response = await client.get("/shoes/42")
        assert response.text == "shoes/42"

    async def test_catch_all_param(self, site) -> None:
        app = site({"routes/docs/[...slug].ejs": "{{ slug }}"})
        async with TestClient(app) as client:
            response = await client.get("/docs/a/b/c")
        assert response.text == "a/b/c"

    async def test_request_in_context(self, site) -> None:
        app = site({"routes/index.ejs": "{{ request.method }} {{ request.path }}"})
        async with TestClient(app) as client:
            response = await client.post("/")
        assert response.text == "POST /"

    async def test_output_is_escaped(self, site) -> None:
        app = site({"routes/[name].ejs": "{{ name }}"})
        async with TestClient(app) as client:
            response = await client.get("/<b>")
        assert "<b>" not in response.text

    async def test_plugins_in_context(self, site) -> None:
        app = site(
            {
                "routes/index.ejs": "{{ plugins.greet.hello('bob') }}",
                "plugins/greet.py": "def hello(name):\n    return 'hi ' + name\n",
            }
        )
        async with TestClient(app) as client:
            response = await client.get("/")
        assert response.text == "hi bob"

    async def test_template_edits_are_picked_up(self, site, tmp_path: Path) -> None:
        app = site({"routes/index.ejs": "one"})
        async with TestClient(app) as client:
            assert (await client.get("/")).text == "one"
            (tmp_path / "routes" / "new.ejs").write_text("new route")
            assert (await client.get("/new")).text == "new route"

    async def test_static_file(self, site) -> None:
        app = site({"routes/static/app.css": "body { color: red }"})
        async with TestClient(app) as client:
            response = await client.get("/static/app.css")
        assert response.status == 200
        assert response.content_type == "text/css"
        assert response.text == "body { color: red }"


class TestNotFound:
    async def test_not_found_template(self, site) -> None:
        app = site({"routes/index.ejs": "home", "routes/404.ejs": "Nothing at {{ request.path }}"})
        async with TestClient(app) as client:
            response = await client.get("/nope")
        assert response.status == 404
        assert response.text == "Nothing at /nope"

    async def test_custom_not_found_route(self, site) -> None:
        app = site({"routes/missing.ejs": "gone"}, not_found_route="missing.ejs")
        async with TestClient(app) as client:
            response = await client.get("/nope")
        assert response.status == 404
        assert response.text == "gone"

    async def test_missing_not_found_template(self, site) -> None:
        app = site({"routes/index.ejs": "home"})
        async with TestClient(app) as client:
            response = await client.get("/nope")
        assert response.status == 404
        assert response.text == "404 Not Found"
        assert response.content_type.startswith("text/plain")

    async def test_broken_not_found_template_is_500(self, site) -> None:
        app = site({"routes/404.ejs": "{% if %}", "routes/500.ejs": "error page"})
        async with TestClient(app) as client:
            response = await client.get("/nope")
        assert response.status == 500
        assert response.text == "error page"

    async def test_traversal_stays_in_routes(self, site) -> None:
        app = site({"routes/index.ejs": "home", "secret.txt": "secret"})
        async with TestClient(app) as client:
            response = await client.get("/../secret.txt")
        assert response.status == 404
        assert "secret" not in response.text

    async def test_missing_routes_directory(self, site_config: AppConfig) -> None:
        async with TestClient(App(site_config)) as client:
            response = await client.get("/")
        assert response.status == 404


class TestMiddleware:
    async def test_root_to_leaf_order(self, site) -> None:
        app = site(
            {
                "routes/middleware.py": TRACE.format(name="root"),
                "routes/[category]/middleware.py": TRACE.format(name="category"),
                "routes/[category]/[id].middleware.py": (
                    "from burrow import Response\n"
                    "async def middleware(request, next):\n"
                    "    return Response(','.join(request.state['trace'] + ['leaf']))\n"
                ),
                "routes/[category]/[id].ejs": "rendered",
            }
        )
        async with TestClient(app) as client:
            response = await client.get("/shoes/42")
        assert response.text == "root,category,leaf"

    async def test_short_circuit_skips_rest(self, site, tmp_path: Path) -> None:
        marker = tmp_path / "leaf-ran"
        app = site(
            {
                "routes/admin/middleware.py": (
                    "from burrow import Response\n"
                    "async def middleware(request, next):\n"
                    "    return Response('Unauthorized', status=401)\n"
                ),
                "routes/admin/index.middleware.py": (
                    "from pathlib import Path\n"
                    "async def middleware(request, next):\n"
                    f"    Path({str(marker)!r}).touch()\n"
                    "    return await next(request)\n"
                ),
                "routes/admin/index.ejs": "secret admin page",
            }
        )
        async with TestClient(app) as client:
            response = await client.get("/admin")
        assert response.status == 401
        assert response.text == "Unauthorized"
        assert not marker.exists()

    async def test_wraps_static_files(self, site) -> None:
        app = site(
            {
                "routes/static/middleware.py": (
                    "async def cache_one_year(request, next):\n"
                    "    response = await next(request)\n"
                    "    return response.with_header('Cache-Control', 'public, max-age=31536000')\n"
                    "middleware = [cache_one_year]\n"
                ),
                "routes/static/app.js": "console.log(1)",
            }
        )
        async with TestClient(app) as client:
            response = await client.get("/static/app.js")
        assert response.header("cache-control") == "public, max-age=31536000"

    async def test_not_found_route_has_middleware(self, site) -> None:
        app = site(
            {
                "routes/middleware.py": (
                    "async def middleware(request, next):\n"
                    "    response = await next(request)\n"
                    "    return response.with_header('X-Seen', request.file_path)\n"
                ),
                "routes/404.ejs": "missing",
            }
        )
        async with TestClient(app) as client:
            response = await client.get("/nope")
        assert response.status == 404
        assert response.header("x-seen").endswith("routes/404.ejs")

    async def test_http_error_from_middleware(self, site) -> None:
        app = site(
            {
                "routes/middleware.py": (
                    "from burrow import HTTPError\n"
                    "async def middleware(request, next):\n"
                    "    raise HTTPError(403, 'Forbidden', (('X-Reason', 'nope'),))\n"
                ),
                "routes/index.ejs": "home",
            }
        )
        async with TestClient(app) as client:
            response = await client.get("/")
        assert response.status == 403
        assert response.text == "403 Forbidden"
        assert response.header("x-reason") == "nope"

    async def test_edits_apply_without_restart(self, site, tmp_path: Path) -> None:
        app = site({"routes/index.ejs": "home"})
        async with TestClient(app) as client:
            assert (await client.get("/")).text == "home"
            (tmp_path / "routes" / "middleware.py").write_text(
                "from burrow import Response\n"
                "async def middleware(request, next):\n"
                "    return Response('intercepted')\n"
            )
            assert (await client.get("/")).text == "intercepted"

    async def test_cached_middleware(self, site, tmp_path: Path) -> None:
        app = site(
            {
                "routes/middleware.py": (
                    "from burrow import Response\n"
                    "async def middleware(request, next):\n"
                    "    return Response('first version')\n"
                ),
                "routes/index.ejs": "home",
            },
            cache_middleware=True,
        )
        async with TestClient(app) as client:
            assert (await client.get("/")).text == "first version"
            (tmp_path / "routes" / "middleware.py").write_text(
                "from burrow import Response\n"
                "async def middleware(request, next):\n"
                "    return Response('second version, longer')\n"
            )
            assert (await client.get("/")).text == "first version"


class TestServerErrors:
    async def test_broken_middleware_renders_error_route(self, site) -> None:
        app = site(
            {
                "routes/middleware.py": "raise RuntimeError('boom')\n",
                "routes/index.ejs": "home",
                "routes/500.ejs": "Something broke on {{ request.path }}",
            }
        )
        async with TestClient(app) as client:
            response = await client.get("/")
        assert response.status == 500
        assert response.text == "Something broke on /"

    async def test_missing_error_template(self, site) -> None:
        app = site({"routes/middleware.py": "middleware = None\n", "routes/index.ejs": "home"})
        async with TestClient(app) as client:
            response = await client.get("/")
        assert response.status == 500
        assert response.text == "500 Internal Server Error"

    async def test_render_error(self, site, caplog: pytest.LogCaptureFixture) -> None:
        app = site({"routes/index.ejs": "{% if %}"})
        async with TestClient(app) as client:
            response = await client.get("/")
        assert response.status == 500
        assert response.text == "500 Internal Server Error"
        assert "Render Error" in caplog.text

    async def test_broken_error_template(self, site) -> None:
        app = site({"routes/index.ejs": "{% if %}", "routes/500.ejs": "{% if %}"})
        async with TestClient(app) as client:
            response = await client.get("/")
        assert response.status == 500
        assert response.text == "500 Internal Server Error"

    async def test_middleware_exception(self, site) -> None:
        app = site(
            {
                "routes/middleware.py": (
                    "async def middleware(request, next):\n"
                    "    raise ValueError('bad')\n"
                ),
                "routes/index.ejs": "home",
                "routes/500.ejs": "error page",
            }
        )
        async with TestClient(app) as client:
            response = await client.get("/")
        assert response.status == 500
        assert response.text == "error page"

    async def test_custom_error_route(self, site) -> None:
        app = site(
            {"routes/index.ejs": "{% if %}", "routes/oops.ejs": "oops"},
            error_route="oops.ejs",
        )
        async with TestClient(app) as client:
            response = await client.get("/")
        assert response.text == "oops"


class TestIntrospection:
    def test_resolve(self, site) -> None:
        app = site({"routes/[category]/[id].ejs": ""})
        route = app.resolve("/shoes/42")
        assert route.params == {"category": "shoes", "id": "42"}

    def test_middleware_for(self, site) -> None:
        app = site({"routes/index.ejs": "", "routes/middleware.py": ""})
        route = app.resolve("/")
        assert [Path(p).name for p in app.middleware_for(route)] == ["middleware.py"]

    def test_plugins_loaded_once(self, site) -> None:
        app = site({"plugins/greet.py": "X = 1\n"})
        assert app.plugins is app.plugins
        assert app.plugins.greet.X == 1


class TestLifespan:
    async def test_startup_and_shutdown(self, site) -> None:
        app = site({"routes/index.ejs": ""})
        sent: list[dict[str, Any]] = []
        incoming = iter([{"type": "lifespan.startup"}, {"type": "lifespan.shutdown"}])

        async def receive() -> dict[str, Any]:
            return next(incoming)

        async def send(message: dict[str, Any]) -> None:
            sent.append(message)

        await app({"type": "lifespan"}, receive, send)
        assert [m["type"] for m in sent] == [
            "lifespan.startup.complete",
            "lifespan.shutdown.complete",
        ]

    async def test_broken_plugin_fails_startup(self, site) -> None:
        app = site({"plugins/bad.py": "raise ImportError('nope')\n"})
        sent: list[dict[str, Any]] = []

        async def receive() -> dict[str, Any]:
            return {"type": "lifespan.startup"}

        async def send(message: dict[str, Any]) -> None:
            sent.append(message)

        await app({"type": "lifespan"}, receive, send)
        assert sent[0]["type"] == "lifespan.startup.failed"
        assert "nope" in sent[0]["message"]
