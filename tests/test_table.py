"""Tests for the routing table listing."""

from burrow.routing.table import RouteInfo, list_routes
from burrow.testing import MemoryFileSystem


class TestListRoutes:
    def test_patterns(self) -> None:
        fs = MemoryFileSystem(
            [
                "routes/index.ejs",
                "routes/about.ejs",
                "routes/middleware.py",
                "routes/[category]/[id].ejs",
                "routes/[category]/index.ejs",
                "routes/docs/[...slug]/index.ejs",
                "routes/static/style.css",
            ]
        )
        routes = list_routes(fs, "routes")
        assert [(r.pattern, r.file_path) for r in routes] == [
            ("/", "routes/index.ejs"),
            ("/about", "routes/about.ejs"),
            ("/docs/{slug...}", "routes/docs/[...slug]/index.ejs"),
            ("/static/style.css", "routes/static/style.css"),
            ("/{category}", "routes/[category]/index.ejs"),
            ("/{category}/{id}", "routes/[category]/[id].ejs"),
        ]

    def test_static_files_flagged(self) -> None:
        fs = MemoryFileSystem(["routes/robots.txt"])
        assert list_routes(fs, "routes") == [RouteInfo("/robots.txt", "routes/robots.txt", False)]

    def test_catch_all_template(self) -> None:
        fs = MemoryFileSystem(["routes/[...rest].ejs"])
        assert list_routes(fs, "routes")[0].pattern == "/{rest...}"

    def test_group_folders_skipped(self) -> None:
        fs = MemoryFileSystem(["routes/(draft)/page.ejs", "routes/index.ejs"])
        assert [r.pattern for r in list_routes(fs, "routes")] == ["/"]
