"""Tests for middleware discovery along a resolved route."""

import pytest

from burrow.middleware.discovery import discover_middleware, route_prefixes
from burrow.testing import MemoryFileSystem


class TestRoutePrefixes:
    def test_template_suffix_stripped_from_last(self) -> None:
        assert route_prefixes("routes/admin/posts.ejs", "routes") == [
            "routes",
            "routes/admin",
            "routes/admin/posts",
        ]

    def test_root_only(self) -> None:
        assert route_prefixes("routes", "routes") == ["routes"]

    def test_static_file_keeps_its_name(self) -> None:
        assert route_prefixes("routes/static/app.js", "routes")[-1] == "routes/static/app.js"

    def test_outside_routes_root(self) -> None:
        with pytest.raises(ValueError, match="not inside"):
            route_prefixes("elsewhere/a.ejs", "routes")

    def test_sibling_with_common_prefix_is_outside(self) -> None:
        with pytest.raises(ValueError):
            route_prefixes("routes-old/a.ejs", "routes")


class TestDiscoverMiddleware:
    def test_order_root_to_leaf(self) -> None:
        fs = MemoryFileSystem(
            [
                "routes.middleware.py",
                "routes/middleware.py",
                "routes/admin.middleware.py",
                "routes/admin/middleware.py",
                "routes/admin/posts.ejs",
                "routes/admin/posts.middleware.py",
            ]
        )
        assert discover_middleware(fs, "routes/admin/posts.ejs", "routes") == (
            "routes.middleware.py",
            "routes/middleware.py",
            "routes/admin.middleware.py",
            "routes/admin/middleware.py",
            "routes/admin/posts.middleware.py",
        )

    def test_dynamic_names(self) -> None:
        fs = MemoryFileSystem(
            [
                "routes/[category]/[id].ejs",
                "routes/[category]/[id].middleware.py",
                "routes/[category].middleware.py",
            ]
        )
        assert discover_middleware(fs, "routes/[category]/[id].ejs", "routes") == (
            "routes/[category].middleware.py",
            "routes/[category]/[id].middleware.py",
        )

    def test_folder_index_sees_folder_middleware(self) -> None:
        fs = MemoryFileSystem(["routes/blog/index.ejs", "routes/blog/middleware.py"])
        assert discover_middleware(fs, "routes/blog/index.ejs", "routes") == (
            "routes/blog/middleware.py",
        )

    def test_unrelated_middleware_ignored(self) -> None:
        fs = MemoryFileSystem(
            ["routes/a.ejs", "routes/b.middleware.py", "routes/b/middleware.py"]
        )
        assert discover_middleware(fs, "routes/a.ejs", "routes") == ()
