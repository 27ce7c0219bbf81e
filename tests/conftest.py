"""Shared fixtures: routes trees on disk for app-level tests."""

from collections.abc import Callable
from pathlib import Path

import pytest

from burrow.config import AppConfig

type WriteTree = Callable[[dict[str, str]], Path]


@pytest.fixture
def write_tree(tmp_path: Path) -> WriteTree:
    """Write ``{relative path: content}`` under tmp_path and return tmp_path."""

    def write(files: dict[str, str]) -> Path:
        for relative, content in files.items():
            path = tmp_path / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        return tmp_path

    return write


@pytest.fixture
def site_config(tmp_path: Path) -> AppConfig:
    """AppConfig pointing at routes/ and plugins/ inside tmp_path."""
    return AppConfig(
        routes_path=str(tmp_path / "routes"),
        plugins_path=str(tmp_path / "plugins"),
    )
