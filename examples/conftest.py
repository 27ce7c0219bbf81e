"""Shared pytest configuration for the burrow examples.

``example_app`` loads a fresh App from the ``app.py`` next to the test
file, in its own module namespace, so plugin state never leaks between
tests.
"""

import importlib.util
from pathlib import Path

import pytest


@pytest.fixture
def example_app(request: pytest.FixtureRequest):
    """Load a fresh App from the sibling app.py next to the test file."""
    app_path = Path(request.path).parent / "app.py"
    spec = importlib.util.spec_from_file_location(f"example_{app_path.parent.name}", app_path)
    assert spec is not None
    assert spec.loader is not None
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module.app
