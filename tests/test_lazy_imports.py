"""Tests for the lazy top-level API."""

import pytest

import burrow


class TestLazyImports:
    @pytest.mark.parametrize("name", burrow.__all__)
    def test_every_public_name_resolves(self, name: str) -> None:
        assert getattr(burrow, name) is not None

    def test_unknown_name(self) -> None:
        with pytest.raises(AttributeError, match="no attribute 'nope'"):
            burrow.nope  # noqa: B018

    def test_same_objects_as_submodules(self) -> None:
        from burrow.app import App
        from burrow.errors import NotFound

        assert burrow.App is App
        assert burrow.NotFound is NotFound
