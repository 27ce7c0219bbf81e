"""Tests for request path splitting."""

import pytest

from burrow.routing.segments import split_path


class TestSplitPath:
    def test_root(self) -> None:
        assert split_path("/") == ()

    def test_empty(self) -> None:
        assert split_path("") == ()

    def test_simple(self) -> None:
        assert split_path("/shoes/42") == ("shoes", "42")

    def test_trailing_and_doubled_slashes(self) -> None:
        assert split_path("//blog///posts/") == ("blog", "posts")

    @pytest.mark.parametrize(
        ("path", "expected"),
        [
            ("/../../etc/passwd", ("etc", "passwd")),
            ("/./a/./b", ("a", "b")),
            ("/a/../b", ("a", "b")),
            ("/..", ()),
        ],
    )
    def test_relative_segments_dropped(self, path: str, expected: tuple[str, ...]) -> None:
        assert split_path(path) == expected

    def test_segments_not_decoded(self) -> None:
        assert split_path("/a%2Fb/c d") == ("a%2Fb", "c d")

    def test_dots_inside_segment_kept(self) -> None:
        assert split_path("/.well-known/a..b") == (".well-known", "a..b")
