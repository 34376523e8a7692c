"""
Tests for location helpers.
"""

from bun_why.locations import (
    expand_location,
    iterate_locations,
    normalize_location,
    split_location,
)


class TestSplitLocation:
    """Test splitting locations into package segments."""

    def test_plain(self):
        assert split_location("a/b/c") == ["a", "b", "c"]

    def test_scoped_segments_stay_together(self):
        assert split_location("a/@s/b/c") == ["a", "@s/b", "c"]
        assert split_location("@s/b") == ["@s/b"]

    def test_single(self):
        assert split_location("foo") == ["foo"]


class TestIterateLocations:
    """Test the nearest-first candidate order."""

    def test_nested(self):
        assert list(iterate_locations("a/b/c", "d")) == ["a/b/c/d", "a/b/d", "a/d", "d"]

    def test_scoped_parent(self):
        assert list(iterate_locations("a/@s/b", "d")) == ["a/@s/b/d", "a/d", "d"]
        assert list(iterate_locations("@s/b", "d")) == ["@s/b/d", "d"]

    def test_scoped_dependency(self):
        assert list(iterate_locations("foo", "@t/x")) == ["foo/@t/x", "@t/x"]

    def test_candidate_count(self):
        """Depth plus one candidates, ending with the bare name."""
        candidates = list(iterate_locations("a/@s/b/c/@t/d", "e"))
        assert len(candidates) == 5
        assert candidates[-1] == "e"


def test_expand_location():
    assert expand_location("foo") == "node_modules/foo"
    assert expand_location("foo/bar") == "node_modules/foo/node_modules/bar"
    assert (
        expand_location("@s/b/c") == "node_modules/@s/b/node_modules/c"
    )


def test_normalize_location():
    assert normalize_location("foo/bar") == "foo/bar"
    assert normalize_location("foo\\node_modules\\bar") == "foo/bar"
    assert normalize_location("node_modules/foo/node_modules/@s/b") == "foo/@s/b"
