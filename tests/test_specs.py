"""
Tests for matching package specs against the lockfile.
"""

import pytest

from bun_why.specs import InvalidSpecError, collect_locations, is_valid_package_name


class TestIsValidPackageName:
    """Test npm package name rules."""

    @pytest.mark.parametrize(
        "name",
        ["esbuild", "@types/node", "lodash.merge", "JSONStream", "*", "fs"],
    )
    def test_valid(self, name):
        assert is_valid_package_name(name)

    @pytest.mark.parametrize(
        "name",
        [
            "",
            ".hidden",
            "_private",
            " spaced",
            "node_modules",
            "favicon.ico",
            "semver@6",
            "@types/node@1",
            "foo/bar",
            "@scope",
            "has space",
        ],
    )
    def test_invalid(self, name):
        assert not is_valid_package_name(name)


class TestCollectLocations:
    """Test the three spec forms against the sample lockfile."""

    def test_by_name_all_depths(self, fixture_lockfile):
        assert collect_locations(fixture_lockfile, ["bar"]) == ["bar", "foo/bar"]

    def test_by_name_nested_only(self, fixture_lockfile):
        assert collect_locations(fixture_lockfile, ["qux"]) == ["@scope/pkg/qux"]

    def test_by_scoped_name(self, fixture_lockfile):
        assert collect_locations(fixture_lockfile, ["@scope/pkg"]) == ["@scope/pkg"]

    def test_wildcard_range_same_as_name(self, fixture_lockfile):
        by_name = collect_locations(fixture_lockfile, ["bar"])
        assert collect_locations(fixture_lockfile, ["bar@*"]) == by_name
        assert collect_locations(fixture_lockfile, ["bar@"]) == by_name

    def test_by_range(self, fixture_lockfile):
        assert collect_locations(fixture_lockfile, ["bar@^1"]) == ["foo/bar"]
        assert collect_locations(fixture_lockfile, ["bar@2.3.0"]) == ["bar"]
        assert collect_locations(fixture_lockfile, ["bar@^3"]) == []

    def test_by_scoped_range(self, fixture_lockfile):
        assert collect_locations(fixture_lockfile, ["@scope/pkg@^2"]) == ["@scope/pkg"]

    def test_by_location(self, fixture_lockfile):
        assert collect_locations(fixture_lockfile, ["foo/bar"]) == ["foo/bar"]
        assert collect_locations(fixture_lockfile, ["@scope/pkg/qux"]) == [
            "@scope/pkg/qux"
        ]

    def test_by_path(self, fixture_lockfile):
        assert collect_locations(
            fixture_lockfile, ["node_modules\\foo\\node_modules\\bar"]
        ) == ["foo/bar"]
        assert collect_locations(fixture_lockfile, ["foo/node_modules/bar"]) == [
            "foo/bar"
        ]

    def test_union_without_duplicates(self, fixture_lockfile):
        result = collect_locations(fixture_lockfile, ["foo/bar", "bar", "bar@^1"])
        assert result == ["foo/bar", "bar"]

    def test_unknown_name(self, fixture_lockfile):
        assert collect_locations(fixture_lockfile, ["missing"]) == []

    def test_empty_specs(self, fixture_lockfile):
        assert collect_locations(fixture_lockfile, []) == []

    @pytest.mark.parametrize("spec", ["not a spec", "@scope", ".hidden", "x/y"])
    def test_invalid_spec(self, fixture_lockfile, spec):
        with pytest.raises(InvalidSpecError) as exc_info:
            collect_locations(fixture_lockfile, [spec])
        assert str(exc_info.value) == (
            f'Invalid package spec: {spec}, expected "name@range" or "name"'
        )
