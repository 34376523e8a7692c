"""Semver range checks with npm semantics."""

import nodesemver


def satisfies(version: str, range_: str) -> bool:
    """
    Check whether a version falls inside an npm-style range.

    Versions that are not semver (git refs, ``workspace:`` markers, tarball
    URLs) never satisfy a range.

    Args:
        version: Installed version, e.g. ``"1.2.0"``.
        range_: Declared range, e.g. ``"^1.0.0"`` or ``">=2 <3"``.

    Returns:
        True if the version satisfies the range.
    """
    try:
        return bool(nodesemver.satisfies(version, range_))
    except (ValueError, TypeError):
        return False
