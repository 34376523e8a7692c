"""
Explain why packages are installed.

``explain`` matches the given specs against the lockfile and builds, for
each installed copy, the tree of packages that pull it in.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import NamedTuple

from bun_why.config import get_lockfile_path
from bun_why.dependents import build_dependent_index
from bun_why.lockfile import Lockfile, load_lockfile, split_package_id
from bun_why.specs import collect_locations

logger = logging.getLogger(__name__)


class Why(NamedTuple):
    """An installed package and the packages depending on it."""

    name: str
    version: str
    location: str  # key in the lockfile's packages table
    dependents: list[Why]
    circular: bool = False  # already shown higher up in the same chain


def make_why(
    location: str,
    lockfile: Lockfile,
    dependents: dict[str, list[str]],
    path: frozenset[str] = frozenset(),
) -> Why | None:
    """
    Build the dependents tree rooted at ``location``.

    Args:
        location: Lockfile location of the package to explain.
        lockfile: Parsed lockfile.
        dependents: Index from :func:`build_dependent_index`.
        path: Locations already on the current chain.

    Returns:
        Why tree, or None if the package id is malformed.
    """
    parts = split_package_id(lockfile.packages[location].id)
    if parts is None:
        logger.debug("Skipping %s: malformed package id", location)
        return None

    name, version = parts
    if location in path:
        logger.debug("Dependency cycle through %s", location)
        return Why(name, version, location, [], circular=True)

    chain = path | {location}
    children = []
    for dependent in dependents.get(location, []):
        child = make_why(dependent, lockfile, dependents, chain)
        if child is not None:
            children.append(child)

    return Why(name, version, location, children)


def explain(
    specs: list[str],
    lockfile: Lockfile | None = None,
    lockfile_path: str | Path | None = None,
) -> list[Why]:
    """
    Explain why the packages matching ``specs`` are installed.

    Args:
        specs: Package names, locations or ``name@range`` specs.
        lockfile: Already loaded lockfile. Loaded from ``lockfile_path`` (or
            the configured path) when omitted.
        lockfile_path: Lockfile to load when ``lockfile`` is not given.

    Returns:
        One Why tree per matching installed copy.

    Raises:
        LockfileError: If the lockfile cannot be read or parsed.
        InvalidSpecError: If a spec is not valid.
    """
    if not specs:
        return []

    if lockfile is None:
        lockfile = load_lockfile(lockfile_path or get_lockfile_path())

    dependents = build_dependent_index(lockfile)
    results = []
    for location in collect_locations(lockfile, specs):
        node = make_why(location, lockfile, dependents)
        if node is not None:
            results.append(node)
    return results


why = explain
