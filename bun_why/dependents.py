"""
Reverse dependency index.

Every declared dependency is resolved the way a package manager would
resolve the import at runtime: the nearest installed copy whose version
satisfies the declared range wins.
"""

import logging

from bun_why.locations import iterate_locations
from bun_why.lockfile import Lockfile
from bun_why.versions import satisfies

logger = logging.getLogger(__name__)


def resolve_dependency(
    lockfile: Lockfile, location: str, name: str, range_: str
) -> str | None:
    """
    Find the location that satisfies ``name@range_`` for the package at ``location``.

    Returns:
        The matching location, or None if no installed copy fits.
    """
    for candidate in iterate_locations(location, name):
        record = lockfile.get(candidate)
        if record is None:
            continue
        if record.version is not None and satisfies(record.version, range_):
            return candidate
    return None


def build_dependent_index(lockfile: Lockfile) -> dict[str, list[str]]:
    """
    Map each location to the locations that depend on it.

    If ``A`` depends on ``B`` the result contains ``{B: [A]}``. Lists keep
    lockfile order, then declaration order (regular before optional).
    Unresolved dependencies produce no edge.

    Args:
        lockfile: Parsed lockfile.

    Returns:
        Dictionary of location -> dependent locations.
    """
    dependents: dict[str, list[str]] = {}

    for location, record in lockfile.packages.items():
        if record.name is None:
            logger.debug("Skipping malformed package id %r at %s", record.id, location)
            continue

        for dep_name, range_ in record.meta.iter_dependencies():
            target = resolve_dependency(lockfile, location, dep_name, range_)
            if target is None:
                logger.debug(
                    "No installed copy of %s@%s for %s", dep_name, range_, location
                )
                continue
            dependents.setdefault(target, []).append(location)

    logger.debug(
        "Built dependent index with %d entries for %s",
        len(dependents),
        lockfile.path or "<lockfile>",
    )
    return dependents
