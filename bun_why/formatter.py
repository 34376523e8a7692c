"""
Text and JSON rendering of Why trees.

The report looks like::

    bar@1.2.0
    node_modules/foo/node_modules/bar
      bar@^1.0.0 from foo@1.0.0
      node_modules/foo
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any, NamedTuple

from bun_why.locations import expand_location
from bun_why.lockfile import Lockfile, PackageRecord
from bun_why.versions import satisfies
from bun_why.why import Why

INDENT = "  "
CIRCULAR_MARKER = " (circular)"


class ReportLine(NamedTuple):
    """One line of the report; ``is_path`` lines are shown dimmed on terminals."""

    text: str
    is_path: bool = False


def range_of(record: PackageRecord, name: str, version: str) -> str | None:
    """Return the range ``record`` declares for ``name`` that ``version`` satisfies."""
    for dep_name, range_ in record.meta.iter_dependencies():
        if dep_name == name and satisfies(version, range_):
            return range_
    return None


def _walk(
    lockfile: Lockfile, why: Why, depth: int, dependency: Why | None
) -> Iterator[ReportLine]:
    indent = INDENT * depth
    if depth and dependency is not None:
        record = lockfile.packages[why.location]
        range_ = range_of(record, dependency.name, dependency.version) or "*"
        line = f"{indent}{dependency.name}@{range_} from {why.name}@{why.version}"
        if why.circular:
            line += CIRCULAR_MARKER
        yield ReportLine(line)
    else:
        yield ReportLine("")
        yield ReportLine(f"{indent}{why.name}@{why.version}")

    yield ReportLine(f"{indent}{expand_location(why.location)}", is_path=True)
    for dependent in why.dependents:
        yield from _walk(lockfile, dependent, depth + 1, why)


def iter_report_lines(
    result: list[Why] | None, lockfile: Lockfile
) -> Iterator[ReportLine]:
    """
    Yield the report lines for ``result``.

    Each top level entry is preceded by a blank line except the first one.
    """
    lines = (
        line
        for why in result or []
        for line in _walk(lockfile, why, 0, None)
    )
    # Drop the separator in front of the first entry
    next(lines, None)
    yield from lines


def format_why(result: list[Why] | None, lockfile: Lockfile) -> str:
    """
    Pretty-print the result of :func:`bun_why.why.explain`.

    Args:
        result: Why trees to render.
        lockfile: The lockfile the trees were built from, used to look up
            the declared ranges.

    Returns:
        The report without a trailing newline, or "" if there is nothing to show.
    """
    if not result:
        return ""
    return "\n".join(line.text for line in iter_report_lines(result, lockfile))


def why_to_dict(why: Why) -> dict[str, Any]:
    """Convert a Why tree into JSON-serializable data."""
    data: dict[str, Any] = {
        "name": why.name,
        "version": why.version,
        "location": why.location,
        "path": expand_location(why.location),
        "dependents": [why_to_dict(dependent) for dependent in why.dependents],
    }
    if why.circular:
        data["circular"] = True
    return data
