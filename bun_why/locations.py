"""
Helpers for lockfile locations.

A location is the ``/`` separated chain of package names leading to an
installed copy, e.g. ``foo/@types/node`` is ``node_modules/foo/node_modules/@types/node``.
A scoped name takes two path parts and is always handled as one segment.
"""

from collections.abc import Iterator

NODE_MODULES = "node_modules"


def split_location(location: str) -> list[str]:
    """Split a location into package segments, keeping ``@scope/name`` together."""
    raw = location.split("/")
    parts: list[str] = []
    i = 0
    while i < len(raw):
        part = raw[i]
        if part.startswith("@") and i + 1 < len(raw):
            parts.append(f"{part}/{raw[i + 1]}")
            i += 2
        else:
            parts.append(part)
            i += 1
    return parts


def iterate_locations(location: str, name: str) -> Iterator[str]:
    """
    Yield the locations where ``name`` may be installed for a package at ``location``.

    Candidates are produced nearest first, like Node's module lookup:
    for ``a/b/c`` and ``d`` this gives ``a/b/c/d``, ``a/b/d``, ``a/d``, ``d``.
    """
    parts = split_location(location)
    for end in range(len(parts), 0, -1):
        yield "/".join(parts[:end]) + "/" + name
    yield name


def expand_location(location: str) -> str:
    """Turn a location into the on-disk path below the project root."""
    return "/".join(f"{NODE_MODULES}/{part}" for part in split_location(location))


def normalize_location(path: str) -> str:
    """
    Convert a user supplied path into lockfile location syntax.

    Backslashes become slashes and ``node_modules`` parts are dropped, so
    ``node_modules\\foo\\node_modules\\bar`` becomes ``foo/bar``.
    """
    normalized = path.replace("\\", "/").replace(f"/{NODE_MODULES}/", "/")
    prefix = f"{NODE_MODULES}/"
    if normalized.startswith(prefix):
        normalized = normalized[len(prefix) :]
    return normalized
