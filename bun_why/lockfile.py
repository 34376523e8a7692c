"""
Typed view over Bun's text lockfile (``bun.lock``).

Only the ``packages`` table is modelled. Each entry is keyed by its
install location (``foo``, ``foo/bar``, ``@scope/pkg/dep``) and holds an
array whose shape depends on where the package came from:

- registry: ``[id, registry, meta, integrity]``
- git/github: ``[id, meta, hash]``
- file/link/workspace: ``[id, meta]`` or ``[id]``
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, NamedTuple

from bun_why import jsonc

logger = logging.getLogger(__name__)


class LockfileError(Exception):
    """Raised when the lockfile cannot be read or does not look like bun.lock."""


class PackageMeta(NamedTuple):
    """Dependency declarations of a locked package."""

    dependencies: dict[str, str]
    optional_dependencies: dict[str, str]

    def iter_dependencies(self):
        """Yield ``(name, range)`` pairs, regular dependencies first."""
        yield from self.dependencies.items()
        yield from self.optional_dependencies.items()


class PackageRecord(NamedTuple):
    """A single entry of the ``packages`` table."""

    id: str
    meta: PackageMeta

    @property
    def name(self) -> str | None:
        parts = split_package_id(self.id)
        return parts[0] if parts else None

    @property
    def version(self) -> str | None:
        parts = split_package_id(self.id)
        return parts[1] if parts else None


class Lockfile(NamedTuple):
    """Parsed lockfile: location -> package record."""

    packages: dict[str, PackageRecord]
    lockfile_version: int | None = None
    path: Path | None = None

    def __contains__(self, location: object) -> bool:
        return location in self.packages

    def get(self, location: str) -> PackageRecord | None:
        return self.packages.get(location)


def split_package_id(package_id: str) -> tuple[str, str] | None:
    """
    Split ``name@version`` into its two halves.

    The search for ``@`` starts at index 1 so the scope marker of
    ``@scope/name@1.0.0`` is not mistaken for the separator.

    Returns:
        ``(name, version)`` or None when the id has no separator.
    """
    index = package_id.find("@", 1)
    if index <= 0:
        return None
    return package_id[:index], package_id[index + 1 :]


def _string_mapping(value: Any) -> dict[str, str]:
    if not isinstance(value, dict):
        return {}
    return {name: rng for name, rng in value.items() if isinstance(rng, str)}


def parse_package_record(location: str, entry: Any) -> PackageRecord:
    """Build a PackageRecord from one raw ``packages`` entry."""
    if not isinstance(entry, list) or not entry or not isinstance(entry[0], str):
        raise LockfileError(f"Malformed entry for '{location}': {entry!r}")

    # Registry markers, git hashes and integrity strings are not needed
    raw_meta = next((item for item in entry[1:] if isinstance(item, dict)), {})
    meta = PackageMeta(
        dependencies=_string_mapping(raw_meta.get("dependencies")),
        optional_dependencies=_string_mapping(raw_meta.get("optionalDependencies")),
    )
    return PackageRecord(id=entry[0], meta=meta)


def parse_lockfile(text: str, path: Path | None = None) -> Lockfile:
    """
    Parse the text of a bun.lock file.

    Args:
        text: Lockfile contents.
        path: Where the text came from, used in error messages.

    Returns:
        Lockfile model.

    Raises:
        LockfileError: If the text is not relaxed JSON or has no packages table.
    """
    source = path or "<lockfile>"
    try:
        data = jsonc.parse(text)
    except json.JSONDecodeError as e:
        raise LockfileError(f"Failed to parse {source}: {e}") from e

    if not isinstance(data, dict):
        raise LockfileError(f"Failed to parse {source}: expected a JSON object")

    raw_packages = data.get("packages")
    if not isinstance(raw_packages, dict):
        raise LockfileError(f"Failed to parse {source}: missing 'packages' table")

    packages = {
        location: parse_package_record(location, entry)
        for location, entry in raw_packages.items()
    }

    version = data.get("lockfileVersion")
    return Lockfile(
        packages=packages,
        lockfile_version=version if isinstance(version, int) else None,
        path=path,
    )


def load_lockfile(path: str | Path) -> Lockfile:
    """
    Read and parse a bun.lock file.

    Raises:
        LockfileError: If the file cannot be read or parsed.
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise LockfileError(f"Failed to read {path}: {e}") from e

    lockfile = parse_lockfile(text, path)
    logger.debug(
        "Loaded %d packages from %s (lockfileVersion %s)",
        len(lockfile.packages),
        lockfile.path,
        lockfile.lockfile_version,
    )
    return lockfile
