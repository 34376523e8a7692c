"""
Turn user supplied package specs into lockfile locations.

A spec is tried in this order:

1. a bare package name (``esbuild``, ``@types/node``): every installed copy,
2. a location or path (``foo/bar``, ``node_modules\\foo\\node_modules\\bar``),
3. ``name@range`` (``semver@6``, ``@babel/core@^7``).
"""

import logging
import re
from urllib.parse import quote

from bun_why.locations import normalize_location
from bun_why.lockfile import Lockfile
from bun_why.versions import satisfies

logger = logging.getLogger(__name__)

_SCOPED_NAME_RE = re.compile(r"^(?:@([^/]+?)/)?([^/]+?)$")
_BLACKLISTED_NAMES = {"node_modules", "favicon.ico"}
# Characters encodeURIComponent leaves alone besides alphanumerics and "-_.~"
_URL_SAFE = "!*'()"


class InvalidSpecError(ValueError):
    """Raised when a spec is neither a name, a location nor ``name@range``."""

    def __init__(self, spec: str):
        self.spec = spec
        super().__init__(
            f'Invalid package spec: {spec}, expected "name@range" or "name"'
        )


def _is_url_safe(value: str) -> bool:
    return quote(value, safe=_URL_SAFE) == value


def is_valid_package_name(name: str) -> bool:
    """
    Check a string against npm's package name rules for legacy packages.

    Uppercase letters, long names and core module names are accepted since
    older packages on the registry use them.
    """
    if not name:
        return False
    if name.startswith(".") or name.startswith("_"):
        return False
    if name.strip() != name:
        return False
    if name.lower() in _BLACKLISTED_NAMES:
        return False
    if _is_url_safe(name):
        return True

    match = _SCOPED_NAME_RE.match(name)
    if match:
        scope, package = match.groups()
        if scope is not None and _is_url_safe(scope) and _is_url_safe(package):
            return True
    return False


def _collect_by_name(lockfile: Lockfile, name: str, collected: dict[str, None]):
    if name in lockfile:
        collected[name] = None
    suffix = "/" + name
    for location, record in lockfile.packages.items():
        if location.endswith(suffix) and record.name == name:
            collected[location] = None


def _collect_by_range(
    lockfile: Lockfile, name: str, range_: str, collected: dict[str, None]
):
    if range_ == "*":
        _collect_by_name(lockfile, name, collected)
        return

    for location, record in lockfile.packages.items():
        if record.name == name and satisfies(record.version, range_):
            collected[location] = None


def collect_locations(lockfile: Lockfile, specs: list[str]) -> list[str]:
    """
    Resolve specs into the lockfile locations they refer to.

    Args:
        lockfile: Parsed lockfile.
        specs: Package specs given by the user.

    Returns:
        Matching locations without duplicates, in discovery order.

    Raises:
        InvalidSpecError: If a spec has none of the accepted forms.
    """
    collected: dict[str, None] = {}

    for spec in specs:
        if is_valid_package_name(spec):
            logger.debug("Matching %r by package name", spec)
            _collect_by_name(lockfile, spec, collected)
            continue

        maybe_location = normalize_location(spec)
        if maybe_location in lockfile:
            logger.debug("Matching %r as location %s", spec, maybe_location)
            collected[maybe_location] = None
            continue

        index = spec.find("@", 1)
        if index <= 0:
            raise InvalidSpecError(spec)
        name, range_ = spec[:index], spec[index + 1 :] or "*"
        logger.debug("Matching %r as %s in range %s", spec, name, range_)
        _collect_by_range(lockfile, name, range_, collected)

    return list(collected)
