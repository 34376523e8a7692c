"""
bun-why: explain why a package is installed, from Bun's text lockfile.
"""

from bun_why.formatter import format_why
from bun_why.lockfile import Lockfile, LockfileError, load_lockfile
from bun_why.specs import InvalidSpecError
from bun_why.why import Why, explain, why

__version__ = "0.1.0"

__all__ = [
    "InvalidSpecError",
    "Lockfile",
    "LockfileError",
    "Why",
    "explain",
    "format_why",
    "load_lockfile",
    "why",
]
