"""
Configuration management for bun-why.

Settings are read from (highest priority first):
1. values set explicitly (CLI flags)
2. environment variables
3. .bun-why.toml in the project root
4. pyproject.toml in the project root
"""

import os
import tomllib
from pathlib import Path

# Default lockfile name, relative to the project root
DEFAULT_LOCKFILE = "bun.lock"

LOCAL_CONFIG_NAME = ".bun-why.toml"
CONFIG_TABLE = "bun-why"

# Project root; None means the current working directory
PROJECT_ROOT: Path | None = None

# Global overrides (can be set by the CLI)
_LOCKFILE_PATH: Path | None = None
_VERBOSE: bool | None = None


def load_config_file(config_path: Path) -> dict:
    """Load a TOML configuration file."""
    if not config_path.exists():
        return {}
    try:
        with open(config_path, "rb") as f:
            return tomllib.load(f)
    except Exception as e:
        raise ValueError(f"Failed to load config from {config_path}: {e}") from e


def get_project_root() -> Path:
    """Get the directory configuration and relative lockfile paths are resolved in."""
    return PROJECT_ROOT if PROJECT_ROOT is not None else Path.cwd()


def set_project_root(path: Path | str | None) -> None:
    """
    Set the project root explicitly.

    Args:
        path: Project directory, or None to use the current working directory.
    """
    global PROJECT_ROOT
    PROJECT_ROOT = Path(path).expanduser() if path is not None else None


def get_settings() -> dict:
    """
    Load the ``[tool.bun-why]`` table.

    Priority:
    1. .bun-why.toml (local config, highest priority)
    2. pyproject.toml (project-level config, fallback)

    Returns:
        Settings dictionary (empty if no config file has the table).
    """
    root = get_project_root()
    for config_path in (root / LOCAL_CONFIG_NAME, root / "pyproject.toml"):
        settings = load_config_file(config_path).get("tool", {}).get(CONFIG_TABLE)
        if settings:
            return settings
    return {}


def get_lockfile_path() -> Path:
    """
    Get the path of the lockfile to explain.

    Priority:
    1. Explicitly set value via set_lockfile_path()
    2. BUN_WHY_LOCKFILE environment variable
    3. ``lockfile`` in the config files
    4. Default: bun.lock

    Relative paths are resolved against the project root.

    Returns:
        Path to the lockfile.
    """
    if _LOCKFILE_PATH is not None:
        path = _LOCKFILE_PATH
    elif os.getenv("BUN_WHY_LOCKFILE"):
        path = Path(os.environ["BUN_WHY_LOCKFILE"]).expanduser()
    else:
        path = Path(get_settings().get("lockfile", DEFAULT_LOCKFILE)).expanduser()

    if not path.is_absolute():
        path = get_project_root() / path
    return path


def set_lockfile_path(path: Path | str | None) -> None:
    """
    Set the lockfile path explicitly.

    Args:
        path: Lockfile path, or None to fall back to env/config/default.
    """
    global _LOCKFILE_PATH
    _LOCKFILE_PATH = Path(path).expanduser() if path is not None else None


def is_verbose_enabled() -> bool:
    """
    Check if verbose logging is enabled.

    Priority:
    1. Explicitly set value via set_verbose()
    2. BUN_WHY_VERBOSE environment variable (1/true/yes)
    3. ``verbose`` in the config files
    4. Default: False
    """
    if _VERBOSE is not None:
        return _VERBOSE

    env_verbose = os.getenv("BUN_WHY_VERBOSE")
    if env_verbose:
        return env_verbose.strip().lower() in ("1", "true", "yes")

    return bool(get_settings().get("verbose", False))


def set_verbose(verbose: bool | None) -> None:
    """Set verbose logging explicitly (None restores the default lookup)."""
    global _VERBOSE
    _VERBOSE = verbose
