"""
Shared fixtures for bun-why tests.
"""

import json
from pathlib import Path

import pytest

import bun_why.config
from bun_why.lockfile import load_lockfile, parse_lockfile

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture(autouse=True)
def reset_config(monkeypatch):
    """Keep explicit settings and environment from leaking between tests."""
    monkeypatch.delenv("BUN_WHY_LOCKFILE", raising=False)
    monkeypatch.delenv("BUN_WHY_VERBOSE", raising=False)
    monkeypatch.setattr(bun_why.config, "PROJECT_ROOT", None)
    monkeypatch.setattr(bun_why.config, "_LOCKFILE_PATH", None)
    monkeypatch.setattr(bun_why.config, "_VERBOSE", None)


@pytest.fixture
def fixture_lockfile_path():
    return FIXTURES_DIR / "bun.lock"


@pytest.fixture
def fixture_lockfile(fixture_lockfile_path):
    return load_lockfile(fixture_lockfile_path)


@pytest.fixture
def make_lockfile():
    """Build a Lockfile from a ``packages`` mapping."""

    def _make(packages: dict):
        return parse_lockfile(json.dumps({"lockfileVersion": 1, "packages": packages}))

    return _make
