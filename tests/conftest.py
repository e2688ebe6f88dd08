"""
Pytest configuration and shared fixtures for allowtree tests.

This conftest.py:
1. Adds project root to sys.path for imports
2. Provides commonly-used fixtures via pytest's autodiscovery
3. Isolates tests from ALLOWTREE_* environment variables
"""

import sys
from pathlib import Path

import pytest

# =============================================================================
# Path Setup - Must happen before any local imports
# =============================================================================

# Get the project root (parent of tests/)
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_TESTS_ROOT = Path(__file__).resolve().parent

# Add both project root and tests root to sys.path
for _path in [str(_PROJECT_ROOT), str(_TESTS_ROOT)]:
    if _path not in sys.path:
        sys.path.insert(0, _path)

import importlib

_common = importlib.import_module("fixtures.common")

DEFAULT_ADDRESSES = _common.DEFAULT_ADDRESSES
make_leaves = _common.make_leaves
make_tree = _common.make_tree
write_allowlist = _common.write_allowlist

from allowtree.config.runtime import set_default_config


# =============================================================================
# Environment isolation
# =============================================================================

_ENV_VARS = [
    "ALLOWTREE_HASHER",
    "ALLOWTREE_SORT_PAIRS",
    "ALLOWTREE_SORT_LEAVES",
    "ALLOWTREE_HEX_PREFIX",
    "ALLOWTREE_LOG_LEVEL",
    "ALLOWTREE_LOG_FILE",
    "ALLOWTREE_OUTPUT_FORMAT",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Remove ALLOWTREE_* variables and reset the cached default config."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    set_default_config(None)
    yield
    set_default_config(None)


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture
def leaves():
    """Five raw leaves."""
    return make_leaves(5)


@pytest.fixture
def tree():
    """Sorted-pair keccak256 tree over five leaves."""
    return make_tree(5)


@pytest.fixture
def addresses():
    """Allow-listed EVM addresses as text."""
    return list(DEFAULT_ADDRESSES)


@pytest.fixture
def allowlist_file(tmp_path, addresses):
    """Allow-list file containing the default addresses."""
    return write_allowlist(tmp_path, addresses)


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
