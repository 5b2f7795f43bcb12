"""
Pytest configuration and shared fixtures for Patricia trie tests.

This conftest.py:
1. Adds project root to sys.path for imports
2. Provides commonly-used fixtures via pytest's autodiscovery
3. Configures pytest markers and settings
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

# =============================================================================
# Import fixtures using importlib (more robust for pytest loading)
# =============================================================================

import importlib

_common = importlib.import_module("fixtures.common")

make_entries = _common.make_entries
make_raw_entries = _common.make_raw_entries
make_trie = _common.make_trie
make_store = _common.make_store


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture
def entries():
    """Provide the default hashed-routing entry set."""
    return make_entries()


@pytest.fixture
def trie(entries):
    """Provide a hashed-routing trie holding the default entries."""
    return make_trie(entries)


@pytest.fixture
def raw_trie():
    """Provide a raw-routing trie whose branches carry non-empty edges."""
    from patricia.trie import RoutingMode
    return make_trie(make_raw_entries(), routing=RoutingMode.RAW)


@pytest.fixture(autouse=True)
def _clean_environment(monkeypatch):
    """Keep PATRICIA_* variables and the default config out of every test."""
    from patricia.config import set_default_config

    for name in (
        "PATRICIA_HASH_ALGORITHM",
        "PATRICIA_ROUTING",
        "PATRICIA_LOG_LEVEL",
        "PATRICIA_LOG_FILE",
    ):
        monkeypatch.delenv(name, raising=False)
    set_default_config(None)
    yield
    set_default_config(None)


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )


# =============================================================================
# Test Helpers (available to all tests via fixtures)
# =============================================================================

@pytest.fixture
def assert_valid_trie():
    """Helper asserting that a trie passes every structural check."""
    def _assert(trie, expected_size=None):
        trie.check_invariants()
        if expected_size is not None:
            assert trie.size() == expected_size, f"Expected size {expected_size}, got {trie.size()}"
    return _assert
