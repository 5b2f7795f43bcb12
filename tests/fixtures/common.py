"""
Common test fixtures shared by all modules.

Provides factory functions for:
- Key/value entry sets (hashed and raw routing)
- Tries built from those entries
- Committed node stores
"""

import json
from pathlib import Path
from typing import Optional

from patricia.store import MemoryNodeStore, commit_trie
from patricia.trie import RoutingMode, Trie


# =============================================================================
# Entry Factories
# =============================================================================

def make_entries(count: int = 8, prefix: str = "key") -> list[tuple[bytes, bytes]]:
    """
    Create distinct key/value pairs for hashed routing.

    Args:
        count: Number of entries.
        prefix: Key prefix, keys are f"{prefix}-{i}".

    Returns:
        List of (key, value) byte pairs.
    """
    return [
        (f"{prefix}-{i}".encode(), f"value-{i}".encode())
        for i in range(count)
    ]


def make_raw_entries(keys: Optional[list[bytes]] = None) -> list[tuple[bytes, bytes]]:
    """
    Create fixed-width key/value pairs for raw routing.

    The default keys share prefixes of different lengths so that raw
    tries get branches with non-empty edges.
    """
    if keys is None:
        keys = [
            bytes.fromhex("1234"),
            bytes.fromhex("1235"),
            bytes.fromhex("1299"),
            bytes.fromhex("5600"),
            bytes.fromhex("56ff"),
        ]
    return [(key, b"v" + key) for key in keys]


# =============================================================================
# Trie Factories
# =============================================================================

def make_trie(
    entries: Optional[list[tuple[bytes, bytes]]] = None,
    routing: RoutingMode = RoutingMode.HASHED,
    hash_algorithm: str = "sha256",
) -> Trie:
    """Build a trie from entries (default: make_entries())."""
    if entries is None:
        entries = make_entries()
    return Trie.from_items(entries, routing=routing, hash_algorithm=hash_algorithm)


def make_store(trie: Optional[Trie] = None) -> MemoryNodeStore:
    """Commit a trie (default: make_trie()) to a fresh in-memory store."""
    store = MemoryNodeStore()
    commit_trie(trie if trie is not None else make_trie(), store)
    return store


def write_entries_file(path: Path, entries: dict[str, str]) -> Path:
    """Write a CLI entries file and return its path."""
    path.write_text(json.dumps(entries), encoding="utf-8")
    return path
