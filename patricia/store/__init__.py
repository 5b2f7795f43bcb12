"""
Node storage boundary.

Tries are committed content-addressed (node records keyed by digest) with
the root manifest under ROOT_KEY, and recovered with integrity checks.

Usage:
    from patricia.store import JsonFileNodeStore, commit_trie, load_trie

    store = JsonFileNodeStore("state.json")
    commit_trie(trie, store)
    assert load_trie(JsonFileNodeStore("state.json")) == trie
"""
from .node_store import (
    ROOT_KEY,
    JsonFileNodeStore,
    MemoryNodeStore,
    NodeStore,
    NodeStoreError,
)
from .commit import (
    commit_trie,
    load_manifest,
    load_trie,
    node_to_record,
)

__all__ = [
    "ROOT_KEY",
    "JsonFileNodeStore",
    "MemoryNodeStore",
    "NodeStore",
    "NodeStoreError",
    "commit_trie",
    "load_manifest",
    "load_trie",
    "node_to_record",
]
