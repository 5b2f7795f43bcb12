"""
Test fixtures package for Patricia trie tests.

This package provides factory functions for creating test objects:
- common.py: entry sets, tries and committed stores

Usage:
    from fixtures import make_entries, make_trie

    def test_something():
        trie = make_trie(make_entries(10))
"""

from .common import (
    make_entries,
    make_raw_entries,
    make_trie,
    make_store,
    write_entries_file,
)

__all__ = [
    "make_entries",
    "make_raw_entries",
    "make_trie",
    "make_store",
    "write_entries_file",
]
