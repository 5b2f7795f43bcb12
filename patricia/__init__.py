"""
Patricia - Merkle-Patricia trie.

An immutable, path-compressed key/value index whose root digest commits
to exactly the set of entries it holds.

    from patricia import Trie

    trie = Trie.new().insert(b"key", b"value")
    trie.hash()
"""

from patricia.schemas.errors import (
    DuplicateKeyError,
    InternalInconsistencyError,
    InvalidKeyError,
    InvalidValueWidthError,
    PatriciaException,
    StructuralInvariantError,
)
from patricia.trie import RoutingMode, Trie

__version__ = "0.1.0"

__all__ = [
    "Trie",
    "RoutingMode",
    "PatriciaException",
    "DuplicateKeyError",
    "InvalidKeyError",
    "InvalidValueWidthError",
    "StructuralInvariantError",
    "InternalInconsistencyError",
]
