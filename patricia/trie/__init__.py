"""
Merkle-Patricia Trie
Path-compressed key/value index whose every node commits to its subtree.

This package provides:
- Trie: immutable facade (insert, update, get, items, hash, size)
- Node model: EmptyNode, LeafNode, BranchNode and their constructors
- DigestProtocol: leaf/branch digest rules bound to a hash oracle
- Nibble codec: to_nibbles, encode_path (hex-prefix), common_prefix
- RoutingMode: hashed-key or raw-key routing paths

Canonical Commitment Rules:
1. Leaf digest: H(encode_path(edge) || H(value))
2. Merkle root: H(d_0 || ... || d_15), NULL_DIGEST for empty slots
3. Branch digest: H(bytes(edge) || merkle_root)
4. Empty trie: NULL_DIGEST

Usage:
    from patricia.trie import Trie

    trie = Trie.new().insert(b"k1", b"v1").insert(b"k2", b"v2")
    trie.get(b"k1")    # b"v1"
    trie.hash()        # same for any insertion order of {k1, k2}
"""
from .digests import (
    BRANCH_WIDTH,
    DEFAULT_PROTOCOL,
    DigestProtocol,
)

from .nibbles import (
    Nibbles,
    common_prefix,
    decode_path,
    encode_path,
    format_nibbles,
    from_nibbles,
    parse_nibbles,
    starts_with,
    to_nibbles,
)

from .nodes import (
    EMPTY,
    BranchNode,
    EmptyNode,
    LeafNode,
    Node,
    iter_leaf_paths,
    iter_leaves,
    make_branch,
    make_leaf,
    to_sparse_children,
)

from .routing import RoutingMode, routing_path
from .insertion import insert_node
from .lookup import find_leaf, get_value
from .inspect import render_node, summarize_digest, summarize_path
from .trie import Trie


__all__ = [
    # Facade
    "Trie",
    "RoutingMode",
    "routing_path",
    # Digests
    "BRANCH_WIDTH",
    "DEFAULT_PROTOCOL",
    "DigestProtocol",
    # Nibbles
    "Nibbles",
    "common_prefix",
    "decode_path",
    "encode_path",
    "format_nibbles",
    "from_nibbles",
    "parse_nibbles",
    "starts_with",
    "to_nibbles",
    # Nodes
    "EMPTY",
    "BranchNode",
    "EmptyNode",
    "LeafNode",
    "Node",
    "iter_leaf_paths",
    "iter_leaves",
    "make_branch",
    "make_leaf",
    "to_sparse_children",
    # Algorithms
    "insert_node",
    "find_leaf",
    "get_value",
    # Inspection
    "render_node",
    "summarize_digest",
    "summarize_path",
]
