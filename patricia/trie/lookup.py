"""
Lookup

Read-only traversal mirroring insertion: consume each branch edge, pick
the slot named by the next nibble, and accept a leaf only if its edge is
exactly the remaining path. Absence is the only failure mode.
"""
from __future__ import annotations

from typing import Optional, Sequence

from patricia.trie.nibbles import starts_with
from patricia.trie.nodes import BranchNode, LeafNode, Node


def find_leaf(node: Node, path: Sequence[int]) -> Optional[LeafNode]:
    """Return the leaf stored under `path`, or None."""
    remaining = tuple(path)

    while isinstance(node, BranchNode):
        edge = node.edge
        if len(remaining) <= len(edge) or not starts_with(remaining, edge):
            return None
        child = node.children[remaining[len(edge)]]
        if child is None:
            return None
        node = child
        remaining = remaining[len(edge):]

    if isinstance(node, LeafNode) and node.edge == remaining:
        return node
    return None


def get_value(node: Node, path: Sequence[int]) -> Optional[bytes]:
    """Return the value stored under `path`, or None."""
    leaf = find_leaf(node, path)
    return None if leaf is None else leaf.value


__all__ = [
    "find_leaf",
    "get_value",
]
