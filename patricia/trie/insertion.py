"""
Insertion Algorithm

insert_node() returns a new subtree holding the old entries plus one
more. It never mutates its input: the nodes along the insertion path are
rebuilt (with fresh digests and sizes) and every untouched sibling is
shared with the previous version.

Cases, by the node found at the current position, with `path` being the
routing path still unconsumed at that position:

- Empty:  a leaf with edge = path.
- Leaf:   equal edge means the key is present (DuplicateKeyError, or a
          value replacement when overwriting). Otherwise the leaf is split
          at the common prefix of both edges into a branch holding two
          leaves.
- Branch: if path agrees with the branch edge, consume the edge, select a
          slot with the next nibble and place a leaf there or recurse into
          the occupant. The selector stays on the path handed to the slot,
          so every child edge starts with its own slot nibble. If path
          diverges inside the edge, the branch is split at the common
          prefix like a leaf.
"""
from __future__ import annotations

from typing import Callable, Sequence

from patricia.schemas.errors import (
    DuplicateKeyError,
    InternalInconsistencyError,
    InvalidKeyError,
)
from patricia.trie.digests import DigestProtocol
from patricia.trie.nibbles import Nibbles, common_prefix, format_nibbles, starts_with
from patricia.trie.nodes import (
    BranchNode,
    LeafNode,
    Node,
    make_branch,
    make_leaf,
    to_sparse_children,
)


def insert_node(
    node: Node,
    path: Sequence[int],
    key: bytes,
    value: bytes,
    protocol: DigestProtocol,
    *,
    overwrite: bool = False,
) -> Node:
    """
    Insert a key/value pair below `node`.

    Args:
        node: Subtree to insert into
        path: Routing path remaining at this position
        key: Original key bytes, stored in the new leaf
        value: Raw value bytes
        protocol: Digest rules used for every rebuilt node
        overwrite: Replace the value of an existing key instead of failing

    Returns:
        The new subtree. Its size is one greater than node.size unless an
        existing value was overwritten.

    Raises:
        DuplicateKeyError: If the key is present and overwrite is False
        InvalidKeyError: If the path length disagrees with the trie's paths
        InternalInconsistencyError: If a split finds no diverging nibble
    """
    path = tuple(path)

    if isinstance(node, LeafNode):
        return _insert_into_leaf(node, path, key, value, protocol, overwrite)
    if isinstance(node, BranchNode):
        return _insert_into_branch(node, path, key, value, protocol, overwrite)
    return make_leaf(path, key, value, protocol)


def _insert_into_leaf(
    leaf: LeafNode,
    path: Nibbles,
    key: bytes,
    value: bytes,
    protocol: DigestProtocol,
    overwrite: bool,
) -> Node:
    if path == leaf.edge:
        if overwrite:
            return make_leaf(leaf.edge, key, value, protocol)
        raise DuplicateKeyError(f"key 0x{key.hex()} already in trie", key=key)

    if len(path) != len(leaf.edge):
        raise InvalidKeyError(
            f"key 0x{key.hex()} routes to a path of {len(path)} nibbles "
            f"where {len(leaf.edge)} were expected",
            details={"expected": len(leaf.edge), "actual": len(path)},
        )

    return _split(
        leaf.edge,
        lambda edge: make_leaf(edge, leaf.key, leaf.value, protocol),
        path,
        key,
        value,
        protocol,
    )


def _insert_into_branch(
    branch: BranchNode,
    path: Nibbles,
    key: bytes,
    value: bytes,
    protocol: DigestProtocol,
    overwrite: bool,
) -> Node:
    edge = branch.edge

    if not starts_with(path, edge):
        return _split(
            edge,
            lambda new_edge: make_branch(new_edge, branch.children, protocol),
            path,
            key,
            value,
            protocol,
        )

    if len(path) <= len(edge):
        raise InvalidKeyError(
            f"key 0x{key.hex()} routing path ends inside branch edge {format_nibbles(edge)}",
            details={"path_length": len(path), "edge_length": len(edge)},
        )

    slot = path[len(edge)]
    rest = path[len(edge):]
    child = branch.children[slot]

    if child is None:
        new_child: Node = make_leaf(rest, key, value, protocol)
    else:
        new_child = insert_node(child, rest, key, value, protocol, overwrite=overwrite)

    children = list(branch.children)
    children[slot] = new_child
    return make_branch(edge, children, protocol)


def _split(
    existing_edge: Nibbles,
    rebuild_existing: Callable[[Nibbles], Node],
    path: Nibbles,
    key: bytes,
    value: bytes,
    protocol: DigestProtocol,
) -> BranchNode:
    """
    Replace a node whose edge diverges from `path` by a branch.

    The new branch takes the common prefix as its edge. The existing node
    keeps the rest of its edge and sits in the slot named by the first
    nibble of that rest; the new leaf for `key` is placed the same way.
    """
    prefix = common_prefix(existing_edge, path)
    depth = len(prefix)

    if depth >= len(path) or depth >= len(existing_edge):
        raise InvalidKeyError(
            f"key 0x{key.hex()} routing path is a prefix of an existing path",
            details={"path_length": len(path), "edge_length": len(existing_edge)},
        )

    existing_nibble = existing_edge[depth]
    new_nibble = path[depth]
    if existing_nibble == new_nibble:
        raise InternalInconsistencyError(
            "bug in common_prefix: selector nibbles coincide",
            details={
                "prefix": format_nibbles(prefix),
                "nibble": existing_nibble,
            },
        )

    existing = rebuild_existing(existing_edge[depth:])
    new_leaf = make_leaf(path[depth:], key, value, protocol)
    return make_branch(
        prefix,
        to_sparse_children([(existing_nibble, existing), (new_nibble, new_leaf)]),
        protocol,
    )


__all__ = [
    "insert_node",
]
