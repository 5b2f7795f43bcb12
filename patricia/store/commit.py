"""
Committing and Recovering Tries

commit_trie() writes every node of a trie as a canonical JSON record
under its own digest and the manifest under ROOT_KEY. load_trie() reads
them back, rebuilding each node and checking that its recomputed digest
equals the key it was stored under, so a tampered or truncated store is
detected instead of silently producing a different trie.

Records are shared by every node with the same digest. A leaf digest
commits to its edge and value but not to its key, so the key of a loaded
leaf is checked against (raw routing: rebuilt from) its position.
"""

from __future__ import annotations

import logging
from typing import Iterator

from pydantic import TypeAdapter, ValidationError

from patricia.crypto.hashing import NULL_DIGEST, to_hex
from patricia.schemas.canonical import dumps_canonical
from patricia.schemas.errors import PatriciaException, RecordIntegrityError
from patricia.schemas.records import BranchRecord, LeafRecord, NodeRecord, TrieManifest
from patricia.schemas.versioning import (
    UnsupportedSchemaVersionError,
    assert_supported_schema_version,
)
from patricia.store.node_store import ROOT_KEY, NodeStore
from patricia.trie.nibbles import Nibbles, format_nibbles, from_nibbles, parse_nibbles
from patricia.trie.nodes import (
    EMPTY,
    BranchNode,
    LeafNode,
    Node,
    make_branch,
    make_leaf,
    to_sparse_children,
)
from patricia.trie.routing import RoutingMode
from patricia.trie.trie import Trie


logger = logging.getLogger(__name__)

_NODE_RECORD = TypeAdapter(NodeRecord)


def node_to_record(node: Node) -> LeafRecord | BranchRecord:
    """Convert a leaf or branch to its storage record."""
    if isinstance(node, LeafNode):
        return LeafRecord(
            edge=format_nibbles(node.edge),
            key=to_hex(node.key),
            value=to_hex(node.value),
        )
    if isinstance(node, BranchNode):
        return BranchRecord(
            edge=format_nibbles(node.edge),
            children={f"{slot:x}": to_hex(child.digest) for slot, child in node.populated()},
        )
    raise TypeError(f"Empty nodes have no record, got {type(node).__name__}")


def _iter_nodes(node: Node) -> Iterator[Node]:
    """Post-order walk, children before parents."""
    if isinstance(node, BranchNode):
        for _, child in node.populated():
            yield from _iter_nodes(child)
    if not node.is_empty():
        yield node


def commit_trie(trie: Trie, store: NodeStore) -> str:
    """
    Write a trie to a node store.

    Records already present under their digest are skipped, so committing
    successive versions of a trie only writes the nodes that changed.

    Returns:
        Root digest as 0x hex
    """
    written = 0
    for node in _iter_nodes(trie.root):
        key = to_hex(node.digest)
        if key in store:
            continue
        store.put(key, dumps_canonical(node_to_record(node)))
        written += 1

    manifest = TrieManifest(
        root=trie.root_hex,
        size=trie.size(),
        routing=trie.routing.value,
        hash_algorithm=trie.hash_algorithm,
    )
    store.put(ROOT_KEY, dumps_canonical(manifest))
    store.flush()

    logger.info(f"Committed trie root={trie.root_hex} size={trie.size()} ({written} new records)")
    return trie.root_hex


def load_manifest(store: NodeStore) -> TrieManifest | None:
    """Read the root manifest, or None if the store holds no trie."""
    raw = store.get(ROOT_KEY)
    if raw is None:
        return None
    try:
        manifest = TrieManifest.model_validate_json(raw)
        assert_supported_schema_version(manifest.schema_version)
    except (ValidationError, UnsupportedSchemaVersionError) as e:
        raise RecordIntegrityError(f"Invalid root manifest: {e}") from e
    return manifest


def load_trie(store: NodeStore) -> Trie:
    """
    Recover a trie from a node store.

    An empty store yields an empty default trie.

    Raises:
        RecordIntegrityError: If a record is missing, malformed, does not
            hash to the digest it is stored under, sits below itself, or
            holds a leaf whose key does not route to the leaf's position
    """
    manifest = load_manifest(store)
    if manifest is None:
        return Trie.new()

    try:
        trie = Trie.new(routing=manifest.routing, hash_algorithm=manifest.hash_algorithm)
    except ValueError as e:
        raise RecordIntegrityError(f"Invalid root manifest: {e}") from e

    if manifest.root == to_hex(NULL_DIGEST):
        root: Node = EMPTY
    else:
        root = _load_node(store, manifest.root, trie)

    if root.size != manifest.size:
        raise RecordIntegrityError(
            f"Manifest size {manifest.size} does not match {root.size} stored entries",
            digest=manifest.root,
        )

    logger.debug(f"Loaded trie root={manifest.root} size={root.size}")
    return Trie(root=root, routing=trie.routing, protocol=trie.protocol)


def _load_node(
    store: NodeStore,
    digest: str,
    trie: Trie,
    prefix: Nibbles = (),
    ancestors: frozenset[str] = frozenset(),
) -> Node:
    """
    Rebuild the node stored under `digest`.

    `prefix` is the routing path consumed above the node. A leaf digest
    does not commit to its key, so leaves with equal edges and values
    share one record; a raw-routed leaf therefore takes its key from its
    full path, and a hash-routed leaf must route to that path.
    """
    if digest in ancestors:
        raise RecordIntegrityError(f"Node record {digest} lists itself below itself", digest=digest)

    raw = store.get(digest)
    if raw is None:
        raise RecordIntegrityError(f"Missing node record {digest}", digest=digest)

    try:
        record = _NODE_RECORD.validate_json(raw)
    except ValidationError as e:
        raise RecordIntegrityError(f"Malformed node record {digest}: {e}", digest=digest) from e

    protocol = trie.protocol
    try:
        edge = parse_nibbles(record.edge)
        path = prefix + edge
        if isinstance(record, LeafRecord):
            node: Node = make_leaf(
                edge,
                _leaf_key(record, path, trie, digest),
                bytes.fromhex(record.value[2:]),
                protocol,
            )
        else:
            below = ancestors | {digest}
            pairs = []
            for slot, child_digest in record.children.items():
                child = _load_node(store, child_digest, trie, path, below)
                if not child.edge or child.edge[0] != int(slot, 16):
                    raise RecordIntegrityError(
                        f"Child {child_digest} does not start with its slot nibble {slot}",
                        digest=digest,
                    )
                pairs.append((int(slot, 16), child))
            node = make_branch(edge, to_sparse_children(pairs), protocol)
    except RecordIntegrityError:
        raise
    except (PatriciaException, ValueError) as e:
        raise RecordIntegrityError(f"Invalid node record {digest}: {e}", digest=digest) from e

    if to_hex(node.digest) != digest:
        raise RecordIntegrityError(
            f"Node record does not match its digest {digest}",
            digest=digest,
            details={"actual": to_hex(node.digest)},
        )
    return node


def _leaf_key(record: LeafRecord, path: Nibbles, trie: Trie, digest: str) -> bytes:
    if trie.routing is RoutingMode.RAW:
        return from_nibbles(path)

    key = bytes.fromhex(record.key[2:])
    if trie.path_for(key) != path:
        raise RecordIntegrityError(
            f"Leaf key {record.key} does not route to path {format_nibbles(path)}",
            digest=digest,
        )
    return key


__all__ = [
    "node_to_record",
    "commit_trie",
    "load_manifest",
    "load_trie",
]
