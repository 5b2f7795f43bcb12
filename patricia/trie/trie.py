"""
Merkle-Patricia Trie

Trie is an immutable value: insert() and update() return a new Trie and
leave the receiver untouched, so older and newer versions can be read
side by side without locks. Writers must be serialized by the caller.

Usage:
    from patricia.trie import Trie

    trie = Trie.new()
    trie = trie.insert(b"alice", b"100")
    trie = trie.insert(b"bob", b"42")

    assert trie.get(b"alice") == b"100"
    assert trie.size() == 2
    root = trie.hash()   # commits to exactly {alice: 100, bob: 42}
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterable, Iterator, Optional

from patricia.crypto.hashing import DEFAULT_HASH_ALGORITHM, to_hex
from patricia.schemas.errors import InvalidKeyError, StructuralInvariantError
from patricia.trie.digests import BRANCH_WIDTH, DEFAULT_PROTOCOL, DigestProtocol
from patricia.trie.insertion import insert_node
from patricia.trie.inspect import render_node
from patricia.trie.lookup import find_leaf
from patricia.trie.nibbles import Nibbles, format_nibbles
from patricia.trie.nodes import (
    EMPTY,
    BranchNode,
    LeafNode,
    Node,
    iter_leaf_paths,
    iter_leaves,
)
from patricia.trie.routing import RoutingMode, routing_path

if TYPE_CHECKING:
    from patricia.config.runtime import TrieConfig


logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class Trie:
    """
    An authenticated key/value index.

    Attributes:
        root: Root node (EMPTY for a trie without entries)
        routing: How keys are turned into routing paths
        protocol: Digest rules and hash oracle
    """
    root: Node = EMPTY
    routing: RoutingMode = RoutingMode.HASHED
    protocol: DigestProtocol = field(default=DEFAULT_PROTOCOL, repr=False)

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    @classmethod
    def new(
        cls,
        routing: "str | RoutingMode" = RoutingMode.HASHED,
        hash_algorithm: str = DEFAULT_HASH_ALGORITHM,
    ) -> "Trie":
        """Create an empty trie."""
        return cls(
            root=EMPTY,
            routing=RoutingMode.parse(routing),
            protocol=DigestProtocol.for_algorithm(hash_algorithm),
        )

    @classmethod
    def from_config(cls, config: Optional["TrieConfig"] = None) -> "Trie":
        """Create an empty trie using the given (or default) configuration."""
        if config is None:
            from patricia.config.runtime import get_default_config
            config = get_default_config().trie
        return cls.new(routing=config.routing, hash_algorithm=config.hash_algorithm)

    @classmethod
    def from_items(
        cls,
        items: Iterable[tuple[bytes, bytes]],
        routing: "str | RoutingMode" = RoutingMode.HASHED,
        hash_algorithm: str = DEFAULT_HASH_ALGORITHM,
    ) -> "Trie":
        """Build a trie from (key, value) pairs; duplicates are rejected."""
        return cls.new(routing=routing, hash_algorithm=hash_algorithm).extend(items)

    # -------------------------------------------------------------------------
    # Digest & size
    # -------------------------------------------------------------------------

    def hash(self) -> bytes:
        """Root digest; NULL_DIGEST while the trie is empty."""
        return self.root.digest

    @property
    def root_hex(self) -> str:
        return to_hex(self.root.digest)

    @property
    def hash_algorithm(self) -> str:
        return self.protocol.algorithm

    def size(self) -> int:
        return self.root.size

    def __len__(self) -> int:
        return self.root.size

    def is_empty(self) -> bool:
        return self.root.is_empty()

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    def path_for(self, key: bytes) -> Nibbles:
        """Routing path of `key` under this trie's routing mode."""
        return routing_path(bytes(key), self.routing, self.protocol)

    def insert(self, key: bytes, value: bytes) -> "Trie":
        """
        Return a new trie holding every entry of this one plus key -> value.

        Raises:
            DuplicateKeyError: If the key is already present
            InvalidKeyError: If the key is empty, or has the wrong length
                for raw routing
        """
        return self._put(key, value, overwrite=False)

    def update(self, key: bytes, value: bytes) -> "Trie":
        """
        Return a new trie where key maps to value, inserting it if absent.

        Raises:
            InvalidKeyError: If the key is empty, or has the wrong length
                for raw routing
        """
        return self._put(key, value, overwrite=True)

    def extend(self, items: Iterable[tuple[bytes, bytes]]) -> "Trie":
        """Insert every (key, value) pair in order."""
        trie = self
        for key, value in items:
            trie = trie.insert(key, value)
        return trie

    def get(self, key: bytes) -> Optional[bytes]:
        """Return the value stored for `key`, or None if absent."""
        key = bytes(key)
        if not key:
            return None
        leaf = find_leaf(self.root, self.path_for(key))
        if leaf is None or leaf.key != key:
            return None
        return leaf.value

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, (bytes, bytearray)):
            return False
        return self.get(key) is not None

    def items(self) -> Iterator[tuple[bytes, bytes]]:
        """Yield (key, value) pairs in routing-path order."""
        for leaf in iter_leaves(self.root):
            yield leaf.key, leaf.value

    def keys(self) -> Iterator[bytes]:
        for key, _ in self.items():
            yield key

    def render(self) -> str:
        """Human-readable tree with shortened digests and paths."""
        return render_node(self.root)

    def check_invariants(self) -> None:
        """
        Recompute every digest and size and check the tree's structure.

        Verifies that:
        - every leaf digest matches its edge and value
        - every leaf's full path equals the routing path of its key
        - every branch has 16 slots, at least 2 of them populated
        - every branch size and digest matches its children

        Raises:
            StructuralInvariantError: On the first violation found
        """
        for path, leaf in iter_leaf_paths(self.root):
            expected = self.path_for(leaf.key)
            if path != expected:
                raise StructuralInvariantError(
                    f"Leaf for key 0x{leaf.key.hex()} sits at path "
                    f"{format_nibbles(path)} instead of {format_nibbles(expected)}",
                    details={"key": to_hex(leaf.key)},
                )
        self._check_node(self.root)

    def _check_node(self, node: Node) -> int:
        if isinstance(node, LeafNode):
            expected = self.protocol.leaf_digest(
                node.edge, self.protocol.value_digest(node.value)
            )
            if node.digest != expected:
                raise StructuralInvariantError(
                    f"Leaf digest mismatch for key 0x{node.key.hex()}",
                    details={"key": to_hex(node.key)},
                )
            return 1

        if isinstance(node, BranchNode):
            if len(node.children) != BRANCH_WIDTH:
                raise StructuralInvariantError(
                    f"Branch has {len(node.children)} slots",
                    details={"edge": format_nibbles(node.edge)},
                )
            populated = list(node.populated())
            if len(populated) < 2:
                raise StructuralInvariantError(
                    f"Branch has {len(populated)} populated slots",
                    details={"edge": format_nibbles(node.edge)},
                )
            size = sum(self._check_node(child) for _, child in populated)
            if size != node.size:
                raise StructuralInvariantError(
                    f"Branch size {node.size} does not match {size} leaves",
                    details={"edge": format_nibbles(node.edge)},
                )
            expected = self.protocol.branch_digest(
                node.edge, self.protocol.merkle_root(node.children)
            )
            if node.digest != expected:
                raise StructuralInvariantError(
                    "Branch digest mismatch",
                    details={"edge": format_nibbles(node.edge)},
                )
            return size

        return 0

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _put(self, key: bytes, value: bytes, overwrite: bool) -> "Trie":
        key = bytes(key)
        value = bytes(value)
        path = self.path_for(key)

        if self.routing is RoutingMode.RAW and not self.root.is_empty():
            existing = next(iter_leaves(self.root))
            if len(existing.key) != len(key):
                raise InvalidKeyError(
                    f"Raw routing needs {len(existing.key)}-byte keys, "
                    f"got {len(key)} bytes",
                    details={"expected": len(existing.key), "actual": len(key)},
                )

        root = insert_node(
            self.root, path, key, value, self.protocol, overwrite=overwrite
        )
        logger.debug(
            f"{'Updated' if overwrite else 'Inserted'} key 0x{key.hex()}: "
            f"size={root.size} root={root.digest.hex()}"
        )
        return Trie(root=root, routing=self.routing, protocol=self.protocol)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Trie):
            return NotImplemented
        return (
            self.root.digest == other.root.digest
            and self.routing == other.routing
            and self.protocol.algorithm == other.protocol.algorithm
        )

    def __hash__(self) -> int:
        return hash((self.root.digest, self.routing, self.protocol.algorithm))


__all__ = [
    "Trie",
]
