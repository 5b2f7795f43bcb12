"""
Trie Node Model

Three immutable node variants:
- EmptyNode: no entries, digest NULL_DIGEST, size 0
- LeafNode: exactly one key/value pair, size 1
- BranchNode: 16 child slots, at least 2 populated, size = sum of children

Digests and sizes are derived values computed once by the constructors
make_leaf() and make_branch(); nodes are never mutated afterwards. Every
structural edit builds new nodes, so older trie values stay valid and
untouched subtrees can be shared between versions.

A child keeps the nibble of its slot as the first nibble of its edge, so
the edges from the root down to a leaf concatenate to the leaf's full
routing path.

Two nodes are equal when they are of the same variant and have the same
digest.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator, Optional, Sequence, Union

from patricia.crypto.hashing import NULL_DIGEST
from patricia.schemas.errors import StructuralInvariantError
from patricia.trie.digests import BRANCH_WIDTH, DigestProtocol
from patricia.trie.nibbles import Nibbles, validate_nibbles


class _NodeEquality:
    """Digest-based equality shared by all node variants."""

    digest: bytes

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, _NodeEquality):
            return NotImplemented
        return type(self) is type(other) and self.digest == other.digest

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.digest))


@dataclass(frozen=True, eq=False)
class EmptyNode(_NodeEquality):
    """A subtree without entries."""

    @property
    def digest(self) -> bytes:
        return NULL_DIGEST

    @property
    def size(self) -> int:
        return 0

    def is_empty(self) -> bool:
        return True


EMPTY = EmptyNode()


@dataclass(frozen=True, eq=False)
class LeafNode(_NodeEquality):
    """
    Terminal node for a single key/value pair.

    Attributes:
        edge: Suffix of the routing path not consumed by ancestor branches
        key: Original key bytes (not used for routing once placed)
        value: Raw value bytes
        digest: leaf_digest(edge, H(value))
    """
    edge: Nibbles
    key: bytes
    value: bytes
    digest: bytes = field(repr=False)

    @property
    def size(self) -> int:
        return 1

    def is_empty(self) -> bool:
        return False


@dataclass(frozen=True, eq=False)
class BranchNode(_NodeEquality):
    """
    Internal fan-out node.

    Attributes:
        edge: Routing path segment consumed at this node
        children: 16 slots, one per nibble value; None marks an empty slot
        size: Number of leaves in the subtree
        digest: branch_digest(edge, merkle_root(children))
    """
    edge: Nibbles
    children: tuple[Optional["Node"], ...] = field(repr=False)
    size: int
    digest: bytes = field(repr=False)

    def __post_init__(self) -> None:
        _validate_children(self.children)

    def is_empty(self) -> bool:
        return False

    def child(self, slot: int) -> Optional["Node"]:
        return self.children[slot]

    def populated(self) -> Iterator[tuple[int, "Node"]]:
        """Yield (slot, child) for every occupied slot in slot order."""
        for slot, child in enumerate(self.children):
            if child is not None:
                yield slot, child


Node = Union[EmptyNode, LeafNode, BranchNode]


def _validate_children(children: Sequence[Optional[Node]]) -> None:
    if len(children) != BRANCH_WIDTH:
        raise StructuralInvariantError(
            f"Branch must have exactly {BRANCH_WIDTH} children, but it has {len(children)}",
            details={"slots": len(children)},
        )
    populated = sum(1 for child in children if child is not None)
    if populated < 2:
        raise StructuralInvariantError(
            "Branch must have at least 2 children. "
            "A Branch with a single child is a Leaf.",
            details={"populated": populated},
        )


def make_leaf(
    edge: Sequence[int],
    key: bytes,
    value: bytes,
    protocol: DigestProtocol,
) -> LeafNode:
    """Build a leaf and compute its digest."""
    edge = tuple(edge)
    validate_nibbles(edge)
    return LeafNode(
        edge=edge,
        key=bytes(key),
        value=bytes(value),
        digest=protocol.leaf_digest(edge, protocol.value_digest(value)),
    )


def make_branch(
    edge: Sequence[int],
    children: Sequence[Optional[Node]],
    protocol: DigestProtocol,
) -> BranchNode:
    """
    Build a branch and compute its size and digest.

    Empty nodes placed in a slot count as unpopulated.

    Raises:
        StructuralInvariantError: If children is not exactly 16 slots long
            or fewer than 2 slots are populated
    """
    edge = tuple(edge)
    validate_nibbles(edge)
    slots = tuple(
        None if child is None or child.is_empty() else child
        for child in children
    )
    _validate_children(slots)
    return BranchNode(
        edge=edge,
        children=slots,
        size=sum(child.size for child in slots if child is not None),
        digest=protocol.branch_digest(edge, protocol.merkle_root(slots)),
    )


def to_sparse_children(pairs: Iterable[tuple[int, Node]]) -> tuple[Optional[Node], ...]:
    """
    Place (slot, node) pairs into a 16-slot tuple.

    Raises:
        StructuralInvariantError: If a slot is out of range or used twice
    """
    result: list[Optional[Node]] = [None] * BRANCH_WIDTH
    for slot, node in pairs:
        if not 0 <= slot < BRANCH_WIDTH:
            raise StructuralInvariantError(
                f"Branch slot {slot} out of range",
                details={"slot": slot},
            )
        if result[slot] is not None:
            raise StructuralInvariantError(
                f"Branch slot {slot} assigned twice",
                details={"slot": slot},
            )
        result[slot] = node
    return tuple(result)


def iter_leaves(node: Node) -> Iterator[LeafNode]:
    """Yield every leaf below `node` depth-first in slot order."""
    if isinstance(node, LeafNode):
        yield node
    elif isinstance(node, BranchNode):
        for _, child in node.populated():
            yield from iter_leaves(child)


def iter_leaf_paths(node: Node, prefix: Nibbles = ()) -> Iterator[tuple[Nibbles, LeafNode]]:
    """Yield (full routing path, leaf) pairs depth-first in slot order."""
    if isinstance(node, LeafNode):
        yield prefix + node.edge, node
    elif isinstance(node, BranchNode):
        for _, child in node.populated():
            yield from iter_leaf_paths(child, prefix + node.edge)


__all__ = [
    "Node",
    "EmptyNode",
    "LeafNode",
    "BranchNode",
    "EMPTY",
    "make_leaf",
    "make_branch",
    "to_sparse_children",
    "iter_leaves",
    "iter_leaf_paths",
]
