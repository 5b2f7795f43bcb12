"""
Digest Protocol
Leaf and branch digest preimages for the Merkle-Patricia trie.

Canonical Commitment Rules (Hard Contracts):
1. Value digest:  v = H(value)
2. Leaf digest:   H(encode_path(edge) || v), v exactly DIGEST_LENGTH bytes
3. Merkle root:   H(d_0 || d_1 || ... || d_15), NULL_DIGEST for empty slots
4. Branch digest: H(bytes(edge) || merkle_root), one byte per edge nibble
5. Empty digest:  NULL_DIGEST (all zero), never produced by H

All 16 slots always contribute to the Merkle root in slot order, so a
branch digest depends only on the set of entries below it, never on the
order they were inserted in.
"""
from __future__ import annotations

from typing import Optional, Protocol, Sequence

from patricia.crypto.hashing import (
    DEFAULT_HASH_ALGORITHM,
    DIGEST_LENGTH,
    NULL_DIGEST,
    HashFunction,
    get_hash_function,
)
from patricia.schemas.errors import InvalidValueWidthError, StructuralInvariantError
from patricia.trie.nibbles import encode_path, validate_nibbles


# Number of child slots in a branch, one per nibble value
BRANCH_WIDTH = 16


class HasDigest(Protocol):
    @property
    def digest(self) -> bytes: ...


def _check_width(name: str, data: bytes) -> None:
    if len(data) != DIGEST_LENGTH:
        raise InvalidValueWidthError(
            f"{name} must be a {DIGEST_LENGTH}-byte digest, but it is 0x{data.hex()}",
            expected=DIGEST_LENGTH,
            actual=len(data),
        )


class DigestProtocol:
    """
    Hashing rules of the trie, bound to one hash oracle.

    Example:
        >>> protocol = DigestProtocol.for_algorithm("sha256")
        >>> len(protocol.leaf_digest((1, 2), protocol.value_digest(b"v")))
        32
    """

    def __init__(
        self,
        hash_function: HashFunction | None = None,
        algorithm: str = DEFAULT_HASH_ALGORITHM,
    ) -> None:
        self.algorithm = algorithm
        self._hash = hash_function or get_hash_function(algorithm)

    @classmethod
    def for_algorithm(cls, algorithm: str) -> "DigestProtocol":
        """Build a protocol for a named hash algorithm."""
        return cls(get_hash_function(algorithm), algorithm=algorithm.lower())

    @property
    def empty_digest(self) -> bytes:
        return NULL_DIGEST

    def hash(self, data: bytes) -> bytes:
        """Apply the oracle, checking that it honours the digest width."""
        digest = self._hash(data)
        _check_width("oracle output", digest)
        return digest

    def value_digest(self, value: bytes) -> bytes:
        return self.hash(value)

    def leaf_digest(self, edge: Sequence[int], value_digest: bytes) -> bytes:
        """
        Digest of a leaf.

        Args:
            edge: Remaining routing path stored in the leaf
            value_digest: H(value), exactly DIGEST_LENGTH bytes

        Raises:
            InvalidValueWidthError: If value_digest has the wrong width
        """
        _check_width("value", value_digest)
        return self.hash(encode_path(edge) + value_digest)

    def merkle_root(self, children: Sequence[Optional[HasDigest]]) -> bytes:
        """
        Aggregate the 16 child digests of a branch in slot order.

        Raises:
            StructuralInvariantError: If there are not exactly 16 slots
        """
        if len(children) != BRANCH_WIDTH:
            raise StructuralInvariantError(
                f"Branch must have exactly {BRANCH_WIDTH} children, but it has {len(children)}",
                details={"slots": len(children)},
            )
        return self.hash(b"".join(
            NULL_DIGEST if child is None else child.digest
            for child in children
        ))

    def branch_digest(self, edge: Sequence[int], root: bytes) -> bytes:
        """
        Digest of a branch from its edge and the Merkle root of its children.

        Raises:
            InvalidValueWidthError: If root has the wrong width
        """
        _check_width("root", root)
        validate_nibbles(edge)
        return self.hash(bytes(edge) + root)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DigestProtocol):
            return NotImplemented
        return self.algorithm == other.algorithm and self._hash is other._hash

    def __hash__(self) -> int:
        return hash(self.algorithm)

    def __repr__(self) -> str:
        return f"DigestProtocol(algorithm={self.algorithm!r})"


# Default SHA-256 protocol shared by tries that do not pick an algorithm
DEFAULT_PROTOCOL = DigestProtocol.for_algorithm(DEFAULT_HASH_ALGORITHM)


__all__ = [
    "BRANCH_WIDTH",
    "DigestProtocol",
    "DEFAULT_PROTOCOL",
]
