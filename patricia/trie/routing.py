"""
Routing Path Derivation

A key's routing path decides where it lives in the trie. A trie uses a
single RoutingMode for every operation:

- HASHED: path = to_nibbles(H(key)). Every path is 2 * DIGEST_LENGTH
  nibbles long, branching is uniform regardless of key distribution.
- RAW: path = to_nibbles(key). Keys must all have the same byte length,
  which insertion enforces when two paths meet.
"""
from __future__ import annotations

from enum import Enum

from patricia.schemas.errors import InvalidKeyError
from patricia.trie.digests import DigestProtocol
from patricia.trie.nibbles import Nibbles, to_nibbles


class RoutingMode(str, Enum):
    HASHED = "hashed"
    RAW = "raw"

    @classmethod
    def parse(cls, value: "str | RoutingMode") -> "RoutingMode":
        """Accept a mode or its (case-insensitive) string value."""
        if isinstance(value, RoutingMode):
            return value
        try:
            return cls(value.lower())
        except ValueError:
            raise ValueError(
                f"Unknown routing mode {value!r}, expected one of {[m.value for m in cls]}"
            ) from None


def routing_path(key: bytes, mode: RoutingMode, protocol: DigestProtocol) -> Nibbles:
    """
    Derive the routing path of a key.

    Raises:
        InvalidKeyError: If the key is empty
    """
    if not key:
        raise InvalidKeyError("Key must not be empty")
    if mode is RoutingMode.HASHED:
        return to_nibbles(protocol.hash(key))
    return to_nibbles(key)


__all__ = [
    "RoutingMode",
    "routing_path",
]
