"""
Hashing Utilities
Hash oracle and hex helpers for trie digests.

This module provides:
- SHA-256 hashing for raw bytes (the default oracle)
- Named 32-byte oracles (sha256, sha3_256, blake2b)
- The all-zero sentinel digest that stands for "no entries"
- Hex encoding/decoding with 0x prefix

Security/Determinism Notes:
- Always hash raw bytes exactly as given
- Every oracle exposed here produces exactly DIGEST_LENGTH bytes
- NULL_DIGEST is reserved and never expected as a real oracle output
"""
from __future__ import annotations

import hashlib
from typing import Callable


# Size of the digest of every supported hash algorithm (bytes)
DIGEST_LENGTH: int = 32

# Sentinel digest of an empty subtree
NULL_DIGEST: bytes = b"\x00" * DIGEST_LENGTH

DEFAULT_HASH_ALGORITHM = "sha256"

HashFunction = Callable[[bytes], bytes]


def sha256(data: bytes) -> bytes:
    """
    Compute SHA-256 hash of raw bytes.

    Args:
        data: Raw bytes to hash

    Returns:
        32-byte SHA-256 digest

    Example:
        >>> sha256(b"hello").hex()
        '2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824'
    """
    return hashlib.sha256(data).digest()


def sha3_256(data: bytes) -> bytes:
    """Compute SHA3-256 hash of raw bytes."""
    return hashlib.sha3_256(data).digest()


def blake2b_256(data: bytes) -> bytes:
    """Compute BLAKE2b hash of raw bytes truncated by parameter to 32 bytes."""
    return hashlib.blake2b(data, digest_size=DIGEST_LENGTH).digest()


HASH_FUNCTIONS: dict[str, HashFunction] = {
    "sha256": sha256,
    "sha3_256": sha3_256,
    "blake2b": blake2b_256,
}


def get_hash_function(name: str) -> HashFunction:
    """
    Look up a named hash oracle.

    Args:
        name: One of the keys of HASH_FUNCTIONS (case-insensitive)

    Returns:
        Function mapping bytes to a DIGEST_LENGTH-byte digest

    Raises:
        ValueError: If the algorithm is not supported
    """
    try:
        return HASH_FUNCTIONS[name.lower()]
    except KeyError:
        raise ValueError(
            f"Unsupported hash algorithm {name!r}, "
            f"expected one of {sorted(HASH_FUNCTIONS)}"
        ) from None


def to_hex(data: bytes) -> str:
    """
    Convert bytes to hexadecimal string with 0x prefix.

    Args:
        data: Raw bytes

    Returns:
        Hex string with 0x prefix (e.g., "0x1234abcd")

    Example:
        >>> to_hex(bytes.fromhex("deadbeef"))
        '0xdeadbeef'
    """
    return "0x" + data.hex()


def from_hex(hex_string: str) -> bytes:
    """
    Convert hexadecimal string (with 0x prefix) to bytes.

    Args:
        hex_string: Hex string with 0x prefix

    Returns:
        Decoded bytes

    Raises:
        ValueError: If string doesn't start with 0x, has odd length,
                   or contains invalid hex characters

    Example:
        >>> from_hex("0xdeadbeef").hex()
        'deadbeef'
    """
    if not hex_string.startswith("0x"):
        raise ValueError(
            f"Hex string must start with '0x' prefix, got: {hex_string[:10]}..."
        )

    hex_content = hex_string[2:]

    if len(hex_content) % 2 != 0:
        raise ValueError(
            f"Hex string must have even length after 0x prefix, "
            f"got length {len(hex_content)}"
        )

    try:
        return bytes.fromhex(hex_content)
    except ValueError as e:
        raise ValueError(f"Invalid hex characters in string: {e}") from e


__all__ = [
    "DIGEST_LENGTH",
    "NULL_DIGEST",
    "DEFAULT_HASH_ALGORITHM",
    "HASH_FUNCTIONS",
    "HashFunction",
    "sha256",
    "sha3_256",
    "blake2b_256",
    "get_hash_function",
    "to_hex",
    "from_hex",
]
