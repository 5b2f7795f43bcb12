"""
Core cryptographic utilities.

Provides the hash oracle used for every trie digest.
"""
from .hashing import (
    DIGEST_LENGTH,
    NULL_DIGEST,
    DEFAULT_HASH_ALGORITHM,
    HASH_FUNCTIONS,
    HashFunction,
    sha256,
    sha3_256,
    blake2b_256,
    get_hash_function,
    to_hex,
    from_hex,
)

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
