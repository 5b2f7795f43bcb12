"""
Hashing Unit Tests
Tests for patricia/crypto/hashing.py

Tests:
- Oracle outputs match hashlib and are DIGEST_LENGTH bytes
- Algorithm lookup by name
- to_hex/from_hex round trip and validation
"""
import hashlib

import pytest

from patricia.crypto.hashing import (
    DIGEST_LENGTH,
    HASH_FUNCTIONS,
    NULL_DIGEST,
    blake2b_256,
    from_hex,
    get_hash_function,
    sha256,
    sha3_256,
    to_hex,
)


class TestOracles:
    """Tests for the named hash oracles."""

    def test_sha256_known_value(self):
        """sha256 matches hashlib for a known input."""
        assert sha256(b"hello") == hashlib.sha256(b"hello").digest()
        assert sha256(b"hello").hex() == (
            "2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824"
        )

    def test_sha3_256_matches_hashlib(self):
        assert sha3_256(b"data") == hashlib.sha3_256(b"data").digest()

    def test_blake2b_is_truncated_by_parameter(self):
        """blake2b uses digest_size=32, not a truncated 64-byte digest."""
        expected = hashlib.blake2b(b"data", digest_size=32).digest()
        assert blake2b_256(b"data") == expected
        assert blake2b_256(b"data") != hashlib.blake2b(b"data").digest()[:32]

    @pytest.mark.parametrize("name", sorted(HASH_FUNCTIONS))
    def test_every_oracle_has_digest_width(self, name):
        """Every registered oracle produces DIGEST_LENGTH bytes."""
        assert len(HASH_FUNCTIONS[name](b"")) == DIGEST_LENGTH
        assert len(HASH_FUNCTIONS[name](b"x" * 1000)) == DIGEST_LENGTH

    def test_null_digest_is_all_zero(self):
        assert NULL_DIGEST == bytes(32)
        assert sha256(b"") != NULL_DIGEST


class TestGetHashFunction:
    """Tests for get_hash_function()."""

    def test_lookup_is_case_insensitive(self):
        assert get_hash_function("SHA256") is sha256
        assert get_hash_function("Sha3_256") is sha3_256

    def test_unknown_algorithm_raises(self):
        with pytest.raises(ValueError, match="Unsupported hash algorithm"):
            get_hash_function("md5")


class TestHexHelpers:
    """Tests for to_hex() and from_hex()."""

    def test_to_hex_has_prefix(self):
        assert to_hex(bytes.fromhex("deadbeef")) == "0xdeadbeef"
        assert to_hex(b"") == "0x"

    def test_round_trip(self):
        data = bytes(range(32))
        assert from_hex(to_hex(data)) == data

    def test_from_hex_requires_prefix(self):
        with pytest.raises(ValueError, match="0x"):
            from_hex("deadbeef")

    def test_from_hex_rejects_odd_length(self):
        with pytest.raises(ValueError, match="even length"):
            from_hex("0xabc")

    def test_from_hex_rejects_invalid_characters(self):
        with pytest.raises(ValueError, match="Invalid hex"):
            from_hex("0xzz")
