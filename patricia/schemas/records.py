"""
Schemas & Canonicalization
File: records.py

Purpose: Storage records for trie nodes and the root manifest.

Nodes are stored content-addressed: each record lives under the hex
digest of the node it describes. The manifest naming the current root is
stored under a reserved key so the whole trie can be recovered.

Encoding rules:
- Byte strings (keys, values, digests) are 0x-prefixed lowercase hex
- Edges are strings of hex digits, one per nibble ("" for an empty edge)
- Branch children map a slot hex digit ("0".."f") to the child digest
"""

from __future__ import annotations

import re
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .versioning import SCHEMA_VERSION


_HEX_BYTES = re.compile(r"^0x([0-9a-f]{2})*$")
_DIGEST = re.compile(r"^0x[0-9a-f]{64}$")
_NIBBLES = re.compile(r"^[0-9a-f]*$")
_SLOTS = frozenset("0123456789abcdef")


def _check_hex_bytes(value: str) -> str:
    if not _HEX_BYTES.match(value):
        raise ValueError(f"expected 0x-prefixed lowercase hex, got {value!r}")
    return value


def _check_digest(value: str) -> str:
    if not _DIGEST.match(value):
        raise ValueError(f"expected a 32-byte 0x-prefixed digest, got {value!r}")
    return value


def _check_nibbles(value: str) -> str:
    if not _NIBBLES.match(value):
        raise ValueError(f"expected a string of hex digits, got {value!r}")
    return value


class LeafRecord(BaseModel):
    """Stored form of a LeafNode."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: Literal["leaf"] = "leaf"
    edge: str = Field(..., description="Remaining routing path, one hex digit per nibble")
    key: str = Field(..., description="Original key bytes (0x hex)")
    value: str = Field(..., description="Raw value bytes (0x hex)")

    @field_validator("edge")
    @classmethod
    def _validate_edge(cls, v: str) -> str:
        return _check_nibbles(v)

    @field_validator("key", "value")
    @classmethod
    def _validate_bytes(cls, v: str) -> str:
        return _check_hex_bytes(v)


class BranchRecord(BaseModel):
    """Stored form of a BranchNode."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: Literal["branch"] = "branch"
    edge: str = Field(..., description="Routing path segment consumed at the branch")
    children: dict[str, str] = Field(
        ...,
        description="Populated slots: slot hex digit -> child digest",
    )

    @field_validator("edge")
    @classmethod
    def _validate_edge(cls, v: str) -> str:
        return _check_nibbles(v)

    @field_validator("children")
    @classmethod
    def _validate_children(cls, v: dict[str, str]) -> dict[str, str]:
        for slot, digest in v.items():
            if slot not in _SLOTS:
                raise ValueError(f"invalid branch slot {slot!r}")
            _check_digest(digest)
        if len(v) < 2:
            raise ValueError("a branch record needs at least 2 children")
        return v


NodeRecord = Annotated[Union[LeafRecord, BranchRecord], Field(discriminator="kind")]


class TrieManifest(BaseModel):
    """The record stored under the reserved root key."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    schema_version: str = Field(default=SCHEMA_VERSION)
    root: str = Field(..., description="Root digest (0x hex)")
    size: int = Field(..., ge=0, description="Number of entries")
    routing: Literal["hashed", "raw"] = Field(default="hashed")
    hash_algorithm: str = Field(default="sha256")

    @field_validator("root")
    @classmethod
    def _validate_root(cls, v: str) -> str:
        return _check_digest(v)


__all__ = [
    "LeafRecord",
    "BranchRecord",
    "NodeRecord",
    "TrieManifest",
]
