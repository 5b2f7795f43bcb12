"""
Schemas & Canonicalization
File: __init__.py

Purpose: Export the public API for the schemas module: error taxonomy,
canonical serialization, and node storage records.
"""

# Version constants
from .versioning import (
    SCHEMA_VERSION,
    SUPPORTED_SCHEMA_VERSIONS,
    SchemaVersion,
    UnsupportedSchemaVersionError,
    assert_supported_schema_version,
)

# Canonical serialization API
from .canonical import (
    CANONICAL_JSON_SEPARATORS,
    canonicalize_value,
    dumps_canonical,
)

# Error models and exceptions
from .errors import (
    CanonicalizationException,
    DuplicateKeyError,
    ErrorCodes,
    InternalInconsistencyError,
    InvalidKeyError,
    InvalidValueWidthError,
    PatriciaError,
    PatriciaException,
    RecordIntegrityError,
    StructuralInvariantError,
)

# Storage records
from .records import (
    BranchRecord,
    LeafRecord,
    NodeRecord,
    TrieManifest,
)


__all__ = [
    # Versioning
    "SCHEMA_VERSION",
    "SUPPORTED_SCHEMA_VERSIONS",
    "SchemaVersion",
    "UnsupportedSchemaVersionError",
    "assert_supported_schema_version",
    # Canonical
    "CANONICAL_JSON_SEPARATORS",
    "canonicalize_value",
    "dumps_canonical",
    # Errors
    "CanonicalizationException",
    "DuplicateKeyError",
    "ErrorCodes",
    "InternalInconsistencyError",
    "InvalidKeyError",
    "InvalidValueWidthError",
    "PatriciaError",
    "PatriciaException",
    "RecordIntegrityError",
    "StructuralInvariantError",
    # Records
    "BranchRecord",
    "LeafRecord",
    "NodeRecord",
    "TrieManifest",
]
