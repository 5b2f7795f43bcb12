"""
Schemas & Canonicalization
File: errors.py

Purpose: Standard error taxonomy for the trie.
Defines both Pydantic models for structured error communication
and Python exceptions for control flow.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes used across the trie."""

    # Digest Errors
    INVALID_VALUE_WIDTH = "INVALID_VALUE_WIDTH"

    # Insertion Errors
    DUPLICATE_KEY = "DUPLICATE_KEY"
    INVALID_KEY = "INVALID_KEY"

    # Structural Errors
    STRUCTURAL_INVARIANT_VIOLATION = "STRUCTURAL_INVARIANT_VIOLATION"
    INTERNAL_INCONSISTENCY = "INTERNAL_INCONSISTENCY"

    # Serialization & Storage Errors
    CANONICALIZATION_ERROR = "CANONICALIZATION_ERROR"
    RECORD_INTEGRITY_ERROR = "RECORD_INTEGRITY_ERROR"


# =============================================================================
# Pydantic Error Models (Structured Communication)
# =============================================================================

class PatriciaError(BaseModel):
    """
    Base error model for structured error communication.

    Used by the CLI and by callers that report failures without
    re-raising them.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.DUPLICATE_KEY],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional structured details about the error",
    )
    retryable: bool = Field(
        default=False,
        description="Whether the operation can be retried",
    )

    def to_exception(self) -> "PatriciaException":
        """Convert this error model to a raised exception."""
        return PatriciaException(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class PatriciaException(Exception):
    """
    Base exception for all trie errors.

    This exception carries structured error information and can be
    converted to/from PatriciaError models.
    """

    def __init__(
        self,
        message: str,
        code: str = "PATRICIA_ERROR",
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.retryable = retryable

    def to_error_model(self) -> PatriciaError:
        """Convert this exception to a PatriciaError model."""
        return PatriciaError(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class InvalidValueWidthError(PatriciaException):
    """Raised when a value that must be a fixed-width digest has the wrong length."""

    def __init__(
        self,
        message: str,
        expected: int | None = None,
        actual: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if expected is not None:
            full_details["expected"] = expected
        if actual is not None:
            full_details["actual"] = actual
        super().__init__(
            message=message,
            code=ErrorCodes.INVALID_VALUE_WIDTH,
            details=full_details,
            retryable=False,
        )


class DuplicateKeyError(PatriciaException):
    """Raised when inserting a key that is already present."""

    def __init__(
        self,
        message: str,
        key: bytes | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if key is not None:
            full_details["key"] = "0x" + key.hex()
        super().__init__(
            message=message,
            code=ErrorCodes.DUPLICATE_KEY,
            details=full_details,
            retryable=False,
        )


class InvalidKeyError(PatriciaException):
    """Raised when a key cannot be routed (empty, or wrong length for raw routing)."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.INVALID_KEY,
            details=details,
            retryable=False,
        )


class StructuralInvariantError(PatriciaException):
    """
    Raised when a node would violate the trie's structural invariants.

    A branch needs exactly 16 slots and at least 2 populated children.
    This is a programming error, never an expected runtime condition.
    """

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.STRUCTURAL_INVARIANT_VIOLATION,
            details=details,
            retryable=False,
        )


class InternalInconsistencyError(PatriciaException):
    """Raised when a leaf split computes identical selector nibbles."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.INTERNAL_INCONSISTENCY,
            details=details,
            retryable=False,
        )


class CanonicalizationException(PatriciaException):
    """Exception raised when canonical serialization fails."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.CANONICALIZATION_ERROR,
            details=details,
            retryable=False,
        )


class RecordIntegrityError(PatriciaException):
    """Raised when a stored node record is missing or does not match its digest."""

    def __init__(
        self,
        message: str,
        digest: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if digest:
            full_details["digest"] = digest
        super().__init__(
            message=message,
            code=ErrorCodes.RECORD_INTEGRITY_ERROR,
            details=full_details,
            retryable=False,
        )


__all__ = [
    "ErrorCodes",
    "PatriciaError",
    "PatriciaException",
    "InvalidValueWidthError",
    "DuplicateKeyError",
    "InvalidKeyError",
    "StructuralInvariantError",
    "InternalInconsistencyError",
    "CanonicalizationException",
    "RecordIntegrityError",
]
