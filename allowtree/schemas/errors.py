"""
Schemas & Errors
File: errors.py

Purpose: Standard error taxonomy for allowtree.
Defines both Pydantic models for structured error communication
and Python exceptions for control flow.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes used across allowtree."""

    # Tree construction errors
    EMPTY_INPUT = "EMPTY_INPUT"
    HASHER_CONTRACT_VIOLATION = "HASHER_CONTRACT_VIOLATION"
    UNKNOWN_HASHER = "UNKNOWN_HASHER"

    # Proof errors
    LEAF_NOT_FOUND = "LEAF_NOT_FOUND"

    # Encoding errors
    INVALID_HEX = "INVALID_HEX"

    # Schema & configuration errors
    SCHEMA_VALIDATION_ERROR = "SCHEMA_VALIDATION_ERROR"
    UNSUPPORTED_VERSION = "UNSUPPORTED_VERSION"
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"


# =============================================================================
# Pydantic Error Models (Structured Communication)
# =============================================================================

class AllowTreeError(BaseModel):
    """
    Base error model for structured error communication.

    Used by the CLI to report failures as JSON without a traceback.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.LEAF_NOT_FOUND],
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

    def to_exception(self) -> "AllowTreeException":
        """Convert this error model to a raised exception."""
        return AllowTreeException(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class AllowTreeException(Exception):
    """
    Base exception for all allowtree errors.

    Carries structured error information and can be converted
    to/from AllowTreeError models. Tree computations are deterministic,
    so nothing in this package is retryable.
    """

    def __init__(
        self,
        message: str,
        code: str = "ALLOWTREE_ERROR",
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.retryable = retryable

    def to_error_model(self) -> AllowTreeError:
        """Convert this exception to an AllowTreeError model."""
        return AllowTreeError(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class EmptyInputError(AllowTreeException):
    """Raised when a root is requested from a tree built with zero leaves."""

    def __init__(
        self,
        message: str = "Merkle tree has no leaves; root is undefined",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.EMPTY_INPUT,
            details=details,
        )


# Name used by the tree API for the same condition
EmptyTreeError = EmptyInputError


class LeafNotFoundError(AllowTreeException):
    """Raised when a proof is requested for a leaf absent from the leaf level."""

    def __init__(
        self,
        message: str,
        leaf_hash: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if leaf_hash:
            full_details["leaf_hash"] = leaf_hash
        super().__init__(
            message=message,
            code=ErrorCodes.LEAF_NOT_FOUND,
            details=full_details,
        )


class HasherContractViolation(AllowTreeException):
    """Raised when a hasher returns outputs of differing lengths."""

    def __init__(
        self,
        expected_length: int,
        actual_length: int,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        full_details["expected_length"] = expected_length
        full_details["actual_length"] = actual_length
        super().__init__(
            message=(
                f"Hasher output length changed from {expected_length} "
                f"to {actual_length} bytes"
            ),
            code=ErrorCodes.HASHER_CONTRACT_VIOLATION,
            details=full_details,
        )


class UnknownHasherError(AllowTreeException):
    """Raised when a hasher name is not in the registry."""

    def __init__(self, name: str, available: list[str]) -> None:
        super().__init__(
            message=f"Unknown hasher: '{name}'. Available: {available}",
            code=ErrorCodes.UNKNOWN_HASHER,
            details={"name": name, "available": available},
        )


class InvalidHexError(AllowTreeException, ValueError):
    """Raised when a hexadecimal string cannot be decoded."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.INVALID_HEX,
            details=details,
        )


class ConfigurationException(AllowTreeException):
    """Raised when configuration cannot be loaded or is inconsistent."""

    def __init__(
        self,
        message: str,
        field_path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if field_path:
            full_details["field_path"] = field_path
        super().__init__(
            message=message,
            code=ErrorCodes.CONFIGURATION_ERROR,
            details=full_details,
        )


class SchemaValidationException(AllowTreeException):
    """Raised when an exported document fails schema validation."""

    def __init__(
        self,
        message: str,
        field_path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if field_path:
            full_details["field_path"] = field_path
        super().__init__(
            message=message,
            code=ErrorCodes.SCHEMA_VALIDATION_ERROR,
            details=full_details,
        )
