"""
Schemas & Errors
File: __init__.py

Purpose: Export error taxonomy and version constants.
Export documents live in allowtree.schemas.proof and are imported from
there directly, since they depend on the Merkle module.
"""

from .versioning import (
    SCHEMA_VERSION,
    SUPPORTED_SCHEMA_VERSIONS,
    UnsupportedSchemaVersionError,
    assert_supported_schema_version,
)

from .errors import (
    ErrorCodes,
    AllowTreeError,
    AllowTreeException,
    EmptyInputError,
    EmptyTreeError,
    LeafNotFoundError,
    HasherContractViolation,
    UnknownHasherError,
    InvalidHexError,
    ConfigurationException,
    SchemaValidationException,
)

__all__ = [
    # Versioning
    "SCHEMA_VERSION",
    "SUPPORTED_SCHEMA_VERSIONS",
    "UnsupportedSchemaVersionError",
    "assert_supported_schema_version",
    # Errors
    "ErrorCodes",
    "AllowTreeError",
    "AllowTreeException",
    "EmptyInputError",
    "EmptyTreeError",
    "LeafNotFoundError",
    "HasherContractViolation",
    "UnknownHasherError",
    "InvalidHexError",
    "ConfigurationException",
    "SchemaValidationException",
]
