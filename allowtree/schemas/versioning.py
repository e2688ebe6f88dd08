"""
Schemas & Errors
File: versioning.py

Purpose: Version constant for exported proof and root documents.
Depends only on errors.py, so any schema module can depend on it.
"""

from .errors import AllowTreeException, ErrorCodes

# Version stamped on every exported document
SCHEMA_VERSION: str = "v1"

SUPPORTED_SCHEMA_VERSIONS: frozenset[str] = frozenset({"v1"})


class UnsupportedSchemaVersionError(AllowTreeException, ValueError):
    """Raised when a document carries an unknown schema version."""

    def __init__(self, version: str, supported: frozenset[str] | None = None) -> None:
        self.version = version
        self.supported = supported or SUPPORTED_SCHEMA_VERSIONS
        super().__init__(
            message=(
                f"Unsupported schema version: '{version}'. "
                f"Supported versions: {sorted(self.supported)}"
            ),
            code=ErrorCodes.UNSUPPORTED_VERSION,
            details={"version": version, "supported": sorted(self.supported)},
        )


def assert_supported_schema_version(version: str) -> None:
    """
    Validate that the given schema version is supported.

    Raises:
        UnsupportedSchemaVersionError: If the version is not supported.
    """
    if version not in SUPPORTED_SCHEMA_VERSIONS:
        raise UnsupportedSchemaVersionError(version)
