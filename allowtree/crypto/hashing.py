"""
Hashing Utilities
Pluggable hashers and hex/leaf encoding for Merkle commitments.

This module provides:
- The Hasher protocol: any pure callable bytes -> fixed-length bytes
- keccak256 (default, EVM compatible) and sha256 hashers
- A name registry used only at the configuration boundary
- Hex encoding/decoding with optional 0x prefix
- encode_leaf: the single text-to-bytes conversion for leaf values

Security/Determinism Notes:
- Always hash raw bytes exactly as given
- No auto-stripping of whitespace inside the core
- All operations are deterministic
"""
from __future__ import annotations

import hashlib
import re
from typing import Callable, Protocol

from eth_utils import keccak

from allowtree.schemas.errors import InvalidHexError, UnknownHasherError


_HEX_LEAF_RE = re.compile(r"^0x[0-9a-fA-F]*$")


class Hasher(Protocol):
    """A pure, fixed-output-length hash function."""

    def __call__(self, data: bytes) -> bytes: ...


def keccak256(data: bytes) -> bytes:
    """
    Compute the Keccak-256 hash of raw bytes (Ethereum flavour, not SHA3-256).

    Args:
        data: Raw bytes to hash

    Returns:
        32-byte Keccak-256 digest

    Example:
        >>> keccak256(b"").hex()
        'c5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470'
    """
    return keccak(primitive=data)


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


HASHERS: dict[str, Callable[[bytes], bytes]] = {
    "keccak256": keccak256,
    "sha256": sha256,
}

DEFAULT_HASHER_NAME = "keccak256"


def get_hasher(name: str) -> Callable[[bytes], bytes]:
    """
    Resolve a hasher by its registry name.

    Only configuration and CLI code should call this; the tree itself
    always receives a hasher reference.

    Raises:
        UnknownHasherError: If the name is not registered
    """
    try:
        return HASHERS[name.lower()]
    except KeyError:
        raise UnknownHasherError(name, sorted(HASHERS)) from None


def hasher_name(hasher: Callable[[bytes], bytes]) -> str:
    """Return the registry name of a hasher, or its __name__ for custom ones."""
    for name, fn in HASHERS.items():
        if fn is hasher:
            return name
    return getattr(hasher, "__name__", type(hasher).__name__)


def to_hex(data: bytes, prefix: bool = True) -> str:
    """
    Convert bytes to a lowercase hexadecimal string.

    Args:
        data: Raw bytes
        prefix: Prepend "0x" when True

    Returns:
        Hex string (e.g., "0x1234abcd")

    Example:
        >>> to_hex(bytes.fromhex("deadbeef"))
        '0xdeadbeef'
        >>> to_hex(bytes.fromhex("deadbeef"), prefix=False)
        'deadbeef'
    """
    return ("0x" if prefix else "") + data.hex()


def from_hex(hex_string: str) -> bytes:
    """
    Convert a hexadecimal string, with or without 0x prefix, to bytes.

    Raises:
        InvalidHexError: If the string has odd length or contains
                         invalid hex characters

    Example:
        >>> from_hex("0xdeadbeef").hex()
        'deadbeef'
    """
    hex_content = hex_string[2:] if hex_string[:2] in ("0x", "0X") else hex_string

    if len(hex_content) % 2 != 0:
        raise InvalidHexError(
            f"Hex string must have even length, got length {len(hex_content)}",
            details={"value": hex_string[:66]},
        )

    try:
        return bytes.fromhex(hex_content)
    except ValueError as e:
        raise InvalidHexError(
            f"Invalid hex characters in string: {e}",
            details={"value": hex_string[:66]},
        ) from e


def encode_leaf(value: str | bytes) -> bytes:
    """
    Convert a leaf as written by a human to the raw bytes that get hashed.

    Rule (applied identically at construction and verification):
    - bytes are used as-is
    - text matching ^0x[0-9a-fA-F]*$ is decoded as hex
    - any other text is UTF-8 encoded

    Example:
        >>> encode_leaf("0xdead")
        b'\\xde\\xad'
        >>> encode_leaf("alice")
        b'alice'
    """
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    if _HEX_LEAF_RE.match(value):
        return from_hex(value)
    return value.encode("utf-8")


def hash_concat(
    left: bytes,
    right: bytes,
    hasher: Callable[[bytes], bytes] = keccak256,
) -> bytes:
    """
    Hash the concatenation of two byte sequences: hasher(left + right).

    Used for Merkle parent hashes; ordering is the caller's concern.
    """
    return hasher(left + right)


__all__ = [
    "Hasher",
    "HASHERS",
    "DEFAULT_HASHER_NAME",
    "keccak256",
    "sha256",
    "get_hasher",
    "hasher_name",
    "to_hex",
    "from_hex",
    "encode_leaf",
    "hash_concat",
]
