"""
Cryptographic utilities.

Pluggable hashers plus hex and leaf encoding.
"""
from .hashing import (
    Hasher,
    HASHERS,
    DEFAULT_HASHER_NAME,
    keccak256,
    sha256,
    get_hasher,
    hasher_name,
    to_hex,
    from_hex,
    encode_leaf,
    hash_concat,
)

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
