"""
Hashing Unit Tests
Tests for allowtree/crypto/hashing.py

Tests:
- keccak256 / sha256 known values
- hasher registry lookup
- to_hex/from_hex behaviour
- encode_leaf boundary conversion
"""
import hashlib

import pytest

from allowtree.crypto.hashing import (
    HASHERS,
    encode_leaf,
    from_hex,
    get_hasher,
    hash_concat,
    hasher_name,
    keccak256,
    sha256,
    to_hex,
)
from allowtree.schemas.errors import ErrorCodes, InvalidHexError, UnknownHasherError


KECCAK_EMPTY = "c5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470"


class TestKeccak256:
    """Tests for keccak256()."""

    def test_keccak_empty_known_value(self):
        """keccak256(b"") matches the Ethereum constant."""
        assert keccak256(b"").hex() == KECCAK_EMPTY

    def test_keccak_is_not_sha3(self):
        """Ethereum Keccak differs from NIST SHA3-256."""
        assert keccak256(b"") != hashlib.sha3_256(b"").digest()

    def test_keccak_output_length(self):
        assert len(keccak256(b"any input")) == 32

    def test_keccak_deterministic(self):
        data = b"allow-list entry"
        assert keccak256(data) == keccak256(data)


class TestSha256:
    """Tests for sha256()."""

    def test_sha256_known_value(self):
        """sha256 matches hashlib for a known input."""
        assert sha256(b"hello") == hashlib.sha256(b"hello").digest()
        assert sha256(b"hello").hex() == (
            "2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824"
        )

    def test_sha256_different_inputs_different_outputs(self):
        assert sha256(b"input1") != sha256(b"input2")


class TestHasherRegistry:
    """Tests for get_hasher() and hasher_name()."""

    def test_registry_contains_builtins(self):
        assert HASHERS["keccak256"] is keccak256
        assert HASHERS["sha256"] is sha256

    def test_get_hasher_case_insensitive(self):
        assert get_hasher("KECCAK256") is keccak256

    def test_get_hasher_unknown_raises(self):
        with pytest.raises(UnknownHasherError) as exc_info:
            get_hasher("md5")

        assert exc_info.value.code == ErrorCodes.UNKNOWN_HASHER
        assert "keccak256" in exc_info.value.details["available"]

    def test_hasher_name_for_builtin(self):
        assert hasher_name(sha256) == "sha256"

    def test_hasher_name_for_custom(self):
        def blake(data: bytes) -> bytes:
            return hashlib.blake2b(data, digest_size=32).digest()

        assert hasher_name(blake) == "blake"


class TestHexEncoding:
    """Tests for to_hex() and from_hex()."""

    def test_to_hex_prefixed_lowercase(self):
        assert to_hex(bytes.fromhex("DEADBEEF")) == "0xdeadbeef"

    def test_to_hex_without_prefix(self):
        assert to_hex(b"\x01\x02", prefix=False) == "0102"

    def test_from_hex_with_and_without_prefix(self):
        assert from_hex("0xdeadbeef") == bytes.fromhex("deadbeef")
        assert from_hex("deadbeef") == bytes.fromhex("deadbeef")
        assert from_hex("0XDEADBEEF") == bytes.fromhex("deadbeef")

    def test_from_hex_odd_length_raises(self):
        with pytest.raises(InvalidHexError, match="even length"):
            from_hex("0xabc")

    def test_from_hex_invalid_chars_raises(self):
        with pytest.raises(InvalidHexError):
            from_hex("0xzz")

    def test_invalid_hex_is_value_error(self):
        """InvalidHexError can be caught as ValueError."""
        with pytest.raises(ValueError):
            from_hex("0xnothex!")

    def test_round_trip_known_value(self):
        data = keccak256(b"x")
        assert from_hex(to_hex(data)) == data


class TestEncodeLeaf:
    """Tests for encode_leaf() boundary conversion."""

    def test_hex_text_is_decoded(self):
        addr = "0x70997970C51812dc3A010C7d01b50e0d17dc79C8"
        encoded = encode_leaf(addr)

        assert len(encoded) == 20
        assert encoded == bytes.fromhex(addr[2:])

    def test_hex_case_does_not_matter(self):
        assert encode_leaf("0xABCD") == encode_leaf("0xabcd")

    def test_plain_text_is_utf8(self):
        assert encode_leaf("alice") == b"alice"
        assert encode_leaf("zoë") == "zoë".encode("utf-8")

    def test_unprefixed_hex_is_text(self):
        """Without 0x the value is treated as text, not hex."""
        assert encode_leaf("deadbeef") == b"deadbeef"

    def test_bytes_pass_through(self):
        assert encode_leaf(b"\x00\x01") == b"\x00\x01"
        assert encode_leaf(bytearray(b"ab")) == b"ab"


class TestHashConcat:
    """Tests for hash_concat()."""

    def test_hash_concat_equals_hash_of_concatenation(self):
        left = keccak256(b"left")
        right = keccak256(b"right")

        assert hash_concat(left, right) == keccak256(left + right)

    def test_hash_concat_with_custom_hasher(self):
        assert hash_concat(b"a", b"b", sha256) == sha256(b"ab")
