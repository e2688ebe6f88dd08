"""
Common test fixtures shared by all modules.

Provides factory functions for allowtree test data:
- Allow-list entries (addresses and plain text)
- Raw leaf bytes
- Trees built from either
- Allow-list files on disk
"""

from pathlib import Path
from typing import Callable

from allowtree.crypto.hashing import encode_leaf, keccak256
from allowtree.merkle.merkle_tree import MerkleTree


# Hardhat default accounts
DEFAULT_ADDRESSES = [
    "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266",
    "0x70997970C51812dc3A010C7d01b50e0d17dc79C8",
    "0x3C44CdDdB6a900fa2b585dd299e03d12FA4293BC",
    "0x90F79bf6EB2c4f870365E785982E1f101E93b906",
    "0x15d34AAf54267DB7D7c367839AAf71A00a2C6A65",
]


def make_leaves(count: int = 5) -> list[bytes]:
    """Raw leaf bytes: b"leaf0", b"leaf1", ..."""
    return [f"leaf{i}".encode() for i in range(count)]


def make_tree(
    count: int = 5,
    hasher: Callable[[bytes], bytes] = keccak256,
    sort_pairs: bool = True,
    sort_leaves: bool = False,
) -> MerkleTree:
    """Tree over make_leaves(count)."""
    return MerkleTree(
        make_leaves(count),
        hasher=hasher,
        sort_pairs=sort_pairs,
        sort_leaves=sort_leaves,
    )


def make_address_tree(sort_pairs: bool = True) -> MerkleTree:
    """Tree over DEFAULT_ADDRESSES, hex-decoded."""
    return MerkleTree(
        [encode_leaf(addr) for addr in DEFAULT_ADDRESSES],
        sort_pairs=sort_pairs,
    )


def write_allowlist(directory: Path, entries: list[str], name: str = "allowlist.txt") -> Path:
    """Write entries one per line and return the file path."""
    path = directory / name
    path.write_text("\n".join(entries) + "\n", encoding="utf-8")
    return path
