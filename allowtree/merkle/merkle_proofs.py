"""
Merkle Proofs Convenience Wrappers
Thin wrappers around the tree and verification functions.

This module provides class-based interfaces:
- MerkleProver: Build a tree from text or bytes leaves and hand out proofs
- MerkleVerifier: Verify proofs under a fixed hasher / sort_pairs setting

Both apply encode_leaf to text input, so the same text-to-bytes rule is
used when a proof is produced and when it is checked.
"""
from __future__ import annotations

from typing import Callable, Sequence

from allowtree.crypto.hashing import encode_leaf, keccak256
from allowtree.merkle.merkle_tree import (
    MerkleProof,
    MerkleTree,
    ProofItem,
    verify_hex_proof,
    verify_proof,
)


class MerkleProver:
    """
    Convenience class for generating Merkle proofs from an allow-list.

    Example:
        >>> prover = MerkleProver(["0x70997970c51812dc3a010c7d01b50e0d17dc79c8", "alice"])
        >>> proof = prover.prove("alice")
        >>> prover.verifier().verify("alice", proof, prover.root)
        True
    """

    def __init__(
        self,
        entries: Sequence[str | bytes],
        hasher: Callable[[bytes], bytes] = keccak256,
        sort_pairs: bool = True,
        sort_leaves: bool = False,
    ) -> None:
        self.entries = list(entries)
        self.tree = MerkleTree(
            [encode_leaf(entry) for entry in self.entries],
            hasher=hasher,
            sort_pairs=sort_pairs,
            sort_leaves=sort_leaves,
        )

    @property
    def root(self) -> bytes:
        return self.tree.get_root()

    @property
    def hex_root(self) -> str:
        return self.tree.get_hex_root()

    def prove(self, entry: str | bytes) -> MerkleProof:
        """
        Generate a proof for one allow-list entry.

        Raises:
            LeafNotFoundError: If the entry is not in the allow-list
        """
        return self.tree.get_proof(encode_leaf(entry))

    def prove_all(self) -> list[tuple[str | bytes, MerkleProof]]:
        """
        Proofs for every entry, in input order.

        Duplicate entries all receive the proof of the first occurrence.
        """
        return [(entry, self.prove(entry)) for entry in self.entries]

    def verifier(self) -> "MerkleVerifier":
        """A verifier configured like this prover's tree."""
        return MerkleVerifier(
            hasher=self.tree.hasher,
            sort_pairs=self.tree.sort_pairs,
        )


class MerkleVerifier:
    """
    Convenience class for verifying Merkle proofs.

    Holds the hasher and sort_pairs setting the tree was built with.
    """

    def __init__(
        self,
        hasher: Callable[[bytes], bytes] = keccak256,
        sort_pairs: bool = True,
    ) -> None:
        self.hasher = hasher
        self.sort_pairs = sort_pairs

    def verify(
        self,
        entry: str | bytes,
        proof: MerkleProof | Sequence[ProofItem],
        root: bytes,
    ) -> bool:
        """
        Verify an entry against a root.

        Returns:
            True if the proof is valid, False otherwise
        """
        return verify_proof(
            encode_leaf(entry), proof, root, self.hasher, self.sort_pairs
        )

    def verify_hex(
        self,
        entry: str | bytes,
        hex_proof: Sequence[str | tuple[str, str]],
        hex_root: str,
    ) -> bool:
        """
        Verify an entry against a hex proof and hex root.

        Raises:
            InvalidHexError: If the proof or root is not valid hex
        """
        return verify_hex_proof(
            encode_leaf(entry), hex_proof, hex_root, self.hasher, self.sort_pairs
        )


__all__ = [
    "MerkleProver",
    "MerkleVerifier",
]
