"""
Merkle Tree and Commitments
Allow-list Merkle tree construction + proof generation/verification.

This module provides:
- MerkleTree: Level storage, root and proof generation
- MerkleProof / ProofStep / PairPosition: Inclusion proof types
- verify_proof: Verify a proof without the tree
- MerkleProver / MerkleVerifier: Text-aware convenience wrappers

Canonical Commitment Rules:
1. Leaf hashing: hasher(leaf bytes), keccak256 by default
2. Parent hashing: hasher(left + right), pair sorted byte-wise when sort_pairs
3. Padding: Duplicate last node if odd number at any level
4. Empty tree: no root, get_root() raises EmptyInputError
5. Single leaf: root = hasher(leaf)

Usage:
    from allowtree.merkle import MerkleTree, verify_proof
    from allowtree.crypto import encode_leaf

    leaves = [encode_leaf(addr) for addr in addresses]
    tree = MerkleTree(leaves)

    root = tree.get_hex_root()
    proof = tree.get_proof(leaves[2])

    assert verify_proof(leaves[2], proof, tree.get_root())
"""
from .merkle_tree import (
    PairPosition,
    ProofStep,
    MerkleProof,
    MerkleTree,
    merkle_parent,
    compute_root_from_proof,
    verify_proof,
    verify_hex_proof,
    build_merkle_root,
    compute_level_count,
)

from .merkle_proofs import (
    MerkleProver,
    MerkleVerifier,
)


__all__ = [
    # Core types
    "PairPosition",
    "ProofStep",
    "MerkleProof",
    "MerkleTree",
    # Core functions
    "merkle_parent",
    "compute_root_from_proof",
    "verify_proof",
    "verify_hex_proof",
    "build_merkle_root",
    "compute_level_count",
    # Convenience classes
    "MerkleProver",
    "MerkleVerifier",
]
