"""
allowtree - Merkle commitments for allow-lists.

Build a Merkle tree over allow-listed identifiers, publish its root and
hand out inclusion proofs that verify a single entry without the full list.

Usage:
    from allowtree import MerkleTree, encode_leaf, verify_proof

    leaves = [encode_leaf(addr) for addr in addresses]
    tree = MerkleTree(leaves, sort_pairs=True)
    print(tree.get_hex_root())
    print(tree.get_hex_proof(leaves[0]))
"""

from allowtree.crypto import encode_leaf, keccak256, sha256, to_hex, from_hex
from allowtree.merkle import (
    MerkleProof,
    MerkleTree,
    PairPosition,
    ProofStep,
    verify_hex_proof,
    verify_proof,
)
from allowtree.schemas.errors import (
    AllowTreeException,
    EmptyInputError,
    EmptyTreeError,
    HasherContractViolation,
    LeafNotFoundError,
)

__version__ = "0.1.0"

__all__ = [
    "MerkleTree",
    "MerkleProof",
    "ProofStep",
    "PairPosition",
    "verify_proof",
    "verify_hex_proof",
    "encode_leaf",
    "keccak256",
    "sha256",
    "to_hex",
    "from_hex",
    "AllowTreeException",
    "EmptyInputError",
    "EmptyTreeError",
    "HasherContractViolation",
    "LeafNotFoundError",
]
