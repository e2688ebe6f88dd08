"""
Schemas & Errors
File: proof.py

Purpose: Hex-text documents for exporting roots and inclusion proofs
to verifiers that only speak JSON/hex.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from allowtree.crypto.hashing import encode_leaf, from_hex, to_hex
from allowtree.merkle.merkle_tree import (
    MerkleProof,
    MerkleTree,
    PairPosition,
    ProofStep,
)

from .versioning import SCHEMA_VERSION, assert_supported_schema_version


def _check_hex(value: str) -> str:
    from_hex(value)
    return value.lower()


class ProofStepModel(BaseModel):
    """One proof step as hex text."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    hash: str = Field(..., description="Sibling hash, hex")
    position: Literal["left", "right"] = Field(
        ..., description="Side the sibling occupies in the pair"
    )

    @field_validator("hash")
    @classmethod
    def _validate_hash(cls, v: str) -> str:
        return _check_hex(v)


class ProofDocument(BaseModel):
    """
    Portable inclusion proof for one allow-list entry.

    Carries everything a remote verifier needs besides the hasher
    implementation itself.
    """

    model_config = ConfigDict(extra="forbid")

    schema_version: str = Field(default=SCHEMA_VERSION)
    leaf: str = Field(..., description="Entry as supplied by the caller")
    leaf_hash: str = Field(..., description="Hashed leaf, hex")
    index: int = Field(..., ge=0, description="Position in the leaf level")
    root: str = Field(..., description="Merkle root, hex")
    hasher: str = Field(default="keccak256")
    sort_pairs: bool = Field(default=True)
    proof: list[ProofStepModel] = Field(default_factory=list)

    @field_validator("schema_version")
    @classmethod
    def _validate_version(cls, v: str) -> str:
        assert_supported_schema_version(v)
        return v

    @field_validator("leaf_hash", "root")
    @classmethod
    def _validate_hex(cls, v: str) -> str:
        return _check_hex(v)

    @classmethod
    def from_proof(
        cls,
        leaf: str,
        proof: MerkleProof,
        tree: MerkleTree,
        hasher: str,
        prefix: bool = True,
    ) -> "ProofDocument":
        return cls(
            leaf=leaf,
            leaf_hash=to_hex(proof.leaf, prefix),
            index=proof.index,
            root=tree.get_hex_root(prefix),
            hasher=hasher,
            sort_pairs=tree.sort_pairs,
            proof=[
                ProofStepModel(hash=to_hex(step.sibling, prefix), position=step.position.value)
                for step in proof.steps
            ],
        )

    def to_proof(self) -> MerkleProof:
        return MerkleProof(
            leaf=from_hex(self.leaf_hash),
            index=self.index,
            steps=tuple(
                ProofStep(from_hex(step.hash), PairPosition(step.position))
                for step in self.proof
            ),
        )

    @property
    def root_bytes(self) -> bytes:
        return from_hex(self.root)

    @property
    def hex_proof(self) -> list[str]:
        return [step.hash for step in self.proof]


class RootReport(BaseModel):
    """Summary of a built tree."""

    model_config = ConfigDict(extra="forbid")

    schema_version: str = Field(default=SCHEMA_VERSION)
    root: str = Field(..., description="Merkle root, hex")
    leaf_count: int = Field(..., ge=1)
    depth: int = Field(..., ge=0)
    hasher: str = Field(default="keccak256")
    sort_pairs: bool = Field(default=True)
    sort_leaves: bool = Field(default=False)

    @classmethod
    def from_tree(cls, tree: MerkleTree, hasher: str, prefix: bool = True) -> "RootReport":
        return cls(
            root=tree.get_hex_root(prefix),
            leaf_count=tree.get_leaf_count(),
            depth=tree.get_depth(),
            hasher=hasher,
            sort_pairs=tree.sort_pairs,
            sort_leaves=tree.sort_leaves,
        )


class ProofSet(BaseModel):
    """Root plus a proof for every entry of an allow-list."""

    model_config = ConfigDict(extra="forbid")

    schema_version: str = Field(default=SCHEMA_VERSION)
    root: RootReport
    proofs: list[ProofDocument] = Field(default_factory=list)

    @field_validator("schema_version")
    @classmethod
    def _validate_version(cls, v: str) -> str:
        assert_supported_schema_version(v)
        return v

    def find(self, leaf: str) -> ProofDocument | None:
        """
        First proof document whose entry encodes to the same bytes as leaf.

        Hex entries therefore match regardless of letter case.
        """
        target = encode_leaf(leaf)
        for doc in self.proofs:
            if encode_leaf(doc.leaf) == target:
                return doc
        return None
