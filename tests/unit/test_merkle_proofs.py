"""
Merkle Proofs Wrapper Unit Tests
Tests for allowtree/merkle/merkle_proofs.py
"""
import pytest

from allowtree.crypto.hashing import encode_leaf, keccak256, sha256
from allowtree.merkle.merkle_proofs import MerkleProver, MerkleVerifier
from allowtree.merkle.merkle_tree import MerkleTree
from allowtree.schemas.errors import InvalidHexError, LeafNotFoundError


class TestMerkleProver:
    """Tests for MerkleProver."""

    def test_root_matches_tree_of_encoded_entries(self, addresses):
        prover = MerkleProver(addresses)
        tree = MerkleTree([encode_leaf(a) for a in addresses])

        assert prover.root == tree.get_root()
        assert prover.hex_root == tree.get_hex_root()

    def test_prove_accepts_any_hex_case(self, addresses):
        prover = MerkleProver(addresses)

        assert prover.prove(addresses[1].lower()) == prover.prove(addresses[1])

    def test_prove_unknown_entry_raises(self, addresses):
        prover = MerkleProver(addresses)

        with pytest.raises(LeafNotFoundError):
            prover.prove("0x0000000000000000000000000000000000000000")

    def test_prove_all_in_input_order(self, addresses):
        prover = MerkleProver(addresses)
        results = prover.prove_all()

        assert [entry for entry, _ in results] == addresses
        assert [proof.index for _, proof in results] == list(range(len(addresses)))

    def test_prove_all_duplicates_share_first_proof(self):
        prover = MerkleProver(["a", "b", "a"])
        results = prover.prove_all()

        assert results[0][1] == results[2][1]

    def test_verifier_inherits_settings(self):
        prover = MerkleProver(["a", "b", "c"], hasher=sha256, sort_pairs=False)
        verifier = prover.verifier()

        assert verifier.hasher is sha256
        assert verifier.sort_pairs is False
        assert verifier.verify("c", prover.prove("c"), prover.root)


class TestMerkleVerifier:
    """Tests for MerkleVerifier."""

    def test_verify_round_trip(self, addresses):
        prover = MerkleProver(addresses)
        verifier = MerkleVerifier()

        for addr in addresses:
            assert verifier.verify(addr, prover.prove(addr), prover.root)

    def test_verify_hex(self, addresses):
        prover = MerkleProver(addresses)
        verifier = MerkleVerifier()
        hex_proof = prover.prove(addresses[2]).to_hex()

        assert verifier.verify_hex(addresses[2], hex_proof, prover.hex_root)

    def test_verify_rejects_other_entry(self, addresses):
        prover = MerkleProver(addresses)
        verifier = MerkleVerifier()

        assert not verifier.verify(addresses[0], prover.prove(addresses[1]), prover.root)

    def test_text_and_bytes_agree(self):
        prover = MerkleProver(["alice", "bob"])
        verifier = MerkleVerifier(hasher=keccak256)

        assert verifier.verify(b"alice", prover.prove("alice"), prover.root)

    def test_verify_hex_invalid_root_raises(self):
        prover = MerkleProver(["alice", "bob"])

        with pytest.raises(InvalidHexError):
            MerkleVerifier().verify_hex("alice", prover.prove("alice").to_hex(), "0xnothex")
