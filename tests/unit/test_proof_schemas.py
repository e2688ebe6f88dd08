"""
Proof Document Unit Tests
Tests for allowtree/schemas/proof.py and allowtree/schemas/errors.py
"""
import pytest
from pydantic import ValidationError

from allowtree.crypto.hashing import encode_leaf
from allowtree.merkle.merkle_tree import MerkleTree, verify_proof
from allowtree.schemas.errors import (
    AllowTreeError,
    AllowTreeException,
    ErrorCodes,
    LeafNotFoundError,
)
from allowtree.schemas.proof import ProofDocument, ProofSet, ProofStepModel, RootReport
from allowtree.schemas.versioning import (
    SCHEMA_VERSION,
    UnsupportedSchemaVersionError,
    assert_supported_schema_version,
)

from fixtures import DEFAULT_ADDRESSES, make_address_tree


class TestProofDocument:
    """Tests for ProofDocument conversion."""

    def test_from_proof_fields(self):
        tree = make_address_tree()
        leaf = DEFAULT_ADDRESSES[2]
        proof = tree.get_proof(encode_leaf(leaf))

        doc = ProofDocument.from_proof(leaf, proof, tree, "keccak256")

        assert doc.schema_version == SCHEMA_VERSION
        assert doc.leaf == leaf
        assert doc.index == 2
        assert doc.root == tree.get_hex_root()
        assert doc.hex_proof == proof.to_hex()
        assert [step.position for step in doc.proof] == [
            step.position.value for step in proof.steps
        ]

    def test_to_proof_restores_steps(self):
        tree = make_address_tree(sort_pairs=False)
        leaf = DEFAULT_ADDRESSES[4]
        proof = tree.get_proof(encode_leaf(leaf))
        doc = ProofDocument.from_proof(leaf, proof, tree, "keccak256")

        restored = doc.to_proof()

        assert restored == proof
        assert verify_proof(encode_leaf(leaf), restored, doc.root_bytes, sort_pairs=False)

    def test_json_round_trip_preserves_document(self):
        tree = make_address_tree()
        leaf = DEFAULT_ADDRESSES[0]
        doc = ProofDocument.from_proof(leaf, tree.get_proof(encode_leaf(leaf)), tree, "keccak256")

        assert ProofDocument.model_validate_json(doc.model_dump_json()) == doc

    def test_unprefixed_export(self):
        tree = make_address_tree()
        leaf = DEFAULT_ADDRESSES[0]
        doc = ProofDocument.from_proof(
            leaf, tree.get_proof(encode_leaf(leaf)), tree, "keccak256", prefix=False
        )

        assert not doc.root.startswith("0x")
        assert all(not h.startswith("0x") for h in doc.hex_proof)

    def test_invalid_hex_rejected(self):
        with pytest.raises(ValidationError):
            ProofDocument(leaf="a", leaf_hash="0xzz", index=0, root="0x00")

    def test_unknown_schema_version_rejected(self):
        with pytest.raises(ValidationError):
            ProofDocument(
                schema_version="v99", leaf="a", leaf_hash="0x00", index=0, root="0x00"
            )

    def test_bad_position_rejected(self):
        with pytest.raises(ValidationError):
            ProofStepModel(hash="0x00", position="up")

    def test_hex_is_lowercased(self):
        step = ProofStepModel(hash="0xABCD", position="left")
        assert step.hash == "0xabcd"


class TestRootReportAndProofSet:
    """Tests for RootReport and ProofSet."""

    def test_root_report_from_tree(self):
        tree = make_address_tree()
        report = RootReport.from_tree(tree, "keccak256")

        assert report.root == tree.get_hex_root()
        assert report.leaf_count == len(DEFAULT_ADDRESSES)
        assert report.depth == tree.get_depth()
        assert report.sort_pairs is True

    def test_proof_set_find(self):
        tree = make_address_tree()
        docs = [
            ProofDocument.from_proof(a, tree.get_proof(encode_leaf(a)), tree, "keccak256")
            for a in DEFAULT_ADDRESSES
        ]
        proof_set = ProofSet(root=RootReport.from_tree(tree, "keccak256"), proofs=docs)

        assert proof_set.find(DEFAULT_ADDRESSES[3]) == docs[3]
        assert proof_set.find("missing") is None

    def test_proof_set_find_matches_encoded_bytes(self):
        """Hex entries match whatever their letter case."""
        tree = make_address_tree()
        docs = [
            ProofDocument.from_proof(a, tree.get_proof(encode_leaf(a)), tree, "keccak256")
            for a in DEFAULT_ADDRESSES
        ]
        proof_set = ProofSet(root=RootReport.from_tree(tree, "keccak256"), proofs=docs)

        assert proof_set.find(DEFAULT_ADDRESSES[1].lower()) == docs[1]
        assert proof_set.find("0X" + DEFAULT_ADDRESSES[1][2:]) is None

    def test_proof_set_unknown_version_rejected(self):
        tree = make_address_tree()

        with pytest.raises(ValidationError):
            ProofSet(schema_version="v0", root=RootReport.from_tree(tree, "keccak256"))


class TestErrorModels:
    """Tests for the error taxonomy."""

    def test_exception_to_model(self):
        exc = LeafNotFoundError("not here", leaf_hash="0xab")
        model = exc.to_error_model()

        assert isinstance(model, AllowTreeError)
        assert model.code == ErrorCodes.LEAF_NOT_FOUND
        assert model.details == {"leaf_hash": "0xab"}
        assert model.retryable is False

    def test_model_to_exception(self):
        model = AllowTreeError(code=ErrorCodes.EMPTY_INPUT, message="empty")
        exc = model.to_exception()

        assert isinstance(exc, AllowTreeException)
        assert exc.code == ErrorCodes.EMPTY_INPUT
        assert "EMPTY_INPUT" in repr(exc)

    def test_error_model_forbids_extra(self):
        with pytest.raises(ValidationError):
            AllowTreeError(code="X", message="m", unexpected=True)

    def test_tree_errors_share_base(self):
        with pytest.raises(AllowTreeException):
            MerkleTree([]).get_root()

    def test_unsupported_version_carries_code(self):
        with pytest.raises(UnsupportedSchemaVersionError) as exc_info:
            assert_supported_schema_version("v99")

        assert isinstance(exc_info.value, AllowTreeException)
        assert exc_info.value.code == ErrorCodes.UNSUPPORTED_VERSION
        assert exc_info.value.details["version"] == "v99"
