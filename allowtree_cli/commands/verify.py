"""
CLI Verify Command

Verify an inclusion proof offline, without the allow-list.

Usage:
    allowtree verify <leaf> --root 0x... --proof 0x... 0x... [--no-sort-pairs]
    allowtree verify <leaf> --proof-file proof.json

Positional proof steps are written "left:0x..." / "right:0x...", and are
required when sort_pairs is disabled.
"""

from __future__ import annotations

import json
import logging
from argparse import Namespace
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from allowtree.crypto.hashing import encode_leaf, get_hasher
from allowtree.merkle.merkle_tree import verify_hex_proof
from allowtree.schemas.errors import (
    AllowTreeException,
    ConfigurationException,
    SchemaValidationException,
)
from allowtree.schemas.proof import ProofDocument, ProofSet
from allowtree.schemas.versioning import SCHEMA_VERSION, assert_supported_schema_version

from allowtree_cli.commands.common import (
    EXIT_SUCCESS,
    EXIT_VERIFICATION_FAILED,
    report_error,
    tree_config_from_args,
    wants_json,
)


logger = logging.getLogger(__name__)


@dataclass
class VerifySummary:
    """Summary of proof verification for CLI output."""
    leaf: str = ""
    root: str = ""
    hasher: str = ""
    sort_pairs: bool = True
    steps: int = 0
    verified: bool = False
    errors: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        if not d["errors"]:
            del d["errors"]
        return d


def parse_proof_args(items: list[str]) -> list[str | tuple[str, str]]:
    """Split "position:hex" entries; bare hex entries pass through."""
    parsed: list[str | tuple[str, str]] = []
    for item in items:
        if ":" in item:
            position, sibling = item.split(":", 1)
            position = position.strip().lower()
            if position not in ("left", "right"):
                raise ValueError(f"Invalid proof position: '{position}'")
            parsed.append((position, sibling.strip()))
        else:
            parsed.append(item.strip())
    return parsed


def load_proof_document(path: Path, leaf: str) -> ProofDocument:
    """Load a ProofDocument, or pick the leaf's entry out of a ProofSet file."""
    if not path.exists():
        raise FileNotFoundError(f"Proof file not found: {path}")

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise SchemaValidationException(f"Invalid JSON in {path}: {e}") from e

    if isinstance(data, dict):
        assert_supported_schema_version(data.get("schema_version", SCHEMA_VERSION))

    try:
        if isinstance(data, dict) and "proofs" in data:
            doc = ProofSet.model_validate(data).find(leaf)
            if doc is None:
                raise ConfigurationException(
                    f"No proof for '{leaf}' in {path}",
                    field_path="proofs",
                )
            return doc
        return ProofDocument.model_validate(data)
    except ValidationError as e:
        raise SchemaValidationException(f"Invalid proof file {path}: {e}") from e


def print_summary_human(summary: VerifySummary) -> None:
    """Print summary in human-readable format."""
    print(f"leaf: {summary.leaf}")
    print(f"root: {summary.root}")
    print(f"hasher: {summary.hasher}")
    print(f"sort_pairs: {str(summary.sort_pairs).lower()}")
    print(f"steps: {summary.steps}")
    print(f"verified: {str(summary.verified).lower()}")
    for err in summary.errors:
        print(f"  ✗ {err}")


def verify_cmd(args: Namespace) -> int:
    """
    Execute the verify command.

    Returns:
        Exit code (2 when the proof does not verify)
    """
    output_json = wants_json(args)
    config = tree_config_from_args(args)
    summary = VerifySummary(leaf=args.leaf)

    try:
        if args.proof_file:
            doc = load_proof_document(Path(args.proof_file), args.leaf)
            root = args.root or doc.root
            summary.root = root
            summary.hasher = doc.hasher
            summary.sort_pairs = doc.sort_pairs
            summary.steps = len(doc.proof)
            if encode_leaf(doc.leaf) != encode_leaf(args.leaf):
                summary.errors.append(f"proof file is for '{doc.leaf}'")
            summary.verified = verify_hex_proof(
                encode_leaf(args.leaf),
                [(step.position, step.hash) for step in doc.proof],
                root,
                get_hasher(doc.hasher),
                doc.sort_pairs,
            )
        else:
            if not args.root:
                raise ConfigurationException("--root is required without --proof-file")
            hex_proof = parse_proof_args(args.proof or [])
            summary.root = args.root
            summary.hasher = config.hasher
            summary.sort_pairs = config.sort_pairs
            summary.steps = len(hex_proof)
            summary.verified = verify_hex_proof(
                encode_leaf(args.leaf),
                hex_proof,
                args.root,
                config.resolve_hasher(),
                config.sort_pairs,
            )
    except (AllowTreeException, FileNotFoundError, ValueError) as e:
        if args.debug:
            raise
        return report_error(e, output_json)

    if output_json:
        print(json.dumps(summary.to_dict(), indent=2))
    else:
        print_summary_human(summary)

    if summary.verified:
        logger.info("Verification passed")
        return EXIT_SUCCESS

    logger.warning("Verification failed")
    return EXIT_VERIFICATION_FAILED


__all__ = ["verify_cmd", "parse_proof_args", "load_proof_document"]
