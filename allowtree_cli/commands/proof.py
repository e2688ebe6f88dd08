"""
CLI Proof Commands

Produce inclusion proofs for allow-list entries.

Usage:
    allowtree proof allowlist.txt 0x7099...79c8 [--positional] [--json]
    allowtree proofs allowlist.txt [--out proofs.json] [--json]
"""

from __future__ import annotations

import logging
from argparse import Namespace
from pathlib import Path

from allowtree.crypto.hashing import encode_leaf
from allowtree.schemas.errors import AllowTreeException
from allowtree.schemas.proof import ProofDocument, ProofSet, RootReport

from allowtree_cli.commands.common import (
    EXIT_SUCCESS,
    load_tree,
    report_error,
    tree_config_from_args,
    wants_json,
)


logger = logging.getLogger(__name__)


def print_proof_human(doc: ProofDocument, positional: bool) -> None:
    """Print a single proof in human-readable format."""
    print(f"leaf: {doc.leaf}")
    print(f"leaf_hash: {doc.leaf_hash}")
    print(f"index: {doc.index}")
    print(f"root: {doc.root}")
    print(f"proof ({len(doc.proof)} steps):")
    for step in doc.proof:
        if positional:
            print(f"  {step.position:<5} {step.hash}")
        else:
            print(f"  {step.hash}")


def proof_cmd(args: Namespace) -> int:
    """
    Execute the proof command.

    Returns:
        Exit code (1 when the leaf is not in the allow-list)
    """
    output_json = wants_json(args)
    config = tree_config_from_args(args)

    try:
        _, tree = load_tree(args.list_path, config)
        proof = tree.get_proof(encode_leaf(args.leaf))
        doc = ProofDocument.from_proof(
            args.leaf, proof, tree, config.hasher, prefix=config.hex_prefix
        )
    except (AllowTreeException, FileNotFoundError) as e:
        if args.debug:
            raise
        return report_error(e, output_json)

    if output_json:
        print(doc.model_dump_json(indent=2))
    else:
        print_proof_human(doc, args.positional)

    return EXIT_SUCCESS


def proofs_cmd(args: Namespace) -> int:
    """
    Execute the proofs command: root plus a proof for every entry.

    Returns:
        Exit code
    """
    output_json = wants_json(args)
    config = tree_config_from_args(args)

    try:
        entries, tree = load_tree(args.list_path, config)
        proof_set = ProofSet(
            root=RootReport.from_tree(tree, config.hasher, prefix=config.hex_prefix),
            proofs=[
                ProofDocument.from_proof(
                    entry,
                    tree.get_proof(encode_leaf(entry)),
                    tree,
                    config.hasher,
                    prefix=config.hex_prefix,
                )
                for entry in entries
            ],
        )
    except (AllowTreeException, FileNotFoundError) as e:
        if args.debug:
            raise
        return report_error(e, output_json)

    if args.out:
        out_path = Path(args.out)
        try:
            out_path.write_text(proof_set.model_dump_json(indent=2) + "\n", encoding="utf-8")
        except OSError as e:
            return report_error(e, output_json)
        logger.info(f"Wrote {len(proof_set.proofs)} proofs to {out_path}")

    if output_json:
        print(proof_set.model_dump_json(indent=2))
    else:
        print(f"root: {proof_set.root.root}")
        for doc in proof_set.proofs:
            print(f"{doc.leaf} [{', '.join(doc.hex_proof)}]")
        if args.out:
            print(f"\nwritten: {args.out}")

    return EXIT_SUCCESS
