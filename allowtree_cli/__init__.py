"""
allowtree CLI

Command-line interface for allow-list Merkle trees.

Usage:
    python -m allowtree_cli root allowlist.txt
    python -m allowtree_cli proof allowlist.txt 0x7099...79c8
    python -m allowtree_cli proofs allowlist.txt --out proofs.json
    python -m allowtree_cli verify 0x7099...79c8 --proof-file proofs.json
"""

__version__ = "0.1.0"
