"""
CLI command modules.
"""

from allowtree_cli.commands import root, proof, verify, tree

__all__ = ["root", "proof", "verify", "tree"]
