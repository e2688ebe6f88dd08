"""
Test fixtures package for allowtree tests.

This package provides factory functions for creating test objects.

Usage:
    from fixtures import make_leaves, make_tree

    def test_something():
        tree = make_tree(7, sort_pairs=False)
"""

from .common import (
    DEFAULT_ADDRESSES,
    make_leaves,
    make_tree,
    make_address_tree,
    write_allowlist,
)

__all__ = [
    "DEFAULT_ADDRESSES",
    "make_leaves",
    "make_tree",
    "make_address_tree",
    "write_allowlist",
]
