"""
CLI Root Command

Build the tree for an allow-list file and print its root.

Usage:
    allowtree root allowlist.txt [--hasher keccak256] [--no-sort-pairs] [--json]
"""

from __future__ import annotations

import logging
from argparse import Namespace

from allowtree.schemas.errors import AllowTreeException
from allowtree.schemas.proof import RootReport

from allowtree_cli.commands.common import (
    EXIT_SUCCESS,
    load_tree,
    report_error,
    tree_config_from_args,
    wants_json,
)


logger = logging.getLogger(__name__)


def print_report_human(report: RootReport) -> None:
    """Print a root report in human-readable format."""
    print(f"root: {report.root}")
    print(f"leaves: {report.leaf_count}")
    print(f"depth: {report.depth}")
    print(f"hasher: {report.hasher}")
    print(f"sort_pairs: {str(report.sort_pairs).lower()}")
    if report.sort_leaves:
        print("sort_leaves: true")


def root_cmd(args: Namespace) -> int:
    """
    Execute the root command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code
    """
    output_json = wants_json(args)
    config = tree_config_from_args(args)

    try:
        _, tree = load_tree(args.list_path, config)
        report = RootReport.from_tree(tree, config.hasher, prefix=config.hex_prefix)
    except (AllowTreeException, FileNotFoundError) as e:
        if args.debug:
            raise
        return report_error(e, output_json)

    if output_json:
        print(report.model_dump_json(indent=2))
    else:
        print_report_human(report)

    logger.info(f"Computed root {report.root} over {report.leaf_count} leaves")
    return EXIT_SUCCESS
