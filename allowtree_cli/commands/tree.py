"""
CLI Tree Command

Show every level of the tree built from an allow-list.

Usage:
    allowtree tree allowlist.txt [--json]
"""

from __future__ import annotations

import json
from argparse import Namespace

from allowtree.schemas.errors import AllowTreeException

from allowtree_cli.commands.common import (
    EXIT_SUCCESS,
    load_tree,
    report_error,
    tree_config_from_args,
    wants_json,
)


def tree_cmd(args: Namespace) -> int:
    """Execute the tree command."""
    output_json = wants_json(args)
    config = tree_config_from_args(args)

    try:
        entries, tree = load_tree(args.list_path, config)
        root = tree.get_hex_root(config.hex_prefix)
    except (AllowTreeException, FileNotFoundError) as e:
        if args.debug:
            raise
        return report_error(e, output_json)

    if output_json:
        data = {
            "root": root,
            "entries": entries,
            "layers": tree.get_hex_layers(config.hex_prefix),
        }
        print(json.dumps(data, indent=2))
    else:
        print(tree.render(config.hex_prefix))

    return EXIT_SUCCESS
