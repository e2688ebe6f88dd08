"""
Helpers shared by CLI commands.
"""

from __future__ import annotations

import json
import sys
from argparse import Namespace
from dataclasses import replace
from pathlib import Path

from allowtree.allowlist import build_allowlist_tree, load_allowlist
from allowtree.config.runtime import TreeConfig
from allowtree.merkle.merkle_tree import MerkleTree
from allowtree.schemas.errors import AllowTreeException


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def tree_config_from_args(args: Namespace) -> TreeConfig:
    """Overlay command-line tree flags on the loaded configuration."""
    cli_config = getattr(args, "cli_config", None)
    config = cli_config.tree if cli_config is not None else TreeConfig()

    changes = {}
    if getattr(args, "hasher", None):
        changes["hasher"] = args.hasher.lower()
    if getattr(args, "sort_pairs", None) is not None:
        changes["sort_pairs"] = args.sort_pairs
    if getattr(args, "sort_leaves", None) is not None:
        changes["sort_leaves"] = args.sort_leaves
    if getattr(args, "no_prefix", False):
        changes["hex_prefix"] = False

    return replace(config, **changes) if changes else config


def wants_json(args: Namespace) -> bool:
    if getattr(args, "json", False):
        return True
    cli_config = getattr(args, "cli_config", None)
    return cli_config is not None and cli_config.default_output_format == "json"


def load_tree(list_path: str, config: TreeConfig) -> tuple[list[str], MerkleTree]:
    """Load an allow-list file and build its tree."""
    entries = load_allowlist(Path(list_path))
    return entries, build_allowlist_tree(entries, config)


def report_error(error: Exception, output_json: bool) -> int:
    """Print an error to stderr (or stdout as JSON) and return the exit code."""
    if output_json and isinstance(error, AllowTreeException):
        print(error.to_error_model().model_dump_json(indent=2))
    elif output_json:
        print(json.dumps({"code": "ERROR", "message": str(error)}, indent=2))
    else:
        print(f"Error: {error}", file=sys.stderr)
    return EXIT_RUNTIME_ERROR
