"""
CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    python -m allowtree_cli root <list> [--json]
    python -m allowtree_cli proof <list> <leaf> [--positional] [--json]
    python -m allowtree_cli proofs <list> [--out PATH] [--json]
    python -m allowtree_cli verify <leaf> --root HEX --proof HEX [HEX ...]
    python -m allowtree_cli verify <leaf> --proof-file PATH
    python -m allowtree_cli tree <list> [--json]
    python -m allowtree_cli config --init

Environment Variables:
    ALLOWTREE_HASHER            Hasher name: keccak256 (default), sha256
    ALLOWTREE_SORT_PAIRS        Sort pairs before hashing (default: true)
    ALLOWTREE_SORT_LEAVES       Sort hashed leaves (default: false)
    ALLOWTREE_HEX_PREFIX        Prefix hex output with 0x (default: true)
    ALLOWTREE_LOG_LEVEL         Log level (default: WARNING)
    ALLOWTREE_LOG_FILE          Optional log file
    ALLOWTREE_OUTPUT_FORMAT     human or json
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import traceback
from pathlib import Path
from typing import Sequence

from allowtree.crypto.hashing import HASHERS
from allowtree_cli import __version__
from allowtree_cli.commands import proof, root, tree, verify
from allowtree_cli.config import get_default_config_template, load_config


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def setup_logging(level: str = "WARNING", log_file: str | None = None) -> None:
    """Configure logging for the CLI."""
    log_level = getattr(logging, level.upper(), logging.WARNING)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
        force=True,
    )


def _add_tree_options(parser: argparse.ArgumentParser) -> None:
    """Flags shared by every command that builds or checks a tree."""
    parser.add_argument(
        "--hasher",
        type=str,
        choices=sorted(HASHERS),
        default=None,
        help="Hash function (default: from config or keccak256)",
    )
    parser.add_argument(
        "--sort-pairs",
        dest="sort_pairs",
        action="store_true",
        default=None,
        help="Sort each pair before hashing (default)",
    )
    parser.add_argument(
        "--no-sort-pairs",
        dest="sort_pairs",
        action="store_false",
        help="Hash pairs in positional order",
    )
    parser.add_argument(
        "--no-prefix",
        action="store_true",
        default=False,
        help="Print hex without the 0x prefix",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Show tracebacks instead of short error messages",
    )


def _add_build_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "list_path",
        type=str,
        help="Allow-list file (one entry per line, or a JSON array)",
    )
    parser.add_argument(
        "--sort-leaves",
        dest="sort_leaves",
        action="store_true",
        default=None,
        help="Sort hashed leaves before building the tree",
    )
    _add_tree_options(parser)


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="allowtree",
        description="allowtree CLI - Merkle roots and inclusion proofs for allow-lists.",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to configuration file (default: ./allowtree.json or ~/.config/allowtree/config.json)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- root command ---
    root_parser = subparsers.add_parser(
        "root",
        help="Print the Merkle root of an allow-list",
        description="Build the tree for an allow-list file and print its root.",
    )
    _add_build_options(root_parser)
    root_parser.set_defaults(func=root.root_cmd)

    # --- proof command ---
    proof_parser = subparsers.add_parser(
        "proof",
        help="Print the inclusion proof for one entry",
        description="Build the tree and print the proof for a single allow-list entry.",
    )
    _add_build_options(proof_parser)
    proof_parser.add_argument(
        "leaf",
        type=str,
        help="Entry to prove (0x-hex is decoded, other text is UTF-8)",
    )
    proof_parser.add_argument(
        "--positional",
        action="store_true",
        default=False,
        help="Show the side of each sibling",
    )
    proof_parser.set_defaults(func=proof.proof_cmd)

    # --- proofs command ---
    proofs_parser = subparsers.add_parser(
        "proofs",
        help="Print the root and a proof for every entry",
        description="Build the tree and export proofs for all allow-list entries.",
    )
    _add_build_options(proofs_parser)
    proofs_parser.add_argument(
        "--out", "-o",
        type=str,
        default=None,
        help="Write the proof set as JSON to this path",
    )
    proofs_parser.set_defaults(func=proof.proofs_cmd)

    # --- verify command ---
    verify_parser = subparsers.add_parser(
        "verify",
        help="Verify an inclusion proof offline",
        description="Recompute the root from a leaf and its proof.",
    )
    verify_parser.add_argument(
        "leaf",
        type=str,
        help="Entry to verify (same encoding as when the tree was built)",
    )
    verify_parser.add_argument(
        "--root",
        type=str,
        default=None,
        help="Expected root, hex (taken from --proof-file when omitted)",
    )
    proof_source = verify_parser.add_mutually_exclusive_group(required=True)
    proof_source.add_argument(
        "--proof",
        type=str,
        nargs="*",
        default=None,
        help="Sibling hashes bottom-up; use left:HEX / right:HEX without sorted pairs",
    )
    proof_source.add_argument(
        "--proof-file",
        type=str,
        default=None,
        help="JSON proof document or proof set written by 'proof --json' / 'proofs --out'",
    )
    _add_tree_options(verify_parser)
    verify_parser.set_defaults(func=verify.verify_cmd)

    # --- tree command ---
    tree_parser = subparsers.add_parser(
        "tree",
        help="Show every level of the tree",
        description="Render the full tree built from an allow-list.",
    )
    _add_build_options(tree_parser)
    tree_parser.set_defaults(func=tree.tree_cmd)

    # --- config command ---
    config_parser = subparsers.add_parser(
        "config",
        help="Manage CLI configuration",
        description="Initialize or display configuration.",
    )
    config_parser.add_argument(
        "--init",
        action="store_true",
        default=False,
        help="Create a template configuration file",
    )
    config_parser.add_argument(
        "--show",
        action="store_true",
        default=False,
        help="Show current configuration",
    )
    config_parser.add_argument(
        "--path",
        type=str,
        default="allowtree.json",
        help="Path for config file (default: allowtree.json)",
    )
    config_parser.set_defaults(func=config_cmd)

    return parser


def config_cmd(args: argparse.Namespace) -> int:
    """Handle config command."""
    if args.init:
        config_path = Path(args.path)
        if config_path.exists():
            print(f"Error: Config file already exists: {config_path}", file=sys.stderr)
            return EXIT_RUNTIME_ERROR

        config_path.write_text(get_default_config_template())
        print(f"Created configuration file: {config_path}")
        print("\nEdit this file to configure your settings.")
        print("You can also use environment variables (ALLOWTREE_* prefix).")
        return EXIT_SUCCESS

    if args.show:
        config = args.cli_config
        config_dict = {
            "tree": config.tree.to_dict(),
            "log_level": config.log_level,
            "log_file": config.log_file,
            "default_output_format": config.default_output_format,
        }
        print(json.dumps(config_dict, indent=2))
        return EXIT_SUCCESS

    print("Use --init to create a config file or --show to display current config")
    return EXIT_SUCCESS


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0=success, 1=error, 2=verification failed)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_RUNTIME_ERROR

    # Load configuration
    try:
        config = load_config(args.config)
    except Exception as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    # Setup logging
    log_level = args.log_level or config.log_level
    setup_logging(level=log_level, log_file=config.log_file)

    # Attach config to args for commands to use
    args.cli_config = config

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except Exception as e:
        if getattr(args, "debug", False):
            traceback.print_exc()
        else:
            print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
