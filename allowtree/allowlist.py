"""
Allow-list loading and tree assembly.

Bridges human-edited allow-list files and the Merkle core:
- load_allowlist: read entries from a text or JSON file
- build_allowlist_tree: encode entries and build a tree from a TreeConfig
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Sequence

from allowtree.config.runtime import TreeConfig, get_default_config
from allowtree.crypto.hashing import encode_leaf
from allowtree.merkle.merkle_tree import MerkleTree
from allowtree.schemas.errors import ConfigurationException


logger = logging.getLogger(__name__)


def parse_allowlist(text: str) -> list[str]:
    """
    Parse allow-list file contents.

    A JSON array of strings is accepted as-is. Otherwise the text is read
    one entry per line; surrounding whitespace is stripped and blank lines
    and lines starting with "#" are skipped.
    """
    stripped = text.lstrip()
    if stripped.startswith("["):
        try:
            data = json.loads(stripped)
        except json.JSONDecodeError as e:
            raise ConfigurationException(f"Invalid JSON allow-list: {e}") from e
        if not isinstance(data, list) or not all(isinstance(x, str) for x in data):
            raise ConfigurationException("JSON allow-list must be an array of strings")
        return [x.strip() for x in data]

    entries = []
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        entries.append(line)
    return entries


def load_allowlist(path: str | Path) -> list[str]:
    """Read allow-list entries from a file."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Allow-list file not found: {path}")

    entries = parse_allowlist(path.read_text(encoding="utf-8"))
    logger.info(f"Loaded {len(entries)} allow-list entries from {path}")
    return entries


def build_allowlist_tree(
    entries: Sequence[str | bytes],
    config: TreeConfig | None = None,
) -> MerkleTree:
    """Encode entries with encode_leaf and build a tree per config."""
    config = config or get_default_config()
    return MerkleTree(
        [encode_leaf(entry) for entry in entries],
        hasher=config.resolve_hasher(),
        sort_pairs=config.sort_pairs,
        sort_leaves=config.sort_leaves,
    )


__all__ = [
    "parse_allowlist",
    "load_allowlist",
    "build_allowlist_tree",
]
