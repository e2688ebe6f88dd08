"""
Runtime Configuration

Tree construction settings shared by library callers and the CLI.
"""

from __future__ import annotations

import copy
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Optional

from dotenv import load_dotenv

from allowtree.crypto.hashing import DEFAULT_HASHER_NAME, get_hasher
from allowtree.schemas.errors import ConfigurationException

load_dotenv()


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes")


@dataclass
class TreeConfig:
    """
    How allow-list trees are built and rendered.

    Can be loaded from:
    - Environment variables
    - YAML file
    - Programmatic construction
    """
    hasher: str = DEFAULT_HASHER_NAME
    sort_pairs: bool = True
    sort_leaves: bool = False
    hex_prefix: bool = True
    extra: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.hasher = self.hasher.lower()

    def resolve_hasher(self) -> Callable[[bytes], bytes]:
        """Hasher function for the configured name."""
        return get_hasher(self.hasher)

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        This is the SINGLE source of truth for all env var reading.

        Supported variables:
        - ALLOWTREE_HASHER: Hasher name (keccak256, sha256)
        - ALLOWTREE_SORT_PAIRS: Sort pairs before hashing (true/false)
        - ALLOWTREE_SORT_LEAVES: Sort hashed leaves before building (true/false)
        - ALLOWTREE_HEX_PREFIX: Prefix hex output with 0x (true/false)
        """
        overrides: dict[str, Any] = {}

        if os.getenv("ALLOWTREE_HASHER"):
            overrides["hasher"] = os.getenv("ALLOWTREE_HASHER")
        if os.getenv("ALLOWTREE_SORT_PAIRS"):
            overrides["sort_pairs"] = _env_flag("ALLOWTREE_SORT_PAIRS", "true")
        if os.getenv("ALLOWTREE_SORT_LEAVES"):
            overrides["sort_leaves"] = _env_flag("ALLOWTREE_SORT_LEAVES", "false")
        if os.getenv("ALLOWTREE_HEX_PREFIX"):
            overrides["hex_prefix"] = _env_flag("ALLOWTREE_HEX_PREFIX", "true")

        return overrides

    @classmethod
    def from_env(cls) -> "TreeConfig":
        """
        Load configuration purely from environment variables.

        Uses defaults for any values not specified in env vars.
        """
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_yaml(cls, path: str | Path) -> "TreeConfig":
        """Load configuration from a YAML file (top level or under a "tree" key)."""
        import yaml
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f) or {}

        if isinstance(data.get("tree"), dict):
            data = data["tree"]
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TreeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        known = {"hasher", "sort_pairs", "sort_leaves", "hex_prefix", "extra"}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigurationException(
                f"Unknown tree configuration keys: {unknown}",
                field_path="tree",
            )

        config = cls(**data)
        # Fail early on a bad hasher name
        config.resolve_hasher()
        return config

    def with_env_overrides(self) -> "TreeConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        new_config = copy.deepcopy(self)
        for key, value in overrides.items():
            setattr(new_config, key, value)
        new_config.__post_init__()
        new_config.resolve_hasher()
        return new_config

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "hasher": self.hasher,
            "sort_pairs": self.sort_pairs,
            "sort_leaves": self.sort_leaves,
            "hex_prefix": self.hex_prefix,
            "extra": self.extra,
        }


# Global default configuration
_default_config: Optional[TreeConfig] = None


def get_default_config() -> TreeConfig:
    """Get the default tree configuration."""
    global _default_config
    if _default_config is None:
        _default_config = TreeConfig.from_env()
    return _default_config


def set_default_config(config: Optional[TreeConfig]) -> None:
    """Set (or with None, reset) the default tree configuration."""
    global _default_config
    _default_config = config
