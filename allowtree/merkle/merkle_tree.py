"""
Merkle Tree Implementation
Allow-list Merkle tree construction, proof generation, and verification.

This module provides:
- MerkleTree: builds and stores every level from a fixed leaf set
- Proof generation for any leaf (by value or by index)
- Standalone proof verification that needs no tree instance
- Standard padding rule for odd number of nodes

Canonical Commitment Rules (Hard Contracts):
1. Leaf hashing: level0[i] = hasher(leaves[i]), hashed exactly once
2. Parent hashing: parent = hasher(left + right)
   - with sort_pairs, left/right are ordered byte-wise before concatenation
3. Padding rule: the last node of an odd level is paired with itself
4. Empty leaves: the tree exists but has no root; get_root() raises
   EmptyInputError
5. Single leaf: root = hasher(leaf), proof is empty

Determinism Notes:
- No randomness; leaf order is the caller's order unless sort_leaves is set
- The hasher output length must be constant; it is checked on every hash
- Duplicate leaves: proofs by value resolve to the FIRST occurrence,
  use get_leaf_indices() + get_proof_by_index() for the others
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Iterable, Iterator, Sequence, Union

from allowtree.crypto.hashing import from_hex, hash_concat, keccak256, to_hex
from allowtree.schemas.errors import (
    EmptyInputError,
    HasherContractViolation,
    LeafNotFoundError,
)


logger = logging.getLogger(__name__)

HasherFn = Callable[[bytes], bytes]


class PairPosition(str, Enum):
    """Side the sibling occupies when its pair is concatenated."""

    LEFT = "left"
    RIGHT = "right"


@dataclass(frozen=True)
class ProofStep:
    """One level of an inclusion proof: the sibling hash and its side."""

    sibling: bytes
    position: PairPosition

    def to_hex(self, prefix: bool = True) -> tuple[str, str]:
        """Return (position, hex sibling)."""
        return self.position.value, to_hex(self.sibling, prefix)


@dataclass(frozen=True)
class MerkleProof:
    """
    An inclusion proof for a single leaf.

    The proof allows verification that a leaf is included in a tree
    with a known root, without revealing the other leaves.

    Attributes:
        leaf: The hashed leaf being proven (level 0 value)
        index: The 0-based position of the leaf in level 0
        steps: Sibling hashes with positions, from leaf level to root
    """
    leaf: bytes
    index: int
    steps: tuple[ProofStep, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        """Validate proof structure."""
        if self.index < 0:
            raise ValueError(f"Leaf index must be non-negative, got {self.index}")
        object.__setattr__(self, "steps", tuple(self.steps))

    def __len__(self) -> int:
        return len(self.steps)

    def __iter__(self) -> Iterator[ProofStep]:
        return iter(self.steps)

    @property
    def siblings(self) -> list[bytes]:
        """Sibling hashes without positions (enough when sort_pairs is set)."""
        return [step.sibling for step in self.steps]

    def to_hex(self, prefix: bool = True) -> list[str]:
        """Sibling hashes as hex strings, the format on-chain verifiers take."""
        return [to_hex(step.sibling, prefix) for step in self.steps]

    def to_positional_hex(self, prefix: bool = True) -> list[tuple[str, str]]:
        """Sibling hashes as (position, hex) pairs."""
        return [step.to_hex(prefix) for step in self.steps]


# Anything verify_proof accepts as a single proof step
ProofItem = Union[ProofStep, bytes, tuple]


def _check_digest(digest: bytes, expected: int | None) -> bytes:
    if expected is not None and len(digest) != expected:
        raise HasherContractViolation(expected, len(digest))
    return digest


def _checked_hash(hasher: HasherFn, data: bytes, expected: int | None) -> bytes:
    return _check_digest(hasher(data), expected)


def merkle_parent(
    left: bytes,
    right: bytes,
    hasher: HasherFn = keccak256,
    sort_pairs: bool = False,
) -> bytes:
    """
    Compute the parent hash of two child nodes.

    With sort_pairs the smaller child (byte-wise) is concatenated first,
    so merkle_parent(a, b) == merkle_parent(b, a).

    Args:
        left: Left child hash
        right: Right child hash
        hasher: Hash function applied to the concatenation
        sort_pairs: Order children byte-wise before concatenating

    Returns:
        Parent hash
    """
    if sort_pairs and right < left:
        left, right = right, left
    return hash_concat(left, right, hasher)


def compute_root_from_proof(
    leaf_hash: bytes,
    proof: MerkleProof | Sequence[ProofItem],
    hasher: HasherFn = keccak256,
    sort_pairs: bool = True,
) -> bytes:
    """
    Fold a proof over an already-hashed leaf and return the implied root.

    Raises:
        ValueError: If a step has no position while sort_pairs is disabled
        HasherContractViolation: If the hasher output length changes
    """
    current = leaf_hash
    digest_size = len(leaf_hash)

    for item in proof:
        step = _coerce_step(item, sort_pairs)
        if step.position is PairPosition.LEFT:
            left, right = step.sibling, current
        else:
            left, right = current, step.sibling
        current = _check_digest(
            merkle_parent(left, right, hasher, sort_pairs), digest_size
        )

    return current


def verify_proof(
    leaf: bytes,
    proof: MerkleProof | Sequence[ProofItem],
    root: bytes,
    hasher: HasherFn = keccak256,
    sort_pairs: bool = True,
) -> bool:
    """
    Verify that a raw leaf is committed to by root.

    Needs only the hasher and sort_pairs setting used at construction,
    not the tree itself.

    Algorithm:
    1. current = hasher(leaf)
    2. For each step (bottom-up):
       - sort_pairs: current = hasher(min + max)
       - sibling on the LEFT: current = hasher(sibling + current)
       - sibling on the RIGHT: current = hasher(current + sibling)
    3. Accept iff current == root

    Args:
        leaf: Raw leaf bytes (not hashed)
        proof: MerkleProof, ProofSteps, (position, sibling) tuples, or bare
               sibling hashes (bare hashes only when sort_pairs is set)
        root: Expected root
        hasher: Hash function used at construction
        sort_pairs: Sort-before-hash rule used at construction

    Returns:
        True if the proof is valid, False otherwise
    """
    leaf_hash = hasher(leaf)
    computed = compute_root_from_proof(leaf_hash, proof, hasher, sort_pairs)
    ok = computed == root
    logger.debug(
        "Proof verification %s (%d steps, root=%s)",
        "passed" if ok else "failed",
        len(proof),
        to_hex(root),
    )
    return ok


def verify_hex_proof(
    leaf: bytes,
    hex_proof: Sequence[str | tuple[str, str]],
    hex_root: str,
    hasher: HasherFn = keccak256,
    sort_pairs: bool = True,
) -> bool:
    """
    Verify a proof given in hex text form.

    Entries are either plain hex siblings (as produced by get_hex_proof)
    or (position, hex) pairs (as produced by get_positional_hex_proof).

    Raises:
        InvalidHexError: If any entry is not valid hex
    """
    steps: list[ProofItem] = []
    for item in hex_proof:
        if isinstance(item, str):
            steps.append(from_hex(item))
        else:
            position, sibling = item
            steps.append(ProofStep(from_hex(sibling), PairPosition(position)))
    return verify_proof(leaf, steps, from_hex(hex_root), hasher, sort_pairs)


def _coerce_step(item: ProofItem, sort_pairs: bool) -> ProofStep:
    if isinstance(item, ProofStep):
        return item
    if isinstance(item, (bytes, bytearray)):
        if not sort_pairs:
            raise ValueError(
                "Proof steps need a position when sort_pairs is disabled"
            )
        # Position is irrelevant under sorted pairing
        return ProofStep(bytes(item), PairPosition.RIGHT)
    position, sibling = item
    return ProofStep(bytes(sibling), PairPosition(position))


def compute_level_count(num_leaves: int) -> int:
    """
    Compute the number of levels of a tree with the given leaf count.

    Counts from the leaf level to the root, inclusive.
    A single leaf has 1 level, two leaves have 2, three leaves have 3.

    Args:
        num_leaves: Number of leaves in the tree

    Returns:
        Level count (0 for empty tree)
    """
    if num_leaves == 0:
        return 0

    levels = 1
    n = num_leaves
    while n > 1:
        n = (n + 1) // 2
        levels += 1

    return levels


class MerkleTree:
    """
    Merkle tree over an allow-list of raw leaves.

    The tree is built once in the constructor and never mutated; build a
    new tree to change the leaf set.

    Example:
        >>> tree = MerkleTree([b"alice", b"bob", b"carol"])
        >>> proof = tree.get_proof(b"bob")
        >>> verify_proof(b"bob", proof, tree.get_root())
        True
    """

    def __init__(
        self,
        leaves: Iterable[bytes],
        hasher: HasherFn = keccak256,
        sort_pairs: bool = True,
        sort_leaves: bool = False,
    ) -> None:
        self._hasher = hasher
        self._sort_pairs = sort_pairs
        self._sort_leaves = sort_leaves
        self._digest_size: int | None = None

        level0: list[bytes] = []
        for leaf in leaves:
            if not isinstance(leaf, (bytes, bytearray)):
                raise TypeError(
                    f"Leaves must be bytes, got {type(leaf).__name__}; "
                    "convert text with allowtree.crypto.encode_leaf first"
                )
            level0.append(self._hash(bytes(leaf)))

        if sort_leaves:
            level0.sort()

        self._levels: tuple[tuple[bytes, ...], ...] = self._build_levels(level0)

        logger.debug(
            "Built Merkle tree: %d leaves, %d levels, sort_pairs=%s",
            len(level0),
            len(self._levels),
            sort_pairs,
        )

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    def _hash(self, data: bytes) -> bytes:
        digest = _checked_hash(self._hasher, data, self._digest_size)
        if self._digest_size is None:
            self._digest_size = len(digest)
        return digest

    def _build_levels(self, level0: list[bytes]) -> tuple[tuple[bytes, ...], ...]:
        if not level0:
            return ()

        levels = [tuple(level0)]
        current = level0

        while len(current) > 1:
            next_level: list[bytes] = []
            for i in range(0, len(current), 2):
                left = current[i]
                # Odd count: last node pairs with itself
                right = current[i + 1] if i + 1 < len(current) else left
                parent = merkle_parent(left, right, self._hasher, self._sort_pairs)
                next_level.append(_check_digest(parent, self._digest_size))
            levels.append(tuple(next_level))
            current = next_level

        return tuple(levels)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def hasher(self) -> HasherFn:
        return self._hasher

    @property
    def sort_pairs(self) -> bool:
        return self._sort_pairs

    @property
    def sort_leaves(self) -> bool:
        return self._sort_leaves

    def __len__(self) -> int:
        return self.get_leaf_count()

    def __repr__(self) -> str:
        root = to_hex(self._levels[-1][0]) if self._levels else None
        return (
            f"MerkleTree(leaves={self.get_leaf_count()}, root={root!r}, "
            f"sort_pairs={self._sort_pairs})"
        )

    def __str__(self) -> str:
        return self.render()

    # ------------------------------------------------------------------
    # Root & levels
    # ------------------------------------------------------------------

    def get_root(self) -> bytes:
        """
        Return the root hash.

        Raises:
            EmptyInputError: If the tree was built with no leaves
        """
        if not self._levels:
            raise EmptyInputError()
        return self._levels[-1][0]

    def get_hex_root(self, prefix: bool = True) -> str:
        """Return the root as lowercase hex ("0x"-prefixed by default)."""
        return to_hex(self.get_root(), prefix)

    def get_leaves(self) -> list[bytes]:
        """Hashed leaves (level 0)."""
        return list(self._levels[0]) if self._levels else []

    def get_hex_leaves(self, prefix: bool = True) -> list[str]:
        return [to_hex(leaf, prefix) for leaf in self.get_leaves()]

    def get_leaf(self, index: int) -> bytes:
        """Hashed leaf at index; IndexError when out of range."""
        leaves = self.get_leaves()
        if index < 0 or index >= len(leaves):
            raise IndexError(
                f"Leaf index {index} out of range for {len(leaves)} leaves"
            )
        return leaves[index]

    def get_leaf_count(self) -> int:
        return len(self._levels[0]) if self._levels else 0

    def get_layers(self) -> list[list[bytes]]:
        """All levels, index 0 = leaves, last = [root]."""
        return [list(level) for level in self._levels]

    def get_hex_layers(self, prefix: bool = True) -> list[list[str]]:
        return [[to_hex(node, prefix) for node in level] for level in self._levels]

    def get_level_count(self) -> int:
        return len(self._levels)

    def get_depth(self) -> int:
        """Number of pairing steps from a leaf to the root (proof length)."""
        return max(len(self._levels) - 1, 0)

    # ------------------------------------------------------------------
    # Leaf lookup
    # ------------------------------------------------------------------

    def get_leaf_index(self, leaf: bytes) -> int:
        """
        Index of the first level-0 entry equal to hasher(leaf).

        Raises:
            LeafNotFoundError: If the leaf is not in the tree
        """
        leaf_hash = _checked_hash(self._hasher, leaf, self._digest_size)
        try:
            return self.get_leaves().index(leaf_hash)
        except ValueError:
            raise LeafNotFoundError(
                "Leaf not found in Merkle tree",
                leaf_hash=to_hex(leaf_hash),
            ) from None

    def get_leaf_indices(self, leaf: bytes) -> list[int]:
        """Every level-0 index holding hasher(leaf); empty when absent."""
        leaf_hash = _checked_hash(self._hasher, leaf, self._digest_size)
        return [i for i, h in enumerate(self.get_leaves()) if h == leaf_hash]

    # ------------------------------------------------------------------
    # Proofs
    # ------------------------------------------------------------------

    def get_proof(self, leaf: bytes) -> MerkleProof:
        """
        Generate a proof for a raw leaf.

        Duplicated leaves resolve to their first occurrence.

        Raises:
            LeafNotFoundError: If the leaf is not in the tree
        """
        return self.get_proof_by_index(self.get_leaf_index(leaf))

    def get_proof_by_index(self, index: int) -> MerkleProof:
        """
        Generate a proof for the leaf at the given level-0 index.

        Algorithm:
        1. Start at the target leaf index
        2. At each level below the root:
           - sibling index is index ^ 1; past the end means the node was
             paired with itself
           - record the sibling and its side (LEFT when index is odd)
           - move up: index = index // 2

        Raises:
            IndexError: If index is out of range
        """
        leaf_hash = self.get_leaf(index)

        steps: list[ProofStep] = []
        current_index = index
        for level in self._levels[:-1]:
            sibling_index = current_index ^ 1
            if sibling_index < len(level):
                sibling = level[sibling_index]
            else:
                sibling = level[current_index]

            if current_index % 2 == 1:
                position = PairPosition.LEFT
            else:
                position = PairPosition.RIGHT

            steps.append(ProofStep(sibling, position))
            current_index //= 2

        logger.debug("Generated proof for leaf %d with %d steps", index, len(steps))
        return MerkleProof(leaf=leaf_hash, index=index, steps=tuple(steps))

    def get_proofs(self) -> list[MerkleProof]:
        """Proofs for every leaf, in level-0 order."""
        return [self.get_proof_by_index(i) for i in range(self.get_leaf_count())]

    def get_hex_proof(self, leaf: bytes, prefix: bool = True) -> list[str]:
        return self.get_proof(leaf).to_hex(prefix)

    def get_positional_hex_proof(
        self, leaf: bytes, prefix: bool = True
    ) -> list[tuple[str, str]]:
        return self.get_proof(leaf).to_positional_hex(prefix)

    def verify(
        self,
        leaf: bytes,
        proof: MerkleProof | Sequence[ProofItem],
        root: bytes | None = None,
    ) -> bool:
        """Verify with this tree's hasher and sort_pairs; root defaults to ours."""
        if root is None:
            root = self.get_root()
        return verify_proof(leaf, proof, root, self._hasher, self._sort_pairs)

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def render(self, prefix: bool = True) -> str:
        """Render the tree top-down, one node per line."""
        if not self._levels:
            return "(empty tree)"

        lines: list[str] = []
        top = len(self._levels) - 1

        def walk(level: int, index: int, indent: str, last: bool) -> None:
            branch = "└─ " if last else "├─ "
            lines.append(f"{indent}{branch}{to_hex(self._levels[level][index], prefix)}")
            if level == 0:
                return
            child_indent = indent + ("   " if last else "│  ")
            below = self._levels[level - 1]
            children = [i for i in (2 * index, 2 * index + 1) if i < len(below)]
            for n, child in enumerate(children):
                walk(level - 1, child, child_indent, n == len(children) - 1)

        walk(top, 0, "", True)
        return "\n".join(lines)


def build_merkle_root(
    leaves: Iterable[bytes],
    hasher: HasherFn = keccak256,
    sort_pairs: bool = True,
) -> bytes:
    """
    Build a tree from raw leaves and return its root.

    Raises:
        EmptyInputError: If leaves is empty
    """
    return MerkleTree(leaves, hasher=hasher, sort_pairs=sort_pairs).get_root()


__all__ = [
    "PairPosition",
    "ProofStep",
    "MerkleProof",
    "MerkleTree",
    "merkle_parent",
    "compute_root_from_proof",
    "verify_proof",
    "verify_hex_proof",
    "build_merkle_root",
    "compute_level_count",
]
