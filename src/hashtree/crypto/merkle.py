"""
hashtree - Merkle Tree Implementation

Builds a perfect binary Merkle tree over an ordered sequence of values with
any pluggable hash engine.

Construction:
- Inputs are padded to a power of two by duplicating the last value
- Leaf hash = H(value bytes), no prefix
- Node hash = H(left hex digest || right hex digest), left first

Every node lives in one flat tuple in level order: the leaves, then each
smaller level, the root last. Child and parent positions are recovered by
index arithmetic, so the tree holds no references between nodes.
"""

import time
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import Generic

import structlog

from hashtree.core.config import settings
from hashtree.crypto.hashers import Hasher, create_hasher
from hashtree.crypto.values import V, duplicate, freeze, to_bytes
from hashtree.metrics import get_tree_metrics

logger = structlog.get_logger(__name__)


class MerkleTreeError(Exception):
    """Base exception for Merkle tree errors."""

    pass


class EmptyInputError(MerkleTreeError, ValueError):
    """Builder was given no values."""

    pass


class EmptyTreeError(MerkleTreeError):
    """Tree has no nodes, so it has no root."""

    pass


@dataclass(frozen=True)
class Node(Generic[V]):
    """
    Represents a node in the Merkle tree.

    Attributes:
        hash: Lowercase hex digest of the node
        value: Input value (only for leaf nodes)
    """

    hash: str
    value: V | None = None

    @property
    def is_leaf(self) -> bool:
        """Check if this node is a leaf."""
        return self.value is not None


def next_power_of_two(n: int) -> int:
    """Smallest power of two that is >= n (1 for n <= 1)."""
    if n <= 1:
        return 1
    return 1 << (n - 1).bit_length()


def pad_values(values: list[V]) -> list[V]:
    """
    Pad values in place to a power-of-two length.

    The last value is duplicated into every new slot.

    Args:
        values: Non-empty list of tree values

    Returns:
        The same list, padded

    Raises:
        EmptyInputError: If values is empty
    """
    if not values:
        raise EmptyInputError("Cannot pad an empty value list")

    pad_by = next_power_of_two(len(values)) - len(values)
    if pad_by:
        last = values[-1]
        values.extend(duplicate(last) for _ in range(pad_by))
    return values


def leaf_node(value: V, hasher: Hasher) -> Node[V]:
    """
    Hash a value into a leaf node.

    Args:
        value: Tree value
        hasher: Hash engine (reset before use)

    Returns:
        Leaf node holding a copy of the value, byte buffers frozen to bytes
    """
    hasher.reset()
    hasher.absorb(to_bytes(value))
    return Node(hash=hasher.finalize_hex(), value=freeze(value))


def internal_node(left: Node[V], right: Node[V], hasher: Hasher) -> Node[V]:
    """
    Combine two sibling nodes into their parent.

    The hex digests are hashed as ASCII bytes, left then right.

    Args:
        left: Left child
        right: Right child
        hasher: Hash engine (reset before use)

    Returns:
        Internal node without a value
    """
    hasher.reset()
    hasher.absorb(left.hash.encode("ascii"))
    hasher.absorb(right.hash.encode("ascii"))
    return Node(hash=hasher.finalize_hex())


def _parent_level(children: list[Node[V]], hasher: Hasher) -> list[Node[V]]:
    """Pair (2i, 2i+1) children into the next level up."""
    return [
        internal_node(children[i], children[i + 1], hasher)
        for i in range(0, len(children), 2)
    ]


class MerkleTree(Generic[V]):
    """
    Merkle tree over an ordered sequence of values.

    Features:
    - Pluggable hash engine and value types
    - Deterministic padding by duplicating the last value
    - Flat level-order node store with O(1) root access
    - Immutable after construction

    Example:
        >>> tree = MerkleTree.from_leaves(["tea", "coffee", "lemonade", "wine"])
        >>> tree.root_hash[:16]
        '0e3bc6149e1f99b5'
        >>> len(tree)
        7
    """

    def __init__(self, hasher: Hasher, nodes: Iterable[Node[V]]) -> None:
        """
        Initialize Merkle tree (internal use).

        Use from_leaves() or build() to construct trees.
        """
        self._hasher = hasher
        self._nodes: tuple[Node[V], ...] = tuple(nodes)

    @classmethod
    def from_leaves(
        cls,
        values: Iterable[V],
        hasher: Hasher | None = None,
    ) -> "MerkleTree[V]":
        """
        Construct a Merkle tree from leaf values.

        A list argument is padded in place; any other iterable is copied
        into a new list first.

        Args:
            values: Ordered tree values
            hasher: Hash engine, defaults to create_hasher()

        Returns:
            Constructed MerkleTree, owning the hash engine

        Raises:
            EmptyInputError: If values is empty
            TypeError: If hasher is not a hash engine
        """
        if not isinstance(values, list):
            values = list(values)

        if not values:
            if settings.METRICS_ENABLED:
                get_tree_metrics().record_rejected("empty_input")
            raise EmptyInputError("Cannot create Merkle tree from empty values")

        if hasher is None:
            hasher = create_hasher()
        elif not isinstance(hasher, Hasher):
            raise TypeError(f"{type(hasher).__name__} is not a hash engine")

        started = time.perf_counter()
        value_count = len(values)

        # Input leaves are hashed before padding touches the caller's list
        nodes = [leaf_node(value, hasher) for value in values]
        pad_values(values)
        nodes.extend(leaf_node(value, hasher) for value in values[value_count:])

        # Each level is complete before its parent level is built
        level = nodes
        while len(level) > 1:
            level = _parent_level(level, hasher)
            nodes.extend(level)

        tree = cls(hasher, nodes)
        duration = time.perf_counter() - started
        padded = len(values) - value_count

        logger.debug(
            "Built Merkle tree",
            value_count=value_count,
            padded=padded,
            node_count=len(nodes),
            algorithm=getattr(hasher, "name", type(hasher).__name__),
            root=tree.root_hash[:16] + "...",
        )

        if settings.METRICS_ENABLED:
            get_tree_metrics().record_build(
                duration=duration,
                leaf_count=value_count,
                padded=padded,
            )

        return tree

    def root(self) -> Node[V]:
        """
        Get the root node.

        A tree built from a single value has one node, so its root is that
        leaf and carries the value. Every larger tree has a valueless root.

        Raises:
            EmptyTreeError: If the tree has no nodes
        """
        if not self._nodes:
            raise EmptyTreeError("Merkle tree has no nodes")
        return self._nodes[-1]

    @property
    def root_hash(self) -> str:
        """Get the root hash (Merkle root)."""
        return self.root().hash

    @property
    def hasher(self) -> Hasher:
        """Hash engine the tree was built with."""
        return self._hasher

    @property
    def nodes(self) -> tuple[Node[V], ...]:
        """All nodes in level order, root last."""
        return self._nodes

    @property
    def leaf_count(self) -> int:
        """Number of leaves, padding included."""
        return (len(self._nodes) + 1) // 2

    @property
    def leaves(self) -> tuple[Node[V], ...]:
        """Leaf nodes in input order, padding included."""
        return self._nodes[: self.leaf_count]

    @property
    def height(self) -> int:
        """Number of levels, leaves and root included."""
        return len(self._level_bounds())

    def get_node(self, index: int) -> Node[V]:
        """
        Get a node by store index.

        Raises:
            IndexError: If index out of bounds
        """
        if index < 0 or index >= len(self._nodes):
            raise IndexError(f"Node index {index} out of bounds")
        return self._nodes[index]

    def levels(self) -> Iterator[tuple[Node[V], ...]]:
        """Yield each level, leaves first and the root last."""
        for start, size in self._level_bounds():
            yield self._nodes[start : start + size]

    def children(self, index: int) -> tuple[int, int] | None:
        """
        Get the store indices of a node's children.

        Returns:
            (left, right) indices, or None for a leaf

        Raises:
            IndexError: If index out of bounds
        """
        self.get_node(index)
        bounds = self._level_bounds()
        level = self._level_of(index, bounds)
        if level == 0:
            return None

        start, _ = bounds[level]
        child_start, _ = bounds[level - 1]
        left = child_start + 2 * (index - start)
        return left, left + 1

    def parent(self, index: int) -> int | None:
        """
        Get the store index of a node's parent.

        Returns:
            Parent index, or None for the root

        Raises:
            IndexError: If index out of bounds
        """
        self.get_node(index)
        if index == len(self._nodes) - 1:
            return None

        bounds = self._level_bounds()
        level = self._level_of(index, bounds)
        start, _ = bounds[level]
        parent_start, _ = bounds[level + 1]
        return parent_start + (index - start) // 2

    def verify(self, hasher: Hasher | None = None) -> bool:
        """
        Recompute every hash in the store and compare.

        Args:
            hasher: Engine to recompute with, defaults to the tree's own

        Returns:
            True if the store is a non-empty perfect tree and every leaf
            and internal hash matches
        """
        if not self._nodes:
            return False
        if len(self._nodes) != 2 * next_power_of_two(self.leaf_count) - 1:
            return False

        engine = hasher if hasher is not None else self._hasher

        for node in self.leaves:
            if not node.is_leaf or leaf_node(node.value, engine).hash != node.hash:
                return False

        for index in range(self.leaf_count, len(self._nodes)):
            node = self._nodes[index]
            left, right = self.children(index)
            expected = internal_node(self._nodes[left], self._nodes[right], engine)
            if node.is_leaf or expected.hash != node.hash:
                return False

        return True

    def _level_bounds(self) -> list[tuple[int, int]]:
        """(start, size) of every level, leaves first."""
        bounds = []
        start = 0
        size = self.leaf_count
        while size and start < len(self._nodes):
            bounds.append((start, size))
            start += size
            size //= 2
        return bounds

    @staticmethod
    def _level_of(index: int, bounds: list[tuple[int, int]]) -> int:
        for level, (start, size) in enumerate(bounds):
            if start <= index < start + size:
                return level
        raise IndexError(f"Node index {index} out of bounds")

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[Node[V]]:
        return iter(self._nodes)

    def __getitem__(self, index: int) -> Node[V]:
        return self._nodes[index]

    def __repr__(self) -> str:
        root = self._nodes[-1].hash[:16] if self._nodes else None
        return f"MerkleTree(nodes={len(self._nodes)}, root={root!r})"


def build(values: Iterable[V], hasher: Hasher | None = None) -> MerkleTree[V]:
    """
    Build a Merkle tree from leaf values.

    See MerkleTree.from_leaves().
    """
    return MerkleTree.from_leaves(values, hasher)
