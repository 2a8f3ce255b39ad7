"""Unbalanced binary search tree used as a timestamp multimap.

Each node holds one integer key (epoch milliseconds) and the bucket of
every record carrying exactly that key. Inserting an existing key
appends to the bucket instead of creating a node, so keys are unique
across the tree:

    key 1672531200000  bucket [r1, r7]
        /                         \\
    key 1672444800000           key 1672617600000
    bucket [r3]                 bucket [r2, r4, r9]

Insert and lookup walk root-down, O(h) where h is the tree height.
There is no rebalancing: the shape follows insertion order, and keys
inserted in sorted order degrade the tree to a linked list with
h == n. That is acceptable for the bounded datasets this engine serves
(one snapshot loaded per session), but bulk loads of pre-sorted data
will pay O(n^2) to build.

Lookup is exact only. There is no range or prefix matching; a query
key must equal a stored key to the millisecond.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator

from changelog_query.domain.record import Record
from changelog_query.domain.types import Timestamp
from changelog_query.index.base import RecordIndexBase


@dataclass
class TreeNode:
    """A node in the timestamp tree.

    All keys under left are < key, all keys under right are > key.
    Each child slot owns its subtree; there are no parent pointers.
    """
    key: Timestamp
    bucket: list[Record] = field(default_factory=list)
    left: TreeNode | None = None
    right: TreeNode | None = None


class TimestampIndex(RecordIndexBase):
    """Multimap from exact timestamp to the records sharing it.

    Usage:
        index = TimestampIndex.build(records)
        index.lookup(parse_timestamp("2023-01-01"))
    """

    def __init__(self) -> None:
        super().__init__()
        self._root: TreeNode | None = None
        self._key_count = 0
        self._record_count = 0

    @property
    def key_count(self) -> int:
        """Number of distinct keys (tree nodes)."""
        return self._key_count

    @property
    def record_count(self) -> int:
        return self._record_count

    def insert(self, record: Record, key: Timestamp) -> None:
        """Descend from the root and file record under key.

        Equal key: append to that node's bucket.
        Greater: go right. Smaller: go left.
        An empty child slot receives a new leaf.
        """
        self._record_count += 1
        if self._root is None:
            self._root = TreeNode(key, [record])
            self._key_count += 1
            return

        node = self._root
        while True:
            if key == node.key:
                node.bucket.append(record)
                return
            if key > node.key:
                if node.right is None:
                    node.right = TreeNode(key, [record])
                    self._key_count += 1
                    return
                node = node.right
            else:
                if node.left is None:
                    node.left = TreeNode(key, [record])
                    self._key_count += 1
                    return
                node = node.left

    def lookup(self, key: Timestamp) -> list[Record]:
        """Return a copy of the bucket at key, or [] if no node has it.

        The copy keeps callers (sorters in particular) from reordering
        the stored bucket.
        """
        node = self._find(key)
        if node is None:
            return []
        return list(node.bucket)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, int) and self._find(key) is not None

    def _find(self, key: Timestamp) -> TreeNode | None:
        node = self._root
        while node is not None:
            if key == node.key:
                return node
            node = node.right if key > node.key else node.left
        return None

    def keys(self) -> list[Timestamp]:
        """All stored keys in ascending order (in-order traversal)."""
        return [node.key for node in self._in_order()]

    def height(self) -> int:
        """Number of nodes on the longest root-to-leaf path (0 if empty).

        Iterative so that a degenerate, list-shaped tree does not hit
        the recursion limit.
        """
        if self._root is None:
            return 0
        best = 0
        stack: list[tuple[TreeNode, int]] = [(self._root, 1)]
        while stack:
            node, depth = stack.pop()
            best = max(best, depth)
            if node.left is not None:
                stack.append((node.left, depth + 1))
            if node.right is not None:
                stack.append((node.right, depth + 1))
        return best

    def _in_order(self) -> Iterator[TreeNode]:
        stack: list[TreeNode] = []
        node = self._root
        while stack or node is not None:
            while node is not None:
                stack.append(node)
                node = node.left
            node = stack.pop()
            yield node
            node = node.right
