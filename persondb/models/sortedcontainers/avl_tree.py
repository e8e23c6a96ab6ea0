"""
AVL Tree implementation for sorted person storage.

Keeps lookups at O(log N) by bounding the height difference of every
pair of sibling subtrees to one.
"""

from collections.abc import AsyncIterator, Iterator
from dataclasses import dataclass

from persondb.interfaces.sorted_container import SortedContainer
from persondb.models.ordering import Ordering, compare, compare_keys
from persondb.models.person import PersonKey, PersonRecord


@dataclass
class Node:
    """Node in the AVL Tree. Owns both of its subtrees."""

    record: PersonRecord
    left: "Node | None" = None
    right: "Node | None" = None
    height: int = 1


def _height(node: Node | None) -> int:
    return node.height if node else 0


def _balance_factor(node: Node | None) -> int:
    if node is None:
        return 0
    return _height(node.left) - _height(node.right)


def _update_height(node: Node) -> None:
    node.height = 1 + max(_height(node.left), _height(node.right))


class AVLTree(SortedContainer):
    """
    AVL Tree implementation of SortedContainer.

    Properties maintained:
    1. In-order traversal yields strictly ascending keys
    2. No two records share a (last_name, first_name) key
    3. For every node |height(left) - height(right)| <= 1
    4. Every cached height equals 1 + max(child heights)
    """

    def __init__(self) -> None:
        self._root: Node | None = None
        self._size: int = 0

    @property
    def root(self) -> PersonRecord | None:
        return self._root.record if self._root else None

    def insert(self, record: PersonRecord) -> bool:
        """Insert a record; duplicate keys are ignored. O(log N)"""
        size_before = self._size
        self._root = self._insert(self._root, record)
        return self._size > size_before

    def find(self, first_name: str, last_name: str) -> PersonRecord | None:
        """Retrieve a record by name. O(log N)"""
        node = self._find_node((last_name, first_name))
        return node.record if node else None

    def delete(self, first_name: str, last_name: str) -> bool:
        """Remove a record by name. O(log N)"""
        key = (last_name, first_name)
        if self._find_node(key) is None:
            return False

        self._root = self._delete(self._root, key)
        self._size -= 1
        return True

    def has(self, first_name: str, last_name: str) -> bool:
        return self._find_node((last_name, first_name)) is not None

    def size(self) -> int:
        return self._size

    def height(self) -> int:
        return _height(self._root)

    def clear(self) -> None:
        self._root = None
        self._size = 0

    def traverse_in_order(self) -> list[PersonRecord]:
        return list(self.iterator())

    def check_balance(self) -> tuple[bool, int]:
        """
        Recompute balance and height in one post-order pass.

        A node whose cached height differs from the recomputed one also
        counts as unbalanced. The returned height is always the recomputed one.
        """
        return self._check_balance(self._root)

    def is_balanced(self) -> bool:
        balanced, _ = self.check_balance()
        return balanced

    def iter_last_name(self, last_name: str) -> Iterator[PersonRecord]:
        """
        Yield every record with the given last name, in key order.

        Only subtrees that can contain the last name are visited.
        """
        return self._iter_last_name(self._root, last_name)

    def __iter__(self) -> Iterator[PersonRecord]:
        return self.iterator()

    def iterator(
        self, start: PersonKey | None = None, end: PersonKey | None = None
    ) -> Iterator[PersonRecord]:
        return _RangeIterator(self._root, start, end)

    def __aiter__(self) -> AsyncIterator[PersonRecord]:
        return self.async_iterator()

    def async_iterator(
        self, start: PersonKey | None = None, end: PersonKey | None = None
    ) -> AsyncIterator[PersonRecord]:
        return _AsyncRangeIterator(self._root, start, end)

    def _find_node(self, key: PersonKey) -> Node | None:
        """Find node by key."""
        current = self._root
        while current is not None:
            order = compare_keys(key, current.record.key)
            if order == Ordering.LESS:
                current = current.left
            elif order == Ordering.GREATER:
                current = current.right
            else:
                return current
        return None

    def _insert(self, node: Node | None, record: PersonRecord) -> Node:
        """Insert below node and return the new subtree root."""
        if node is None:
            self._size += 1
            return Node(record=record)

        order = compare_keys(record.key, node.record.key)
        if order == Ordering.LESS:
            node.left = self._insert(node.left, record)
        elif order == Ordering.GREATER:
            node.right = self._insert(node.right, record)
        else:
            # Existing record wins
            return node

        return self._rebalance(node)

    def _delete(self, node: Node | None, key: PersonKey) -> Node | None:
        """Delete key below node and return the new subtree root."""
        if node is None:
            return None

        order = compare_keys(key, node.record.key)
        if order == Ordering.LESS:
            node.left = self._delete(node.left, key)
        elif order == Ordering.GREATER:
            node.right = self._delete(node.right, key)
        elif node.left is None or node.right is None:
            # Leaf or single child: splice the child into this slot
            return node.left if node.left else node.right
        else:
            successor = node.right
            while successor.left:
                successor = successor.left

            node.record = successor.record
            node.right = self._delete(node.right, successor.record.key)

        return self._rebalance(node)

    def _rebalance(self, node: Node) -> Node:
        """Restore the AVL property at node and return the subtree root."""
        _update_height(node)
        balance = _balance_factor(node)

        if balance > 1:
            if _balance_factor(node.left) < 0:
                # Left-right case
                node.left = self._rotate_left(node.left)
            return self._rotate_right(node)

        if balance < -1:
            if _balance_factor(node.right) > 0:
                # Right-left case
                node.right = self._rotate_right(node.right)
            return self._rotate_left(node)

        return node

    def _rotate_left(self, node: Node) -> Node:
        """Left rotation. The right child becomes the subtree root."""
        right_child = node.right
        if right_child is None:
            return node

        node.right = right_child.left
        right_child.left = node

        _update_height(node)
        _update_height(right_child)
        return right_child

    def _rotate_right(self, node: Node) -> Node:
        """Right rotation. The left child becomes the subtree root."""
        left_child = node.left
        if left_child is None:
            return node

        node.left = left_child.right
        left_child.right = node

        _update_height(node)
        _update_height(left_child)
        return left_child

    def _check_balance(self, node: Node | None) -> tuple[bool, int]:
        if node is None:
            return True, 0

        left_balanced, left_height = self._check_balance(node.left)
        right_balanced, right_height = self._check_balance(node.right)

        balanced = (
            left_balanced
            and right_balanced
            and abs(left_height - right_height) <= 1
        )
        height = 1 + max(left_height, right_height)
        return balanced and node.height == height, height

    def _iter_last_name(self, node: Node | None, last_name: str) -> Iterator[PersonRecord]:
        if node is None:
            return

        order = compare(last_name, node.record.last_name)
        if order == Ordering.LESS:
            yield from self._iter_last_name(node.left, last_name)
        elif order == Ordering.GREATER:
            yield from self._iter_last_name(node.right, last_name)
        else:
            yield from self._iter_last_name(node.left, last_name)
            yield node.record
            yield from self._iter_last_name(node.right, last_name)


class _RangeIterator(Iterator[PersonRecord]):
    """Iterator for range queries on AVL Tree."""

    def __init__(self, root: Node | None, start: PersonKey | None, end: PersonKey | None) -> None:
        self._stack: list[Node] = []
        self._end = end

        # Initialize stack with nodes >= start
        self._push_left_path(root, start)

    def __iter__(self) -> Iterator[PersonRecord]:
        return self

    def __next__(self) -> PersonRecord:
        if not self._stack:
            raise StopIteration

        node = self._stack.pop()

        # Check end bound
        if self._end is not None and compare_keys(node.record.key, self._end) != Ordering.LESS:
            self._stack.clear()
            raise StopIteration

        # Push right subtree's left path
        self._push_left_path(node.right, None)

        return node.record

    def _push_left_path(self, node: Node | None, start: PersonKey | None) -> None:
        """Push leftmost path to stack, respecting start bound."""
        while node:
            if start is not None and compare_keys(node.record.key, start) == Ordering.LESS:
                # Skip nodes less than start
                node = node.right
            else:
                self._stack.append(node)
                node = node.left


class _AsyncRangeIterator(AsyncIterator[PersonRecord]):
    """Async iterator for range queries on AVL Tree (in-memory, no I/O)."""

    def __init__(self, root: Node | None, start: PersonKey | None, end: PersonKey | None) -> None:
        self._iterator = _RangeIterator(root, start, end)

    def __aiter__(self) -> "_AsyncRangeIterator":
        return self

    async def __anext__(self) -> PersonRecord:
        try:
            return next(self._iterator)
        except StopIteration:
            raise StopAsyncIteration from None
