"""Persistent AVL tree implementation"""

from __future__ import annotations
import logging
import math
from dataclasses import dataclass
from typing import Any, Iterator, List, Optional, Tuple

from avl_trees.base import (
    AbstractSetDataStructure,
    Comparator,
    InvalidStructureError,
    RetrievalResult,
    default_comparator,
)
from avl_trees.avl_node import (
    AVLNode,
    node_height,
    node_size,
    rebalance,
)
from avl_trees.profiling import (
    track_operation,
    StructureTracker
)

logger = logging.getLogger(__name__)

# Worst-case AVL height is below HEIGHT_BOUND * log2(n + 2)
HEIGHT_BOUND = 1.44

_NO_BOUND = object()


class AVLTree(AbstractSetDataStructure):
    """
    A persistent AVL tree handle.

    The handle holds a root node (None for the empty tree) and the
    comparator ordering its keys. It is never modified: insert() and
    delete() return a new handle that shares every untouched subtree with
    this one, and the old handle stays valid.

    Attributes:
        root (Optional[AVLNode]): The root node, None if the tree is empty.
        comparator (Comparator): Three-way comparison function over the keys.
    """
    __slots__ = ("_root", "_comparator")

    def __init__(
        self,
        comparator: Optional[Comparator] = None,
        root: Optional[AVLNode] = None
    ) -> None:
        if comparator is None:
            comparator = default_comparator
        elif not callable(comparator):
            raise TypeError(
                f"AVLTree(): comparator must be callable, got {type(comparator).__name__}"
            )
        self._root = root
        self._comparator = comparator

    @classmethod
    def empty(cls, comparator: Optional[Comparator] = None) -> AVLTree:
        """Return an empty tree ordered by `comparator`."""
        return cls(comparator)

    @property
    def root(self) -> Optional[AVLNode]:
        return self._root

    @property
    def comparator(self) -> Comparator:
        return self._comparator

    def _with_root(self, root: Optional[AVLNode]) -> AVLTree:
        if root is self._root:
            return self
        return type(self)(self._comparator, root)

    def is_empty(self) -> bool:
        return self._root is None

    def size(self) -> int:
        return node_size(self._root)

    def height(self) -> int:
        return node_height(self._root)

    def __len__(self) -> int:
        return node_size(self._root)

    def __bool__(self) -> bool:
        return self._root is not None

    def __str__(self):
        if self.is_empty():
            return "Empty AVLTree"
        return f"AVLTree(size={self.size()}, root={self._root!r})"

    __repr__ = __str__

    # Public API
    @track_operation
    def insert(self, key: Any) -> AVLTree:
        """
        Public method (O(log n)): Insert a key into the tree.

        Only the nodes on the search path (plus those created by rotations)
        are rebuilt. Inserting a key that is already present returns this
        handle unchanged.

        Args:
            key: The key to be inserted.
        Returns:
            AVLTree: A tree containing the key.
        """
        return self._with_root(_insert(self._root, key, self._comparator))

    @track_operation
    def delete(self, key: Any) -> AVLTree:
        """
        Public method (O(log n)): Delete a key from the tree.

        Deleting an absent key is not an error; this handle is returned
        unchanged.

        Args:
            key: The key to be deleted.
        Returns:
            AVLTree: A tree that does not contain the key.
        """
        root = _delete(self._root, key, self._comparator)
        if root is self._root:
            logger.debug("delete(): key %r not present", key)
        return self._with_root(root)

    def contains(self, key: Any) -> bool:
        return self._find(key) is not None

    def __contains__(self, key: Any) -> bool:
        return self.contains(key)

    def get(self, key: Any) -> Optional[Any]:
        """Return the stored key equal to `key`, or None if absent."""
        node = self._find(key)
        return None if node is None else node.key

    def _find(self, key: Any) -> Optional[AVLNode]:
        cmp = self._comparator
        node = self._root
        while node is not None:
            c = cmp(key, node.key)
            if c < 0:
                node = node.left
            elif c > 0:
                node = node.right
            else:
                return node
        return None

    def retrieve(self, key: Any) -> RetrievalResult:
        """
        Searches for `key` and its in-order successor in O(log n).

        Args:
            key: The key to search for.

        Returns:
            RetrievalResult: Contains:
                found_key (Optional[Any]): The stored key equal to `key`, or None if not found.
                next_key (Optional[Any]): The smallest stored key greater than `key`, or None.
        """
        cmp = self._comparator
        node = self._root
        next_key = None

        while node is not None:
            c = cmp(key, node.key)
            if c < 0:
                next_key = node.key
                node = node.left
            elif c > 0:
                node = node.right
            else:
                if node.has_right():
                    next_key = _min_node(node.right).key
                return RetrievalResult(node.key, next_key)

        return RetrievalResult(None, next_key)

    def min(self) -> Optional[Any]:
        if self._root is None:
            return None
        return _min_node(self._root).key

    def max(self) -> Optional[Any]:
        if self._root is None:
            return None
        return _max_node(self._root).key

    def range(self, lo: Any, hi: Any) -> List[Any]:
        """
        Return the keys k with lo <= k <= hi in ascending order.

        Subtrees that cannot hold a key in the range are never visited.
        An inverted range (lo > hi) yields an empty list.
        """
        out: List[Any] = []
        cmp = self._comparator
        if cmp(lo, hi) > 0:
            return out
        _collect_range(self._root, lo, hi, cmp, out)
        return out

    def in_order(self) -> Iterator[Any]:
        """Lazily yield all keys in ascending comparator order."""
        stack: List[AVLNode] = []
        node = self._root
        while stack or node is not None:
            while node is not None:
                stack.append(node)
                node = node.left
            node = stack.pop()
            yield node.key
            node = node.right

    def __iter__(self) -> Iterator[Any]:
        return self.in_order()

    def __reversed__(self) -> Iterator[Any]:
        stack: List[AVLNode] = []
        node = self._root
        while stack or node is not None:
            while node is not None:
                stack.append(node)
                node = node.right
            node = stack.pop()
            yield node.key
            node = node.left

    def select(self, index: int) -> Any:
        """
        Return the key at position `index` of the ascending key sequence.

        Negative indices count from the end, as for lists.

        Raises:
            IndexError: If the index is out of range.
        """
        n = node_size(self._root)
        if index < 0:
            index += n
        if not 0 <= index < n:
            raise IndexError(f"select(): index out of range for tree of size {n}")

        node = self._root
        while True:
            left_size = node_size(node.left)
            if index < left_size:
                node = node.left
            elif index > left_size:
                index -= left_size + 1
                node = node.right
            else:
                return node.key

    def rank(self, key: Any) -> int:
        """Return the number of keys strictly less than `key`."""
        cmp = self._comparator
        node = self._root
        count = 0
        while node is not None:
            c = cmp(key, node.key)
            if c < 0:
                node = node.left
            elif c > 0:
                count += node_size(node.left) + 1
                node = node.right
            else:
                return count + node_size(node.left)
        return count

    def __eq__(self, other: object) -> bool:
        """
        Two trees are equal when they hold the same keys, compared with
        this tree's comparator. Internal shapes may differ.
        """
        if not isinstance(other, AVLTree):
            return NotImplemented
        if self.size() != other.size():
            return False
        cmp = self._comparator
        return all(cmp(a, b) == 0 for a, b in zip(self.in_order(), other.in_order()))

    __hash__ = None

    def validate(self) -> None:
        """
        Walk the whole tree and check every structural invariant.

        Raises:
            InvalidStructureError: For the first node found violating BST
                order, the cached height or size, the AVL balance, or
                appearing twice under the root.
        """
        try:
            _validate_node(self._root, self._comparator, _NO_BOUND, _NO_BOUND, set())
        except InvalidStructureError as e:
            logger.error("validate(): %s", e)
            raise

    @staticmethod
    def get_structure_report() -> str:
        """Node allocations per insert/delete and rotation counts, once tracking is enabled."""
        return StructureTracker.get_instance().report()

    @staticmethod
    def reset_structure_metrics() -> None:
        StructureTracker.get_instance().reset()

    def print_structure(self, indent: int = 0, max_depth: Optional[int] = None) -> str:
        prefix = ' ' * indent
        if self.is_empty():
            return f"{prefix}Empty {self.__class__.__name__}"

        result: List[str] = []

        def _render(node: Optional[AVLNode], label: str, level: int) -> None:
            pad = prefix + ' ' * (4 * level)
            if node is None:
                result.append(f"{pad}{label}Empty")
                return
            if max_depth is not None and level > max_depth:
                result.append(f"{pad}{label}... (max depth reached)")
                return
            result.append(
                f"{pad}{label}{node.__class__.__name__}"
                f"(key={node.key!r}, height={node.height}, size={node.size})"
            )
            if not node.is_leaf():
                _render(node.left, "Left: ", level + 1)
                _render(node.right, "Right: ", level + 1)

        _render(self._root, "", 0)
        return "\n".join(result)


# Recursive kernels. Each returns the new subtree root, or the very same
# node object when nothing below it changed.

def _insert(node: Optional[AVLNode], key: Any, cmp: Comparator) -> AVLNode:
    if node is None:
        return AVLNode(key)

    c = cmp(key, node.key)
    if c < 0:
        left = _insert(node.left, key, cmp)
        if left is node.left:
            return node
        return rebalance(AVLNode(node.key, left, node.right))
    if c > 0:
        right = _insert(node.right, key, cmp)
        if right is node.right:
            return node
        return rebalance(AVLNode(node.key, node.left, right))

    # duplicate
    return node


def _delete(node: Optional[AVLNode], key: Any, cmp: Comparator) -> Optional[AVLNode]:
    if node is None:
        return None

    c = cmp(key, node.key)
    if c < 0:
        left = _delete(node.left, key, cmp)
        if left is node.left:
            return node
        return rebalance(AVLNode(node.key, left, node.right))
    if c > 0:
        right = _delete(node.right, key, cmp)
        if right is node.right:
            return node
        return rebalance(AVLNode(node.key, node.left, right))

    left, right = node.left, node.right
    if left is None:
        return right
    if right is None:
        return left

    # Two children: lift from the taller side, ties go to the successor.
    if left.height > right.height:
        lifted, left = _pop_max(left)
    else:
        lifted, right = _pop_min(right)
    return rebalance(AVLNode(lifted, left, right))


def _pop_min(node: AVLNode) -> Tuple[Any, Optional[AVLNode]]:
    """Remove the minimum of a non-empty subtree; return (min key, new subtree)."""
    if not node.has_left():
        return node.key, node.right
    key, left = _pop_min(node.left)
    return key, rebalance(AVLNode(node.key, left, node.right))


def _pop_max(node: AVLNode) -> Tuple[Any, Optional[AVLNode]]:
    """Remove the maximum of a non-empty subtree; return (max key, new subtree)."""
    if not node.has_right():
        return node.key, node.left
    key, right = _pop_max(node.right)
    return key, rebalance(AVLNode(node.key, node.left, right))


def _min_node(node: AVLNode) -> AVLNode:
    while node.has_left():
        node = node.left
    return node


def _max_node(node: AVLNode) -> AVLNode:
    while node.has_right():
        node = node.right
    return node


def _collect_range(
    node: Optional[AVLNode], lo: Any, hi: Any, cmp: Comparator, out: List[Any]
) -> None:
    if node is None:
        return
    c_lo = cmp(node.key, lo)
    c_hi = cmp(node.key, hi)
    if c_lo > 0:
        _collect_range(node.left, lo, hi, cmp, out)
    if c_lo >= 0 and c_hi <= 0:
        out.append(node.key)
    if c_hi < 0:
        _collect_range(node.right, lo, hi, cmp, out)


def _validate_node(node: Optional[AVLNode], cmp: Comparator, lo: Any, hi: Any, seen: set) -> None:
    """Post-order check of the subtree; `lo`/`hi` are exclusive key bounds inherited from ancestors."""
    if node is None:
        return

    if id(node) in seen:
        raise InvalidStructureError(node.key, "acyclic", "node reachable twice from the root")
    seen.add(id(node))

    key = node.key
    if lo is not _NO_BOUND and cmp(key, lo) <= 0:
        raise InvalidStructureError(key, "bst-order", f"key not greater than ancestor {lo!r}")
    if hi is not _NO_BOUND and cmp(key, hi) >= 0:
        raise InvalidStructureError(key, "bst-order", f"key not less than ancestor {hi!r}")

    _validate_node(node.left, cmp, lo, key, seen)
    _validate_node(node.right, cmp, key, hi, seen)

    left_h, right_h = node_height(node.left), node_height(node.right)
    expected_height = 1 + max(left_h, right_h)
    if node.height != expected_height:
        raise InvalidStructureError(
            key, "height-cache", f"cached {node.height}, expected {expected_height}"
        )
    expected_size = 1 + node_size(node.left) + node_size(node.right)
    if node.size != expected_size:
        raise InvalidStructureError(
            key, "size-cache", f"cached {node.size}, expected {expected_size}"
        )
    if abs(left_h - right_h) > 1:
        raise InvalidStructureError(
            key, "avl-balance", f"balance factor {left_h - right_h}"
        )


@dataclass
class Stats:
    height: int
    node_count: int
    least_key: Optional[Any]
    greatest_key: Optional[Any]
    is_search_tree: bool
    heights_cached: bool
    sizes_cached: bool
    is_balanced: bool

    @property
    def within_height_bound(self) -> bool:
        if self.node_count == 0:
            return self.height == 0
        return self.height <= HEIGHT_BOUND * math.log2(self.node_count + 2)


def tree_stats_(t: AVLTree) -> Stats:
    """
    Returns aggregated statistics for an AVL tree in **O(n)** time.

    Heights and counts are measured from the actual node graph, not from
    the cached values, so the flags report cache corruption instead of
    trusting it. Never raises on a malformed tree.
    """
    return _node_stats(t.root, t.comparator)


def _node_stats(node: Optional[AVLNode], cmp: Comparator) -> Stats:
    # ---------- empty subtree ---------------------------------
    if node is None:
        return Stats(height=0,
                     node_count=0,
                     least_key=None,
                     greatest_key=None,
                     is_search_tree=True,
                     heights_cached=True,
                     sizes_cached=True,
                     is_balanced=True)

    left = _node_stats(node.left, cmp)
    right = _node_stats(node.right, cmp)
    key = node.key

    height = 1 + max(left.height, right.height)
    node_count = 1 + left.node_count + right.node_count

    is_search_tree = left.is_search_tree and right.is_search_tree
    if left.node_count and cmp(left.greatest_key, key) >= 0:
        is_search_tree = False
    if right.node_count and cmp(right.least_key, key) <= 0:
        is_search_tree = False

    return Stats(
        height=height,
        node_count=node_count,
        least_key=left.least_key if left.node_count else key,
        greatest_key=right.greatest_key if right.node_count else key,
        is_search_tree=is_search_tree,
        heights_cached=left.heights_cached and right.heights_cached and node.height == height,
        sizes_cached=left.sizes_cached and right.sizes_cached and node.size == node_count,
        is_balanced=left.is_balanced and right.is_balanced and abs(left.height - right.height) <= 1,
    )
