# -*- coding: utf-8 -*-
# ------------------------------------------------------------------------------
#
#   Copyright 2025 Jannik Hehemann
#
#   Licensed under the Apache License, Version 2.0 (the "License");
#   you may not use this file except in compliance with the License.
#   You may obtain a copy of the License at
#
#       http://www.apache.org/licenses/LICENSE-2.0
#
#   Unless required by applicable law or agreed to in writing, software
#   distributed under the License is distributed on an "AS IS" BASIS,
#   WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
#   See the License for the specific language governing permissions and
#   limitations under the License.
#
# ------------------------------------------------------------------------------

"""AVL node and balancing kernel"""

from __future__ import annotations
import logging
from typing import Any, Optional

from avl_trees.profiling import StructureTracker

logger = logging.getLogger(__name__)

_tracker = StructureTracker.get_instance()

DEBUG = False


class AVLNode:
    """
    An immutable vertex of an AVL tree.

    Height and size are derived from the children when the node is
    constructed and never change afterwards. Subtrees are shared by
    reference between tree versions, so a node must never be modified.

    Attributes:
        key: The key stored at this vertex.
        left (Optional[AVLNode]): Subtree holding the keys less than `key`.
        right (Optional[AVLNode]): Subtree holding the keys greater than `key`.
        height (int): 1 for a leaf, otherwise 1 + the taller child's height.
        size (int): Number of nodes in the subtree rooted here.
    """
    __slots__ = ("key", "left", "right", "height", "size")

    def __init__(
        self,
        key: Any,
        left: Optional[AVLNode] = None,
        right: Optional[AVLNode] = None
    ) -> None:
        set_attr = object.__setattr__
        set_attr(self, "key", key)
        set_attr(self, "left", left)
        set_attr(self, "right", right)
        set_attr(self, "height", 1 + max(node_height(left), node_height(right)))
        set_attr(self, "size", 1 + node_size(left) + node_size(right))
        if _tracker.enabled:
            _tracker.record_allocation()

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def has_left(self) -> bool:
        return self.left is not None

    def has_right(self) -> bool:
        return self.right is not None

    def is_leaf(self) -> bool:
        return self.left is None and self.right is None

    def __repr__(self) -> str:
        return (f"{type(self).__name__}(key={self.key!r}, "
                f"height={self.height}, size={self.size})")


def node_height(node: Optional[AVLNode]) -> int:
    """Height of a subtree; an absent subtree has height 0."""
    return 0 if node is None else node.height


def node_size(node: Optional[AVLNode]) -> int:
    """Number of nodes in a subtree; an absent subtree has size 0."""
    return 0 if node is None else node.size


def balance_factor(node: AVLNode) -> int:
    """
    Height difference of the node's children, left minus right.

    Values -1, 0 and +1 mean balanced. +2 is left-heavy and -2 is
    right-heavy; both are transient states fixed by rebalance().
    """
    return node_height(node.left) - node_height(node.right)


def rotate_right(node: AVLNode) -> AVLNode:
    """
    Right rotation around `node`, which must have a left child.

          X            L
         / \\          / \\
        L   c   ->   a   X
       / \\              / \\
      a   b            b   c
    """
    pivot = node.left
    return AVLNode(pivot.key, pivot.left, AVLNode(node.key, pivot.right, node.right))


def rotate_left(node: AVLNode) -> AVLNode:
    """Left rotation around `node`, which must have a right child. Mirror of rotate_right()."""
    pivot = node.right
    return AVLNode(pivot.key, AVLNode(node.key, node.left, pivot.left), pivot.right)


def rebalance(node: AVLNode) -> AVLNode:
    """
    Restore the AVL balance at `node`, whose children are already balanced
    and whose balance factor is within [-2, +2].

    Returns:
        AVLNode: `node` itself when it is balanced, otherwise the root of
        the rotated subtree holding the same in-order key sequence.
    """
    factor = balance_factor(node)
    if -1 <= factor <= 1:
        return node

    if factor > 1:
        if balance_factor(node.left) < 0:
            kind = "LR"
            node = AVLNode(node.key, rotate_left(node.left), node.right)
        else:
            kind = "LL"
        rotated = rotate_right(node)
    else:
        if balance_factor(node.right) > 0:
            kind = "RL"
            node = AVLNode(node.key, node.left, rotate_right(node.right))
        else:
            kind = "RR"
        rotated = rotate_left(node)

    if DEBUG:
        logger.debug("%s rotation at key %r", kind, node.key)
    if _tracker.enabled:
        _tracker.record_rotation(kind)
    return rotated
