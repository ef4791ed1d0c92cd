"""
Persistent AVL trees.

Immutable, path-copying AVL trees ordered by a caller supplied comparator.
"""

from avl_trees.base import (
    InvalidStructureError,
    RetrievalResult,
    default_comparator,
)
from avl_trees.avl_node import AVLNode
from avl_trees.avl_tree import AVLTree, Stats, tree_stats_
from avl_trees.item import Item, item_comparator
from avl_trees.factory import empty, create_avl_tree

__all__ = [
    'AVLNode',
    'AVLTree',
    'InvalidStructureError',
    'Item',
    'RetrievalResult',
    'Stats',
    'create_avl_tree',
    'default_comparator',
    'empty',
    'item_comparator',
    'tree_stats_',
]
