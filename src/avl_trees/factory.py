"""Factory for the creation of AVL trees"""

from typing import Any, Iterable, Optional
import logging

from avl_trees.base import Comparator
from avl_trees.avl_tree import AVLTree

# Configure logging
logger = logging.getLogger(__name__)
if not logger.handlers:
    handler = logging.StreamHandler()
    formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    logger.setLevel(logging.INFO)


def empty(comparator: Optional[Comparator] = None) -> AVLTree:
    """
    Create a new empty AVLTree.

    Args:
        comparator: Three-way comparison function over the keys. Natural
            ordering is used when omitted.

    Returns:
        An empty AVLTree ordered by `comparator`
    """
    tree = AVLTree.empty(comparator)
    logger.debug("Created empty tree with comparator %r", tree.comparator)
    return tree


def create_avl_tree(
    keys: Iterable[Any] = (),
    comparator: Optional[Comparator] = None
) -> AVLTree:
    """
    Create an AVLTree holding `keys`, inserted one by one in iteration order.

    Duplicate keys collapse into one entry.

    Args:
        keys: The keys to insert.
        comparator: Three-way comparison function over the keys.

    Returns:
        A new AVLTree containing every key
    """
    tree = empty(comparator)
    tree_insert = AVLTree.insert
    for key in keys:
        tree = tree_insert(tree, key)
    logger.debug("Created tree of size %d and height %d", tree.size(), tree.height())
    return tree
