"""Base test case for AVL tree tests"""
# pylint: skip-file

import unittest
import logging

from avl_trees.factory import empty
from avl_trees.avl_tree import tree_stats_
from tests.utils import assert_tree_invariants_tc

# Configure logging for test
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


class TreeTestCase(unittest.TestCase):
    """Base class for tests that leave a valid tree in self.tree"""
    def setUp(self):
        self.tree = empty()

    def tearDown(self):
        tree = getattr(self, 'tree', None)
        if tree is None:
            return

        # raises InvalidStructureError on the first broken node
        tree.validate()

        stats = tree_stats_(tree)
        assert_tree_invariants_tc(self, tree, stats)

        # --- optional invariants ---
        expected_size = getattr(self, 'expected_size', None)
        if expected_size is not None:
            self.assertEqual(
                tree.size(), expected_size,
                f"Tree size {tree.size()} does not match "
                f"expected {expected_size}\n"
                f"Tree structure:\n{tree.print_structure()}"
            )

        expected_keys = getattr(self, 'expected_keys', None)
        if expected_keys is not None:
            keys = list(tree.in_order())
            self.assertEqual(
                keys, sorted(expected_keys),
                f"Keys {keys} do not match expected {sorted(expected_keys)}"
            )

    def insert_all(self, keys):
        for key in keys:
            self.tree = self.tree.insert(key)
            self.tree.validate()
        return self.tree

    def assertShape(self, node, key, left_key=None, right_key=None):
        """Assert a node's key and the keys of its direct children (None for absent)."""
        self.assertIsNotNone(node, f"Expected node {key}, got None")
        self.assertEqual(node.key, key)
        if left_key is None:
            self.assertIsNone(node.left, f"Expected no left child under {key}")
        else:
            self.assertIsNotNone(node.left, f"Expected left child {left_key} under {key}")
            self.assertEqual(node.left.key, left_key)
        if right_key is None:
            self.assertIsNone(node.right, f"Expected no right child under {key}")
        else:
            self.assertIsNotNone(node.right, f"Expected right child {right_key} under {key}")
            self.assertEqual(node.right.key, right_key)
