"""Tests for the AVL tree factory functions"""
# pylint: skip-file

import unittest

from avl_trees import AVLTree, create_avl_tree, empty, default_comparator


class TestFactory(unittest.TestCase):
    def test_empty(self):
        tree = empty()
        self.assertIsInstance(tree, AVLTree)
        self.assertTrue(tree.is_empty())
        self.assertIs(tree.comparator, default_comparator)

    def test_empty_with_comparator(self):
        def cmp(a, b):
            return default_comparator(len(a), len(b))

        tree = empty(cmp)
        self.assertIs(tree.comparator, cmp)
        tree = tree.insert("aaa").insert("b").insert("cc").insert("dd")
        self.assertEqual(list(tree), ["b", "cc", "aaa"])

    def test_create_from_keys(self):
        tree = create_avl_tree([9, 3, 7, 3, 1])
        self.assertEqual(list(tree), [1, 3, 7, 9])
        self.assertEqual(tree.size(), 4)
        tree.validate()

    def test_create_from_generator(self):
        tree = create_avl_tree(k * k for k in range(5))
        self.assertEqual(list(tree), [0, 1, 4, 9, 16])

    def test_create_empty(self):
        self.assertTrue(create_avl_tree().is_empty())

    def test_create_with_lambda_comparator(self):
        tree = create_avl_tree(range(5), lambda a, b: b - a)
        self.assertEqual(list(tree), [4, 3, 2, 1, 0])

    def test_create_logs_size_and_height_lazily(self):
        with self.assertLogs("avl_trees.factory", level="DEBUG") as cm:
            create_avl_tree([2, 1, 3])
        record = cm.records[-1]
        self.assertEqual(record.msg, "Created tree of size %d and height %d")
        self.assertEqual(record.args, (3, 2))
        self.assertEqual(record.getMessage(), "Created tree of size 3 and height 2")


if __name__ == "__main__":
    unittest.main()
