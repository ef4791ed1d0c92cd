"""Utility functions for testing AVLTree invariants."""

import logging
from avl_trees.avl_tree import (
    AVLTree,
    Stats
)

TREE_FLAGS = (
    "is_search_tree",
    "heights_cached",
    "sizes_cached",
    "is_balanced",
    "within_height_bound",
)

def assert_tree_invariants_tc(tc, t: AVLTree, stats: Stats) -> None:
    """TestCase version: use inside unittest.TestCase methods."""
    for flag in TREE_FLAGS:
        tc.assertTrue(
            getattr(stats, flag),
            f"Invariant failed: {flag} is False\n{t.print_structure()}"
        )

    tc.assertEqual(
        t.size(), stats.node_count,
        f"Invariant failed: size()={t.size()} ≠ node_count={stats.node_count}"
    )
    tc.assertEqual(
        t.height(), stats.height,
        f"Invariant failed: height()={t.height()} ≠ measured height={stats.height}"
    )

    if not t.is_empty():
        tc.assertEqual(
            stats.least_key, t.min(),
            f"Invariant failed: least_key={stats.least_key!r} ≠ min()={t.min()!r}"
        )
        tc.assertEqual(
            stats.greatest_key, t.max(),
            f"Invariant failed: greatest_key={stats.greatest_key!r} ≠ max()={t.max()!r}"
        )


def log_tree_invariants(t: AVLTree, stats: Stats) -> bool:
    """Check all invariants, only logging ERROR messages on failures."""
    ok = True
    for flag in TREE_FLAGS:
        if not getattr(stats, flag):
            logging.error("Invariant failed: %s is False", flag)
            ok = False

    if t.size() != stats.node_count:
        logging.error(
            "Invariant failed: size()=%d ≠ node_count=%d",
            t.size(), stats.node_count
        )
        ok = False
    return ok
