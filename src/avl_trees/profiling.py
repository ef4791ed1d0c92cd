"""Structural cost tracking for AVL tree operations.

Counts what path copying actually costs: how many nodes each public
operation allocates and which rotations rebalancing performs.
"""

import functools
from collections import Counter, defaultdict
from dataclasses import dataclass
from typing import Callable, Dict, Optional

ROTATION_KINDS = ("LL", "RR", "LR", "RL")


@dataclass
class OperationMetrics:
    """Node allocations of a single tree operation across all its calls."""
    call_count: int = 0
    nodes_allocated: int = 0
    max_nodes_allocated: int = 0
    no_op_count: int = 0

    def add_call(self, allocated: int) -> None:
        self.call_count += 1
        self.nodes_allocated += allocated
        self.max_nodes_allocated = max(self.max_nodes_allocated, allocated)
        if allocated == 0:
            self.no_op_count += 1

    @property
    def avg_nodes_allocated(self) -> float:
        return self.nodes_allocated / self.call_count if self.call_count > 0 else 0

    def __str__(self) -> str:
        return (f"Calls: {self.call_count}, "
                f"Nodes: {self.nodes_allocated}, "
                f"Avg: {self.avg_nodes_allocated:.2f}, "
                f"Max: {self.max_nodes_allocated}, "
                f"No-ops: {self.no_op_count}")


class StructureTracker:
    """
    Central collector of node allocations and rotations.

    AVLNode construction and rebalance() report here while the tracker is
    enabled. It is off until enable() is called, so normal use only pays
    for a flag check.
    """

    _instance = None

    @classmethod
    def get_instance(cls) -> 'StructureTracker':
        """Singleton accessor."""
        if cls._instance is None:
            cls._instance = StructureTracker()
        return cls._instance

    def __init__(self):
        self.enabled = False
        self.nodes_allocated = 0
        self.rotations: Counter = Counter()
        self.operations: Dict[str, OperationMetrics] = defaultdict(OperationMetrics)

    def record_allocation(self) -> None:
        self.nodes_allocated += 1

    def record_rotation(self, kind: str) -> None:
        self.rotations[kind] += 1

    def reset(self) -> None:
        self.nodes_allocated = 0
        self.rotations.clear()
        self.operations.clear()

    def enable(self) -> None:
        self.enabled = True

    def disable(self) -> None:
        self.enabled = False

    def report(self) -> str:
        """Tabular summary of allocations per operation and rotations per kind."""
        if not self.operations and not self.rotations:
            return "No structure data collected."

        lines = ["Structure Metrics:"]
        lines.append("-" * 72)
        lines.append(f"{'Operation':<30} {'Calls':>8} {'Nodes':>10} {'Avg':>10} {'Max':>6} {'No-op':>6}")
        lines.append("-" * 72)
        for name, m in sorted(self.operations.items(), key=lambda x: x[1].nodes_allocated, reverse=True):
            lines.append(f"{name:<30} {m.call_count:>8} {m.nodes_allocated:>10} "
                         f"{m.avg_nodes_allocated:>10.2f} {m.max_nodes_allocated:>6} {m.no_op_count:>6}")
        lines.append("-" * 72)
        lines.append("Rotations: " + ", ".join(
            f"{kind}={self.rotations.get(kind, 0)}" for kind in ROTATION_KINDS
        ))
        return "\n".join(lines)


def track_operation(method: Optional[Callable] = None, *,
                    tag: Optional[str] = None) -> Callable:
    """
    Decorator recording how many nodes a tree operation allocates.

    Nested tracked calls are counted in both the inner and the outer
    operation.

    Args:
        method: The method to track
        tag: Optional custom tag to use instead of the qualified method name
    """
    def decorator(func):
        name = tag or func.__qualname__

        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            tracker = StructureTracker.get_instance()
            if not tracker.enabled:
                return func(*args, **kwargs)

            start = tracker.nodes_allocated
            result = func(*args, **kwargs)
            tracker.operations[name].add_call(tracker.nodes_allocated - start)
            return result
        return wrapper

    # Handle both @track_operation and @track_operation(tag="name") forms
    if method is None:
        return decorator
    return decorator(method)
