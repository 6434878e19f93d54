"""
Metrics over a finished decision tree.

Public API (stable):
    average_path_length(tree) -> float
    pruned_node_count(tree) -> int
    leaf_depths(tree) -> list[int]
    leaf_count(tree) -> int
    comparison_node_count(tree) -> int
    max_path_length(tree) -> int
    min_path_length(tree) -> int
    result_orders(tree) -> list[tuple[str, ...]]
    summarize_tree(tree) -> TreeStats

Depth of a leaf = number of comparison nodes above it = number of comparisons
the routine makes on that path. A pruned node is a missing child slot of a
comparison node; after an exhaustive search every such slot is a branch proven
impossible.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional, Tuple

import numpy as np

from .tree import ComparisonNode, DecisionTreeNode, ResultNode, iter_nodes

__all__ = [
    "TreeStats",
    "average_path_length",
    "pruned_node_count",
    "leaf_depths",
    "leaf_count",
    "comparison_node_count",
    "max_path_length",
    "min_path_length",
    "result_orders",
    "summarize_tree",
]


def _leaves_with_depth(tree: Optional[DecisionTreeNode]) -> List[Tuple[ResultNode, int]]:
    out: List[Tuple[ResultNode, int]] = []
    stack: List[Tuple[Optional[DecisionTreeNode], int]] = [(tree, 0)]
    while stack:
        node, depth = stack.pop()
        if node is None:
            continue
        if isinstance(node, ResultNode):
            out.append((node, depth))
        elif isinstance(node, ComparisonNode):
            stack.append((node.right, depth + 1))
            stack.append((node.left, depth + 1))
    return out


def leaf_depths(tree: Optional[DecisionTreeNode]) -> List[int]:
    """Depths of all result leaves, left (True) branches first."""
    return [d for _, d in _leaves_with_depth(tree)]


def average_path_length(tree: Optional[DecisionTreeNode]) -> float:
    """Average number of comparisons over every outcome (result leaf) of the tree."""
    depths = leaf_depths(tree)
    if not depths:
        return 0.0
    return float(np.mean(depths))


def pruned_node_count(tree: Optional[DecisionTreeNode]) -> int:
    """Number of missing child slots on comparison nodes."""
    count = 0
    for node in iter_nodes(tree):
        if isinstance(node, ComparisonNode):
            count += (node.left is None) + (node.right is None)
    return count


def leaf_count(tree: Optional[DecisionTreeNode]) -> int:
    return sum(1 for node in iter_nodes(tree) if isinstance(node, ResultNode))


def comparison_node_count(tree: Optional[DecisionTreeNode]) -> int:
    return sum(1 for node in iter_nodes(tree) if isinstance(node, ComparisonNode))


def max_path_length(tree: Optional[DecisionTreeNode]) -> int:
    """Worst-case number of comparisons."""
    depths = leaf_depths(tree)
    return int(max(depths)) if depths else 0


def min_path_length(tree: Optional[DecisionTreeNode]) -> int:
    """Best-case number of comparisons."""
    depths = leaf_depths(tree)
    return int(min(depths)) if depths else 0


def result_orders(tree: Optional[DecisionTreeNode]) -> List[Tuple[str, ...]]:
    """Final orders reached at every leaf, left (True) branches first."""
    return [leaf.order for leaf, _ in _leaves_with_depth(tree)]


@dataclass(frozen=True)
class TreeStats:
    avg_comparisons: float
    min_comparisons: int
    max_comparisons: int
    leaves: int
    comparison_nodes: int
    pruned_nodes: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def summarize_tree(tree: Optional[DecisionTreeNode]) -> TreeStats:
    depths = leaf_depths(tree)
    arr = np.asarray(depths, dtype=np.int64)
    return TreeStats(
        avg_comparisons=float(arr.mean()) if arr.size else 0.0,
        min_comparisons=int(arr.min()) if arr.size else 0,
        max_comparisons=int(arr.max()) if arr.size else 0,
        leaves=int(arr.size),
        comparison_nodes=comparison_node_count(tree),
        pruned_nodes=pruned_node_count(tree),
    )
