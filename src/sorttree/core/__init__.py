"""
Core analyzer public API.

Re-exports the pieces callers normally need:
    from sorttree.core import analyze, average_path_length, pruned_node_count
"""

from .analyzer import AlgorithmAnalyzer, OperationMode, SortingRoutine, analyze
from .comparison import (
    OPERATOR_NEGATIONS,
    RELATIONAL_OPERATORS,
    Comparison,
    ComparisonOperator,
)
from .errors import (
    AnalyzerError,
    ContradictionError,
    NondeterminismError,
    UnsupportedOperatorError,
)
from .metrics import (
    TreeStats,
    average_path_length,
    comparison_node_count,
    leaf_count,
    leaf_depths,
    max_path_length,
    min_path_length,
    pruned_node_count,
    result_orders,
    summarize_tree,
)
from .operand import SortableItem, generate_sequential_items, symbol_labels
from .path import DecisionFrame, PathStack
from .tree import (
    ComparisonNode,
    DecisionTreeNode,
    NodeKind,
    ResultNode,
    iter_nodes,
    tree_signature,
    tree_to_dict,
)

__all__ = [
    "AlgorithmAnalyzer",
    "OperationMode",
    "SortingRoutine",
    "analyze",
    "Comparison",
    "ComparisonOperator",
    "RELATIONAL_OPERATORS",
    "OPERATOR_NEGATIONS",
    "AnalyzerError",
    "ContradictionError",
    "NondeterminismError",
    "UnsupportedOperatorError",
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
    "SortableItem",
    "generate_sequential_items",
    "symbol_labels",
    "DecisionFrame",
    "PathStack",
    "DecisionTreeNode",
    "ComparisonNode",
    "ResultNode",
    "NodeKind",
    "iter_nodes",
    "tree_to_dict",
    "tree_signature",
]
