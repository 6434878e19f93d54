"""
Validation utilities public API.

Re-exports:
    - Oracle:
        ORACLE_NAME
        oracle_order
        precedence_closure
        is_satisfiable
        equals_oracle

    - Property checks:
        iter_paths
        path_truths
        is_path_consistent
        is_permutation
        first_inconsistent_path
        check_sorting_tree
"""

from .oracle import (
    ORACLE_NAME,
    equals_oracle,
    is_satisfiable,
    oracle_order,
    precedence_closure,
)
from .properties import (
    Step,
    check_sorting_tree,
    first_inconsistent_path,
    is_path_consistent,
    is_permutation,
    iter_paths,
    path_truths,
)

__all__ = [
    "ORACLE_NAME",
    "oracle_order",
    "precedence_closure",
    "is_satisfiable",
    "equals_oracle",
    "Step",
    "iter_paths",
    "path_truths",
    "is_path_consistent",
    "is_permutation",
    "first_inconsistent_path",
    "check_sorting_tree",
]
