"""
Property helpers for validating decision trees.

Public API (stable):
    iter_paths(tree) -> iterator of (steps, leaf)
    path_truths(steps) -> list[Comparison]
    is_path_consistent(truths) -> bool
    is_permutation(a, b) -> bool
    first_inconsistent_path(tree) -> list[tuple[Comparison, bool]] | None
    check_sorting_tree(tree, labels) -> list[str]

A "step" is a (comparison, outcome) pair: one comparison node on a root-to-leaf
path and the branch taken out of it.
"""

from __future__ import annotations

from collections import Counter
from typing import Iterator, List, Optional, Sequence, Tuple

from sorttree.core.comparison import Comparison
from sorttree.core.tree import ComparisonNode, DecisionTreeNode, ResultNode

from .oracle import is_satisfiable, oracle_order

__all__ = [
    "Step",
    "iter_paths",
    "path_truths",
    "is_path_consistent",
    "is_permutation",
    "first_inconsistent_path",
    "check_sorting_tree",
]

Step = Tuple[Comparison, bool]


def iter_paths(tree: Optional[DecisionTreeNode]) -> Iterator[Tuple[List[Step], ResultNode]]:
    """Yield every root-to-leaf path, True branches first."""
    stack: List[Tuple[Optional[DecisionTreeNode], List[Step]]] = [(tree, [])]
    while stack:
        node, steps = stack.pop()
        if node is None:
            continue
        if isinstance(node, ResultNode):
            yield steps, node
        elif isinstance(node, ComparisonNode):
            stack.append((node.right, steps + [(node.comparison, False)]))
            stack.append((node.left, steps + [(node.comparison, True)]))


def path_truths(steps: Sequence[Step]) -> List[Comparison]:
    return [c if outcome else c.negate() for c, outcome in steps]


def is_path_consistent(truths: Sequence[Comparison]) -> bool:
    """True iff no fact appears together with its negation."""
    seen = set(truths)
    return all(t.negate() not in seen for t in seen)


def is_permutation(a: Sequence[str], b: Sequence[str]) -> bool:
    """True iff `a` and `b` hold exactly the same labels."""
    if len(a) != len(b):
        return False
    return Counter(a) == Counter(b)


def first_inconsistent_path(tree: Optional[DecisionTreeNode]) -> Optional[List[Step]]:
    for steps, _leaf in iter_paths(tree):
        if not is_path_consistent(path_truths(steps)):
            return steps
    return None


def check_sorting_tree(tree: Optional[DecisionTreeNode], labels: Sequence[str]) -> List[str]:
    """
    Check that `tree` is the decision tree of a correct sort of `labels`.

    Every path must be consistent, every leaf must be a permutation of
    `labels`, and every leaf must equal the order its path's facts imply.
    Paths whose facts are cyclic are skipped: no input reaches them.

    Returns
    -------
    list[str]
        One message per problem found; empty when the tree is correct.
    """
    problems: List[str] = []
    if tree is None:
        return ["tree is empty"]
    for steps, leaf in iter_paths(tree):
        where = " -> ".join(f"{c}={'T' if o else 'F'}" for c, o in steps) or "<root>"
        truths = path_truths(steps)
        if not is_path_consistent(truths):
            problems.append(f"inconsistent path: {where}")
            continue
        if not is_permutation(leaf.order, labels):
            problems.append(f"leaf {leaf} is not a permutation of {list(labels)}: {where}")
            continue
        if len(labels) < 2 or not is_satisfiable(labels, truths):
            continue
        expected = oracle_order(list(labels), truths)
        if expected is None:
            problems.append(f"path does not determine an order, leaf {leaf}: {where}")
        elif list(leaf.order) != expected:
            problems.append(f"leaf {leaf} != implied order {expected}: {where}")
    return problems
