"""
Oracle for decision-tree correctness.

A leaf of a correct sort's decision tree must hold the one order implied by the
facts established on its path. The oracle derives that order from the path's
relational truths (``A < B``, ``C > A``, ...) by transitive closure, without
looking at what the routine did.

Public API (stable):
    precedence_closure(labels, truths) -> numpy.ndarray
    is_satisfiable(labels, truths) -> bool
    oracle_order(labels, truths) -> list[str] | None
    equals_oracle(order, truths) -> bool

Conventions:
- Equality facts (``==`` / ``!=``) carry no ordering information and are ignored.
- `oracle_order` returns None when the facts do not determine a total order
  (some pair is left incomparable) or contradict each other (a cycle).
- The analyzer prunes only a fact's direct negation, so a routine that asks a
  comparison already implied by transitivity can leave cyclic (unsatisfiable)
  paths in its tree. No input ever reaches those leaves.
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

import numpy as np

from sorttree.core.comparison import Comparison, ComparisonOperator

ORACLE_NAME: str = "transitive_closure"

__all__ = ["ORACLE_NAME", "precedence_closure", "is_satisfiable", "oracle_order", "equals_oracle"]


def precedence_closure(labels: Sequence[str], truths: Iterable[Comparison]) -> np.ndarray:
    """
    Boolean matrix `less` with ``less[i, j]`` iff ``labels[i] < labels[j]``
    follows from `truths` by transitivity.
    """
    n = len(labels)
    index = {label: i for i, label in enumerate(labels)}
    less = np.zeros((n, n), dtype=bool)
    for truth in truths:
        c = truth.normalize()
        if c.operand1 not in index or c.operand2 not in index:
            raise ValueError(f"Fact {truth} mentions an unknown label")
        i, j = index[c.operand1], index[c.operand2]
        if c.operator is ComparisonOperator.LESS_THAN:
            less[i, j] = True
        elif c.operator is ComparisonOperator.GREATER_THAN:
            less[j, i] = True

    # Warshall
    for k in range(n):
        less |= np.outer(less[:, k], less[k, :])
    return less


def is_satisfiable(labels: Sequence[str], truths: Iterable[Comparison]) -> bool:
    """True iff some assignment of distinct values to `labels` makes every relational fact hold."""
    return not precedence_closure(labels, truths).diagonal().any()


def oracle_order(labels: Sequence[str], truths: Iterable[Comparison]) -> Optional[List[str]]:
    """
    Return `labels` in the ascending order implied by `truths`, or None.

    Parameters
    ----------
    labels : sequence of str
        The distinct labels being ordered.
    truths : iterable of Comparison
        Established facts about the labels.
    """
    less = precedence_closure(labels, truths)
    if less.diagonal().any():
        return None
    comparable = less | less.T
    np.fill_diagonal(comparable, True)
    if not comparable.all():
        return None

    # In a total order, an element's rank is the number of elements below it
    ranks = less.sum(axis=0)
    return [labels[int(i)] for i in np.argsort(ranks, kind="stable")]


def equals_oracle(order: Sequence[str], truths: Iterable[Comparison]) -> bool:
    """True iff `order` is exactly the total order implied by `truths`."""
    expected = oracle_order(sorted(order), truths)
    return expected is not None and list(order) == expected
