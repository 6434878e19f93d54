"""
Tests for the search engine.

What we check:
- The exact decision tree of bubble sort and insertion sort on 3 items
- Zero- and one-element arrays give a single result leaf
- Determinism: two analyses give structurally identical trees
- Pruning: a forced comparison creates one node with one pruned branch
- Contradiction / nondeterminism faults abort the analysis
- `<=` / `>=` in the routine abort the analysis
- No node is left believing it has a live frame once the search is done
"""

from __future__ import annotations

from typing import List

import pytest

from sorttree.algorithms import bubble_sort, insertion_sort, selection_sort
from sorttree.core.analyzer import AlgorithmAnalyzer, OperationMode, analyze
from sorttree.core.comparison import Comparison, ComparisonOperator
from sorttree.core.errors import (
    ContradictionError,
    NondeterminismError,
    UnsupportedOperatorError,
)
from sorttree.core.path import DecisionFrame
from sorttree.core.tree import ComparisonNode, ResultNode, iter_nodes, tree_signature


# ------------------------- helpers ------------------------- #

def leaf(*labels: str):
    return ("result", tuple(labels))


def node(text: str, left, right):
    return ("comparison", text, left, right)


BUBBLE_3 = node(
    "A > B",
    node(
        "A > C",
        node("B > C", leaf("C", "B", "A"), leaf("B", "C", "A")),
        node("B > A", None, leaf("B", "A", "C")),
    ),
    node(
        "B > C",
        node("A > C", leaf("C", "A", "B"), leaf("A", "C", "B")),
        node("A > B", None, leaf("A", "B", "C")),
    ),
)

INSERTION_3 = node(
    "A > B",
    node(
        "A > C",
        node("B > C", leaf("C", "B", "A"), leaf("B", "C", "A")),
        leaf("B", "A", "C"),
    ),
    node(
        "B > C",
        node("A > C", leaf("C", "A", "B"), leaf("A", "C", "B")),
        leaf("A", "B", "C"),
    ),
)


# ------------------------- reference trees ------------------------- #

def test_bubble_sort_three_items() -> None:
    assert tree_signature(analyze(bubble_sort.sort, 3)) == BUBBLE_3


def test_insertion_sort_three_items() -> None:
    assert tree_signature(analyze(insertion_sort.sort, 3)) == INSERTION_3


def test_selection_sort_two_items() -> None:
    tree = analyze(selection_sort.sort, 2)
    assert tree_signature(tree) == node("A > B", leaf("B", "A"), leaf("A", "B"))


def test_root_is_comparison_node_with_text() -> None:
    tree = analyze(bubble_sort.sort, 3)
    assert isinstance(tree, ComparisonNode)
    assert tree.is_comparison and not tree.is_result
    assert str(tree) == "A > B"
    assert str(tree.right.right.right) == "[A, B, C]"


# ------------------------- trivial sizes ------------------------- #

@pytest.mark.parametrize("n, expected", [(0, ()), (1, ("A",))])
def test_no_comparisons_gives_single_leaf(n: int, expected) -> None:
    tree = analyze(bubble_sort.sort, n)
    assert isinstance(tree, ResultNode)
    assert tree.is_result
    assert tree.order == expected


def test_routine_that_never_compares() -> None:
    def reverse(items: List) -> None:
        items.reverse()

    tree = analyze(reverse, 3)
    assert isinstance(tree, ResultNode)
    assert tree.order == ("C", "B", "A")


# ------------------------- determinism ------------------------- #

@pytest.mark.parametrize("algo", [bubble_sort.sort, insertion_sort.sort, selection_sort.sort])
def test_analysis_is_deterministic(algo) -> None:
    assert tree_signature(analyze(algo, 4)) == tree_signature(analyze(algo, 4))


def test_initial_order_changes_leaves_not_validity() -> None:
    tree = analyze(insertion_sort.sort, 2, initial_order=[1, 0])
    assert tree_signature(tree) == node("B > A", leaf("A", "B"), leaf("B", "A"))


# ------------------------- pruning ------------------------- #

def test_forced_comparison_has_single_branch() -> None:
    def ask_twice(items: List) -> None:
        if items[0] > items[1]:
            pass
        if items[1] > items[0]:
            pass

    tree = analyze(ask_twice, 2)
    assert tree_signature(tree) == node(
        "A > B",
        node("B > A", None, leaf("A", "B")),
        node("B > A", leaf("A", "B"), None),
    )


def test_forced_comparison_pushes_exactly_one_frame() -> None:
    analyzer = AlgorithmAnalyzer(bubble_sort.sort, 2)
    a_gt_b = Comparison("A", "B", ComparisonOperator.GREATER_THAN)
    assert analyzer.compare(a_gt_b) is True
    assert len(analyzer.path) == 1
    # B > A is already settled by A > B; only False is possible
    assert analyzer.compare(Comparison("B", "A", ComparisonOperator.GREATER_THAN)) is False
    assert len(analyzer.path) == 2
    top = analyzer.path.peek()
    assert top.outcome is False
    assert top.node.left is None


# ------------------------- faults ------------------------- #

def test_contradiction_when_no_outcome_is_consistent() -> None:
    analyzer = AlgorithmAnalyzer(bubble_sort.sort, 2)
    c = Comparison("A", "B", ComparisonOperator.GREATER_THAN)
    # Force an impossible path: both A > B and its negation established
    analyzer.path.push(DecisionFrame.new(c, True))
    analyzer.path.push(DecisionFrame.new(c, False))
    with pytest.raises(ContradictionError) as excinfo:
        analyzer.compare(c)
    assert excinfo.value.comparison == c
    assert excinfo.value.path == [True, False]


def test_nondeterministic_routine_is_detected() -> None:
    runs = {"count": 0}

    def flaky(items: List) -> None:
        runs["count"] += 1
        # Which pair gets compared depends on hidden state, not on outcomes
        if runs["count"] % 2:
            if items[0] > items[1]:
                items[0], items[1] = items[1], items[0]
        else:
            if items[1] > items[2]:
                items[1], items[2] = items[2], items[1]

    with pytest.raises(ContradictionError):
        analyze(flaky, 3)


def test_routine_that_stops_comparing_on_replay() -> None:
    runs = {"count": 0}

    def once(items: List) -> None:
        runs["count"] += 1
        if runs["count"] == 1:
            items[0] > items[1]  # noqa: B015

    with pytest.raises(NondeterminismError):
        analyze(once, 2)


@pytest.mark.parametrize("op", ["<=", ">="])
def test_non_strict_operator_aborts(op: str) -> None:
    def uses_non_strict(items: List) -> None:
        if op == "<=":
            items[0] <= items[1]  # noqa: B015
        else:
            items[0] >= items[1]  # noqa: B015

    with pytest.raises(UnsupportedOperatorError):
        analyze(uses_non_strict, 2)


# ------------------------- bookkeeping ------------------------- #

def test_no_live_frames_after_analysis() -> None:
    analyzer = AlgorithmAnalyzer(bubble_sort.sort, 4)
    tree = analyzer.analyze()
    assert len(analyzer.path) == 0
    assert all(
        n.active_depth is None for n in iter_nodes(tree) if isinstance(n, ComparisonNode)
    )


def test_counters() -> None:
    analyzer = AlgorithmAnalyzer(bubble_sort.sort, 3)
    analyzer.analyze()
    # One routine run per leaf
    assert analyzer.paths_explored == 6
    assert analyzer.comparisons_handled == 6 * 3
    assert analyzer.mode in (OperationMode.EXPLORATORY, OperationMode.STATE_RESTORATION)


# ------------------------- argument validation ------------------------- #

@pytest.mark.parametrize("size", [-1, 2.0, True, "3"])
def test_bad_array_size(size) -> None:
    with pytest.raises(ValueError):
        AlgorithmAnalyzer(bubble_sort.sort, size)


def test_bad_initial_order_length() -> None:
    with pytest.raises(ValueError):
        AlgorithmAnalyzer(bubble_sort.sort, 3, initial_order=[0, 1])


def test_algorithm_must_be_callable() -> None:
    with pytest.raises(ValueError):
        AlgorithmAnalyzer("bubble_sort", 3)  # type: ignore[arg-type]
