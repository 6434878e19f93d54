"""
Tests for tree metrics on known reference trees.

Bubble sort on 3 items: 7 comparison nodes, 6 leaves all at depth 3, and 2
pruned branches (the repeated `B > A` / `A > B` comparisons whose True outcome
is already ruled out).

Insertion sort on 3 items: 5 comparison nodes, leaf depths 3, 3, 2, 3, 3, 2,
no pruned branches.
"""

from __future__ import annotations

import math

import pytest

from sorttree.algorithms import bubble_sort, insertion_sort, selection_sort
from sorttree.core.analyzer import analyze
from sorttree.core.comparison import Comparison, ComparisonOperator
from sorttree.core.metrics import (
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
from sorttree.core.tree import ComparisonNode, ResultNode, tree_to_dict


@pytest.fixture(scope="module")
def bubble3():
    return analyze(bubble_sort.sort, 3)


@pytest.fixture(scope="module")
def insertion3():
    return analyze(insertion_sort.sort, 3)


# ------------------------- bubble sort, n = 3 ------------------------- #

def test_bubble_average_path_length(bubble3) -> None:
    assert leaf_depths(bubble3) == [3, 3, 3, 3, 3, 3]
    assert average_path_length(bubble3) == pytest.approx(3.0)


def test_bubble_pruned_count(bubble3) -> None:
    assert pruned_node_count(bubble3) == 2


def test_bubble_node_counts(bubble3) -> None:
    assert comparison_node_count(bubble3) == 7
    assert leaf_count(bubble3) == 6


def test_bubble_result_orders(bubble3) -> None:
    assert result_orders(bubble3) == [
        ("C", "B", "A"),
        ("B", "C", "A"),
        ("B", "A", "C"),
        ("C", "A", "B"),
        ("A", "C", "B"),
        ("A", "B", "C"),
    ]


# ------------------------- insertion sort, n = 3 ------------------------- #

def test_insertion_metrics(insertion3) -> None:
    assert leaf_depths(insertion3) == [3, 3, 2, 3, 3, 2]
    assert average_path_length(insertion3) == pytest.approx(16 / 6)
    assert pruned_node_count(insertion3) == 0
    assert comparison_node_count(insertion3) == 5
    assert min_path_length(insertion3) == 2
    assert max_path_length(insertion3) == 3


def test_summarize_tree(insertion3) -> None:
    stats = summarize_tree(insertion3)
    assert stats.avg_comparisons == pytest.approx(16 / 6)
    assert (stats.min_comparisons, stats.max_comparisons) == (2, 3)
    assert (stats.leaves, stats.comparison_nodes, stats.pruned_nodes) == (6, 5, 0)
    assert set(stats.to_dict()) == {
        "avg_comparisons",
        "min_comparisons",
        "max_comparisons",
        "leaves",
        "comparison_nodes",
        "pruned_nodes",
    }


# ------------------------- general properties ------------------------- #

@pytest.mark.parametrize("n", [2, 3, 4])
def test_insertion_sort_leaf_count_is_factorial(n: int) -> None:
    assert leaf_count(analyze(insertion_sort.sort, n)) == math.factorial(n)


def test_selection_sort_always_makes_same_number_of_comparisons() -> None:
    tree = analyze(selection_sort.sort, 4)
    # n(n-1)/2 comparisons on every path
    assert set(leaf_depths(tree)) == {6}
    assert average_path_length(tree) == pytest.approx(6.0)


def test_single_leaf_tree() -> None:
    tree = ResultNode(("A",))
    assert average_path_length(tree) == 0.0
    assert pruned_node_count(tree) == 0
    assert leaf_count(tree) == 1
    assert max_path_length(tree) == 0


def test_empty_tree() -> None:
    assert average_path_length(None) == 0.0
    assert pruned_node_count(None) == 0
    assert summarize_tree(None).leaves == 0


def test_hand_built_tree() -> None:
    c = Comparison("A", "B", ComparisonOperator.LESS_THAN)
    tree = ComparisonNode(
        c,
        left=ComparisonNode(c, left=ResultNode(("A", "B")), right=None),
        right=ResultNode(("B", "A")),
    )
    assert leaf_depths(tree) == [2, 1]
    assert average_path_length(tree) == pytest.approx(1.5)
    assert pruned_node_count(tree) == 1


# ------------------------- export ------------------------- #

def test_tree_to_dict_marks_pruned_branches(bubble3) -> None:
    d = tree_to_dict(bubble3)
    assert d["type"] == "comparison"
    assert d["text"] == "A > B"
    pruned_parent = d["true"]["false"]
    assert pruned_parent["text"] == "B > A"
    assert pruned_parent["true"] is None
    assert pruned_parent["false"] == {
        "type": "result",
        "text": "[B, A, C]",
        "order": ["B", "A", "C"],
    }
