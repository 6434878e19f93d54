"""
Tests for the comparison model: negation, normalization, equality/hashing.
"""

from __future__ import annotations

import pytest
from hypothesis import assume, given, strategies as st

from sorttree.core.comparison import (
    OPERATOR_NEGATIONS,
    Comparison,
    ComparisonOperator,
)
from sorttree.core.errors import UnsupportedOperatorError

LT = ComparisonOperator.LESS_THAN
GT = ComparisonOperator.GREATER_THAN
EQ = ComparisonOperator.EQUAL
NE = ComparisonOperator.NOT_EQUAL

labels = st.sampled_from(["A", "B", "C", "D", "AA"])
operators = st.sampled_from(list(ComparisonOperator))
comparisons = st.builds(Comparison, labels, labels, operators)


# ------------------------- negation ------------------------- #

@pytest.mark.parametrize(
    "op, negated",
    [(LT, GT), (GT, LT), (EQ, NE), (NE, EQ)],
)
def test_negation_table(op: ComparisonOperator, negated: ComparisonOperator) -> None:
    assert OPERATOR_NEGATIONS[op] is negated
    c = Comparison("A", "B", op)
    assert c.negate().operator is negated
    assert (c.negate().operand1, c.negate().operand2) == ("A", "B")


@given(comparisons)
def test_negation_is_involutive(c: Comparison) -> None:
    assert c.negate().negate() == c
    assert c.negate() != c


# ------------------------- normalization ------------------------- #

def test_normalize_swaps_and_flips_relational() -> None:
    n = Comparison("C", "A", GT).normalize()
    assert (n.operand1, n.operand2, n.operator) == ("A", "C", LT)


def test_normalize_keeps_equality_operators() -> None:
    n = Comparison("C", "A", NE).normalize()
    assert (n.operand1, n.operand2, n.operator) == ("A", "C", NE)
    n = Comparison("B", "A", EQ).normalize()
    assert (n.operand1, n.operand2, n.operator) == ("A", "B", EQ)


def test_already_normal_is_unchanged() -> None:
    c = Comparison("A", "B", GT)
    assert c.normalize() is c


@given(comparisons)
def test_normalize_is_idempotent(c: Comparison) -> None:
    once = c.normalize()
    twice = once.normalize()
    assert (once.operand1, once.operand2, once.operator) == (twice.operand1, twice.operand2, twice.operator)


# ------------------------- equality & hashing ------------------------- #

def test_equal_regardless_of_direction() -> None:
    assert Comparison("A", "B", GT) == Comparison("B", "A", LT)
    assert Comparison("A", "B", NE) == Comparison("B", "A", NE)
    assert Comparison("A", "B", GT) != Comparison("B", "A", GT)
    assert len({Comparison("A", "B", GT), Comparison("B", "A", LT)}) == 1


@given(comparisons)
def test_equal_comparisons_hash_equal(c: Comparison) -> None:
    assume(c.operand1 != c.operand2)
    swapped = Comparison(c.operand2, c.operand1, c.operator)
    if c.operator in (LT, GT):
        swapped = swapped.negate()
    assert swapped == c
    assert hash(swapped) == hash(c)


def test_not_equal_to_other_types() -> None:
    assert Comparison("A", "B", LT) != "A < B"


def test_str() -> None:
    assert str(Comparison("A", "B", GT)) == "A > B"
    assert str(Comparison("B", "C", NE)) == "B != C"


# ------------------------- operator lookup ------------------------- #

@pytest.mark.parametrize("symbol", ["<", ">", "==", "!="])
def test_from_symbol(symbol: str) -> None:
    assert ComparisonOperator.from_symbol(symbol).value == symbol


@pytest.mark.parametrize("symbol", ["<=", ">="])
def test_from_symbol_rejects_non_strict(symbol: str) -> None:
    with pytest.raises(UnsupportedOperatorError):
        ComparisonOperator.from_symbol(symbol)


def test_from_symbol_unknown() -> None:
    with pytest.raises(ValueError):
        ComparisonOperator.from_symbol("<>")
