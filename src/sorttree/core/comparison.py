"""
Comparison model.

A `Comparison` is one relational/equality query between two symbolic operands,
e.g. ``A > B``. Two comparisons are equal iff they state the same fact,
whichever way round the operands were written: ``B < A`` == ``A > B``.

Public API (stable):
    ComparisonOperator
    RELATIONAL_OPERATORS
    OPERATOR_NEGATIONS
    Comparison(operand1, operand2, operator)
        .negate() -> Comparison
        .normalize() -> Comparison

Conventions:
- Negation assumes distinct values: not(A < B) is A > B, not(A == B) is A != B.
- Normalization orders operands by label; relational operators flip when the
  operands are swapped, `==`/`!=` do not.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, FrozenSet, Tuple

from .errors import UnsupportedOperatorError

__all__ = [
    "ComparisonOperator",
    "RELATIONAL_OPERATORS",
    "OPERATOR_NEGATIONS",
    "Comparison",
]


class ComparisonOperator(Enum):
    LESS_THAN = "<"
    GREATER_THAN = ">"
    EQUAL = "=="
    NOT_EQUAL = "!="

    @classmethod
    def from_symbol(cls, symbol: str) -> "ComparisonOperator":
        """Look up an operator by its symbol, rejecting `<=` and `>=`."""
        if symbol in ("<=", ">="):
            raise UnsupportedOperatorError(
                f"Operator {symbol!r} is not supported; use only <, >, == and !="
            )
        try:
            return cls(symbol)
        except ValueError as e:
            raise ValueError(f"Unknown comparison operator: {symbol!r}") from e

    def __str__(self) -> str:
        return self.value


RELATIONAL_OPERATORS: FrozenSet[ComparisonOperator] = frozenset(
    {ComparisonOperator.LESS_THAN, ComparisonOperator.GREATER_THAN}
)

OPERATOR_NEGATIONS: Dict[ComparisonOperator, ComparisonOperator] = {
    ComparisonOperator.LESS_THAN: ComparisonOperator.GREATER_THAN,
    ComparisonOperator.GREATER_THAN: ComparisonOperator.LESS_THAN,
    ComparisonOperator.EQUAL: ComparisonOperator.NOT_EQUAL,
    ComparisonOperator.NOT_EQUAL: ComparisonOperator.EQUAL,
}


@dataclass(frozen=True, eq=False)
class Comparison:
    operand1: str
    operand2: str
    operator: ComparisonOperator

    def negate(self) -> "Comparison":
        """Return the comparison stating the opposite fact (same operands)."""
        return Comparison(self.operand1, self.operand2, OPERATOR_NEGATIONS[self.operator])

    def normalize(self) -> "Comparison":
        """
        Return the canonical, direction-independent form of this comparison.

        Operands end up in label order. ``C > A`` becomes ``A < C``, while
        ``C != A`` becomes ``A != C``.
        """
        if self.operand1 > self.operand2:
            op = self.operator
            if op in RELATIONAL_OPERATORS:
                op = OPERATOR_NEGATIONS[op]
            return Comparison(self.operand2, self.operand1, op)
        return self

    def _key(self) -> Tuple[str, str, ComparisonOperator]:
        n = self.normalize()
        return (n.operand1, n.operand2, n.operator)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Comparison):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __str__(self) -> str:
        return f"{self.operand1} {self.operator.value} {self.operand2}"
