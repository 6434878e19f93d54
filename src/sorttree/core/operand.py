"""
Instrumented operands handed to the routine under test.

A `SortableItem` carries only a symbolic label (``"A"``, ``"B"``, ...). Its
``<``, ``>``, ``==`` and ``!=`` operators never compare anything: they build a
`Comparison` and return whatever the analyzer's handler decides. ``<=`` and
``>=`` are refused, since the analyzer reasons only in strict and equality
facts over distinct values.
"""

from __future__ import annotations

from typing import Callable, List, Optional, Sequence

from .comparison import Comparison, ComparisonOperator

__all__ = ["CompareHandler", "SortableItem", "symbol_labels", "generate_sequential_items"]

CompareHandler = Callable[[Comparison], bool]

_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"


def symbol_labels(count: int) -> List[str]:
    """Return `count` distinct labels: A..Z, then AA, AB, ... (spreadsheet columns)."""
    if count < 0:
        raise ValueError("count must be nonnegative")
    labels: List[str] = []
    for i in range(count):
        label = ""
        k = i + 1
        while k > 0:
            k, rem = divmod(k - 1, 26)
            label = _ALPHABET[rem] + label
        labels.append(label)
    return labels


class SortableItem:
    __slots__ = ("label", "_handler")

    def __init__(self, label: str, handler: CompareHandler) -> None:
        self.label = label
        self._handler = handler

    def _ask(self, other: object, op: ComparisonOperator):
        if not isinstance(other, SortableItem):
            return NotImplemented
        return self._handler(Comparison(self.label, other.label, op))

    def __lt__(self, other: object):
        return self._ask(other, ComparisonOperator.LESS_THAN)

    def __gt__(self, other: object):
        return self._ask(other, ComparisonOperator.GREATER_THAN)

    def __eq__(self, other: object):
        return self._ask(other, ComparisonOperator.EQUAL)

    def __ne__(self, other: object):
        return self._ask(other, ComparisonOperator.NOT_EQUAL)

    def _refuse(self, other: object, symbol: str):
        if not isinstance(other, SortableItem):
            return NotImplemented
        # Raises UnsupportedOperatorError for <= and >=
        return ComparisonOperator.from_symbol(symbol)

    def __le__(self, other: object):
        return self._refuse(other, "<=")

    def __ge__(self, other: object):
        return self._refuse(other, ">=")

    def __hash__(self) -> int:
        return hash(self.label)

    def __repr__(self) -> str:
        return self.label


def generate_sequential_items(
    count: int,
    handler: CompareHandler,
    order: Optional[Sequence[int]] = None,
) -> List[SortableItem]:
    """
    Create `count` items labelled A, B, C, ... linked to `handler`.

    Parameters
    ----------
    count : int
        Number of items.
    handler : Callable[[Comparison], bool]
        Called for every comparison between the items.
    order : sequence of int, optional
        Permutation of ``range(count)`` giving which label sits at each
        position. Defaults to the canonical order A, B, C, ...
    """
    labels = symbol_labels(count)
    if order is None:
        return [SortableItem(label, handler) for label in labels]
    if sorted(order) != list(range(count)):
        raise ValueError(f"order must be a permutation of range({count}); got {list(order)!r}")
    return [SortableItem(labels[int(i)], handler) for i in order]
