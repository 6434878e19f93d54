"""
Cocktail shaker sort: bubble sort alternating forward and backward passes.

Stops as soon as a pass makes no swap.
"""

from __future__ import annotations

from typing import Any, List


def sort(items: List[Any]) -> None:
    start = 0
    end = len(items) - 1
    swapped = True
    while swapped:
        swapped = False
        # Forward pass
        for i in range(start, end):
            if items[i] > items[i + 1]:
                items[i], items[i + 1] = items[i + 1], items[i]
                swapped = True
        if not swapped:
            return
        swapped = False
        end -= 1
        # Backward pass
        for i in range(end - 1, start - 1, -1):
            if items[i] > items[i + 1]:
                items[i], items[i + 1] = items[i + 1], items[i]
                swapped = True
        start += 1
