"""Selection sort: move the minimum of the unsorted suffix to its front."""

from __future__ import annotations

from typing import Any, List


def sort(items: List[Any]) -> None:
    n = len(items)
    for i in range(n - 1):
        min_i = i
        for j in range(i + 1, n):
            if items[min_i] > items[j]:
                min_i = j
        items[i], items[min_i] = items[min_i], items[i]
