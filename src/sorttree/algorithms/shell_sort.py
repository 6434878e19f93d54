"""Shell sort with the halving gap sequence n/2, n/4, ..., 1."""

from __future__ import annotations

from typing import Any, List


def sort(items: List[Any]) -> None:
    n = len(items)
    gap = n // 2
    while gap > 0:
        for i in range(gap, n):
            j = i
            while j >= gap and items[j - gap] > items[j]:
                items[j], items[j - gap] = items[j - gap], items[j]
                j -= gap
        gap //= 2
