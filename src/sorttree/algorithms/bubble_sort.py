"""Bubble sort: repeatedly swap adjacent out-of-order pairs."""

from __future__ import annotations

from typing import Any, List


def sort(items: List[Any]) -> None:
    n = len(items)
    for i in range(1, n):
        for j in range(n - i):
            if items[j] > items[j + 1]:
                items[j], items[j + 1] = items[j + 1], items[j]
