"""Insertion sort: sink each element into the sorted prefix."""

from __future__ import annotations

from typing import Any, List


def sort(items: List[Any]) -> None:
    for i in range(1, len(items)):
        j = i
        while j > 0 and items[j - 1] > items[j]:
            items[j - 1], items[j] = items[j], items[j - 1]
            j -= 1
