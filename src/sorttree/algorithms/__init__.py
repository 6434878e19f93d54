"""
Built-in routines to analyze.

Each module defines ``sort(items)``, which reorders `items` in place using only
``<``, ``>``, ``==`` and ``!=`` between elements. The experiment runner loads
them by module name, e.g. ``sorttree.algorithms.bubble_sort``.
"""

BUILTIN_ALGORITHMS = {
    "selection_sort": "Selection Sort",
    "bubble_sort": "Bubble Sort",
    "insertion_sort": "Insertion Sort",
    "shell_sort": "Shell Sort",
    "cocktail_shaker_sort": "Cocktail Shaker Sort",
}

__all__ = ["BUILTIN_ALGORITHMS"]
