"""
Error taxonomy for the decision-tree analyzer.

    AnalyzerError
    ├── ContradictionError        neither outcome of a comparison is consistent
    │   └── NondeterminismError   replayed execution diverged from its recorded path
    └── UnsupportedOperatorError  `<=` / `>=` used on instrumented items

All of these are fatal for the analysis that raised them: the search is a
single exhaustive pass and nothing here is retried.
"""

from __future__ import annotations

from typing import Any, List, Optional, Sequence

__all__ = [
    "AnalyzerError",
    "ContradictionError",
    "NondeterminismError",
    "UnsupportedOperatorError",
]


class AnalyzerError(Exception):
    """Base class for every error raised by the analyzer core."""


class ContradictionError(AnalyzerError):
    """
    Raised when the routine under test cannot be a deterministic comparison
    sort over a total order.

    Attributes
    ----------
    comparison : Comparison | None
        The comparison being handled when the fault was detected.
    path : list[bool]
        Outcomes of the frames on the path stack at that moment, oldest first.
    """

    def __init__(
        self,
        message: str,
        *,
        comparison: Optional[Any] = None,
        path: Optional[Sequence[bool]] = None,
    ) -> None:
        super().__init__(message)
        self.comparison = comparison
        self.path: List[bool] = list(path) if path is not None else []


class NondeterminismError(ContradictionError):
    """Replay of an already-validated prefix did not reproduce that prefix."""


class UnsupportedOperatorError(AnalyzerError, TypeError):
    """A comparison operator the analyzer does not intercept was requested."""
