"""
Timing harness for decision-tree analyses.

We measure exactly one exhaustive `AlgorithmAnalyzer.analyze()` per sample,
using a monotonic high-resolution clock. Building the analyzer, GC control and
warmup happen outside the timed block.

Public API (stable):
    time_analysis(...) -> dict

Returned dict schema:
    {
        "algo": str,
        "n": int,
        "repeats": int,
        "samples_ns": list[int],            # elapsed ns for each successful sample
        "status": "ok" | "timeout" | "error",
        "error": str | None,                # populated if status == "error"
        "timed_out_on_repeat": int | None,  # 0-based repeat index if timeout occurred
        "tree": DecisionTreeNode | None,    # tree from the last successful sample
        "paths_explored": int | None,       # routine runs in the last successful sample
    }
"""

from __future__ import annotations

import gc
import logging
import time
from typing import Any, Dict, List, Optional, Sequence

from sorttree.core.analyzer import AlgorithmAnalyzer, SortingRoutine

__all__ = ["time_analysis"]

logger = logging.getLogger(__name__)


def time_analysis(
    *,
    algo_name: str,
    algo_fn: SortingRoutine,
    array_size: int,
    initial_order: Optional[Sequence[int]],
    repeats: int,
    warmup: bool,
    disable_gc: bool,
    timeout_seconds: float,
) -> Dict[str, Any]:
    """
    Time repeated analyses of `algo_fn` over `array_size` items.

    Parameters
    ----------
    algo_name : str
        Logical name of the algorithm (for logs/records).
    algo_fn : Callable[[list[SortableItem]], Any]
        Routine under test; sorts its argument in place.
    array_size : int
        Number of items per analysis.
    initial_order : sequence of int | None
        Starting arrangement passed to the analyzer.
    repeats : int
        Number of timed samples to collect. At least one analysis always runs
        so that a tree is available, even if `repeats` is 0.
    warmup : bool
        If True, make one untimed analysis before timing.
    disable_gc : bool
        If True, collect and disable Python GC during the timed loop; restore afterward.
    timeout_seconds : float
        Per-sample timeout threshold. If a single analysis exceeds it we mark
        status="timeout" and stop further sampling.

    Returns
    -------
    dict
        See module docstring for exact schema.
    """
    if repeats < 0:
        raise ValueError("repeats must be nonnegative")
    if timeout_seconds <= 0:
        raise ValueError("timeout_seconds must be positive")

    result: Dict[str, Any] = {
        "algo": algo_name,
        "n": int(array_size),
        "repeats": repeats,
        "samples_ns": [],  # type: List[int]
        "status": "ok",
        "error": None,
        "timed_out_on_repeat": None,
        "tree": None,
        "paths_explored": None,
    }

    def _one_analysis() -> AlgorithmAnalyzer:
        return AlgorithmAnalyzer(algo_fn, array_size, initial_order=initial_order)

    # ---- Warmup, or the single untimed analysis when repeats == 0 ----
    if warmup or repeats == 0:
        try:
            analyzer = _one_analysis()
            result["tree"] = analyzer.analyze()
            result["paths_explored"] = analyzer.paths_explored
        except Exception as e:
            logger.debug("Warmup analysis of %s (n=%d) failed", algo_name, array_size, exc_info=True)
            result["status"] = "error"
            result["error"] = f"warmup failed: {e!r}"
            return result

    # ---- GC control ----
    prev_gc_enabled = gc.isenabled()
    try:
        if disable_gc:
            gc.collect()
            gc.disable()

        # ---- Timed loop ----
        threshold_ns = int(timeout_seconds * 1e9)
        for r in range(repeats):
            try:
                analyzer = _one_analysis()

                t0 = time.perf_counter_ns()
                tree = analyzer.analyze()
                t1 = time.perf_counter_ns()

                elapsed = t1 - t0
                result["samples_ns"].append(int(elapsed))
                result["tree"] = tree
                result["paths_explored"] = analyzer.paths_explored

                if elapsed > threshold_ns:
                    result["status"] = "timeout"
                    result["timed_out_on_repeat"] = r
                    break

            except Exception as e:
                logger.debug("Analysis of %s (n=%d) failed", algo_name, array_size, exc_info=True)
                result["status"] = "error"
                result["error"] = f"run failed at repeat {r}: {e!r}"
                # A warmup tree must not stand in for a failed run
                result["tree"] = None
                result["paths_explored"] = None
                break

    finally:
        # Restore original GC state
        if disable_gc and prev_gc_enabled:
            gc.enable()

    return result
