"""
Baseline comparison of decision-tree statistics.

Both statistics compared here are "higher is worse": more comparisons on
average means a slower sort, more pruned nodes means more comparisons whose
answer was already known.

Public API (stable):
    percent_difference(old, new) -> float | None
    verdict(old, new, *, higher_is="worse") -> "better" | "worse" | "ok"
    compare_to_baseline(summary, baseline) -> pandas.DataFrame
"""

from __future__ import annotations

from typing import Optional

import pandas as pd

__all__ = ["COMPARED_METRICS", "percent_difference", "verdict", "compare_to_baseline"]

COMPARED_METRICS = ("avg_comparisons", "pruned_nodes")


def percent_difference(old: float, new: float) -> Optional[float]:
    """
    Absolute percent difference of `new` relative to `old`.

    Returns None when either value is below 1 in magnitude (the percentage is
    meaningless near zero) or when the values are equal.
    """
    if abs(old) < 1 or abs(new) < 1:
        return None
    diff = abs((new - old) / old) * 100.0
    if diff == 0:
        return None
    return diff


def verdict(old: float, new: float, *, higher_is: str = "worse") -> str:
    if higher_is not in ("better", "worse"):
        raise ValueError(f"higher_is must be 'better' or 'worse'; got {higher_is!r}")
    if new == old:
        return "ok"
    higher = new > old
    if higher_is == "worse":
        return "worse" if higher else "better"
    return "better" if higher else "worse"


def compare_to_baseline(summary: pd.DataFrame, baseline: str) -> pd.DataFrame:
    """
    Add ``<metric>_pct_diff`` and ``<metric>_verdict`` columns comparing every
    row with the baseline algorithm's row of the same size `n`.

    Rows whose size has no baseline row get missing values.
    """
    if summary.empty:
        return summary.copy()
    if baseline not in set(summary["algo"]):
        raise ValueError(f"Baseline algorithm {baseline!r} has no results")

    base = summary[summary["algo"] == baseline].set_index("n")
    out = summary.copy()
    for metric in COMPARED_METRICS:
        pct = []
        verdicts = []
        for _, row in out.iterrows():
            n = row["n"]
            if n not in base.index:
                pct.append(None)
                verdicts.append(None)
                continue
            old = float(base.loc[n, metric])
            new = float(row[metric])
            pct.append(percent_difference(old, new))
            verdicts.append(verdict(old, new))
        out[f"{metric}_pct_diff"] = pct
        out[f"{metric}_verdict"] = verdicts
    return out
