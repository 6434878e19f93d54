"""
Initial-order generators for decision-tree experiments.

The analyzer always sorts the labels A, B, C, ...; an initial order only says
which label starts at which position. The tree of a correct sort has the same
number of leaves for every initial order, but its shape (and so its average
path length) can depend on it for algorithms with early exits.

Currently implemented:
- dist == "sequential":
    Canonical order [0, 1, ..., n-1], i.e. A, B, C, ...

- dist == "reversed":
    [n-1, n-2, ..., 0].

- dist == "shuffled":
    A uniformly random permutation drawn from the provided RNG.

- dist == "nearly_sorted":
    Start from [0..n-1] then perform ceil(swap_frac * n) random index swaps.

Public API (stable):
    make_initial_order(n: int, spec: dict, rng: numpy.random.Generator) -> list[int]

Conventions:
- The result is always a permutation of range(n), as a Python `list[int]`.
- "sequential" and "reversed" ignore params and the RNG.
- The caller supplies the RNG (seeded upstream) for reproducibility.
"""

from __future__ import annotations

from typing import Any, Dict, List

import numpy as np

SUPPORTED_DISTS = {
    "sequential",
    "reversed",
    "shuffled",
    "nearly_sorted",
}
__all__ = ["SUPPORTED_DISTS", "make_initial_order"]


def make_initial_order(n: int, spec: Dict[str, Any], rng: np.random.Generator) -> List[int]:
    """
    Generate an initial order (a permutation of range(n)) according to `spec`.

    Parameters
    ----------
    n : int
        Number of items. Must be >= 0.
    spec : dict
        Distribution specification, e.g.

            {"dist": "sequential"}
            {"dist": "shuffled"}
            {"dist": "nearly_sorted", "params": {"swap_frac": 0.25}}

    rng : numpy.random.Generator
        Random number generator owned by the caller.

    Returns
    -------
    list[int]
        Permutation of range(n).

    Raises
    ------
    ValueError
        If inputs are invalid or if the distribution is unsupported.
    """
    _validate_n(n)

    if not isinstance(spec, dict):
        raise ValueError("spec must be a dict")

    dist = spec.get("dist", None)
    if dist not in SUPPORTED_DISTS:
        raise ValueError(
            f"Unsupported initial order dist: {dist!r}. Supported: {sorted(SUPPORTED_DISTS)}"
        )

    params = spec.get("params", {}) or {}

    if dist == "sequential":
        return list(range(n))

    if dist == "reversed":
        return list(range(n - 1, -1, -1))

    if dist == "shuffled":
        if n == 0:
            return []
        return [int(i) for i in rng.permutation(n)]

    if dist == "nearly_sorted":
        swap_frac = _parse_swap_frac(params)
        arr = list(range(n))
        if n < 2:
            return arr
        # ceil so a small nonzero frac still makes at least one swap
        num_swaps = int(np.ceil(swap_frac * n))
        if num_swaps <= 0:
            return arr
        idxs = rng.integers(0, n, size=2 * num_swaps)
        for k in range(num_swaps):
            i = int(idxs[2 * k])
            j = int(idxs[2 * k + 1])
            arr[i], arr[j] = arr[j], arr[i]
        return arr

    # Unreachable because of the check above
    raise ValueError(f"Unhandled initial order dist: {dist!r}")


# ------------------------- helpers ------------------------- #


def _validate_n(n: int) -> None:
    if not isinstance(n, (int, np.integer)) or isinstance(n, bool):
        raise ValueError("n must be an int")
    if n < 0:
        raise ValueError("n must be nonnegative")


def _parse_swap_frac(params: Dict[str, Any]) -> float:
    """Parse swap_frac in [0.0, 1.0]; defaults to 0.25."""
    val = params.get("swap_frac", 0.25)
    try:
        x = float(val)
    except Exception as e:
        raise ValueError(
            f"nearly_sorted.params.swap_frac must be a float in [0.0, 1.0]; got {val!r}"
        ) from e
    if not (0.0 <= x <= 1.0):
        raise ValueError(f"nearly_sorted.params.swap_frac must be in [0.0, 1.0]; got {x}")
    return x
