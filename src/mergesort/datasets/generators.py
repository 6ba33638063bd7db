"""
Dataset generators for the merge sort demo and benchmark runs.

Distributions:
- "random":         integers drawn uniformly from an inclusive range (required).
- "sorted":         [0, 1, ..., n-1].
- "nearly_sorted":  start from [0..n-1], then ceil(swap_frac * n) random swaps.
- "few_uniques":    up to k distinct values from an optional inclusive range,
                    sampled with replacement; lots of ties, good for stability.
- "reversed":       [n-1, ..., 0].

Public API (stable):
    make_dataset(n: int, spec: dict, rng: numpy.random.Generator) -> list[int]

Conventions:
- Ranges given as params["range"] == [min_int, max_int] are inclusive.
- Returns a plain Python `list[int]`; the sorter never sees NumPy types.
- The caller owns the RNG, so a seeded Generator gives reproducible data.
"""

from __future__ import annotations

from typing import Any, Dict, List, Tuple

import numpy as np

SUPPORTED_DISTS = {
    "random",
    "sorted",
    "nearly_sorted",
    "few_uniques",
    "reversed",
}
__all__ = ["SUPPORTED_DISTS", "make_dataset"]

_DEFAULT_FEW_UNIQUES_RANGE = (0, 2**31 - 1)


def make_dataset(n: int, spec: Dict[str, Any], rng: np.random.Generator) -> List[int]:
    """
    Generate an integer dataset according to `spec`, using the provided RNG.

    Parameters
    ----------
    n : int
        Number of elements. Must be >= 0.
    spec : dict
        {"dist": <name>, "params": {...}}, e.g.

            {"dist": "random", "params": {"range": [1, 10000]}}
            {"dist": "nearly_sorted", "params": {"swap_frac": 0.05}}
            {"dist": "few_uniques", "params": {"k": 8, "range": [0, 99]}}
            {"dist": "sorted"} / {"dist": "reversed"}

    rng : numpy.random.Generator
        Random source, seeded by the caller. Unused by "sorted"/"reversed".

    Returns
    -------
    list[int]

    Raises
    ------
    ValueError
        If `n`, the distribution name or its params are invalid.
    """
    if isinstance(n, bool) or not isinstance(n, (int, np.integer)):
        raise ValueError(f"n must be an int; got {n!r}")
    n = int(n)
    if n < 0:
        raise ValueError("n must be nonnegative")
    if not isinstance(spec, dict):
        raise ValueError("spec must be a dict")

    dist = spec.get("dist", None)
    if dist not in SUPPORTED_DISTS:
        raise ValueError(
            f"Unsupported dataset dist: {dist!r}. Supported: {sorted(SUPPORTED_DISTS)}"
        )
    params = spec.get("params") or {}

    if dist == "random":
        lo, hi = _parse_range(params, required=True, default=None)
        # Generator.integers is half-open by default; endpoint=True closes it
        return rng.integers(lo, hi, size=n, endpoint=True, dtype=np.int64).tolist()

    if dist == "sorted":
        return list(range(n))

    if dist == "reversed":
        return list(range(n - 1, -1, -1))

    if dist == "nearly_sorted":
        swap_frac = _parse_swap_frac(params)
        arr = list(range(n))
        num_swaps = int(np.ceil(swap_frac * n))
        if n < 2 or num_swaps == 0:
            return arr
        idxs = rng.integers(0, n, size=(num_swaps, 2))
        for i, j in idxs.tolist():
            arr[i], arr[j] = arr[j], arr[i]
        return arr

    # few_uniques
    k = _parse_k(params)
    lo, hi = _parse_range(params, required=False, default=_DEFAULT_FEW_UNIQUES_RANGE)
    if n == 0:
        return []
    actual_k = min(k, n, hi - lo + 1)
    pool: List[int] = []
    seen = set()
    while len(pool) < actual_k:
        for v in rng.integers(lo, hi, size=2 * (actual_k - len(pool)), endpoint=True).tolist():
            if v not in seen:
                seen.add(v)
                pool.append(v)
                if len(pool) == actual_k:
                    break
    picks = rng.integers(0, actual_k, size=n)
    return [pool[t] for t in picks.tolist()]


# ------------------------- helpers ------------------------- #


def _parse_range(
    params: Dict[str, Any], *, required: bool, default: Tuple[int, int] | None
) -> Tuple[int, int]:
    if "range" not in params:
        if required or default is None:
            raise ValueError("params.range must be provided as [min, max] (inclusive)")
        return default
    spec = params["range"]
    if not isinstance(spec, (list, tuple)) or len(spec) != 2:
        raise ValueError("params.range must be a 2-element list/tuple [min, max]")
    lo_raw, hi_raw = spec
    if not _is_int_like(lo_raw) or not _is_int_like(hi_raw):
        raise ValueError("params.range values must be integers")
    lo, hi = int(lo_raw), int(hi_raw)
    if lo > hi:
        raise ValueError(f"params.range invalid: min > max ({lo} > {hi})")
    return lo, hi


def _parse_swap_frac(params: Dict[str, Any]) -> float:
    val = params.get("swap_frac", 0.05)
    try:
        x = float(val)
    except (TypeError, ValueError) as e:
        raise ValueError(
            f"nearly_sorted.params.swap_frac must be a float in [0.0, 1.0]; got {val!r}"
        ) from e
    if not (0.0 <= x <= 1.0):
        raise ValueError(f"nearly_sorted.params.swap_frac must be in [0.0, 1.0]; got {x}")
    return x


def _parse_k(params: Dict[str, Any]) -> int:
    k = params.get("k", None)
    if not _is_int_like(k) or int(k) < 1:
        raise ValueError(f"few_uniques.params.k must be an integer >= 1; got {k!r}")
    return int(k)


def _is_int_like(x: Any) -> bool:
    # Python ints and NumPy integer scalars; bool is an int subclass but not a count
    return isinstance(x, (int, np.integer)) and not isinstance(x, bool)
