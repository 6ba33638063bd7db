"""
Timing harness for sorting algorithms.

We time exactly one call to an algorithm's `bench_sort(a, config=...)` per
sample with a monotonic high-resolution clock. Copying the input, GC control,
warmup and output verification all happen outside the timed block.

Public API (stable):
    time_sort_call(...) -> dict

Returned dict schema:
    {
        "algo": str,
        "repeats": int,
        "samples_ns": list[int],            # elapsed ns for each completed sample
        "status": "ok" | "timeout" | "error" | "unsorted",
        "error": str | None,                # populated for "error" and "unsorted"
        "timed_out_on_repeat": int | None,  # 0-based repeat index if timeout occurred
    }
"""

from __future__ import annotations

import gc
import time
from typing import Any, Callable, Dict, List, Optional

from mergesort.comparators import resolve_order
from mergesort.validate.properties import first_inversion_index

__all__ = ["time_sort_call"]


def time_sort_call(
    *,
    algo_name: str,
    algo_fn: Callable[..., List[Any]],
    a: List[Any],
    config: Optional[Dict[str, Any]],
    repeats: int,
    warmup: bool = True,
    disable_gc: bool = True,
    timeout_seconds: float = 60.0,
    verify: bool = True,
) -> Dict[str, Any]:
    """
    Time repeated calls to `algo_fn(copy_of_a, config=config)`.

    Parameters
    ----------
    algo_name : str
        Logical name of the algorithm (for records).
    algo_fn : Callable[..., list]
        Implements `bench_sort(a, *, config=None) -> list`.
    a : list
        Input data. Each sample gets a fresh copy, so in-place algorithms
        never see already-sorted input on later repeats.
    config : dict | None
        Passed through unchanged. Its "order" key also selects the comparator
        used for verification.
    repeats : int
        Number of timed samples to collect.
    warmup : bool
        If True, make one untimed call first.
    disable_gc : bool
        If True, collect and disable the GC around the timed loop, then restore.
    timeout_seconds : float
        Per-sample threshold; a slower sample sets status="timeout" and stops
        sampling. The call itself is never interrupted.
    verify : bool
        If True, check every output with the configured order and stop with
        status="unsorted" at the first failure.

    Returns
    -------
    dict
        See module docstring.
    """
    if repeats < 0:
        raise ValueError("repeats must be nonnegative")
    if timeout_seconds <= 0:
        raise ValueError("timeout_seconds must be positive")

    less = resolve_order((config or {}).get("order", "ascending"))

    result: Dict[str, Any] = {
        "algo": algo_name,
        "repeats": repeats,
        "samples_ns": [],
        "status": "ok",
        "error": None,
        "timed_out_on_repeat": None,
    }

    if warmup and repeats > 0:
        try:
            algo_fn(list(a), config=config)
        except Exception as e:
            result["status"] = "error"
            result["error"] = f"warmup failed: {e!r}"
            return result

    prev_gc_enabled = gc.isenabled()
    try:
        if disable_gc:
            gc.collect()
            gc.disable()

        threshold_ns = int(timeout_seconds * 1e9)
        for r in range(repeats):
            arg = list(a)
            try:
                t0 = time.perf_counter_ns()
                out = algo_fn(arg, config=config)
                t1 = time.perf_counter_ns()
            except Exception as e:
                result["status"] = "error"
                result["error"] = f"run failed at repeat {r}: {e!r}"
                break

            elapsed = t1 - t0
            result["samples_ns"].append(int(elapsed))

            if verify:
                bad = first_inversion_index(out, less)
                if bad is not None or len(out) != len(a):
                    result["status"] = "unsorted"
                    result["error"] = (
                        f"output not sorted at index {bad} on repeat {r}"
                        if bad is not None
                        else f"output length {len(out)} != input length {len(a)}"
                    )
                    break

            if elapsed > threshold_ns:
                result["status"] = "timeout"
                result["timed_out_on_repeat"] = r
                break
    finally:
        # Leave GC disabled if the caller had it disabled
        if disable_gc and prev_gc_enabled:
            gc.enable()

    return result
