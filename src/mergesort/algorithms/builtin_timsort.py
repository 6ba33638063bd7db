"""
Reference implementation backed by Python's built-in `sorted()` (Timsort).

Used as the baseline column in benchmark runs. Same entry point as
`mergesort.algorithms.merge_sort.bench_sort`.

Config keys:
    order: "ascending" | "descending"   (default "ascending")
    use_cmp_key: bool                   (default False) route comparisons through
                                        the same `less` predicate the merge sort
                                        calls, so both pay per-comparison call cost
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from mergesort.comparators import natural_greater, resolve_order, to_key

__all__ = ["bench_sort"]


def bench_sort(a: List[int], *, config: Optional[Dict[str, Any]] = None) -> List[int]:
    cfg = config or {}
    less = resolve_order(cfg.get("order", "ascending"))
    if cfg.get("use_cmp_key", False):
        return sorted(a, key=to_key(less))
    # reverse=True is still stable: equal elements keep their input order
    return sorted(a, reverse=less is natural_greater)
