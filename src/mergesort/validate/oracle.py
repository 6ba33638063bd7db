"""
Oracle for sorting correctness.

Python's built-in `sorted()` is the ground truth:
- Stable, so with ties it must agree with a stable merge sort element-for-element
- Deterministic and portable

A custom `less` predicate is bridged with `comparators.to_key`, which keeps
ties as ties.

Public API (stable):
    oracle_sort(a, comparator=None) -> list
    equals_oracle(a, out, comparator=None) -> bool
"""

from __future__ import annotations

from typing import Any, List, Optional, Sequence

from mergesort.comparators import Comparator, to_key

ORACLE_NAME: str = "python_sorted_timsort"

__all__ = ["ORACLE_NAME", "oracle_sort", "equals_oracle"]


def oracle_sort(a: Sequence[Any], comparator: Optional[Comparator] = None) -> List[Any]:
    """
    Return the ground-truth sorted output for `a`; `a` is not mutated.

    Parameters
    ----------
    a : sequence
        Input elements.
    comparator : callable, optional
        `less(x, y) -> bool`. None means natural `<`.
    """
    if comparator is None:
        return sorted(a)
    return sorted(a, key=to_key(comparator))


def equals_oracle(
    a: Sequence[Any], out: Sequence[Any], comparator: Optional[Comparator] = None
) -> bool:
    """True iff `out` is exactly `oracle_sort(a, comparator)`."""
    return list(out) == oracle_sort(a, comparator)
