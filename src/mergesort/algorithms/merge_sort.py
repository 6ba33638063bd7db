"""
Top-down merge sort, in place, under a caller-supplied comparator.

The sequence is treated as the inclusive range [0, n-1], split at
`mid = low + (high - low) // 2`, both halves sorted recursively, then merged
back through two temporary lists sized to the halves. On a tie the merge takes
from the left half, which makes the sort stable.

Public API (stable):
    sort(seq, comparator=None) -> None
    sort_buffer(buffer, size, comparator=None) -> None
    is_sorted(seq, comparator=None) -> bool
    sorted_copy(seq, comparator=None) -> list
    bench_sort(a, *, config=None) -> list     # entry point for the bench runner

Conventions:
- `comparator(a, b)` answers "does a come strictly before b?"; default is `<`.
- `seq` only needs `len()`, integer `__getitem__` and `__setitem__`, so lists,
  `array.array` and 1-D NumPy arrays all work. Merge buffers are filled element
  by element rather than by slicing, since slices of NumPy arrays are views.
- Recursion depth is about log2(n); no iterative rewrite is needed.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, MutableSequence, Optional, Sequence, TypeVar

from mergesort.comparators import Comparator, natural_less, resolve_order
from mergesort.errors import InvalidArgument

T = TypeVar("T")

__all__ = ["sort", "sort_buffer", "is_sorted", "sorted_copy", "bench_sort"]


def sort(seq: MutableSequence[T], comparator: Optional[Comparator] = None) -> None:
    """
    Sort `seq` in place so that no element comes before its predecessor.

    Parameters
    ----------
    seq : MutableSequence
        Sequence to reorder. Length 0 or 1 is left untouched.
    comparator : callable, optional
        Strict weak ordering `less(a, b) -> bool`. Defaults to natural `<`.

    Raises
    ------
    InvalidArgument
        If `comparator` is not callable. Nothing is moved in that case.
    """
    less = _check_comparator(comparator)
    n = len(seq)
    if n <= 1:
        return
    _sort_range(seq, 0, n - 1, less)


def sort_buffer(
    buffer: Optional[MutableSequence[T]],
    size: int,
    comparator: Optional[Comparator] = None,
) -> None:
    """
    Sort the first `size` elements of `buffer` in place.

    This is the explicit-length form: a missing buffer is tolerated only when
    nothing has to be sorted. Elements at index >= `size` are not touched.

    Raises
    ------
    InvalidArgument
        If `buffer` is None while `size > 0`, if `size` is negative or larger
        than the buffer, or if `comparator` is not callable. All checks run
        before any element is moved.
    """
    if isinstance(size, bool) or not isinstance(size, int):
        raise InvalidArgument(f"size must be an int; got {size!r}")
    if size < 0:
        raise InvalidArgument(f"size must be nonnegative; got {size}")
    if buffer is None:
        if size > 0:
            raise InvalidArgument("Null buffer passed to sort_buffer with nonzero size")
        return
    if size > len(buffer):
        raise InvalidArgument(
            f"size {size} exceeds buffer length {len(buffer)}"
        )
    less = _check_comparator(comparator)
    if size <= 1:
        return
    _sort_range(buffer, 0, size - 1, less)


def is_sorted(seq: Sequence[T], comparator: Optional[Comparator] = None) -> bool:
    """
    Return True iff no element comes strictly before its predecessor.

    Stops at the first inversion; does not report where it is (see
    `mergesort.validate.first_inversion_index` for that).
    """
    less = _check_comparator(comparator)
    for i in range(len(seq) - 1):
        if less(seq[i + 1], seq[i]):
            return False
    return True


def sorted_copy(items: Iterable[T], comparator: Optional[Comparator] = None) -> List[T]:
    """Return a new sorted list; `items` itself is never mutated."""
    out = list(items)
    sort(out, comparator)
    return out


def bench_sort(a: List[int], *, config: Optional[Dict[str, Any]] = None) -> List[int]:
    """
    Benchmark entry point: `config` may carry {"order": "ascending"|"descending"}.

    Works on a copy so the runner can reuse the same input for every algorithm.
    """
    order = (config or {}).get("order", "ascending")
    return sorted_copy(a, resolve_order(order))


# ------------------------- internals ------------------------- #


def _check_comparator(comparator: Optional[Comparator]) -> Comparator:
    if comparator is None:
        return natural_less
    if not callable(comparator):
        raise InvalidArgument(f"comparator must be callable; got {comparator!r}")
    return comparator


def _sort_range(seq: MutableSequence[T], low: int, high: int, less: Comparator) -> None:
    if low >= high:
        return
    mid = low + (high - low) // 2
    _sort_range(seq, low, mid, less)
    _sort_range(seq, mid + 1, high, less)
    _merge(seq, low, mid, high, less)


def _merge(seq: MutableSequence[T], low: int, mid: int, high: int, less: Comparator) -> None:
    left = [seq[x] for x in range(low, mid + 1)]
    right = [seq[x] for x in range(mid + 1, high + 1)]
    n1 = len(left)
    n2 = len(right)

    i = j = 0
    k = low
    while i < n1 and j < n2:
        # Strictly-before only; ties go to the left half.
        if less(right[j], left[i]):
            seq[k] = right[j]
            j += 1
        else:
            seq[k] = left[i]
            i += 1
        k += 1

    while i < n1:
        seq[k] = left[i]
        i += 1
        k += 1
    while j < n2:
        seq[k] = right[j]
        j += 1
        k += 1
