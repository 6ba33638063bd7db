"""
Property helpers for validating sorting results.

Used by the test-suite and by the bench harness for sanity checks.

Public API (stable):
    is_nondecreasing(xs, comparator=None) -> bool
    first_inversion_index(xs, comparator=None) -> int | None
    is_permutation(a, b) -> bool
    permutation_counter_diff(a, b) -> dict
    is_stable(before, after, key) -> bool
    assert_no_mutation(before, after) -> None

Notes
-----
- "Nondecreasing" is relative to the comparator: with `>` it means
  nonincreasing.
- Permutation checks count values, so elements must be hashable.
- Stability cannot be seen from values alone when equal keys are
  indistinguishable. `is_stable` therefore tracks object identity: sort
  (key, tag) records and compare the tag order within each key.
"""

from __future__ import annotations

from collections import Counter, defaultdict
from typing import Any, Callable, Dict, List, Optional, Sequence

from mergesort.algorithms.merge_sort import is_sorted
from mergesort.comparators import Comparator, natural_less


__all__ = [
    "is_nondecreasing",
    "first_inversion_index",
    "is_permutation",
    "permutation_counter_diff",
    "is_stable",
    "assert_no_mutation",
]


def is_nondecreasing(xs: Sequence[Any], comparator: Optional[Comparator] = None) -> bool:
    """Return True iff no xs[i+1] comes strictly before xs[i]."""
    return is_sorted(xs, comparator)


def first_inversion_index(xs: Sequence[Any], comparator: Optional[Comparator] = None) -> int | None:
    """
    Return the first index i where xs[i+1] comes before xs[i], or None.

    Useful for precise error messages:
        i = first_inversion_index(out)
        assert i is None, f"inversion at i={i}: {out[i]!r} then {out[i+1]!r}"
    """
    less = comparator if comparator is not None else natural_less
    for i in range(len(xs) - 1):
        if less(xs[i + 1], xs[i]):
            return i
    return None


def is_permutation(a: Sequence[Any], b: Sequence[Any]) -> bool:
    """Return True iff `a` and `b` contain exactly the same multiset of values."""
    if len(a) != len(b):
        return False
    return Counter(a) == Counter(b)


def permutation_counter_diff(a: Sequence[Any], b: Sequence[Any]) -> Dict[Any, int]:
    """
    Return value -> (count in a - count in b) for every value whose counts differ.

    Empty dict means identical multiplicities.
    """
    ca = Counter(a)
    cb = Counter(b)
    diff: Dict[Any, int] = {}
    for k in set(ca) | set(cb):
        d = ca.get(k, 0) - cb.get(k, 0)
        if d != 0:
            diff[k] = d
    return diff


def is_stable(before: Sequence[Any], after: Sequence[Any], key: Callable[[Any], Any]) -> bool:
    """
    Return True iff elements sharing a key appear in `after` in the same
    relative order as in `before`.

    Elements are matched by identity, so payloads need not be hashable or
    distinct by value. `key(x)` must be hashable.
    """
    if len(before) != len(after):
        return False

    def _groups(xs: Sequence[Any]) -> Dict[Any, List[int]]:
        out: Dict[Any, List[int]] = defaultdict(list)
        for x in xs:
            out[key(x)].append(id(x))
        return out

    return _groups(before) == _groups(after)


def assert_no_mutation(before: Sequence[Any], after: Sequence[Any]) -> None:
    """
    Assert two sequences are element-wise equal; used to check that a
    read-only operation (e.g. `is_sorted`) left its input alone.

    Raises AssertionError naming the first differing index.
    """
    if len(before) != len(after):
        raise AssertionError(
            f"Input mutated: length changed from {len(before)} to {len(after)}"
        )
    for i, (x, y) in enumerate(zip(before, after)):
        if x != y:
            raise AssertionError(f"Input mutated at index {i}: before={x!r}, after={y!r}")
