"""
Comparator helpers.

A comparator is a plain callable `less(a, b) -> bool` that answers "does `a`
come strictly before `b`?". It must define a strict weak ordering
(irreflexive, asymmetric, transitive). Nothing here checks that contract.

Public API (stable):
    natural_less(a, b) -> bool
    natural_greater(a, b) -> bool
    by_key(key, comparator=None) -> Comparator
    reverse(comparator) -> Comparator
    to_key(comparator) -> key callable for sorted()/list.sort()
    resolve_order(name) -> Comparator
"""

from __future__ import annotations

import functools
import operator
from typing import Any, Callable, Optional

from mergesort.errors import InvalidArgument

Comparator = Callable[[Any, Any], bool]

__all__ = [
    "Comparator",
    "natural_less",
    "natural_greater",
    "by_key",
    "reverse",
    "to_key",
    "resolve_order",
    "ORDERS",
]

# operator.lt / operator.gt are C-level and noticeably faster than lambdas
natural_less: Comparator = operator.lt
natural_greater: Comparator = operator.gt

ORDERS = {
    "ascending": natural_less,
    "asc": natural_less,
    "descending": natural_greater,
    "desc": natural_greater,
}


def by_key(key: Callable[[Any], Any], comparator: Optional[Comparator] = None) -> Comparator:
    """
    Build a comparator that orders elements by `key(element)`.

    Elements whose keys compare equal are ties, so a stable sort keeps them in
    their original relative order.
    """
    less = comparator if comparator is not None else natural_less

    def _less(a: Any, b: Any) -> bool:
        return less(key(a), key(b))

    return _less


def reverse(comparator: Comparator) -> Comparator:
    """Mirror a comparator: what came first now comes last."""

    def _less(a: Any, b: Any) -> bool:
        return comparator(b, a)

    return _less


def to_key(comparator: Comparator) -> Callable[[Any], Any]:
    """
    Adapt a `less` predicate into a key usable by `sorted()`.

    Ties (neither element before the other) map to 0, which keeps the
    built-in sort's stability intact.
    """

    def _cmp(a: Any, b: Any) -> int:
        if comparator(a, b):
            return -1
        if comparator(b, a):
            return 1
        return 0

    return functools.cmp_to_key(_cmp)


def resolve_order(name: str) -> Comparator:
    """Map an order name ("ascending"/"asc", "descending"/"desc") to a comparator."""
    if not isinstance(name, str):
        raise InvalidArgument(f"order must be a string; got {name!r}")
    try:
        return ORDERS[name.strip().lower()]
    except KeyError:
        raise InvalidArgument(
            f"Unsupported order: {name!r}. Supported: {sorted(ORDERS)}"
        ) from None
