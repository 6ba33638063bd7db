"""
Comparator-parameterized merge sort.

    from mergesort import sort, is_sorted
    xs = [45, 12, 78]
    sort(xs)                        # ascending, in place
    sort(xs, lambda a, b: a > b)    # descending
    assert is_sorted(xs, lambda a, b: a > b)
"""

from .algorithms.merge_sort import is_sorted, sort, sort_buffer, sorted_copy
from .comparators import natural_greater, natural_less
from .errors import InvalidArgument, MalformedInput

__version__ = "0.1.0"

__all__ = [
    "sort",
    "sort_buffer",
    "is_sorted",
    "sorted_copy",
    "natural_less",
    "natural_greater",
    "InvalidArgument",
    "MalformedInput",
]
