"""
Sorting algorithms.

Each module here exposes `bench_sort(a, *, config=None) -> list` so the bench
runner can load it by name (`mergesort.algorithms.<name>`).
"""

from .merge_sort import bench_sort, is_sorted, sort, sort_buffer, sorted_copy

AVAILABLE = ("merge_sort", "builtin_timsort")

__all__ = ["sort", "sort_buffer", "is_sorted", "sorted_copy", "bench_sort", "AVAILABLE"]
