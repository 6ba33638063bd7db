"""
Showcase run: exercises the sorter on fixed inputs, edge cases, random arrays
of growing size, a custom comparator and non-integer element types, printing
a check mark per verified property.

    python -m mergesort demo --seed 7
"""

from __future__ import annotations

from typing import Any, Callable, List, Optional, Sequence, Tuple

import numpy as np
from rich.console import Console
from rich.markup import escape

from mergesort.algorithms.merge_sort import bench_sort, is_sorted, sort, sort_buffer
from mergesort.bench.measure import time_sort_call
from mergesort.comparators import natural_greater
from mergesort.datasets import make_dataset
from mergesort.errors import InvalidArgument

__all__ = ["BASIC_INPUT", "DEFAULT_SIZES", "run_demo"]

BASIC_INPUT = (45, 12, 78, 22, 90, 5, 60)
DEFAULT_SIZES = (1000, 5000, 10000)
_PERF_DATASET = {"dist": "random", "params": {"range": [1, 10000]}}


class _Checks:
    def __init__(self, console: Console) -> None:
        self.console = console
        self.passed = 0
        self.failed = 0

    def check(self, ok: bool, label: str) -> bool:
        if ok:
            self.passed += 1
            self.console.print(f"[green]✓[/green] {label}")
        else:
            self.failed += 1
            self.console.print(f"[bold red]✗[/bold red] {label}")
        return ok


def _fmt(values: Sequence[Any]) -> str:
    return escape(" ".join(str(v) for v in values))


def _basic(checks: _Checks) -> None:
    numbers = list(BASIC_INPUT)
    checks.console.print(f"Input:      {_fmt(numbers)}")
    sort(numbers)
    checks.console.print(f"Sorted:     {_fmt(numbers)}")
    checks.check(is_sorted(numbers) and numbers == sorted(BASIC_INPUT), "Basic sorting")


def _edge_cases(checks: _Checks) -> None:
    empty: List[int] = []
    sort(empty)
    checks.check(empty == [] and is_sorted(empty), "Empty list")

    single = [42]
    sort(single)
    checks.check(single == [42], "Single element")

    already = [1, 2, 3, 4, 5]
    sort(already)
    checks.check(already == [1, 2, 3, 4, 5], "Already sorted")

    backwards = [5, 4, 3, 2, 1]
    sort(backwards)
    checks.check(backwards == [1, 2, 3, 4, 5], "Reverse sorted")

    sort_buffer(None, 0)
    checks.check(True, "Null buffer with size 0 is a no-op")
    try:
        sort_buffer(None, 3)
    except InvalidArgument:
        checks.check(True, "Null buffer with size 3 rejected")
    else:
        checks.check(False, "Null buffer with size 3 rejected")


def _performance(checks: _Checks, sizes: Sequence[int], seed: Optional[int]) -> None:
    rng = np.random.default_rng(seed)
    for n in sizes:
        data = make_dataset(n, _PERF_DATASET, rng)
        res = time_sort_call(
            algo_name="merge_sort",
            algo_fn=bench_sort,
            a=data,
            config=None,
            repeats=1,
            warmup=False,
            disable_gc=False,
            verify=True,
        )
        if res["status"] != "ok":
            checks.check(False, f"Sorting {n} elements: {escape(str(res['error']))}")
            continue
        elapsed_us = res["samples_ns"][0] / 1e3
        checks.check(True, f"Sorted {n} elements in {elapsed_us:.0f} μs ({elapsed_us / 1e3:.3f} ms)")


def _custom_comparator(checks: _Checks) -> None:
    numbers = list(BASIC_INPUT)
    sort(numbers, natural_greater)
    checks.check(is_sorted(numbers, natural_greater), "Descending order")
    checks.console.print(f"Descending: {_fmt(numbers)}")


def _type_variations(checks: _Checks) -> None:
    doubles = [3.14, 1.41, 2.71, 0.57, 1.73]
    sort(doubles)
    checks.check(is_sorted(doubles), "Floating point")

    strings = ["banana", "apple", "cherry", "date"]
    sort(strings)
    checks.check(strings == ["apple", "banana", "cherry", "date"], "Strings")
    checks.console.print(f"Sorted strings: {_fmt(strings)}")


def run_demo(
    console: Optional[Console] = None,
    sizes: Sequence[int] = DEFAULT_SIZES,
    seed: Optional[int] = None,
) -> bool:
    """Run every showcase section; True iff every check passed."""
    console = console or Console()
    checks = _Checks(console)
    sections: List[Tuple[str, Callable[[], None]]] = [
        ("1. Basic functionality", lambda: _basic(checks)),
        ("2. Edge cases", lambda: _edge_cases(checks)),
        ("3. Performance", lambda: _performance(checks, sizes, seed)),
        ("4. Custom comparator", lambda: _custom_comparator(checks)),
        ("5. Type variations", lambda: _type_variations(checks)),
    ]
    for title, section in sections:
        console.rule(title, align="left")
        section()
        console.print()

    if checks.failed:
        console.print(f"[bold red]{checks.failed} check(s) failed[/bold red], {checks.passed} passed.")
        return False
    console.print(f"[bold green]All {checks.passed} checks passed.[/bold green]")
    return True
