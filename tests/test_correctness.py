"""
Correctness tests for the benchmarkable algorithms against the oracle (Python's built-in sorted).

Targets every module in `mergesort.algorithms.AVAILABLE` through its
`bench_sort(a, *, config=None)` entry point.

What we check:
- Output exactly matches the oracle (strongest guarantee)
- Nondecreasing order under the configured comparator (diagnostic)
- Permutation preservation (no lost/duplicated elements)
- No input mutation (bench_sort contract)
- Determinism for a given config (same input -> same output)
"""

from __future__ import annotations

import importlib
from typing import List

import pytest
from hypothesis import given, settings, strategies as st

from mergesort.algorithms import AVAILABLE
from mergesort.comparators import resolve_order
from mergesort.validate import first_inversion_index, is_permutation, oracle_sort

ALGOS = {name: importlib.import_module(f"mergesort.algorithms.{name}").bench_sort for name in AVAILABLE}
ORDERS = ["ascending", "descending"]


# ------------------------- helpers ------------------------- #

def _check_one(algo: str, a: List[int], *, config: dict | None = None) -> None:
    """Common assertion bundle for one input."""
    if config is None:
        config = {}
    sort = ALGOS[algo]
    less = resolve_order(config.get("order", "ascending"))

    a_before = list(a)
    out = sort(a, config=config)

    assert a == a_before, "bench_sort must not mutate its input"

    assert out == oracle_sort(a, less), "Output must exactly match the oracle"

    i = first_inversion_index(out, less)
    assert i is None, f"inversion at i={i}: {out[i]} then {out[i + 1]}"
    assert is_permutation(a, out), "Output is not a permutation of input"

    out2 = sort(a, config=config)
    assert out2 == out, "Algorithm must be deterministic for a given config"


# ------------------------- unit tests (deterministic) ------------------------- #

@pytest.mark.parametrize("algo", sorted(ALGOS))
@pytest.mark.parametrize("order", ORDERS)
@pytest.mark.parametrize(
    "a",
    [
        [],
        [5],
        [2, 1],
        [1, 2, 3, 4],
        [4, 3, 2, 1],
        [7, 7, 7, 7],
        [1, 3, 2, 3, 1, 2],
        list(range(20)),
        list(range(20))[::-1],
        [0, -1, 5, -10, 3, 3, 2],
        [45, 12, 78, 22, 90, 5, 60],
    ],
)
def test_unit_cases(algo: str, order: str, a: List[int]) -> None:
    _check_one(algo, a, config={"order": order})


def test_builtin_cmp_key_path_matches_plain_path() -> None:
    a = [3, 1, 2, 3, 0, -4]
    plain = ALGOS["builtin_timsort"](a, config={"order": "descending"})
    via_key = ALGOS["builtin_timsort"](a, config={"order": "descending", "use_cmp_key": True})
    assert plain == via_key == [3, 3, 2, 1, 0, -4]


# ------------------------- property-based tests (randomized) ------------------------- #

small_ints = st.integers(min_value=-10_000, max_value=10_000)


@settings(deadline=None, max_examples=100)
@given(st.lists(small_ints, min_size=0, max_size=400), st.sampled_from(ORDERS))
def test_property_random_small_range(a: List[int], order: str) -> None:
    _check_one("merge_sort", a, config={"order": order})


@settings(deadline=None, max_examples=60)
@given(st.lists(st.integers(min_value=0, max_value=2**31 - 1), min_size=0, max_size=200))
def test_property_random_full_range(a: List[int]) -> None:
    _check_one("merge_sort", a)


@settings(deadline=None, max_examples=60)
@given(st.lists(st.integers(min_value=0, max_value=7), min_size=0, max_size=600))
def test_property_many_duplicates(a: List[int]) -> None:
    _check_one("merge_sort", a)
