"""
Timing harness and experiment runner tests.

The runner test writes a tiny YAML config into tmp_path and checks the run
directory layout and the summary table.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

import pandas as pd
import pytest
import yaml
from rich.console import Console

from mergesort.algorithms import merge_sort
from mergesort.bench import time_sort_call
from mergesort.bench.runner import run_experiment


def _broken_sort(a: List[int], *, config: Optional[Dict[str, Any]] = None) -> List[int]:
    return list(a)


def _raising_sort(a: List[int], *, config: Optional[Dict[str, Any]] = None) -> List[int]:
    raise RuntimeError("boom")


# ------------------------- measure ------------------------- #

def test_time_sort_call_collects_samples_and_keeps_input() -> None:
    a = [5, 3, 1, 4, 2]
    res = time_sort_call(
        algo_name="merge_sort",
        algo_fn=merge_sort.bench_sort,
        a=a,
        config={"order": "descending"},
        repeats=3,
        warmup=True,
        disable_gc=True,
        timeout_seconds=10,
        verify=True,
    )
    assert res["status"] == "ok"
    assert res["error"] is None
    assert len(res["samples_ns"]) == 3
    assert all(isinstance(t, int) and t >= 0 for t in res["samples_ns"])
    assert a == [5, 3, 1, 4, 2]


def test_time_sort_call_flags_unsorted_output() -> None:
    res = time_sort_call(algo_name="broken", algo_fn=_broken_sort, a=[2, 1], config=None, repeats=3)
    assert res["status"] == "unsorted"
    assert "index 0" in res["error"]
    assert len(res["samples_ns"]) == 1


def test_time_sort_call_reports_errors() -> None:
    res = time_sort_call(algo_name="raising", algo_fn=_raising_sort, a=[1], config=None, repeats=2)
    assert res["status"] == "error"
    assert "warmup failed" in res["error"]

    res = time_sort_call(algo_name="raising", algo_fn=_raising_sort, a=[1], config=None, repeats=2, warmup=False)
    assert res["status"] == "error"
    assert "repeat 0" in res["error"]


def test_time_sort_call_timeout_threshold() -> None:
    res = time_sort_call(
        algo_name="merge_sort",
        algo_fn=merge_sort.bench_sort,
        a=list(range(2000, 0, -1)),
        config=None,
        repeats=5,
        warmup=False,
        timeout_seconds=1e-9,
    )
    assert res["status"] == "timeout"
    assert res["timed_out_on_repeat"] == 0
    assert len(res["samples_ns"]) == 1


@pytest.mark.parametrize("kwargs", [{"repeats": -1}, {"timeout_seconds": 0}])
def test_time_sort_call_validates_arguments(kwargs) -> None:
    base = dict(algo_name="m", algo_fn=merge_sort.bench_sort, a=[1], config=None, repeats=1)
    base.update(kwargs)
    with pytest.raises(ValueError):
        time_sort_call(**base)


# ------------------------- runner ------------------------- #

def _write_config(tmp_path: Path, **overrides: Any) -> Path:
    cfg: Dict[str, Any] = {
        "experiment_name": "tiny",
        "output_dir": "runs",
        "seed": 1,
        "repeats": 2,
        "warmup": False,
        "disable_gc": False,
        "timeout_seconds": 30,
        "dataset": {"dist": "random", "params": {"range": [0, 100]}},
        "sizes": [10, 50],
        "algorithms": [
            {"name": "merge_sort", "config": {"order": "ascending"}},
            {"name": "merge_sort", "config": {"order": "descending"}},
            {"name": "builtin_timsort"},
        ],
    }
    cfg.update(overrides)
    path = tmp_path / "exp.yaml"
    path.write_text(yaml.safe_dump(cfg), encoding="utf-8")
    return path


def test_run_experiment_writes_outputs(tmp_path: Path) -> None:
    config_path = _write_config(tmp_path)
    run_dir = run_experiment(config_path, console=Console(quiet=True), progress=False)

    assert run_dir.parent == tmp_path / "runs"
    for name in ("config_resolved.yaml", "meta.json", "results.jsonl", "summary.csv"):
        assert (run_dir / name).exists(), name

    meta = json.loads((run_dir / "meta.json").read_text(encoding="utf-8"))
    assert "python" in meta and "machine" in meta

    lines = (run_dir / "results.jsonl").read_text(encoding="utf-8").splitlines()
    assert len(lines) == 3 * 2 * 2  # algos * sizes * repeats

    summary = pd.read_csv(run_dir / "summary.csv")
    assert set(summary["algo"]) == {"merge_sort:ascending", "merge_sort:descending", "builtin_timsort"}
    assert sorted(summary["n"].unique().tolist()) == [10, 50]
    assert (summary["samples_ok"] == 2).all()


def test_run_experiment_missing_keys(tmp_path: Path) -> None:
    path = tmp_path / "bad.yaml"
    path.write_text(yaml.safe_dump({"experiment_name": "x"}), encoding="utf-8")
    with pytest.raises(ValueError, match="Missing required config keys"):
        run_experiment(path, console=Console(quiet=True), progress=False)


def test_run_experiment_rejects_unknown_algorithm(tmp_path: Path) -> None:
    path = _write_config(tmp_path, algorithms=[{"name": "bogo_sort"}])
    with pytest.raises(ImportError):
        run_experiment(path, console=Console(quiet=True), progress=False)


def test_run_experiment_rejects_duplicate_entries(tmp_path: Path) -> None:
    path = _write_config(tmp_path, algorithms=[{"name": "merge_sort"}, {"name": "merge_sort"}])
    with pytest.raises(ValueError, match="Duplicate"):
        run_experiment(path, console=Console(quiet=True), progress=False)
