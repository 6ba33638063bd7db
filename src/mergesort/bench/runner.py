"""
Experiment runner: times merge sort against the built-in baseline from a YAML config.

Usage (from repo root):
    python -m mergesort bench experiments/configs/01_random_scaling.yaml
    python -m mergesort.bench.runner experiments/configs/01_random_scaling.yaml

Outputs in a new run directory:
    - config_resolved.yaml    # the config we actually used
    - meta.json               # environment info (python, numpy, cpu/ram, git commit)
    - results.jsonl           # one JSON line per timing sample, plus status lines
    - summary.csv             # median + IQR per (algo, n)
    - (console) rich table + tqdm progress over sizes

Design notes:
- For each size n, ONE dataset is generated and every algorithm gets a copy.
- The harness verifies every output under the configured order.
- On timeout/error/unsorted output an algorithm is skipped for larger sizes.
"""

from __future__ import annotations

import argparse
import datetime as _dt
import importlib
import json
import os
import platform
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple

import numpy as np
import pandas as pd
import psutil
import yaml
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from tqdm import tqdm

from mergesort.bench.measure import time_sort_call
from mergesort.datasets import make_dataset

__all__ = ["AlgoSpec", "REQUIRED_KEYS", "run_experiment", "run_from_args", "main"]

_console = Console()

REQUIRED_KEYS = (
    "experiment_name",
    "output_dir",
    "seed",
    "repeats",
    "timeout_seconds",
    "dataset",
    "sizes",
    "algorithms",
)

_SUMMARY_COLUMNS = ["algo", "n", "samples_ok", "median_ns", "iqr_ns", "min_ns", "max_ns"]


# ------------------------- data structures ------------------------- #

@dataclass(frozen=True)
class AlgoSpec:
    name: str
    sort_fn: Callable[..., List[Any]]
    config: Dict[str, Any]
    label: str


# ------------------------- helpers: IO & meta ------------------------- #

def _load_yaml(path: Path) -> Dict[str, Any]:
    with path.open("r", encoding="utf-8") as f:
        cfg = yaml.safe_load(f)
    if not isinstance(cfg, dict):
        raise ValueError(f"Config must be a YAML mapping: {path}")
    return cfg


def _write_yaml(obj: Dict[str, Any], path: Path) -> None:
    with path.open("w", encoding="utf-8") as f:
        yaml.safe_dump(obj, f, sort_keys=False)


def _append_jsonl(obj: Dict[str, Any], path: Path) -> None:
    with path.open("a", encoding="utf-8") as f:
        f.write(json.dumps(obj, separators=(",", ":"), ensure_ascii=False))
        f.write("\n")


def _timestamp() -> str:
    return _dt.datetime.now().strftime("%Y%m%d_%H%M%S")


def _ensure_run_dir(base_dir: Path, experiment_name: str) -> Path:
    base_dir.mkdir(parents=True, exist_ok=True)
    run_dir = base_dir / f"{_timestamp()}_{experiment_name}"
    suffix = 1
    while run_dir.exists():
        suffix += 1
        run_dir = base_dir / f"{_timestamp()}_{experiment_name}_{suffix}"
    run_dir.mkdir(parents=False, exist_ok=False)
    return run_dir


def _git_commit_short() -> Optional[str]:
    try:
        out = subprocess.check_output(["git", "rev-parse", "--short", "HEAD"], stderr=subprocess.DEVNULL)
    except (OSError, subprocess.CalledProcessError):
        return None
    return out.decode("utf-8").strip()


def _gather_meta() -> Dict[str, Any]:
    return {
        "python": platform.python_version(),
        "numpy": np.__version__,
        "pandas": pd.__version__,
        "psutil": psutil.__version__,
        "git_commit": _git_commit_short(),
        "machine": {
            "cpu": platform.processor() or platform.machine(),
            "cores_logical": psutil.cpu_count(logical=True),
            "cores_physical": psutil.cpu_count(logical=False),
            "ram_gb": round(psutil.virtual_memory().total / (1024**3), 2),
            "platform": platform.platform(),
        },
        "start_time": _dt.datetime.now().isoformat(timespec="seconds"),
        "pid": os.getpid(),
        "cwd": str(Path.cwd()),
    }


def _resolve_algorithms(cfg_algos: List[Dict[str, Any]]) -> List[AlgoSpec]:
    specs: List[AlgoSpec] = []
    seen = set()
    for entry in cfg_algos:
        name = entry.get("name", None)
        if not name or not isinstance(name, str):
            raise ValueError("Each algorithm must have a string 'name' field")

        config = entry.get("config", {})
        if config is None:
            config = {}
        elif not isinstance(config, dict):
            raise ValueError(f"Algorithm '{name}': 'config' must be a dict if provided")

        try:
            mod = importlib.import_module(f"mergesort.algorithms.{name}")
        except ImportError as e:
            raise ImportError(f"Could not import algorithm module 'mergesort.algorithms.{name}': {e!r}") from e
        if not callable(getattr(mod, "bench_sort", None)):
            raise AttributeError(f"Algorithm module '{name}' must define `bench_sort(a, *, config=None)`")

        # the same algorithm may appear more than once with different configs
        order = config.get("order")
        label = entry.get("label") or (f"{name}:{order}" if order else name)
        spec = AlgoSpec(name=name, sort_fn=mod.bench_sort, config=config, label=str(label))
        if spec.label in seen:
            raise ValueError(f"Duplicate algorithm entry in config: {spec.label}")
        seen.add(spec.label)
        specs.append(spec)
    return specs


def _iqr_ns(times: pd.Series) -> int:
    return int(times.quantile(0.75) - times.quantile(0.25))


def _aggregate_summary(jsonl_path: Path) -> pd.DataFrame:
    if not jsonl_path.exists():
        return pd.DataFrame(columns=_SUMMARY_COLUMNS)
    df = pd.read_json(jsonl_path, lines=True)
    if "time_ns" not in df.columns:
        return pd.DataFrame(columns=_SUMMARY_COLUMNS)
    df = df[df["time_ns"].notna()]
    if df.empty:
        return pd.DataFrame(columns=_SUMMARY_COLUMNS)

    out = (
        df.groupby(["algo", "n"])["time_ns"]
        .agg(
            samples_ok="count",
            median_ns="median",
            iqr_ns=_iqr_ns,
            min_ns="min",
            max_ns="max",
        )
        .reset_index()
    )
    out[["median_ns", "iqr_ns", "min_ns", "max_ns"]] = out[["median_ns", "iqr_ns", "min_ns", "max_ns"]].astype("int64")
    return out[_SUMMARY_COLUMNS].sort_values(["algo", "n"], ignore_index=True)


def _format_cell(median_ns: Optional[int], iqr_ns: Optional[int]) -> str:
    if median_ns is None:
        return "—"
    return f"{median_ns / 1e6:.2f} ± {(iqr_ns or 0) / 1e6:.2f}"


def _print_summary(summary: pd.DataFrame, sizes: List[int], console: Console) -> None:
    table = Table(title="Benchmark Summary (median ± IQR in ms)")
    table.add_column("Algorithm", style="bold")
    picks: List[Tuple[str, int]] = []
    for n in dict.fromkeys([sizes[0], sizes[len(sizes) // 2], sizes[-1]]):
        picks.append((f"n={n}", n))
        table.add_column(f"n={n}", justify="right")

    for algo in summary["algo"].unique():
        row = [escape(str(algo))]
        for _, npick in picks:
            s = summary[(summary["algo"] == algo) & (summary["n"] == npick)]
            if s.empty:
                row.append("—")
            else:
                row.append(_format_cell(int(s["median_ns"].iloc[0]), int(s["iqr_ns"].iloc[0])))
        table.add_row(*row)
    console.print()
    console.print(table)
    console.print()


# ------------------------- core runner ------------------------- #

def run_experiment(config_path: Path, console: Optional[Console] = None, progress: bool = True) -> Path:
    console = console or _console
    cfg = _load_yaml(config_path)

    missing = [k for k in REQUIRED_KEYS if k not in cfg]
    if missing:
        raise ValueError(f"Missing required config keys: {missing}")

    experiment_name: str = str(cfg["experiment_name"])
    output_dir = Path(cfg["output_dir"])
    if not output_dir.is_absolute():
        output_dir = config_path.parent / output_dir
    sizes: List[int] = [int(n) for n in cfg["sizes"]]
    repeats: int = int(cfg["repeats"])
    warmup: bool = bool(cfg.get("warmup", True))
    disable_gc: bool = bool(cfg.get("disable_gc", True))
    timeout_seconds: float = float(cfg["timeout_seconds"])
    dataset_spec: Dict[str, Any] = dict(cfg["dataset"])
    algos_cfg: List[Dict[str, Any]] = list(cfg["algorithms"])

    if not sizes or any(n < 0 for n in sizes):
        raise ValueError("Config 'sizes' must be a non-empty list of nonnegative integers")

    algos = _resolve_algorithms(algos_cfg)

    run_dir = _ensure_run_dir(output_dir, experiment_name)
    results_path = run_dir / "results.jsonl"
    summary_path = run_dir / "summary.csv"
    meta_path = run_dir / "meta.json"
    cfg_resolved_path = run_dir / "config_resolved.yaml"

    _write_yaml(cfg, cfg_resolved_path)
    with meta_path.open("w", encoding="utf-8") as f:
        json.dump(_gather_meta(), f, indent=2)

    rng = np.random.default_rng(int(cfg["seed"]))
    per_algo_skip = {a.label: False for a in algos}

    console.print(f"[bold green]Run directory:[/bold green] {run_dir}")
    console.print(f"[bold]Experiment:[/bold] {experiment_name}")
    console.print(f"[bold]Algorithms:[/bold] {escape(', '.join(a.label for a in algos))}")
    console.print()

    for n in tqdm(sizes, desc="Sizes", unit="n", disable=not progress):
        base_a = make_dataset(n, dataset_spec, rng)

        for a_spec in algos:
            if per_algo_skip[a_spec.label]:
                continue

            res = time_sort_call(
                algo_name=a_spec.label,
                algo_fn=a_spec.sort_fn,
                a=base_a,
                config=a_spec.config,
                repeats=repeats,
                warmup=warmup,
                disable_gc=disable_gc,
                timeout_seconds=timeout_seconds,
                verify=True,
            )

            for trial_idx, t_ns in enumerate(res["samples_ns"]):
                _append_jsonl(
                    {
                        "algo": a_spec.label,
                        "n": n,
                        "dataset": dataset_spec,
                        "trial": trial_idx,
                        "time_ns": int(t_ns),
                        "config": a_spec.config,
                    },
                    results_path,
                )

            status = res["status"]
            if status != "ok":
                per_algo_skip[a_spec.label] = True
                _append_jsonl(
                    {
                        "algo": a_spec.label,
                        "n": n,
                        "status": status,
                        "error": res["error"],
                        "timed_out_on_repeat": res["timed_out_on_repeat"],
                        "config": a_spec.config,
                    },
                    results_path,
                )
                console.print(f"[yellow]{escape(a_spec.label)}: {status} at n={n}; skipping larger sizes[/yellow]")

    summary_df = _aggregate_summary(results_path)
    summary_df.to_csv(summary_path, index=False)

    _print_summary(summary_df, sizes, console)

    console.print("[bold green]Done.[/bold green] Wrote:")
    for p in (results_path, summary_path, meta_path, cfg_resolved_path):
        console.print(f" - {p}")

    return run_dir


# ------------------------- CLI ------------------------- #

def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Run a sorting benchmark experiment from a YAML config.")
    p.add_argument("config", type=str, help="Path to YAML experiment config")
    p.add_argument("--no-progress", action="store_true", help="Hide the tqdm progress bar")
    return p.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    run_from_args(_parse_args(argv))


def run_from_args(args: argparse.Namespace) -> Path:
    config_path = Path(args.config).resolve()
    if not config_path.exists():
        raise SystemExit(f"Config file not found: {config_path}")
    try:
        return run_experiment(config_path, progress=not args.no_progress)
    except Exception as e:
        _console.print(f"[bold red]Runner failed:[/bold red] {escape(repr(e))}")
        raise


if __name__ == "__main__":
    main()
