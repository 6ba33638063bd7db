"""
Command line entry point.

    python -m mergesort                  # interactive session (default)
    python -m mergesort demo [--seed N] [--sizes 1000 5000]
    python -m mergesort bench CONFIG.yaml
"""

from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from rich.console import Console

from mergesort.console import interactive_session, run_demo
from mergesort.console.demo import DEFAULT_SIZES

_console = Console()


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="mergesort", description="Comparator-parameterized merge sort.")
    sub = p.add_subparsers(dest="command")

    sub.add_parser("interactive", help="Prompt for integers and sort them both ways (default)")

    demo = sub.add_parser("demo", help="Run the showcase checks and timings")
    demo.add_argument("--seed", type=int, default=None, help="Seed for the random performance arrays")
    demo.add_argument(
        "--sizes", type=int, nargs="+", default=list(DEFAULT_SIZES), help="Array sizes to time"
    )

    bench = sub.add_parser("bench", help="Run a YAML-configured benchmark experiment")
    bench.add_argument("config", type=str, help="Path to YAML experiment config")
    bench.add_argument("--no-progress", action="store_true", help="Hide the tqdm progress bar")

    return p.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = _parse_args(argv)

    if args.command == "demo":
        return 0 if run_demo(_console, sizes=args.sizes, seed=args.seed) else 1

    if args.command == "bench":
        # pandas/psutil/yaml are only needed here
        from mergesort.bench.runner import run_from_args

        run_from_args(args)
        return 0

    return interactive_session(_console)


if __name__ == "__main__":
    sys.exit(main())
