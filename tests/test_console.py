"""
Console wrapper tests: input parsing, one sort round, a scripted interactive
session, the showcase demo and the command line entry point.
"""

from __future__ import annotations

import io
from pathlib import Path

import pytest
import yaml
from rich.console import Console

from mergesort import MalformedInput
from mergesort.__main__ import main
from mergesort.console import interactive_session, parse_int_list, run_demo, run_round


def _console() -> Console:
    return Console(file=io.StringIO(), width=120, color_system=None)


def _output(console: Console) -> str:
    return console.file.getvalue()  # type: ignore[attr-defined]


# ------------------------- parsing ------------------------- #

@pytest.mark.parametrize(
    "text, expected",
    [
        ("45 12 78", [45, 12, 78]),
        ("45,12,78", [45, 12, 78]),
        ("45, 12 78,,22", [45, 12, 78, 22]),
        ("  -3\t7 , +2  ", [-3, 7, 2]),
        ("42", [42]),
    ],
)
def test_parse_int_list(text: str, expected) -> None:
    assert parse_int_list(text) == expected


@pytest.mark.parametrize("text", ["", "   ", ",, ,", "1 two 3", "1.5", "[red]"])
def test_parse_int_list_rejects(text: str) -> None:
    with pytest.raises(MalformedInput):
        parse_int_list(text)


# ------------------------- one round ------------------------- #

def test_run_round_sorts_both_ways_and_verifies() -> None:
    console = _console()
    values = [45, 12, 78, 22, 90, 5, 60]
    asc, desc = run_round(values, console)
    assert asc == [5, 12, 22, 45, 60, 78, 90]
    assert desc == [90, 78, 60, 45, 22, 12, 5]
    assert values == [45, 12, 78, 22, 90, 5, 60]

    out = _output(console)
    assert "5 12 22 45 60 78 90" in out
    assert "90 78 60 45 22 12 5" in out
    assert "verified ascending" in out
    assert "verified descending" in out
    assert "NOT" not in out


# ------------------------- session ------------------------- #

def test_interactive_session_recovers_from_bad_input() -> None:
    console = _console()
    stream = io.StringIO("abc\n\n45, 12 78\nmaybe\nn\n")
    assert interactive_session(console, stream=stream) == 0

    out = _output(console)
    assert "not an integer: 'abc'" in out
    assert "no numbers entered" in out
    assert "12 45 78" in out
    assert "78 45 12" in out
    assert "Please answer y or n." in out
    assert out.rstrip().endswith("Goodbye.")


def test_interactive_session_loops_until_no() -> None:
    console = _console()
    stream = io.StringIO("3 1 2\ny\n9,8\nno\n")
    assert interactive_session(console, stream=stream) == 0
    out = _output(console)
    assert "1 2 3" in out
    assert "8 9" in out
    assert out.count("Numbers:") == 2


def test_interactive_session_ends_on_eof() -> None:
    console = _console()
    assert interactive_session(console, stream=io.StringIO("2 1\n")) == 0
    out = _output(console)
    assert "1 2" in out
    assert "Goodbye." in out


# ------------------------- demo ------------------------- #

def test_run_demo_passes_every_check() -> None:
    console = _console()
    assert run_demo(console, sizes=(50, 100), seed=3) is True
    out = _output(console)
    assert "Sorted 50 elements" in out
    assert "Sorted 100 elements" in out
    assert "apple banana cherry date" in out
    assert "All 12 checks passed." in out


# ------------------------- CLI ------------------------- #

def test_main_demo(capsys) -> None:
    assert main(["demo", "--sizes", "20", "--seed", "1"]) == 0
    assert "checks passed" in capsys.readouterr().out


def test_main_defaults_to_interactive(monkeypatch, capsys) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO("5 4 3\nn\n"))
    assert main([]) == 0
    assert "3 4 5" in capsys.readouterr().out


def test_main_bench(tmp_path: Path) -> None:
    cfg = {
        "experiment_name": "cli",
        "output_dir": str(tmp_path / "runs"),
        "seed": 0,
        "repeats": 1,
        "timeout_seconds": 30,
        "dataset": {"dist": "reversed"},
        "sizes": [8],
        "algorithms": [{"name": "merge_sort"}],
    }
    path = tmp_path / "cli.yaml"
    path.write_text(yaml.safe_dump(cfg), encoding="utf-8")
    assert main(["bench", str(path), "--no-progress"]) == 0
    assert len(list((tmp_path / "runs").iterdir())) == 1
