"""
Interactive console session.

Prompt for integers (spaces and/or commas), sort them ascending and descending,
verify both results with `is_sorted`, print everything, and ask whether to go
again. Malformed lines are reported and re-prompted; "n" or end of input ends
the session.

Public API (stable):
    parse_int_list(text) -> list[int]
    run_round(values, console) -> (ascending, descending)
    interactive_session(console=None, stream=None) -> int
"""

from __future__ import annotations

import re
from typing import IO, List, Optional, Sequence, Tuple

from rich.console import Console
from rich.markup import escape

from mergesort.algorithms.merge_sort import is_sorted, sort
from mergesort.comparators import Comparator, natural_greater, natural_less
from mergesort.errors import MalformedInput

__all__ = ["parse_int_list", "run_round", "interactive_session"]

_SEPARATORS = re.compile(r"[,\s]+")

_YES = {"y", "yes"}
_NO = {"n", "no"}


def parse_int_list(text: str) -> List[int]:
    """
    Parse integers separated by any mix of spaces and commas.

    "45, 12 78,,22" -> [45, 12, 78, 22]

    Raises
    ------
    MalformedInput
        If no numbers are present or a token is not an integer.
    """
    tokens = [t for t in _SEPARATORS.split(text.strip()) if t]
    if not tokens:
        raise MalformedInput("no numbers entered")
    values: List[int] = []
    for tok in tokens:
        try:
            values.append(int(tok))
        except ValueError:
            raise MalformedInput(f"not an integer: {tok!r}") from None
    return values


def _fmt(values: Sequence[object]) -> str:
    return escape(" ".join(str(v) for v in values)) or "(empty)"


def _report(console: Console, label: str, values: List[int], less: Comparator, order: str) -> bool:
    ok = is_sorted(values, less)
    console.print(f"[bold]{label:<11}[/bold] {_fmt(values)}")
    if ok:
        console.print(f"  [green]✓ verified {order}[/green]")
    else:
        console.print(f"  [bold red]✗ NOT {order}[/bold red]")
    return ok


def run_round(values: Sequence[int], console: Console) -> Tuple[List[int], List[int]]:
    """Sort copies of `values` both ways, verify and print. Returns (ascending, descending)."""
    ascending = list(values)
    descending = list(values)
    sort(ascending, natural_less)
    sort(descending, natural_greater)

    console.print(f"[bold]{'Input:':<11}[/bold] {_fmt(values)}")
    _report(console, "Ascending:", ascending, natural_less, "ascending")
    _report(console, "Descending:", descending, natural_greater, "descending")
    return ascending, descending


def _read_line(console: Console, prompt: str, stream: Optional[IO[str]]) -> str:
    line = console.input(prompt, stream=stream)
    # Console.input hands back readline() output for streams: "" only at EOF
    if stream is not None and line == "":
        raise EOFError
    return line.strip()


def _ask_again(console: Console, stream: Optional[IO[str]]) -> bool:
    while True:
        answer = _read_line(console, "Sort another list? (y/n): ", stream).lower()
        if answer in _YES:
            return True
        if answer in _NO:
            return False
        console.print("[yellow]Please answer y or n.[/yellow]")


def interactive_session(console: Optional[Console] = None, stream: Optional[IO[str]] = None) -> int:
    """
    Run the prompt-sort-verify-display loop until the user declines.

    `stream` replaces stdin (handy for tests and piping); end of input ends
    the session cleanly. Returns the process exit code.
    """
    console = console or Console()
    console.print("[bold]Merge sort[/bold]: enter integers separated by spaces and/or commas.")
    try:
        while True:
            line = _read_line(console, "Numbers: ", stream)
            try:
                values = parse_int_list(line)
            except MalformedInput as e:
                console.print(f"[red]Invalid input:[/red] {escape(str(e))}. Try again.")
                continue
            run_round(values, console)
            if not _ask_again(console, stream):
                break
    except (EOFError, KeyboardInterrupt):
        console.print()
    console.print("Goodbye.")
    return 0
