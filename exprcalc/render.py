"""Rich output for evaluation results.

Errors are shown with the failing source line and a caret under the failing
position; batches become a single comparison table.
"""

from __future__ import annotations

import json
import sys
from contextlib import contextmanager
from typing import Iterator, Optional

from rich.cells import cell_len
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from exprcalc.models import Outcome

_KIND_LABELS = {
    "syntax": "syntax error",
    "range": "number too large",
    "nesting": "nesting too deep",
    "division-by-zero": "division by zero",
}


@contextmanager
def unlimited_int_digits() -> Iterator[None]:
    """Lift the host's int/str conversion limit (3.11+) for the block."""
    get_limit = getattr(sys, "get_int_max_str_digits", None)
    if get_limit is None:
        yield
        return
    limit = get_limit()
    sys.set_int_max_str_digits(0)
    try:
        yield
    finally:
        sys.set_int_max_str_digits(limit)


def format_value(value: int) -> str:
    """Decimal text of a result, however many digits it has."""
    with unlimited_int_digits():
        return str(value)


def dumps(data: object, indent: Optional[int] = None) -> str:
    """json.dumps that can serialize results of any size."""
    with unlimited_int_digits():
        return json.dumps(data, indent=indent)


def _fmt_status(outcome: Outcome) -> str:
    if outcome.ok:
        return "[green]ok[/green]"
    return f"[red]{_KIND_LABELS.get(outcome.kind, outcome.kind)}[/red]"


def _fmt_result(outcome: Outcome) -> str:
    if outcome.ok:
        return format_value(outcome.value)
    if outcome.position is None:
        return escape(outcome.error)
    return escape(f"{outcome.error} (col {outcome.position})")


def caret_line(line: str, column: int) -> str:
    """Marker line pointing at `column` of `line`.

    Whitespace before the column is copied so tabs expand the same way;
    other characters become as many spaces as the cells they occupy.
    """
    pad = "".join(c if c.isspace() else " " * cell_len(c) for c in line[:column])
    return pad + "^"


def _error_line(expression: str, position: int) -> tuple[str, int]:
    """The source line holding `position`, and the column within it."""
    start = expression.rfind("\n", 0, position) + 1
    end = expression.find("\n", position)
    if end == -1:
        end = len(expression)
    return expression[start:end], position - start


def render_error(outcome: Outcome, console: Console) -> None:
    """Print a failed outcome as a message plus a caret diagnostic."""
    label = _KIND_LABELS.get(outcome.kind, outcome.kind)
    message = outcome.error
    if outcome.position is not None:
        message = f"{message} at position {outcome.position}"
    console.print(f"[red]Error ({label}):[/red] {escape(message)}")
    if outcome.position is not None:
        line, column = _error_line(outcome.expression, outcome.position)
        console.print(f"  {escape(line)}", highlight=False)
        console.print(f"  [bold red]{escape(caret_line(line, column))}[/bold red]")


def render_outcomes(outcomes: list[Outcome], console: Console) -> None:
    """Render a Rich table for a batch of outcomes."""
    if not outcomes:
        console.print("[yellow]No expressions to evaluate.[/yellow]")
        return

    table = Table(title="Evaluation results", show_header=True, header_style="bold")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Expression", min_width=16)
    table.add_column("Result", justify="right")
    table.add_column("Status")

    for i, outcome in enumerate(outcomes, start=1):
        table.add_row(
            str(i),
            escape(outcome.expression),
            _fmt_result(outcome),
            _fmt_status(outcome),
        )

    failed = sum(1 for o in outcomes if not o.ok)
    console.print()
    console.print(table)
    if failed:
        console.print(f"[red]{failed} of {len(outcomes)} failed[/red]")
    else:
        console.print(f"[green]All {len(outcomes)} evaluated[/green]")
    console.print()
