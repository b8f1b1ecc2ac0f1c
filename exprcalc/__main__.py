"""CLI for the exprcalc evaluator.

Usage:
    python -m exprcalc eval "2 + 3 * 4"          # Print 14
    python -m exprcalc eval "5 / 0" --json       # Machine-readable outcome
    python -m exprcalc batch exprs.txt           # One expression per line
    python -m exprcalc batch - < exprs.txt       # Same, from stdin
    python -m exprcalc repl                      # Interactive loop

Limits come from EXPRCALC_MAX_DIGITS / EXPRCALC_MAX_DEPTH and can be
overridden per invocation with --max-digits / --max-depth.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from exprcalc.config import Settings
from exprcalc.parser import try_evaluate
from exprcalc.render import dumps, format_value, render_error, render_outcomes

app = typer.Typer(
    name="exprcalc",
    help="Evaluate integer arithmetic expressions",
    no_args_is_help=True,
)
console = Console(stderr=True)

_REPL_QUIT = ("quit", "exit")


def _load_settings(max_digits: Optional[int], max_depth: Optional[int]) -> Settings:
    """Env settings with CLI overrides applied; bad env values exit 2."""
    try:
        settings = Settings.from_env()
    except ValueError as e:
        console.print(f"[red]Invalid configuration:[/red] {escape(str(e))}")
        raise typer.Exit(2)
    return Settings(
        max_digits=settings.max_digits if max_digits is None else max_digits,
        max_depth=settings.max_depth if max_depth is None else max_depth,
    )


def _read_lines(source: str) -> list[str]:
    """Expressions from a file (or '-' for stdin), skipping blanks and comments."""
    if source == "-":
        text = sys.stdin.read()
    else:
        path = Path(source)
        if not path.is_file():
            console.print(f"[red]Error:[/red] File not found: {escape(source)}")
            raise typer.Exit(2)
        text = path.read_text(encoding="utf-8")

    lines = []
    for line in text.splitlines():
        stripped = line.strip()
        if stripped and not stripped.startswith("#"):
            lines.append(stripped)
    return lines


@app.command("eval")
def cmd_eval(
    expression: str = typer.Argument(help="Expression to evaluate, e.g. '2 + 3 * 4'"),
    as_json: bool = typer.Option(False, "--json", help="Print the outcome as JSON"),
    max_digits: Optional[int] = typer.Option(None, "--max-digits", min=0, help="Longest number literal (0 = no limit)"),
    max_depth: Optional[int] = typer.Option(None, "--max-depth", min=0, help="Deepest parenthesis nesting (0 = no limit)"),
) -> None:
    """Evaluate a single expression."""
    settings = _load_settings(max_digits, max_depth)
    outcome = try_evaluate(expression, settings)

    if as_json:
        typer.echo(dumps(outcome.to_dict()))
    elif outcome.ok:
        typer.echo(format_value(outcome.value))
    else:
        render_error(outcome, console)

    if not outcome.ok:
        raise typer.Exit(1)


@app.command("batch")
def cmd_batch(
    source: str = typer.Argument("-", help="File with one expression per line, or '-' for stdin"),
    as_json: bool = typer.Option(False, "--json", help="Print outcomes as a JSON list"),
    max_digits: Optional[int] = typer.Option(None, "--max-digits", min=0, help="Longest number literal (0 = no limit)"),
    max_depth: Optional[int] = typer.Option(None, "--max-depth", min=0, help="Deepest parenthesis nesting (0 = no limit)"),
) -> None:
    """Evaluate every expression in a file."""
    settings = _load_settings(max_digits, max_depth)
    outcomes = [try_evaluate(line, settings) for line in _read_lines(source)]

    if as_json:
        typer.echo(dumps([o.to_dict() for o in outcomes], indent=2))
    else:
        render_outcomes(outcomes, console)

    if any(not o.ok for o in outcomes):
        raise typer.Exit(1)


@app.command("repl")
def cmd_repl(
    max_digits: Optional[int] = typer.Option(None, "--max-digits", min=0, help="Longest number literal (0 = no limit)"),
    max_depth: Optional[int] = typer.Option(None, "--max-depth", min=0, help="Deepest parenthesis nesting (0 = no limit)"),
) -> None:
    """Read expressions interactively until EOF, 'quit' or 'exit'."""
    settings = _load_settings(max_digits, max_depth)
    console.print("[dim]exprcalc: enter an expression, 'quit' to leave[/dim]")

    while True:
        try:
            line = input("> ")
        except EOFError:
            break
        line = line.strip()
        if not line:
            continue
        if line in _REPL_QUIT:
            break

        outcome = try_evaluate(line, settings)
        if outcome.ok:
            typer.echo(format_value(outcome.value))
        else:
            render_error(outcome, console)


if __name__ == "__main__":
    app()
