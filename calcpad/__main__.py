"""CLI for the calcpad calculator.

Usage:
    python -m calcpad eval "12+3*4"          # Evaluate one expression
    python -m calcpad keys "12+3="           # Replay keypad presses, show the display
    python -m calcpad keys "5//." --trace    # Show the display after every key
    python -m calcpad repl                   # Interactive keypad session
"""

from __future__ import annotations

import dataclasses
import logging
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from calcpad.config import Settings
from calcpad.display import ConsoleRenderer, render_trace, replay_keys
from calcpad.evaluator import CalculatorError, compute, format_number
from calcpad.machine import InputStateMachine

app = typer.Typer(
    name="calcpad",
    help="Keypad calculator with a safe expression evaluator",
    no_args_is_help=True,
)
console = Console(stderr=True)
out = Console()

_QUIT_WORDS = ("q", "quit", "exit")


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


@app.callback()
def main(
    ctx: typer.Context,
    error_text: Optional[str] = typer.Option(None, "--error-text", help="Text shown when evaluation fails"),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="DEBUG, INFO, WARNING, ERROR"),
) -> None:
    """Settings come from CALCPAD_* environment variables unless overridden here."""
    settings = Settings.from_env()
    if error_text:
        settings = dataclasses.replace(settings, error_text=error_text)
    if log_level:
        settings = dataclasses.replace(settings, log_level=log_level.upper())
    level = logging.getLevelName(settings.log_level)
    if not isinstance(level, int):
        console.print(f"[red]Invalid log level: {settings.log_level}[/red]")
        raise typer.Exit(2)
    _configure_logging(settings.log_level)
    ctx.obj = settings


@app.command("eval")
def cmd_eval(
    expression: str = typer.Argument(help="Arithmetic expression, e.g. '12+3*4' or '8÷2'"),
) -> None:
    """Evaluate one expression and print the result."""
    try:
        value = compute(expression)
    except CalculatorError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    out.print(format_number(value), highlight=False)


@app.command("keys")
def cmd_keys(
    ctx: typer.Context,
    keys: str = typer.Argument(help="Keys to press, one per character (e.g. '12+3=')"),
    trace: bool = typer.Option(False, "--trace", "-t", help="Show the display after every key"),
) -> None:
    """Press keys on a fresh calculator and print the final display."""
    settings: Settings = ctx.obj
    machine = InputStateMachine(settings=settings)
    result = replay_keys(machine, keys)
    if trace:
        render_trace(result, out, error_text=settings.error_text)
    else:
        out.print(machine.display, highlight=False)


@app.command("repl")
def cmd_repl(ctx: typer.Context) -> None:
    """Interactive session: each line is a run of keys, an empty line is '='."""
    settings: Settings = ctx.obj
    renderer = ConsoleRenderer(out, error_text=settings.error_text)
    machine = InputStateMachine(settings=settings)
    console.print("[dim]Keys: 0-9 . + - * / = % n(±) c(clear). Empty line evaluates, 'q' quits.[/dim]")
    renderer(machine.display)

    while True:
        try:
            line = console.input("[bold cyan]>[/bold cyan] ")
        except EOFError:
            break
        if line.strip().lower() in _QUIT_WORDS:
            break
        replay_keys(machine, line if line.strip() else "=")
        renderer(machine.display)


if __name__ == "__main__":
    app()
