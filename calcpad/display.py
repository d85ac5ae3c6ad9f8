"""Rich rendering for calcpad: the live display line and key-by-key traces."""

from __future__ import annotations

from dataclasses import dataclass, field

from rich.console import Console
from rich.table import Table

from calcpad.keymap import commands_for_text
from calcpad.machine import InputStateMachine
from calcpad.models import Command


@dataclass
class TraceStep:
    """One consumed key and the display it produced."""

    key: str
    command: Command
    display: str


@dataclass
class Trace:
    """Display history of a replayed key sequence."""

    keys: str
    steps: list[TraceStep] = field(default_factory=list)


class ConsoleRenderer:
    """Renderer that prints every display update to a rich Console."""

    def __init__(self, console: Console, error_text: str = "Error") -> None:
        self.console = console
        self.error_text = error_text

    def __call__(self, text: str) -> None:
        style = "bold red" if text == self.error_text else "bold"
        self.console.print(f"[{style}]{text}[/{style}]", justify="right", highlight=False)


def render_trace(trace: Trace, console: Console, error_text: str = "Error") -> None:
    """Render a Rich table with one row per consumed key."""
    if not trace.steps:
        console.print(f"[yellow]No calculator keys in: {trace.keys!r}[/yellow]")
        return

    table = Table(title=f"Keys: {trace.keys}", show_header=True, header_style="bold")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Key", style="cyan")
    table.add_column("Command", style="dim")
    table.add_column("Display", justify="right", min_width=12)

    for i, step in enumerate(trace.steps, start=1):
        display = step.display
        if display == error_text:
            display = f"[red]{display}[/red]"
        table.add_row(str(i), step.key, str(step.command), display)

    console.print()
    console.print(table)
    console.print()


def replay_keys(machine: InputStateMachine, keys: str) -> Trace:
    """Feed typed keys through the key map into a state machine."""
    trace = Trace(keys=keys)
    for key, command in commands_for_text(keys):
        trace.steps.append(TraceStep(key=key, command=command, display=machine.dispatch(command)))
    return trace
