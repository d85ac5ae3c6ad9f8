"""calcpad — Keypad calculator core.

Builds an arithmetic expression one key press at a time and evaluates it
without executing it as code. Two pieces:

    calcpad.machine    InputStateMachine: digit/point, operator, clear,
                       backspace, percent, toggle-sign and equals presses
    calcpad.evaluator  normalize → validate (allow-list) → evaluate
                       (recursive descent) and number formatting

Usage:
    python -m calcpad eval "12+3*4"
    python -m calcpad keys "12+3=" --trace
    python -m calcpad repl
"""

from calcpad.evaluator import (
    CalculatorError,
    EvaluationError,
    InvalidCharacter,
    InvalidOperatorSequence,
    compute,
    evaluate,
    format_number,
    normalize,
    validate,
)
from calcpad.machine import InputStateMachine
from calcpad.models import CalculatorState, Command, CommandKind, Operator

__all__ = [
    "CalculatorError",
    "CalculatorState",
    "Command",
    "CommandKind",
    "EvaluationError",
    "InputStateMachine",
    "InvalidCharacter",
    "InvalidOperatorSequence",
    "Operator",
    "compute",
    "evaluate",
    "format_number",
    "normalize",
    "validate",
]
