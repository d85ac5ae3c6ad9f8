"""Data models for the calcpad calculator.

Operator and CommandKind enums, the Command record, and CalculatorState — the
typed structures that flow through keymap → machine → display.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Operator(str, Enum):
    """Binary operators as stored in the expression text."""

    PLUS = "+"
    MINUS = "-"
    TIMES = "*"
    DIVIDE = "/"

    @property
    def glyph(self) -> str:
        """Display form shown on the keypad."""
        return _GLYPHS[self]

    @classmethod
    def parse(cls, symbol: str) -> Operator:
        """Accept either the stored symbol or its keypad glyph."""
        symbol = _FROM_GLYPH.get(symbol, symbol)
        return cls(symbol)


_GLYPHS = {
    Operator.PLUS: "+",
    Operator.MINUS: "−",
    Operator.TIMES: "×",
    Operator.DIVIDE: "÷",
}

_FROM_GLYPH = {glyph: op.value for op, glyph in _GLYPHS.items()}

OPERATOR_CHARS = frozenset(op.value for op in Operator)


class CommandKind(str, Enum):
    """Logical keys understood by the state machine."""

    DIGIT = "digit"
    POINT = "point"
    OPERATOR = "operator"
    EQUALS = "equals"
    CLEAR = "clear"
    PERCENT = "percent"
    TOGGLE_SIGN = "toggle-sign"
    BACKSPACE = "backspace"


@dataclass(frozen=True)
class Command:
    """A single input event. DIGIT, POINT and OPERATOR carry their symbol."""

    kind: CommandKind
    symbol: str = ""

    @classmethod
    def digit(cls, ch: str) -> Command:
        if len(ch) != 1 or ch not in "0123456789":
            raise ValueError(f"Not a digit: {ch!r}")
        return cls(CommandKind.DIGIT, ch)

    @classmethod
    def point(cls) -> Command:
        return cls(CommandKind.POINT, ".")

    @classmethod
    def operator(cls, op: str | Operator) -> Command:
        try:
            parsed = op if isinstance(op, Operator) else Operator.parse(op)
        except ValueError:
            raise ValueError(f"Unknown operator: {op!r}") from None
        return cls(CommandKind.OPERATOR, parsed.value)

    @classmethod
    def equals(cls) -> Command:
        return cls(CommandKind.EQUALS)

    @classmethod
    def clear(cls) -> Command:
        return cls(CommandKind.CLEAR)

    @classmethod
    def percent(cls) -> Command:
        return cls(CommandKind.PERCENT)

    @classmethod
    def toggle_sign(cls) -> Command:
        return cls(CommandKind.TOGGLE_SIGN)

    @classmethod
    def backspace(cls) -> Command:
        return cls(CommandKind.BACKSPACE)

    def __str__(self) -> str:
        if self.symbol:
            return f"{self.kind.value}({self.symbol})"
        return self.kind.value


@dataclass
class CalculatorState:
    """In-progress expression plus the two input mode flags.

    last_was_operator: the most recent token appended was a binary operator.
    has_dot: the number currently being typed already holds a decimal point.
    """

    expression: str = ""
    last_was_operator: bool = False
    has_dot: bool = False

    def reset(self) -> None:
        self.expression = ""
        self.last_was_operator = False
        self.has_dot = False
