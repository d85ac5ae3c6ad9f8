"""Input state machine for calcpad.

Each keypad press maps to one method call that mutates the in-progress
expression and returns the new display text. Percent, sign toggle and equals
hand the expression to evaluator.compute(); nothing else evaluates text.
"""

from __future__ import annotations

import logging
import re
from typing import Callable, Optional

from calcpad.config import Settings
from calcpad.evaluator import CalculatorError, compute, format_number
from calcpad.models import OPERATOR_CHARS, CalculatorState, Command, CommandKind, Operator

logger = logging.getLogger(__name__)

_OPERATOR_SPLIT_RE = re.compile(r"[+\-*/]")

Renderer = Callable[[str], None]


class InputStateMachine:
    """Owns one CalculatorState and applies commands to it.

    Args:
        renderer: Called with the display text after every command.
        settings: Error indicator and empty-display placeholder.
        state: Starting state; a fresh empty state when omitted.
    """

    def __init__(
        self,
        renderer: Optional[Renderer] = None,
        settings: Optional[Settings] = None,
        state: Optional[CalculatorState] = None,
    ) -> None:
        self._renderer = renderer
        self._settings = settings or Settings()
        self._state = state if state is not None else CalculatorState()
        self._display = self._state.expression or self._settings.placeholder
        self._handlers: dict[CommandKind, Callable[[Command], str]] = {
            CommandKind.DIGIT: lambda c: self.press_digit_or_point(c.symbol),
            CommandKind.POINT: lambda c: self.press_digit_or_point("."),
            CommandKind.OPERATOR: lambda c: self.press_operator(c.symbol),
            CommandKind.EQUALS: lambda c: self.equals(),
            CommandKind.CLEAR: lambda c: self.clear(),
            CommandKind.PERCENT: lambda c: self.percent(),
            CommandKind.TOGGLE_SIGN: lambda c: self.toggle_sign(),
            CommandKind.BACKSPACE: lambda c: self.backspace(),
        }

    @property
    def state(self) -> CalculatorState:
        return self._state

    @property
    def display(self) -> str:
        """Text currently shown. Never empty."""
        return self._display

    def _render(self, text: str) -> str:
        self._display = text or self._settings.placeholder
        if self._renderer:
            self._renderer(self._display)
        return self._display

    def _render_error(self) -> str:
        self._state.reset()
        return self._render(self._settings.error_text)

    def _replace_with(self, value: float) -> str:
        """Swap the expression for a computed value and resync the flags."""
        s = self._state
        s.expression = format_number(value)
        s.last_was_operator = False
        s.has_dot = "." in s.expression
        return self._render(s.expression)

    def dispatch(self, command: Command) -> str:
        """Apply one command and return the new display text."""
        logger.debug("dispatch %s on %r", command, self._state.expression)
        return self._handlers[command.kind](command)

    def press_digit_or_point(self, symbol: str) -> str:
        """Append a digit or the decimal point to the current number."""
        s = self._state
        if symbol == ".":
            if s.has_dot:
                return self._render(self._display)
            if not s.expression or s.last_was_operator:
                s.expression += "0."
                s.has_dot = True
                s.last_was_operator = False
                return self._render(s.expression)
            s.has_dot = True
        elif len(symbol) != 1 or symbol not in "0123456789":
            raise ValueError(f"Not a digit or point: {symbol!r}")

        s.expression += symbol
        s.last_was_operator = False
        return self._render(s.expression)

    def press_operator(self, op: str) -> str:
        """Append a binary operator, or replace the trailing one.

        A minus on an empty expression seeds a negative number instead and
        does not count as an operator.
        """
        op = Operator.parse(op).value
        s = self._state
        if not s.expression and op == Operator.MINUS.value:
            s.expression = op
            s.last_was_operator = False
            return self._render(s.expression)

        if s.last_was_operator:
            s.expression = s.expression[:-1] + op
        else:
            s.expression += op
        s.last_was_operator = True
        s.has_dot = False
        return self._render(s.expression)

    def clear(self) -> str:
        self._state.reset()
        return self._render("")

    def backspace(self) -> str:
        """Drop the last character and recompute both flags from what is left."""
        s = self._state
        if not s.expression:
            return self._render("")
        s.expression = s.expression[:-1]
        # A lone leading minus is a sign, not an operator
        s.last_was_operator = (
            s.expression[-1:] in OPERATOR_CHARS and s.expression != Operator.MINUS.value
        )
        s.has_dot = "." in _OPERATOR_SPLIT_RE.split(s.expression)[-1]
        return self._render(s.expression)

    def percent(self) -> str:
        """Replace the expression with its value divided by 100."""
        s = self._state
        try:
            value = compute(s.expression) if s.expression else 0.0
        except CalculatorError as e:
            logger.debug("percent failed on %r: %s", s.expression, e)
            return self._render_error()
        return self._replace_with(value / 100)

    def toggle_sign(self) -> str:
        """Negate the current value. Leaves an unevaluable expression alone."""
        s = self._state
        if not s.expression:
            return self._render(self._display)
        try:
            value = compute(s.expression)
        except CalculatorError as e:
            logger.debug("toggle-sign ignored on %r: %s", s.expression, e)
            return self._render(self._display)
        return self._replace_with(-value)

    def equals(self) -> str:
        """Evaluate the expression and show the result."""
        s = self._state
        try:
            value = compute(s.expression)
        except CalculatorError as e:
            logger.debug("equals failed on %r: %s", s.expression, e)
            return self._render_error()
        return self._replace_with(value)
