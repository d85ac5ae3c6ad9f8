"""Safe arithmetic evaluation for calcpad.

Two stages, always in this order:
1. validate() — allow-list filter on untrusted text (characters and operator runs)
2. evaluate() — recursive-descent evaluation of the filtered text

compute() chains normalize → validate → evaluate and is the only entry point
the state machine uses. Nothing here executes the text as code.
"""

from __future__ import annotations

import logging
import math
import re
from decimal import Decimal

logger = logging.getLogger(__name__)


class CalculatorError(ValueError):
    """Base class for everything the evaluator rejects."""


class InvalidCharacter(CalculatorError):
    """Text holds a character outside the arithmetic allow-list."""

    def __init__(self, char: str) -> None:
        super().__init__(f"Invalid character: {char!r}")
        self.char = char


class InvalidOperatorSequence(CalculatorError):
    """Two or more operator characters are adjacent."""

    def __init__(self, run: str) -> None:
        super().__init__(f"Invalid operator sequence: {run!r}")
        self.run = run


class EvaluationError(CalculatorError):
    """Allow-list-legal text that is not a well-formed expression."""


# Display glyph → computable symbol
_NORMALIZE = str.maketrans({"×": "*", "÷": "/"})

_ALLOWED_RE = re.compile(r"[0-9+\-*/().%\s]*")
_DISALLOWED_CHAR_RE = re.compile(r"[^0-9+\-*/().%\s]")
_WHITESPACE_RE = re.compile(r"\s+")
_OPERATOR_RUN_RE = re.compile(r"[+\-*/%]{2,}")

# Numbers: "12", "12.", "12.5", ".5". Leading zeros are decimal ("012" is 12), never octal
_TOKEN_RE = re.compile(r"\s*(?:(\d+\.?\d*|\.\d+)|([+\-*/%()]))")


def normalize(text: str) -> str:
    """Map keypad glyphs (× ÷) to the operators evaluate() understands."""
    return text.translate(_NORMALIZE)


def validate(text: str) -> str:
    """Check text against the arithmetic allow-list.

    Raises InvalidCharacter for anything outside digits, ``+ - * / ( ) . %``
    and whitespace, and InvalidOperatorSequence when operators are adjacent
    once whitespace is removed. Balanced parentheses are not checked here.

    Returns the text unchanged so calls can be chained.
    """
    if not _ALLOWED_RE.fullmatch(text):
        bad = _DISALLOWED_CHAR_RE.search(text)
        raise InvalidCharacter(bad.group(0) if bad else text)
    run = _OPERATOR_RUN_RE.search(_WHITESPACE_RE.sub("", text))
    if run:
        raise InvalidOperatorSequence(run.group(0))
    return text


def _tokenize(text: str) -> list[tuple[str, str]]:
    tokens: list[tuple[str, str]] = []
    pos = 0
    end = len(text.rstrip())
    while pos < end:
        m = _TOKEN_RE.match(text, pos)
        if not m:
            raise EvaluationError(f"Unexpected input at position {pos}: {text[pos:]!r}")
        number, op = m.groups()
        tokens.append(("num", number) if number else ("op", op))
        pos = m.end()
    return tokens


def _divide(left: float, right: float) -> float:
    """IEEE division: x/0 is ±inf and 0/0 is nan instead of raising."""
    if right == 0.0:
        if left == 0.0 or math.isnan(left):
            return math.nan
        return math.copysign(math.inf, left) * math.copysign(1.0, right)
    return left / right


def _remainder(left: float, right: float) -> float:
    """Truncated remainder; the result takes the dividend's sign."""
    if right == 0.0 or math.isinf(left) or math.isnan(left) or math.isnan(right):
        return math.nan
    if math.isinf(right):
        return left
    return math.fmod(left, right)


_BINARY_OPS = {
    "+": lambda a, b: a + b,
    "-": lambda a, b: a - b,
    "*": lambda a, b: a * b,
    "/": _divide,
    "%": _remainder,
}


class _Parser:
    """Recursive descent over the token list.

    expr    := term (('+' | '-') term)*
    term    := unary (('*' | '/' | '%') unary)*
    unary   := ('+' | '-') unary | primary
    primary := NUMBER | '(' expr ')'
    """

    def __init__(self, tokens: list[tuple[str, str]]) -> None:
        self.tokens = tokens
        self.pos = 0

    def _peek(self) -> tuple[str, str]:
        if self.pos >= len(self.tokens):
            return "end", ""
        return self.tokens[self.pos]

    def _next(self) -> tuple[str, str]:
        token = self._peek()
        self.pos += 1
        return token

    def parse(self) -> float:
        if not self.tokens:
            raise EvaluationError("Expression is empty")
        value = self._expr()
        kind, text = self._peek()
        if kind != "end":
            raise EvaluationError(f"Unexpected token: {text!r}")
        return value

    def _expr(self) -> float:
        value = self._term()
        while self._peek() in (("op", "+"), ("op", "-")):
            _, op = self._next()
            value = _BINARY_OPS[op](value, self._term())
        return value

    def _term(self) -> float:
        value = self._unary()
        while self._peek() in (("op", "*"), ("op", "/"), ("op", "%")):
            _, op = self._next()
            value = _BINARY_OPS[op](value, self._unary())
        return value

    def _unary(self) -> float:
        kind, text = self._peek()
        if kind == "op" and text in "+-":
            self.pos += 1
            value = self._unary()
            return -value if text == "-" else value
        return self._primary()

    def _primary(self) -> float:
        kind, text = self._next()
        if kind == "num":
            return float(text)
        if (kind, text) == ("op", "("):
            value = self._expr()
            if self._next() != ("op", ")"):
                raise EvaluationError("Missing closing parenthesis")
            return value
        if kind == "end":
            raise EvaluationError("Unexpected end of expression")
        raise EvaluationError(f"Unexpected token: {text!r}")


def evaluate(text: str) -> float:
    """Compute the value of validated text with standard precedence.

    Non-finite results (division by zero, remainder by zero) are returned as
    inf/nan. Malformed text raises EvaluationError.
    """
    try:
        return _Parser(_tokenize(text)).parse()
    except RecursionError:
        raise EvaluationError("Expression nested too deeply") from None


def compute(text: str) -> float:
    """Normalize, validate, then evaluate raw display text."""
    expr = validate(normalize(text))
    value = evaluate(expr)
    logger.debug("compute %r -> %r", text, value)
    return value


def format_number(value: float) -> str:
    """Render a float the way the display shows it.

    Integral values drop the fractional part, non-finite values spell out
    Infinity / NaN, and very large or very small magnitudes use exponent form.
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0.0:
        return "0"
    magnitude = abs(value)
    if magnitude >= 1e21 or magnitude < 1e-6:
        mantissa, _, exponent = repr(float(value)).partition("e")
        if mantissa.endswith(".0"):
            mantissa = mantissa[:-2]
        sign = "-" if exponent.startswith("-") else "+"
        return f"{mantissa}e{sign}{int(exponent.lstrip('+-'))}"
    # Past 2**53 int() would print the exact binary value, not the shortest digits
    if value.is_integer() and magnitude < 2**53:
        return str(int(value))
    return format(Decimal(repr(float(value))).normalize(), "f")
