"""Tests for calcpad.evaluator: normalize, validate, evaluate, format_number."""

import math

import pytest

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


# --- normalize ---

def test_normalize_maps_glyphs():
    assert normalize("6×7÷2") == "6*7/2"


def test_normalize_is_identity_elsewhere():
    assert normalize("12+3.5-(4%2)") == "12+3.5-(4%2)"
    assert normalize("") == ""


# --- validate ---

def test_validate_passes_arithmetic():
    assert validate(" (12 + 3.5) * 2 % 4 / 1 ") == " (12 + 3.5) * 2 % 4 / 1 "


def test_validate_rejects_letters():
    with pytest.raises(InvalidCharacter) as exc:
        validate("2+a")
    assert exc.value.char == "a"


@pytest.mark.parametrize("text", ["1e5", "Infinity", "2**3x", "__import__('os')", "2^3", "6×7"])
def test_validate_rejects_non_arithmetic_text(text):
    with pytest.raises(CalculatorError):
        validate(text)


def test_validate_rejects_operator_run():
    with pytest.raises(InvalidOperatorSequence) as exc:
        validate("5*-3")
    assert exc.value.run == "*-"


def test_validate_ignores_whitespace_between_operators():
    """'2 + + 3' is still two adjacent operators once spaces are gone."""
    with pytest.raises(InvalidOperatorSequence):
        validate("2 + + 3")


def test_validate_does_not_check_parentheses():
    assert validate("(1+2") == "(1+2"
    assert validate(")") == ")"


def test_errors_are_value_errors():
    for cls in (InvalidCharacter, InvalidOperatorSequence, EvaluationError):
        assert issubclass(cls, CalculatorError)
        assert issubclass(cls, ValueError)


# --- evaluate: arithmetic and precedence ---

@pytest.mark.parametrize(
    "text, expected",
    [
        ("2+3", 5.0),
        ("10-4", 6.0),
        ("3*7", 21.0),
        ("15/4", 3.75),
        ("2+3*4", 14.0),
        ("10-2*3+4/2", 6.0),
        ("8-3-2", 3.0),
        ("16/4/2", 2.0),
        ("(2+3)*4", 20.0),
        ("((2+3)*(4-1))", 15.0),
        ("(((1+2)))", 3.0),
        ("  2  +  3  ", 5.0),
        ("-5+3", -2.0),
        ("-(2+3)", -5.0),
        ("+4", 4.0),
        ("7%3", 1.0),
        ("-7%3", -1.0),
        ("2+7%3*2", 4.0),
        ("5.", 5.0),
        (".5", 0.5),
        ("0.", 0.0),
    ],
)
def test_evaluate(text, expected):
    assert evaluate(text) == pytest.approx(expected)


def test_evaluate_decimals():
    assert evaluate("3.14*2") == pytest.approx(6.28)


# --- evaluate: non-finite results are returned, not raised ---

def test_division_by_zero_is_infinite():
    assert evaluate("1/0") == math.inf
    assert evaluate("-1/0") == -math.inf


def test_zero_over_zero_is_nan():
    assert math.isnan(evaluate("0/0"))


def test_remainder_by_zero_is_nan():
    assert math.isnan(evaluate("5%0"))


# --- evaluate: malformed text ---

@pytest.mark.parametrize(
    "text",
    [")", "(1+2", "1+2)", "", "   ", "1+", "-", "2(3)", "(2)(3)", "1 2", ".", "1.2.3", "()"],
)
def test_evaluate_rejects_malformed(text):
    with pytest.raises(EvaluationError):
        evaluate(text)


def test_evaluate_rejects_deep_nesting():
    text = "(" * 5000 + "1" + ")" * 5000
    with pytest.raises(EvaluationError):
        evaluate(text)


# --- compute ---

def test_compute_normalizes_then_evaluates():
    assert compute("6×7") == pytest.approx(42.0)
    assert compute("8÷2") == pytest.approx(4.0)


def test_compute_validates_before_evaluating():
    with pytest.raises(InvalidCharacter):
        compute("2+abs(3)")
    with pytest.raises(InvalidOperatorSequence):
        compute("2×÷3")


# --- format_number ---

@pytest.mark.parametrize(
    "value, expected",
    [
        (15.0, "15"),
        (-7.0, "-7"),
        (0.5, "0.5"),
        (-0.0, "0"),
        (0.0, "0"),
        (123.456, "123.456"),
        (0.1 + 0.2, "0.30000000000000004"),
        (1 / 3, "0.3333333333333333"),
        (1e-5, "0.00001"),
        (1e-6, "0.000001"),
        (1.5e-7, "1.5e-7"),
        (1e20, "100000000000000000000"),
        (2.0**53, "9007199254740992"),
        (2.0**60, "1152921504606847000"),
        (-(2.0**60), "-1152921504606847000"),
        (1e21, "1e+21"),
        (-2.5e22, "-2.5e+22"),
        (math.inf, "Infinity"),
        (-math.inf, "-Infinity"),
        (math.nan, "NaN"),
    ],
)
def test_format_number(value, expected):
    assert format_number(value) == expected


def test_formatted_plain_number_evaluates_to_itself():
    for text in ("15", "0.5", "-7", "123.456", "0.00001"):
        assert format_number(compute(text)) == text
