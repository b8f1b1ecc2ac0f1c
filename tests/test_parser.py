"""Tests for evaluate(): grammar, precedence, associativity and errors."""

import sys
from concurrent.futures import ThreadPoolExecutor

import pytest

from exprcalc import (
    DivisionByZero,
    ErrorKind,
    ExprError,
    ExprSyntaxError,
    LiteralTooLarge,
    NestingTooDeep,
    evaluate,
    try_evaluate,
)
from exprcalc.config import Settings
from exprcalc.parser import Parser


# --- Literals ---

@pytest.mark.parametrize("text,expected", [
    ("42", 42),
    ("0", 0),
    ("007", 7),
    ("  9  ", 9),
    ("99999999999999999999", 99999999999999999999),
])
def test_number_literal(text, expected):
    assert evaluate(text) == expected


def test_unicode_decimal_digits():
    assert evaluate("١٢ + 1") == 13


# --- Precedence and associativity ---

@pytest.mark.parametrize("text,expected", [
    ("2 + 3 * 4", 14),
    ("(2 + 3) * 4", 20),
    ("10 - 2 * 3 + 4 / 2", 6),
    ("2 * 3 / 4", 1),
    ("2 * (3 / 4)", 0),
    ("((2 + 3) * (4 - 1))", 15),
    ("(((1 + 2)))", 3),
])
def test_precedence(text, expected):
    assert evaluate(text) == expected


def test_subtraction_is_left_associative():
    assert evaluate("20 - 5 - 3") == 12


def test_division_is_left_associative():
    assert evaluate("8 / 4 / 2") == 1


# --- Division rounding ---

@pytest.mark.parametrize("text,expected", [
    ("100 / 7", 14),
    ("(0 - 7) / 2", -3),
    ("7 / (0 - 2)", -3),
    ("(0 - 7) / (0 - 2)", 3),
    ("(0 - 1) / 3", 0),
])
def test_division_truncates_toward_zero(text, expected):
    assert evaluate(text) == expected


# --- Whitespace ---

def test_whitespace_insensitive():
    assert evaluate("  1   +   2  ") == evaluate("1+2") == 3


def test_tabs_and_newlines_are_whitespace():
    assert evaluate("1\t+\n2") == 3


# --- Syntax errors ---

def test_unmatched_paren():
    with pytest.raises(ExprSyntaxError, match=r"expected '\)'") as exc:
        evaluate("(1 + 2")
    assert exc.value.position == 6


def test_missing_inner_paren_reports_cursor_without_rewinding():
    with pytest.raises(ExprSyntaxError) as exc:
        evaluate("((1)")
    assert exc.value.position == 4


def test_trailing_garbage_position():
    text = "3 + 4 abc"
    with pytest.raises(ExprSyntaxError, match="unexpected trailing characters") as exc:
        evaluate(text)
    assert exc.value.position == text.index("a")
    assert "'abc'" in exc.value.message


def test_missing_operand_at_end():
    with pytest.raises(ExprSyntaxError, match="expected number") as exc:
        evaluate("2 +")
    assert exc.value.position == 3


@pytest.mark.parametrize("text,position", [
    ("", 0),
    ("   ", 3),
    ("()", 1),
    ("2 + + 3", 4),
    ("-5", 0),
    ("1 * x", 4),
])
def test_expected_number(text, position):
    with pytest.raises(ExprSyntaxError, match="expected number") as exc:
        evaluate(text)
    assert exc.value.position == position


@pytest.mark.parametrize("text,position", [
    ("1 2", 2),
    ("1)", 1),
    ("(1) (2)", 4),
])
def test_trailing_characters(text, position):
    with pytest.raises(ExprSyntaxError, match="unexpected trailing characters") as exc:
        evaluate(text)
    assert exc.value.position == position


def test_syntax_error_is_a_value_error():
    with pytest.raises(ValueError):
        evaluate("2 + + 3")


def test_error_str_includes_position():
    with pytest.raises(ExprSyntaxError) as exc:
        evaluate("2 +")
    assert str(exc.value) == "expected number at position 3"


def test_non_string_rejected():
    with pytest.raises(TypeError):
        evaluate(42)


# --- Division by zero ---

def test_division_by_zero():
    with pytest.raises(DivisionByZero) as exc:
        evaluate("5 / 0")
    assert exc.value.position == 4
    assert exc.value.kind is ErrorKind.DIVISION_BY_ZERO


def test_division_by_computed_zero():
    with pytest.raises(DivisionByZero) as exc:
        evaluate("1 / (2 - 2)")
    assert exc.value.position == 4


def test_division_by_zero_is_a_zero_division_error():
    with pytest.raises(ZeroDivisionError):
        evaluate("1 / 0")


def test_zero_dividend_is_fine():
    assert evaluate("0 / 5") == 0


# --- Limits ---

def test_literal_over_digit_limit():
    with pytest.raises(LiteralTooLarge) as exc:
        evaluate("12 + 1234", Settings(max_digits=3))
    assert exc.value.position == 5
    assert exc.value.kind is ErrorKind.RANGE


def test_literal_at_digit_limit():
    assert evaluate("999", Settings(max_digits=3)) == 999


def test_nesting_within_limit():
    assert evaluate("((1))", Settings(max_depth=2)) == 1


def test_nesting_over_limit():
    with pytest.raises(NestingTooDeep) as exc:
        evaluate("(((1)))", Settings(max_depth=2))
    assert exc.value.position == 2


def test_sibling_groups_do_not_accumulate_depth():
    assert evaluate("(1) + (2) + ((3))", Settings(max_depth=2)) == 6


def test_default_depth_accepts_moderate_nesting():
    depth = 50
    assert evaluate("(" * depth + "7" + ")" * depth) == 7


# --- Determinism and composition ---

@pytest.mark.parametrize("text", ["2 + 3 * 4", "3 + 4 abc", "5 / 0"])
def test_repeated_evaluation_is_deterministic(text):
    outcomes = [try_evaluate(text) for _ in range(3)]
    assert outcomes[0] == outcomes[1] == outcomes[2]


@pytest.mark.parametrize("left,right", [
    ("2 + 3 * 4", "8 / 4 / 2"),
    ("(20 - 5) - 3", "7"),
    ("100 / 7", "(1 + 2) * 3"),
])
def test_composed_expression_matches_sub_results(left, right):
    a = evaluate(left)
    b = evaluate(right)
    assert evaluate(f"({left}) + ({right})") == a + b
    assert evaluate(f"({left}) - ({right})") == a - b
    assert evaluate(f"({left}) * ({right})") == a * b
    assert evaluate(f"({left}) / ({right})") == int(a / b)


def test_independent_sessions_in_parallel():
    texts = [f"{i} * ({i} + 1) / 2" for i in range(200)]
    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(evaluate, texts))
    assert results == [i * (i + 1) // 2 for i in range(200)]


def test_parser_rules_are_usable_directly():
    p = Parser("3 * 4 + 1")
    assert p.parse_term() == 12
    assert p.scanner.pos == 6


# --- try_evaluate ---

def test_try_evaluate_success():
    outcome = try_evaluate("1 + 1")
    assert outcome.ok
    assert outcome.value == 2


def test_try_evaluate_failure():
    outcome = try_evaluate("(1 + 2")
    assert not outcome.ok
    assert outcome.kind == "syntax"
    assert outcome.error == "expected ')'"
    assert outcome.position == 6


def test_all_errors_share_a_base():
    for text in ("(1", "1 / 0", "x"):
        with pytest.raises(ExprError):
            evaluate(text)


def test_try_evaluate_reports_stack_exhaustion():
    depth = 5000
    outcome = try_evaluate("(" * depth + "1" + ")" * depth, Settings(max_depth=0))
    assert not outcome.ok
    assert outcome.kind == "nesting"
    assert outcome.position is None


def test_literal_refused_by_host_conversion():
    text = "9" * 5000
    host_limit = getattr(sys, "get_int_max_str_digits", lambda: 0)()
    if host_limit and host_limit < len(text):
        with pytest.raises(LiteralTooLarge) as exc:
            evaluate(text, Settings(max_digits=0))
        assert exc.value.position == 0
        assert exc.value.kind is ErrorKind.RANGE
    else:
        assert evaluate(text, Settings(max_digits=0)) == 10 ** 5000 - 1
