"""Recursive-descent evaluator for integer arithmetic.

Grammar, one method per rule:

    expr   = term (('+' | '-') term)*
    term   = factor (('*' | '/') factor)*
    factor = NUMBER | '(' expr ')'
    NUMBER = digit+

Each rule returns the integer value of what it recognized; no tree or token
list is materialized. Choice is committed: once '(' is consumed a missing ')'
is an error at the current cursor, never a backtrack.
"""

from __future__ import annotations

from typing import Optional

from exprcalc.config import Settings
from exprcalc.errors import (
    DivisionByZero,
    ExprError,
    ExprSyntaxError,
    LiteralTooLarge,
    NestingTooDeep,
)
from exprcalc.models import Outcome
from exprcalc.scanner import Scanner


def _divide(dividend: int, divisor: int) -> int:
    """Integer division truncating toward zero: -7 / 2 == -3."""
    quotient = abs(dividend) // abs(divisor)
    if (dividend < 0) != (divisor < 0):
        return -quotient
    return quotient


class Parser:
    """One evaluation session over a single source text.

    Owns its scanner exclusively, so independent sessions can run in
    parallel threads without coordination.
    """

    def __init__(self, text: str, settings: Optional[Settings] = None) -> None:
        self.scanner = Scanner(text)
        self.settings = settings or Settings()
        self.depth = 0

    def evaluate(self) -> int:
        """Parse the whole text as one expression and return its value."""
        value = self.parse_expression()
        self.scanner.skip_whitespace()
        if not self.scanner.at_end():
            raise ExprSyntaxError(
                f"unexpected trailing characters {self.scanner.remainder()!r}",
                self.scanner.pos,
            )
        return value

    def parse_expression(self) -> int:
        value = self.parse_term()
        while True:
            c = self.scanner.peek()
            if c == "+":
                self.scanner.match("+")
                value += self.parse_term()
            elif c == "-":
                self.scanner.match("-")
                value -= self.parse_term()
            else:
                break
        return value

    def parse_term(self) -> int:
        value = self.parse_factor()
        while True:
            c = self.scanner.peek()
            if c == "*":
                self.scanner.match("*")
                value *= self.parse_factor()
            elif c == "/":
                self.scanner.match("/")
                self.scanner.skip_whitespace()
                divisor_pos = self.scanner.pos
                divisor = self.parse_factor()
                if divisor == 0:
                    raise DivisionByZero(divisor_pos)
                value = _divide(value, divisor)
            else:
                break
        return value

    def parse_factor(self) -> int:
        if self.scanner.peek() != "(":
            return self.parse_number()

        open_pos = self.scanner.pos
        self.scanner.match("(")
        self.depth += 1
        max_depth = self.settings.max_depth
        if max_depth and self.depth > max_depth:
            raise NestingTooDeep(f"parentheses nested deeper than {max_depth}", open_pos)

        value = self.parse_expression()
        if not self.scanner.match(")"):
            raise ExprSyntaxError("expected ')'", self.scanner.pos)
        self.depth -= 1
        return value

    def parse_number(self) -> int:
        self.scanner.skip_whitespace()
        start = self.scanner.pos
        digits = self.scanner.read_digits()
        if not digits:
            raise ExprSyntaxError("expected number", self.scanner.pos)

        max_digits = self.settings.max_digits
        if max_digits and len(digits) > max_digits:
            raise LiteralTooLarge(
                f"number literal has {len(digits)} digits, limit is {max_digits}", start
            )
        try:
            return int(digits)
        except ValueError:
            # Host refused the conversion (its own digit limit)
            raise LiteralTooLarge(f"number literal has {len(digits)} digits", start) from None


def evaluate(text: str, settings: Optional[Settings] = None) -> int:
    """Evaluate an arithmetic expression and return its integer value.

    Args:
        text: Source expression, e.g. "2 + 3 * 4".
        settings: Digit and nesting limits. Defaults to Settings().

    Raises:
        ExprSyntaxError: Malformed input (including LiteralTooLarge and
            NestingTooDeep).
        DivisionByZero: A '/' whose right-hand factor is zero.
    """
    if not isinstance(text, str):
        raise TypeError(f"expression must be str, not {type(text).__name__}")
    return Parser(text, settings).evaluate()


def try_evaluate(text: str, settings: Optional[Settings] = None) -> Outcome:
    """Like evaluate(), but report failure as an Outcome instead of raising.

    With the nesting limit disabled, input that exhausts the interpreter
    stack is reported as NestingTooDeep without a position.
    """
    try:
        value = evaluate(text, settings)
    except ExprError as err:
        return Outcome.failure(text, err)
    except RecursionError:
        err = NestingTooDeep("expression nested too deeply for the interpreter stack")
        return Outcome.failure(text, err)
    return Outcome.success(text, value)
