"""Error taxonomy for expression evaluation.

Every failure carries a human-readable message and, where one exists, the
cursor position at which it was detected. The first error ends the
evaluation; there is no recovery or multi-error reporting.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Failure categories, stable for JSON output."""

    SYNTAX = "syntax"
    RANGE = "range"
    NESTING = "nesting"
    DIVISION_BY_ZERO = "division-by-zero"


class ExprError(Exception):
    """Base class for all evaluation failures."""

    kind = ErrorKind.SYNTAX

    def __init__(self, message: str, position: Optional[int] = None) -> None:
        self.message = message
        self.position = position
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.position is None:
            return self.message
        return f"{self.message} at position {self.position}"


class ExprSyntaxError(ExprError, ValueError):
    """Malformed input: missing number, missing ')', or trailing characters."""


class LiteralTooLarge(ExprSyntaxError):
    """A number literal exceeds the configured digit limit."""

    kind = ErrorKind.RANGE


class NestingTooDeep(ExprSyntaxError):
    """Parentheses nest deeper than the configured limit."""

    kind = ErrorKind.NESTING


class DivisionByZero(ExprError, ZeroDivisionError):
    """The right-hand factor of '/' evaluated to zero."""

    kind = ErrorKind.DIVISION_BY_ZERO

    def __init__(self, position: Optional[int] = None) -> None:
        super().__init__("division by zero", position)
