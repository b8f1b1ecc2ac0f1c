"""exprcalc — integer arithmetic expression evaluator.

Single-pass recursive descent: parsing and evaluation happen together, no
syntax tree is built. Supports + - * / and parentheses over non-negative
integer literals, with the usual precedence and left associativity.

Usage:
    >>> from exprcalc import evaluate
    >>> evaluate("2 + 3 * 4")
    14

    python -m exprcalc eval "(2 + 3) * 4"     # Single expression
    python -m exprcalc batch exprs.txt        # One expression per line
    python -m exprcalc repl                   # Interactive loop
"""

from exprcalc.errors import (
    DivisionByZero,
    ErrorKind,
    ExprError,
    ExprSyntaxError,
    LiteralTooLarge,
    NestingTooDeep,
)
from exprcalc.parser import evaluate, try_evaluate

__all__ = [
    "DivisionByZero",
    "ErrorKind",
    "ExprError",
    "ExprSyntaxError",
    "LiteralTooLarge",
    "NestingTooDeep",
    "evaluate",
    "try_evaluate",
]
