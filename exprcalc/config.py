"""Evaluation limits, read from the environment.

    EXPRCALC_MAX_DIGITS  longest accepted number literal (default 4300, 0 = no limit)
    EXPRCALC_MAX_DEPTH   deepest accepted parenthesis nesting (default 200, 0 = no limit)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

DEFAULT_MAX_DIGITS = 4300
DEFAULT_MAX_DEPTH = 200


def _read_limit(environ: Mapping[str, str], key: str, default: int) -> int:
    raw = environ.get(key, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{key} must be an integer, got {raw!r}") from None
    if value < 0:
        raise ValueError(f"{key} must be >= 0, got {value}")
    return value


@dataclass(frozen=True)
class Settings:
    """Limits applied to one evaluation. Zero disables a limit."""

    max_digits: int = DEFAULT_MAX_DIGITS
    max_depth: int = DEFAULT_MAX_DEPTH

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> Settings:
        """Build settings from EXPRCALC_* variables, falling back to defaults."""
        env = os.environ if environ is None else environ
        return cls(
            max_digits=_read_limit(env, "EXPRCALC_MAX_DIGITS", DEFAULT_MAX_DIGITS),
            max_depth=_read_limit(env, "EXPRCALC_MAX_DEPTH", DEFAULT_MAX_DEPTH),
        )
