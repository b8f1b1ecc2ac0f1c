"""Data models for evaluation results.

Outcome is the tagged success-or-failure record that flows from
try_evaluate() to the renderer and the CLI's JSON output.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from exprcalc.errors import ExprError


@dataclass
class Outcome:
    """Result of evaluating one expression."""

    expression: str
    value: Optional[int] = None
    error: str = ""
    kind: str = ""
    position: Optional[int] = None

    @property
    def ok(self) -> bool:
        return not self.kind

    @classmethod
    def success(cls, expression: str, value: int) -> Outcome:
        return cls(expression=expression, value=value)

    @classmethod
    def failure(cls, expression: str, err: ExprError) -> Outcome:
        return cls(
            expression=expression,
            error=err.message,
            kind=err.kind.value,
            position=err.position,
        )

    def to_dict(self) -> dict:
        """Serialize to a JSON-compatible dict."""
        d: dict = {"expression": self.expression, "ok": self.ok}
        if self.ok:
            d["value"] = self.value
        else:
            d["error"] = {
                "kind": self.kind,
                "message": self.error,
                "position": self.position,
            }
        return d

    @classmethod
    def from_dict(cls, d: dict) -> Outcome:
        """Deserialize from a dict produced by to_dict()."""
        err = d.get("error") or {}
        return cls(
            expression=d.get("expression", ""),
            value=d.get("value"),
            error=err.get("message", ""),
            kind=err.get("kind", ""),
            position=err.get("position"),
        )
