"""Cursor over the source text.

The cursor only moves forward, and only past characters that were actually
consumed. peek() and match() both skip whitespace first, so even a lookahead
advances the cursor over insignificant blanks.
"""

from __future__ import annotations

from dataclasses import dataclass

# Returned by peek() at end of input
EOF_CHAR = ""


@dataclass
class Scanner:
    text: str
    pos: int = 0

    def at_end(self) -> bool:
        return self.pos >= len(self.text)

    def skip_whitespace(self) -> None:
        while self.pos < len(self.text) and self.text[self.pos].isspace():
            self.pos += 1

    def peek(self) -> str:
        """Next significant character, or EOF_CHAR when input is exhausted."""
        self.skip_whitespace()
        if self.at_end():
            return EOF_CHAR
        return self.text[self.pos]

    def match(self, expected: str) -> bool:
        """Consume `expected` if it is the next significant character.

        On failure the cursor stays where whitespace skipping left it.
        """
        self.skip_whitespace()
        if self.pos < len(self.text) and self.text[self.pos] == expected:
            self.pos += 1
            return True
        return False

    def read_digits(self) -> str:
        """Consume a maximal run of decimal digits (may be empty)."""
        start = self.pos
        while self.pos < len(self.text) and self.text[self.pos].isdecimal():
            self.pos += 1
        return self.text[start:self.pos]

    def remainder(self) -> str:
        return self.text[self.pos:]
