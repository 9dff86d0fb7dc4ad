"""Consumes scanf-style fields from the front of a line.

MAP file symbol lines are fixed-width hex fields followed by a free-form
name, and the linkers' own readers decode them with scanf.  FieldScanner
reproduces the subset of scanf conversions needed, with the same greedy,
non-backtracking behaviour: a field reads as much as its width allows, and
whatever follows is left for the next field.
"""

from typing import Optional

WHITESPACE = " \t\n\v\f\r"
_HEX_DIGITS = "0123456789abcdefABCDEF"


class FieldScanner:
    def __init__(self, text: str):
        self.text = text  # type: str
        self.pos = 0  # type: int

    def at_end(self) -> bool:
        return self.pos >= len(self.text)

    def skip_whitespace(self) -> None:
        while not self.at_end() and self.text[self.pos] in WHITESPACE:
            self.pos += 1

    def hex_field(self, width: int) -> Optional[int]:
        """Reads 1 to width hex digits after optional whitespace (%<width>X).

        :param width: maximum number of digits to consume
        :return: parsed value, or None if no digit was found
        """
        self.skip_whitespace()
        start = self.pos
        end = min(len(self.text), start + width)
        while self.pos < end and self.text[self.pos] in _HEX_DIGITS:
            self.pos += 1
        if self.pos == start:
            return None
        return int(self.text[start:self.pos], 16)

    def literal(self, expected: str) -> bool:
        """Matches expected text, exactly, after optional whitespace."""
        self.skip_whitespace()
        if not self.text.startswith(expected, self.pos):
            return False
        self.pos += len(expected)
        return True

    def any_char(self) -> bool:
        """Discards exactly one character, whatever it is (%*c)."""
        if self.at_end():
            return False
        self.pos += 1
        return True

    def token(self, stop: str) -> Optional[str]:
        """Reads a non-empty run of characters not in stop (%[^stop]).

        Leading whitespace is skipped first.

        :return: the run, or None if it would be empty
        """
        self.skip_whitespace()
        start = self.pos
        while not self.at_end() and self.text[self.pos] not in stop:
            self.pos += 1
        if self.pos == start:
            return None
        return self.text[start:self.pos]
