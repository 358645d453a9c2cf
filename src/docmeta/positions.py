"""Position and range tokens of test annotations.

A position is `N` (column N on the reference line) or `L:C` (column C on
the line L-1 lines after the reference line). Both are 1-based and may be
negative. A range is a position optionally followed by `-` and an end
position.
"""

from __future__ import annotations

from dataclasses import dataclass

from .models import Span
from .scanner import Scanner
from .source import Source


@dataclass(frozen=True)
class Token:
    """A signed number read from an annotation."""

    value: int


class NoToken:
    """No number at the cursor."""

    def __repr__(self) -> str:
        return "NO_TOKEN"


NO_TOKEN = NoToken()


def _is_digit(c: str) -> bool:
    return c in "0123456789"


def number(s: Scanner) -> Token | NoToken:
    """Read an optional `-` followed by digits.

    Leaves the cursor untouched and returns NO_TOKEN if there are no digits.
    """
    start = s.cursor
    negative = s.eat_if("-")
    digits = s.eat_while(_is_digit)
    if not digits:
        s.cursor = start
        return NO_TOKEN
    value = int(digits)
    return Token(-value if negative else value)


def starts_with_position(text: str) -> bool:
    """Whether `text` begins with a digit or `-digit`."""
    return not isinstance(number(Scanner(text)), NoToken)


class PositionResolver:
    """Resolves annotation positions relative to a reference line."""

    def __init__(self, source: Source, reference_line: int):
        self.source = source
        self.reference_line = reference_line

    def position(self, s: Scanner) -> int | None:
        first = number(s)
        if isinstance(first, NoToken):
            return None

        if s.eat_if(":"):
            second = number(s)
            if isinstance(second, NoToken):
                return None
            delta, column = first.value - 1, second.value - 1
        else:
            delta, column = 0, first.value - 1

        line = self.reference_line + delta
        if line < 0 or column < 0:
            return None
        return self.source.line_column_to_byte(line, column)

    def range(self, s: Scanner) -> Span | None:
        start = self.position(s)
        if start is None:
            return None
        if s.eat_if("-"):
            end = self.position(s)
            if end is None:
                return None
        else:
            end = start
        if end < start:
            return None
        return Span(start, end)


def resolve_range(
    text: str, source: Source, reference_line: int
) -> tuple[Span | None, str]:
    """Split an annotation value into its range and the remaining text.

    If no range can be read and resolved, the range is None and the whole
    text is returned.
    """
    s = Scanner(text)
    span = PositionResolver(source, reference_line).range(s)
    if span is None:
        return None, text
    return span, s.after()
