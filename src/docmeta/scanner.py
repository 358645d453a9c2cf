"""A forward-only cursor over a string."""

from __future__ import annotations

from collections.abc import Callable


class Scanner:
    """Consumes a string left to right.

    Example:
        s = Scanner("- name: str (named)")
        s.eat_if("-")          # True
        s.eat_whitespace()
        s.eat_until(":")       # "name"
    """

    def __init__(self, string: str):
        self.string = string
        self.cursor = 0

    def done(self) -> bool:
        return self.cursor >= len(self.string)

    def peek(self) -> str | None:
        return self.string[self.cursor] if not self.done() else None

    def before(self) -> str:
        return self.string[: self.cursor]

    def after(self) -> str:
        return self.string[self.cursor :]

    def eat_if(self, pat: str) -> bool:
        if self.string.startswith(pat, self.cursor):
            self.cursor += len(pat)
            return True
        return False

    def eat_while(self, pred: Callable[[str], bool]) -> str:
        start = self.cursor
        while not self.done() and pred(self.string[self.cursor]):
            self.cursor += 1
        return self.string[start : self.cursor]

    def eat_until(self, pat: str | Callable[[str], bool]) -> str:
        """Consume up to (not including) `pat`, or to the end."""
        start = self.cursor
        if isinstance(pat, str):
            end = self.string.find(pat, self.cursor)
            self.cursor = len(self.string) if end < 0 else end
        else:
            while not self.done() and not pat(self.string[self.cursor]):
                self.cursor += 1
        return self.string[start : self.cursor]

    def eat_whitespace(self) -> str:
        return self.eat_while(str.isspace)
