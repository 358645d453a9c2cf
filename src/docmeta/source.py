"""Source text with line/column to byte offset conversion."""

from __future__ import annotations

import bisect
from pathlib import Path


class Source:
    """An immutable source text indexed by line.

    Lines are separated by `\\n` (a preceding `\\r` is not part of the line).
    A text ending in a newline has a final empty line. Columns count
    characters; offsets count UTF-8 bytes.
    """

    def __init__(self, text: str, path: str | None = None):
        self.text = text
        self.path = path
        self._lines = [line.removesuffix("\r") for line in text.split("\n")]
        # Byte offset of every line start
        self._line_starts = [0]
        for raw in text.split("\n")[:-1]:
            self._line_starts.append(self._line_starts[-1] + len(raw.encode()) + 1)

    @classmethod
    def from_path(cls, path: Path) -> Source:
        return cls(path.read_text(encoding="utf-8"), path=str(path))

    def lines(self) -> list[str]:
        return list(self._lines)

    def len_lines(self) -> int:
        return len(self._lines)

    def line_to_byte(self, line: int) -> int | None:
        if not 0 <= line < len(self._lines):
            return None
        return self._line_starts[line]

    def line_column_to_byte(self, line: int, column: int) -> int | None:
        """Byte offset of a zero-based (line, column), or None if out of range.

        The column may point one past the last character (end of line).
        """
        start = self.line_to_byte(line)
        if start is None:
            return None
        content = self._lines[line]
        if not 0 <= column <= len(content):
            return None
        return start + len(content[:column].encode())

    def byte_to_line_column(self, offset: int) -> tuple[int, int] | None:
        """Inverse of `line_column_to_byte`."""
        if not 0 <= offset <= len(self.text.encode()):
            return None
        line = bisect.bisect_right(self._line_starts, offset) - 1
        prefix = self._lines[line].encode()[: offset - self._line_starts[line]]
        return line, len(prefix.decode(errors="ignore"))
