"""In-memory text buffer with an editor-style cursor.

Stores the text as a list of lines and the cursor as (line, column). Cursor
moves clamp at the buffer edges. Indentation is delegated to an IndentOracle,
the way an editor delegates it to its major mode.

Thread Safety:
Not thread-safe. One writer at a time.

"""

from __future__ import annotations

from retype.indent import DepthIndentOracle
from retype.protocols import IndentOracle

_BLANKS = " \t"


class BufferSink:
    """Editable in-memory buffer implementing the Buffer protocol.

    Usage:
            >>> buf = BufferSink("ab")
            >>> buf.goto(1)
            >>> buf.insert_pair_atomic("(", ")")
            >>> buf.text, buf.point
            ('a()b', 2)

    """

    __slots__ = ("_lines", "_line", "_col", "_indent")

    def __init__(self, text: str = "", indent: IndentOracle | None = None) -> None:
        """Create a buffer holding ``text`` with the cursor at its end.

        Args:
            text: Initial content
            indent: Oracle for line indentation (DepthIndentOracle if None)
        """
        self._lines: list[str] = text.split("\n")
        self._line = len(self._lines) - 1
        self._col = len(self._lines[-1])
        self._indent = indent if indent is not None else DepthIndentOracle()

    # =========================================================================
    # Inspection
    # =========================================================================

    @property
    def text(self) -> str:
        return "\n".join(self._lines)

    @property
    def lines(self) -> tuple[str, ...]:
        return tuple(self._lines)

    @property
    def cursor(self) -> tuple[int, int]:
        """Cursor as (line, column), both 0-indexed."""
        return self._line, self._col

    @property
    def point(self) -> int:
        """Cursor as an absolute 0-indexed offset into ``text``."""
        return sum(len(line) + 1 for line in self._lines[: self._line]) + self._col

    def goto(self, point: int) -> None:
        """Move the cursor to absolute offset ``point``, clamped to the buffer."""
        remaining = max(point, 0)
        for index, line in enumerate(self._lines):
            if remaining <= len(line):
                self._line, self._col = index, remaining
                return
            remaining -= len(line) + 1
        self._line = len(self._lines) - 1
        self._col = len(self._lines[-1])

    def get_text(self) -> str:
        return self.text

    def clear(self) -> None:
        self._lines = [""]
        self._line = 0
        self._col = 0

    # =========================================================================
    # Sink operations
    # =========================================================================

    def insert_text(self, text: str) -> None:
        line = self._lines[self._line]
        before, after = line[: self._col], line[self._col :]
        parts = text.split("\n")
        if len(parts) == 1:
            self._lines[self._line] = before + text + after
            self._col += len(text)
            return
        new_lines = [before + parts[0], *parts[1:-1], parts[-1] + after]
        self._lines[self._line : self._line + 1] = new_lines
        self._line += len(parts) - 1
        self._col = len(parts[-1])

    def insert_pair_atomic(self, opening: str, closing: str) -> None:
        self.insert_text(opening + closing)
        self.move_cursor(-len(closing))

    def move_cursor(self, chars: int) -> None:
        self.goto(self.point + chars)

    def insert_line_break(self) -> None:
        self.insert_text("\n")

    def insert_line_break_with_indent(self) -> None:
        self.insert_text("\n")
        self._indent_line(self._line)

    def request_indent_current_line(self) -> None:
        self._indent_line(self._line)

    def move_to_line_end(self) -> None:
        self._col = len(self._lines[self._line])

    def move_to_indentation(self) -> None:
        line = self._lines[self._line]
        self._col = len(line) - len(line.lstrip(_BLANKS))

    def move_lines(self, delta: int) -> None:
        self._line = min(max(self._line + delta, 0), len(self._lines) - 1)
        self._col = min(self._col, len(self._lines[self._line]))

    def _indent_line(self, index: int) -> None:
        """Re-indent line ``index``, keeping the cursor on the same text."""
        line = self._lines[index]
        content = line.lstrip(_BLANKS)
        old_width = len(line) - len(content)
        width = self._indent.indent_for(self._lines, index)
        self._lines[index] = " " * width + content
        if index == self._line:
            self._col = width if self._col <= old_width else self._col - old_width + width

    def __repr__(self) -> str:
        return f"BufferSink(text={self.text!r}, cursor={self.cursor})"
