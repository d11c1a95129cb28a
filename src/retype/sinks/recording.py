"""Sink that records calls instead of editing anything."""

from __future__ import annotations

from typing import Any


class RecordingSink:
    """Records each sink call as a tuple ``(operation, *args)``.

    Usage:
            >>> sink = RecordingSink()
            >>> sink.insert_pair_atomic("(", ")")
            >>> sink.ops
            [('insert_pair_atomic', '(', ')')]

    """

    __slots__ = ("ops",)

    def __init__(self) -> None:
        self.ops: list[tuple[Any, ...]] = []

    def insert_text(self, text: str) -> None:
        self.ops.append(("insert_text", text))

    def insert_pair_atomic(self, opening: str, closing: str) -> None:
        self.ops.append(("insert_pair_atomic", opening, closing))

    def move_cursor(self, chars: int) -> None:
        self.ops.append(("move_cursor", chars))

    def insert_line_break(self) -> None:
        self.ops.append(("insert_line_break",))

    def insert_line_break_with_indent(self) -> None:
        self.ops.append(("insert_line_break_with_indent",))

    def request_indent_current_line(self) -> None:
        self.ops.append(("request_indent_current_line",))

    def move_to_line_end(self) -> None:
        self.ops.append(("move_to_line_end",))

    def move_to_indentation(self) -> None:
        self.ops.append(("move_to_indentation",))

    def move_lines(self, delta: int) -> None:
        self.ops.append(("move_lines", delta))

    @property
    def operations(self) -> list[str]:
        """Operation names in call order."""
        return [op[0] for op in self.ops]

    def literal_text(self) -> str:
        """Concatenate everything inserted, in call order.

        An atomic pair contributes its opener and closer together; each
        line break contributes a newline.
        """
        parts: list[str] = []
        for op, *args in self.ops:
            if op == "insert_text":
                parts.append(args[0])
            elif op == "insert_pair_atomic":
                parts.append(args[0] + args[1])
            elif op in ("insert_line_break", "insert_line_break_with_indent"):
                parts.append("\n")
        return "".join(parts)
