"""Protocols for retype.

Defines the contracts between the replay engine and its collaborators: the
sink it writes into, the buffer the entry points read from, the indentation
oracle a sink consults, and the pause policy.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, runtime_checkable


@runtime_checkable
class Sink(Protocol):
    """Destination receiving insertions and cursor moves during replay.

    The replay engine must be the only writer for the duration of one replay:
    relative moves such as "forward by the closer's length" are only valid
    if nothing else edited the sink in between.

    """

    def insert_text(self, text: str) -> None:
        """Insert at the cursor; the cursor ends up after the text."""
        ...

    def insert_pair_atomic(self, opening: str, closing: str) -> None:
        """Insert both halves at once; the cursor lands between them."""
        ...

    def move_cursor(self, chars: int) -> None:
        """Move the cursor by ``chars`` characters (negative moves back)."""
        ...

    def insert_line_break(self) -> None:
        """Split the line at the cursor without indenting the new line."""
        ...

    def insert_line_break_with_indent(self) -> None:
        """Split the line at the cursor and indent the new line."""
        ...

    def request_indent_current_line(self) -> None:
        """Re-indent the cursor's line using the sink's own rules."""
        ...

    def move_to_line_end(self) -> None:
        """Move the cursor to the end of its line."""
        ...

    def move_to_indentation(self) -> None:
        """Move the cursor to the first non-blank character of its line."""
        ...

    def move_lines(self, delta: int) -> None:
        """Move the cursor ``delta`` lines down (negative moves up)."""
        ...


@runtime_checkable
class Buffer(Sink, Protocol):
    """A sink whose whole content can be read and cleared."""

    def get_text(self) -> str:
        """Return the full content."""
        ...

    def clear(self) -> None:
        """Remove all content and reset the cursor."""
        ...


class TextSource(Protocol):
    """Anything whose full content can be read as text."""

    def get_text(self) -> str:
        ...


class IndentOracle(Protocol):
    """Decides how many columns of indentation a line gets."""

    def indent_for(self, lines: Sequence[str], index: int) -> int:
        """Return the indentation width for ``lines[index]``.

        Args:
            lines: Current buffer lines (without trailing newlines)
            index: Line being indented

        """
        ...


class PausePolicy(Protocol):
    """Called once after each replayed character or newline."""

    def pause(self) -> None:
        ...
