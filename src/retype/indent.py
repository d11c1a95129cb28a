"""Indentation oracles for in-memory buffers.

A real editor computes indentation itself; BufferSink asks one of these
instead. DepthIndentOracle lexes the text above a line and counts the
constructs still open there, which is reliable during replay because the
buffer stays balanced at every step.
"""

from __future__ import annotations

from collections.abc import Sequence

from retype.config import get_config
from retype.lexer import Lexer
from retype.matcher import END_PATTERN, match_pattern
from retype.tokens import CLOSING_BRACKETS, TokenType


class FixedIndentOracle:
    """Indent every line by the same width."""

    __slots__ = ("width",)

    def __init__(self, width: int = 0) -> None:
        self.width = width

    def indent_for(self, lines: Sequence[str], index: int) -> int:
        return self.width


class DepthIndentOracle:
    """Indent by ``width`` columns per enclosing construct.

    A line starting with a closer (``end``, ``)``, ``]``, ``}``) sits one
    level out, aligned with its opener.

    The depth after each line is cached together with the line's text. A
    request re-lexes only the lines that changed since the previous one, so
    a whole replay into a buffer stays linear in the buffer size.

    Example:
        >>> DepthIndentOracle().indent_for(["class A", "def b", "end"], 2)
        2
    """

    __slots__ = ("width", "_depths", "_keywords")

    def __init__(self, width: int = 2) -> None:
        self.width = width
        # (line text, open constructs after that line), one per line lexed
        self._depths: list[tuple[str, int]] = []
        self._keywords: tuple[object, object] | None = None

    def indent_for(self, lines: Sequence[str], index: int) -> int:
        depth = self._depth_before(lines, index)
        content = lines[index].lstrip(" \t") if index < len(lines) else ""
        if content and (
            content[0] in CLOSING_BRACKETS or match_pattern(content, END_PATTERN)
        ):
            depth -= 1
        return max(depth, 0) * self.width

    def _depth_before(self, lines: Sequence[str], index: int) -> int:
        """Open constructs above line ``index``, reusing unchanged lines."""
        config = get_config()
        keywords = (config.block_keywords, config.modifier_keywords)
        if keywords != self._keywords:
            self._keywords = keywords
            self._depths.clear()

        depths = self._depths
        stop = min(index, len(lines))
        valid = 0
        while valid < stop and valid < len(depths) and depths[valid][0] == lines[valid]:
            valid += 1
        if valid < stop:
            del depths[valid:]

        depth = depths[valid - 1][1] if valid else 0
        for line in lines[valid:stop]:
            depth = self._line_depth(line, depth)
            depths.append((line, depth))
        return depth

    @staticmethod
    def _line_depth(line: str, depth: int) -> int:
        """Apply one line's openers and closers to ``depth``."""
        for token in Lexer(line + "\n").tokenize():
            if token.type in (TokenType.BLOCK_OPEN, TokenType.BRACKET_OPEN):
                depth += 1
            elif token.is_closer and depth:
                depth -= 1
        return depth
