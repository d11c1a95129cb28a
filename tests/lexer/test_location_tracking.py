"""Tests for accurate source location tracking in the lexer.

Token locations feed the line:col of every parse error, so line numbers,
columns and offsets must stay right across newlines, indentation and the
whitespace an ``end`` token swallows.
"""

import pytest

from retype.config import RetypeConfig, config_context
from retype.errors import UnbalancedConstructError
from retype.lexer import Lexer
from retype.parser import Parser
from retype.tokens import TokenType


def positions(source: str) -> list[tuple[str, int, int]]:
    return [(t.type.name, t.lineno, t.col) for t in Lexer(source).tokenize()]


class TestSingleLineLocations:
    """Test location tracking within one line."""

    def test_characters_advance_column(self) -> None:
        assert positions("ab") == [("CHAR", 1, 1), ("CHAR", 1, 2), ("DONE", 1, 3)]

    def test_keyword_spans_its_length(self) -> None:
        tokens = list(Lexer("def f").tokenize())
        assert tokens[0].type == TokenType.BLOCK_OPEN
        assert (tokens[0].lineno, tokens[0].col) == (1, 1)
        assert (tokens[1].lineno, tokens[1].col) == (1, 4)

    def test_brackets(self) -> None:
        assert positions("(x)") == [
            ("BRACKET_OPEN", 1, 1),
            ("CHAR", 1, 2),
            ("RPAREN", 1, 3),
            ("DONE", 1, 4),
        ]


class TestMultilineLocations:
    """Test location tracking for tokens across multiple lines."""

    def test_consecutive_lines(self) -> None:
        assert positions("a\nb") == [
            ("CHAR", 1, 1),
            ("NEWLINE", 1, 2),
            ("CHAR", 2, 1),
            ("DONE", 2, 2),
        ]

    def test_indentation_is_part_of_newline(self) -> None:
        """The first character after indentation keeps its real column."""
        tokens = list(Lexer("x\n    y").tokenize())
        assert tokens[1].value == "\n    "
        assert (tokens[2].lineno, tokens[2].col) == (2, 5)

    def test_end_spanning_lines(self) -> None:
        source = "def f\n  1\nend"
        assert positions(source) == [
            ("BLOCK_OPEN", 1, 1),
            ("CHAR", 1, 4),
            ("CHAR", 1, 5),
            ("NEWLINE", 1, 6),
            ("CHAR", 2, 3),
            ("END", 2, 4),
            ("DONE", 3, 4),
        ]


class TestOffsets:
    """Offsets are 0-indexed and contiguous."""

    def test_location_carries_offsets(self) -> None:
        tokens = list(Lexer("a\n  end", source_file="x.rb").tokenize())
        end = tokens[1]
        assert end.type == TokenType.END
        assert (end.location.offset, end.location.end_offset) == (1, 7)
        assert str(end.location) == "x.rb:1:2"

    def test_location_is_cached(self) -> None:
        token = next(Lexer("a").tokenize())
        assert token.location is token.location


class TestErrorLocations:
    """Parse errors point at the offending construct."""

    def test_unclosed_points_at_opener(self) -> None:
        with pytest.raises(UnbalancedConstructError) as exc:
            Parser("x\n  (y", source_file="a.rb").parse()
        assert (exc.value.lineno, exc.value.col_offset) == (2, 3)
        assert str(exc.value).startswith("a.rb:2:3 ")

    def test_stray_end_points_at_the_word(self) -> None:
        with pytest.raises(UnbalancedConstructError) as exc:
            Parser("x\n\n   end").parse()
        assert (exc.value.lineno, exc.value.col_offset) == (3, 4)

    def test_stray_end_on_same_line(self) -> None:
        with pytest.raises(UnbalancedConstructError) as exc:
            Parser("ab  end").parse()
        assert (exc.value.lineno, exc.value.col_offset) == (1, 5)

    def test_lenient_mode_reports_nothing(self) -> None:
        with config_context(RetypeConfig(strict=False)):
            doc = Parser("x\n\n   end").parse()
        assert len(doc) > 0
