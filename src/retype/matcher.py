"""Prefix tests used by the lexer.

Every test looks only at the start of the remaining input. Nothing scans
ahead for a matching closer; nesting is the parser's job.
"""

from __future__ import annotations

import re

# Optional whitespace/newlines, then ``end`` not followed by an identifier char
END_PATTERN = re.compile(r"[ \t\r\n]*end(?![A-Za-z0-9_?!])")

_IDENTIFIER_PUNCTUATION = frozenset("_?!")

# Characters that make the following word a method, ivar or symbol name
_NAME_PREFIXES = frozenset(".")


def match_literal(text: str, literal: str) -> bool:
    """Return True if ``text`` starts with ``literal``."""
    return len(text) >= len(literal) and text.startswith(literal)


def match_keyword(text: str, word: str) -> bool:
    """Return True if ``text`` starts with ``word`` followed by whitespace.

    The trailing whitespace is required: ``classify`` is an identifier, not
    ``class`` followed by ``ify``.

        >>> match_keyword("class Foo", "class")
        True
        >>> match_keyword("classify foo", "class")
        False
    """
    n = len(word)
    return len(text) > n and text.startswith(word) and text[n].isspace()


def match_pattern(
    text: str, pattern: str | re.Pattern[str], pos: int = 0
) -> re.Match[str] | None:
    """Match ``pattern`` anchored at ``pos`` (offset 0 by default) of ``text``.

    Never searches past ``pos``; a match further along the text is no match.
    """
    if isinstance(pattern, str):
        pattern = re.compile(pattern)
    return pattern.match(text, pos)


def is_identifier_char(ch: str) -> bool:
    """Whether ``ch`` can be part of a Ruby identifier or method name."""
    return ch.isalnum() or ch in _IDENTIFIER_PUNCTUATION


def is_word_start(text: str, pos: int) -> bool:
    """Whether a keyword at ``pos`` would start a new word.

    False inside an identifier and after ``.``, ``@`` or ``:``, where the
    word is a method call (``obj.class``), a variable (``@end``) or a
    symbol (``:if``).

        >>> is_word_start("x.class", 2)
        False
        >>> is_word_start("(class", 1)
        True
    """
    if pos == 0:
        return True
    prev = text[pos - 1]
    return not is_identifier_char(prev) and prev not in _NAME_PREFIXES
