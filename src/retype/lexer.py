"""Prefix-driven lexer for Ruby-like source.

Classifies the next token from the remaining input using only prefix tests
(see retype.matcher). Nothing looks ahead for a matching closer: a closer is
recognized the same way at every depth, and the parser does the pairing.

Priority order (first match wins):
1. end of input            -> DONE
2. block keyword + space   -> BLOCK_OPEN  (module, class, def, if; not after . @ :)
3. [whitespace]end         -> END         (whitespace consumed with it)
4. newline + indentation   -> NEWLINE     (indentation consumed with it)
5. ( [ {                   -> BRACKET_OPEN
6. ) ] }                   -> RPAREN / RBRACKET / RBRACE
7. anything else           -> CHAR

Thread Safety:
Lexer instances are single-use. Create one per source string.
Keyword settings are read from the ContextVar config at construction.

"""

from __future__ import annotations

from collections.abc import Iterator

from retype.config import get_config
from retype.matcher import END_PATTERN, is_word_start, match_keyword, match_pattern
from retype.tokens import BRACKET_PAIRS, CLOSING_BRACKETS, Token, TokenType

_INDENT_CHARS = " \t"


class Lexer:
    """Index-based lexer producing one token per call.

    Usage:
            >>> lexer = Lexer("def f\\nend")
            >>> [t.type.name for t in lexer.tokenize()]
            ['BLOCK_OPEN', 'CHAR', 'CHAR', 'END', 'DONE']

    """

    __slots__ = (
        "_source",
        "_source_len",
        "_pos",
        "_lineno",
        "_col",
        "_source_file",
        "_keywords",
        "_modifier_keywords",
    )

    def __init__(self, source: str, source_file: str | None = None) -> None:
        """Initialize lexer with source text.

        Args:
            source: Source text
            source_file: Optional source file path for error messages
        """
        config = get_config()
        self._source = source
        self._source_len = len(source)
        self._pos = 0
        self._lineno = 1
        self._col = 1
        self._source_file = source_file
        self._keywords = config.block_keywords
        self._modifier_keywords = config.modifier_keywords

    @property
    def pos(self) -> int:
        """Offset of the first unconsumed character."""
        return self._pos

    @property
    def remainder(self) -> str:
        """The unconsumed input."""
        return self._source[self._pos :]

    def tokenize(self) -> Iterator[Token]:
        """Yield tokens up to and including DONE."""
        while True:
            token = self.next_token()
            yield token
            if token.type is TokenType.DONE:
                return

    def next_token(self) -> Token:
        """Classify and consume the next token."""
        source = self._source
        pos = self._pos

        if pos >= self._source_len:
            return self._commit(TokenType.DONE, "", 0)

        at_boundary = is_word_start(source, pos)

        if at_boundary:
            for keyword in self._keywords:
                if match_keyword(source[pos : pos + len(keyword) + 1], keyword):
                    if keyword in self._modifier_keywords and not self._at_line_start():
                        continue
                    return self._commit(TokenType.BLOCK_OPEN, keyword, len(keyword))

        m = match_pattern(source, END_PATTERN, pos)
        if m is not None and (at_boundary or m.end() - pos > 3):
            return self._commit(TokenType.END, m.group(), m.end() - pos)

        char = source[pos]

        if char == "\n":
            end = pos + 1
            while end < self._source_len and source[end] in _INDENT_CHARS:
                end += 1
            return self._commit(TokenType.NEWLINE, source[pos:end], end - pos)

        if char in BRACKET_PAIRS:
            return self._commit(TokenType.BRACKET_OPEN, char, 1)

        closer = CLOSING_BRACKETS.get(char)
        if closer is not None:
            return self._commit(closer, char, 1)

        return self._commit(TokenType.CHAR, char, 1)

    def _at_line_start(self) -> bool:
        """Whether only blanks precede the current position on its line."""
        line_start = self._source.rfind("\n", 0, self._pos) + 1
        return not self._source[line_start : self._pos].strip()

    def _commit(self, token_type: TokenType, value: str, length: int) -> Token:
        """Create a token at the current position and advance past it."""
        start = self._pos
        token = Token(
            type=token_type,
            value=value,
            offset=start,
            end_offset=start + length,
            lineno=self._lineno,
            col=self._col,
            source_file=self._source_file,
        )
        if length:
            segment = self._source[start : start + length]
            newline_count = segment.count("\n")
            if newline_count:
                self._lineno += newline_count
                self._col = len(segment) - segment.rfind("\n")
            else:
                self._col += length
            self._pos = start + length
        return token


def next_token(remainder: str) -> tuple[Token, str]:
    """Classify the next token of ``remainder``.

    Returns:
        The token and the input left after it.

    Example:
        >>> token, rest = next_token("  \\n  end x")
        >>> token.type.name, rest
        ('END', ' x')
    """
    lexer = Lexer(remainder)
    token = lexer.next_token()
    return token, lexer.remainder
