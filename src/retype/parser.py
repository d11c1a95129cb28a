"""Parser building the document tree from lexer tokens.

Pulls tokens one at a time and accumulates elements. An opener (keyword or
bracket) starts a nested body that runs until its own closer; closers are
lexed identically at every depth, so pairing is decided purely by nesting.

Nesting is tracked with an explicit stack of open-construct frames instead of
the call stack, so deeply nested input cannot exhaust Python's recursion
limit. Depth is still capped by ``RetypeConfig.max_depth``.

Strict mode (default) rejects unbalanced input with UnbalancedConstructError.
Lenient mode absorbs it: a mismatched closer becomes literal text in the
current body and end of input closes whatever is still open.

Thread Safety:
Parser instances are single-use. Configuration is read from the ContextVar
config; the resulting tree is immutable.

"""

from __future__ import annotations

from dataclasses import dataclass, field

from retype.config import get_config
from retype.errors import NestingTooDeepError, UnbalancedConstructError
from retype.lexer import Lexer
from retype.nodes import Char, Document, Element, MultilinePair, Newline, Pair
from retype.tokens import BRACKET_PAIRS, Token, TokenType
from retype.utils.logger import get_logger

logger = get_logger(__name__)

END_LITERAL = "end"

_CLOSER_LITERALS: dict[TokenType, str] = {
    TokenType.RPAREN: ")",
    TokenType.RBRACKET: "]",
    TokenType.RBRACE: "}",
    TokenType.END: END_LITERAL,
}


@dataclass(slots=True)
class _Frame:
    """An open construct waiting for its closer."""

    opening: str
    closing: str
    terminator: TokenType
    multiline: bool
    token: Token
    body: list[Element] = field(default_factory=list)

    def close(self) -> Element:
        if self.multiline:
            return MultilinePair(self.opening, self.closing, tuple(self.body))
        return Pair(self.opening, self.closing, tuple(self.body))


class Parser:
    """Builds a Document from source text.

    Usage:
            >>> Parser("(1)").parse().children
            (Pair(opening='(', closing=')', body=(Char(text='1'),)),)

    """

    __slots__ = ("_source", "_source_file", "_lexer", "_strict", "_max_depth")

    def __init__(self, source: str, source_file: str | None = None) -> None:
        """Initialize parser with source text.

        Configuration is read from ContextVar, not passed as parameters.
        Use config_context() around the parser if you need non-default settings.

        Args:
            source: Source text
            source_file: Optional source file path for error messages

        """
        config = get_config()
        self._source = source
        self._source_file = source_file
        self._lexer = Lexer(source, source_file)
        self._strict = config.strict
        self._max_depth = config.max_depth

    def parse(self) -> Document:
        """Parse the whole source into a Document.

        Raises:
            UnbalancedConstructError: In strict mode, on unbalanced input.
            NestingTooDeepError: When nesting exceeds the configured maximum.
        """
        # Without a terminator the parse runs to DONE and leaves no remainder
        children, _ = self.parse_until(None)
        logger.debug(
            "Parsed %d top-level elements from %d characters",
            len(children),
            len(self._source),
        )
        return Document(children=children, source_file=self._source_file)

    def parse_until(
        self, terminator: TokenType | None
    ) -> tuple[tuple[Element, ...], str]:
        """Accumulate elements until DONE or ``terminator`` at this level.

        Args:
            terminator: Closer ending the body being parsed, or None for a
                top-level parse.

        Returns:
            The elements and the input remaining after the terminator.
        """
        root: list[Element] = []
        stack: list[_Frame] = []

        while True:
            token = self._lexer.next_token()
            token_type = token.type

            if token_type is TokenType.DONE:
                self._finish(token, terminator, root, stack)
                return tuple(root), ""

            if not stack and terminator is not None and token_type is terminator:
                return tuple(root), self._lexer.remainder

            body = stack[-1].body if stack else root

            if token_type is TokenType.BLOCK_OPEN:
                self._open_block(token, stack)
            elif token_type is TokenType.BRACKET_OPEN:
                self._open_bracket(token, stack)
            elif token.is_closer:
                if stack and token_type is stack[-1].terminator:
                    element = stack.pop().close()
                    (stack[-1].body if stack else root).append(element)
                else:
                    self._stray_closer(token, body)
            elif token_type is TokenType.NEWLINE:
                body.append(Newline())
            else:
                body.append(Char(token.value))

    # =========================================================================
    # Construct extractors
    # =========================================================================

    def _open_block(self, token: Token, stack: list[_Frame]) -> None:
        """Start a keyword block body, closed by ``end``."""
        self._check_depth(token, stack)
        stack.append(
            _Frame(
                opening=token.value,
                closing=END_LITERAL,
                terminator=TokenType.END,
                multiline=True,
                token=token,
            )
        )

    def _open_bracket(self, token: Token, stack: list[_Frame]) -> None:
        """Start a bracket body, closed by the matching bracket."""
        self._check_depth(token, stack)
        closing, terminator = BRACKET_PAIRS[token.value]
        stack.append(
            _Frame(
                opening=token.value,
                closing=closing,
                terminator=terminator,
                multiline=False,
                token=token,
            )
        )

    def _check_depth(self, token: Token, stack: list[_Frame]) -> None:
        if len(stack) >= self._max_depth:
            raise NestingTooDeepError(
                self._max_depth, token.lineno, token.col, self._source_file
            )

    # =========================================================================
    # Unbalanced input
    # =========================================================================

    def _stray_closer(self, token: Token, body: list[Element]) -> None:
        """Handle a closer that does not close the innermost construct."""
        literal = _CLOSER_LITERALS[token.type]
        if token.type is TokenType.END:
            # The matched text starts with any whitespace before ``end``
            lineno = token.lineno + token.value.count("\n")
            col = len(token.value) - len(END_LITERAL) - token.value.rfind("\n")
            if "\n" not in token.value:
                col += token.col - 1
        else:
            lineno, col = token.lineno, token.col

        if self._strict:
            raise UnbalancedConstructError(
                "unopened", literal, lineno, col, self._source_file
            )

        logger.warning(
            "Absorbing unmatched '%s' at %d:%d as literal text", literal, lineno, col
        )
        if token.type is TokenType.END and "\n" in token.value:
            body.append(Newline())
        body.append(Char(literal))

    def _finish(
        self,
        token: Token,
        terminator: TokenType | None,
        root: list[Element],
        stack: list[_Frame],
    ) -> None:
        """Handle end of input, closing or rejecting open constructs."""
        if self._strict:
            if stack:
                opener = stack[-1].token
                raise UnbalancedConstructError(
                    "unclosed", opener.value, opener.lineno, opener.col, self._source_file
                )
            if terminator is not None:
                closer = _CLOSER_LITERALS[terminator]
                raise UnbalancedConstructError(
                    "unclosed",
                    closer,
                    token.lineno,
                    token.col,
                    self._source_file,
                    message=f"input ended before '{closer}'",
                )
            return

        if stack:
            logger.warning(
                "Closing %d construct(s) left open at end of input", len(stack)
            )
        while stack:
            element = stack.pop().close()
            (stack[-1].body if stack else root).append(element)


def parse(
    source: str, terminator: TokenType | None = None
) -> tuple[tuple[Element, ...], str]:
    """Parse ``source`` until DONE or ``terminator`` at the outermost level.

    Returns:
        The elements and the unconsumed remainder after the terminator.

    Example:
        >>> parse("a) b", TokenType.RPAREN)
        ((Char(text='a'),), ' b')
    """
    return Parser(source).parse_until(terminator)
