"""Token and TokenType definitions for the retype lexer.

The lexer produces Token objects one at a time; the parser pulls them and
either accumulates them as elements or opens and closes constructs.

Thread Safety:
Token is frozen (immutable) and safe to share across threads.

"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from retype.location import SourceLocation


class TokenType(Enum):
    """Token types produced by the lexer."""

    DONE = auto()  # End of input
    CHAR = auto()  # Any single literal character
    NEWLINE = auto()  # \n plus the indentation after it

    # Closers
    RPAREN = auto()  # )
    RBRACKET = auto()  # ]
    RBRACE = auto()  # }
    END = auto()  # [whitespace]end

    # Pending constructs: the parser opens a nested body for these
    BLOCK_OPEN = auto()  # module, class, def, if
    BRACKET_OPEN = auto()  # ( [ {


CLOSER_TYPES = frozenset(
    {TokenType.RPAREN, TokenType.RBRACKET, TokenType.RBRACE, TokenType.END}
)

# Opening bracket -> (closing bracket, closing token type)
BRACKET_PAIRS: dict[str, tuple[str, TokenType]] = {
    "(": (")", TokenType.RPAREN),
    "[": ("]", TokenType.RBRACKET),
    "{": ("}", TokenType.RBRACE),
}

CLOSING_BRACKETS: dict[str, TokenType] = {
    close: token_type for close, token_type in BRACKET_PAIRS.values()
}


@dataclass(frozen=True, slots=True)
class Token:
    """A token produced by the lexer.

    Attributes:
        type: The token type
        value: Raw matched text; for BLOCK_OPEN and BRACKET_OPEN the opening literal
        offset: Start position in source (0-indexed)
        end_offset: Position just past the token in source
        lineno: Line of the first consumed character (1-indexed)
        col: Column of the first consumed character (1-indexed)
        source_file: Optional source file path

    """

    type: TokenType
    value: str
    offset: int
    end_offset: int
    lineno: int = 1
    col: int = 1
    source_file: str | None = None
    _location_cache: "SourceLocation | None" = field(
        default=None, repr=False, compare=False, hash=False
    )

    @property
    def location(self) -> "SourceLocation":
        """Get source location (lazily created and cached)."""
        if self._location_cache is not None:
            return self._location_cache

        from retype.location import SourceLocation

        loc = SourceLocation(
            lineno=self.lineno,
            col_offset=self.col,
            offset=self.offset,
            end_offset=self.end_offset,
            source_file=self.source_file,
        )
        object.__setattr__(self, "_location_cache", loc)
        return loc

    @property
    def is_closer(self) -> bool:
        """Whether this token closes a construct (a bracket or ``end``)."""
        return self.type in CLOSER_TYPES

    def __repr__(self) -> str:
        """Compact repr for debugging."""
        return f"Token({self.type.name}, {self.value!r}, {self.lineno}:{self.col})"
