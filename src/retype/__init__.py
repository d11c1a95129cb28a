"""
retype: replay Ruby-like source as if it were being typed live

Parses source into a tree of balanced constructs, then replays the tree into
an editor-like sink one character at a time. Every closer (``end``, ``)``,
``]``, ``}``) appears together with its opener and the body is typed in
between, so the buffer is balanced at every moment of the replay.

Quick Start:
    >>> from retype import BufferSink, NoPause, retype_buffer
    >>> buf = BufferSink("class Foo\\n  def bar(x)\\n  end\\nend\\n")
    >>> stats = retype_buffer(buf, pause=NoPause())
    >>> print(buf.text)
    class Foo
      def bar(x)
      end
    end
    <BLANKLINE>

    >>> # Or work with the pieces directly
    >>> from retype import parse, replay
    >>> doc = parse("(1)")
    >>> doc.children
    (Pair(opening='(', closing=')', body=(Char(text='1'),)),)

Zero runtime dependencies.
"""

from retype.config import (
    RetypeConfig,
    config_context,
    get_config,
    reset_config,
    set_config,
)
from retype.errors import (
    NestingTooDeepError,
    ParseError,
    ReplayCancelledError,
    ReplayError,
    RetypeError,
    UnbalancedConstructError,
)
from retype.indent import DepthIndentOracle, FixedIndentOracle
from retype.lexer import Lexer, next_token
from retype.location import SourceLocation
from retype.nodes import Char, Document, Element, MultilinePair, Newline, Pair
from retype.parser import Parser
from retype.pause import NoPause, RandomPausePolicy
from retype.protocols import Buffer, IndentOracle, PausePolicy, Sink, TextSource
from retype.replay import CancellationToken, ReplayEngine, ReplayStats, replay
from retype.serialization import from_dict, from_json, to_dict, to_json
from retype.sinks import BufferSink, RecordingSink
from retype.text import to_source
from retype.tokens import Token, TokenType
from retype.utils.logger import get_logger

__version__ = "0.1.0"

logger = get_logger(__name__)


def parse(
    source: str,
    *,
    source_file: str | None = None,
    config: RetypeConfig | None = None,
) -> Document:
    """Parse source text into a Document.

    Args:
        source: Source text
        source_file: Optional source file path for error messages
        config: Configuration for this call only (the active config if None)

    Returns:
        Document root

    Raises:
        UnbalancedConstructError: In strict mode, on unbalanced input.
        NestingTooDeepError: When nesting exceeds ``max_depth``.

    Example:
        >>> parse("class Foo\\nend").children
        (MultilinePair(opening='class', closing='end', body=(Char(text=' '), Char(text='F'), Char(text='o'), Char(text='o'))),)
    """
    if config is None:
        return Parser(source, source_file=source_file).parse()
    with config_context(config):
        return Parser(source, source_file=source_file).parse()


def retype_buffer(
    buffer: Buffer,
    *,
    pause: PausePolicy | None = None,
    cancel: CancellationToken | None = None,
    source_file: str | None = None,
) -> ReplayStats:
    """Retype a buffer's own content.

    Reads the whole buffer, parses it, clears it and replays the tree into
    it. Parsing happens before clearing, so a parse error leaves the buffer
    untouched.

    Args:
        buffer: Buffer to read, clear and replay into
        pause: Pause policy (a RandomPausePolicy if None)
        cancel: Optional cancellation token
        source_file: Optional name for error messages

    Returns:
        Statistics of the replay
    """
    source = buffer.get_text()
    doc = parse(source, source_file=source_file)
    buffer.clear()
    logger.debug("Retyping %d characters", len(source))
    return replay(
        doc,
        buffer,
        pause=pause if pause is not None else RandomPausePolicy(),
        cancel=cancel,
    )


def insert_at_point(
    sink: Sink,
    content: str | TextSource,
    *,
    pause: PausePolicy | None = None,
    cancel: CancellationToken | None = None,
    source_file: str | None = None,
) -> ReplayStats:
    """Type external content into ``sink`` at its current cursor.

    Args:
        sink: Destination; its existing content is kept
        content: Source text, or anything with ``get_text()``
        pause: Pause policy (a RandomPausePolicy if None)
        cancel: Optional cancellation token
        source_file: Optional name for error messages

    Returns:
        Statistics of the replay
    """
    source = content if isinstance(content, str) else content.get_text()
    doc = parse(source, source_file=source_file)
    logger.debug("Inserting %d characters at point", len(source))
    return replay(
        doc,
        sink,
        pause=pause if pause is not None else RandomPausePolicy(),
        cancel=cancel,
    )


__all__ = [
    # Entry points
    "insert_at_point",
    "parse",
    "replay",
    "retype_buffer",
    # Tree
    "Char",
    "Document",
    "Element",
    "MultilinePair",
    "Newline",
    "Pair",
    # Lexing and parsing
    "Lexer",
    "Parser",
    "SourceLocation",
    "Token",
    "TokenType",
    "next_token",
    # Replay
    "CancellationToken",
    "ReplayEngine",
    "ReplayStats",
    "NoPause",
    "RandomPausePolicy",
    # Sinks and oracles
    "Buffer",
    "BufferSink",
    "DepthIndentOracle",
    "FixedIndentOracle",
    "IndentOracle",
    "PausePolicy",
    "RecordingSink",
    "Sink",
    "TextSource",
    # Serialization
    "from_dict",
    "from_json",
    "to_dict",
    "to_json",
    "to_source",
    # Configuration
    "RetypeConfig",
    "config_context",
    "get_config",
    "reset_config",
    "set_config",
    # Errors
    "NestingTooDeepError",
    "ParseError",
    "ReplayCancelledError",
    "ReplayError",
    "RetypeError",
    "UnbalancedConstructError",
    "__version__",
]
