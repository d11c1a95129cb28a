"""Exception classes for retype.

Provides standardized exceptions for parse and replay failures. Every error
is local to a single parse or replay call and is raised to the caller.
"""

from __future__ import annotations

from typing import Literal

UnbalancedKind = Literal["unclosed", "unopened"]


class RetypeError(Exception):
    """Base exception for all retype errors.

    Subclass this for specific error categories.
    """

    pass


class ParseError(RetypeError):
    """Error while building the document tree.

    Raised when the parser encounters input it cannot structure.
    """

    def __init__(
        self,
        message: str,
        lineno: int | None = None,
        col_offset: int | None = None,
        source_file: str | None = None,
    ) -> None:
        """Initialize parse error with optional location.

        Args:
            message: Error description
            lineno: Line number where error occurred (1-indexed)
            col_offset: Column offset where error occurred (1-indexed)
            source_file: Path to source file (optional)
        """
        self.message = message
        self.lineno = lineno
        self.col_offset = col_offset
        self.source_file = source_file

        location = ""
        if source_file:
            location = f"{source_file}:"
        if lineno is not None:
            location += f"{lineno}:"
            if col_offset is not None:
                location += f"{col_offset}:"
        if location:
            location = location.rstrip(":") + " "

        super().__init__(f"{location}{message}")


class UnbalancedConstructError(ParseError):
    """A balanced construct is missing one of its halves.

    ``kind`` is ``"unclosed"`` when an opener (``class``, ``(``, ...) reaches
    end of input without its closer, and ``"unopened"`` when a closer (``end``,
    ``)``, ...) appears with no matching opener at the current nesting level.
    """

    def __init__(
        self,
        kind: UnbalancedKind,
        construct: str,
        lineno: int | None = None,
        col_offset: int | None = None,
        source_file: str | None = None,
        message: str | None = None,
    ) -> None:
        """Initialize unbalanced construct error.

        Args:
            kind: "unclosed" or "unopened"
            construct: The offending opener or closer literal
            lineno: Line of the offending token (1-indexed)
            col_offset: Column of the offending token (1-indexed)
            source_file: Path to source file (optional)
            message: Override for the generated description
        """
        self.kind = kind
        self.construct = construct
        if message is None:
            if kind == "unclosed":
                message = f"'{construct}' is never closed"
            else:
                message = f"'{construct}' has no matching opener"
        super().__init__(message, lineno, col_offset, source_file)


class NestingTooDeepError(ParseError):
    """Input nests constructs deeper than the configured maximum."""

    def __init__(
        self,
        max_depth: int,
        lineno: int | None = None,
        col_offset: int | None = None,
        source_file: str | None = None,
    ) -> None:
        self.max_depth = max_depth
        super().__init__(
            f"constructs nested deeper than {max_depth} levels",
            lineno,
            col_offset,
            source_file,
        )


class ReplayError(RetypeError):
    """Error while replaying a document tree into a sink.

    Raised when the replay engine meets a node it cannot emit.
    """

    pass


class ReplayCancelledError(ReplayError):
    """Replay was aborted through its cancellation token.

    The sink holds only whole elements: every pair that was opened also had
    its closer inserted, so the partial output is still balanced.
    """

    def __init__(self, elements_replayed: int) -> None:
        """Initialize cancellation error.

        Args:
            elements_replayed: Number of elements fully replayed before the abort
        """
        self.elements_replayed = elements_replayed
        super().__init__(f"Replay cancelled after {elements_replayed} elements")
