"""Replay a document tree into a sink, one unit at a time.

Every balanced construct is emitted opener and closer first, then its body is
filled in between them, so the sink never shows a dangling opener:

    Pair            "(" + ")" inserted together, body typed between them
    MultilinePair   "class", line break, "end" (indented), then the body is
                    typed after "class"
    Newline         line break with indentation computed by the sink
    Char            typed one character at a time

The pause policy runs after every typed character and line break, and once
after each construct's opener and closer appear, before its body starts.

Thread Safety:
A ReplayEngine must be the only writer to its sink while replaying. The
CancellationToken may be cancelled from any thread.

"""

from __future__ import annotations

import threading
from collections.abc import Iterable
from dataclasses import dataclass

from retype.errors import ReplayCancelledError, ReplayError
from retype.nodes import Char, Element, MultilinePair, Newline, Pair
from retype.pause import NoPause
from retype.protocols import PausePolicy, Sink
from retype.utils.logger import get_logger

logger = get_logger(__name__)


class CancellationToken:
    """Flag checked between elements to abort a running replay."""

    __slots__ = ("_event",)

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        """Request that the replay stop before its next element."""
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()


@dataclass(slots=True)
class ReplayStats:
    """Counts of what one replay emitted.

    Attributes:
        elements: Elements fully replayed, nested ones included
        characters: Characters typed from Char elements
        newlines: Newline elements replayed
        constructs: Pair and MultilinePair elements replayed

    """

    elements: int = 0
    characters: int = 0
    newlines: int = 0
    constructs: int = 0


@dataclass(frozen=True, slots=True)
class _Finish:
    """Work item moving the cursor past a construct's closer once its body is done."""

    construct: Pair | MultilinePair


class ReplayEngine:
    """Drives a Sink from a document tree.

    Nested bodies are walked with an explicit work stack, so replay depth is
    limited only by the parser's ``max_depth``, not by Python's recursion limit.

    Usage:
            >>> from retype.parser import Parser
            >>> from retype.sinks import BufferSink
            >>> sink = BufferSink()
            >>> ReplayEngine(sink).replay(Parser("(1)").parse())
            ReplayStats(elements=2, characters=1, newlines=0, constructs=1)
            >>> sink.text
            '(1)'

    """

    __slots__ = ("_sink", "_pause", "_cancel", "_stats")

    def __init__(
        self,
        sink: Sink,
        pause: PausePolicy | None = None,
        cancel: CancellationToken | None = None,
    ) -> None:
        """Initialize the engine.

        Args:
            sink: Destination for insertions and cursor moves
            pause: Pause policy called after each typed unit (no pauses if None)
            cancel: Optional token checked before every element
        """
        self._sink = sink
        self._pause = pause if pause is not None else NoPause()
        self._cancel = cancel
        self._stats = ReplayStats()

    def replay(self, elements: Iterable[Element]) -> ReplayStats:
        """Replay ``elements`` in order at the sink's cursor.

        Raises:
            ReplayCancelledError: If the cancellation token fired.
            ReplayError: If a node is not a known element type.
        """
        self._stats = ReplayStats()
        stats = self._stats
        cancel = self._cancel
        work: list[Element | _Finish] = list(reversed(tuple(elements)))

        while work:
            item = work.pop()
            if isinstance(item, _Finish):
                self._finish(item.construct)
                stats.elements += 1
                stats.constructs += 1
                continue
            if cancel is not None and cancel.cancelled:
                logger.debug("Replay cancelled after %d elements", stats.elements)
                raise ReplayCancelledError(stats.elements)
            finish = self._start(item)
            if finish is None:
                stats.elements += 1
            else:
                work.append(finish)
                work.extend(reversed(finish.construct.body))

        logger.debug(
            "Replayed %d elements (%d characters, %d newlines)",
            stats.elements,
            stats.characters,
            stats.newlines,
        )
        return stats

    def _start(self, element: Element) -> _Finish | None:
        """Emit everything before ``element``'s body.

        Returns the work item that closes the construct, or None for an
        element without a body.
        """
        sink = self._sink
        stats = self._stats

        match element:
            case Char(text=text):
                for ch in text:
                    sink.insert_text(ch)
                    self._pause.pause()
                stats.characters += len(text)
                return None

            case Pair(opening=opening, closing=closing):
                sink.insert_pair_atomic(opening, closing)
                self._pause.pause()
                return _Finish(element)

            case MultilinePair(opening=opening, closing=closing):
                sink.insert_text(opening)
                sink.insert_line_break()
                sink.insert_text(closing)
                sink.request_indent_current_line()
                sink.move_lines(-1)
                sink.move_to_line_end()
                self._pause.pause()
                return _Finish(element)

            case Newline():
                sink.insert_line_break_with_indent()
                self._pause.pause()
                stats.newlines += 1
                return None

            case _:
                raise ReplayError(f"Cannot replay node of type {type(element).__name__}")

    def _finish(self, construct: Pair | MultilinePair) -> None:
        """Step over the closer of a construct whose body has been typed."""
        sink = self._sink
        match construct:
            case Pair(closing=closing):
                sink.move_cursor(len(closing))
            case MultilinePair(closing=closing):
                # The closer line also holds whatever followed the insertion point
                sink.move_lines(1)
                sink.move_to_indentation()
                sink.move_cursor(len(closing))


def replay(
    elements: Iterable[Element],
    sink: Sink,
    *,
    pause: PausePolicy | None = None,
    cancel: CancellationToken | None = None,
) -> ReplayStats:
    """Replay ``elements`` into ``sink``; see ReplayEngine."""
    return ReplayEngine(sink, pause=pause, cancel=cancel).replay(elements)
