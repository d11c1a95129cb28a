"""Watch a replay live in the terminal.

Wraps BufferSink so every pause redraws the buffer with the cursor shown as
a bar. Run with a Ruby file path, or without arguments for a built-in sample.
"""

import sys
from pathlib import Path

from retype import BufferSink, RandomPausePolicy, insert_at_point

SAMPLE = "module Shapes\n  class Square\n    def area(side)\n      side * side\n    end\n  end\nend\n"


class TerminalPause:
    """Redraw the buffer, then wait like a typist."""

    def __init__(self, buf: BufferSink) -> None:
        self._buf = buf
        self._inner = RandomPausePolicy()

    def pause(self) -> None:
        text = self._buf.text
        point = self._buf.point
        sys.stdout.write("\x1b[2J\x1b[H" + text[:point] + "|" + text[point:])
        sys.stdout.flush()
        self._inner.pause()


def main() -> None:
    source = Path(sys.argv[1]).read_text() if len(sys.argv) > 1 else SAMPLE
    buf = BufferSink()
    insert_at_point(buf, source, pause=TerminalPause(buf))
    print()


if __name__ == "__main__":
    main()
