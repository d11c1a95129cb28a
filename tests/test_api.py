"""Tests for the package-level entry points."""

import pytest

from retype import (
    BufferSink,
    CancellationToken,
    FixedIndentOracle,
    NoPause,
    RecordingSink,
    ReplayCancelledError,
    UnbalancedConstructError,
    insert_at_point,
    retype_buffer,
)


class CancelAfter:
    def __init__(self, token: CancellationToken, count: int) -> None:
        self.token = token
        self.remaining = count

    def pause(self) -> None:
        self.remaining -= 1
        if self.remaining == 0:
            self.token.cancel()


class TestRetypeBuffer:
    """retype_buffer reads, clears and replays a buffer's own content."""

    def test_round_trip_of_indented_source(self) -> None:
        source = "class Foo\n  def bar(x)\n    [x, {y: x}]\n  end\nend\n"
        buf = BufferSink(source)
        stats = retype_buffer(buf, pause=NoPause())
        assert buf.text == source
        assert stats.constructs == 5

    def test_sloppy_indentation_is_normalized(self) -> None:
        buf = BufferSink("def f\n      x\n        end")
        retype_buffer(buf, pause=NoPause())
        assert buf.text == "def f\n  x\nend"

    def test_parse_error_leaves_buffer_untouched(self) -> None:
        buf = BufferSink("def f(x\nend")
        with pytest.raises(UnbalancedConstructError):
            retype_buffer(buf, pause=NoPause(), source_file="f.rb")
        assert buf.text == "def f(x\nend"

    def test_empty_buffer(self) -> None:
        buf = BufferSink("")
        stats = retype_buffer(buf, pause=NoPause())
        assert buf.text == ""
        assert stats.elements == 0

    def test_cancel_leaves_balanced_text(self) -> None:
        token = CancellationToken()
        buf = BufferSink("def f(a)\n  g(a)\nend")
        with pytest.raises(ReplayCancelledError):
            retype_buffer(buf, pause=CancelAfter(token, 5), cancel=token)
        assert buf.text == "def f(a)\nend"


class TestInsertAtPoint:
    """insert_at_point replays external content at the cursor."""

    def test_insert_string_mid_line(self) -> None:
        buf = BufferSink("puts()")
        buf.goto(5)
        insert_at_point(buf, "[1, 2]", pause=NoPause())
        assert buf.text == "puts([1, 2])"
        assert buf.point == 11

    def test_insert_from_text_source(self) -> None:
        other = BufferSink("def g\nend")
        buf = BufferSink("x\n", indent=FixedIndentOracle(0))
        insert_at_point(buf, other, pause=NoPause())
        assert buf.text == "x\ndef g\nend"
        assert other.text == "def g\nend"

    def test_insert_into_recording_sink(self) -> None:
        sink = RecordingSink()
        insert_at_point(sink, "(a)", pause=NoPause())
        assert sink.operations == ["insert_pair_atomic", "insert_text", "move_cursor"]

    def test_error_names_source_file(self) -> None:
        with pytest.raises(UnbalancedConstructError, match="^lib.rb:1:1 "):
            insert_at_point(RecordingSink(), "(", pause=NoPause(), source_file="lib.rb")
