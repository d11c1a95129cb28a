"""Property-based tests for parse and replay invariants using Hypothesis."""

import re

from hypothesis import given, settings
from hypothesis import strategies as st

from retype.config import RetypeConfig, config_context
from retype.errors import NestingTooDeepError, UnbalancedConstructError
from retype.indent import FixedIndentOracle
from retype.lexer import Lexer
from retype.parser import Parser
from retype.replay import replay
from retype.sinks import BufferSink
from retype.text import to_source
from retype.tokens import TokenType

# Letters that cannot spell a keyword or ``end``
_LEAF = st.text(alphabet="abxyz01 ,=\n", max_size=6)

BALANCED = st.recursive(
    _LEAF,
    lambda inner: st.one_of(
        st.lists(inner, min_size=2, max_size=4).map("".join),
        inner.map(lambda s: f"({s})"),
        inner.map(lambda s: f"[{s}]"),
        inner.map(lambda s: f"{{{s}}}"),
        inner.map(lambda s: f"\ndef a{s}\nend\n"),
        inner.map(lambda s: f"\nif x{s} end\n"),
    ),
    max_leaves=16,
)

ANY_SOURCE = st.lists(
    st.sampled_from(
        ["a", "x", " ", "\n", "  ", "(", ")", "[", "]", "{", "}", "_", "e",
         "class ", "def ", "if ", "module ", "end", "\n  end", "append"]
    ),
    max_size=40,
).map("".join)


def _normalize(source: str) -> str:
    """Expected replay text with no indentation added."""
    source = re.sub(r"[ \t\r\n]*end", "\nend", source)
    return re.sub(r"\n[ \t]+", "\n", source)


class TestLexerInvariants:
    """Properties of the token stream."""

    @given(ANY_SOURCE)
    @settings(max_examples=200)
    def test_tokens_cover_source_exactly(self, source: str) -> None:
        tokens = list(Lexer(source).tokenize())
        assert tokens[-1].type is TokenType.DONE
        assert sum(1 for t in tokens if t.type is TokenType.DONE) == 1
        for before, after in zip(tokens, tokens[1:]):
            assert before.end_offset == after.offset
        assert tokens[-1].offset == len(source)

    @given(st.text(max_size=300))
    @settings(max_examples=100)
    def test_every_token_advances(self, source: str) -> None:
        for token in Lexer(source).tokenize():
            if token.type is not TokenType.DONE:
                assert token.end_offset > token.offset


class TestParseInvariants:
    """Termination and total consumption."""

    @given(ANY_SOURCE)
    @settings(max_examples=200)
    def test_lenient_parse_always_terminates(self, source: str) -> None:
        with config_context(RetypeConfig(strict=False)):
            elements, remainder = Parser(source).parse_until(None)
        assert remainder == ""
        to_source(elements)

    @given(ANY_SOURCE)
    @settings(max_examples=200)
    def test_strict_parse_succeeds_or_reports(self, source: str) -> None:
        try:
            Parser(source).parse()
        except (UnbalancedConstructError, NestingTooDeepError):
            pass

    @given(BALANCED)
    @settings(max_examples=200)
    def test_balanced_input_is_fully_consumed(self, source: str) -> None:
        elements, remainder = Parser(source).parse_until(None)
        assert remainder == ""
        assert to_source(elements) == _normalize(source)


class TestReplayInvariants:
    """Replay reproduces the source up to indentation."""

    @given(BALANCED)
    @settings(max_examples=200)
    def test_replay_without_indentation(self, source: str) -> None:
        doc = Parser(source).parse()
        sink = BufferSink(indent=FixedIndentOracle(0))
        replay(doc, sink)
        assert sink.text == to_source(doc)
        assert sink.point == len(sink.text)

    @given(BALANCED)
    @settings(max_examples=100)
    def test_replay_with_indentation(self, source: str) -> None:
        doc = Parser(source).parse()
        sink = BufferSink()
        replay(doc, sink)
        stripped = [line.lstrip(" \t") for line in sink.text.split("\n")]
        expected = [line.lstrip(" \t") for line in to_source(doc).split("\n")]
        assert stripped == expected
