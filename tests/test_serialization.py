"""Tests for retype.serialization: tree JSON round-trip."""

import json

import pytest

from retype import parse
from retype.nodes import Char, Document, MultilinePair, Newline, Pair
from retype.serialization import from_dict, from_json, to_dict, to_json


class TestToDict:
    """Each node type has a _type discriminator."""

    def test_char(self) -> None:
        assert to_dict(Char("a")) == {"_type": "Char", "text": "a"}

    def test_newline(self) -> None:
        assert to_dict(Newline()) == {"_type": "Newline"}

    def test_pair(self) -> None:
        assert to_dict(Pair("(", ")", (Char("x"),))) == {
            "_type": "Pair",
            "opening": "(",
            "closing": ")",
            "body": [{"_type": "Char", "text": "x"}],
        }

    def test_document(self) -> None:
        data = to_dict(Document(children=(Newline(),), source_file="a.rb"))
        assert data == {
            "_type": "Document",
            "children": [{"_type": "Newline"}],
            "source_file": "a.rb",
        }

    def test_unknown_type(self) -> None:
        with pytest.raises(ValueError, match="Unknown node type"):
            to_dict("nope")  # type: ignore[arg-type]


class TestFromDict:
    """from_dict rebuilds typed, frozen nodes."""

    def test_multiline_pair(self) -> None:
        node = MultilinePair("def", "end", (Char(" "), Pair("[", "]", ())))
        assert from_dict(to_dict(node)) == node

    def test_missing_type(self) -> None:
        with pytest.raises(ValueError, match="Missing '_type'"):
            from_dict({"text": "a"})

    def test_unknown_type(self) -> None:
        with pytest.raises(ValueError, match="Unknown node type"):
            from_dict({"_type": "Heading"})


class TestJson:
    """Document JSON round-trip."""

    SOURCE = "module A\n  def b(x, [y])\n    {z}\n  end\nend\n"

    def test_round_trip(self) -> None:
        doc = parse(self.SOURCE, source_file="a.rb")
        assert from_json(to_json(doc)) == doc

    def test_deterministic(self) -> None:
        doc = parse(self.SOURCE)
        assert to_json(doc) == to_json(parse(self.SOURCE))
        assert to_json(doc, indent=2) == json.dumps(
            json.loads(to_json(doc)), sort_keys=True, indent=2
        )

    def test_not_a_document(self) -> None:
        with pytest.raises(ValueError, match="Expected Document"):
            from_json(json.dumps({"_type": "Char", "text": "a"}))
