"""Document tree serialization: JSON round-trip for retype trees.

Converts elements to/from JSON-compatible dicts. Useful for snapshotting a
parse in tests and for inspecting what a replay will emit.

All output is deterministic (sorted keys).

Example:
    from retype import parse
    from retype.serialization import to_json, from_json

    doc = parse("def f(x)\\nend")
    assert from_json(to_json(doc)) == doc

Thread Safety:
    All functions are pure and safe to call from any thread.

"""

import json
from dataclasses import fields
from typing import Any

from retype.nodes import Char, Document, Element, MultilinePair, Newline, Pair

_NODE_TYPES: dict[str, type] = {
    "Document": Document,
    "Char": Char,
    "Pair": Pair,
    "MultilinePair": MultilinePair,
    "Newline": Newline,
}

# Fields that hold tuples of child elements
_CHILDREN_FIELDS = {"children", "body"}


def to_dict(node: Element | Document) -> dict[str, Any]:
    """Convert a node to a JSON-compatible dict.

    Includes a ``_type`` discriminator field for deserialization and
    recursively serializes child elements.

    """
    if type(node).__name__ not in _NODE_TYPES:
        msg = f"Unknown node type: {type(node).__name__!r}"
        raise ValueError(msg)

    result: dict[str, Any] = {"_type": type(node).__name__}
    for f in fields(node):
        value = getattr(node, f.name)
        if f.name in _CHILDREN_FIELDS:
            value = [to_dict(child) for child in value]
        result[f.name] = value
    return result


def from_dict(data: dict[str, Any]) -> Element | Document:
    """Reconstruct a typed node from a dict produced by to_dict.

    Raises:
        ValueError: If ``_type`` is missing or unknown.

    """
    type_name = data.get("_type")
    if type_name is None:
        msg = "Missing '_type' field in serialized node"
        raise ValueError(msg)

    node_cls = _NODE_TYPES.get(type_name)
    if node_cls is None:
        msg = f"Unknown node type: {type_name!r}"
        raise ValueError(msg)

    kwargs: dict[str, Any] = {}
    for f in fields(node_cls):
        if f.name not in data:
            continue
        raw = data[f.name]
        if f.name in _CHILDREN_FIELDS:
            raw = tuple(from_dict(child) for child in raw)
        kwargs[f.name] = raw

    return node_cls(**kwargs)


def to_json(doc: Document, *, indent: int | None = None) -> str:
    """Serialize a Document to a JSON string with sorted keys."""
    return json.dumps(to_dict(doc), sort_keys=True, indent=indent)


def from_json(data: str) -> Document:
    """Deserialize a Document from a JSON string.

    Raises:
        ValueError: If the JSON doesn't represent a Document.

    """
    node = from_dict(json.loads(data))
    if not isinstance(node, Document):
        msg = f"Expected Document, got {type(node).__name__}"
        raise ValueError(msg)
    return node
