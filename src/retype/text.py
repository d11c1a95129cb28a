"""Render a document tree back to source text.

The output is what a replay produces in a buffer that adds no indentation:
indentation after newlines is gone and the whitespace before each ``end``
becomes a single newline.

Example:
    >>> from retype import parse
    >>> to_source(parse("def f\\n    x\\n  end"))
    'def f\\nx\\nend'

"""

from __future__ import annotations

from collections.abc import Iterable

from retype.nodes import Char, Element, MultilinePair, Newline, Pair


def to_source(elements: Iterable[Element]) -> str:
    """Render ``elements`` to normalized source text.

    Walks the tree with an explicit stack; a pending closer waits on the
    stack as a literal Char run.
    """
    parts: list[str] = []
    stack: list[Element] = list(reversed(tuple(elements)))
    while stack:
        item = stack.pop()
        match item:
            case Char(text=text):
                parts.append(text)
            case Pair(opening=opening, closing=closing, body=body):
                parts.append(opening)
                stack.append(Char(closing))
                stack.extend(reversed(body))
            case MultilinePair(opening=opening, closing=closing, body=body):
                parts.append(opening)
                stack.append(Char("\n" + closing))
                stack.extend(reversed(body))
            case Newline():
                parts.append("\n")
            case _:
                raise TypeError(f"Not an element: {type(item).__name__}")
    return "".join(parts)
