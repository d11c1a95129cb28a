"""Typed document tree for retype.

All nodes are frozen dataclasses with slots, so a parsed tree is immutable,
compares structurally and works with ``match`` statements.

Node Hierarchy:
Element = Char | Pair | MultilinePair | Newline
Document (root, holds a tuple of Element)

Thread Safety:
All nodes are frozen (immutable) and safe to share across threads.

"""

from collections.abc import Iterator
from dataclasses import dataclass
from typing import TypeAlias


@dataclass(frozen=True, slots=True)
class Char:
    """Literal text inserted verbatim, normally a single character."""

    text: str


@dataclass(frozen=True, slots=True)
class Pair:
    """Same-line balanced construct.

    Source: ``(...)``, ``[...]``, ``{...}``
    Replay: opener and closer are inserted together, then the body is
    filled in between them.

    """

    opening: str
    closing: str
    body: tuple["Element", ...] = ()


@dataclass(frozen=True, slots=True)
class MultilinePair:
    """Keyword block closed by ``end``.

    Source: ``class Foo ... end``, ``def bar ... end``
    Replay: the closer goes on its own indented line below the opener, then
    the body is filled in after the opener.

    """

    opening: str
    closing: str
    body: tuple["Element", ...] = ()


@dataclass(frozen=True, slots=True)
class Newline:
    """Line break.

    The indentation that followed it in the source is already stripped; the
    sink regenerates indentation on replay.

    """


Element: TypeAlias = Char | Pair | MultilinePair | Newline

ELEMENT_TYPES: tuple[type, ...] = (Char, Pair, MultilinePair, Newline)


@dataclass(frozen=True, slots=True)
class Document:
    """Root of a parsed source.

    Built once per replay request and consumed by the replay engine.

    """

    children: tuple[Element, ...] = ()
    source_file: str | None = None

    def __iter__(self) -> Iterator[Element]:
        return iter(self.children)

    def __len__(self) -> int:
        return len(self.children)

    def __getitem__(self, index: int) -> Element:
        return self.children[index]


def count_elements(elements: "Document | tuple[Element, ...]") -> int:
    """Count every element in a tree, nested bodies included."""
    total = 0
    stack = list(elements)
    while stack:
        node = stack.pop()
        total += 1
        if isinstance(node, (Pair, MultilinePair)):
            stack.extend(node.body)
    return total
