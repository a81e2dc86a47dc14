"""Token stream over a parsed element.

Hand-written decoders (the configuration map) consume markup as a
forward-only sequence of start, end and text tokens rather than as a tree.
``element_tokens`` replays the content of an already-parsed element in
that form, positioned just inside the element: the stream ends with the
element's own :class:`EndElement`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Union
from xml.etree.ElementTree import Element


@dataclass(frozen=True)
class StartElement:
    name: str
    attrs: dict[str, str] = field(default_factory=dict)

    @classmethod
    def of(cls, element: Element) -> StartElement:
        return cls(element.tag, dict(element.attrib))


@dataclass(frozen=True)
class EndElement:
    name: str


@dataclass(frozen=True)
class CharData:
    text: str


Token = Union[StartElement, EndElement, CharData]


def element_tokens(element: Element) -> Iterator[Token]:
    """Yield the tokens inside ``element`` followed by its end token.

    The walk keeps an explicit stack, so nesting depth is bounded by memory
    rather than the interpreter's recursion limit.
    """
    if element.text:
        yield CharData(element.text)
    stack = [(element, iter(element))]
    while stack:
        current, children = stack[-1]
        child = next(children, None)
        if child is None:
            stack.pop()
            yield EndElement(current.tag)
            if stack and current.tail:
                yield CharData(current.tail)
            continue
        yield StartElement.of(child)
        if child.text:
            yield CharData(child.text)
        stack.append((child, iter(child)))


__all__ = ["StartElement", "EndElement", "CharData", "Token", "element_tokens"]
