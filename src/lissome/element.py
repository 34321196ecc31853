"""Minimal HTML element tree for server-side rendering.

A component's view function returns a tree of Element and Text nodes (plain
strings and numbers are accepted as text). to_string() serializes the tree
with attribute values and text escaped.

    >>> to_string(div([id_("root")], [text("Count: 5")]))
    '<div id="root">Count: 5</div>'
"""

import html
from dataclasses import dataclass, field
from typing import List, Sequence, Tuple, Union

VOID_ELEMENTS = frozenset({"area", "base", "br", "col", "embed", "hr", "img", "input", "link", "meta", "source", "wbr"})

Attribute = Tuple[str, str]


@dataclass(frozen=True)
class Text:
    content: str


@dataclass(frozen=True)
class Element:
    """An HTML element with ordered attributes and child nodes."""

    tag: str
    attributes: Tuple[Attribute, ...] = ()
    children: Tuple["Node", ...] = field(default=())


Node = Union[Element, Text, str, int, float]


def attribute(name: str, value: str) -> Attribute:
    return (name, value)


def id_(value: str) -> Attribute:
    return attribute("id", value)


def text(content: str) -> Text:
    return Text(content)


def element(tag: str, attributes: Sequence[Attribute] = (), children: Sequence[Node] = ()) -> Element:
    return Element(tag=tag, attributes=tuple(attributes), children=tuple(children))


def div(attributes: Sequence[Attribute] = (), children: Sequence[Node] = ()) -> Element:
    return element("div", attributes, children)


def _render(node: Node, parts: List[str]) -> None:
    if isinstance(node, Element):
        parts.append(f"<{node.tag}")
        for name, value in node.attributes:
            parts.append(f' {name}="{html.escape(str(value), quote=True)}"')
        parts.append(">")
        if node.tag in VOID_ELEMENTS:
            return
        for child in node.children:
            _render(child, parts)
        parts.append(f"</{node.tag}>")
    elif isinstance(node, Text):
        parts.append(html.escape(str(node.content), quote=False))
    elif isinstance(node, (str, int, float)) and not isinstance(node, bool):
        parts.append(html.escape(str(node), quote=False))
    else:
        raise TypeError(f"Cannot render {type(node).__name__} as HTML")


def to_string(node: Node) -> str:
    """Serialize a node tree to an HTML string."""
    parts: List[str] = []
    _render(node, parts)
    return "".join(parts)
