"""
renderer.py

Responsibility: Serialize a substituted tree back into markup text.

Rules:
- Text is emitted verbatim; nothing is escaped.
- Attributes keep their stored order: `name` for boolean attributes,
  `name="value"` otherwise (value emitted as stored).
- Every element gets an opening and a closing tag, void elements included.
- Comments, doctypes and other non-element nodes produce nothing.
"""

from __future__ import annotations

from collections.abc import Iterable

from stitch.nodes import Attribute, Element, Node, Other, Text


def _render_attribute(attr: Attribute) -> str:
    name, value = attr
    if value is None:
        return f" {name}"
    return f' {name}="{value}"'


def _render_into(node: Node, buf: list[str]) -> None:
    if isinstance(node, Text):
        buf.append(node.content)
    elif isinstance(node, Element):
        buf.append(f"<{node.name}")
        buf.extend(_render_attribute(attr) for attr in node.attributes)
        buf.append(">")
        for child in node.children:
            _render_into(child, buf)
        buf.append(f"</{node.name}>")
    elif isinstance(node, Other):
        pass
    else:
        raise TypeError(f"Not a markup node: {node!r}")


def render(node: Node) -> str:
    buf: list[str] = []
    _render_into(node, buf)
    return "".join(buf)


def render_nodes(nodes: Iterable[Node]) -> str:
    buf: list[str] = []
    for node in nodes:
        _render_into(node, buf)
    return "".join(buf)
