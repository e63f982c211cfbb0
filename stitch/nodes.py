"""
nodes.py

Responsibility: The in-memory markup tree.

A node is exactly one of `Text`, `Element` or `Other`. All three are frozen,
and children/attributes are tuples, so a tree can be shared freely between
the registry and any number of expansions without copying.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field, replace

# (name, value); a value of None marks a boolean attribute such as `disabled`.
Attribute = tuple[str, str | None]


@dataclass(frozen=True)
class Text:
    content: str


@dataclass(frozen=True)
class Element:
    name: str
    attributes: tuple[Attribute, ...] = ()
    children: tuple["Node", ...] = ()

    def with_children(self, children: Iterable["Node"]) -> "Element":
        return replace(self, children=tuple(children))


@dataclass(frozen=True)
class Other:
    """Comment, doctype or processing instruction, kept only for passthrough."""

    kind: str
    data: str = field(default="")


Node = Text | Element | Other


def find_elements(nodes: Iterable[Node], name: str) -> Iterator[Element]:
    """Yield the elements among `nodes` (not their descendants) named `name`."""
    for node in nodes:
        if isinstance(node, Element) and node.name == name:
            yield node


def retag(element: Element, name: str) -> Element:
    return replace(element, name=name)
