"""
parser.py

Responsibility: Turn markup text into a tuple of `Node`s.

Built on the standard library's tolerant `HTMLParser`. Text and attribute
values are kept exactly as written (entity and character references are not
decoded) because the renderer emits both verbatim. Tag names are lower-cased;
attribute names keep the case they were written in.
"""

from __future__ import annotations

import re
from html.parser import HTMLParser
from pathlib import Path

from stitch.errors import UnreadableSource
from stitch.log import get_logger
from stitch.nodes import Attribute, Element, Node, Other, Text

log = get_logger(__name__)

VOID_ELEMENTS = frozenset(
    {
        "area",
        "base",
        "br",
        "col",
        "embed",
        "hr",
        "img",
        "input",
        "link",
        "meta",
        "param",
        "source",
        "track",
        "wbr",
    }
)

_TAG_OPEN = re.compile(r"<[^\s/>]+")
_ATTRIBUTE = re.compile(r"""([^\s"'>/=][^\s"'>/=]*)(?:\s*=\s*("[^"]*"|'[^']*'|[^\s>]*))?""")


def raw_attributes(starttag_text: str, *, self_closing: bool = False) -> tuple[Attribute, ...]:
    """
    Re-read the attributes of a start tag as written in the source.

    `HTMLParser` lower-cases attribute names and decodes references in values;
    the stored form keeps both as written. A single-quoted value holding `"`
    has it replaced by `&quot;`, since values are always rendered in double
    quotes.
    """
    head = _TAG_OPEN.match(starttag_text)
    body = starttag_text[head.end() if head else 0 :]
    body = body[:-1] if body.endswith(">") else body
    if self_closing and body.endswith("/"):
        body = body[:-1]

    attrs: list[Attribute] = []
    for m in _ATTRIBUTE.finditer(body):
        name, value = m.group(1), m.group(2)
        if value and value[0] in "\"'" and len(value) >= 2 and value[-1] == value[0]:
            quote, value = value[0], value[1:-1]
            if quote == "'":
                value = value.replace('"', "&quot;")
        attrs.append((name, value))
    return tuple(attrs)


class _Frame:
    """An element that is still open while parsing."""

    __slots__ = ("name", "attributes", "children")

    def __init__(self, name: str, attributes: tuple[Attribute, ...]) -> None:
        self.name = name
        self.attributes = attributes
        self.children: list[Node] = []

    def close(self) -> Element:
        return Element(self.name, self.attributes, tuple(self.children))


class _TreeBuilder(HTMLParser):
    def __init__(self) -> None:
        super().__init__(convert_charrefs=False)
        self._root = _Frame("#document", ())
        self._stack: list[_Frame] = [self._root]

    @property
    def _top(self) -> _Frame:
        return self._stack[-1]

    def _append(self, node: Node) -> None:
        self._top.children.append(node)

    def _append_text(self, data: str) -> None:
        siblings = self._top.children
        if siblings and isinstance(siblings[-1], Text):
            siblings[-1] = Text(siblings[-1].content + data)
        else:
            siblings.append(Text(data))

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        frame = _Frame(tag, raw_attributes(self.get_starttag_text() or ""))
        if tag in VOID_ELEMENTS:
            self._append(frame.close())
        else:
            self._stack.append(frame)

    def handle_startendtag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        self._append(Element(tag, raw_attributes(self.get_starttag_text() or "", self_closing=True)))

    def handle_endtag(self, tag: str) -> None:
        for depth in range(len(self._stack) - 1, 0, -1):
            if self._stack[depth].name == tag:
                break
        else:
            log.debug("Ignoring stray end tag </%s>", tag)
            return
        while len(self._stack) > depth:
            self._close_top()

    def _close_top(self) -> None:
        frame = self._stack.pop()
        self._append(frame.close())

    def handle_data(self, data: str) -> None:
        self._append_text(data)

    def handle_entityref(self, name: str) -> None:
        self._append_text(f"&{name};")

    def handle_charref(self, name: str) -> None:
        self._append_text(f"&#{name};")

    def handle_comment(self, data: str) -> None:
        self._append(Other("comment", data))

    def handle_decl(self, decl: str) -> None:
        self._append(Other("doctype", decl))

    def handle_pi(self, data: str) -> None:
        self._append(Other("pi", data))

    def unknown_decl(self, data: str) -> None:
        self._append(Other("decl", data))

    def finish(self) -> tuple[Node, ...]:
        self.close()
        while len(self._stack) > 1:
            log.debug("Closing unterminated <%s>", self._top.name)
            self._close_top()
        return tuple(self._root.children)


def parse_markup(text: str) -> tuple[Node, ...]:
    """Parse markup text into its top-level nodes."""
    builder = _TreeBuilder()
    builder.feed(text)
    return builder.finish()


def parse_file(path: str | Path) -> tuple[Node, ...]:
    """
    Read and parse a markup file.

    Raises `UnreadableSource` if the file is missing, unreadable or not UTF-8.
    """
    p = Path(path)
    try:
        text = p.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise UnreadableSource(f"Cannot read markup file: {p}") from e
    log.debug("Parsing %s", p)
    return parse_markup(text)
