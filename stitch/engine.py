"""
engine.py

Responsibility: Recursively inline components and substitute `{...}` expressions.

Scoping works like a function call: a component body sees only the bindings
built from the attributes of the element that referenced it. Bindings of the
caller, or of any enclosing component, are not visible. Ordinary elements do
not open a new scope; their children see the same bindings as the element.

The engine never mutates its input. Nodes are immutable and every changed
subtree is rebuilt.

Self-referencing components do not terminate on their own. `Expander` stops
them with `RecursionLimitExceeded` once the inlining depth passes `max_depth`
(or the interpreter's recursion limit, if the ceiling is disabled).
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping

from stitch.errors import RecursionLimitExceeded
from stitch.evaluator import Evaluator
from stitch.log import get_logger
from stitch.nodes import Attribute, Element, Node, Other, Text
from stitch.registry import Registry

log = get_logger(__name__)

EXPRESSION = re.compile(r"\{(.*?)\}")

DEFAULT_MAX_DEPTH = 64


def bindings_from_attributes(attributes: Iterable[Attribute]) -> dict[str, str]:
    """Valued attributes become bindings; boolean attributes are skipped, later names win."""
    return {name: value for name, value in attributes if value is not None}


class Expander:
    def __init__(
        self,
        registry: Registry,
        evaluator: Evaluator | None = None,
        max_depth: int | None = DEFAULT_MAX_DEPTH,
    ) -> None:
        self.registry = registry
        self.evaluator = evaluator or Evaluator()
        self.max_depth = max_depth or None

    def substitute(self, node: Node, bindings: Mapping[str, str]) -> Node:
        """
        Return a new node with expressions evaluated and components inlined.

        A component reference passed here directly is treated as an ordinary
        element; use `expand` to inline the node itself.
        """
        try:
            return self._substitute(node, bindings, ())
        except RecursionError as e:
            raise RecursionLimitExceeded([]) from e

    def expand(self, node: Node, bindings: Mapping[str, str]) -> list[Node]:
        """Like `substitute`, but inline `node` itself if it is a component reference."""
        try:
            return self._expand(node, bindings, ())
        except RecursionError as e:
            raise RecursionLimitExceeded([]) from e

    def _substitute(self, node: Node, bindings: Mapping[str, str], chain: tuple[str, ...]) -> Node:
        if isinstance(node, Text):
            return self._substitute_text(node, bindings)
        if isinstance(node, Element):
            return node.with_children(
                out for child in node.children for out in self._expand(child, bindings, chain)
            )
        if isinstance(node, Other):
            return node
        raise TypeError(f"Not a markup node: {node!r}")

    def _expand(self, node: Node, bindings: Mapping[str, str], chain: tuple[str, ...]) -> list[Node]:
        if isinstance(node, Element) and node.name in self.registry:
            return self._inline(node, chain)
        return [self._substitute(node, bindings, chain)]

    def _inline(self, reference: Element, chain: tuple[str, ...]) -> list[Node]:
        chain = chain + (reference.name,)
        if self.max_depth is not None and len(chain) > self.max_depth:
            raise RecursionLimitExceeded(list(chain))

        scope = bindings_from_attributes(reference.attributes)
        log.debug("Inlining <%s> with %r", reference.name, scope)

        body = self.registry[reference.name].body
        return [out for node in body for out in self._expand(node, scope, chain)]

    def _substitute_text(self, node: Text, bindings: Mapping[str, str]) -> Text:
        if EXPRESSION.search(node.content) is None:
            return node
        content = EXPRESSION.sub(lambda m: self.evaluator.evaluate(m.group(1), bindings), node.content)
        return Text(content)


def substitute(
    node: Node,
    bindings: Mapping[str, str],
    registry: Registry,
    *,
    evaluator: Evaluator | None = None,
    max_depth: int | None = DEFAULT_MAX_DEPTH,
) -> Node:
    return Expander(registry, evaluator, max_depth).substitute(node, bindings)
