"""
registry.py

Responsibility: Build the read-only component registry from a directory.

Rules:
- A component file holds one top-level `<component>` element; its children
  are the component body.
- The component name is the file name without its extension, lower-cased to
  match the parser's tag names.
- Files are read in sorted order; on a name collision the later file wins.
- An optional top-level `<style>` element carries the component's CSS.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType

from stitch.errors import MalformedStyleBlock, MissingComponentWrapper, UnreadableSource
from stitch.log import get_logger
from stitch.nodes import Element, Node, Text, find_elements
from stitch.parser import parse_file

log = get_logger(__name__)

WRAPPER_TAG = "component"
DEFAULT_EXTENSIONS = (".html", ".htm")


@dataclass(frozen=True)
class Component:
    name: str
    body: tuple[Node, ...]
    style: str | None = None
    source: Path | None = None


Registry = Mapping[str, Component]


def find_wrapper(nodes: Iterable[Node], *, source: str = "<document>") -> Element:
    """
    Return the first top-level `<component>` element.

    Raises `MissingComponentWrapper` if there is none.
    """
    wrappers = list(find_elements(nodes, WRAPPER_TAG))
    if not wrappers:
        raise MissingComponentWrapper(f"Expected an outer <{WRAPPER_TAG}> element in {source}")
    if len(wrappers) > 1:
        log.warning("%s has %d <%s> elements; using the first", source, len(wrappers), WRAPPER_TAG)
    return wrappers[0]


def extract_style(nodes: Iterable[Node], *, source: str = "<document>") -> str | None:
    """Return the text of the first top-level `<style>` element, if any."""
    style = next(find_elements(nodes, "style"), None)
    if style is None:
        return None
    if not style.children or not isinstance(style.children[0], Text):
        raise MalformedStyleBlock(f"<style> in {source} must contain a text child")
    return style.children[0].content


def load_component(path: str | Path) -> Component:
    p = Path(path)
    nodes = parse_file(p)
    wrapper = find_wrapper(nodes, source=str(p))
    return Component(
        name=p.stem.lower(),
        body=wrapper.children,
        style=extract_style(nodes, source=str(p)),
        source=p,
    )


def iter_component_files(directory: str | Path, extensions: Iterable[str] = DEFAULT_EXTENSIONS) -> list[Path]:
    """List component files directly inside `directory`, sorted by name."""
    d = Path(directory)
    if not d.is_dir():
        raise UnreadableSource(f"Components directory not found: {d}")
    suffixes = {ext.lower() for ext in extensions}
    files = [p for p in d.iterdir() if p.is_file() and p.suffix.lower() in suffixes]
    return sorted(files, key=lambda p: p.name)


def build_registry(paths: Iterable[str | Path]) -> Registry:
    """Load every component file and return an immutable name -> Component mapping."""
    components: dict[str, Component] = {}
    for path in paths:
        log.debug("Indexing: %s", path)
        component = load_component(path)
        previous = components.get(component.name)
        if previous is not None:
            log.warning("Component %r from %s replaces %s", component.name, component.source, previous.source)
        components[component.name] = component
    log.info("Registered %d component(s)", len(components))
    return MappingProxyType(components)


def registry_from_bodies(bodies: Mapping[str, Iterable[Node]]) -> Registry:
    """Build a registry directly from in-memory bodies (no files involved)."""
    return MappingProxyType({name.lower(): Component(name.lower(), tuple(body)) for name, body in bodies.items()})
