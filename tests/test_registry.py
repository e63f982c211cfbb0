from pathlib import Path

import pytest

from stitch.errors import MalformedStyleBlock, MissingComponentWrapper, UnreadableSource
from stitch.nodes import Element, Text
from stitch.registry import build_registry, extract_style, find_wrapper, iter_component_files, load_component
from stitch.parser import parse_markup


def _write(path: Path, text: str) -> Path:
    path.write_text(text, encoding="utf-8")
    return path


def test_load_component_reads_body_and_style(tmp_path: Path) -> None:
    path = _write(
        tmp_path / "Card.html",
        "<style>.c { color: red; }</style>\n<component><div class=\"c\">{title}</div></component>\n",
    )

    component = load_component(path)

    assert component.name == "card"
    assert component.body == (Element("div", (("class", "c"),), (Text("{title}"),)),)
    assert component.style == ".c { color: red; }"
    assert component.source == path


def test_component_without_style(tmp_path: Path) -> None:
    component = load_component(_write(tmp_path / "a.html", "<component>x</component>"))
    assert component.style is None
    assert component.body == (Text("x"),)


def test_missing_wrapper_fails() -> None:
    with pytest.raises(MissingComponentWrapper):
        find_wrapper(parse_markup("<div>no wrapper</div>"))


def test_nested_wrapper_does_not_count() -> None:
    with pytest.raises(MissingComponentWrapper):
        find_wrapper(parse_markup("<div><component>x</component></div>"))


def test_first_wrapper_wins() -> None:
    wrapper = find_wrapper(parse_markup("<!-- c -->\n<component>1</component><component>2</component>"))
    assert wrapper.children == (Text("1"),)


def test_empty_style_block_fails() -> None:
    with pytest.raises(MalformedStyleBlock):
        extract_style(parse_markup("<style></style><component></component>"))


def test_iter_component_files_is_sorted_and_filtered(tmp_path: Path) -> None:
    for name in ["b.html", "a.htm", "notes.txt", "c.HTML"]:
        _write(tmp_path / name, "<component></component>")
    (tmp_path / "sub.html").mkdir()

    assert [p.name for p in iter_component_files(tmp_path)] == ["a.htm", "b.html", "c.HTML"]


def test_iter_component_files_missing_directory(tmp_path: Path) -> None:
    with pytest.raises(UnreadableSource):
        iter_component_files(tmp_path / "missing")


def test_later_file_wins_on_duplicate_name(tmp_path: Path) -> None:
    first = _write(tmp_path / "dup.htm", "<component>first</component>")
    second = _write(tmp_path / "dup.html", "<component>second</component>")

    registry = build_registry(iter_component_files(tmp_path))

    assert list(registry) == ["dup"]
    assert registry["dup"].body == (Text("second"),)
    assert registry["dup"].source == second != first


def test_registry_is_read_only(tmp_path: Path) -> None:
    registry = build_registry([_write(tmp_path / "x.html", "<component></component>")])
    with pytest.raises(TypeError):
        registry["y"] = registry["x"]  # type: ignore[index]


def test_bad_component_file_aborts_build(tmp_path: Path) -> None:
    good = _write(tmp_path / "good.html", "<component></component>")
    bad = _write(tmp_path / "bad.html", "<div></div>")
    with pytest.raises(MissingComponentWrapper):
        build_registry([good, bad])
