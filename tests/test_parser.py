from pathlib import Path

import pytest

from stitch.errors import UnreadableSource
from stitch.nodes import Element, Other, Text
from stitch.parser import parse_file, parse_markup, raw_attributes


def test_element_with_attributes_and_text() -> None:
    assert parse_markup('<div class="a" disabled>hi</div>') == (
        Element("div", (("class", "a"), ("disabled", None)), (Text("hi"),)),
    )


def test_entity_references_are_kept_verbatim() -> None:
    (p,) = parse_markup("<p>a &amp; b &#169;</p>")
    assert p.children == (Text("a &amp; b &#169;"),)


def test_void_elements_take_no_children() -> None:
    (p,) = parse_markup("<p>x<br>y<img src='a.png'/></p>")
    assert p.children == (
        Text("x"),
        Element("br"),
        Text("y"),
        Element("img", (("src", "a.png"),)),
    )


def test_comments_and_doctype_become_other_nodes() -> None:
    nodes = parse_markup("<!DOCTYPE html><!-- note -->")
    assert nodes == (Other("doctype", "DOCTYPE html"), Other("comment", " note "))


def test_tag_names_are_lower_cased_attribute_names_are_not() -> None:
    assert parse_markup("<Card userName='x'></Card>") == (Element("card", (("userName", "x"),)),)


def test_unclosed_elements_are_closed_at_end() -> None:
    assert parse_markup("<div><span>a") == (Element("div", (), (Element("span", (), (Text("a"),)),)),)


def test_stray_end_tag_is_ignored() -> None:
    assert parse_markup("a</b>c") == (Text("ac"),)


def test_expression_braces_survive_parsing() -> None:
    (p,) = parse_markup("<p>{1 + 2} and {name}</p>")
    assert p.children == (Text("{1 + 2} and {name}"),)


def test_style_content_is_a_single_text_child() -> None:
    (style,) = parse_markup("<style>.a { color: red; } .b > .c { x: y; }</style>")
    assert style.children == (Text(".a { color: red; } .b > .c { x: y; }"),)


def test_parse_file_reads_utf8(tmp_path: Path) -> None:
    path = tmp_path / "page.html"
    path.write_text("<p>café</p>", encoding="utf-8")
    assert parse_file(path) == (Element("p", (), (Text("café"),)),)


def test_parse_file_missing_raises(tmp_path: Path) -> None:
    with pytest.raises(UnreadableSource):
        parse_file(tmp_path / "nope.html")


def test_parse_file_binary_raises(tmp_path: Path) -> None:
    path = tmp_path / "blob.html"
    path.write_bytes(b"\xff\xfe\x00\x81")
    with pytest.raises(UnreadableSource):
        parse_file(path)


def test_attribute_values_keep_their_references() -> None:
    (a,) = parse_markup('<a title="&quot;hi&quot; &amp; bye" href=/x?a=1&amp;b=2>x</a>')
    assert a.attributes == (("title", "&quot;hi&quot; &amp; bye"), ("href", "/x?a=1&amp;b=2"))


def test_single_quoted_value_with_double_quotes() -> None:
    (a,) = parse_markup("<a title='say \"hi\"' data-x = 'y z'>x</a>")
    assert a.attributes == (("title", "say &quot;hi&quot;"), ("data-x", "y z"))


def test_attributes_of_self_closing_tags() -> None:
    assert parse_markup('<input value="a/b" checked/>') == (
        Element("input", (("value", "a/b"), ("checked", None))),
    )


def test_raw_attributes_of_multiline_tag() -> None:
    assert raw_attributes('<div\n  class="a"\n  hidden\n>') == (("class", "a"), ("hidden", None))
