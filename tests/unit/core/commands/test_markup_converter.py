"""Tests for markup-to-descriptor conversion."""

from dataclasses import dataclass, field

import pytest

from xpell_runtime.core.commands.markup import (
    MarkupConverter,
    MarkupMapping,
    MarkupNode,
)
from xpell_runtime.core.common.exceptions import ParsingError


@dataclass
class FakeNode:
    name: str
    attributes: dict = field(default_factory=dict)
    children: list = field(default_factory=list)
    text: str | None = None


@pytest.fixture
def converter() -> MarkupConverter:
    return MarkupConverter()


def test_fake_node_satisfies_protocol() -> None:
    assert isinstance(FakeNode("div"), MarkupNode)


def test_element_and_attribute_mapping(converter: MarkupConverter) -> None:
    node = FakeNode("div", {"id": "main", "class": "wide"})

    descriptor = converter.to_descriptor(node)

    assert descriptor == {
        "_type": "view",
        "_children": [],
        "_id": "main",
        "class": "wide",
    }


def test_unmapped_element_keeps_its_name(converter: MarkupConverter) -> None:
    assert converter.to_descriptor(FakeNode("button"))["_type"] == "button"


def test_raw_element_records_html_tag(converter: MarkupConverter) -> None:
    descriptor = converter.to_descriptor(FakeNode("h1", text="  Title  "))

    assert descriptor["_type"] == "xhtml"
    assert descriptor["_html_tag"] == "h1"
    assert descriptor["text"] == "Title"


def test_whitespace_only_text_is_not_stored(converter: MarkupConverter) -> None:
    assert "text" not in converter.to_descriptor(FakeNode("p", text=" \n "))


def test_pseudo_nodes_are_skipped(converter: MarkupConverter) -> None:
    node = FakeNode("div", children=[FakeNode("#comment"), FakeNode("img")])

    descriptor = converter.to_descriptor(node)

    assert [c["_type"] for c in descriptor["_children"]] == ["image"]


def test_svg_forces_raw_descendants(converter: MarkupConverter) -> None:
    circle = FakeNode("circle", {"r": "4"})
    group = FakeNode("g", children=[circle])
    svg = FakeNode("svg", {"id": "icon"}, [group])

    descriptor = converter.to_descriptor(svg)

    assert descriptor["_type"] == "svg"
    assert descriptor["_html_ns"] == "http://www.w3.org/2000/svg"
    child = descriptor["_children"][0]
    assert child["_type"] == "xhtml"
    assert child["_html_tag"] == "g"
    assert child["_html_ns"] == "http://www.w3.org/2000/svg"
    grandchild = child["_children"][0]
    assert grandchild["_type"] == "xhtml"
    assert grandchild["_html_tag"] == "circle"
    assert grandchild["r"] == "4"


def test_custom_mapping_is_per_converter() -> None:
    mapping = MarkupMapping()
    mapping.register_element("button", "push-button")
    custom = MarkupConverter(mapping)
    custom.register_attribute("name", "_name")

    descriptor = custom.to_descriptor(FakeNode("button", {"name": "ok"}))

    assert descriptor["_type"] == "push-button"
    assert descriptor["_name"] == "ok"
    assert MarkupConverter().to_descriptor(FakeNode("button"))["_type"] == "button"


def test_from_string(converter: MarkupConverter) -> None:
    markup = """
    <div id="root">
        <!-- header -->
        <h1>Welcome</h1>
        <img id="logo" src="logo.png"/>
    </div>
    """

    descriptor = converter.from_string(markup)

    assert descriptor["_type"] == "view"
    assert descriptor["_id"] == "root"
    assert "text" not in descriptor
    assert [c["_type"] for c in descriptor["_children"]] == ["xhtml", "image"]
    assert descriptor["_children"][0]["text"] == "Welcome"
    assert descriptor["_children"][1]["src"] == "logo.png"


def test_from_string_strips_namespaces(converter: MarkupConverter) -> None:
    markup = '<svg xmlns="http://www.w3.org/2000/svg"><circle r="2"/></svg>'

    descriptor = converter.from_string(markup)

    assert descriptor["_type"] == "svg"
    assert descriptor["_children"][0]["_html_tag"] == "circle"


def test_from_string_blank_input(converter: MarkupConverter) -> None:
    assert converter.from_string("  ") == {}


def test_from_string_malformed_raises(converter: MarkupConverter) -> None:
    with pytest.raises(ParsingError, match="Malformed markup"):
        converter.from_string("<div><span></div>")
