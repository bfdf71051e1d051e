"""
Converts markup trees (XML/HTML-like) into nested object descriptors.

A descriptor is a plain dict with a ``_type`` key, a ``_children`` list of
child descriptors and the node's (remapped) attributes. Modules turn
descriptors into runtime objects via ``Module.create``.
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from collections.abc import Mapping, Sequence
from typing import Any, Protocol, runtime_checkable

from pydantic import Field

from xpell_runtime.core.common.exceptions import ParsingError
from xpell_runtime.core.constants.node_constants import (
    CHILDREN_KEY,
    HTML_NS_KEY,
    HTML_TAG_KEY,
    PSEUDO_NODE_MARKER,
    RAW_MARKUP_TYPE,
    SVG_NAMESPACE,
    TEXT_KEY,
    TYPE_KEY,
    VECTOR_CONTAINER_TYPE,
)
from xpell_runtime.core.interfaces.model_bases import DomainModel

logger = logging.getLogger(__name__)

_RAW = RAW_MARKUP_TYPE

DEFAULT_ELEMENT_MAP: dict[str, str] = {
    "div": "view",
    "a": "link",
    "b": _RAW,
    "h1": _RAW,
    "h2": _RAW,
    "h3": _RAW,
    "h4": _RAW,
    "h5": _RAW,
    "p": _RAW,
    "small": _RAW,
    "aside": _RAW,
    "span": _RAW,
    "table": _RAW,
    "th": _RAW,
    "td": _RAW,
    "tr": _RAW,
    "thead": _RAW,
    "tbody": _RAW,
    "ul": _RAW,
    "li": _RAW,
    "ol": _RAW,
    "canvas": _RAW,
    "img": "image",
}

DEFAULT_ATTRIBUTE_MAP: dict[str, str] = {"id": "_id"}


class MarkupMapping(DomainModel):
    """Element-name and attribute-name remapping used by a MarkupConverter."""

    elements: dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_ELEMENT_MAP))
    attributes: dict[str, str] = Field(
        default_factory=lambda: dict(DEFAULT_ATTRIBUTE_MAP)
    )

    def register_element(self, tag: str, object_type: str) -> None:
        """Map markup element ``tag`` to descriptor type ``object_type``."""
        self.elements[tag] = object_type

    def register_attribute(self, name: str, key: str) -> None:
        """Map markup attribute ``name`` to descriptor key ``key``."""
        self.attributes[name] = key

    def element_type(self, tag: str) -> str:
        return self.elements.get(tag) or tag

    def attribute_key(self, name: str) -> str:
        return self.attributes.get(name) or name


@runtime_checkable
class MarkupNode(Protocol):
    """The node shape the converter understands."""

    @property
    def name(self) -> str: ...

    @property
    def attributes(self) -> Mapping[str, str]: ...

    @property
    def children(self) -> Sequence[MarkupNode]: ...

    @property
    def text(self) -> str | None: ...


class ElementNode:
    """Adapts an ``xml.etree.ElementTree`` element to the MarkupNode shape."""

    def __init__(self, element: ET.Element) -> None:
        self._element = element

    @property
    def name(self) -> str:
        tag = self._element.tag
        if tag is ET.Comment:
            return f"{PSEUDO_NODE_MARKER}comment"
        if tag is ET.ProcessingInstruction:
            return f"{PSEUDO_NODE_MARKER}processing-instruction"
        # drop "{namespace}" qualifiers
        return str(tag).rsplit("}", 1)[-1]

    @property
    def attributes(self) -> Mapping[str, str]:
        return {
            key.rsplit("}", 1)[-1]: value for key, value in self._element.attrib.items()
        }

    @property
    def children(self) -> Sequence[ElementNode]:
        return [ElementNode(child) for child in self._element]

    @property
    def text(self) -> str | None:
        if self.name.startswith(PSEUDO_NODE_MARKER):
            return None
        return self._element.text


class MarkupConverter:
    """Converts markup nodes into object descriptors."""

    def __init__(self, mapping: MarkupMapping | None = None) -> None:
        self.mapping = mapping or MarkupMapping()

    def register_element(self, tag: str, object_type: str) -> None:
        self.mapping.register_element(tag, object_type)

    def register_attribute(self, name: str, key: str) -> None:
        self.mapping.register_attribute(name, key)

    def to_descriptor(self, node: MarkupNode, force_raw: bool = False) -> dict[str, Any]:
        """
        Convert a markup node and its subtree into a descriptor.

        Args:
            node: The root node to convert.
            force_raw: Convert the node (and all descendants) into the
                pass-through ``xhtml`` variant.

        Returns:
            The descriptor dict.
        """
        descriptor: dict[str, Any] = {CHILDREN_KEY: []}
        tag = node.name
        force_children = force_raw

        if force_raw:
            descriptor[TYPE_KEY] = RAW_MARKUP_TYPE
            descriptor[HTML_NS_KEY] = SVG_NAMESPACE
        else:
            descriptor[TYPE_KEY] = self.mapping.element_type(tag)

        for attr_name, attr_value in (node.attributes or {}).items():
            descriptor[self.mapping.attribute_key(attr_name)] = attr_value

        text = node.text
        if text and text.strip():
            descriptor[TEXT_KEY] = text.strip()

        if descriptor[TYPE_KEY] == RAW_MARKUP_TYPE:
            descriptor[HTML_TAG_KEY] = tag
        elif descriptor[TYPE_KEY] == VECTOR_CONTAINER_TYPE:
            force_children = True
            descriptor[HTML_NS_KEY] = SVG_NAMESPACE

        for child in node.children or ():
            if child.name.startswith(PSEUDO_NODE_MARKER):
                continue
            descriptor[CHILDREN_KEY].append(self.to_descriptor(child, force_children))

        return descriptor

    def from_string(self, markup: str) -> dict[str, Any]:
        """
        Parse an XML string and convert its root element.

        Returns an empty dict for blank input.

        Raises:
            ParsingError: If the markup is not well-formed.
        """
        if not markup or not markup.strip():
            return {}

        parser = ET.XMLParser(target=ET.TreeBuilder(insert_comments=True))
        try:
            root = ET.fromstring(markup, parser=parser)
        except ET.ParseError as exc:
            raise ParsingError(
                f"Malformed markup: {exc}", {"position": getattr(exc, "position", None)}
            ) from exc

        return self.to_descriptor(ElementNode(root))
