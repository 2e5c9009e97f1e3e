"""Linked text: declarations mixing plain text with cross-reference tokens."""

from __future__ import annotations

from typing import TYPE_CHECKING

from doxyweave.node import DataModelNode

if TYPE_CHECKING:
    from lxml import etree

    from doxyweave.xml_accessor import XmlAccessor


class RefText(DataModelNode):
    """A ``<ref>`` token inside linked text or a code highlight."""

    def __init__(self, xml: XmlAccessor, element: etree._Element) -> None:
        super().__init__(element.tag)
        self._check_attributes(
            xml,
            element,
            required=("refid", "kindref"),
            optional=("external", "tooltip"),
        )
        self.refid = xml.get_attribute_string(element, "refid")
        self.kindref = xml.get_attribute_string(element, "kindref")
        if self.kindref not in ("compound", "member"):
            raise xml.error(
                element, "bad kindref", expected="compound|member", found=self.kindref
            )
        self.external = (
            xml.get_attribute_string(element, "external")
            if xml.has_attribute(element, "external")
            else None
        )
        self.tooltip = (
            xml.get_attribute_string(element, "tooltip")
            if xml.has_attribute(element, "tooltip")
            else None
        )
        self._parse_text(xml, element)


class LinkedText(DataModelNode):
    """Mixed text and ``<ref>`` tokens (types, default values, initializers)."""

    def __init__(self, xml: XmlAccessor, element: etree._Element) -> None:
        super().__init__(element.tag)
        self._check_attributes(xml, element)
        self._parse_mixed(xml, element, {"ref": RefText})
