"""Models for ``index.xml``, the list of every compound and member."""

from __future__ import annotations

from typing import TYPE_CHECKING

from doxyweave.node import DataModelNode

if TYPE_CHECKING:
    from lxml import etree

    from doxyweave.xml_accessor import XmlAccessor

_ROOT_ATTRIBUTES = ("version", "xml:lang", "xsi:noNamespaceSchemaLocation")


class IndexMember(DataModelNode):
    """A member listed under its compound in the index."""

    def __init__(self, xml: XmlAccessor, element: etree._Element) -> None:
        super().__init__(element.tag)
        self._check_attributes(xml, element, required=("refid", "kind"))
        self.refid = xml.get_attribute_string(element, "refid")
        self.kind = xml.get_attribute_string(element, "kind")
        self.name = xml.get_inner_element_text(element, "name")


class IndexCompound(DataModelNode):
    """A compound entry; its ``refid`` names the XML file to parse next."""

    def __init__(self, xml: XmlAccessor, element: etree._Element) -> None:
        super().__init__(element.tag)
        self._check_attributes(xml, element, required=("refid", "kind"))
        self.refid = xml.get_attribute_string(element, "refid")
        self.kind = xml.get_attribute_string(element, "kind")
        self.name: str | None = None
        self.members: list[IndexMember] = []
        for child in self._element_children(xml, element):
            if child.tag == "name":
                self._set_once(xml, child, "name", xml.get_inner_text(child))
            elif child.tag == "member":
                self.members.append(IndexMember(xml, child))
            else:
                raise self._unexpected(xml, element, child)
        if self.name is None:
            raise xml.error(element, "missing child element", expected="<name>")


class DoxygenIndex(DataModelNode):
    """The ``<doxygenindex>`` root."""

    def __init__(self, xml: XmlAccessor, element: etree._Element) -> None:
        super().__init__(element.tag)
        if element.tag != "doxygenindex":
            raise xml.error(
                element, "unexpected root element", expected="<doxygenindex>"
            )
        self._check_attributes(xml, element, optional=_ROOT_ATTRIBUTES)
        self.version = (
            xml.get_attribute_string(element, "version")
            if xml.has_attribute(element, "version")
            else None
        )
        self.compounds: list[IndexCompound] = []
        for child in self._element_children(xml, element):
            if child.tag != "compound":
                raise self._unexpected(xml, element, child)
            self.compounds.append(IndexCompound(xml, child))
