"""Function and template parameter declarations."""

from __future__ import annotations

from typing import TYPE_CHECKING

from doxyweave.doc_blocks import Description
from doxyweave.linked_text import LinkedText
from doxyweave.node import DataModelNode

if TYPE_CHECKING:
    from lxml import etree

    from doxyweave.xml_accessor import XmlAccessor


class Param(DataModelNode):
    """A function or template parameter; every part is optional."""

    def __init__(self, xml: XmlAccessor, element: etree._Element) -> None:
        super().__init__(element.tag)
        self._check_attributes(xml, element)
        self.attributes: str | None = None
        self.type: LinkedText | None = None
        self.declname: str | None = None
        self.defname: str | None = None
        self.array: str | None = None
        self.defval: LinkedText | None = None
        self.typeconstraint: LinkedText | None = None
        self.briefdescription: Description | None = None

        for child in self._element_children(xml, element):
            if child.tag in ("type", "defval", "typeconstraint"):
                self._set_once(xml, child, child.tag, LinkedText(xml, child))
            elif child.tag in ("attributes", "declname", "defname", "array"):
                self._set_once(xml, child, child.tag, xml.get_inner_text(child))
            elif child.tag == "briefdescription":
                self._set_once(xml, child, "briefdescription", Description(xml, child))
            else:
                raise self._unexpected(xml, element, child)


class TemplateParamList(DataModelNode):
    """The ``<templateparamlist>`` of a template compound or member."""

    def __init__(self, xml: XmlAccessor, element: etree._Element) -> None:
        super().__init__(element.tag)
        self._check_attributes(xml, element)
        self.params: list[Param] = []
        for child in self._element_children(xml, element):
            if child.tag != "param":
                raise self._unexpected(xml, element, child)
            self.params.append(Param(xml, child))
