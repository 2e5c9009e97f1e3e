"""Models for ``Doxyfile.xml``, the options Doxygen ran with."""

from __future__ import annotations

from typing import TYPE_CHECKING

from doxyweave.node import DataModelNode

if TYPE_CHECKING:
    from lxml import etree

    from doxyweave.xml_accessor import XmlAccessor

OPTION_TYPES = ("int", "bool", "string", "stringlist")


class DoxyfileOption(DataModelNode):
    """One ``<option>`` with its ``<value>`` list."""

    def __init__(self, xml: XmlAccessor, element: etree._Element) -> None:
        super().__init__(element.tag)
        self._check_attributes(xml, element, required=("id", "default", "type"))
        self.id = xml.get_attribute_string(element, "id")
        self.default = xml.get_attribute_boolean(element, "default")
        self.type = xml.get_attribute_string(element, "type")
        if self.type not in OPTION_TYPES:
            raise xml.error(
                element,
                "bad option type",
                expected="|".join(OPTION_TYPES),
                found=self.type,
            )
        self.values: list[str] = []
        for child in self._element_children(xml, element):
            if child.tag != "value":
                raise self._unexpected(xml, element, child)
            self.values.append(xml.get_inner_text(child))


class DoxyfileOptions(DataModelNode):
    """The ``<doxyfile>`` root, indexed by option id."""

    def __init__(self, xml: XmlAccessor, element: etree._Element) -> None:
        super().__init__(element.tag)
        if element.tag != "doxyfile":
            raise xml.error(element, "unexpected root element", expected="<doxyfile>")
        self._check_attributes(
            xml,
            element,
            optional=("version", "xml:lang", "xsi:noNamespaceSchemaLocation"),
        )
        self.options: dict[str, DoxyfileOption] = {}
        for child in self._element_children(xml, element):
            if child.tag != "option":
                raise self._unexpected(xml, element, child)
            option = DoxyfileOption(xml, child)
            self.options[option.id] = option
            self.children.append(option)

    def get_list(self, option_id: str) -> list[str]:
        """Return all values of an option, or an empty list."""
        option = self.options.get(option_id)
        return list(option.values) if option else []

    def get_string(self, option_id: str, default: str = "") -> str:
        """Return the first value of an option."""
        values = self.get_list(option_id)
        return values[0] if values else default

    def get_bool(self, option_id: str) -> bool:
        """Return a YES/NO option as a bool."""
        return self.get_string(option_id).upper() == "YES"
