"""Program listings: code lines made of highlighted spans."""

from __future__ import annotations

from typing import TYPE_CHECKING

from doxyweave.linked_text import RefText
from doxyweave.node import DataModelNode

if TYPE_CHECKING:
    from lxml import etree

    from doxyweave.xml_accessor import XmlAccessor

HIGHLIGHT_CLASSES = frozenset(
    {
        "comment",
        "normal",
        "preprocessor",
        "keyword",
        "keywordtype",
        "keywordflow",
        "stringliteral",
        "xmlcdata",
        "charliteral",
        "vhdlkeyword",
        "vhdllogic",
        "vhdlchar",
        "vhdldigit",
    }
)

_LANGUAGES = {
    "py": "python",
    "c": "c",
    "java": "java",
    "cs": "csharp",
    "js": "javascript",
}


class Sp(DataModelNode):
    """One or more spaces inside a highlight."""

    def __init__(self, xml: XmlAccessor, element: etree._Element) -> None:
        super().__init__(element.tag)
        self._check_attributes(xml, element, optional=("value",))
        self.value = (
            xml.get_attribute_number(element, "value")
            if xml.has_attribute(element, "value")
            else 1
        )
        if len(xml.children(element)) or (element.text or "").strip():
            raise xml.error(element, "<sp> must be empty")

    def text(self) -> str:
        """Return the spaces."""
        return " " * max(self.value, 1)


class Highlight(DataModelNode):
    """A run of code sharing one syntax class.

    Unknown classes are kept; the renderer falls back to ``normal``.
    """

    def __init__(self, xml: XmlAccessor, element: etree._Element) -> None:
        super().__init__(element.tag)
        self._check_attributes(xml, element, required=("class",))
        self.highlight_class = xml.get_attribute_string(element, "class")
        self._parse_mixed(xml, element, {"sp": Sp, "ref": RefText})


class CodeLine(DataModelNode):
    """One source line of a listing."""

    def __init__(self, xml: XmlAccessor, element: etree._Element) -> None:
        super().__init__(element.tag)
        self._check_attributes(
            xml, element, optional=("lineno", "refid", "refkind", "external")
        )
        self.lineno = (
            xml.get_attribute_number(element, "lineno")
            if xml.has_attribute(element, "lineno")
            else None
        )
        self.refid = (
            xml.get_attribute_string(element, "refid")
            if xml.has_attribute(element, "refid")
            else None
        )
        self.refkind = (
            xml.get_attribute_string(element, "refkind")
            if xml.has_attribute(element, "refkind")
            else None
        )
        self.external = (
            xml.get_attribute_boolean(element, "external")
            if xml.has_attribute(element, "external")
            else False
        )
        self.highlights: list[Highlight] = []
        for child in self._element_children(xml, element):
            if child.tag != "highlight":
                raise self._unexpected(xml, element, child)
            self.highlights.append(Highlight(xml, child))
        self.children.extend(self.highlights)


class ProgramListing(DataModelNode):
    """A ``<programlisting>`` block."""

    def __init__(self, xml: XmlAccessor, element: etree._Element) -> None:
        super().__init__(element.tag)
        self._check_attributes(xml, element, optional=("filename",))
        self.filename = (
            xml.get_attribute_string(element, "filename")
            if xml.has_attribute(element, "filename")
            else None
        )
        self.codelines: list[CodeLine] = []
        for child in self._element_children(xml, element):
            if child.tag != "codeline":
                raise self._unexpected(xml, element, child)
            self.codelines.append(CodeLine(xml, child))
        self.children.extend(self.codelines)

    @property
    def language(self) -> str:
        """Guess a fence language from the file extension, like ``.cpp``."""
        if not self.filename:
            return "cpp"
        extension = self.filename.rsplit(".", 1)[-1].lower()
        return _LANGUAGES.get(extension, "cpp")
