"""Inline elements of Doxygen prose (the title command group)."""

from __future__ import annotations

from html import unescape
from typing import TYPE_CHECKING

from doxyweave.doc_symbols import SYMBOL_ELEMENTS
from doxyweave.node import DataModelNode, NodeFactory

if TYPE_CHECKING:
    from lxml import etree

    from doxyweave.xml_accessor import XmlAccessor

MARKUP_ELEMENTS = (
    "bold",
    "s",
    "strike",
    "underline",
    "emphasis",
    "computeroutput",
    "subscript",
    "superscript",
    "center",
    "small",
    "cite",
    "del",
    "ins",
)

# Output-specific passthrough and diagram elements.
SKIPPED_ELEMENTS = (
    "manonly",
    "xmlonly",
    "rtfonly",
    "latexonly",
    "docbookonly",
    "dot",
    "msc",
    "plantuml",
    "dotfile",
    "mscfile",
    "diafile",
)


def _optional_string(
    xml: XmlAccessor, element: etree._Element, name: str
) -> str | None:
    if xml.has_attribute(element, name):
        return xml.get_attribute_string(element, name)
    return None


class DocTitle(DataModelNode):
    """A ``<title>``, ``<term>`` or similar run of inline content."""

    def __init__(self, xml: XmlAccessor, element: etree._Element) -> None:
        super().__init__(element.tag)
        self._check_attributes(xml, element)
        self._parse_mixed(xml, element, TITLE_ELEMENTS)


class DocMarkup(DataModelNode):
    """Character styling such as ``<bold>`` or ``<computeroutput>``."""

    def __init__(self, xml: XmlAccessor, element: etree._Element) -> None:
        super().__init__(element.tag)
        self._check_attributes(xml, element)
        self._parse_mixed(xml, element, TITLE_ELEMENTS)


class DocUrlLink(DataModelNode):
    """An external hyperlink."""

    def __init__(self, xml: XmlAccessor, element: etree._Element) -> None:
        super().__init__(element.tag)
        self._check_attributes(xml, element, required=("url",))
        self.url = xml.get_attribute_string(element, "url")
        self._parse_mixed(xml, element, TITLE_ELEMENTS)


class DocRefText(DataModelNode):
    """A cross-reference in prose, resolved to a permalink at render time."""

    def __init__(self, xml: XmlAccessor, element: etree._Element) -> None:
        super().__init__(element.tag)
        self._check_attributes(
            xml, element, required=("refid", "kindref"), optional=("external",)
        )
        self.refid = xml.get_attribute_string(element, "refid")
        self.kindref = xml.get_attribute_string(element, "kindref")
        if self.kindref not in ("compound", "member"):
            raise xml.error(
                element, "bad kindref", expected="compound|member", found=self.kindref
            )
        self.external = _optional_string(xml, element, "external")
        self._parse_mixed(xml, element, TITLE_ELEMENTS)


class DocAnchor(DataModelNode):
    """A link target inside prose."""

    def __init__(self, xml: XmlAccessor, element: etree._Element) -> None:
        super().__init__(element.tag)
        self._check_attributes(xml, element, required=("id",))
        self.id = xml.get_attribute_string(element, "id")
        if xml.get_inner_text(element).strip():
            raise xml.error(element, "<anchor> must be empty")


class DocFormula(DataModelNode):
    """A LaTeX formula kept as source text."""

    def __init__(self, xml: XmlAccessor, element: etree._Element) -> None:
        super().__init__(element.tag)
        self._check_attributes(xml, element, required=("id",))
        self.id = xml.get_attribute_string(element, "id")
        self.formula = self._parse_text(xml, element)


class DocImage(DataModelNode):
    """An image reference with an optional caption."""

    def __init__(self, xml: XmlAccessor, element: etree._Element) -> None:
        super().__init__(element.tag)
        self._check_attributes(
            xml,
            element,
            optional=("type", "name", "width", "height", "alt", "inline", "caption"),
        )
        self.type = _optional_string(xml, element, "type")
        self.name = _optional_string(xml, element, "name")
        self.width = _optional_string(xml, element, "width")
        self.height = _optional_string(xml, element, "height")
        self.alt = _optional_string(xml, element, "alt")
        self.caption = _optional_string(xml, element, "caption")
        self.inline = (
            xml.get_attribute_boolean(element, "inline")
            if xml.has_attribute(element, "inline")
            else False
        )
        self._parse_mixed(xml, element, TITLE_ELEMENTS)


class DocEmoji(DataModelNode):
    """An emoji given by name and HTML character reference."""

    def __init__(self, xml: XmlAccessor, element: etree._Element) -> None:
        super().__init__(element.tag)
        self._check_attributes(xml, element, required=("name", "unicode"))
        self.name = xml.get_attribute_string(element, "name")
        self.unicode = xml.get_attribute_string(element, "unicode")

    def text(self) -> str:
        """Return the emoji character."""
        return unescape(self.unicode)


class DocEmpty(DataModelNode):
    """An empty structural element: ``<linebreak/>`` or ``<hruler/>``."""

    def __init__(self, xml: XmlAccessor, element: etree._Element) -> None:
        super().__init__(element.tag)
        self._check_attributes(xml, element)
        if len(xml.children(element)) or (element.text or "").strip():
            raise xml.error(element, f"<{element.tag}> must be empty")

    def text(self) -> str:
        """Return a line break for ``linebreak``."""
        return "\n" if self.element_name == "linebreak" else ""


class DocHtmlOnly(DataModelNode):
    """Raw HTML meant only for HTML output."""

    def __init__(self, xml: XmlAccessor, element: etree._Element) -> None:
        super().__init__(element.tag)
        self._check_attributes(xml, element, optional=("block",))
        self.block = (
            xml.get_attribute_boolean(element, "block")
            if xml.has_attribute(element, "block")
            else False
        )
        self.html = xml.get_inner_text(element)

    def text(self) -> str:
        """Return nothing; raw HTML has no plain-text form."""
        return ""


TITLE_ELEMENTS: dict[str, NodeFactory | None] = {
    "ulink": DocUrlLink,
    "ref": DocRefText,
    "anchor": DocAnchor,
    "formula": DocFormula,
    "image": DocImage,
    "emoji": DocEmoji,
    "linebreak": DocEmpty,
    "htmlonly": DocHtmlOnly,
    **{name: DocMarkup for name in MARKUP_ELEMENTS},
    **{name: None for name in SKIPPED_ELEMENTS},
    **SYMBOL_ELEMENTS,
}
