"""Block-level elements of Doxygen descriptions (the command group of ``<para>``)."""

from __future__ import annotations

from typing import TYPE_CHECKING

from doxyweave.doc_inline import TITLE_ELEMENTS, DocEmpty, DocMarkup, DocTitle
from doxyweave.linked_text import RefText
from doxyweave.listings import ProgramListing
from doxyweave.node import DataModelNode, NodeFactory

if TYPE_CHECKING:
    from lxml import etree

    from doxyweave.xml_accessor import XmlAccessor


def _optional_number(
    xml: XmlAccessor, element: etree._Element, name: str
) -> int | None:
    if xml.has_attribute(element, name):
        return xml.get_attribute_number(element, name)
    return None


def _optional_string(
    xml: XmlAccessor, element: etree._Element, name: str
) -> str | None:
    if xml.has_attribute(element, name):
        return xml.get_attribute_string(element, name)
    return None


class DocPara(DataModelNode):
    """A paragraph: inline runs interleaved with block elements."""

    def __init__(self, xml: XmlAccessor, element: etree._Element) -> None:
        super().__init__(element.tag)
        self._check_attributes(xml, element)
        self._parse_mixed(xml, element, PARA_ELEMENTS)


class DocParas(DataModelNode):
    """Any element whose content is a plain sequence of ``<para>``."""

    def __init__(self, xml: XmlAccessor, element: etree._Element) -> None:
        super().__init__(element.tag)
        self._check_attributes(xml, element)
        self._parse_elements(xml, element, {"para": DocPara})


class DocBlockQuote(DocParas):
    """A ``<blockquote>``."""


class DocParBlock(DocParas):
    """A ``<parblock>`` grouping several paragraphs."""


class DocListItem(DataModelNode):
    """One item of a list or of a variable list."""

    def __init__(self, xml: XmlAccessor, element: etree._Element) -> None:
        super().__init__(element.tag)
        self._check_attributes(xml, element, optional=("override", "value"))
        self.override = _optional_string(xml, element, "override")
        self.value = _optional_number(xml, element, "value")
        self._parse_elements(xml, element, {"para": DocPara})


class DocList(DataModelNode):
    """An ``<orderedlist>`` or ``<itemizedlist>``."""

    def __init__(self, xml: XmlAccessor, element: etree._Element) -> None:
        super().__init__(element.tag)
        self._check_attributes(xml, element, optional=("type", "start"))
        self.type = _optional_string(xml, element, "type")
        self.start = _optional_number(xml, element, "start")
        self._parse_elements(xml, element, {"listitem": DocListItem})
        if not self.children:
            raise xml.error(element, "empty list", expected="<listitem>")

    @property
    def ordered(self) -> bool:
        """Return True for numbered lists."""
        return self.element_name == "orderedlist"


class DocSimpleSect(DataModelNode):
    """A titled note such as ``@return``, ``@note`` or ``@par``."""

    def __init__(self, xml: XmlAccessor, element: etree._Element) -> None:
        super().__init__(element.tag)
        self._check_attributes(xml, element, required=("kind",))
        self.kind = xml.get_attribute_string(element, "kind")
        self.title: DocTitle | None = None
        for child in self._element_children(xml, element):
            if child.tag == "title":
                self._set_once(xml, child, "title", DocTitle(xml, child))
            elif child.tag == "para":
                self.children.append(DocPara(xml, child))
            else:
                raise self._unexpected(xml, element, child)


class DocParamType(DataModelNode):
    """The type of a documented parameter."""

    def __init__(self, xml: XmlAccessor, element: etree._Element) -> None:
        super().__init__(element.tag)
        self._check_attributes(xml, element)
        self._parse_mixed(xml, element, {"ref": RefText})


class DocParamName(DataModelNode):
    """The name of a documented parameter, with its data direction."""

    def __init__(self, xml: XmlAccessor, element: etree._Element) -> None:
        super().__init__(element.tag)
        self._check_attributes(xml, element, optional=("direction",))
        self.direction = _optional_string(xml, element, "direction")
        if self.direction not in (None, "in", "out", "inout"):
            raise xml.error(
                element, "bad direction", expected="in|out|inout", found=self.direction
            )
        self._parse_mixed(xml, element, {"ref": RefText})


class DocParamNameList(DataModelNode):
    """Types and names shared by one parameter description."""

    def __init__(self, xml: XmlAccessor, element: etree._Element) -> None:
        super().__init__(element.tag)
        self._check_attributes(xml, element)
        self.types: list[DocParamType] = []
        self.names: list[DocParamName] = []
        for child in self._element_children(xml, element):
            if child.tag == "parametertype":
                self.types.append(DocParamType(xml, child))
            elif child.tag == "parametername":
                self.names.append(DocParamName(xml, child))
            else:
                raise self._unexpected(xml, element, child)


class DocParamListItem(DataModelNode):
    """Names plus exactly one description."""

    def __init__(self, xml: XmlAccessor, element: etree._Element) -> None:
        super().__init__(element.tag)
        self._check_attributes(xml, element)
        self.name_lists: list[DocParamNameList] = []
        self.description: Description | None = None
        for child in self._element_children(xml, element):
            if child.tag == "parameternamelist":
                self.name_lists.append(DocParamNameList(xml, child))
            elif child.tag == "parameterdescription":
                self._set_once(xml, child, "description", Description(xml, child))
            else:
                raise self._unexpected(xml, element, child)
        if self.description is None:
            raise xml.error(
                element, "missing child element", expected="<parameterdescription>"
            )


class DocParamList(DataModelNode):
    """A ``<parameterlist>`` of kind param, retval, exception or templateparam."""

    def __init__(self, xml: XmlAccessor, element: etree._Element) -> None:
        super().__init__(element.tag)
        self._check_attributes(xml, element, required=("kind",))
        self.kind = xml.get_attribute_string(element, "kind")
        self._parse_elements(xml, element, {"parameteritem": DocParamListItem})


class DocXRefSect(DataModelNode):
    """A cross-referenced section, like a todo, bug or deprecated entry."""

    def __init__(self, xml: XmlAccessor, element: etree._Element) -> None:
        super().__init__(element.tag)
        self._check_attributes(xml, element, required=("id",))
        self.id = xml.get_attribute_string(element, "id")
        self.titles: list[str] = []
        self.description: Description | None = None
        for child in self._element_children(xml, element):
            if child.tag == "xreftitle":
                self.titles.append(xml.get_inner_text(child))
            elif child.tag == "xrefdescription":
                self._set_once(xml, child, "description", Description(xml, child))
            else:
                raise self._unexpected(xml, element, child)
        if self.description is None:
            raise xml.error(
                element, "missing child element", expected="<xrefdescription>"
            )


class DocVarListEntry(DataModelNode):
    """The term half of a variable list pair."""

    def __init__(self, xml: XmlAccessor, element: etree._Element) -> None:
        super().__init__(element.tag)
        self._check_attributes(xml, element)
        self.term: DocTitle | None = None
        for child in self._element_children(xml, element):
            if child.tag != "term":
                raise self._unexpected(xml, element, child)
            self._set_once(xml, child, "term", DocTitle(xml, child))
        if self.term is None:
            raise xml.error(element, "missing child element", expected="<term>")


class DocVariableList(DataModelNode):
    """Alternating ``<varlistentry>`` and ``<listitem>`` elements."""

    def __init__(self, xml: XmlAccessor, element: etree._Element) -> None:
        super().__init__(element.tag)
        self._check_attributes(xml, element)
        self.pairs: list[tuple[DocVarListEntry, DocListItem]] = []
        entry: DocVarListEntry | None = None
        for child in self._element_children(xml, element):
            if child.tag == "varlistentry" and entry is None:
                entry = DocVarListEntry(xml, child)
            elif child.tag == "listitem" and entry is not None:
                self.pairs.append((entry, DocListItem(xml, child)))
                entry = None
            else:
                raise xml.error(
                    element,
                    "variable list out of order",
                    expected="<listitem>" if entry else "<varlistentry>",
                    found=f"<{child.tag}>",
                )
        if entry is not None:
            raise xml.error(element, "unpaired <varlistentry>", expected="<listitem>")


class DocCaption(DataModelNode):
    """A table caption."""

    def __init__(self, xml: XmlAccessor, element: etree._Element) -> None:
        super().__init__(element.tag)
        self._check_attributes(xml, element, optional=("id",))
        self.id = _optional_string(xml, element, "id")
        self._parse_mixed(xml, element, TITLE_ELEMENTS)


class DocEntry(DataModelNode):
    """A table cell."""

    def __init__(self, xml: XmlAccessor, element: etree._Element) -> None:
        super().__init__(element.tag)
        self._check_attributes(
            xml,
            element,
            required=("thead",),
            optional=("colspan", "rowspan", "align", "valign", "width", "class"),
        )
        self.thead = xml.get_attribute_boolean(element, "thead")
        self.colspan = _optional_number(xml, element, "colspan")
        self.rowspan = _optional_number(xml, element, "rowspan")
        self.align = _optional_string(xml, element, "align")
        self.valign = _optional_string(xml, element, "valign")
        self.width = _optional_string(xml, element, "width")
        self.css_class = _optional_string(xml, element, "class")
        self._parse_elements(xml, element, {"para": DocPara})


class DocRow(DataModelNode):
    """A table row."""

    def __init__(self, xml: XmlAccessor, element: etree._Element) -> None:
        super().__init__(element.tag)
        self._check_attributes(xml, element)
        self._parse_elements(xml, element, {"entry": DocEntry})


class DocTable(DataModelNode):
    """A ``<table>`` with an optional caption."""

    def __init__(self, xml: XmlAccessor, element: etree._Element) -> None:
        super().__init__(element.tag)
        self._check_attributes(
            xml, element, required=("rows", "cols"), optional=("width",)
        )
        self.rows = xml.get_attribute_number(element, "rows")
        self.cols = xml.get_attribute_number(element, "cols")
        self.width = _optional_string(xml, element, "width")
        self.caption: DocCaption | None = None
        for child in self._element_children(xml, element):
            if child.tag == "caption":
                self._set_once(xml, child, "caption", DocCaption(xml, child))
            elif child.tag == "row":
                self.children.append(DocRow(xml, child))
            else:
                raise self._unexpected(xml, element, child)


class DocHeading(DataModelNode):
    """An HTML-style heading inside prose."""

    def __init__(self, xml: XmlAccessor, element: etree._Element) -> None:
        super().__init__(element.tag)
        self._check_attributes(xml, element, required=("level",))
        self.level = xml.get_attribute_number(element, "level")
        if not 1 <= self.level <= 6:
            raise xml.error(
                element, "bad heading level", expected="1..6", found=str(self.level)
            )
        self._parse_mixed(xml, element, TITLE_ELEMENTS)


class DocVerbatim(DataModelNode):
    """Literal text kept exactly as written."""

    def __init__(self, xml: XmlAccessor, element: etree._Element) -> None:
        super().__init__(element.tag)
        self._check_attributes(xml, element)
        self.verbatim = self._parse_text(xml, element)


class DocHorizontalRule(DocEmpty):
    """A ``<hruler/>`` separating blocks."""


class DocPreformatted(DocMarkup):
    """Preformatted text that may still contain inline markup."""


class DocTocItem(DataModelNode):
    """An entry of an in-page table of contents."""

    def __init__(self, xml: XmlAccessor, element: etree._Element) -> None:
        super().__init__(element.tag)
        self._check_attributes(xml, element, optional=("id",))
        self.id = _optional_string(xml, element, "id")
        self._parse_mixed(xml, element, TITLE_ELEMENTS)


class DocTocList(DataModelNode):
    """An in-page table of contents."""

    def __init__(self, xml: XmlAccessor, element: etree._Element) -> None:
        super().__init__(element.tag)
        self._check_attributes(xml, element)
        self._parse_elements(xml, element, {"tocitem": DocTocItem})


class DocDetails(DataModelNode):
    """A collapsible block with an optional summary."""

    def __init__(self, xml: XmlAccessor, element: etree._Element) -> None:
        super().__init__(element.tag)
        self._check_attributes(xml, element)
        self.summary: DocTitle | None = None
        for child in self._element_children(xml, element):
            if child.tag == "summary":
                self._set_once(xml, child, "summary", DocTitle(xml, child))
            elif child.tag == "para":
                self.children.append(DocPara(xml, child))
            else:
                raise self._unexpected(xml, element, child)


class DocSection(DataModelNode):
    """A ``<sect1>`` .. ``<sect6>`` section; nested sections go one level deeper."""

    def __init__(self, xml: XmlAccessor, element: etree._Element) -> None:
        super().__init__(element.tag)
        self._check_attributes(xml, element, optional=("id",))
        self.level = int(element.tag[-1])
        self.id = _optional_string(xml, element, "id")
        self.title: DocTitle | None = None
        content: dict[str, NodeFactory] = {"para": DocPara, "internal": DocInternal}
        if self.level < 6:
            content[f"sect{self.level + 1}"] = DocSection
        for child in self._element_children(xml, element):
            if child.tag == "title":
                self._set_once(xml, child, "title", DocTitle(xml, child))
            elif child.tag in content:
                self.children.append(content[child.tag](xml, child))
            else:
                raise self._unexpected(xml, element, child)


class DocInternal(DataModelNode):
    """Documentation marked ``@internal``."""

    def __init__(self, xml: XmlAccessor, element: etree._Element) -> None:
        super().__init__(element.tag)
        self._check_attributes(xml, element)
        self._parse_elements(xml, element, INTERNAL_ELEMENTS)


class Description(DataModelNode):
    """A brief, detailed, in-body or parameter description."""

    def __init__(self, xml: XmlAccessor, element: etree._Element) -> None:
        super().__init__(element.tag)
        self._check_attributes(xml, element)
        self.title: DocTitle | None = None
        for item in xml.iter_content(element):
            if isinstance(item, str):
                if item.strip():
                    self.children.append(item)
            elif item.tag == "title":
                self._set_once(xml, item, "title", DocTitle(xml, item))
            elif item.tag in DESCRIPTION_ELEMENTS:
                self.children.append(DESCRIPTION_ELEMENTS[item.tag](xml, item))
            else:
                raise self._unexpected(xml, element, item)

    def is_empty(self) -> bool:
        """Return True when there is no visible text."""
        return not self.text().strip()


BLOCK_ELEMENTS: dict[str, NodeFactory | None] = {
    "hruler": DocHorizontalRule,
    "preformatted": DocPreformatted,
    "programlisting": ProgramListing,
    "verbatim": DocVerbatim,
    "indexentry": None,
    "orderedlist": DocList,
    "itemizedlist": DocList,
    "simplesect": DocSimpleSect,
    "title": DocTitle,
    "variablelist": DocVariableList,
    "table": DocTable,
    "heading": DocHeading,
    "toclist": DocTocList,
    "parameterlist": DocParamList,
    "xrefsect": DocXRefSect,
    "details": DocDetails,
    "blockquote": DocBlockQuote,
    "parblock": DocParBlock,
    "javadocliteral": DocMarkup,
    "javadoccode": DocMarkup,
}

PARA_ELEMENTS: dict[str, NodeFactory | None] = {**TITLE_ELEMENTS, **BLOCK_ELEMENTS}

INTERNAL_ELEMENTS: dict[str, NodeFactory | None] = {
    "para": DocPara,
    **{f"sect{level}": DocSection for level in range(1, 7)},
}

DESCRIPTION_ELEMENTS: dict[str, NodeFactory] = {
    "para": DocPara,
    "internal": DocInternal,
    "sect1": DocSection,
}
