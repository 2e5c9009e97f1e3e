"""The ``<compounddef>`` element and the per-compound XML file around it."""

from __future__ import annotations

from typing import TYPE_CHECKING

from doxyweave.doc_blocks import Description
from doxyweave.linked_text import LinkedText
from doxyweave.listings import ProgramListing
from doxyweave.members import Location, SectionDef
from doxyweave.node import DataModelNode
from doxyweave.params import TemplateParamList

if TYPE_CHECKING:
    from lxml import etree

    from doxyweave.xml_accessor import XmlAccessor

INNER_ELEMENTS = (
    "innermodule",
    "innerdir",
    "innerfile",
    "innerclass",
    "innerconcept",
    "innernamespace",
    "innerpage",
    "innergroup",
)

_SKIPPED = (
    "incdepgraph",
    "invincdepgraph",
    "inheritancegraph",
    "collaborationgraph",
    "exports",
)

_ROOT_ATTRIBUTES = ("version", "xml:lang", "xsi:noNamespaceSchemaLocation")


class CompoundRef(DataModelNode):
    """A base or derived class reference; ``refid`` is absent for external classes."""

    def __init__(self, xml: XmlAccessor, element: etree._Element) -> None:
        super().__init__(element.tag)
        self._check_attributes(
            xml, element, required=("prot", "virt"), optional=("refid",)
        )
        self.refid = (
            xml.get_attribute_string(element, "refid")
            if xml.has_attribute(element, "refid")
            else None
        )
        self.prot = xml.get_attribute_string(element, "prot")
        self.virt = xml.get_attribute_string(element, "virt")
        self.name = self._parse_text(xml, element)


class IncludeRef(DataModelNode):
    """An ``<includes>`` or ``<includedby>`` entry."""

    def __init__(self, xml: XmlAccessor, element: etree._Element) -> None:
        super().__init__(element.tag)
        self._check_attributes(xml, element, required=("local",), optional=("refid",))
        self.refid = (
            xml.get_attribute_string(element, "refid")
            if xml.has_attribute(element, "refid")
            else None
        )
        self.local = xml.get_attribute_boolean(element, "local")
        self.name = self._parse_text(xml, element)


class InnerRef(DataModelNode):
    """An ``<innerclass>``, ``<innernamespace>``, ... reference by id."""

    def __init__(self, xml: XmlAccessor, element: etree._Element) -> None:
        super().__init__(element.tag)
        self._check_attributes(xml, element, required=("refid",), optional=("prot",))
        self.refid = xml.get_attribute_string(element, "refid")
        self.prot = (
            xml.get_attribute_string(element, "prot")
            if xml.has_attribute(element, "prot")
            else None
        )
        self.name = self._parse_text(xml, element)


class TocSect(DataModelNode):
    """An entry of a page's generated table of contents."""

    def __init__(self, xml: XmlAccessor, element: etree._Element) -> None:
        super().__init__(element.tag)
        self._check_attributes(xml, element)
        self.name: str | None = None
        self.reference: str | None = None
        for child in self._element_children(xml, element):
            if child.tag in ("name", "reference"):
                self._set_once(xml, child, child.tag, xml.get_inner_text(child))
            elif child.tag == "tableofcontents":
                self.children.append(TableOfContents(xml, child))
            else:
                raise self._unexpected(xml, element, child)
        if self.name is None or self.reference is None:
            raise xml.error(
                element, "missing child element", expected="<name>, <reference>"
            )


class TableOfContents(DataModelNode):
    """A page's table of contents."""

    def __init__(self, xml: XmlAccessor, element: etree._Element) -> None:
        super().__init__(element.tag)
        self._check_attributes(xml, element)
        self._parse_elements(
            xml, element, {"tocsect": TocSect, "tableofcontents": TableOfContents}
        )


class MemberListEntry(DataModelNode):
    """One row of ``<listofallmembers>``."""

    def __init__(self, xml: XmlAccessor, element: etree._Element) -> None:
        super().__init__(element.tag)
        self._check_attributes(
            xml,
            element,
            required=("refid", "prot", "virt"),
            optional=("ambiguityscope",),
        )
        self.refid = xml.get_attribute_string(element, "refid")
        self.prot = xml.get_attribute_string(element, "prot")
        self.virt = xml.get_attribute_string(element, "virt")
        self.scope: str | None = None
        self.name: str | None = None
        for child in self._element_children(xml, element):
            if child.tag in ("scope", "name"):
                self._set_once(xml, child, child.tag, xml.get_inner_text(child))
            else:
                raise self._unexpected(xml, element, child)
        if self.name is None:
            raise xml.error(element, "missing child element", expected="<name>")


class ListOfAllMembers(DataModelNode):
    """All members of a class, inherited ones included."""

    def __init__(self, xml: XmlAccessor, element: etree._Element) -> None:
        super().__init__(element.tag)
        self._check_attributes(xml, element)
        self._parse_elements(xml, element, {"member": MemberListEntry})


class CompoundDef(DataModelNode):
    """One documented compound as written in ``<refid>.xml``."""

    def __init__(self, xml: XmlAccessor, element: etree._Element) -> None:
        super().__init__(element.tag)
        self._check_attributes(
            xml,
            element,
            required=("id", "kind"),
            optional=("language", "prot", "final", "inline", "sealed", "abstract"),
        )
        self.id = xml.get_attribute_string(element, "id")
        self.kind = xml.get_attribute_string(element, "kind")
        self.language = (
            xml.get_attribute_string(element, "language")
            if xml.has_attribute(element, "language")
            else None
        )
        self.prot = (
            xml.get_attribute_string(element, "prot")
            if xml.has_attribute(element, "prot")
            else None
        )
        self.flags = {
            name
            for name in ("final", "inline", "sealed", "abstract")
            if xml.has_attribute(element, name)
            and xml.get_attribute_boolean(element, name)
        }

        self.compoundname: str | None = None
        self.title: str | None = None
        self.templateparamlist: TemplateParamList | None = None
        self.requiresclause: LinkedText | None = None
        self.initializer: LinkedText | None = None
        self.briefdescription: Description | None = None
        self.detaileddescription: Description | None = None
        self.tableofcontents: TableOfContents | None = None
        self.programlisting: ProgramListing | None = None
        self.location: Location | None = None
        self.listofallmembers: ListOfAllMembers | None = None
        self.basecompoundref: list[CompoundRef] = []
        self.derivedcompoundref: list[CompoundRef] = []
        self.includes: list[IncludeRef] = []
        self.includedby: list[IncludeRef] = []
        self.sectiondefs: list[SectionDef] = []
        self.qualifiers: list[str] = []
        for name in INNER_ELEMENTS:
            setattr(self, name, [])

        for child in self._element_children(xml, element):
            tag = child.tag
            if tag in ("compoundname", "title"):
                self._set_once(xml, child, tag, xml.get_inner_text(child))
            elif tag in ("basecompoundref", "derivedcompoundref"):
                getattr(self, tag).append(CompoundRef(xml, child))
            elif tag in ("includes", "includedby"):
                getattr(self, tag).append(IncludeRef(xml, child))
            elif tag in INNER_ELEMENTS:
                getattr(self, tag).append(InnerRef(xml, child))
            elif tag == "templateparamlist":
                self._set_once(xml, child, tag, TemplateParamList(xml, child))
            elif tag in ("requiresclause", "initializer"):
                self._set_once(xml, child, tag, LinkedText(xml, child))
            elif tag in ("briefdescription", "detaileddescription"):
                self._set_once(xml, child, tag, Description(xml, child))
            elif tag == "sectiondef":
                self.sectiondefs.append(SectionDef(xml, child))
            elif tag == "tableofcontents":
                self._set_once(xml, child, tag, TableOfContents(xml, child))
            elif tag == "programlisting":
                self._set_once(xml, child, tag, ProgramListing(xml, child))
            elif tag == "location":
                self._set_once(xml, child, tag, Location(xml, child))
            elif tag == "listofallmembers":
                self._set_once(xml, child, tag, ListOfAllMembers(xml, child))
            elif tag == "qualifier":
                self.qualifiers.append(xml.get_inner_text(child))
            elif tag not in _SKIPPED:
                raise self._unexpected(xml, element, child)

        if self.compoundname is None:
            raise xml.error(element, "missing child element", expected="<compoundname>")

    def inner_refs(self, name: str) -> list[InnerRef]:
        """Return the inner references of one kind, like ``innerclass``."""
        return getattr(self, name)


class DoxygenFile(DataModelNode):
    """The ``<doxygen>`` root of a compound XML file."""

    def __init__(self, xml: XmlAccessor, element: etree._Element) -> None:
        super().__init__(element.tag)
        if element.tag != "doxygen":
            raise xml.error(element, "unexpected root element", expected="<doxygen>")
        self._check_attributes(xml, element, optional=_ROOT_ATTRIBUTES)
        self.version = (
            xml.get_attribute_string(element, "version")
            if xml.has_attribute(element, "version")
            else None
        )
        self.compounddefs: list[CompoundDef] = []
        for child in self._element_children(xml, element):
            if child.tag != "compounddef":
                raise self._unexpected(xml, element, child)
            self.compounddefs.append(CompoundDef(xml, child))
