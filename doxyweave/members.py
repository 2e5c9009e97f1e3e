"""Members and the ``<sectiondef>`` blocks that group them."""

from __future__ import annotations

from typing import TYPE_CHECKING

from doxyweave.doc_blocks import Description
from doxyweave.linked_text import LinkedText
from doxyweave.node import DataModelNode
from doxyweave.params import Param, TemplateParamList

if TYPE_CHECKING:
    from lxml import etree

    from doxyweave.xml_accessor import XmlAccessor

_LOCATION_NUMBERS = (
    "line",
    "column",
    "declline",
    "declcolumn",
    "bodystart",
    "bodyend",
)

_MEMBER_TEXTS = (
    "definition",
    "argsstring",
    "name",
    "qualifiedname",
    "bitfield",
    "read",
    "write",
)

# String-valued memberdef attributes; every other optional one is yes/no.
_MEMBER_DESCRIPTIONS = ("briefdescription", "detaileddescription", "inbodydescription")
_MEMBER_STRINGS = ("prot", "virt", "refqual", "accessor", "noexceptexpression")
_MEMBER_FLAGS = (
    "static",
    "extern",
    "strong",
    "const",
    "explicit",
    "inline",
    "volatile",
    "mutable",
    "noexcept",
    "nodiscard",
    "constexpr",
    "consteval",
    "constinit",
    "final",
    "sealed",
    "new",
    "add",
    "remove",
    "raise",
    "property",
    "readonly",
    "optional",
    "required",
    "initonly",
    "attribute",
    "settable",
    "privatesettable",
    "protectedsettable",
    "gettable",
    "privategettable",
    "protectedgettable",
    "readable",
    "writable",
    "bound",
    "removable",
    "constrained",
    "transient",
    "maybevoid",
    "maybedefault",
    "maybeambiguous",
)


class Location(DataModelNode):
    """Where a compound or member is declared and defined."""

    def __init__(self, xml: XmlAccessor, element: etree._Element) -> None:
        super().__init__(element.tag)
        self._check_attributes(
            xml,
            element,
            required=("file",),
            optional=(*_LOCATION_NUMBERS, "declfile", "bodyfile"),
        )
        self.file = xml.get_attribute_string(element, "file")
        self.declfile = (
            xml.get_attribute_string(element, "declfile")
            if xml.has_attribute(element, "declfile")
            else None
        )
        self.bodyfile = (
            xml.get_attribute_string(element, "bodyfile")
            if xml.has_attribute(element, "bodyfile")
            else None
        )
        self.numbers = {
            name: xml.get_attribute_number(element, name)
            for name in _LOCATION_NUMBERS
            if xml.has_attribute(element, name)
        }

    @property
    def line(self) -> int | None:
        """Return the declaration line, if known."""
        return self.numbers.get("line")


class Reimplement(DataModelNode):
    """A ``<reimplements>`` or ``<reimplementedby>`` link."""

    def __init__(self, xml: XmlAccessor, element: etree._Element) -> None:
        super().__init__(element.tag)
        self._check_attributes(xml, element, required=("refid",))
        self.refid = xml.get_attribute_string(element, "refid")
        self._parse_text(xml, element)


class Reference(DataModelNode):
    """A ``<references>`` or ``<referencedby>`` link."""

    def __init__(self, xml: XmlAccessor, element: etree._Element) -> None:
        super().__init__(element.tag)
        self._check_attributes(
            xml,
            element,
            required=("refid",),
            optional=("compoundref", "startline", "endline"),
        )
        self.refid = xml.get_attribute_string(element, "refid")
        self.compoundref = (
            xml.get_attribute_string(element, "compoundref")
            if xml.has_attribute(element, "compoundref")
            else None
        )
        self._parse_text(xml, element)


class EnumValue(DataModelNode):
    """One enumerator."""

    def __init__(self, xml: XmlAccessor, element: etree._Element) -> None:
        super().__init__(element.tag)
        self._check_attributes(xml, element, required=("id", "prot"))
        self.id = xml.get_attribute_string(element, "id")
        self.prot = xml.get_attribute_string(element, "prot")
        self.name: str | None = None
        self.initializer: LinkedText | None = None
        self.briefdescription: Description | None = None
        self.detaileddescription: Description | None = None
        for child in self._element_children(xml, element):
            if child.tag == "name":
                self._set_once(xml, child, "name", xml.get_inner_text(child))
            elif child.tag == "initializer":
                self._set_once(xml, child, "initializer", LinkedText(xml, child))
            elif child.tag in ("briefdescription", "detaileddescription"):
                self._set_once(xml, child, child.tag, Description(xml, child))
            else:
                raise self._unexpected(xml, element, child)
        if self.name is None:
            raise xml.error(element, "missing child element", expected="<name>")


class MemberDef(DataModelNode):
    """A fully described member: function, variable, typedef, enum, ..."""

    def __init__(self, xml: XmlAccessor, element: etree._Element) -> None:
        super().__init__(element.tag)
        self._check_attributes(
            xml,
            element,
            required=("kind", "id", "prot", "static"),
            optional=(*_MEMBER_STRINGS, *_MEMBER_FLAGS),
        )
        self.kind = xml.get_attribute_string(element, "kind")
        self.id = xml.get_attribute_string(element, "id")
        self.prot = xml.get_attribute_string(element, "prot")
        self.virt = (
            xml.get_attribute_string(element, "virt")
            if xml.has_attribute(element, "virt")
            else None
        )
        self.flags = {
            name
            for name in _MEMBER_FLAGS
            if xml.has_attribute(element, name)
            and xml.get_attribute_boolean(element, name)
        }

        self.templateparamlist: TemplateParamList | None = None
        self.type: LinkedText | None = None
        self.definition: str | None = None
        self.argsstring: str | None = None
        self.name: str | None = None
        self.qualifiedname: str | None = None
        self.bitfield: str | None = None
        self.read: str | None = None
        self.write: str | None = None
        self.initializer: LinkedText | None = None
        self.requiresclause: LinkedText | None = None
        self.exceptions: LinkedText | None = None
        self.briefdescription: Description | None = None
        self.detaileddescription: Description | None = None
        self.inbodydescription: Description | None = None
        self.location: Location | None = None
        self.params: list[Param] = []
        self.enumvalues: list[EnumValue] = []
        self.qualifiers: list[str] = []
        self.reimplements: list[Reimplement] = []
        self.reimplementedby: list[Reimplement] = []
        self.references: list[Reference] = []
        self.referencedby: list[Reference] = []

        for child in self._element_children(xml, element):
            tag = child.tag
            if tag == "templateparamlist":
                self._set_once(xml, child, tag, TemplateParamList(xml, child))
            elif tag in ("type", "initializer", "requiresclause", "exceptions"):
                self._set_once(xml, child, tag, LinkedText(xml, child))
            elif tag in _MEMBER_TEXTS:
                self._set_once(xml, child, tag, xml.get_inner_text(child))
            elif tag in _MEMBER_DESCRIPTIONS:
                self._set_once(xml, child, tag, Description(xml, child))
            elif tag == "location":
                self._set_once(xml, child, tag, Location(xml, child))
            elif tag == "param":
                self.params.append(Param(xml, child))
            elif tag == "enumvalue":
                self.enumvalues.append(EnumValue(xml, child))
            elif tag == "qualifier":
                self.qualifiers.append(xml.get_inner_text(child))
            elif tag in ("reimplements", "reimplementedby"):
                getattr(self, tag).append(Reimplement(xml, child))
            elif tag in ("references", "referencedby"):
                getattr(self, tag).append(Reference(xml, child))
            else:
                raise self._unexpected(xml, element, child)

        if self.name is None:
            raise xml.error(element, "missing child element", expected="<name>")
        if self.location is None:
            raise xml.error(element, "missing child element", expected="<location>")


class MemberRef(DataModelNode):
    """A ``<member>`` entry pointing at a member documented elsewhere."""

    def __init__(self, xml: XmlAccessor, element: etree._Element) -> None:
        super().__init__(element.tag)
        self._check_attributes(xml, element, required=("refid", "kind"))
        self.refid = xml.get_attribute_string(element, "refid")
        self.kind = xml.get_attribute_string(element, "kind")
        self.name = xml.get_inner_element_text(element, "name")
        for child in self._element_children(xml, element):
            if child.tag != "name":
                raise self._unexpected(xml, element, child)


class SectionDef(DataModelNode):
    """A group of members of one section kind.

    Holds either ``<memberdef>`` or ``<member>`` children, never both.
    """

    def __init__(self, xml: XmlAccessor, element: etree._Element) -> None:
        super().__init__(element.tag)
        self._check_attributes(xml, element, required=("kind",))
        self.kind = xml.get_attribute_string(element, "kind")
        self.header: str | None = None
        self.description: Description | None = None
        self.memberdefs: list[MemberDef] = []
        self.members: list[MemberRef] = []
        for child in self._element_children(xml, element):
            if child.tag == "header":
                self._set_once(xml, child, "header", xml.get_inner_text(child))
            elif child.tag == "description":
                self._set_once(xml, child, "description", Description(xml, child))
            elif child.tag == "memberdef":
                if self.members:
                    raise xml.error(
                        element,
                        "cannot mix member kinds",
                        expected="<member>",
                        found="<memberdef>",
                    )
                self.memberdefs.append(MemberDef(xml, child))
            elif child.tag == "member":
                if self.memberdefs:
                    raise xml.error(
                        element,
                        "cannot mix member kinds",
                        expected="<memberdef>",
                        found="<member>",
                    )
                self.members.append(MemberRef(xml, child))
            else:
                raise self._unexpected(xml, element, child)
        self.children.extend(self.memberdefs or self.members)
