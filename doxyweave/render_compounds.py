"""Renderers for compound pages, member sections and member details."""

from __future__ import annotations

from typing import TYPE_CHECKING

from doxyweave.compounddef import (
    CompoundDef,
    CompoundRef,
    DoxygenFile,
    IncludeRef,
    InnerRef,
    ListOfAllMembers,
    MemberListEntry,
    TableOfContents,
    TocSect,
)
from doxyweave.compounds import Class, CompoundBase, File
from doxyweave.doc_blocks import Description
from doxyweave.escaping import OutputFormat, escape_attribute
from doxyweave.markup import (
    bullet,
    code_block,
    heading,
    join_inline,
    link,
    strip_blank,
)
from doxyweave.members import (
    EnumValue,
    Location,
    MemberDef,
    MemberRef,
    Reference,
    Reimplement,
    SectionDef,
)
from doxyweave.permalinks import get_permalink_anchor
from doxyweave.render_dispatch import LinesRenderer, TextRenderer
from doxyweave.sidebar import SidebarItem, collection_items

if TYPE_CHECKING:
    from doxyweave.render_dispatch import RenderEngine

# Inner-reference elements listed on a compound page, with their headings.
INNER_SECTIONS = (
    ("innergroup", "Topics"),
    ("innernamespace", "Namespaces"),
    ("innerclass", "Classes"),
    ("innerdir", "Folders"),
    ("innerfile", "Files"),
    ("innerpage", "Pages"),
)

_MEMBER_GROUPS = {
    "type": "Types",
    "func": "Member Functions",
    "attrib": "Attributes",
    "slot": "Slots",
    "static-func": "Static Member Functions",
    "static-attrib": "Static Attributes",
}

SECTION_TITLES = {
    **{
        f"{prot}-{suffix}": f"{prot.capitalize()} {title}"
        for prot in ("public", "protected", "private", "package")
        for suffix, title in _MEMBER_GROUPS.items()
    },
    "signal": "Signals",
    "dcop-func": "DCOP Member Functions",
    "property": "Properties",
    "event": "Events",
    "friend": "Friends",
    "related": "Related Symbols",
    "define": "Macros",
    "typedef": "Typedefs",
    "enum": "Enumerations",
    "func": "Functions",
    "var": "Variables",
    "user-defined": "Members",
}

TODO_BRIEF = "TODO: add brief description"


def brief_text(
    engine: RenderEngine, description: Description | None, fmt: OutputFormat
) -> str:
    """Return a description flattened to one line, without paragraph tags."""
    if description is None or description.is_empty():
        return ""
    lines = engine.render_to_lines(description, fmt)
    if fmt == "html":
        lines = [line.replace("<p>", "").replace("</p>", " ") for line in lines]
    return join_inline(lines)


def _list_block(items: list[str], fmt: OutputFormat) -> list[str]:
    if not items:
        return []
    lines = [bullet(item, fmt) for item in items]
    if fmt == "html":
        return ["<ul>", *lines, "</ul>"]
    return ["", *lines, ""]


class CompoundDefRenderer(LinesRenderer):
    """The body of a compound page, below its title."""

    def render_to_lines(self, node: CompoundDef, fmt: OutputFormat) -> list[str]:
        """Render brief, relations, inner lists, details and member sections."""
        engine = self.engine
        compound = engine.workspace.compounds_by_id.get(node.id)
        lines: list[str] = []

        brief = brief_text(engine, node.briefdescription, fmt)
        if not brief and engine.options.suggest_to_do_descriptions:
            brief = engine.render_string(TODO_BRIEF, fmt)
        if brief:
            lines.extend([f"<p>{brief}</p>"] if fmt == "html" else ["", brief, ""])

        if node.tableofcontents is not None:
            lines.extend(engine.render_to_lines(node.tableofcontents, fmt))
        if node.templateparamlist is not None or node.includes:
            lines.extend(self._declaration(node, fmt))
        if isinstance(compound, Class):
            lines.extend(self._inheritance(node, fmt))

        for element, title in INNER_SECTIONS:
            refs = node.inner_refs(element)
            if refs:
                lines.extend(heading(2, title, fmt))
                items = [engine.render_to_string(ref, fmt) for ref in refs]
                lines.extend(_list_block(items, fmt))

        detailed = node.detaileddescription
        if detailed is not None and not detailed.is_empty():
            if brief or lines:
                lines.extend(heading(2, "Description", fmt))
            lines.extend(engine.render_to_lines(detailed, fmt))

        lines.extend(engine.render_to_lines(node.sectiondefs, fmt))

        if node.listofallmembers is not None and node.listofallmembers.children:
            lines.extend(heading(2, "All Members", fmt))
            lines.extend(engine.render_to_lines(node.listofallmembers, fmt))

        if node.location is not None and not isinstance(compound, File):
            lines.extend(["", engine.render_to_string(node.location, fmt), ""])

        if (
            isinstance(compound, File)
            and node.programlisting is not None
            and engine.options.render_program_listing
        ):
            renderer = engine.find_lines_renderer(type(node.programlisting))
            lines.extend(heading(2, "File Listing", fmt))
            lines.extend(renderer.render_listing(node.programlisting, fmt))
        return lines

    def _declaration(self, node: CompoundDef, fmt: OutputFormat) -> list[str]:
        engine = self.engine
        code: list[str] = []
        for include in node.includes:
            code.append(engine.render_to_string(include, "text"))
        if node.templateparamlist is not None:
            if code:
                code.append("")
            code.append(engine.render_to_string(node.templateparamlist, "text"))
            code.append(f"{node.kind} {node.compoundname};")
        return code_block("cpp", code, fmt)

    def _inheritance(self, node: CompoundDef, fmt: OutputFormat) -> list[str]:
        engine = self.engine
        lines: list[str] = []
        for label, refs in (
            ("Inherits", node.basecompoundref),
            ("Inherited by", node.derivedcompoundref),
        ):
            if not refs:
                continue
            names = ", ".join(engine.render_to_string(ref, fmt) for ref in refs)
            if fmt == "html":
                lines.append(f"<p>{label}: {names}</p>")
            else:
                lines.extend(["", f"{label}: {names}", ""])
        return lines


class DoxygenFileRenderer(LinesRenderer):
    """A whole compound XML file."""

    def render_to_lines(self, node: DoxygenFile, fmt: OutputFormat) -> list[str]:
        """Render each compound definition in turn."""
        return self.engine.render_to_lines(node.compounddefs, fmt)


class CompoundRefRenderer(TextRenderer):
    """A base or derived class reference."""

    def render_to_string(self, node: CompoundRef, fmt: OutputFormat) -> str:
        """Render the class name, linked when it is documented."""
        label = self.engine.render_string(node.name, fmt)
        if node.refid is None or fmt == "text":
            return label
        url = self.engine.workspace.get_url(node.refid, "compound")
        return link(label, url, fmt)


class IncludeRefRenderer(TextRenderer):
    """An ``#include`` line of a class or file."""

    def render_to_string(self, node: IncludeRef, fmt: OutputFormat) -> str:
        """Render ``#include <name>`` or ``#include "name"``."""
        name = f'"{node.name}"' if node.local else f"<{node.name}>"
        label = self.engine.render_string(name, fmt)
        if node.refid is None or fmt == "text":
            return f"#include {label}"
        url = self.engine.workspace.get_url(node.refid, "compound")
        return f"#include {link(label, url, fmt)}"


class InnerRefRenderer(TextRenderer):
    """A nested compound listed on its parent's page."""

    def render_to_string(self, node: InnerRef, fmt: OutputFormat) -> str:
        """Render the target's label and brief description, linked."""
        workspace = self.engine.workspace
        target = workspace.compounds_by_id.get(node.refid)
        if target is None:
            return self.engine.render_string(node.name, fmt)
        label = self.engine.render_string(target.label, fmt)
        entry = link(label, workspace.page_url(target.permalink or ""), fmt)
        brief = brief_text(self.engine, target.compounddef.briefdescription, fmt)
        return f"{entry} - {brief}" if brief else entry


class SectionDefRenderer(LinesRenderer):
    """A member section such as "Public Member Functions"."""

    def render_to_lines(self, node: SectionDef, fmt: OutputFormat) -> list[str]:
        """Render the section heading, description and members."""
        if node.header:
            title = node.header
        elif node.kind in SECTION_TITLES:
            title = SECTION_TITLES[node.kind]
        else:
            self.engine.diagnostics.warning("unknown sectiondef kind '%s'", node.kind)
            title = node.kind.replace("-", " ").capitalize()
        lines = heading(2, self.engine.render_string(title, fmt), fmt)
        if node.description is not None:
            lines.extend(self.engine.render_to_lines(node.description, fmt))
        if node.members:
            items = [self.engine.render_to_string(m, fmt) for m in node.members]
            lines.extend(_list_block(items, fmt))
        lines.extend(self.engine.render_to_lines(node.memberdefs, fmt))
        return lines


class MemberRefRenderer(TextRenderer):
    """A member listed by reference in a section."""

    def render_to_string(self, node: MemberRef, fmt: OutputFormat) -> str:
        """Render the member name, linked to its definition."""
        label = self.engine.render_string(node.name, fmt)
        if fmt == "text":
            return label
        return link(label, self.engine.workspace.get_url(node.refid, "member"), fmt)


def member_declaration(engine: RenderEngine, node: MemberDef) -> list[str]:
    """Return the plain-text declaration lines of a member."""
    lines = []
    if node.templateparamlist is not None:
        lines.append(engine.render_to_string(node.templateparamlist, "text"))
    name = node.name or ""
    if node.kind == "define":
        params = ", ".join(engine.render_to_string(p, "text") for p in node.params)
        text = f"#define {name}({params})" if node.params else f"#define {name}"
        if node.initializer is not None:
            text += " " + engine.render_to_string(node.initializer, "text").strip()
        lines.append(text)
        return lines
    if node.kind == "enum":
        text = f"enum {name}"
        if node.type is not None and node.type.text().strip():
            text += " : " + engine.render_to_string(node.type, "text").strip()
        lines.append(text)
        return lines
    if node.definition:
        text = node.definition + (node.argsstring or "")
    else:
        parts = [engine.render_to_string(node.type, "text").strip(), name]
        text = " ".join(p for p in parts if p) + (node.argsstring or "")
    if node.bitfield:
        text += f" : {node.bitfield}"
    if node.initializer is not None and node.kind in ("variable", "property"):
        text += " " + engine.render_to_string(node.initializer, "text").strip()
    lines.append(text)
    return lines


class MemberDefRenderer(LinesRenderer):
    """The detailed entry of one member."""

    def render_to_lines(self, node: MemberDef, fmt: OutputFormat) -> list[str]:
        """Render the anchored heading, declaration, descriptions and location."""
        engine = self.engine
        member = engine.workspace.members_by_id.get(node.id)
        anchor = member.anchor if member is not None else get_permalink_anchor(node.id)
        title = engine.render_string(node.name or "", fmt)
        lines = heading(3, title, fmt, anchor)
        lines.extend(code_block("cpp", member_declaration(engine, node), fmt))

        brief = brief_text(engine, node.briefdescription, fmt)
        if not brief and engine.options.suggest_to_do_descriptions:
            brief = engine.render_string(TODO_BRIEF, fmt)
        if brief:
            lines.extend([f"<p>{brief}</p>"] if fmt == "html" else ["", brief, ""])
        for description in (node.detaileddescription, node.inbodydescription):
            if description is not None and not description.is_empty():
                lines.extend(engine.render_to_lines(description, fmt))

        if node.enumvalues:
            values = [engine.render_to_string(v, fmt) for v in node.enumvalues]
            lines.extend(heading(4, "Enumerator", fmt))
            lines.extend(_list_block(values, fmt))

        for label, refs in (
            ("Reimplements", node.reimplements),
            ("Reimplemented by", node.reimplementedby),
        ):
            if refs:
                names = ", ".join(engine.render_to_string(r, fmt) for r in refs)
                lines.extend(["", f"{label}: {names}", ""])

        if node.location is not None:
            lines.extend(["", engine.render_to_string(node.location, fmt), ""])
        return lines


class EnumValueRenderer(TextRenderer):
    """One enumerator."""

    def render_to_string(self, node: EnumValue, fmt: OutputFormat) -> str:
        """Render ``NAME = value - brief``."""
        anchor = get_permalink_anchor(node.id)
        name = self.engine.render_string(node.name or "", fmt)
        if fmt != "text":
            name = f'<a id="{escape_attribute(anchor)}"></a>{name}'
        if node.initializer is not None:
            name += " " + self.engine.render_to_string(node.initializer, fmt).strip()
        brief = brief_text(self.engine, node.briefdescription, fmt)
        return f"{name} - {brief}" if brief else name


class ReimplementRenderer(TextRenderer):
    """A reimplements/reimplemented-by or references/referenced-by link."""

    def render_to_string(self, node: Reimplement | Reference, fmt: OutputFormat) -> str:
        """Render the member name, linked when documented."""
        label = self.engine.render_to_string(node.children, fmt)
        if fmt == "text":
            return label
        return link(label, self.engine.workspace.get_url(node.refid, "member"), fmt)


class LocationRenderer(TextRenderer):
    """Where a compound or member is declared."""

    def render_to_string(self, node: Location, fmt: OutputFormat) -> str:
        """Render ``Definition at line N of file F``."""
        file = self.engine.render_string(node.file, fmt)
        if node.line is None:
            return f"Declared in {file}."
        return f"Definition at line {node.line} of file {file}."


class TableOfContentsRenderer(LinesRenderer):
    """A page's generated table of contents."""

    def render_to_lines(self, node: TableOfContents, fmt: OutputFormat) -> list[str]:
        """Render the entries as a nested list."""
        lines: list[str] = []
        for child in node.children:
            lines.extend(self.engine.render_to_lines(child, fmt))
        if fmt == "html":
            return ["<ul>", *lines, "</ul>"]
        return ["", *lines, ""]


class TocSectRenderer(LinesRenderer):
    """One entry of a page's table of contents."""

    def render_to_lines(self, node: TocSect, fmt: OutputFormat) -> list[str]:
        """Render the linked entry and its nested entries."""
        title = self.engine.render_string(node.name or "", fmt)
        entry = link(title, f"#{get_permalink_anchor(node.reference or '')}", fmt)
        nested: list[str] = []
        for child in node.children:
            nested.extend(strip_blank(self.engine.render_to_lines(child, fmt)))
        if fmt == "html":
            return [f"<li>{entry}", *nested, "</li>"]
        return [f"- {entry}", *[f"  {line}" for line in nested]]


class MemberListEntryRenderer(TextRenderer):
    """One row of the all-members list."""

    def render_to_string(self, node: MemberListEntry, fmt: OutputFormat) -> str:
        """Render ``scope::name``, linked to the member."""
        name = f"{node.scope}::{node.name}" if node.scope else node.name or ""
        label = self.engine.render_string(name, fmt)
        if fmt == "text":
            return label
        return link(label, self.engine.workspace.get_url(node.refid, "member"), fmt)


class ListOfAllMembersRenderer(LinesRenderer):
    """A class's list of all members, inherited ones included."""

    def render_to_lines(self, node: ListOfAllMembers, fmt: OutputFormat) -> list[str]:
        """Render the members as a bullet list."""
        items = [self.engine.render_to_string(m, fmt) for m in node.children]
        return _list_block(items, fmt)


def _tree_lines(
    engine: RenderEngine, items: list[SidebarItem], fmt: OutputFormat, depth: int = 0
) -> list[str]:
    lines: list[str] = []
    for item in items:
        label = engine.render_string(item.label, fmt)
        url = engine.workspace.page_url(item.permalink) if item.permalink else None
        entry = link(label, url, fmt)
        nested = _tree_lines(engine, item.children, fmt, depth + 1)
        if fmt == "html":
            if nested:
                nested = ["<ul>", *nested, "</ul>"]
            lines.extend([f"<li>{entry}", *nested, "</li>"])
        else:
            lines.append(bullet(entry, fmt, depth))
            lines.extend(nested)
    return lines


def render_collection_index(
    engine: RenderEngine, name: str, fmt: OutputFormat
) -> list[str]:
    """Render the landing page of a collection: a nested, linked tree."""
    collection = engine.workspace.collections[name]
    lines = heading(1, engine.render_string(collection.label, fmt), fmt)
    tree = _tree_lines(engine, collection_items(engine.workspace, name), fmt)
    if fmt == "html":
        return [*lines, "<ul>", *tree, "</ul>"]
    return strip_blank([*lines, *tree])


def render_compound_page(
    engine: RenderEngine, compound: CompoundBase, fmt: OutputFormat
) -> list[str]:
    """Render a compound's full page: title heading, then the body."""
    title = engine.render_string(compound.page_title, fmt)
    lines = heading(1, title, fmt)
    lines.extend(engine.render_to_lines(compound.compounddef, fmt))
    if fmt == "html":
        return [line for line in lines if line.strip()]
    return strip_blank(lines)


def register(engine: RenderEngine) -> None:
    """Register the compound and member renderers."""
    engine.register_lines(CompoundDef, CompoundDefRenderer(engine))
    engine.register_lines(DoxygenFile, DoxygenFileRenderer(engine))
    engine.register_text(CompoundRef, CompoundRefRenderer(engine))
    engine.register_text(IncludeRef, IncludeRefRenderer(engine))
    engine.register_text(InnerRef, InnerRefRenderer(engine))
    engine.register_lines(SectionDef, SectionDefRenderer(engine))
    engine.register_text(MemberRef, MemberRefRenderer(engine))
    engine.register_lines(MemberDef, MemberDefRenderer(engine))
    engine.register_text(EnumValue, EnumValueRenderer(engine))
    reimplement = ReimplementRenderer(engine)
    engine.register_text(Reimplement, reimplement)
    engine.register_text(Reference, reimplement)
    engine.register_text(Location, LocationRenderer(engine))
    engine.register_lines(TableOfContents, TableOfContentsRenderer(engine))
    engine.register_lines(TocSect, TocSectRenderer(engine))
    engine.register_text(MemberListEntry, MemberListEntryRenderer(engine))
    engine.register_lines(ListOfAllMembers, ListOfAllMembersRenderer(engine))
