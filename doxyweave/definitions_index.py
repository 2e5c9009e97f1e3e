"""Per-initial index pages listing the definitions of a collection.

Each indexed collection gets an ``all`` page plus one page per definition
kind (classes, functions, variables, ...), written below
``indices/<collection>/``. Entries are grouped by their first letter.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from doxyweave.compounds import Class, CompoundBase, File, Namespace
from doxyweave.markup import heading, link, strip_blank
from doxyweave.permalinks import sanitize_anonymous_namespace

if TYPE_CHECKING:
    from doxyweave.escaping import OutputFormat
    from doxyweave.render_dispatch import RenderEngine
    from doxyweave.workspace import Workspace

CLASS_KINDS = frozenset({"class", "struct", "union"})

_KIND_LABELS = {"enumvalue": "enum value", "define": "macro definition"}


@dataclass(frozen=True)
class IndexKind:
    """One index page of a collection; ``kinds`` is None for all entries."""

    slug: str
    title: str
    description: str
    kinds: frozenset[str] | None = None

    def accepts(self, kind: str) -> bool:
        """Return True if entries of ``kind`` belong on this page."""
        return self.kinds is None or kind in self.kinds


def _member_kinds(
    prefix: str, subject: str, with_defines: bool = False
) -> tuple[IndexKind, ...]:
    kinds = [
        IndexKind(
            "functions",
            f"{prefix} Functions Index",
            f"The {subject}functions defined in the project are:",
            frozenset({"function"}),
        ),
        IndexKind(
            "variables",
            f"{prefix} Variables Index",
            f"The {subject}variables defined in the project are:",
            frozenset({"variable"}),
        ),
        IndexKind(
            "typedefs",
            f"{prefix} Type Definitions Index",
            f"The {subject}typedefs defined in the project are:",
            frozenset({"typedef"}),
        ),
        IndexKind(
            "enums",
            f"{prefix} Enums Index",
            f"The {subject}enums defined in the project are:",
            frozenset({"enum"}),
        ),
        IndexKind(
            "enumvalues",
            f"{prefix} Enum Values Index",
            f"The {subject}enum values defined in the project are:",
            frozenset({"enumvalue"}),
        ),
    ]
    if with_defines:
        kinds.append(
            IndexKind(
                "defines",
                f"{prefix} Macro Definitions Index",
                "The macros defined in the project are:",
                frozenset({"define"}),
            )
        )
    return tuple(kinds)


_CLASSES_PAGE = "The classes, structs, unions defined in the project are:"

INDEX_KINDS: dict[str, tuple[IndexKind, ...]] = {
    "classes": (
        IndexKind(
            "all",
            "Classes and Members Index",
            "The classes, structs, unions and their members are:",
        ),
        IndexKind("classes", "Classes Index", _CLASSES_PAGE, CLASS_KINDS),
        *_member_kinds("Class", "class member "),
    ),
    "namespaces": (
        IndexKind(
            "all",
            "Namespaces Definitions Index",
            "The definitions part of the namespaces are:",
        ),
        IndexKind(
            "classes", "Namespaces Classes Index", _CLASSES_PAGE, CLASS_KINDS
        ),
        *_member_kinds("Namespaces", "namespace "),
    ),
    "files": (
        IndexKind(
            "all",
            "Files Definitions Index",
            "The definitions part of the files are:",
        ),
        IndexKind("classes", "Files Classes Index", _CLASSES_PAGE, CLASS_KINDS),
        IndexKind(
            "namespaces",
            "Files Namespaces Index",
            "The namespaces defined in the project are:",
            frozenset({"namespace"}),
        ),
        *_member_kinds("Files", "", with_defines=True),
    ),
}


@dataclass(frozen=True)
class IndexEntry:
    """One line of an index page.

    ``name`` is what is listed; the link points at the definition and is
    labelled with the class, namespace or file that holds it.
    """

    refid: str
    kindref: str
    name: str
    long_name: str
    kind: str
    owner_kind: str
    owner_name: str

    @property
    def sort_name(self) -> str:
        """Return the name without a destructor's leading ``~``."""
        return self.name.lstrip("~")

    @property
    def initial(self) -> str:
        """Return the lower-case letter the entry is grouped under."""
        return self.sort_name[:1].lower()


def _owner_name(owner: CompoundBase) -> str:
    if isinstance(owner, Class):
        return owner.fully_qualified_name + owner.template_parameters
    if isinstance(owner, Namespace):
        return sanitize_anonymous_namespace(owner.compound_name)
    if isinstance(owner, File):
        return owner.relative_path
    return owner.compound_name


def _compound_entry(compound: CompoundBase, owner: CompoundBase) -> IndexEntry:
    return IndexEntry(
        refid=compound.id,
        kindref="compound",
        name=compound.label,
        long_name=compound.compound_name,
        kind=compound.kind,
        owner_kind=owner.kind,
        owner_name=_owner_name(owner),
    )


def _member_entries(owner: CompoundBase) -> list[IndexEntry]:
    entries: list[IndexEntry] = []
    owner_name = _owner_name(owner)
    for sectiondef in owner.compounddef.sectiondefs:
        for memberdef in sectiondef.memberdefs:
            name = memberdef.name or ""
            if memberdef.kind == "function":
                name += "()"
            entries.append(
                IndexEntry(
                    memberdef.id,
                    "member",
                    name,
                    f"{owner.compound_name}::{memberdef.name or ''}",
                    memberdef.kind,
                    owner.kind,
                    owner_name,
                )
            )
            for value in memberdef.enumvalues:
                entries.append(
                    IndexEntry(
                        value.id,
                        "member",
                        value.name or "",
                        value.name or "",
                        "enumvalue",
                        owner.kind,
                        owner_name,
                    )
                )
    return entries


def collect_index_entries(
    workspace: Workspace, collection_name: str
) -> list[IndexEntry]:
    """Return the definitions of a collection, one entry per refid.

    Class pages list the classes and their members; namespace and file
    pages also list the classes (and, for files, namespaces) they contain.
    """
    entries: dict[str, IndexEntry] = {}
    for compound in workspace.collections[collection_name]:
        found: list[IndexEntry] = []
        if isinstance(compound, (Class, Namespace)):
            found.append(_compound_entry(compound, compound))
        if isinstance(compound, (Namespace, File)):
            inner = ["innerclass"]
            if isinstance(compound, File):
                inner.append("innernamespace")
            for element in inner:
                for ref in compound.compounddef.inner_refs(element):
                    target = workspace.compounds_by_id.get(ref.refid)
                    if target is not None:
                        found.append(_compound_entry(target, compound))
        found.extend(_member_entries(compound))
        for entry in found:
            entries.setdefault(entry.refid, entry)
    return list(entries.values())


def group_by_initial(entries: list[IndexEntry]) -> dict[str, list[IndexEntry]]:
    """Return the entries grouped by initial, both levels sorted."""
    groups: dict[str, list[IndexEntry]] = {}
    for entry in entries:
        if entry.initial:
            groups.setdefault(entry.initial, []).append(entry)
    return {
        initial: sorted(
            groups[initial],
            key=lambda e: (e.sort_name.lower(), e.long_name.lower(), e.refid),
        )
        for initial in sorted(groups)
    }


def _entry_text(engine: RenderEngine, entry: IndexEntry, fmt: OutputFormat) -> str:
    name = engine.render_string(entry.name, fmt)
    if fmt == "html":
        name = f"<b>{name}</b>"
    elif fmt == "markdown":
        name = f"**{name}**"
    text = f"{name}: as "
    if entry.kindref == "member" or entry.owner_kind != entry.kind:
        text += f"{_KIND_LABELS.get(entry.kind, entry.kind)} in "
    label = engine.render_string(entry.owner_name, fmt)
    url = engine.workspace.get_url(entry.refid, entry.kindref)
    return f"{text}{entry.owner_kind} {link(label, url, fmt)}"


def render_definitions_index(
    engine: RenderEngine,
    collection_name: str,
    index_kind: IndexKind,
    fmt: OutputFormat,
) -> list[str]:
    """Render one index page; an empty list when nothing matches."""
    entries = [
        e
        for e in collect_index_entries(engine.workspace, collection_name)
        if index_kind.accepts(e.kind)
    ]
    groups = group_by_initial(entries)
    if not groups:
        return []
    lines = heading(1, engine.render_string(index_kind.title, fmt), fmt)
    description = engine.render_string(index_kind.description, fmt)
    lines.extend([f"<p>{description}</p>"] if fmt == "html" else [description])
    for initial, group in groups.items():
        lines.extend(heading(2, f"- {initial.upper()} -", fmt))
        items = [_entry_text(engine, entry, fmt) for entry in group]
        if fmt == "html":
            lines.extend(["<ul>", *[f"<li>{item}</li>" for item in items], "</ul>"])
        else:
            lines.extend(["", *[f"- {item}" for item in items], ""])
        if len(group) > 1:
            count = f"{len(group)} entries"
            lines.append(f"<p>{count}</p>" if fmt == "html" else count)
    if fmt == "html":
        return [line for line in lines if line.strip()]
    return strip_blank(lines)
