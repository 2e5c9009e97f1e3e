"""Compound and member objects used for linking, permalinks and rendering."""

from __future__ import annotations

from typing import TYPE_CHECKING

from doxyweave.errors import DuplicateParentError
from doxyweave.permalinks import (
    get_permalink_anchor,
    sanitize_anonymous_namespace,
    sanitize_hierarchical_path,
    sanitize_template_suffix,
)

if TYPE_CHECKING:
    from doxyweave.compounddef import CompoundDef
    from doxyweave.members import MemberDef

CLASS_BUCKETS = {
    "class": "classes",
    "struct": "structs",
    "union": "unions",
    "interface": "interfaces",
    "exception": "exceptions",
    "protocol": "protocols",
    "category": "categories",
}


class CompoundBase:
    """A compound wrapped with its derived hierarchy and permalink facts.

    Links to other compounds are ids; collections resolve them.
    """

    # Inner-reference element whose targets become children in the same collection.
    child_element: str | None = None
    # Joins a parent name to a child name, for kinds with nested names.
    separator: str | None = None
    kind_label = "Compound"

    def __init__(self, compounddef: CompoundDef) -> None:
        """Wrap a parsed compound definition."""
        self.compounddef = compounddef
        self.id = compounddef.id
        self.kind = compounddef.kind
        self.compound_name: str = compounddef.compoundname or ""
        self.title = compounddef.title
        self.parent_id: str | None = None
        self.child_ids = (
            [ref.refid for ref in compounddef.inner_refs(self.child_element)]
            if self.child_element
            else []
        )
        self.unqualified_name = self.compound_name
        self.depth = 0
        self.permalink: str | None = None

    def __repr__(self) -> str:
        """Return a short debugging representation."""
        return f"{type(self).__name__}({self.id!r})"

    def set_parent(self, parent_id: str) -> None:
        """Record the containing compound; a compound has at most one parent."""
        if self.parent_id is not None:
            raise DuplicateParentError(self.id, self.parent_id, parent_id)
        self.parent_id = parent_id

    @property
    def label(self) -> str:
        """Return the short name shown in lists and the sidebar."""
        return self.unqualified_name

    @property
    def page_title(self) -> str:
        """Return the heading of the compound's page."""
        return f"{self.compound_name} {self.kind_label} Reference"

    def make_permalink(self) -> str:
        """Compute the permalink from the already-built hierarchy."""
        raise NotImplementedError


class Class(CompoundBase):
    """A class, struct, union or similar type."""

    child_element = "innerclass"

    def __init__(self, compounddef: CompoundDef) -> None:
        """Split the name into its qualified part and template arguments."""
        super().__init__(compounddef)
        name = self.compound_name
        index = name.find("<")
        if index >= 0:
            self.fully_qualified_name = name[:index].strip()
            self.template_parameters = name[index:]
        else:
            self.fully_qualified_name = name
            self.template_parameters = ""
        self.unqualified_name = self.fully_qualified_name.rsplit("::", 1)[-1]
        self.base_class_ids = [
            ref.refid for ref in compounddef.basecompoundref if ref.refid is not None
        ]
        self.external_base_names = [
            ref.name for ref in compounddef.basecompoundref if ref.refid is None
        ]
        self.base_classes: list[Class] = []
        self.derived_classes: list[Class] = []

    @property
    def kind_label(self) -> str:
        """Return ``Class``, ``Struct``, ..."""
        return self.kind.capitalize()

    @property
    def label(self) -> str:
        """Return the unqualified name with template arguments."""
        return self.unqualified_name + self.template_parameters

    def make_permalink(self) -> str:
        """Return ``classes/ns/widget`` or ``classes/ns/box-int``."""
        bucket = CLASS_BUCKETS.get(self.kind, "classes")
        path = sanitize_hierarchical_path(self.fully_qualified_name.replace("::", "/"))
        suffix = sanitize_template_suffix(self.template_parameters)
        if suffix:
            path = f"{path}-{suffix}"
        return f"{bucket}/{path}"


class Namespace(CompoundBase):
    """A namespace; children are nested namespaces."""

    child_element = "innernamespace"
    separator = "::"
    kind_label = "Namespace"

    @property
    def is_anonymous(self) -> bool:
        """Return True for ``anonymous_namespace{...}`` and ``@N`` namespaces."""
        last = self.compound_name.rsplit("::", 1)[-1]
        return last.startswith(("anonymous_namespace{", "@"))

    @property
    def label(self) -> str:
        """Return the unqualified name, or ``anonymous`` for anonymous ones."""
        return "anonymous" if self.is_anonymous else self.unqualified_name

    def make_permalink(self) -> str:
        """Return ``namespaces/outer/inner``."""
        name = sanitize_anonymous_namespace(self.compound_name)
        return "namespaces/" + sanitize_hierarchical_path(name.replace("::", "/"))


class Group(CompoundBase):
    """A Doxygen group (topic)."""

    child_element = "innergroup"
    kind_label = "Group"

    @property
    def label(self) -> str:
        """Return the title without its trailing period."""
        title = (self.title or self.compound_name).strip()
        return title[:-1] if title.endswith(".") else title

    @property
    def page_title(self) -> str:
        """Return the group title."""
        return self.label

    def make_permalink(self) -> str:
        """Return ``groups/<name>``."""
        return "groups/" + sanitize_hierarchical_path(self.compound_name)


class Folder(CompoundBase):
    """A source directory."""

    child_element = "innerdir"
    separator = "/"
    kind_label = "Folder"

    def __init__(self, compounddef: CompoundDef) -> None:
        """Start with the full name as the relative path."""
        super().__init__(compounddef)
        self.relative_path = self.compound_name
        self.file_ids = [ref.refid for ref in compounddef.inner_refs("innerfile")]

    @property
    def label(self) -> str:
        """Return the last path segment."""
        return self.unqualified_name.rsplit("/", 1)[-1]

    def make_permalink(self) -> str:
        """Return ``folders/<relative path>``."""
        return "folders/" + sanitize_hierarchical_path(self.relative_path)


class File(CompoundBase):
    """A source file; its folder is recorded separately from ``parent_id``."""

    kind_label = "File"

    def __init__(self, compounddef: CompoundDef) -> None:
        """Start with the file name as the relative path."""
        super().__init__(compounddef)
        self.folder_id: str | None = None
        self.relative_path = self.compound_name

    def set_folder(self, folder_id: str, folder_path: str) -> None:
        """Record the folder listing this file."""
        if self.folder_id is not None:
            raise DuplicateParentError(self.id, self.folder_id, folder_id)
        self.folder_id = folder_id
        self.relative_path = f"{folder_path}/{self.compound_name}"

    def make_permalink(self) -> str:
        """Return ``files/<relative path>``."""
        return "files/" + sanitize_hierarchical_path(self.relative_path)


class Page(CompoundBase):
    """A documentation page; ``indexpage`` is the main page."""

    child_element = "innerpage"
    kind_label = "Page"

    @property
    def is_main_page(self) -> bool:
        """Return True for the project's main page."""
        return self.id == "indexpage"

    @property
    def label(self) -> str:
        """Return the page title."""
        return (self.title or self.compound_name).strip()

    @property
    def page_title(self) -> str:
        """Return the page title."""
        return self.label

    def make_permalink(self) -> str:
        """Return ``index`` for the main page, else ``pages/<name>``."""
        if self.is_main_page:
            return "index"
        return "pages/" + sanitize_hierarchical_path(self.compound_name)


class Member:
    """A member definition with the compound that owns its anchor."""

    def __init__(self, memberdef: MemberDef, owner: CompoundBase) -> None:
        """Attach a parsed member to its owning compound."""
        self.memberdef = memberdef
        self.id = memberdef.id
        self.kind = memberdef.kind
        self.name = memberdef.name or ""
        self.owner_id = owner.id
        self.anchor = get_permalink_anchor(memberdef.id)
        self.permalink = f"{owner.permalink}/#{self.anchor}"

    def __repr__(self) -> str:
        """Return a short debugging representation."""
        return f"Member({self.id!r})"
