"""Per-kind compound collections and the hierarchy pass that links them."""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING

from doxyweave.compounds import (
    CLASS_BUCKETS,
    Class,
    CompoundBase,
    File,
    Folder,
    Group,
    Namespace,
    Page,
)
from doxyweave.errors import (
    CompoundNotFoundError,
    DanglingReferenceError,
    DuplicateCompoundError,
    HierarchyCycleError,
    PrefixMismatchError,
)

if TYPE_CHECKING:
    from doxyweave.diagnostics import Diagnostics


class CompoundCollection:
    """Compounds of one kind, indexed by id in discovery order."""

    name = ""
    label = ""
    kinds: tuple[str, ...] = ()
    compound_class: type[CompoundBase] = CompoundBase
    sort_children = True

    def __init__(self, diagnostics: Diagnostics) -> None:
        """Initialize an empty collection."""
        self.diagnostics = diagnostics
        self.compounds_by_id: dict[str, CompoundBase] = {}

    def __contains__(self, compound_id: object) -> bool:
        """Return True if the id is in this collection."""
        return compound_id in self.compounds_by_id

    def __iter__(self) -> Iterator[CompoundBase]:
        """Iterate compounds in discovery order."""
        return iter(self.compounds_by_id.values())

    def __len__(self) -> int:
        """Return the number of compounds."""
        return len(self.compounds_by_id)

    def add(self, compound: CompoundBase) -> None:
        """Add a compound; its id must be new."""
        if compound.id in self.compounds_by_id:
            msg = f"{self.name}: duplicate compound id '{compound.id}'"
            raise DuplicateCompoundError(msg)
        self.compounds_by_id[compound.id] = compound

    def get(self, compound_id: str) -> CompoundBase:
        """Return the compound with this id."""
        try:
            return self.compounds_by_id[compound_id]
        except KeyError:
            msg = f"{self.name}: no compound with id '{compound_id}'"
            raise CompoundNotFoundError(msg) from None

    def create_hierarchies(self) -> None:
        """Set parent ids from inner references, then derive names and depths."""
        for compound in self:
            for child_id in compound.child_ids:
                if child_id not in self.compounds_by_id:
                    raise DanglingReferenceError(
                        compound.id, child_id, compound.child_element or "inner"
                    )
                self.compounds_by_id[child_id].set_parent(compound.id)
        self._check_acyclic()
        for compound in self:
            compound.depth = len(self.ancestors_of(compound))
        self._compute_names()

    def _check_acyclic(self) -> None:
        acyclic: set[str] = set()
        for compound in self:
            path: list[str] = []
            current: CompoundBase | None = compound
            while current is not None and current.id not in acyclic:
                if current.id in path:
                    cycle = path[path.index(current.id) :] + [current.id]
                    raise HierarchyCycleError(cycle)
                path.append(current.id)
                current = self.parent_of(current)
            acyclic.update(path)

    def _compute_names(self) -> None:
        """Strip the parent's qualified name from each child's name."""
        separator = self.compound_class.separator
        if separator is None:
            return
        for compound in self:
            parent = self.parent_of(compound)
            if parent is None:
                continue
            prefix = parent.compound_name + separator
            if not compound.compound_name.startswith(prefix):
                raise PrefixMismatchError(
                    compound.id,
                    compound.compound_name,
                    parent.id,
                    parent.compound_name,
                    separator,
                )
            compound.unqualified_name = compound.compound_name[len(prefix) :]

    def parent_of(self, compound: CompoundBase) -> CompoundBase | None:
        """Return the parent compound, or None at the top level."""
        if compound.parent_id is None:
            return None
        return self.get(compound.parent_id)

    def ancestors_of(self, compound: CompoundBase) -> list[CompoundBase]:
        """Return the parents from the nearest to the top level."""
        ancestors = []
        parent = self.parent_of(compound)
        while parent is not None:
            ancestors.append(parent)
            parent = self.parent_of(parent)
        return ancestors

    def children_of(self, compound: CompoundBase) -> list[CompoundBase]:
        """Return the children, in document order or sorted by label."""
        children = [self.get(child_id) for child_id in compound.child_ids]
        return self._ordered(children)

    def top_level(self) -> list[CompoundBase]:
        """Return the compounds without a parent."""
        return self._ordered([c for c in self if c.parent_id is None])

    def _ordered(self, compounds: list[CompoundBase]) -> list[CompoundBase]:
        if self.sort_children:
            return sorted(compounds, key=lambda c: (c.label.lower(), c.id))
        return compounds

    def assign_permalinks(self) -> None:
        """Compute every compound's permalink; requires the hierarchy pass."""
        for compound in self:
            compound.permalink = compound.make_permalink()


class ClassesCollection(CompoundCollection):
    """Classes, structs, unions and similar types."""

    name = "classes"
    label = "Classes"
    kinds = tuple(CLASS_BUCKETS)
    compound_class = Class

    def create_hierarchies(self) -> None:
        """Link nested classes and resolve base and derived classes."""
        super().create_hierarchies()
        classes = [c for c in self if isinstance(c, Class)]
        for compound in classes:
            for base_id in compound.base_class_ids:
                base = self.compounds_by_id.get(base_id)
                if not isinstance(base, Class):
                    self.diagnostics.info(
                        "%s: base class '%s' is not documented",
                        compound.id,
                        base_id,
                        refid=base_id,
                    )
                    continue
                compound.base_classes.append(base)
                base.derived_classes.append(compound)


class NamespacesCollection(CompoundCollection):
    """Namespaces, nested by ``::``."""

    name = "namespaces"
    label = "Namespaces"
    kinds = ("namespace",)
    compound_class = Namespace


class GroupsCollection(CompoundCollection):
    """Groups, kept in the order the documentation defines them."""

    name = "groups"
    label = "Topics"
    kinds = ("group",)
    compound_class = Group
    sort_children = False


class FoldersCollection(CompoundCollection):
    """Source directories, nested by ``/``."""

    name = "folders"
    label = "Folders"
    kinds = ("dir",)
    compound_class = Folder

    def create_hierarchies(self) -> None:
        """Link sub-folders, then build each folder's relative path."""
        super().create_hierarchies()
        for compound in sorted(self, key=lambda c: c.depth):
            parent = self.parent_of(compound)
            if isinstance(compound, Folder) and isinstance(parent, Folder):
                compound.relative_path = (
                    f"{parent.relative_path}/{compound.unqualified_name}"
                )


class FilesCollection(CompoundCollection):
    """Source files; their folders are linked by the workspace."""

    name = "files"
    label = "Files"
    kinds = ("file",)
    compound_class = File


class PagesCollection(CompoundCollection):
    """Documentation pages and their sub-pages."""

    name = "pages"
    label = "Pages"
    kinds = ("page",)
    compound_class = Page
    sort_children = False


COLLECTION_CLASSES: tuple[type[CompoundCollection], ...] = (
    GroupsCollection,
    NamespacesCollection,
    ClassesCollection,
    FoldersCollection,
    FilesCollection,
    PagesCollection,
)
