"""Navigation tree derived from the collections' hierarchies."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from doxyweave.compounds import File, Folder

if TYPE_CHECKING:
    from doxyweave.compound_collections import CompoundCollection
    from doxyweave.compounds import CompoundBase
    from doxyweave.workspace import Workspace


@dataclass
class SidebarItem:
    """One entry of the navigation tree."""

    label: str
    permalink: str | None = None
    children: list[SidebarItem] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-ready dictionary; leaves have no ``children`` key."""
        data: dict[str, Any] = {"label": self.label, "permalink": self.permalink}
        if self.children:
            data["children"] = [child.to_dict() for child in self.children]
        return data


def _compound_item(
    collection: CompoundCollection, compound: CompoundBase, label: str | None = None
) -> SidebarItem:
    children = [_compound_item(collection, c) for c in collection.children_of(compound)]
    return SidebarItem(label or compound.label, compound.permalink, children)


def _folder_item(workspace: Workspace, folder: Folder) -> SidebarItem:
    folders = workspace.collections["folders"]
    children = [
        _folder_item(workspace, sub)
        for sub in folders.children_of(folder)
        if isinstance(sub, Folder)
    ]
    files = [workspace.compounds_by_id[i] for i in folder.file_ids]
    children.extend(_file_items(files))
    return SidebarItem(folder.label, folder.permalink, children)


def _file_items(files: list[CompoundBase]) -> list[SidebarItem]:
    ordered = sorted(files, key=lambda f: (f.label.lower(), f.id))
    return [SidebarItem(f.label, f.permalink) for f in ordered]


def collection_items(workspace: Workspace, name: str) -> list[SidebarItem]:
    """Return the nested items of one collection.

    Files are shown inside their folders; top-level classes use their
    qualified names since they may live in different namespaces.
    """
    collection = workspace.collections[name]
    if name == "files":
        folders = workspace.collections["folders"]
        items = [
            _folder_item(workspace, folder)
            for folder in folders.top_level()
            if isinstance(folder, Folder)
        ]
        loose = [f for f in collection if isinstance(f, File) and f.folder_id is None]
        items.extend(_file_items(loose))
        return items
    if name == "classes":
        top = sorted(
            collection.top_level(), key=lambda c: (c.compound_name.lower(), c.id)
        )
        return [_compound_item(collection, c, c.compound_name) for c in top]
    return [_compound_item(collection, c) for c in collection.top_level()]


def build_sidebar(workspace: Workspace) -> list[SidebarItem]:
    """Return one category per configured collection, skipping empty ones."""
    items = []
    for name in workspace.options.sidebar_collections:
        collection = workspace.collections[name]
        if not len(collection):
            continue
        items.append(
            SidebarItem(collection.label, name, collection_items(workspace, name))
        )
    return items
