"""The linked object graph: collections, permalinks and reference resolution."""

from __future__ import annotations

from collections import Counter
from typing import TYPE_CHECKING

from doxyweave.compound_collections import COLLECTION_CLASSES, CompoundCollection
from doxyweave.compounds import CompoundBase, File, Folder, Member
from doxyweave.errors import DanglingReferenceError
from doxyweave.permalinks import (
    get_permalink_anchor,
    strip_permalink_hex_anchor,
    strip_permalink_text_anchor,
)

if TYPE_CHECKING:
    from doxyweave.data_model import DataModel
    from doxyweave.diagnostics import Diagnostics
    from doxyweave.options import Options

# Collection holding the targets of each inner-reference element.
INNER_TARGETS = {
    "innerclass": "classes",
    "innernamespace": "namespaces",
    "innergroup": "groups",
    "innerdir": "folders",
    "innerfile": "files",
    "innerpage": "pages",
}


class Workspace:
    """Builds and owns the collections; read-only once ``build`` returns.

    ``build`` runs the whole linking phase (collections, hierarchies,
    permalinks, members). Rendering must only start after it returns.
    """

    def __init__(
        self, data_model: DataModel, options: Options, diagnostics: Diagnostics
    ) -> None:
        """Create empty collections for the data model."""
        self.data_model = data_model
        self.options = options
        self.diagnostics = diagnostics
        self.collections: dict[str, CompoundCollection] = {
            cls.name: cls(diagnostics) for cls in COLLECTION_CLASSES
        }
        self.compounds_by_id: dict[str, CompoundBase] = {}
        self.members_by_id: dict[str, Member] = {}
        self.skipped_ids: set[str] = set()
        self._collection_by_kind = {
            kind: collection
            for collection in self.collections.values()
            for kind in collection.kinds
        }

    def build(self) -> None:
        """Run the linking phase over the parsed data model."""
        self._add_compounds()
        self._check_inner_references()
        for collection in self.collections.values():
            collection.create_hierarchies()
        self._link_files_to_folders()
        for collection in self.collections.values():
            collection.assign_permalinks()
        self.validate_permalinks()
        self._add_members()

    def _add_compounds(self) -> None:
        for compounddef in self.data_model.compounddefs:
            collection = self._collection_by_kind.get(compounddef.kind)
            if collection is None:
                self.diagnostics.info(
                    "%s: kind '%s' is not rendered",
                    compounddef.id,
                    compounddef.kind,
                    refid=compounddef.id,
                )
                self.skipped_ids.add(compounddef.id)
                continue
            compound = collection.compound_class(compounddef)
            collection.add(compound)
            self.compounds_by_id[compound.id] = compound

    def _check_inner_references(self) -> None:
        """Fail on inner references whose target is not in its collection."""
        for compound in self.compounds_by_id.values():
            for element_name, collection_name in INNER_TARGETS.items():
                collection = self.collections[collection_name]
                for ref in compound.compounddef.inner_refs(element_name):
                    if ref.refid in collection or ref.refid in self.skipped_ids:
                        continue
                    raise DanglingReferenceError(compound.id, ref.refid, element_name)

    def _link_files_to_folders(self) -> None:
        files = self.collections["files"]
        for folder in self.collections["folders"]:
            if not isinstance(folder, Folder):
                continue
            for file_id in folder.file_ids:
                file = files.get(file_id)
                if isinstance(file, File):
                    file.set_folder(folder.id, folder.relative_path)

    def validate_permalinks(self) -> None:
        """Make permalinks unique by suffixing later duplicates with -1, -2, ..."""
        counts: Counter[str] = Counter()
        taken = {c.permalink for c in self.compounds_by_id.values()}
        for compound in self.compounds_by_id.values():
            permalink = compound.permalink or ""
            counts[permalink] += 1
            if counts[permalink] == 1:
                continue
            suffix = counts[permalink] - 1
            while f"{permalink}-{suffix}" in taken:
                suffix += 1
            compound.permalink = f"{permalink}-{suffix}"
            taken.add(compound.permalink)
            self.diagnostics.warning(
                "%s: permalink '%s' already used, renamed to '%s'",
                compound.id,
                permalink,
                compound.permalink,
                refid=compound.id,
            )

    def _add_members(self) -> None:
        for compound in self.compounds_by_id.values():
            for sectiondef in compound.compounddef.sectiondefs:
                for memberdef in sectiondef.memberdefs:
                    if memberdef.id in self.members_by_id:
                        continue
                    owner = self.compounds_by_id.get(
                        strip_permalink_hex_anchor(memberdef.id), compound
                    )
                    self.members_by_id[memberdef.id] = Member(memberdef, owner)

    def _owner_of(self, refid: str) -> CompoundBase | None:
        for owner_id in (
            strip_permalink_hex_anchor(refid),
            strip_permalink_text_anchor(refid),
        ):
            if owner_id != refid and owner_id in self.compounds_by_id:
                return self.compounds_by_id[owner_id]
        return None

    def get_permalink(self, refid: str, kindref: str) -> str | None:
        """Return the permalink of a compound or member, or None if unknown.

        Unknown targets are reported to the diagnostics sink.
        """
        if kindref == "compound" and refid in self.compounds_by_id:
            return self.compounds_by_id[refid].permalink
        if kindref == "member" and refid in self.members_by_id:
            return self.members_by_id[refid].permalink
        owner = self._owner_of(refid)
        if owner is not None:
            return f"{owner.permalink}/#{get_permalink_anchor(refid)}"
        self.diagnostics.warning(
            "cannot resolve %s reference '%s'", kindref, refid, refid=refid
        )
        return None

    def get_url(self, refid: str, kindref: str) -> str | None:
        """Return the link URL for a reference, or None if unresolved."""
        permalink = self.get_permalink(refid, kindref)
        if permalink is None:
            return None
        return self.page_url(permalink)

    def page_url(self, permalink: str) -> str:
        """Prefix a permalink with the configured base URL."""
        return self.options.base_url + permalink
