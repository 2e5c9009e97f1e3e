"""Parse a Doxygen XML output folder into the typed data model."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from doxyweave.compounddef import CompoundDef, DoxygenFile
from doxyweave.doxyfile import DoxyfileOptions
from doxyweave.doxygen_index import DoxygenIndex
from doxyweave.xml_accessor import XmlAccessor, load_xml

if TYPE_CHECKING:
    from doxyweave.diagnostics import Diagnostics


@dataclass
class DataModel:
    """Everything parsed from one XML folder."""

    index: DoxygenIndex
    compounddefs: list[CompoundDef] = field(default_factory=list)
    doxyfile: DoxyfileOptions | None = None
    member_kinds: dict[str, str] = field(default_factory=dict)


def parse_compound_file(path: Path) -> list[CompoundDef]:
    """Parse one ``<refid>.xml`` file."""
    xml = XmlAccessor(str(path))
    return DoxygenFile(xml, load_xml(path)).compounddefs


def parse_data_model(
    xml_folder: Path, diagnostics: Diagnostics, workers: int = 1
) -> DataModel:
    """Parse ``index.xml``, every compound file it lists, then ``Doxyfile.xml``.

    Compound files are independent, so with ``workers > 1`` they are parsed
    in a thread pool; results keep the index order either way.
    """
    index_path = xml_folder / "index.xml"
    index = DoxygenIndex(XmlAccessor(str(index_path)), load_xml(index_path))
    diagnostics.info("%s: %d compounds listed", index_path, len(index.compounds))

    paths = [xml_folder / f"{compound.refid}.xml" for compound in index.compounds]
    if workers > 1:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            parsed = list(pool.map(parse_compound_file, paths))
    else:
        parsed = [parse_compound_file(p) for p in paths]

    model = DataModel(index=index)
    for compounddefs in parsed:
        model.compounddefs.extend(compounddefs)

    for compound in index.compounds:
        for member in compound.members:
            model.member_kinds.setdefault(member.refid, member.kind)

    doxyfile_path = xml_folder / "Doxyfile.xml"
    if doxyfile_path.exists():
        model.doxyfile = DoxyfileOptions(
            XmlAccessor(str(doxyfile_path)), load_xml(doxyfile_path)
        )
    else:
        diagnostics.info("%s not found, Doxygen options unavailable", doxyfile_path)

    diagnostics.debug("parsed %d compound definitions", len(model.compounddefs))
    return model
