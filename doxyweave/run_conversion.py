"""Orchestration logic for converting Doxygen XML to documentation pages."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import TYPE_CHECKING, Any

from doxyweave.compounds import Page
from doxyweave.data_model import parse_data_model
from doxyweave.definitions_index import INDEX_KINDS, render_definitions_index
from doxyweave.diagnostics import Diagnostics
from doxyweave.load_config import load_config
from doxyweave.markup import heading, link, strip_blank
from doxyweave.options import Options
from doxyweave.page_writer import RenderedPage, write_page, write_sidebar
from doxyweave.render_compounds import (
    brief_text,
    render_collection_index,
    render_compound_page,
)
from doxyweave.renderers import build_render_engine
from doxyweave.sidebar import build_sidebar
from doxyweave.workspace import Workspace

if TYPE_CHECKING:
    import argparse
    from pathlib import Path

    from doxyweave.compounds import CompoundBase
    from doxyweave.escaping import OutputFormat
    from doxyweave.render_dispatch import RenderEngine

logger = logging.getLogger(__name__)


def build_workspace(
    xml_dir: Path, options: Options, diagnostics: Diagnostics
) -> Workspace:
    """Parse the XML folder and run the linking phase."""
    data_model = parse_data_model(xml_dir, diagnostics, workers=options.workers)
    workspace = Workspace(data_model, options, diagnostics)
    workspace.build()
    return workspace


def render_page(
    engine: RenderEngine, compound: CompoundBase, fmt: OutputFormat
) -> RenderedPage:
    """Render one compound page."""
    return RenderedPage(
        permalink=compound.permalink or compound.id,
        title=compound.page_title,
        lines=render_compound_page(engine, compound, fmt),
        description=brief_text(engine, compound.compounddef.briefdescription, "text"),
    )


def render_site_index(engine: RenderEngine, fmt: OutputFormat) -> RenderedPage:
    """Render a landing page from the Doxyfile project name and brief."""
    workspace = engine.workspace
    doxyfile = workspace.data_model.doxyfile
    name = doxyfile.get_string("PROJECT_NAME", "API") if doxyfile else "API"
    brief = doxyfile.get_string("PROJECT_BRIEF") if doxyfile else ""
    lines = heading(1, engine.render_string(f"{name} Reference", fmt), fmt)
    if brief:
        text = engine.render_string(brief, fmt)
        lines.extend([f"<p>{text}</p>"] if fmt == "html" else ["", text, ""])
    items = []
    for collection_name in workspace.options.sidebar_collections:
        collection = workspace.collections[collection_name]
        if len(collection):
            label = engine.render_string(collection.label, fmt)
            items.append(link(label, workspace.page_url(collection_name), fmt))
    if fmt == "html":
        lines.extend(["<ul>", *[f"<li>{item}</li>" for item in items], "</ul>"])
    else:
        lines.extend(["", *[f"- {item}" for item in items]])
    return RenderedPage("index", f"{name} Reference", strip_blank(lines), brief)


def render_pages(
    workspace: Workspace, engine: RenderEngine, fmt: OutputFormat
) -> list[RenderedPage]:
    """Render the compound pages, collection and definition indexes, site index.

    The workspace is read-only here, so compound pages may be rendered by
    a thread pool.
    """
    compounds = [c for collection in workspace.collections.values() for c in collection]
    workers = workspace.options.workers
    if workers > 1:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            pages = list(pool.map(lambda c: render_page(engine, c, fmt), compounds))
    else:
        pages = [render_page(engine, c, fmt) for c in compounds]

    for name in workspace.options.sidebar_collections:
        collection = workspace.collections[name]
        if not len(collection):
            continue
        lines = render_collection_index(engine, name, fmt)
        pages.append(RenderedPage(name, collection.label, lines))
        for index_kind in INDEX_KINDS.get(name, ()):
            lines = render_definitions_index(engine, name, index_kind, fmt)
            if lines:
                permalink = f"indices/{name}/{index_kind.slug}"
                pages.append(
                    RenderedPage(
                        permalink, index_kind.title, lines, index_kind.description
                    )
                )

    if not any(isinstance(c, Page) and c.is_main_page for c in compounds):
        pages.append(render_site_index(engine, fmt))
    return pages


def _options_from_args(args: argparse.Namespace) -> Options:
    """Load the config file and apply command line overrides."""
    config: dict[str, Any] = load_config(getattr(args, "config", None))
    for key in ("output_format", "base_url", "workers"):
        value = getattr(args, key, None)
        if value is not None:
            config[key] = value
    if getattr(args, "verbose", False):
        config["verbose"] = True
    return Options.from_config(config)


def run_conversion(args: argparse.Namespace) -> int:
    """Execute the full conversion pipeline."""
    options = _options_from_args(args)
    if options.verbose:
        logging.getLogger().setLevel(logging.DEBUG)
    if not (args.xml_dir / "index.xml").exists():
        msg = f"No index.xml found under: {args.xml_dir}"
        raise SystemExit(msg)

    diagnostics = Diagnostics()
    workspace = build_workspace(args.xml_dir, options, diagnostics)
    engine = build_render_engine(workspace, diagnostics)
    fmt = options.output_format
    pages = render_pages(workspace, engine, fmt)

    if args.dry_run:
        logger.info("Dry run complete: %d pages rendered, nothing written.", len(pages))
        return 0

    out_root = args.out_dir.resolve()
    out_root.mkdir(parents=True, exist_ok=True)
    for page in pages:
        write_page(out_root, page, fmt, options.front_matter)
    write_sidebar(out_root, build_sidebar(workspace))

    logger.info("Generated %d pages into: %s", len(pages), out_root)
    if diagnostics.warnings:
        logger.warning("%d warnings reported", len(diagnostics.warnings))
    return 0
