"""Assembles a render engine with every renderer registered."""

from __future__ import annotations

from typing import TYPE_CHECKING

from doxyweave import render_blocks, render_code, render_compounds, render_inline
from doxyweave.render_dispatch import RenderEngine

if TYPE_CHECKING:
    from doxyweave.diagnostics import Diagnostics
    from doxyweave.workspace import Workspace


def build_render_engine(workspace: Workspace, diagnostics: Diagnostics) -> RenderEngine:
    """Return an engine that can render every node the parser produces."""
    engine = RenderEngine(workspace, diagnostics)
    for module in (render_inline, render_blocks, render_code, render_compounds):
        module.register(engine)
    return engine
