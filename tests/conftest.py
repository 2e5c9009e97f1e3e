"""Shared fixtures building workspaces and render engines from XML snippets."""

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
from doxygen_xml import XmlCompound, write_xml_folder

from doxyweave.diagnostics import Diagnostics
from doxyweave.options import Options
from doxyweave.render_dispatch import RenderEngine
from doxyweave.renderers import build_render_engine
from doxyweave.run_conversion import build_workspace
from doxyweave.workspace import Workspace


@pytest.fixture
def diagnostics() -> Diagnostics:
    """Return an empty diagnostics sink."""
    return Diagnostics()


@pytest.fixture
def make_workspace(
    tmp_path: Path, diagnostics: Diagnostics
) -> Callable[..., Workspace]:
    """Return a factory writing compounds to disk and building the workspace."""

    def _make(compounds: list[XmlCompound], **config: Any) -> Workspace:
        xml_dir = write_xml_folder(tmp_path / "xml", compounds)
        return build_workspace(xml_dir, Options.from_config(config), diagnostics)

    return _make


@pytest.fixture
def make_engine(
    make_workspace: Callable[..., Workspace], diagnostics: Diagnostics
) -> Callable[..., RenderEngine]:
    """Return a factory for a fully registered engine over the given compounds."""

    def _make(
        compounds: list[XmlCompound] | None = None, **config: Any
    ) -> RenderEngine:
        workspace = make_workspace(compounds or [], **config)
        return build_render_engine(workspace, diagnostics)

    return _make
