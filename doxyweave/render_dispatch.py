"""Type-indexed dispatch from data model nodes to text and lines renderers."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import TYPE_CHECKING, Any

from doxyweave.errors import MissingRendererError
from doxyweave.escaping import OutputFormat, escape_text
from doxyweave.node import DataModelNode

if TYPE_CHECKING:
    from doxyweave.diagnostics import Diagnostics
    from doxyweave.options import Options
    from doxyweave.workspace import Workspace


class TextRenderer:
    """Renders a node to a single inline string."""

    def __init__(self, engine: RenderEngine) -> None:
        """Keep a reference to the engine for recursive rendering."""
        self.engine = engine

    def render_to_string(self, node: Any, fmt: OutputFormat) -> str:
        """Render ``node``."""
        raise NotImplementedError


class LinesRenderer:
    """Renders a node to a list of output lines."""

    def __init__(self, engine: RenderEngine) -> None:
        """Keep a reference to the engine for recursive rendering."""
        self.engine = engine

    def render_to_lines(self, node: Any, fmt: OutputFormat) -> list[str]:
        """Render ``node``."""
        raise NotImplementedError


class RenderEngine:
    """Looks up the most specific renderer for a node's type and runs it.

    Lookup walks the node class's MRO; when nothing is registered at any
    level, MissingRendererError is raised. Raw text runs are escaped here
    and nowhere else.
    """

    def __init__(self, workspace: Workspace, diagnostics: Diagnostics) -> None:
        """Create an engine with empty registries."""
        self.workspace = workspace
        self.diagnostics = diagnostics
        self.text_renderers: dict[type, TextRenderer] = {}
        self.lines_renderers: dict[type, LinesRenderer] = {}

    @property
    def options(self) -> Options:
        """Return the workspace options."""
        return self.workspace.options

    def register_text(self, node_type: type, renderer: TextRenderer) -> None:
        """Register an inline renderer for ``node_type`` and its subclasses."""
        self.text_renderers[node_type] = renderer

    def register_lines(self, node_type: type, renderer: LinesRenderer) -> None:
        """Register a block renderer for ``node_type`` and its subclasses."""
        self.lines_renderers[node_type] = renderer

    def _lookup(self, table: dict[type, Any], node_type: type) -> tuple[Any, int]:
        """Return the closest registered renderer and its distance in the MRO."""
        for depth, cls in enumerate(node_type.__mro__):
            if cls in table:
                return table[cls], depth
        return None, len(node_type.__mro__)

    def find_text_renderer(self, node_type: type) -> TextRenderer | None:
        """Return the text renderer of the closest registered base class."""
        return self._lookup(self.text_renderers, node_type)[0]

    def find_lines_renderer(self, node_type: type) -> LinesRenderer | None:
        """Return the lines renderer of the closest registered base class."""
        return self._lookup(self.lines_renderers, node_type)[0]

    def prefers_lines(self, node_type: type) -> bool:
        """Return True when a lines renderer is the most specific match.

        Ties go to the text renderer.
        """
        text, text_depth = self._lookup(self.text_renderers, node_type)
        lines, lines_depth = self._lookup(self.lines_renderers, node_type)
        return lines is not None and (text is None or lines_depth < text_depth)

    def missing_renderers(self, node_types: Iterable[type]) -> list[type]:
        """Return the types that have neither a text nor a lines renderer."""
        return [
            t
            for t in node_types
            if self.find_text_renderer(t) is None
            and self.find_lines_renderer(t) is None
        ]

    def is_inline(self, item: str | DataModelNode) -> bool:
        """Return True for text runs and nodes without a block renderer."""
        if isinstance(item, str):
            return True
        return not self.prefers_lines(type(item))

    def render_string(self, text: str, fmt: OutputFormat) -> str:
        """Escape a raw text run for ``fmt``."""
        return escape_text(text, fmt)

    def render_to_string(self, item: Any, fmt: OutputFormat) -> str:
        """Render a text run, a node or a sequence of them inline."""
        if item is None:
            return ""
        if isinstance(item, str):
            return self.render_string(item, fmt)
        if isinstance(item, Sequence):
            return "".join(self.render_to_string(i, fmt) for i in item)
        node_type = type(item)
        if self.prefers_lines(node_type):
            renderer = self.find_lines_renderer(node_type)
            return "\n".join(renderer.render_to_lines(item, fmt))
        text_renderer = self.find_text_renderer(node_type)
        if text_renderer is None:
            raise MissingRendererError(node_type, "text")
        return text_renderer.render_to_string(item, fmt)

    def render_to_lines(self, item: Any, fmt: OutputFormat) -> list[str]:
        """Render a text run, a node or a sequence of them as lines."""
        if item is None:
            return []
        if isinstance(item, str):
            return [self.render_string(item, fmt)] if item.strip() else []
        if isinstance(item, Sequence):
            lines: list[str] = []
            for i in item:
                lines.extend(self.render_to_lines(i, fmt))
            return lines
        node_type = type(item)
        if self.prefers_lines(node_type):
            return self.find_lines_renderer(node_type).render_to_lines(item, fmt)
        text_renderer = self.find_text_renderer(node_type)
        if text_renderer is None:
            raise MissingRendererError(node_type, "lines")
        return text_renderer.render_to_string(item, fmt).split("\n")
