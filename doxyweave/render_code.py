"""Renderers for program listings and declaration fragments."""

from __future__ import annotations

from typing import TYPE_CHECKING

from doxyweave.escaping import OutputFormat, escape_attribute
from doxyweave.listings import (
    HIGHLIGHT_CLASSES,
    CodeLine,
    Highlight,
    ProgramListing,
    Sp,
)
from doxyweave.markup import md_codeblock
from doxyweave.params import Param, TemplateParamList
from doxyweave.render_dispatch import LinesRenderer, TextRenderer

if TYPE_CHECKING:
    from doxyweave.render_dispatch import RenderEngine


class SpRenderer(TextRenderer):
    """An ``<sp/>`` inside code."""

    def render_to_string(self, node: Sp, fmt: OutputFormat) -> str:
        """Render the spaces."""
        return node.text()


class HighlightRenderer(TextRenderer):
    """A syntax-highlighted run of code."""

    def render_to_string(self, node: Highlight, fmt: OutputFormat) -> str:
        """Render the run; HTML wraps it in a span named after its class."""
        inner = self.engine.render_to_string(node.children, fmt)
        if fmt != "html":
            return inner
        css_class = node.highlight_class
        if css_class not in HIGHLIGHT_CLASSES:
            self.engine.diagnostics.info(
                "unknown highlight class '%s', using 'normal'", css_class
            )
            css_class = "normal"
        if not inner:
            return ""
        return f'<span class="{escape_attribute(css_class)}">{inner}</span>'


class CodeLineRenderer(TextRenderer):
    """One line of a listing."""

    def render_to_string(self, node: CodeLine, fmt: OutputFormat) -> str:
        """Render the line's highlights, anchored by line number in HTML."""
        text = self.engine.render_to_string(node.highlights, fmt)
        if fmt == "html" and node.lineno is not None:
            return f'<span class="line" id="l{node.lineno:05d}">{text}</span>'
        return text


class ProgramListingRenderer(LinesRenderer):
    """A ``<programlisting>``.

    Listings embedded in descriptions are dropped unless
    ``render_program_listing_inline`` is set; file pages call
    ``render_listing`` directly.
    """

    def render_to_lines(self, node: ProgramListing, fmt: OutputFormat) -> list[str]:
        """Render the listing when inline listings are enabled."""
        if not self.engine.options.render_program_listing_inline:
            return []
        return self.render_listing(node, fmt)

    def render_listing(self, node: ProgramListing, fmt: OutputFormat) -> list[str]:
        """Render every code line; Markdown uses a fenced block."""
        if fmt == "markdown":
            code = [self.engine.render_to_string(c, "text") for c in node.codelines]
            return ["", *md_codeblock(node.language, code), ""]
        lines = [self.engine.render_to_string(c, fmt) for c in node.codelines]
        if fmt == "html":
            language = escape_attribute(node.language)
            body = "\n".join(lines)
            return [
                f'<pre class="programlisting"><code class="language-{language}">'
                f"{body}</code></pre>"
            ]
        return ["", *lines, ""]


class ParamRenderer(TextRenderer):
    """A parameter inside a declaration."""

    def render_to_string(self, node: Param, fmt: OutputFormat) -> str:
        """Render ``type name[array] = default``."""
        parts = []
        if node.attributes:
            parts.append(self.engine.render_string(node.attributes, fmt))
        if node.type is not None:
            parts.append(self.engine.render_to_string(node.type, fmt).strip())
        name = node.declname or node.defname
        if name:
            parts.append(self.engine.render_string(name, fmt))
        text = " ".join(p for p in parts if p)
        if node.array:
            text += self.engine.render_string(node.array, fmt)
        if node.defval is not None:
            text += " = " + self.engine.render_to_string(node.defval, fmt).strip()
        return text


class TemplateParamListRenderer(TextRenderer):
    """A ``<templateparamlist>``."""

    def render_to_string(self, node: TemplateParamList, fmt: OutputFormat) -> str:
        """Render ``template <...>``."""
        params = ", ".join(self.engine.render_to_string(p, fmt) for p in node.params)
        if fmt == "text":
            return f"template <{params}>"
        return f"template &lt;{params}&gt;"


def register(engine: RenderEngine) -> None:
    """Register the listing and declaration renderers."""
    engine.register_text(Sp, SpRenderer(engine))
    engine.register_text(Highlight, HighlightRenderer(engine))
    engine.register_text(CodeLine, CodeLineRenderer(engine))
    engine.register_lines(ProgramListing, ProgramListingRenderer(engine))
    engine.register_text(Param, ParamRenderer(engine))
    engine.register_text(TemplateParamList, TemplateParamListRenderer(engine))
