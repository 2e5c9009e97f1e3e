"""Renderers for inline prose: styling, links, anchors, symbols and images."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from doxyweave.doc_inline import (
    DocAnchor,
    DocEmoji,
    DocEmpty,
    DocFormula,
    DocHtmlOnly,
    DocImage,
    DocMarkup,
    DocRefText,
    DocTitle,
    DocUrlLink,
)
from doxyweave.doc_symbols import DocSymbol
from doxyweave.escaping import OutputFormat, escape_attribute
from doxyweave.linked_text import LinkedText, RefText
from doxyweave.markup import link
from doxyweave.permalinks import get_permalink_anchor
from doxyweave.render_dispatch import TextRenderer

if TYPE_CHECKING:
    from doxyweave.render_dispatch import RenderEngine

HTML_TAGS = {
    "bold": "b",
    "emphasis": "em",
    "underline": "u",
    "s": "s",
    "strike": "s",
    "del": "del",
    "ins": "ins",
    "computeroutput": "code",
    "javadocliteral": "code",
    "javadoccode": "code",
    "subscript": "sub",
    "superscript": "sup",
    "center": "center",
    "small": "small",
    "cite": "cite",
}

MARKDOWN_MARKERS = {
    "bold": "**",
    "emphasis": "*",
    "s": "~~",
    "strike": "~~",
    "del": "~~",
}


class ContentRenderer(TextRenderer):
    """Renders a node as the concatenation of its children."""

    def render_to_string(self, node: Any, fmt: OutputFormat) -> str:
        """Render the children of ``node`` inline."""
        return self.engine.render_to_string(node.children, fmt)


class MarkupRenderer(TextRenderer):
    """Bold, emphasis, code and the other character styles."""

    def render_to_string(self, node: DocMarkup, fmt: OutputFormat) -> str:
        """Wrap the rendered content in the style's tag or marker."""
        inner = self.engine.render_to_string(node.children, fmt)
        if fmt == "text" or not inner.strip():
            return inner
        name = node.element_name
        if fmt == "markdown" and name in MARKDOWN_MARKERS:
            marker = MARKDOWN_MARKERS[name]
            stripped = inner.strip()
            lead = inner[: len(inner) - len(inner.lstrip())]
            trail = inner[len(inner.rstrip()) :]
            return f"{lead}{marker}{stripped}{marker}{trail}"
        tag = HTML_TAGS.get(name)
        if tag is None:
            self.engine.diagnostics.warning("no output style for <%s>", name)
            return inner
        return f"<{tag}>{inner}</{tag}>"


class UrlLinkRenderer(TextRenderer):
    """An external ``<ulink>``."""

    def render_to_string(self, node: DocUrlLink, fmt: OutputFormat) -> str:
        """Render the link text, pointing at the URL."""
        label = self.engine.render_to_string(node.children, fmt) or node.url
        return link(label, node.url, fmt)


class ReferenceRenderer(TextRenderer):
    """A ``<ref>`` in prose or code, resolved through the workspace.

    References that do not resolve render as their plain text; the workspace
    reports them.
    """

    def render_to_string(self, node: DocRefText | RefText, fmt: OutputFormat) -> str:
        """Render the reference text, linked when the target is known."""
        label = self.engine.render_to_string(node.children, fmt)
        if fmt == "text":
            return label
        url = self.engine.workspace.get_url(node.refid, node.kindref)
        return link(label, url, fmt)


class AnchorRenderer(TextRenderer):
    """An ``<anchor>`` link target."""

    def render_to_string(self, node: DocAnchor, fmt: OutputFormat) -> str:
        """Render an empty named element; plain text drops it."""
        if fmt == "text":
            return ""
        return f'<a id="{escape_attribute(get_permalink_anchor(node.id))}"></a>'


class FormulaRenderer(TextRenderer):
    """A LaTeX ``<formula>``, kept as source."""

    def render_to_string(self, node: DocFormula, fmt: OutputFormat) -> str:
        """Render the formula source; Markdown keeps it raw for math plugins."""
        if fmt == "html":
            formula = self.engine.render_string(node.formula, fmt)
            return f'<span class="formula">{formula}</span>'
        return node.formula


class ImageRenderer(TextRenderer):
    """An ``<image>``; only images meant for HTML output are rendered."""

    def render_to_string(self, node: DocImage, fmt: OutputFormat) -> str:
        """Render an ``<img>`` or a Markdown image."""
        caption = self.engine.render_to_string(node.children, fmt)
        if node.type not in (None, "html") or not node.name:
            return ""
        alt = node.alt or node.caption or ""
        if fmt == "text":
            return caption or alt
        if fmt == "markdown":
            return f"![{self.engine.render_string(alt, fmt)}]({node.name})"
        attributes = [f'src="{escape_attribute(node.name)}"']
        attributes.append(f'alt="{escape_attribute(alt)}"')
        if node.width:
            attributes.append(f'width="{escape_attribute(node.width)}"')
        if node.height:
            attributes.append(f'height="{escape_attribute(node.height)}"')
        image = f"<img {' '.join(attributes)}/>"
        if caption and not node.inline:
            return f"<figure>{image}<figcaption>{caption}</figcaption></figure>"
        return image


class EmojiRenderer(TextRenderer):
    """An ``<emoji>``."""

    def render_to_string(self, node: DocEmoji, fmt: OutputFormat) -> str:
        """Render the emoji character."""
        return node.text()


class LineBreakRenderer(TextRenderer):
    """A ``<linebreak/>``."""

    def render_to_string(self, node: DocEmpty, fmt: OutputFormat) -> str:
        """Render a hard line break."""
        if fmt == "text":
            return "\n"
        return "<br/>"


class SymbolRenderer(TextRenderer):
    """A named character entity such as ``<copy/>``."""

    def render_to_string(self, node: DocSymbol, fmt: OutputFormat) -> str:
        """Render the character, escaped like any other text."""
        return self.engine.render_string(node.character, fmt)


class HtmlOnlyRenderer(TextRenderer):
    """Raw ``<htmlonly>`` content."""

    def render_to_string(self, node: DocHtmlOnly, fmt: OutputFormat) -> str:
        """Pass the HTML through for HTML and Markdown, drop it for text."""
        if fmt == "text":
            return ""
        return node.html


def register(engine: RenderEngine) -> None:
    """Register the inline renderers."""
    content = ContentRenderer(engine)
    engine.register_text(DocTitle, content)
    engine.register_text(LinkedText, content)
    engine.register_text(DocMarkup, MarkupRenderer(engine))
    engine.register_text(DocUrlLink, UrlLinkRenderer(engine))
    reference = ReferenceRenderer(engine)
    engine.register_text(DocRefText, reference)
    engine.register_text(RefText, reference)
    engine.register_text(DocAnchor, AnchorRenderer(engine))
    engine.register_text(DocFormula, FormulaRenderer(engine))
    engine.register_text(DocImage, ImageRenderer(engine))
    engine.register_text(DocEmoji, EmojiRenderer(engine))
    engine.register_text(DocEmpty, LineBreakRenderer(engine))
    engine.register_text(DocSymbol, SymbolRenderer(engine))
    engine.register_text(DocHtmlOnly, HtmlOnlyRenderer(engine))
