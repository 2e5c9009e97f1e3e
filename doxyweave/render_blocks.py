"""Renderers for description blocks: paragraphs, lists, sections and tables."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from doxyweave.doc_blocks import (
    Description,
    DocBlockQuote,
    DocCaption,
    DocDetails,
    DocEntry,
    DocHeading,
    DocHorizontalRule,
    DocInternal,
    DocList,
    DocListItem,
    DocPara,
    DocParamList,
    DocParamListItem,
    DocParamName,
    DocParamNameList,
    DocParamType,
    DocParas,
    DocPreformatted,
    DocRow,
    DocSection,
    DocSimpleSect,
    DocTable,
    DocTocItem,
    DocTocList,
    DocVarListEntry,
    DocVariableList,
    DocVerbatim,
    DocXRefSect,
)
from doxyweave.escaping import (
    OutputFormat,
    escape_attribute,
    escape_markdown_line_start,
)
from doxyweave.markup import (
    code_block,
    heading,
    join_inline,
    link,
    md_table,
    strip_blank,
)
from doxyweave.permalinks import get_permalink_anchor
from doxyweave.render_dispatch import LinesRenderer, TextRenderer
from doxyweave.render_inline import ContentRenderer

if TYPE_CHECKING:
    from doxyweave.render_dispatch import RenderEngine

SIMPLESECT_TITLES = {
    "see": "See also",
    "return": "Returns",
    "author": "Author",
    "authors": "Authors",
    "version": "Version",
    "since": "Since",
    "date": "Date",
    "note": "Note",
    "warning": "Warning",
    "pre": "Precondition",
    "post": "Postcondition",
    "copyright": "Copyright",
    "invariant": "Invariant",
    "remark": "Remarks",
    "attention": "Attention",
    "important": "Important",
    "rcs": "RCS",
}

# Simple sections shown as call-outs rather than titled paragraphs.
ADMONITIONS = ("note", "warning", "attention", "important")

PARAMLIST_TITLES = {
    "param": "Parameters",
    "retval": "Return values",
    "exception": "Exceptions",
    "templateparam": "Template Parameters",
}


def _indent(lines: list[str], prefix: str) -> list[str]:
    return [prefix + line if line.strip() else "" for line in lines]


def _titled_block(
    title: str, body: list[str], fmt: OutputFormat, css_class: str
) -> list[str]:
    """Return a title followed by its body in a definition-list style block."""
    body = strip_blank(body)
    if fmt == "html":
        return [
            f'<dl class="{escape_attribute(css_class)}">',
            f"<dt>{title}</dt>",
            "<dd>",
            *body,
            "</dd>",
            "</dl>",
        ]
    if fmt == "markdown":
        return ["", f"**{title}**", "", *body, ""]
    return ["", f"{title}:", *_indent(body, "  "), ""]


class DescriptionRenderer(LinesRenderer):
    """A brief or detailed description, or any run of blocks."""

    def render_to_lines(self, node: Any, fmt: OutputFormat) -> list[str]:
        """Render the optional title and the content blocks."""
        lines: list[str] = []
        title = getattr(node, "title", None)
        if title is not None:
            lines.extend(heading(3, self.engine.render_to_string(title, fmt), fmt))
        lines.extend(self.engine.render_to_lines(node.children, fmt))
        return lines


class ParaRenderer(LinesRenderer):
    """A ``<para>``; inline runs become paragraphs between block elements."""

    def render_to_lines(self, node: DocPara, fmt: OutputFormat) -> list[str]:
        """Group inline content into paragraphs, splitting at blocks."""
        lines: list[str] = []
        run: list[Any] = []

        def flush() -> None:
            text = self.engine.render_to_string(run, fmt).strip()
            run.clear()
            if not text:
                return
            if fmt == "html":
                lines.append(f"<p>{text}</p>")
            elif fmt == "markdown":
                paragraph = [escape_markdown_line_start(s) for s in text.split("\n")]
                lines.extend(["", *paragraph, ""])
            else:
                lines.extend(["", *text.split("\n"), ""])

        for child in node.children:
            if self.engine.is_inline(child):
                run.append(child)
                continue
            flush()
            lines.extend(self.engine.render_to_lines(child, fmt))
        flush()
        return lines


class BlockQuoteRenderer(LinesRenderer):
    """A ``<blockquote>``."""

    def render_to_lines(self, node: DocBlockQuote, fmt: OutputFormat) -> list[str]:
        """Quote the rendered paragraphs."""
        body = strip_blank(self.engine.render_to_lines(node.children, fmt))
        if fmt == "html":
            return ["<blockquote>", *body, "</blockquote>"]
        if fmt == "markdown":
            return ["", *[f"> {line}".rstrip() for line in body], ""]
        return ["", *_indent(body, "    "), ""]


class ListItemRenderer(LinesRenderer):
    """One item of a list, rendered without its marker."""

    def render_to_lines(self, node: DocListItem, fmt: OutputFormat) -> list[str]:
        """Render the item's paragraphs."""
        return strip_blank(self.engine.render_to_lines(node.children, fmt))


class ListRenderer(LinesRenderer):
    """An ordered or itemized list."""

    def render_to_lines(self, node: DocList, fmt: OutputFormat) -> list[str]:
        """Render the items, numbering ordered lists from ``start``."""
        items = [self.engine.render_to_lines(item, fmt) for item in node.children]
        number = node.start if node.start is not None else 1
        if fmt == "html":
            tag = "ol" if node.ordered else "ul"
            start = f' start="{number}"' if node.ordered and number != 1 else ""
            lines = [f"<{tag}{start}>"]
            for item in items:
                lines.extend(["<li>", *item, "</li>"])
            lines.append(f"</{tag}>")
            return lines
        lines = [""]
        for item in items:
            marker = f"{number}. " if node.ordered else "- "
            number += 1
            first, *rest = item or [""]
            lines.append(marker + first)
            lines.extend(_indent(rest, " " * len(marker)))
        lines.append("")
        return lines


class SimpleSectRenderer(LinesRenderer):
    """A ``<simplesect>``: returns, notes, warnings, see-also and the like."""

    def render_to_lines(self, node: DocSimpleSect, fmt: OutputFormat) -> list[str]:
        """Render a titled section or a call-out box."""
        if node.kind == "par":
            title = self.engine.render_to_string(node.title, fmt).strip()
        elif node.kind in SIMPLESECT_TITLES:
            title = SIMPLESECT_TITLES[node.kind]
        else:
            self.engine.diagnostics.warning(
                "unknown simplesect kind '%s'", node.kind
            )
            title = node.kind.capitalize()
        body = self.engine.render_to_lines(node.children, fmt)
        if node.kind not in ADMONITIONS or fmt == "text":
            return _titled_block(title, body, fmt, f"section {node.kind}")
        body = strip_blank(body)
        if fmt == "html":
            return [
                f'<div class="admonition {node.kind}">',
                f'<p class="admonition-title">{title}</p>',
                *body,
                "</div>",
            ]
        return ["", f"> **{title}**", ">", *[f"> {line}".rstrip() for line in body], ""]


class ParamTypeRenderer(ContentRenderer):
    """A ``<parametertype>``."""


class ParamNameRenderer(TextRenderer):
    """A ``<parametername>`` with its direction."""

    def render_to_string(self, node: DocParamName, fmt: OutputFormat) -> str:
        """Render the name followed by ``[in]``, ``[out]`` or ``[in,out]``."""
        name = self.engine.render_to_string(node.children, fmt).strip()
        if node.direction is None:
            return name
        direction = "in,out" if node.direction == "inout" else node.direction
        if fmt == "markdown":
            return f"{name} \\[{direction}\\]"
        return f"{name} [{direction}]"


class ParamNameListRenderer(TextRenderer):
    """The names (and types) documented together."""

    def render_to_string(self, node: DocParamNameList, fmt: OutputFormat) -> str:
        """Render the names separated by commas, each typed when known."""
        names = [self.engine.render_to_string(n, fmt) for n in node.names]
        types = [self.engine.render_to_string(t, fmt).strip() for t in node.types]
        if types:
            return ", ".join(names) + f" ({' | '.join(types)})"
        return ", ".join(names)


class ParamListItemRenderer(LinesRenderer):
    """One entry of a parameter list."""

    def render_to_lines(self, node: DocParamListItem, fmt: OutputFormat) -> list[str]:
        """Render the names, then the description on the same line."""
        names = ", ".join(
            self.engine.render_to_string(n, fmt) for n in node.name_lists
        )
        description = join_inline(self.engine.render_to_lines(node.description, fmt))
        if fmt == "html":
            return [f"<li><code>{names}</code> {description}</li>"]
        if fmt == "markdown":
            return [f"- **{names}**: {description}".rstrip()]
        return [f"  {names}: {description}".rstrip()]


class ParamListRenderer(LinesRenderer):
    """A ``<parameterlist>``."""

    def render_to_lines(self, node: DocParamList, fmt: OutputFormat) -> list[str]:
        """Render the list title and one line per parameter."""
        title = PARAMLIST_TITLES.get(node.kind)
        if title is None:
            self.engine.diagnostics.warning(
                "unknown parameterlist kind '%s'", node.kind
            )
            title = node.kind.capitalize()
        body = self.engine.render_to_lines(node.children, fmt)
        if fmt == "html":
            body = ["<ul>", *body, "</ul>"]
        return _titled_block(title, body, fmt, f"params {node.kind}")


class XRefSectRenderer(LinesRenderer):
    """A todo, bug, test or deprecated entry."""

    def render_to_lines(self, node: DocXRefSect, fmt: OutputFormat) -> list[str]:
        """Render the entry titles over its description."""
        title = ", ".join(self.engine.render_string(t, fmt) for t in node.titles)
        body = self.engine.render_to_lines(node.description, fmt)
        return _titled_block(title or node.id, body, fmt, "xref")


class VarListEntryRenderer(TextRenderer):
    """The term of a variable list pair."""

    def render_to_string(self, node: DocVarListEntry, fmt: OutputFormat) -> str:
        """Render the term."""
        return self.engine.render_to_string(node.term, fmt).strip()


class VariableListRenderer(LinesRenderer):
    """A ``<variablelist>`` of terms and their descriptions."""

    def render_to_lines(self, node: DocVariableList, fmt: OutputFormat) -> list[str]:
        """Render each term with its description."""
        if fmt == "html":
            lines = ["<dl>"]
            for entry, item in node.pairs:
                lines.append(f"<dt>{self.engine.render_to_string(entry, fmt)}</dt>")
                lines.extend(["<dd>", *self.engine.render_to_lines(item, fmt), "</dd>"])
            lines.append("</dl>")
            return lines
        lines = [""]
        for entry, item in node.pairs:
            term = self.engine.render_to_string(entry, fmt)
            description = join_inline(self.engine.render_to_lines(item, fmt))
            if fmt == "markdown":
                lines.append(f"- **{term}**: {description}".rstrip())
            else:
                lines.append(f"  {term}: {description}".rstrip())
        lines.append("")
        return lines


class CaptionRenderer(ContentRenderer):
    """A table ``<caption>``."""


class EntryRenderer(TextRenderer):
    """A table cell."""

    def render_to_string(self, node: DocEntry, fmt: OutputFormat) -> str:
        """Render the cell; HTML gets a ``<th>`` or ``<td>`` with its spans."""
        content = self.engine.render_to_lines(node.children, fmt)
        if fmt != "html":
            return join_inline(content)
        tag = "th" if node.thead else "td"
        attributes = ""
        if node.colspan:
            attributes += f' colspan="{node.colspan}"'
        if node.rowspan:
            attributes += f' rowspan="{node.rowspan}"'
        if node.align:
            attributes += f' align="{escape_attribute(node.align)}"'
        if node.css_class:
            attributes += f' class="{escape_attribute(node.css_class)}"'
        body = join_inline(
            [line.replace("<p>", "").replace("</p>", " ") for line in content]
        )
        return f"<{tag}{attributes}>{body}</{tag}>"


class RowRenderer(LinesRenderer):
    """A table row."""

    def render_to_lines(self, node: DocRow, fmt: OutputFormat) -> list[str]:
        """Render the row's cells."""
        cells = [self.engine.render_to_string(entry, fmt) for entry in node.children]
        if fmt == "html":
            return ["<tr>", *cells, "</tr>"]
        return [" | ".join(cells)]


class TableRenderer(LinesRenderer):
    """A ``<table>``.

    Markdown pipe tables are used when every row is plain (one header row,
    no spans); otherwise the table falls back to HTML.
    """

    def render_to_lines(self, node: DocTable, fmt: OutputFormat) -> list[str]:
        """Render the caption and rows."""
        caption = (
            self.engine.render_to_string(node.caption, fmt).strip()
            if node.caption is not None
            else ""
        )
        if fmt == "markdown" and self._is_simple(node):
            rows = [
                [self.engine.render_to_string(e, fmt) for e in row.children]
                for row in node.children
            ]
            lines = [""]
            if caption:
                lines.extend([f"*{caption}*", ""])
            lines.extend(md_table(rows[0], rows[1:]) if rows else [])
            lines.append("")
            return lines
        if fmt in ("markdown", "html"):
            caption = (
                self.engine.render_to_string(node.caption, "html").strip()
                if node.caption is not None
                else ""
            )
            lines = ["", "<table>"] if fmt == "markdown" else ["<table>"]
            if caption:
                lines.append(f"<caption>{caption}</caption>")
            lines.extend(self.engine.render_to_lines(node.children, "html"))
            lines.append("</table>")
            return [*lines, ""] if fmt == "markdown" else lines
        lines = [""]
        if caption:
            lines.append(caption)
        lines.extend(self.engine.render_to_lines(node.children, fmt))
        lines.append("")
        return lines

    @staticmethod
    def _is_simple(node: DocTable) -> bool:
        rows = [row.children for row in node.children]
        if not rows:
            return False
        for index, entries in enumerate(rows):
            for entry in entries:
                if entry.colspan and entry.colspan > 1:
                    return False
                if entry.rowspan and entry.rowspan > 1:
                    return False
                if entry.thead != (index == 0):
                    return False
                if any(not isinstance(c, DocPara) for c in entry.children):
                    return False
                if len(entry.children) > 1:
                    return False
        return True


class HeadingRenderer(LinesRenderer):
    """A ``<heading>`` inside prose."""

    def render_to_lines(self, node: DocHeading, fmt: OutputFormat) -> list[str]:
        """Render a heading of the element's level."""
        title = self.engine.render_to_string(node.children, fmt).strip()
        return heading(node.level, title, fmt)


class VerbatimRenderer(LinesRenderer):
    """A ``<verbatim>`` block, copied without escaping or markup."""

    def render_to_lines(self, node: DocVerbatim, fmt: OutputFormat) -> list[str]:
        """Render the verbatim text as a code block."""
        return code_block("", node.verbatim.strip("\n").split("\n"), fmt)


class PreformattedRenderer(LinesRenderer):
    """A ``<preformatted>`` block; its inline markup is kept."""

    def render_to_lines(self, node: DocPreformatted, fmt: OutputFormat) -> list[str]:
        """Render as ``<pre>``; Markdown embeds the HTML form."""
        if fmt == "text":
            text = self.engine.render_to_string(node.children, fmt)
            return ["", *text.split("\n"), ""]
        body = self.engine.render_to_string(node.children, "html")
        lines = [f"<pre>{body.strip(chr(10))}</pre>"]
        return ["", *lines, ""] if fmt == "markdown" else lines


class HorizontalRuleRenderer(LinesRenderer):
    """An ``<hruler/>``."""

    def render_to_lines(self, node: DocHorizontalRule, fmt: OutputFormat) -> list[str]:
        """Render a thematic break."""
        if fmt == "html":
            return ["<hr/>"]
        return ["", "---" if fmt == "markdown" else "-" * 40, ""]


class TocItemRenderer(TextRenderer):
    """An in-page table of contents entry."""

    def render_to_string(self, node: DocTocItem, fmt: OutputFormat) -> str:
        """Render the entry title linked to its section anchor."""
        title = self.engine.render_to_string(node.children, fmt).strip()
        if not node.id:
            return title
        return link(title, f"#{get_permalink_anchor(node.id)}", fmt)


class TocListRenderer(LinesRenderer):
    """An in-page table of contents."""

    def render_to_lines(self, node: DocTocList, fmt: OutputFormat) -> list[str]:
        """Render the entries as a bullet list."""
        items = [self.engine.render_to_string(item, fmt) for item in node.children]
        if fmt == "html":
            return ["<ul>", *[f"<li>{item}</li>" for item in items], "</ul>"]
        return ["", *[f"- {item}" for item in items], ""]


class DetailsRenderer(LinesRenderer):
    """A collapsible ``<details>`` block."""

    def render_to_lines(self, node: DocDetails, fmt: OutputFormat) -> list[str]:
        """Render the summary and the folded paragraphs."""
        summary = (
            self.engine.render_to_string(node.summary, fmt).strip()
            if node.summary is not None
            else ""
        )
        body = strip_blank(self.engine.render_to_lines(node.children, fmt))
        if fmt == "text":
            return ["", summary, *body, ""] if summary else ["", *body, ""]
        lines = ["", "<details>"] if fmt == "markdown" else ["<details>"]
        if summary:
            lines.append(f"<summary>{summary}</summary>")
        if fmt == "markdown":
            lines.append("")
        lines.extend(body)
        if fmt == "markdown":
            lines.append("")
        lines.append("</details>")
        return lines


class SectionRenderer(LinesRenderer):
    """A ``<sectN>`` section, headed one level below its nesting depth."""

    def render_to_lines(self, node: DocSection, fmt: OutputFormat) -> list[str]:
        """Render the anchored heading, then the content."""
        title = (
            self.engine.render_to_string(node.title, fmt).strip()
            if node.title is not None
            else ""
        )
        anchor = get_permalink_anchor(node.id) if node.id else ""
        lines = heading(node.level + 1, title, fmt, anchor) if title else []
        lines.extend(self.engine.render_to_lines(node.children, fmt))
        return lines


def register(engine: RenderEngine) -> None:
    """Register the block renderers."""
    description = DescriptionRenderer(engine)
    engine.register_lines(Description, description)
    engine.register_lines(DocInternal, description)
    engine.register_lines(DocParas, description)
    engine.register_lines(DocPara, ParaRenderer(engine))
    engine.register_lines(DocBlockQuote, BlockQuoteRenderer(engine))
    engine.register_lines(DocListItem, ListItemRenderer(engine))
    engine.register_lines(DocList, ListRenderer(engine))
    engine.register_lines(DocSimpleSect, SimpleSectRenderer(engine))
    engine.register_text(DocParamType, ParamTypeRenderer(engine))
    engine.register_text(DocParamName, ParamNameRenderer(engine))
    engine.register_text(DocParamNameList, ParamNameListRenderer(engine))
    engine.register_lines(DocParamListItem, ParamListItemRenderer(engine))
    engine.register_lines(DocParamList, ParamListRenderer(engine))
    engine.register_lines(DocXRefSect, XRefSectRenderer(engine))
    engine.register_text(DocVarListEntry, VarListEntryRenderer(engine))
    engine.register_lines(DocVariableList, VariableListRenderer(engine))
    engine.register_text(DocCaption, CaptionRenderer(engine))
    engine.register_text(DocEntry, EntryRenderer(engine))
    engine.register_lines(DocRow, RowRenderer(engine))
    engine.register_lines(DocTable, TableRenderer(engine))
    engine.register_lines(DocHeading, HeadingRenderer(engine))
    engine.register_lines(DocVerbatim, VerbatimRenderer(engine))
    engine.register_lines(DocPreformatted, PreformattedRenderer(engine))
    engine.register_lines(DocHorizontalRule, HorizontalRuleRenderer(engine))
    engine.register_text(DocTocItem, TocItemRenderer(engine))
    engine.register_lines(DocTocList, TocListRenderer(engine))
    engine.register_lines(DocDetails, DetailsRenderer(engine))
    engine.register_lines(DocSection, SectionRenderer(engine))
