"""Small builders for headings, links, tables and code blocks per output format."""

from __future__ import annotations

from doxyweave.escaping import OutputFormat, escape_attribute, escape_html


def md_table(headers: list[str], rows: list[list[str]]) -> list[str]:
    """Generate a Markdown pipe table; an empty header row is left blank."""
    if not rows and not headers:
        return []
    width = max([len(headers), *(len(r) for r in rows)])

    def cells(row: list[str]) -> str:
        padded = [c.replace("|", "\\|").replace("\n", " ") for c in row]
        padded += [""] * (width - len(padded))
        return "| " + " | ".join(padded) + " |"

    out = [cells(headers), "| " + " | ".join(["---"] * width) + " |"]
    out.extend(cells(r) for r in rows)
    return out


def md_codeblock(lang: str, lines: list[str]) -> list[str]:
    """Generate a fenced Markdown code block.

    The fence grows past the longest backtick run inside the code.
    """
    longest = 0
    for line in lines:
        run = 0
        for char in line:
            run = run + 1 if char == "`" else 0
            longest = max(longest, run)
    fence = "`" * max(3, longest + 1)
    while lines and not lines[-1].strip():
        lines = lines[:-1]
    return [f"{fence}{lang}", *(line.rstrip() for line in lines), fence]


def heading(level: int, title: str, fmt: OutputFormat, anchor: str = "") -> list[str]:
    """Return a heading block, preceded by a blank line where the format needs one."""
    level = min(max(level, 1), 6)
    if fmt == "html":
        id_attr = f' id="{escape_attribute(anchor)}"' if anchor else ""
        return [f"<h{level}{id_attr}>{title}</h{level}>"]
    if fmt == "markdown":
        lines = ["", f'<a id="{escape_attribute(anchor)}"></a>'] if anchor else []
        return [*lines, "", f"{'#' * level} {title}", ""]
    return ["", title, ""]


def link(label: str, url: str | None, fmt: OutputFormat) -> str:
    """Wrap an already rendered label in a hyperlink when a URL is known."""
    if not url or fmt == "text":
        return label
    if fmt == "html":
        return f'<a href="{escape_attribute(url)}">{label}</a>'
    return f"[{label}]({url.replace(' ', '%20').replace(')', '%29')})"


def code_block(lang: str, lines: list[str], fmt: OutputFormat) -> list[str]:
    """Return raw source lines as a code block; ``lines`` must not be escaped."""
    if fmt == "markdown":
        return ["", *md_codeblock(lang, lines), ""]
    if fmt == "html":
        body = "\n".join(escape_html(line) for line in lines)
        language = escape_attribute(lang)
        return [f'<pre><code class="language-{language}">{body}</code></pre>']
    return ["", *lines, ""]


def bullet(text: str, fmt: OutputFormat, depth: int = 0) -> str:
    """Return one unordered list item; HTML callers supply the ``<ul>``."""
    if fmt == "html":
        return f"<li>{text}</li>"
    return f"{'  ' * depth}- {text}"


def strip_blank(lines: list[str]) -> list[str]:
    """Drop leading and trailing blank lines and collapse runs of them."""
    out: list[str] = []
    for line in lines:
        if not line.strip() and (not out or not out[-1].strip()):
            continue
        out.append(line)
    while out and not out[-1].strip():
        out.pop()
    return out


def join_inline(lines: list[str]) -> str:
    """Flatten rendered block lines into a single line of text."""
    return " ".join(line.strip() for line in lines if line.strip())
