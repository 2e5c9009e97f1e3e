"""Leaf text escaping for each output format."""

import re
from typing import Literal

OutputFormat = Literal["text", "markdown", "html"]
OUTPUT_FORMATS: tuple[OutputFormat, ...] = ("text", "markdown", "html")

_HTML = str.maketrans({"&": "&amp;", "<": "&lt;", ">": "&gt;"})
_ATTRIBUTE = str.maketrans({"&": "&amp;", "<": "&lt;", ">": "&gt;", '"': "&quot;"})
_MARKDOWN = str.maketrans(
    {
        "&": "&amp;",
        "<": "&lt;",
        ">": "&gt;",
        "\\": "\\\\",
        "[": "\\[",
        "]": "\\]",
        "*": "\\*",
        "_": "\\_",
        "~": "\\~",
        "`": "\\`",
    }
)


def escape_html(text: str) -> str:
    """Escape ``&``, ``<`` and ``>``."""
    return text.translate(_HTML)


def escape_attribute(text: str) -> str:
    """Escape a value for a double-quoted HTML attribute."""
    return text.translate(_ATTRIBUTE)


def escape_markdown(text: str) -> str:
    """Escape HTML specials and Markdown emphasis, link and code characters."""
    return text.translate(_MARKDOWN)


_BLOCK_START_RE = re.compile(r"^(?:#|[-+](?=\s|$)|[-=]+\s*$)")
_ORDERED_START_RE = re.compile(r"^(\d{1,9})([.)])(?=\s|$)")


def escape_markdown_line_start(line: str) -> str:
    """Keep a paragraph line from starting a heading, list or rule.

    Leading blanks are dropped so indented lines do not become code blocks.
    """
    line = line.lstrip()
    if _BLOCK_START_RE.match(line):
        return "\\" + line
    return _ORDERED_START_RE.sub(r"\1\\\2", line, count=1)


def escape_text(text: str, fmt: OutputFormat) -> str:
    """Escape a raw text run once, for the given output format."""
    if fmt == "html":
        return escape_html(text)
    if fmt == "markdown":
        return escape_markdown(text)
    if fmt == "text":
        return text
    msg = f"unknown output format: {fmt}"
    raise ValueError(msg)
