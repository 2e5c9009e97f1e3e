"""Writes rendered pages and the sidebar tree to the output folder."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from html import escape
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml

if TYPE_CHECKING:
    from doxyweave.escaping import OutputFormat
    from doxyweave.sidebar import SidebarItem

EXTENSIONS = {"markdown": ".md", "html": ".html", "text": ".txt"}


@dataclass
class RenderedPage:
    """A rendered page body plus the facts needed for its front matter."""

    permalink: str
    title: str
    lines: list[str]
    description: str = ""
    extra: dict[str, Any] = field(default_factory=dict)


def output_file_for_page(out_root: Path, permalink: str, fmt: OutputFormat) -> Path:
    """Return the file for a permalink, creating its parent folders."""
    # classes/ns/widget -> out_root/classes/ns/widget.md
    rel = permalink.strip("/") + EXTENSIONS[fmt]
    p = out_root / rel
    p.parent.mkdir(parents=True, exist_ok=True)
    return p


def front_matter(page: RenderedPage, extra: dict[str, Any] | None = None) -> str:
    """Return the YAML front matter block for a Markdown page."""
    data: dict[str, Any] = {
        "title": page.title,
        "slug": page.permalink,
        "description": page.description,
    }
    data.update(extra or {})
    data.update(page.extra)
    dumped = yaml.safe_dump(data, sort_keys=False, allow_unicode=True)
    return f"---\n{dumped}---\n"


def page_text(
    page: RenderedPage, fmt: OutputFormat, extra: dict[str, Any] | None = None
) -> str:
    """Return the complete file contents of a page."""
    body = "\n".join(page.lines).rstrip("\n") + "\n"
    if fmt == "markdown":
        return f"{front_matter(page, extra)}\n{body}"
    if fmt == "html":
        return (
            "<!DOCTYPE html>\n<html>\n<head>\n"
            '<meta charset="utf-8"/>\n'
            f"<title>{escape(page.title, quote=False)}</title>\n"
            f"</head>\n<body>\n{body}</body>\n</html>\n"
        )
    return body


def write_page(
    out_root: Path,
    page: RenderedPage,
    fmt: OutputFormat,
    extra: dict[str, Any] | None = None,
) -> Path:
    """Write one page below ``out_root`` and return its path."""
    out_file = output_file_for_page(out_root, page.permalink, fmt)
    out_file.write_text(page_text(page, fmt, extra), encoding="utf-8")
    return out_file


def write_sidebar(out_root: Path, items: list[SidebarItem]) -> Path:
    """Write the navigation tree as ``sidebar.json``."""
    out_root.mkdir(parents=True, exist_ok=True)
    path = out_root / "sidebar.json"
    path.write_text(
        json.dumps([item.to_dict() for item in items], indent=2) + "\n",
        encoding="utf-8",
    )
    return path
