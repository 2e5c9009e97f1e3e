"""Tests for writing rendered pages to disk."""

from pathlib import Path

import yaml

from doxyweave.page_writer import (
    RenderedPage,
    front_matter,
    output_file_for_page,
    page_text,
    write_page,
)

PAGE = RenderedPage(
    permalink="classes/ns/widget",
    title="ns::Widget Class Reference",
    lines=["# ns::Widget Class Reference", "", "A widget."],
    description="A widget.",
)


def test_output_file_for_page(tmp_path: Path) -> None:
    """Verify the file path and that its folders are created."""
    path = output_file_for_page(tmp_path, "classes/ns/widget", "markdown")
    assert path == tmp_path / "classes" / "ns" / "widget.md"
    assert path.parent.is_dir()
    assert output_file_for_page(tmp_path, "index", "html").name == "index.html"


def test_front_matter() -> None:
    """Verify the YAML block, including extra and per-page keys."""
    page = RenderedPage("index", "API: Reference", [], extra={"weight": 1})
    block = front_matter(page, {"layout": "api"})
    assert block.startswith("---\n")
    assert block.endswith("---\n")
    data = yaml.safe_load(block.strip("-\n"))
    assert data == {
        "title": "API: Reference",
        "slug": "index",
        "description": "",
        "layout": "api",
        "weight": 1,
    }


def test_page_text_per_format() -> None:
    """Verify the document wrapper of each format."""
    markdown = page_text(PAGE, "markdown")
    assert markdown.startswith("---\ntitle: ns::Widget Class Reference\n")
    assert markdown.endswith("A widget.\n")
    html = page_text(PAGE, "html")
    assert "<title>ns::Widget Class Reference</title>" in html
    assert html.endswith("</html>\n")
    assert page_text(PAGE, "text") == "# ns::Widget Class Reference\n\nA widget.\n"


def test_write_page(tmp_path: Path) -> None:
    """Verify that the page lands at its permalink."""
    path = write_page(tmp_path, PAGE, "text")
    assert path == tmp_path / "classes" / "ns" / "widget.txt"
    assert path.read_text(encoding="utf-8").endswith("A widget.\n")
