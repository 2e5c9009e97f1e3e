"""Tests for the doxygen_xml_to_pages command line entry point."""

import json
import sys
from pathlib import Path
from unittest.mock import patch

import pytest
import yaml
from doxygen_xml import compound, widget_compounds, write_xml_folder

from doxyweave.doxygen_xml_to_pages import build_parser, main


def test_parser_defaults() -> None:
    """Verify that unset options stay None so the config file decides."""
    args = build_parser().parse_args(["xml", "out"])
    assert args.xml_dir == Path("xml")
    assert args.output_format is None
    assert args.workers is None
    assert not args.dry_run


def test_main_integration(tmp_path: Path) -> None:
    """Test the main function with mocked arguments."""
    xml_dir = write_xml_folder(
        tmp_path / "xml", widget_compounds(), {"PROJECT_NAME": "Widgets"}
    )
    out = tmp_path / "out"

    test_args = ["doxyweave", str(xml_dir), str(out)]
    with patch.object(sys, "argv", test_args):
        assert main() == 0

    widget = out / "classes" / "ns" / "widget.md"
    assert widget.exists()
    assert (out / "namespaces" / "ns.md").exists()
    assert (out / "classes.md").exists()
    text = widget.read_text(encoding="utf-8")
    header = yaml.safe_load(text.split("---\n")[1])
    assert header["title"] == "ns::Widget Class Reference"
    assert header["slug"] == "classes/ns/widget"
    assert "# ns::Widget Class Reference" in text

    index = (out / "index.md").read_text(encoding="utf-8")
    assert "# Widgets Reference" in index
    sidebar = json.loads((out / "sidebar.json").read_text(encoding="utf-8"))
    assert [item["label"] for item in sidebar] == ["Namespaces", "Classes"]


def test_main_html_with_config(tmp_path: Path) -> None:
    """Verify that the config file and the --format flag select HTML pages."""
    xml_dir = write_xml_folder(tmp_path / "xml", widget_compounds())
    config = tmp_path / "config.yml"
    config.write_text("base_url: /docs\nworkers: 2\n", encoding="utf-8")
    out = tmp_path / "out"

    args = [str(xml_dir), str(out), "--format", "html", "--config", str(config)]
    assert main(args) == 0

    page = (out / "classes" / "ns" / "base.html").read_text(encoding="utf-8")
    assert '<a href="/docs/classes/ns/widget">ns::Widget</a>' in page
    assert not list(out.rglob("*.md"))


def test_main_dry_run(tmp_path: Path) -> None:
    """Verify that a dry run writes nothing."""
    xml_dir = write_xml_folder(tmp_path / "xml", widget_compounds())
    out = tmp_path / "out"
    assert main([str(xml_dir), str(out), "--dry-run"]) == 0
    assert not out.exists()


def test_main_reports_broken_input(tmp_path: Path) -> None:
    """Verify that a structural error in the XML gives exit status 1."""
    dangling = compound(
        "namespacens",
        "namespace",
        "ns",
        '<innerclass refid="classns_1_1_gone" prot="public">ns::Gone</innerclass>',
    )
    xml_dir = write_xml_folder(tmp_path / "xml", [dangling])
    assert main([str(xml_dir), str(tmp_path / "out")]) == 1


def test_main_without_index(tmp_path: Path) -> None:
    """Verify that a folder without index.xml stops the run."""
    with pytest.raises(SystemExit, match="No index.xml"):
        main([str(tmp_path), str(tmp_path / "out")])
