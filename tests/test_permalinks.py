"""Tests for the permalink and anchor helpers."""

from doxyweave.permalinks import (
    get_permalink_anchor,
    sanitize_anonymous_namespace,
    sanitize_hierarchical_path,
    sanitize_segment,
    sanitize_template_suffix,
    strip_permalink_hex_anchor,
    strip_permalink_text_anchor,
)


def test_sanitize_segment() -> None:
    """Verify lower-casing and hyphenation of non-alphanumeric runs."""
    assert sanitize_segment("Widget") == "widget"
    assert sanitize_segment("operator==") == "operator"
    assert sanitize_segment("my_file.h") == "my-file-h"
    assert sanitize_segment("--") == ""


def test_sanitize_hierarchical_path() -> None:
    """Verify that each segment is cleaned and empty segments dropped."""
    assert sanitize_hierarchical_path("ns/Inner Class") == "ns/inner-class"
    assert sanitize_hierarchical_path("/src//core/") == "src/core"


def test_sanitize_template_suffix() -> None:
    """Verify that template arguments become a stable suffix."""
    assert sanitize_template_suffix("< int >") == "int"
    assert sanitize_template_suffix("<std::string, 3>") == "std-string-3"
    assert sanitize_template_suffix("< int >") != sanitize_template_suffix(
        "< float >"
    )


def test_anchor_helpers() -> None:
    """Verify splitting member refids into owner ids and anchors."""
    refid = "classns_1_1_widget_1a3f09"
    assert strip_permalink_hex_anchor(refid) == "classns_1_1_widget"
    assert get_permalink_anchor(refid) == "a3f09"
    assert strip_permalink_hex_anchor("classwidget") == "classwidget"
    assert strip_permalink_text_anchor("guide_1_intro") == "guide"


def test_misc_helpers() -> None:
    """Verify anonymous namespace shortening."""
    assert (
        sanitize_anonymous_namespace("ns::anonymous_namespace{a.cpp}")
        == "ns::anonymous{a.cpp}"
    )
