"""Tests for per-format leaf escaping."""

import pytest

from doxyweave.escaping import (
    escape_attribute,
    escape_html,
    escape_markdown,
    escape_markdown_line_start,
    escape_text,
)


def test_escape_html() -> None:
    """Verify that only the three HTML specials change."""
    assert escape_html("a < b && c > d_e") == "a &lt; b &amp;&amp; c &gt; d_e"


def test_escape_attribute_quotes() -> None:
    """Verify that attribute values also escape double quotes."""
    assert escape_attribute('say "hi" & <go>') == "say &quot;hi&quot; &amp; &lt;go&gt;"


def test_escape_markdown() -> None:
    """Verify escaping of emphasis, link and code characters."""
    assert escape_markdown("a_b *c* [d] `e` ~f~") == (
        "a\\_b \\*c\\* \\[d\\] \\`e\\` \\~f\\~"
    )
    assert escape_markdown("x<T>&") == "x&lt;T&gt;&amp;"
    assert escape_markdown("C:\\path") == "C:\\\\path"


@pytest.mark.parametrize(
    ("line", "expected"),
    [
        ("# title", "\\# title"),
        ("- item", "\\- item"),
        ("+", "\\+"),
        ("---", "\\---"),
        ("===", "\\==="),
        ("1. first", "1\\. first"),
        ("2) second", "2\\) second"),
        ("    indented", "indented"),
        ("-1 is negative", "-1 is negative"),
        ("3.14 is pi", "3.14 is pi"),
        ("plain text", "plain text"),
    ],
)
def test_escape_markdown_line_start(line: str, expected: str) -> None:
    """Verify that paragraph lines never open a heading, list, rule or code block."""
    assert escape_markdown_line_start(line) == expected


def test_escape_text_dispatch() -> None:
    """Verify format dispatch, raw text output and unknown formats."""
    raw = "<b>_x_</b>"
    assert escape_text(raw, "text") == raw
    assert escape_text(raw, "html") == "&lt;b&gt;_x_&lt;/b&gt;"
    assert escape_text(raw, "markdown") == "&lt;b&gt;\\_x\\_&lt;/b&gt;"
    with pytest.raises(ValueError, match="rst"):
        escape_text(raw, "rst")  # type: ignore[arg-type]
