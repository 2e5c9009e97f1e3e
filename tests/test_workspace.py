"""Tests for reference resolution and permalink validation in the workspace."""

from collections.abc import Callable

from doxygen_xml import compound, widget_compounds

from doxyweave.diagnostics import Diagnostics
from doxyweave.workspace import Workspace

MakeWorkspace = Callable[..., Workspace]


def test_compound_and_member_permalinks(make_workspace: MakeWorkspace) -> None:
    """Verify permalinks of compounds and of members anchored on them."""
    workspace = make_workspace(widget_compounds())
    assert workspace.get_permalink("classns_1_1_widget", "compound") == (
        "classes/ns/widget"
    )
    member = workspace.members_by_id["classns_1_1_widget_1a3f"]
    assert member.owner_id == "classns_1_1_widget"
    assert member.anchor == "a3f"
    assert workspace.get_permalink("classns_1_1_widget_1a3f", "member") == (
        "classes/ns/widget/#a3f"
    )


def test_undocumented_member_falls_back_to_owner(
    make_workspace: MakeWorkspace, diagnostics: Diagnostics
) -> None:
    """Verify that an unknown member of a known compound links to its anchor."""
    workspace = make_workspace(widget_compounds())
    before = len(diagnostics.warnings)
    permalink = workspace.get_permalink("classns_1_1_widget_1b00", "member")
    assert permalink == "classes/ns/widget/#b00"
    assert len(diagnostics.warnings) == before


def test_unknown_reference_warns_once(
    make_workspace: MakeWorkspace, diagnostics: Diagnostics
) -> None:
    """Verify that unresolvable targets give None and a single warning."""
    workspace = make_workspace(widget_compounds())
    before = len(diagnostics.warnings)
    assert workspace.get_url("external_1a1b", "member") is None
    assert len(diagnostics.warnings) == before + 1
    assert diagnostics.warnings[-1].refid == "external_1a1b"


def test_urls_use_the_base_url(make_workspace: MakeWorkspace) -> None:
    """Verify that URLs are permalinks under the configured prefix."""
    workspace = make_workspace(widget_compounds(), base_url="https://example.org/docs")
    assert workspace.get_url("classns_1_1_base", "compound") == (
        "https://example.org/docs/classes/ns/base"
    )


def test_duplicate_permalinks_are_suffixed(
    make_workspace: MakeWorkspace, diagnostics: Diagnostics
) -> None:
    """Verify that colliding permalinks get -1 suffixes and a warning."""
    workspace = make_workspace(
        [
            compound("namespace_foo", "namespace", "Foo"),
            compound("namespacefoo", "namespace", "foo"),
        ]
    )
    namespaces = workspace.collections["namespaces"]
    assert namespaces.get("namespace_foo").permalink == "namespaces/foo"
    assert namespaces.get("namespacefoo").permalink == "namespaces/foo-1"
    assert any("namespaces/foo-1" in d.message for d in diagnostics.warnings)
    permalinks = [c.permalink for c in workspace.compounds_by_id.values()]
    assert len(permalinks) == len(set(permalinks))


def test_main_page_is_the_index(make_workspace: MakeWorkspace) -> None:
    """Verify that the main page maps to the site index."""
    workspace = make_workspace(
        [
            compound(
                "indexpage",
                "page",
                "index",
                '<title>Home</title><innerpage refid="guide">guide</innerpage>',
            ),
            compound("guide", "page", "guide", "<title>User Guide</title>"),
        ]
    )
    pages = workspace.collections["pages"]
    assert pages.get("indexpage").permalink == "index"
    assert pages.get("guide").permalink == "pages/guide"
    assert pages.get("guide").label == "User Guide"
