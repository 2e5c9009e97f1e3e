"""Tests for compound pages, collection indexes and the site index."""

from collections.abc import Callable

from doxygen_xml import compound, parse_node, rich_compounds, widget_compounds

from doxyweave.definitions_index import (
    INDEX_KINDS,
    IndexEntry,
    group_by_initial,
    render_definitions_index,
)
from doxyweave.members import EnumValue
from doxyweave.render_compounds import (
    TODO_BRIEF,
    render_collection_index,
    render_compound_page,
)
from doxyweave.render_dispatch import RenderEngine
from doxyweave.run_conversion import render_pages, render_site_index

MakeEngine = Callable[..., RenderEngine]


def _page(engine: RenderEngine, refid: str, fmt: str = "markdown") -> list[str]:
    return render_compound_page(engine, engine.workspace.compounds_by_id[refid], fmt)


def test_class_page_in_markdown(make_engine: MakeEngine) -> None:
    """Verify title, brief, inheritance, member sections and location."""
    engine = make_engine(widget_compounds())
    lines = _page(engine, "classns_1_1_widget")
    assert lines[0] == "# ns::Widget Class Reference"
    assert "A widget." in lines
    assert "Inherits: [ns::Base](/api/classes/ns/base)" in lines
    assert "## Public Member Functions" in lines
    assert '<a id="a3f"></a>' in lines
    assert "### resize" in lines
    assert "void ns::Widget::resize(int size)" in lines
    assert "Change the size." in lines
    assert "Definition at line 4 of file ns/widget.h." in lines


def test_base_class_lists_derived_classes(make_engine: MakeEngine) -> None:
    """Verify the inherited-by line of a base class."""
    engine = make_engine(widget_compounds())
    lines = _page(engine, "classns_1_1_base", "html")
    assert lines[0] == "<h1>ns::Base Class Reference</h1>"
    assert (
        '<p>Inherited by: <a href="/api/classes/ns/widget">ns::Widget</a></p>'
        in lines
    )


def test_namespace_page_lists_classes(make_engine: MakeEngine) -> None:
    """Verify that inner classes are listed with links and briefs."""
    engine = make_engine(widget_compounds())
    lines = _page(engine, "namespacens")
    assert "## Classes" in lines
    assert "- [Base](/api/classes/ns/base) - The base." in lines
    assert "- [Widget](/api/classes/ns/widget) - A widget." in lines


def test_plain_text_page_has_no_markup(make_engine: MakeEngine) -> None:
    """Verify that the text format carries no links or tags."""
    engine = make_engine(widget_compounds())
    text = "\n".join(_page(engine, "classns_1_1_widget", "text"))
    assert "Inherits: ns::Base" in text
    assert "](" not in text
    assert "<a" not in text


def test_todo_brief_is_optional(make_engine: MakeEngine) -> None:
    """Verify the placeholder for undocumented compounds."""
    bare = [compound("classbare", "class", "Bare")]
    assert TODO_BRIEF not in _page(make_engine(bare), "classbare")
    engine = make_engine(bare, suggest_to_do_descriptions=True)
    assert TODO_BRIEF in _page(engine, "classbare")


def test_template_class_declaration(make_engine: MakeEngine) -> None:
    """Verify the include and template lines of a class template."""
    engine = make_engine(rich_compounds())
    lines = _page(engine, "classbox")
    assert "#include <box.h>" in lines
    assert "template <typename T>" in lines
    assert "class Box;" in lines
    assert "Inherits: std::vector&lt;T&gt;" in lines


def test_enum_and_variable_members(make_engine: MakeEngine) -> None:
    """Verify enumerators and member declarations."""
    engine = make_engine(rich_compounds())
    lines = _page(engine, "classbox")
    assert "enum Color : int" in lines
    assert "int Box::value = 3" in lines
    assert "## Colors" in lines
    assert '- <a id="a3a1"></a>Red = 1 - Red.' in lines


def test_file_page_listing(make_engine: MakeEngine) -> None:
    """Verify the macro section and the optional source listing of a file."""
    engine = make_engine(rich_compounds())
    lines = _page(engine, "box_8h")
    assert "## Macros" in lines
    assert "#define BOX_MAX(x) (x)" in lines
    assert "## File Listing" in lines
    engine = make_engine(rich_compounds(), render_program_listing=False)
    assert "## File Listing" not in _page(engine, "box_8h")


def test_group_page_links_members(make_engine: MakeEngine) -> None:
    """Verify that member references in a group link to their definition."""
    engine = make_engine(rich_compounds())
    lines = _page(engine, "group__core")
    assert lines[0] == "# Core"
    assert "- [get](/api/classes/box/#a1)" in lines


def test_page_table_of_contents(make_engine: MakeEngine) -> None:
    """Verify that a page lists its sections with in-page links."""
    engine = make_engine(rich_compounds())
    lines = _page(engine, "guide")
    assert lines[0] == "# Guide"
    assert "- [Intro](#intro)" in lines
    assert "## Intro" in lines


def test_collection_index(make_engine: MakeEngine) -> None:
    """Verify the landing page of the classes collection."""
    engine = make_engine(widget_compounds())
    assert render_collection_index(engine, "classes", "markdown") == [
        "# Classes",
        "",
        "- [ns::Base](/api/classes/ns/base)",
        "- [ns::Widget](/api/classes/ns/widget)",
    ]


def test_site_index_and_pages(make_engine: MakeEngine) -> None:
    """Verify that a site index is added when there is no main page."""
    engine = make_engine(widget_compounds())
    index = render_site_index(engine, "markdown")
    assert index.permalink == "index"
    assert "- [Namespaces](/api/namespaces)" in index.lines
    pages = render_pages(engine.workspace, engine, "markdown")
    permalinks = [page.permalink for page in pages]
    assert "classes/ns/widget" in permalinks
    assert "classes" in permalinks
    assert "index" in permalinks
    assert "indices/classes/all" in permalinks
    assert "indices/classes/typedefs" not in permalinks
    assert "files" not in permalinks


def test_class_page_lists_all_members(make_engine: MakeEngine) -> None:
    """Verify the all-members list below the member sections of a class."""
    engine = make_engine(rich_compounds())
    lines = _page(engine, "classbox")
    start = lines.index("## All Members")
    assert lines.index("## Colors") < start
    assert "- [Box::get](/api/classes/box/#a1)" in lines[start:]
    assert "## All Members" not in _page(engine, "box_8h")


def test_enum_value_anchor_is_attribute_escaped(make_engine: MakeEngine) -> None:
    """Verify that quotes and brackets in an enumerator id stay inside the anchor."""
    engine = make_engine()
    value = parse_node(
        EnumValue,
        '<enumvalue id="enum_1a&quot;b&lt;" prot="public"><name>A</name></enumvalue>',
    )
    assert engine.render_to_string(value, "html") == '<a id="a&quot;b&lt;"></a>A'


def _index(engine: RenderEngine, collection: str, slug: str) -> list[str]:
    kind = next(k for k in INDEX_KINDS[collection] if k.slug == slug)
    return render_definitions_index(engine, collection, kind, "markdown")


def test_classes_and_members_index(make_engine: MakeEngine) -> None:
    """Verify the per-initial index of classes and their members."""
    engine = make_engine(rich_compounds())
    lines = _index(engine, "classes", "all")
    assert lines[0] == "# Classes and Members Index"
    assert "The classes, structs, unions and their members are:" in lines
    groups = [line for line in lines if line.startswith("## ")]
    assert groups == ["## - B -", "## - C -", "## - G -", "## - R -", "## - V -"]
    assert "- **Box**: as class [Box](/api/classes/box)" in lines
    assert "- **get()**: as function in class [Box](/api/classes/box/#a1)" in lines
    assert "- **Red**: as enum value in class [Box](/api/classes/box/#a3a1)" in lines


def test_definitions_index_filters_by_kind(make_engine: MakeEngine) -> None:
    """Verify the per-kind pages and that empty ones render nothing."""
    engine = make_engine(rich_compounds())
    functions = _index(engine, "classes", "functions")
    assert functions[0] == "# Class Functions Index"
    assert [line for line in functions if line.startswith("- ")] == [
        "- **get()**: as function in class [Box](/api/classes/box/#a1)"
    ]
    defines = [line for line in _index(engine, "files", "defines") if "BOX" in line]
    assert len(defines) == 1
    assert defines[0].startswith("- **BOX\\_MAX**: as macro definition in file ")
    assert defines[0].endswith("/#a9)")
    assert _index(engine, "classes", "typedefs") == []


def test_index_groups_sort_destructors_by_name() -> None:
    """Verify that ``~`` is ignored when grouping and ordering entries."""
    entries = [
        IndexEntry(f"c_1a{i}", "member", name, f"C::{name}", "function", "class", "C")
        for i, name in enumerate(["zap()", "~Alpha()", "Alpha()", "beta()"])
    ]
    groups = group_by_initial(entries)
    assert list(groups) == ["a", "b", "z"]
    assert [e.name for e in groups["a"]] == ["Alpha()", "~Alpha()"]
