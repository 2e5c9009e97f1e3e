"""Tests for the collections, their hierarchies and the linking phase."""

from collections.abc import Callable

import pytest
from doxygen_xml import compound, widget_compounds

from doxyweave.compounds import Class, File, Folder, Namespace
from doxyweave.diagnostics import Diagnostics
from doxyweave.errors import (
    CompoundNotFoundError,
    DanglingReferenceError,
    DuplicateParentError,
    HierarchyCycleError,
    PrefixMismatchError,
)
from doxyweave.workspace import Workspace

MakeWorkspace = Callable[..., Workspace]


def _namespace(refid: str, name: str, *children: str) -> tuple[str, str, str, str]:
    inner = "".join(
        f'<innernamespace refid="{child}">{child}</innernamespace>'
        for child in children
    )
    return compound(refid, "namespace", name, inner)


def test_class_hierarchy_and_base_classes(make_workspace: MakeWorkspace) -> None:
    """Verify that a derived class links to its documented base."""
    workspace = make_workspace(widget_compounds())
    classes = workspace.collections["classes"]
    widget = classes.get("classns_1_1_widget")
    base = classes.get("classns_1_1_base")
    assert isinstance(widget, Class)
    assert widget.base_classes == [base]
    assert base.derived_classes == [widget]
    assert widget.permalink == "classes/ns/widget"
    assert widget.label == "Widget"
    assert widget.page_title == "ns::Widget Class Reference"


def test_undocumented_base_class_is_reported(
    make_workspace: MakeWorkspace, diagnostics: Diagnostics
) -> None:
    """Verify that a base outside the documentation is noted, not fatal."""
    workspace = make_workspace(
        [
            compound(
                "classwidget",
                "class",
                "Widget",
                '<basecompoundref refid="classqobject" prot="public" '
                'virt="non-virtual">QObject</basecompoundref>',
            )
        ]
    )
    widget = workspace.collections["classes"].get("classwidget")
    assert widget.base_classes == []
    assert any("classqobject" in d.message for d in diagnostics.entries)


def test_dangling_inner_reference_names_both_ids(
    make_workspace: MakeWorkspace,
) -> None:
    """Verify that a group listing a missing class fails the build."""
    group = compound(
        "group__core",
        "group",
        "core",
        '<title>Core</title><innerclass refid="classmissing" prot="public">'
        "Missing</innerclass>",
    )
    with pytest.raises(DanglingReferenceError) as excinfo:
        make_workspace([group])
    assert excinfo.value.owner_id == "group__core"
    assert excinfo.value.refid == "classmissing"
    assert "group__core" in str(excinfo.value)
    assert "classmissing" in str(excinfo.value)


def test_prefix_mismatch_is_fatal(make_workspace: MakeWorkspace) -> None:
    """Verify that a nested namespace must be named after its parent."""
    compounds = [
        _namespace("namespacens", "ns", "namespacens_1_1inner"),
        _namespace("namespacens_1_1inner", "other::inner"),
    ]
    with pytest.raises(PrefixMismatchError) as excinfo:
        make_workspace(compounds)
    assert excinfo.value.child_id == "namespacens_1_1inner"
    assert excinfo.value.parent_id == "namespacens"
    assert excinfo.value.separator == "::"


def test_cycle_is_fatal(make_workspace: MakeWorkspace) -> None:
    """Verify that namespaces nesting each other are rejected."""
    compounds = [
        _namespace("namespacea", "a", "namespaceb"),
        _namespace("namespaceb", "b", "namespacea"),
    ]
    with pytest.raises(HierarchyCycleError) as excinfo:
        make_workspace(compounds)
    assert set(excinfo.value.ids) == {"namespacea", "namespaceb"}


def test_second_parent_is_fatal(make_workspace: MakeWorkspace) -> None:
    """Verify that a compound cannot be nested in two parents."""
    compounds = [
        _namespace("namespacea", "a", "namespacec"),
        _namespace("namespaceb", "b", "namespacec"),
        _namespace("namespacec", "a::c"),
    ]
    with pytest.raises(DuplicateParentError) as excinfo:
        make_workspace(compounds)
    assert excinfo.value.child_id == "namespacec"


def test_nested_namespaces(make_workspace: MakeWorkspace) -> None:
    """Verify names, depths, parents and permalinks of nested namespaces."""
    workspace = make_workspace(
        [
            _namespace("namespaceouter", "outer", "namespaceouter_1_1inner"),
            _namespace("namespaceouter_1_1inner", "outer::inner"),
        ]
    )
    namespaces = workspace.collections["namespaces"]
    outer = namespaces.get("namespaceouter")
    inner = namespaces.get("namespaceouter_1_1inner")
    assert namespaces.parent_of(inner) is outer
    assert namespaces.children_of(outer) == [inner]
    assert namespaces.top_level() == [outer]
    assert inner.unqualified_name == "inner"
    assert inner.depth == 1
    assert inner.permalink == "namespaces/outer/inner"


def test_every_parent_is_in_the_same_collection(
    make_workspace: MakeWorkspace,
) -> None:
    """Verify that parent ids always resolve within the owning collection."""
    workspace = make_workspace(widget_compounds())
    for collection in workspace.collections.values():
        for item in collection:
            if item.parent_id is not None:
                assert item.parent_id in collection


def test_anonymous_namespace(make_workspace: MakeWorkspace) -> None:
    """Verify the label and permalink of an anonymous namespace."""
    workspace = make_workspace(
        [_namespace("namespace_0d0", "anonymous_namespace{widget.cpp}")]
    )
    anonymous = workspace.collections["namespaces"].get("namespace_0d0")
    assert isinstance(anonymous, Namespace)
    assert anonymous.is_anonymous
    assert anonymous.label == "anonymous"
    assert anonymous.permalink == "namespaces/anonymous-widget-cpp"


def test_template_specializations_get_distinct_permalinks(
    make_workspace: MakeWorkspace,
) -> None:
    """Verify that Box<int> and Box<float> do not collide."""
    workspace = make_workspace(
        [
            compound("class_box_3_01int_01_4", "class", "Box< int >"),
            compound("class_box_3_01float_01_4", "class", "Box< float >"),
        ]
    )
    classes = workspace.collections["classes"]
    int_box = classes.get("class_box_3_01int_01_4")
    float_box = classes.get("class_box_3_01float_01_4")
    assert int_box.permalink == "classes/box-int"
    assert float_box.permalink == "classes/box-float"
    assert int_box.label == "Box< int >"


def test_struct_bucket(make_workspace: MakeWorkspace) -> None:
    """Verify that structs get their own permalink prefix."""
    workspace = make_workspace([compound("structpoint", "struct", "Point")])
    point = workspace.collections["classes"].get("structpoint")
    assert point.permalink == "structs/point"
    assert point.page_title == "Point Struct Reference"


def test_folders_and_files(make_workspace: MakeWorkspace) -> None:
    """Verify relative paths of folders and the files they list."""
    workspace = make_workspace(
        [
            compound(
                "dir_src",
                "dir",
                "src",
                '<innerdir refid="dir_core">src/core</innerdir>'
                '<innerfile refid="widget_8h">widget.h</innerfile>',
            ),
            compound(
                "dir_core",
                "dir",
                "src/core",
                '<innerfile refid="core_8h">core.h</innerfile>',
            ),
            compound("widget_8h", "file", "widget.h"),
            compound("core_8h", "file", "core.h"),
            compound("main_8cpp", "file", "main.cpp"),
        ]
    )
    folders = workspace.collections["folders"]
    files = workspace.collections["files"]
    core = folders.get("dir_core")
    assert isinstance(core, Folder)
    assert core.label == "core"
    assert core.relative_path == "src/core"
    assert core.permalink == "folders/src/core"
    header = files.get("core_8h")
    assert isinstance(header, File)
    assert header.folder_id == "dir_core"
    assert header.parent_id is None
    assert header.permalink == "files/src/core/core-h"
    assert files.get("widget_8h").permalink == "files/src/widget-h"
    assert files.get("main_8cpp").folder_id is None
    assert files.get("main_8cpp").permalink == "files/main-cpp"


def test_groups_keep_document_order(make_workspace: MakeWorkspace) -> None:
    """Verify that sub-groups keep their declared order and titles are labels."""
    workspace = make_workspace(
        [
            compound(
                "group__top",
                "group",
                "top",
                "<title>Top level.</title>"
                '<innergroup refid="group__zeta">zeta</innergroup>'
                '<innergroup refid="group__alpha">alpha</innergroup>',
            ),
            compound("group__zeta", "group", "zeta", "<title>Zeta</title>"),
            compound("group__alpha", "group", "alpha", "<title>Alpha</title>"),
        ]
    )
    groups = workspace.collections["groups"]
    top = groups.get("group__top")
    assert top.label == "Top level"
    assert [g.id for g in groups.children_of(top)] == ["group__zeta", "group__alpha"]
    assert workspace.collections["groups"].label == "Topics"


def test_unrendered_kind_is_skipped(
    make_workspace: MakeWorkspace, diagnostics: Diagnostics
) -> None:
    """Verify that compounds of unsupported kinds are noted and left out."""
    workspace = make_workspace([compound("conceptsortable", "concept", "Sortable")])
    assert "conceptsortable" not in workspace.compounds_by_id
    assert "conceptsortable" in workspace.skipped_ids
    assert any("concept" in d.message for d in diagnostics.entries)


def test_missing_compound_lookup(make_workspace: MakeWorkspace) -> None:
    """Verify that collection lookups raise a typed error."""
    workspace = make_workspace([])
    with pytest.raises(CompoundNotFoundError, match="nothing"):
        workspace.collections["classes"].get("nothing")
