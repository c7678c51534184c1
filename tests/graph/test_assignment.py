"""Tests for cppdep.graph.assignment."""

from __future__ import annotations

from types import SimpleNamespace

import pytest

from cppdep.diagnostics import AssignmentError
from cppdep.graph.assignment import ancestor_directories, assign_files_to_components, find_owner
from cppdep.models import Project, SourceFile
from tests._fixtures.tree_builder import scan_result


def _project(paths, components) -> Project:
    return Project.from_scan(scan_result({path: [] for path in paths}, components))


def test_ancestor_directories_are_deepest_first() -> None:
    assert list(ancestor_directories("a/b/c.h")) == ["a/b", "a", ""]
    assert list(ancestor_directories("main.cpp")) == [""]


def test_longest_prefix_wins() -> None:
    project = _project(["a/b/c/d.h"], ["", "a", "a/b"])

    assign_files_to_components(project)

    assert project.files[0].component is project.component("a/b")


def test_every_file_lands_in_exactly_one_component() -> None:
    project = _project(
        ["main.cpp", "lib/api.h", "lib/detail/impl.cpp", "tools/gen.c", "libfoo/x.h"],
        ["", "lib"],
    )

    assign_files_to_components(project)

    for source in project.files:
        assert source.component is not None
        owners = [component for component in project.components if source in component.files]
        assert owners == [source.component]

    assert project.find_file("lib/detail/impl.cpp").component.path == "lib"
    assert project.find_file("tools/gen.c").component.path == ""
    # "libfoo" shares a string prefix with "lib" but not a path segment.
    assert project.find_file("libfoo/x.h").component.path == ""


def test_root_component_is_synthesised_when_no_root_marker() -> None:
    project = _project(["src/a.cpp", "orphan.cpp"], ["src"])

    assign_files_to_components(project)

    assert project.components[0].path == ""
    assert project.components[0].nice_name == "."
    assert [source.path for source in project.component("").files] == ["orphan.cpp"]


def test_component_files_keep_discovery_order() -> None:
    project = _project(["lib/b.h", "lib/a.h", "lib/sub/c.h"], ["", "lib"])

    assign_files_to_components(project)

    assert [source.path for source in project.component("lib").files] == [
        "lib/b.h",
        "lib/a.h",
        "lib/sub/c.h",
    ]


def test_assignment_is_repeatable() -> None:
    project = _project(["a/x.h", "b/y.h"], ["", "a"])

    assign_files_to_components(project)
    first = {component.path: [f.path for f in component.files] for component in project.components}
    assign_files_to_components(project)
    second = {component.path: [f.path for f in component.files] for component in project.components}

    assert first == second


def test_unmatched_file_raises() -> None:
    lookup = SimpleNamespace(component=lambda path: None)

    with pytest.raises(AssignmentError):
        find_owner(lookup, SourceFile(path="a/b.h"))
