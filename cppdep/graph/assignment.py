"""Assignment of files to their most specific enclosing component."""

from __future__ import annotations

from typing import Iterator

from ..diagnostics import AssignmentError
from ..logging import get_logger
from ..models import Component, Project, ROOT_COMPONENT_PATH, SourceFile

_LOGGER = get_logger("graph.assignment")


def ancestor_directories(path: str) -> Iterator[str]:
    """Yield the strict ancestors of `path`, deepest first, ending with the root."""
    while True:
        index = path.rfind("/")
        if index == -1:
            yield ROOT_COMPONENT_PATH
            return
        path = path[:index]
        yield path


def find_owner(project: Project, source: SourceFile) -> Component:
    for candidate in ancestor_directories(source.path):
        component = project.component(candidate)
        if component is not None:
            return component
    raise AssignmentError(f"No component encloses {source.path!r}")


def assign_files_to_components(project: Project) -> None:
    """Give every file of `project` exactly one owning component.

    Membership is rebuilt from scratch, so calling this again on the same
    project yields the same grouping.
    """
    for component in project.components:
        component.files.clear()
    for source in project.files:
        source.component = None

    for source in project.files:
        owner = find_owner(project, source)
        source.component = owner
        owner.files.append(source)

    _LOGGER.debug(
        "Assigned %d files to %d components", len(project.files), len(project.components)
    )


__all__ = ["ancestor_directories", "assign_files_to_components", "find_owner"]
