"""Component-level views over the file dependency graph."""

from __future__ import annotations

from typing import Dict, List, Tuple

from ..models import Component, Dependency, Edge, Project


def _sorted_dependencies(buckets: Dict[Component, List[Edge]]) -> List[Dependency]:
    ordered = sorted(buckets.items(), key=lambda item: item[0].path)
    return [Dependency(component=component, edges=edges) for component, edges in ordered]


def linked_components(component: Component) -> Tuple[List[Dependency], List[Dependency]]:
    """Return `(incoming, outgoing)` dependencies of `component`, sorted by path.

    Incoming buckets hold edges from another component into this one, outgoing
    buckets the reverse. Edges between two files of the same component are not
    reported.
    """
    incoming: Dict[Component, List[Edge]] = {}
    outgoing: Dict[Component, List[Edge]] = {}
    for source in component.files:
        for linked in source.incoming:
            if linked.component is not component:
                incoming.setdefault(linked.component, []).append(Edge(linked, source))
        for linked in source.outgoing:
            if linked.component is not component:
                outgoing.setdefault(linked.component, []).append(Edge(source, linked))
    return _sorted_dependencies(incoming), _sorted_dependencies(outgoing)


def edge_set(project: Project) -> List[Tuple[str, str]]:
    """Every file edge of `project` as sorted `(source, target)` path pairs."""
    pairs = [
        (source.path, target.path) for source in project.files for target in source.outgoing
    ]
    return sorted(pairs)


__all__ = ["edge_set", "linked_components"]
