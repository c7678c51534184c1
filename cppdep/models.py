"""Core data models shared across cppdep components."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

ROOT_COMPONENT_PATH = ""


@dataclass(eq=False)
class SourceFile:
    """A compilation unit and its resolved include links."""

    path: str
    includes: List[str] = field(default_factory=list)
    component: Optional["Component"] = field(default=None, repr=False)
    incoming: List["SourceFile"] = field(default_factory=list, repr=False)
    outgoing: List["SourceFile"] = field(default_factory=list, repr=False)

    def link_to(self, target: "SourceFile") -> None:
        """Record `self -> target` on both ends."""
        self.outgoing.append(target)
        target.incoming.append(self)

    def clear_links(self) -> None:
        self.incoming.clear()
        self.outgoing.clear()


@dataclass(eq=False)
class Component:
    """A directory subtree rooted at a marker file."""

    path: str
    files: List[SourceFile] = field(default_factory=list, repr=False)

    @property
    def nice_name(self) -> str:
        return "." if self.path == ROOT_COMPONENT_PATH else self.path

    @property
    def is_root(self) -> bool:
        return self.path == ROOT_COMPONENT_PATH


@dataclass(frozen=True)
class Edge:
    """Resolved include: `source` includes `target`."""

    source: SourceFile
    target: SourceFile

    def as_pair(self) -> tuple[str, str]:
        return (self.source.path, self.target.path)


@dataclass
class Dependency:
    """Edges connecting a component to one other component. Computed on demand."""

    component: Component
    edges: List[Edge] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.edges)


@dataclass(frozen=True)
class FileRecord:
    """Discovered source file as handed over by the scanner."""

    path: str
    includes: tuple[str, ...] = ()


@dataclass
class ScanResult:
    """Normalized view of a source tree: files and component roots, in discovery order."""

    root: str
    files: List[FileRecord]
    component_paths: List[str]


class Project:
    """Owns every file and component discovered under one root directory."""

    def __init__(self, root: str, files: Iterable[SourceFile], component_paths: Iterable[str]) -> None:
        self.root = root
        self.files: List[SourceFile] = list(files)
        self.components: List[Component] = []
        self._components_by_path: Dict[str, Component] = {}
        for path in component_paths:
            if path in self._components_by_path:
                continue
            component = Component(path=path)
            self.components.append(component)
            self._components_by_path[path] = component
        if ROOT_COMPONENT_PATH not in self._components_by_path:
            root_component = Component(path=ROOT_COMPONENT_PATH)
            self.components.insert(0, root_component)
            self._components_by_path[ROOT_COMPONENT_PATH] = root_component

    @classmethod
    def from_scan(cls, scan: ScanResult) -> "Project":
        files = [SourceFile(path=record.path, includes=list(record.includes)) for record in scan.files]
        return cls(scan.root, files, scan.component_paths)

    def component(self, path: str) -> Optional[Component]:
        """Return the component rooted exactly at `path`, if any."""
        return self._components_by_path.get(path)

    def find_file(self, path: str) -> Optional[SourceFile]:
        for source in self.files:
            if source.path == path:
                return source
        return None

    def component_named(self, nice_name: str) -> Optional[Component]:
        path = ROOT_COMPONENT_PATH if nice_name == "." else nice_name
        return self.component(path)


__all__ = [
    "Component",
    "Dependency",
    "Edge",
    "FileRecord",
    "Project",
    "ROOT_COMPONENT_PATH",
    "ScanResult",
    "SourceFile",
]
