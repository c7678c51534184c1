"""Resolution of raw include strings into cross-component file edges."""

from __future__ import annotations

from dataclasses import dataclass

from ..diagnostics import DiagnosticLog
from ..logging import get_logger
from ..models import Project, SourceFile
from .index import FileIndex


@dataclass
class ResolutionStats:
    """Counters for one resolution pass, used for logging."""

    includes: int = 0
    missing: int = 0
    local: int = 0
    edges: int = 0


class IncludeResolver:
    """Turns each file's include strings into outgoing/incoming links.

    Policy for an include ``s`` written in file ``f``:

    * ``s`` is not a suffix of any known file: report it as missing.
    * any candidate lives in ``f``'s own component: assume the local file is
      the one the compiler picks and record nothing.
    * otherwise link ``f`` to every candidate. Name clashes across unrelated
      components over-approximate rather than drop a dependency.

    Only cross-component structure is recorded; intra-component includes never
    produce edges.
    """

    def __init__(self, diagnostics: DiagnosticLog | None = None) -> None:
        self.diagnostics = diagnostics if diagnostics is not None else DiagnosticLog()
        self.logger = get_logger("graph.resolver")

    def resolve(self, project: Project, index: FileIndex | None = None) -> ResolutionStats:
        """Populate the edge lists of every file in `project`.

        Components must already be assigned. Existing edges are discarded
        first so the pass can be repeated.
        """
        for source in project.files:
            if source.component is None:
                raise ValueError(f"{source.path} has no component; assign components first")
            source.clear_links()

        index = index if index is not None else FileIndex.build(project.files)
        stats = ResolutionStats()
        for source in project.files:
            for include in source.includes:
                stats.includes += 1
                self._resolve_one(source, include, index, stats)

        self.logger.debug(
            "Resolved %d includes: %d edges, %d local, %d missing",
            stats.includes,
            stats.edges,
            stats.local,
            stats.missing,
        )
        return stats

    def _resolve_one(
        self, source: SourceFile, include: str, index: FileIndex, stats: ResolutionStats
    ) -> None:
        candidates = index.lookup(include)
        if not candidates:
            stats.missing += 1
            self.diagnostics.missing(source.path, include)
            return
        if any(candidate.component is source.component for candidate in candidates):
            stats.local += 1
            return
        for candidate in candidates:
            source.link_to(candidate)
            stats.edges += 1


def resolve_file_dependencies(
    project: Project, diagnostics: DiagnosticLog | None = None
) -> ResolutionStats:
    """Build the file index for `project` and resolve every include."""
    return IncludeResolver(diagnostics).resolve(project)


__all__ = ["IncludeResolver", "ResolutionStats", "resolve_file_dependencies"]
