"""Pipeline orchestration: scan, assign components, resolve includes."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .config import CppDepConfig, load_root_config
from .diagnostics import DiagnosticLog
from .graph import IncludeResolver, ResolutionStats, assign_files_to_components
from .logging import get_logger
from .models import Project, ScanResult
from .scanner import TreeScanner


@dataclass
class PipelineResult:
    """Outcome of one analysis run."""

    project: Project
    diagnostics: DiagnosticLog
    stats: ResolutionStats


class DependencyPipeline:
    """Coordinates discovery and the two population passes for one root."""

    def __init__(self, config: CppDepConfig | None = None) -> None:
        self.config = config
        self.logger = get_logger("pipeline")

    def run(self, root: str | Path | None = None) -> PipelineResult:
        """Analyze the tree under `root` (or the configured root)."""
        config = self._resolve_config(root)
        root_path = Path(root).expanduser().resolve() if root is not None else config.root
        self.logger.info("Analyzing %s", root_path)

        diagnostics = DiagnosticLog(config.diagnostics)
        scan = TreeScanner.from_config(config, diagnostics).scan(root_path)
        return self.analyze(scan, diagnostics)

    def analyze(self, scan: ScanResult, diagnostics: DiagnosticLog | None = None) -> PipelineResult:
        """Run assignment and resolution over an already discovered tree."""
        if diagnostics is None:
            config = self.config
            diagnostics = DiagnosticLog(config.diagnostics if config is not None else None)
        project = Project.from_scan(scan)
        assign_files_to_components(project)
        stats = IncludeResolver(diagnostics).resolve(project)
        self.logger.info(
            "Found %d files in %d components with %d include edges",
            len(project.files),
            len(project.components),
            stats.edges,
        )
        return PipelineResult(project=project, diagnostics=diagnostics, stats=stats)

    def _resolve_config(self, root: str | Path | None) -> CppDepConfig:
        if self.config is not None:
            return self.config
        if root is None:
            raise ValueError("A root directory is required when no configuration is given")
        self.config = load_root_config(Path(root))
        return self.config


__all__ = ["DependencyPipeline", "PipelineResult"]
