"""Advisory include diagnostics and the errors that abort a run."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List

from .config import DiagnosticsConfig
from .logging import get_logger


class ScanError(RuntimeError):
    """Raised when the source tree cannot be read; no partial graph is produced."""


class AssignmentError(RuntimeError):
    """Raised when a file matches no component. Indicates a bug, not bad input."""


class DiagnosticKind(str, Enum):
    MISSING_INCLUDE = "missing-include"
    MALFORMED_INCLUDE = "malformed-include"


@dataclass(frozen=True)
class Diagnostic:
    """A non-fatal finding keyed by the originating file and the raw text."""

    kind: DiagnosticKind
    path: str
    raw: str

    def describe(self) -> str:
        if self.kind is DiagnosticKind.MISSING_INCLUDE:
            return f"Include not found in {self.path}: {self.raw}"
        return f"Malformed #include in {self.path}: {self.raw}"


class DiagnosticLog:
    """Collects diagnostics for the classes enabled in configuration.

    Events of a disabled class are dropped on the floor: they are neither
    stored nor logged. Enabled events are kept in arrival order and echoed as
    warnings on the ``cppdep.diagnostics`` logger.
    """

    def __init__(self, config: DiagnosticsConfig | None = None) -> None:
        self.config = config or DiagnosticsConfig()
        self.events: List[Diagnostic] = []
        self.logger = get_logger("diagnostics")

    def enabled(self, kind: DiagnosticKind) -> bool:
        if kind is DiagnosticKind.MISSING_INCLUDE:
            return self.config.warn_missing
        return self.config.warn_malformed

    def report(self, kind: DiagnosticKind, path: str, raw: str) -> None:
        if not self.enabled(kind):
            return
        diagnostic = Diagnostic(kind=kind, path=path, raw=raw)
        self.events.append(diagnostic)
        self.logger.warning(diagnostic.describe())

    def missing(self, path: str, raw: str) -> None:
        self.report(DiagnosticKind.MISSING_INCLUDE, path, raw)

    def malformed(self, path: str, raw: str) -> None:
        self.report(DiagnosticKind.MALFORMED_INCLUDE, path, raw)

    def of_kind(self, kind: DiagnosticKind) -> List[Diagnostic]:
        return [event for event in self.events if event.kind is kind]


__all__ = [
    "AssignmentError",
    "Diagnostic",
    "DiagnosticKind",
    "DiagnosticLog",
    "ScanError",
]
