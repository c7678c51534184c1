"""Source tree discovery: component markers, source files and their raw includes."""

from __future__ import annotations

import os
from dataclasses import dataclass
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Iterator, List, Sequence

from .config import CppDepConfig, DEFAULT_EXCLUDES, DEFAULT_MARKERS, DEFAULT_SUFFIXES
from .diagnostics import DiagnosticLog, ScanError
from .includes import extract_includes
from .logging import get_logger
from .models import FileRecord, ScanResult


@dataclass
class IgnoreRule:
    """Represents an ignore rule parsed from .gitignore or .cppdep.yml."""

    pattern: str
    directory_only: bool
    anchored: bool
    negate: bool
    has_slash: bool

    def matches(self, rel_path: str, is_dir: bool) -> bool:
        if not self.pattern:
            return False
        if self.directory_only and not is_dir:
            return False

        if self.anchored or self.has_slash:
            if fnmatchcase(rel_path, self.pattern):
                return True
            if self.directory_only and rel_path.startswith(f"{self.pattern}/"):
                return True
            return False

        return any(fnmatchcase(part, self.pattern) for part in rel_path.split("/"))


def build_ignore_rule(pattern: str, negate: bool = False) -> IgnoreRule | None:
    pattern = pattern.strip()
    if not pattern:
        return None

    directory_only = pattern.endswith("/")
    if directory_only:
        pattern = pattern[:-1]

    anchored = pattern.startswith("/")
    if anchored:
        pattern = pattern[1:]

    return IgnoreRule(
        pattern=pattern,
        directory_only=directory_only,
        anchored=anchored,
        negate=negate,
        has_slash="/" in pattern,
    )


def parse_gitignore(path: Path) -> List[IgnoreRule]:
    if not path.exists():
        return []

    rules: List[IgnoreRule] = []
    for raw_line in path.read_text(encoding="utf-8", errors="replace").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        negate = line.startswith("!")
        if negate:
            line = line[1:]
        rule = build_ignore_rule(line, negate=negate)
        if rule is not None:
            rules.append(rule)
    return rules


def should_ignore(rel_path: str, is_dir: bool, rules: Sequence[IgnoreRule]) -> bool:
    ignored = False
    for rule in rules:
        if rule.matches(rel_path, is_dir):
            ignored = not rule.negate
    return ignored


class TreeScanner:
    """Walks a source tree and hands the core an ordered file and component list."""

    def __init__(
        self,
        *,
        suffixes: Sequence[str] = DEFAULT_SUFFIXES,
        markers: Sequence[str] = DEFAULT_MARKERS,
        exclude_paths: Sequence[str] = DEFAULT_EXCLUDES,
        diagnostics: DiagnosticLog | None = None,
    ) -> None:
        self.suffixes = tuple(suffixes)
        self.markers = frozenset(markers)
        self.exclude_paths = list(exclude_paths)
        self.diagnostics = diagnostics if diagnostics is not None else DiagnosticLog()
        self.logger = get_logger("scanner")

    @classmethod
    def from_config(cls, config: CppDepConfig, diagnostics: DiagnosticLog | None = None) -> "TreeScanner":
        return cls(
            suffixes=config.sources.suffixes,
            markers=config.sources.markers,
            exclude_paths=config.exclude_paths,
            diagnostics=diagnostics,
        )

    def scan(self, root: str | Path) -> ScanResult:
        """Return every source file and component root below `root`."""
        root_path = Path(root).expanduser().resolve()
        if not root_path.exists():
            raise FileNotFoundError(f"Source tree not found: {root}")
        if not root_path.is_dir():
            raise NotADirectoryError(f"Source tree path is not a directory: {root}")

        rules = self._load_ignore_rules(root_path)
        files: List[FileRecord] = []
        component_paths: List[str] = []

        for rel_path in self._walk(root_path, rules):
            directory, _, filename = rel_path.rpartition("/")
            if filename in self.markers:
                component_paths.append(directory)
            if filename.endswith(self.suffixes):
                includes = self._read_includes(root_path / rel_path, rel_path)
                files.append(FileRecord(path=rel_path, includes=tuple(includes)))

        self.logger.debug(
            "Discovered %d source files and %d components under %s",
            len(files),
            len(component_paths),
            root_path,
        )
        return ScanResult(root=str(root_path), files=files, component_paths=component_paths)

    def _load_ignore_rules(self, root: Path) -> List[IgnoreRule]:
        try:
            rules = parse_gitignore(root / ".gitignore")
        except OSError as exc:
            raise ScanError(f"Failed to read {root / '.gitignore'}: {exc}") from exc
        for pattern in self.exclude_paths:
            rule = build_ignore_rule(pattern)
            if rule is not None:
                rules.append(rule)
        return rules

    def _walk(self, root: Path, rules: Sequence[IgnoreRule]) -> Iterator[str]:
        """Yield root-relative file paths in one lexical sequence.

        Files and subdirectories of a directory are ordered together by name,
        and a subdirectory is descended into at its own position, so
        ``Apps/x.cpp`` comes before ``a/b.cpp``, which comes before ``z.cpp``.
        """
        yield from self._walk_directory(root, "", rules)

    def _walk_directory(
        self, directory: Path, rel_dir: str, rules: Sequence[IgnoreRule]
    ) -> Iterator[str]:
        try:
            with os.scandir(directory) as iterator:
                entries = sorted(iterator, key=lambda entry: entry.name)
        except OSError as exc:
            raise ScanError(f"Failed to walk {rel_dir or directory}: {exc}") from exc

        for entry in entries:
            rel_path = f"{rel_dir}/{entry.name}" if rel_dir else entry.name
            is_dir = entry.is_dir(follow_symlinks=False)
            if should_ignore(rel_path, is_dir, rules):
                self.logger.debug("Skipping %s", rel_path)
                continue
            if is_dir:
                yield from self._walk_directory(Path(entry.path), rel_path, rules)
            else:
                yield rel_path

    def _read_includes(self, path: Path, rel_path: str) -> List[str]:
        try:
            with path.open("r", encoding="utf-8", errors="replace") as handle:
                return extract_includes(handle, rel_path, self.diagnostics)
        except OSError as exc:
            raise ScanError(f"Failed to read {rel_path}: {exc}") from exc


__all__ = ["IgnoreRule", "TreeScanner", "build_ignore_rule", "parse_gitignore", "should_ignore"]
