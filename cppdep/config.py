"""Configuration loading for cppdep (.cppdep.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

CONFIG_FILENAME = ".cppdep.yml"

DEFAULT_SUFFIXES = (".cpp", ".hpp", ".c", ".h")
DEFAULT_MARKERS = ("CMakeLists.txt",)
DEFAULT_EXCLUDES = (".git", ".hg", ".svn", ".idea", ".vs", ".vscode", "dev/tools")
REPORT_FORMATS = ("text", "json")


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class SourcesConfig:
    """Which files count as compilation units and which mark a component root."""

    suffixes: List[str] = field(default_factory=lambda: list(DEFAULT_SUFFIXES))
    markers: List[str] = field(default_factory=lambda: list(DEFAULT_MARKERS))


@dataclass
class DiagnosticsConfig:
    """Toggles for the advisory diagnostic classes."""

    warn_missing: bool = False
    warn_malformed: bool = False


@dataclass
class ReportConfig:
    """Report detail and component filter."""

    show_incoming: bool = False
    show_outgoing: bool = False
    components: List[str] = field(default_factory=list)
    format: str = "text"


@dataclass
class CppDepConfig:
    """Represents the settings defined in .cppdep.yml."""

    root: Path
    sources: SourcesConfig = field(default_factory=SourcesConfig)
    diagnostics: DiagnosticsConfig = field(default_factory=DiagnosticsConfig)
    report: ReportConfig = field(default_factory=ReportConfig)
    exclude_paths: List[str] = field(default_factory=lambda: list(DEFAULT_EXCLUDES))


def load_config(config_path: Path) -> CppDepConfig:
    """Load configuration from disk, falling back to defaults when absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return CppDepConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{config_file.name} must contain a mapping at the root")

    sources = SourcesConfig()
    sources_data = _as_dict(data.get("sources"))
    if "suffixes" in sources_data:
        sources.suffixes = [_normalise_suffix(item) for item in _as_str_list(sources_data["suffixes"])]
        if not sources.suffixes:
            raise ConfigError("sources.suffixes must list at least one suffix")
    if "markers" in sources_data:
        sources.markers = _as_str_list(sources_data["markers"])
        if not sources.markers:
            raise ConfigError("sources.markers must list at least one marker file")

    diagnostics = DiagnosticsConfig()
    diagnostics_data = _as_dict(data.get("diagnostics"))
    if diagnostics_data:
        diagnostics.warn_missing = _as_bool(diagnostics_data.get("missing")) or False
        diagnostics.warn_malformed = _as_bool(diagnostics_data.get("malformed")) or False

    report = ReportConfig()
    report_data = _as_dict(data.get("report"))
    if report_data:
        report.show_incoming = _as_bool(report_data.get("show_incoming")) or False
        report.show_outgoing = _as_bool(report_data.get("show_outgoing")) or False
        report.components = _as_str_list(report_data.get("components"))
        report_format = _as_str(report_data.get("format"))
        if report_format is not None:
            report.format = _validate_format(report_format)

    config = CppDepConfig(
        root=root,
        sources=sources,
        diagnostics=diagnostics,
        report=report,
    )
    if "exclude_paths" in data:
        config.exclude_paths = _as_str_list(data.get("exclude_paths"))
    return config


def load_root_config(root: Path) -> CppDepConfig:
    """Load `<root>/.cppdep.yml`, or defaults when `root` is not a directory.

    A missing or non-directory root is left for the scanner to reject, so the
    user sees that error instead of a YAML error about some other file.
    """
    root = root.expanduser()
    if not root.is_dir():
        return CppDepConfig(root=root.resolve())
    return load_config(root)


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read {path}: {exc}") from exc
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _validate_format(value: str) -> str:
    lowered = value.strip().lower()
    if lowered not in REPORT_FORMATS:
        choices = ", ".join(REPORT_FORMATS)
        raise ConfigError(f"report.format must be one of {choices}, got '{value}'")
    return lowered


def _normalise_suffix(value: str) -> str:
    value = value.strip()
    return value if value.startswith(".") else f".{value}"


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []


__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "CppDepConfig",
    "DiagnosticsConfig",
    "ReportConfig",
    "SourcesConfig",
    "load_config",
    "load_root_config",
]
