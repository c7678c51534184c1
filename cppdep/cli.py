"""CLI entrypoint for cppdep."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import REPORT_FORMATS, ConfigError, CppDepConfig, load_config, load_root_config
from .diagnostics import AssignmentError, ScanError
from .logging import configure_logging
from .pipeline import DependencyPipeline
from .report import ReportOptions, ReportRenderer


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cppdep",
        description=(
            "Extract component dependencies from a C/C++ source tree. "
            "Components are directories holding a CMakeLists.txt."
        ),
    )
    parser.add_argument(
        "components",
        nargs="*",
        metavar="COMPONENT",
        help="Only report these components ('.' is the root component).",
    )
    parser.add_argument(
        "--root",
        default=".",
        help="Root directory of the project (defaults to current directory).",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Configuration file (defaults to <root>/.cppdep.yml).",
    )
    parser.add_argument(
        "--warn-missing",
        action="store_true",
        default=None,
        help="Warn about includes that match no file in the tree.",
    )
    parser.add_argument(
        "--warn-malformed",
        action="store_true",
        default=None,
        help="Warn about include directives that cannot be extracted.",
    )
    parser.add_argument(
        "--show-incoming",
        action="store_true",
        default=None,
        help="List the file edges behind each incoming dependency.",
    )
    parser.add_argument(
        "--show-outgoing",
        action="store_true",
        default=None,
        help="List the file edges behind each outgoing dependency.",
    )
    parser.add_argument(
        "--format",
        choices=REPORT_FORMATS,
        default=None,
        help="Report format (defaults to text).",
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Increase log verbosity for troubleshooting.",
    )
    verbosity.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Only log warnings and errors.",
    )
    return parser


def _apply_overrides(config: CppDepConfig, args: argparse.Namespace) -> CppDepConfig:
    if args.warn_missing is not None:
        config.diagnostics.warn_missing = args.warn_missing
    if args.warn_malformed is not None:
        config.diagnostics.warn_malformed = args.warn_malformed
    if args.show_incoming is not None:
        config.report.show_incoming = args.show_incoming
    if args.show_outgoing is not None:
        config.report.show_outgoing = args.show_outgoing
    if args.format is not None:
        config.report.format = args.format
    if args.components:
        config.report.components = list(args.components)
    return config


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for cppdep."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    logger = configure_logging(verbose=bool(args.verbose), quiet=bool(args.quiet))

    root = Path(args.root).expanduser()
    try:
        config = load_config(args.config) if args.config is not None else load_root_config(root)
    except ConfigError as exc:
        parser.exit(1, f"cppdep: invalid configuration: {exc}\n")
    config = _apply_overrides(config, args)

    try:
        result = DependencyPipeline(config).run(root)
    except (FileNotFoundError, NotADirectoryError) as exc:
        parser.exit(1, f"{exc}\n")
    except ScanError as exc:
        parser.exit(1, f"cppdep: error reading source tree: {exc}\n")
    except AssignmentError as exc:
        logger.exception("Component assignment failed")
        parser.exit(2, f"cppdep: internal error: {exc}\n")

    options = ReportOptions.from_config(config.report)
    sys.stdout.write(ReportRenderer().render(result.project, options, fmt=config.report.format))


if __name__ == "__main__":
    main(sys.argv[1:])
