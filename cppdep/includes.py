"""Extraction of raw `#include` strings from source text."""

from __future__ import annotations

from typing import Iterable, List

from .diagnostics import DiagnosticLog

INCLUDE_DIRECTIVE = "#include"
_OPENING = '"<'
_CLOSING = '">'
# Only forward-slash, downward paths can be matched against the file index.
_REJECTED_TOKENS = ("\\", "..")


def _find_first(line: str, chars: str) -> int:
    positions = [line.find(char) for char in chars]
    found = [pos for pos in positions if pos != -1]
    return min(found) if found else -1


def _find_last(line: str, chars: str) -> int:
    return max(line.rfind(char) for char in chars)


def extract_include(line: str) -> str | None:
    """Return the text between the outermost delimiters, or None if they are unusable."""
    start = _find_first(line, _OPENING)
    end = _find_last(line, _CLOSING)
    if start == -1 or end == -1 or start >= end:
        return None
    return line[start + 1 : end]


def is_acceptable(include: str) -> bool:
    return not any(token in include for token in _REJECTED_TOKENS)


def extract_includes(
    lines: Iterable[str], path: str, diagnostics: DiagnosticLog | None = None
) -> List[str]:
    """Collect the include strings of one file in line order.

    Lines are matched on a literal ``#include`` prefix. A directive whose
    delimiters are missing or inverted is reported with the whole line; a
    string containing a backslash or a parent-directory token is reported with
    the string itself. Either way nothing is returned for it.
    """
    results: List[str] = []
    for raw_line in lines:
        line = raw_line.rstrip("\r\n")
        if not line.startswith(INCLUDE_DIRECTIVE):
            continue
        include = extract_include(line)
        if include is None:
            if diagnostics is not None:
                diagnostics.malformed(path, line)
            continue
        if not is_acceptable(include):
            if diagnostics is not None:
                diagnostics.malformed(path, include)
            continue
        results.append(include)
    return results


__all__ = ["INCLUDE_DIRECTIVE", "extract_include", "extract_includes", "is_acceptable"]
