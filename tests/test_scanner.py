"""Tests for cppdep.scanner."""

from __future__ import annotations

from pathlib import Path

import pytest

from cppdep import scanner as scanner_module
from cppdep.config import DiagnosticsConfig
from cppdep.diagnostics import DiagnosticLog, ScanError
from cppdep.scanner import TreeScanner
from tests._fixtures.tree_builder import TreeBuilder


def test_scan_finds_components_and_sources(tree_builder: TreeBuilder) -> None:
    tree_builder.components("", "lib", "lib/net")
    tree_builder.write(
        {
            "main.cpp": '#include "lib/api.h"\n#include <vector>\n',
            "lib/api.h": "#pragma once\n",
            "lib/net/socket.hpp": '#include "api.h"\n',
            "lib/README.md": "# not a source file\n",
            "tools/gen.c": "",
        }
    )

    result = tree_builder.scan()

    assert result.root == str(tree_builder.path().resolve())
    assert result.component_paths == ["", "lib", "lib/net"]
    records = {record.path: record for record in result.files}
    assert sorted(records) == ["lib/api.h", "lib/net/socket.hpp", "main.cpp", "tools/gen.c"]
    assert records["main.cpp"].includes == ("lib/api.h", "vector")
    assert records["lib/net/socket.hpp"].includes == ("api.h",)


def test_scan_order_is_deterministic(tree_builder: TreeBuilder) -> None:
    tree_builder.write({"b/z.h": "", "b/a.h": "", "a/m.c": "", "top.cpp": ""})

    result = tree_builder.scan()

    assert [record.path for record in result.files] == ["a/m.c", "b/a.h", "b/z.h", "top.cpp"]


def test_scan_interleaves_files_and_directories_by_name(tree_builder: TreeBuilder) -> None:
    tree_builder.components("", "Apps", "lib")
    tree_builder.write(
        {
            "z.cpp": '#include "lib/api.h"\n',
            "a/b.cpp": '#include "lib/api.h"\n',
            "Apps/x.cpp": "",
            "lib/api.h": "",
        }
    )

    result = tree_builder.scan()

    assert result.component_paths == ["Apps", "", "lib"]
    assert [record.path for record in result.files] == [
        "Apps/x.cpp",
        "a/b.cpp",
        "lib/api.h",
        "z.cpp",
    ]


def test_scan_honours_default_excludes(tree_builder: TreeBuilder) -> None:
    tree_builder.components("", "dev/tools")
    tree_builder.write(
        {
            "src/a.cpp": "",
            "dev/tools/helper.cpp": "",
            ".svn/pristine.cpp": "",
            ".git/hooks/sample.c": "",
            ".vscode/scratch.cpp": "",
        }
    )

    result = tree_builder.scan()

    assert [record.path for record in result.files] == ["src/a.cpp"]
    assert result.component_paths == [""]


def test_scan_default_excludes_can_be_overridden(tree_builder: TreeBuilder) -> None:
    tree_builder.write({".git/hooks/sample.c": "", "src/a.cpp": ""})

    result = TreeScanner(exclude_paths=[]).scan(tree_builder.path())

    assert [record.path for record in result.files] == [".git/hooks/sample.c", "src/a.cpp"]


def test_scan_respects_gitignore(tree_builder: TreeBuilder) -> None:
    tree_builder.write(
        {
            ".gitignore": "build/\n*.gen.h\n",
            "src/a.cpp": "",
            "src/table.gen.h": "",
            "build/out.cpp": "",
        }
    )

    paths = [record.path for record in tree_builder.scan().files]

    assert paths == ["src/a.cpp"]


def test_scan_uses_configured_suffixes_and_markers(tree_builder: TreeBuilder) -> None:
    tree_builder.write(
        {
            "BUILD": "",
            "core/BUILD": "",
            "core/impl.cc": "",
            "core/impl.h": "",
            "core/CMakeLists.txt": "",
        }
    )
    scanner = TreeScanner(suffixes=[".h"], markers=["BUILD"], exclude_paths=[])

    result = scanner.scan(tree_builder.path())

    assert result.component_paths == ["", "core"]
    assert [record.path for record in result.files] == ["core/impl.h"]


def test_scan_reports_malformed_includes(tree_builder: TreeBuilder) -> None:
    tree_builder.write({"a.cpp": '#include "..\\x.h"\n#include "ok.h"\n'})
    diagnostics = DiagnosticLog(DiagnosticsConfig(warn_malformed=True))

    result = TreeScanner(diagnostics=diagnostics).scan(tree_builder.path())

    assert result.files[0].includes == ("ok.h",)
    assert [(event.path, event.raw) for event in diagnostics.events] == [("a.cpp", "..\\x.h")]


def test_scan_rejects_missing_directory(tmp_path: Path) -> None:
    missing = tmp_path / "missing"

    with pytest.raises(FileNotFoundError) as excinfo:
        TreeScanner().scan(missing)

    assert str(missing) in str(excinfo.value)


def test_scan_rejects_file_root(tmp_path: Path) -> None:
    target = tmp_path / "main.cpp"
    target.write_text("", encoding="utf-8")

    with pytest.raises(NotADirectoryError):
        TreeScanner().scan(target)


def test_scan_aborts_on_unreadable_file(tree_builder: TreeBuilder, monkeypatch) -> None:
    tree_builder.write({"a.cpp": "", "b.cpp": ""})

    def _fail(lines, path, diagnostics=None):
        raise OSError("disk on fire")

    monkeypatch.setattr(scanner_module, "extract_includes", _fail)

    with pytest.raises(ScanError):
        tree_builder.scan()


def test_scan_aborts_when_a_directory_cannot_be_listed(
    tree_builder: TreeBuilder, monkeypatch
) -> None:
    tree_builder.write({"ok/a.cpp": "", "locked/b.cpp": ""})
    real_scandir = scanner_module.os.scandir

    def _scandir(path):
        if Path(path).name == "locked":
            raise PermissionError(13, "Permission denied", str(path))
        return real_scandir(path)

    monkeypatch.setattr(scanner_module.os, "scandir", _scandir)

    with pytest.raises(ScanError) as excinfo:
        tree_builder.scan()

    assert "locked" in str(excinfo.value)
