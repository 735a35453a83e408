"""Tests for the file walker and line-scanning engine."""

import os
import re
import sys
from pathlib import Path

import pytest

from vigil.exceptions import ScanRootError
from vigil.models.findings import Finding, FindingType, Severity
from vigil.scanner.coordinator import (
    ScanPolicy,
    iter_lines,
    iter_source_files,
    match_code_line,
    scan_directory,
    truncate_match,
    validate_root,
)


class MarkerDetector:
    """Flags Go lines containing BAD."""

    patterns = (re.compile(r"BAD"),)

    def patterns_for(self, language):
        return self.patterns if language == "go" else ()

    def scan_line(self, line, line_num, rel_path, language, patterns):
        match = match_code_line(line, language, patterns)
        if match is None:
            return None
        return Finding(
            type=FindingType.SHELL_INJECTION,
            file=rel_path,
            line=line_num,
            description=f"marker {match}",
            severity=Severity.LOW,
        )


def _write(root: Path, rel: str, content: str = "") -> None:
    path = root / rel
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)


class TestValidateRoot:
    def test_nonexistent_dir_raises(self):
        with pytest.raises(ScanRootError):
            validate_root(Path("/nonexistent/path"))

    def test_not_a_dir_raises(self, tmp_path: Path):
        _write(tmp_path, "main.go")
        with pytest.raises(ScanRootError):
            validate_root(tmp_path / "main.go")

    def test_returns_resolved(self, tmp_path: Path):
        assert validate_root(tmp_path) == tmp_path.resolve()

    def test_null_byte_raises(self):
        with pytest.raises(ScanRootError):
            validate_root("a" + chr(0) + "b")


class TestDirectoryWalk:
    def test_sorted_order(self, tmp_path: Path):
        for rel in ["b.go", "a.go", "sub/c.go", ".github/workflows/ci.yml"]:
            _write(tmp_path, rel)
        files = list(iter_source_files(tmp_path.resolve()))
        assert files == ["a.go", "b.go", ".github/workflows/ci.yml", "sub/c.go"]

    def test_skipped_directories(self, tmp_path: Path):
        for rel in ["node_modules/x.js", "vendor/y.go", ".hidden/z.go", "bin/tool.go", "__pycache__/m.py"]:
            _write(tmp_path, rel)
        _write(tmp_path, "main.go")
        assert list(iter_source_files(tmp_path.resolve())) == ["main.go"]

    def test_skipped_files(self, tmp_path: Path):
        for rel in ["main_test.go", "example_usage.go", "README.md", "logo.png", "mock_db.py"]:
            _write(tmp_path, rel)
        _write(tmp_path, "server.go")
        assert list(iter_source_files(tmp_path.resolve())) == ["server.go"]

    def test_custom_policy(self, tmp_path: Path):
        _write(tmp_path, "generated/x.go")
        _write(tmp_path, "main.go")
        policy = ScanPolicy(skip_directories=frozenset({"generated"}))
        assert list(iter_source_files(tmp_path.resolve(), policy)) == ["main.go"]


class TestLines:
    def test_crlf(self):
        assert list(iter_lines("a\r\nb\n")) == ["a", "b"]

    def test_blank_lines_kept(self):
        assert list(iter_lines("a\n\nb")) == ["a", "", "b"]

    def test_empty(self):
        assert list(iter_lines("")) == []

    def test_truncate(self):
        assert truncate_match("x" * 100) == "x" * 100
        assert truncate_match("x" * 101) == "x" * 100 + "..."


class TestScanDirectory:
    def test_findings_are_relative_and_one_based(self, tmp_path: Path):
        _write(tmp_path, "pkg/main.go", "package main\nBAD()\n")
        findings = scan_directory(tmp_path, MarkerDetector())
        assert len(findings) == 1
        assert findings[0].file == "pkg/main.go"
        assert findings[0].line == 2

    def test_comments_skipped(self, tmp_path: Path):
        _write(tmp_path, "main.go", "// BAD\n")
        assert scan_directory(tmp_path, MarkerDetector()) == []

    def test_files_without_patterns_not_scanned(self, tmp_path: Path):
        _write(tmp_path, "app.py", "BAD\n")
        assert scan_directory(tmp_path, MarkerDetector()) == []

    def test_cap_stops_walk(self, tmp_path: Path):
        _write(tmp_path, "a.go", "BAD\n" * 10)
        _write(tmp_path, "b.go", "BAD\n")
        findings = scan_directory(tmp_path, MarkerDetector(), ScanPolicy(max_findings=5))
        assert len(findings) == 5
        assert {f.file for f in findings} == {"a.go"}

    def test_default_cap(self, tmp_path: Path):
        _write(tmp_path, "a.go", "BAD\n" * 60)
        assert len(scan_directory(tmp_path, MarkerDetector())) == 50

    def test_missing_root(self, tmp_path: Path):
        with pytest.raises(ScanRootError):
            scan_directory(tmp_path / "missing", MarkerDetector())

    @pytest.mark.skipif(sys.platform == "win32", reason="symlinks need privileges on Windows")
    def test_escaping_symlink_skipped(self, tmp_path: Path):
        root = tmp_path / "root"
        root.mkdir()
        _write(tmp_path, "outside.go", "BAD\n")
        os.symlink(tmp_path / "outside.go", root / "link.go")
        _write(root, "main.go", "BAD\n")
        findings = scan_directory(root, MarkerDetector())
        assert [f.file for f in findings] == ["main.go"]
