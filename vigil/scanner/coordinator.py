# Vigil — Suspicious Source Idiom Scanner
# Copyright (C) 2026 Vigil Project Contributors
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published
# by the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
# GNU Affero General Public License for more details.
#
# You should have received a copy of the GNU Affero General Public License
# along with this program. If not, see <https://www.gnu.org/licenses/>.

"""File walker and line-scanning engine shared by all detectors.

The walk is a deterministic top-down directory traversal with pruning:
skip-listed and hidden directories (except ``.github``) are never entered,
and only source/config files that are not tests, examples or docs are
opened. Each opened file is handed line by line to a detector; the whole
walk stops once the detector has produced ``max_findings`` findings.
"""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, Optional, Protocol, Sequence

from vigil.exceptions import PathEscapeError, ScanRootError
from vigil.models.findings import Finding
from vigil.scanner.languages import (
    classify,
    is_comment_line,
    is_source_file,
    is_test_file,
    should_skip_file,
)
from vigil.scanner.safepath import read_file

logger = logging.getLogger(__name__)

DEFAULT_SKIP_DIRECTORIES = frozenset({
    "node_modules",
    "vendor",
    ".git",
    "__pycache__",
    ".venv",
    "venv",
    "dist",
    "build",
    ".idea",
    ".vscode",
    ".next",
    ".nuxt",
    "target",
    "bin",
    "obj",
    "out",
    ".terraform",
    "coverage",
    ".cache",
    ".gradle",
    ".mypy_cache",
    "pytest_cache",
    ".egg-info",
    ".tox",
})

MAX_FINDINGS = 50
MAX_MATCH_DISPLAY = 100


@dataclass(frozen=True)
class ScanPolicy:
    """Constants that decide which directories and files are scanned."""

    skip_directories: frozenset[str] = DEFAULT_SKIP_DIRECTORIES
    allowed_hidden_directories: frozenset[str] = field(default_factory=lambda: frozenset({".github"}))
    max_findings: int = MAX_FINDINGS

    def should_descend(self, dir_name: str) -> bool:
        if dir_name in self.skip_directories:
            return False
        if dir_name.startswith(".") and dir_name not in self.allowed_hidden_directories:
            return False
        return True

    def should_scan(self, file_name: str) -> bool:
        if not is_source_file(file_name):
            return False
        return not (is_test_file(file_name) or should_skip_file(file_name))


DEFAULT_SCAN_POLICY = ScanPolicy()


class LineDetector(Protocol):
    """What the engine needs from a detector."""

    def patterns_for(self, language: str) -> Sequence[re.Pattern[str]]:
        """Patterns to apply to a file of ``language``; empty means skip the file."""
        ...

    def scan_line(
        self,
        line: str,
        line_num: int,
        rel_path: str,
        language: str,
        patterns: Sequence[re.Pattern[str]],
    ) -> Optional[Finding]:
        """Return at most one finding for the line."""
        ...


def validate_root(path: str | os.PathLike[str]) -> Path:
    """Resolve the scan root, raising ScanRootError if it is unusable."""
    try:
        root = Path(path).resolve()
    except (OSError, RuntimeError, ValueError) as e:
        raise ScanRootError(f"Cannot resolve scan root {path}: {e}") from e

    if not root.exists():
        raise ScanRootError(f"Scan root does not exist: {root}")
    if not root.is_dir():
        raise ScanRootError(f"Scan root is not a directory: {root}")
    return root


def iter_source_files(root: Path, policy: ScanPolicy = DEFAULT_SCAN_POLICY) -> Iterator[str]:
    """Yield root-relative POSIX paths of files that qualify for scanning."""
    for dirpath, dirnames, filenames in os.walk(root):
        kept = []
        for name in sorted(dirnames):
            if policy.should_descend(name):
                kept.append(name)
            else:
                logger.debug("Skipping directory %s", os.path.join(dirpath, name))
        dirnames[:] = kept

        rel_dir = Path(dirpath).relative_to(root)
        for name in sorted(filenames):
            if policy.should_scan(name):
                yield (rel_dir / name).as_posix()
            else:
                logger.debug("Skipping file %s", (rel_dir / name).as_posix())


def iter_lines(content: str) -> Iterator[str]:
    """Split on LF only, dropping a trailing CR, like a line-oriented reader."""
    lines = content.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    for line in lines:
        yield line[:-1] if line.endswith("\r") else line


def truncate_match(match: str, limit: int = MAX_MATCH_DISPLAY) -> str:
    if len(match) > limit:
        return match[:limit] + "..."
    return match


def first_match(line: str, patterns: Sequence[re.Pattern[str]]) -> Optional[str]:
    """Return the text matched by the first pattern that hits, in order."""
    for pattern in patterns:
        m = pattern.search(line)
        if m:
            return m.group(0)
    return None


def match_code_line(
    line: str, language: str, patterns: Sequence[re.Pattern[str]]
) -> Optional[str]:
    """first_match, but comment lines never match."""
    if is_comment_line(line, language):
        return None
    return first_match(line, patterns)


def scan_directory(
    root: str | os.PathLike[str],
    detector: LineDetector,
    policy: ScanPolicy = DEFAULT_SCAN_POLICY,
) -> list[Finding]:
    """Walk ``root`` and collect the detector's findings, capped by policy.

    Raises ScanRootError for an unusable root. Unreadable files are
    skipped silently.
    """
    root_path = validate_root(root)
    findings: list[Finding] = []

    for rel_path in iter_source_files(root_path, policy):
        language = classify(rel_path)
        patterns = detector.patterns_for(language)
        if not patterns:
            continue

        try:
            content = read_file(root_path, rel_path)
        except (OSError, UnicodeDecodeError, PathEscapeError) as e:
            logger.debug("Skipping unreadable file %s: %s", rel_path, e)
            continue

        for line_num, line in enumerate(iter_lines(content), start=1):
            finding = detector.scan_line(line, line_num, rel_path, language, patterns)
            if finding is None:
                continue
            findings.append(finding)
            if len(findings) >= policy.max_findings:
                logger.info(
                    "Finding cap of %d reached in %s; stopping walk",
                    policy.max_findings,
                    rel_path,
                )
                return findings

    return findings
