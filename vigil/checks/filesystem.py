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

"""Path traversal and unsafe file operations."""

from __future__ import annotations

import re
from typing import Iterable, Optional, Sequence

from vigil.checks.base import PatternCheck
from vigil.models.findings import Finding, FindingType, Severity
from vigil.policy.allowlist import Allowlist
from vigil.scanner.coordinator import DEFAULT_SCAN_POLICY, ScanPolicy
from vigil.scanner.formatter import DetectorMessages
from vigil.scanner.patterns import PatternRegistry
from vigil.scanner.patterns.filesystem import FILESYSTEM_PATTERNS


class FileSystemCheck(PatternCheck):
    """Flags file access that could reach outside the project.

    Findings matching an allowlist rule are dropped before they count
    towards the finding cap.
    """

    check_id = "security:filesystem"
    check_name = "File System Safety"
    finding_type = FindingType.FILESYSTEM
    severity = Severity.HIGH
    messages = DetectorMessages(
        clean="No path traversal or unsafe file operations detected",
        singular="Path traversal/unsafe file operation detected",
        plural="Path traversal/unsafe file operations detected",
        counted="path traversal/unsafe file operations detected",
    )
    default_registry = FILESYSTEM_PATTERNS

    def __init__(
        self,
        patterns: Optional[PatternRegistry] = None,
        policy: ScanPolicy = DEFAULT_SCAN_POLICY,
        allowlist: Iterable[str] = (),
    ) -> None:
        super().__init__(patterns, policy)
        self.allowlist = Allowlist(allowlist)

    def describe(self, match: str, language: str) -> str:
        return f"unsafe file operation: {match}"

    def scan_line(
        self,
        line: str,
        line_num: int,
        rel_path: str,
        language: str,
        patterns: Sequence[re.Pattern[str]],
    ) -> Optional[Finding]:
        finding = super().scan_line(line, line_num, rel_path, language, patterns)
        if finding is not None and self.allowlist.allows(rel_path, line_num, line):
            return None
        return finding
