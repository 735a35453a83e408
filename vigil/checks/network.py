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

"""Outbound network calls and encode-before-send idioms."""

from __future__ import annotations

import re
from typing import Optional, Sequence

from vigil.checks.base import PatternCheck
from vigil.models.findings import Finding, FindingType, Severity
from vigil.models.results import Status
from vigil.scanner.coordinator import DEFAULT_SCAN_POLICY, ScanPolicy
from vigil.scanner.formatter import DetectorMessages
from vigil.scanner.patterns import PatternRegistry
from vigil.scanner.patterns.network import NETWORK_PATTERNS
from vigil.scanner.safelist import DEFAULT_SAFELIST, SafeDomainSet


class NetworkCheck(PatternCheck):
    """Flags network operations, skipping lines that talk to trusted hosts.

    Network access is often legitimate, so findings only warn.
    """

    check_id = "security:network"
    check_name = "Network Exfiltration Detection"
    finding_type = FindingType.NETWORK
    severity = Severity.MEDIUM
    messages = DetectorMessages(
        clean="No suspicious network operations detected",
        singular="Suspicious network operation detected",
        plural="Suspicious network operations detected",
        counted="suspicious network operations detected",
    )
    default_registry = NETWORK_PATTERNS
    verdict = Status.WARN

    def __init__(
        self,
        patterns: Optional[PatternRegistry] = None,
        policy: ScanPolicy = DEFAULT_SCAN_POLICY,
        safelist: SafeDomainSet = DEFAULT_SAFELIST,
    ) -> None:
        super().__init__(patterns, policy)
        self.safelist = safelist

    def describe(self, match: str, language: str) -> str:
        return f"suspicious network operation: {match}"

    def scan_line(
        self,
        line: str,
        line_num: int,
        rel_path: str,
        language: str,
        patterns: Sequence[re.Pattern[str]],
    ) -> Optional[Finding]:
        finding = super().scan_line(line, line_num, rel_path, language, patterns)
        if finding is not None and self.safelist.line_has_safe_url(line):
            return None
        return finding
