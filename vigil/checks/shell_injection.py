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

"""Dangerous shell and code execution."""

from __future__ import annotations

from vigil.checks.base import PatternCheck
from vigil.models.findings import FindingType, Severity
from vigil.scanner.formatter import DetectorMessages
from vigil.scanner.patterns.shell_injection import SHELL_INJECTION_PATTERNS


class ShellInjectionCheck(PatternCheck):
    """Flags command execution built from variables, eval/exec and raw exec primitives."""

    check_id = "security:shell_injection"
    check_name = "Shell Injection Detection"
    finding_type = FindingType.SHELL_INJECTION
    severity = Severity.CRITICAL
    messages = DetectorMessages(
        clean="No dangerous shell/code execution patterns detected",
        singular="Dangerous pattern detected",
        plural="Dangerous patterns detected",
        counted="dangerous patterns detected",
    )
    default_registry = SHELL_INJECTION_PATTERNS

    def describe(self, match: str, language: str) -> str:
        return f"{language} pattern detected ({match})"
