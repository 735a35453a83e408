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

"""Obfuscated code and encoded payloads.

Unlike the other detectors this one looks inside comments: a comment
whose body looks like base64 or carries hex escapes is scanned like code.
Every line is tested for a high-entropy string literal before the
pattern registry is tried.
"""

from __future__ import annotations

import re
from typing import Optional, Sequence

from vigil.checks.base import LANG_COMMON, PatternCheck
from vigil.models.findings import Finding, FindingType, Severity
from vigil.scanner.coordinator import first_match, truncate_match
from vigil.scanner.formatter import DetectorMessages
from vigil.scanner.heuristics import has_high_entropy_string, is_suspicious_comment
from vigil.scanner.languages import is_comment_line
from vigil.scanner.patterns.obfuscation import OBFUSCATION_PATTERNS

HIGH_ENTROPY_DESCRIPTION = "high-entropy string (possible encoded data)"


class ObfuscationCheck(PatternCheck):
    """Flags encoded payloads and high-entropy string literals."""

    check_id = "security:obfuscation"
    check_name = "Code Obfuscation Detection"
    finding_type = FindingType.OBFUSCATION
    severity = Severity.HIGH
    messages = DetectorMessages(
        clean="No obfuscated code or encoded strings detected",
        singular="Obfuscated code detected",
        plural="Obfuscated code detected",
        counted="obfuscation patterns detected",
    )
    default_registry = OBFUSCATION_PATTERNS

    def describe(self, match: str, language: str) -> str:
        return f"obfuscation pattern: {match}"

    def patterns_for(self, language: str) -> Sequence[re.Pattern[str]]:
        # Language patterns first, then the ones shared by every file
        return self.patterns.get(language, ()) + self.patterns.get(LANG_COMMON, ())

    def scan_line(
        self,
        line: str,
        line_num: int,
        rel_path: str,
        language: str,
        patterns: Sequence[re.Pattern[str]],
    ) -> Optional[Finding]:
        trimmed = line.strip()
        if is_comment_line(line, language) and not is_suspicious_comment(trimmed):
            return None

        if has_high_entropy_string(trimmed):
            return self.make_finding(rel_path, line_num, HIGH_ENTROPY_DESCRIPTION)

        match = first_match(line, patterns)
        if match is None:
            return None
        return self.make_finding(rel_path, line_num, self.describe(truncate_match(match), language))
