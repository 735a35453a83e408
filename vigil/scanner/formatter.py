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

"""Turn a list of findings into a short human-readable message."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from vigil.models.findings import Finding

EXAMPLE_COUNT = 3


def format_findings(findings: Sequence[Finding], max_items: int) -> str:
    """Join up to ``max_items`` findings, noting how many were left out."""
    if not findings:
        return "No issues found"

    msg = ", ".join(str(f) for f in findings[:max_items])
    if len(findings) > max_items:
        msg += f" ({len(findings) - max_items} more)"
    return msg


@dataclass(frozen=True)
class DetectorMessages:
    """Wording used by one detector for its summary line."""

    clean: str  # "No dangerous shell/code execution patterns detected"
    singular: str  # "Dangerous pattern detected"
    plural: str  # "Dangerous patterns detected"
    counted: str  # "dangerous patterns detected", prefixed with the count

    def summarize(self, findings: Sequence[Finding]) -> str:
        if not findings:
            return self.clean
        if len(findings) == 1:
            return f"{self.singular}: {findings[0]}"
        if len(findings) <= EXAMPLE_COUNT:
            return f"{self.plural}: {format_findings(findings, EXAMPLE_COUNT)}"
        return f"{len(findings)} {self.counted}: {format_findings(findings, EXAMPLE_COUNT)}"
