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

"""Pydantic models for check metadata and check results."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

from vigil.models.findings import Finding


class Status(str, Enum):
    """Verdict of a single check."""

    PASS = "pass"
    WARN = "warn"
    FAIL = "fail"

    @property
    def passed(self) -> bool:
        return self is Status.PASS


class CheckResult(BaseModel):
    """Outcome of running one check against a directory."""

    id: str
    name: str
    status: Status
    passed: bool
    message: str
    language: str = "common"
    findings: list[Finding] = Field(default_factory=list)


class CheckMeta(BaseModel):
    """Registration metadata for a check.

    ``critical`` checks fail the whole run when they fail; ``order`` sets the
    execution priority (lower runs first).
    """

    id: str
    name: str
    description: str
    languages: list[str] = Field(default_factory=lambda: ["common"])
    critical: bool = False
    order: int = 100
    suggestion: str = ""
