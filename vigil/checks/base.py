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

"""Checker interface and the shared line-pattern detector.

Every check implements ``Checker``: an id, a display name and ``run(path)``
returning a CheckResult. ``PatternCheck`` supplies the scan loop used by
the four security detectors; a subclass only chooses its registry, its
wording and how a match is described.
"""

from __future__ import annotations

import logging
import os
import re
from abc import ABC, abstractmethod
from typing import ClassVar, Optional, Sequence

from vigil.models.findings import Finding, FindingType, Severity
from vigil.models.results import CheckResult, Status
from vigil.scanner.coordinator import (
    DEFAULT_SCAN_POLICY,
    ScanPolicy,
    match_code_line,
    scan_directory,
    truncate_match,
)
from vigil.scanner.formatter import DetectorMessages
from vigil.scanner.patterns import PatternRegistry, freeze_registry

logger = logging.getLogger(__name__)

LANG_COMMON = "common"


class Checker(ABC):
    """Anything that can be run against a directory and yield a verdict."""

    @property
    @abstractmethod
    def id(self) -> str: ...

    @property
    @abstractmethod
    def name(self) -> str: ...

    @abstractmethod
    def run(self, path: str | os.PathLike[str]) -> CheckResult: ...


class ResultBuilder:
    """Build CheckResults stamped with a checker's id and name."""

    def __init__(self, checker: Checker, language: str = LANG_COMMON) -> None:
        self.checker = checker
        self.language = language

    def _result(self, status: Status, message: str, findings: Sequence[Finding]) -> CheckResult:
        return CheckResult(
            id=self.checker.id,
            name=self.checker.name,
            status=status,
            passed=status.passed,
            message=message,
            language=self.language,
            findings=list(findings),
        )

    def pass_(self, message: str, findings: Sequence[Finding] = ()) -> CheckResult:
        return self._result(Status.PASS, message, findings)

    def warn(self, message: str, findings: Sequence[Finding] = ()) -> CheckResult:
        return self._result(Status.WARN, message, findings)

    def fail(self, message: str, findings: Sequence[Finding] = ()) -> CheckResult:
        return self._result(Status.FAIL, message, findings)


class PatternCheck(Checker):
    """A detector that matches per-language regexes line by line.

    Subclasses set the class attributes and implement ``describe``. The
    registry passed to ``__init__`` replaces the default one, which is
    how tests exercise a detector with a handful of patterns.
    """

    check_id: ClassVar[str]
    check_name: ClassVar[str]
    finding_type: ClassVar[FindingType]
    severity: ClassVar[Severity]
    messages: ClassVar[DetectorMessages]
    default_registry: ClassVar[PatternRegistry]
    # Verdict when findings exist
    verdict: ClassVar[Status] = Status.FAIL

    def __init__(
        self,
        patterns: Optional[PatternRegistry] = None,
        policy: ScanPolicy = DEFAULT_SCAN_POLICY,
    ) -> None:
        self.patterns = (
            freeze_registry(patterns) if patterns is not None else self.default_registry
        )
        self.policy = policy

    @property
    def id(self) -> str:
        return self.check_id

    @property
    def name(self) -> str:
        return self.check_name

    @abstractmethod
    def describe(self, match: str, language: str) -> str:
        """Finding description for a (truncated) match."""

    def patterns_for(self, language: str) -> Sequence[re.Pattern[str]]:
        return self.patterns.get(language, ())

    def make_finding(self, rel_path: str, line_num: int, description: str) -> Finding:
        return Finding(
            type=self.finding_type,
            file=rel_path,
            line=line_num,
            description=description,
            severity=self.severity,
        )

    def scan_line(
        self,
        line: str,
        line_num: int,
        rel_path: str,
        language: str,
        patterns: Sequence[re.Pattern[str]],
    ) -> Optional[Finding]:
        match = match_code_line(line, language, patterns)
        if match is None:
            return None
        return self.make_finding(rel_path, line_num, self.describe(truncate_match(match), language))

    def scan(self, path: str | os.PathLike[str]) -> list[Finding]:
        """Return the raw findings for ``path``. Raises ScanRootError."""
        return scan_directory(path, self, self.policy)

    def run(self, path: str | os.PathLike[str]) -> CheckResult:
        rb = ResultBuilder(self)
        findings = self.scan(path)
        logger.info("%s: %d finding(s) in %s", self.check_id, len(findings), path)

        if not findings:
            return rb.pass_(self.messages.clean)

        msg = self.messages.summarize(findings)
        if self.verdict is Status.WARN:
            return rb.warn(msg, findings)
        return rb.fail(msg, findings)
