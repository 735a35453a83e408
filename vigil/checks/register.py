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

"""Registration of the security checks and the runner that executes them."""

from __future__ import annotations

import logging
import os
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from vigil.checks.base import LANG_COMMON, Checker
from vigil.checks.filesystem import FileSystemCheck
from vigil.checks.network import NetworkCheck
from vigil.checks.obfuscation import ObfuscationCheck
from vigil.checks.shell_injection import ShellInjectionCheck
from vigil.models.config import VigilConfig
from vigil.models.results import CheckMeta, CheckResult
from vigil.policy.config_loader import is_disabled
from vigil.scanner.coordinator import validate_root

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CheckRegistration:
    """A checker paired with the metadata the runner schedules it by."""

    checker: Checker
    meta: CheckMeta


def register(config: Optional[VigilConfig] = None) -> list[CheckRegistration]:
    """Return every security check registration."""
    if config is None:
        config = VigilConfig()

    return [
        CheckRegistration(
            checker=ObfuscationCheck(),
            meta=CheckMeta(
                id="security:obfuscation",
                name="Code Obfuscation Detection",
                description="Detects obfuscated code and encoded strings that may indicate malicious intent.",
                languages=[LANG_COMMON],
                critical=True,
                order=40,
                suggestion="Review obfuscated code for malicious intent and clarity",
            ),
        ),
        CheckRegistration(
            checker=ShellInjectionCheck(),
            meta=CheckMeta(
                id="security:shell_injection",
                name="Shell Injection Detection",
                description="Detects dangerous shell/code execution patterns that could lead to command injection.",
                languages=[LANG_COMMON],
                critical=True,
                order=50,
                suggestion="Review and sanitize user input before executing",
            ),
        ),
        CheckRegistration(
            checker=FileSystemCheck(allowlist=config.security.filesystem.allow),
            meta=CheckMeta(
                id="security:filesystem",
                name="File System Safety",
                description=(
                    "Detects path traversal and unsafe file operations that could "
                    "access files outside the project."
                ),
                languages=[LANG_COMMON],
                critical=True,
                order=55,
                suggestion="Validate file paths and restrict to project directory",
            ),
        ),
        CheckRegistration(
            checker=NetworkCheck(),
            meta=CheckMeta(
                id="security:network",
                name="Network Exfiltration Detection",
                description="Detects suspicious network operations that could indicate data exfiltration.",
                languages=[LANG_COMMON],
                # Network access is frequently legitimate
                critical=False,
                order=60,
                suggestion="Review network endpoints and data being transmitted",
            ),
        ),
    ]


def select_registrations(
    registrations: Iterable[CheckRegistration],
    config: Optional[VigilConfig] = None,
    only: Sequence[str] = (),
) -> list[CheckRegistration]:
    """Drop disabled checks and, when ``only`` is given, everything not in it."""
    selected = []
    for reg in registrations:
        if config is not None and is_disabled(reg.meta.id, config):
            logger.debug("Check %s disabled by configuration", reg.meta.id)
            continue
        if only and reg.meta.id not in only:
            continue
        selected.append(reg)
    return selected


def run_checks(
    path: str | os.PathLike[str],
    registrations: Iterable[CheckRegistration],
    workers: int = 1,
) -> list[CheckResult]:
    """Run registrations against ``path`` in ``order``.

    The checks are independent, so with ``workers > 1`` they run on a
    thread pool; results still come back in order. Raises ScanRootError
    before any check runs if the root is unusable.
    """
    root = validate_root(path)
    ordered = sorted(registrations, key=lambda r: r.meta.order)
    if not ordered:
        return []

    if workers <= 1 or len(ordered) == 1:
        return [reg.checker.run(root) for reg in ordered]

    with ThreadPoolExecutor(max_workers=min(workers, len(ordered))) as pool:
        return list(pool.map(lambda reg: reg.checker.run(root), ordered))
