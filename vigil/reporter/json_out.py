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

"""Canonical JSON output for check results.

Produces deterministic JSON output:
- Sorted keys
- 2-space indentation
- LF line endings
- Trailing newline
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Sequence

from vigil import __version__
from vigil.models.results import CheckResult

logger = logging.getLogger(__name__)


def to_canonical_json(data: dict[str, Any] | Any) -> str:
    """Convert data to canonical JSON string.

    Canonical JSON: sorted keys, 2-space indent, ensure LF, trailing newline.
    """
    if hasattr(data, "model_dump"):
        data = data.model_dump(mode="json")

    result = json.dumps(data, sort_keys=True, indent=2, ensure_ascii=False)
    # Ensure LF line endings
    result = result.replace("\r\n", "\n").replace("\r", "\n")
    if not result.endswith("\n"):
        result += "\n"
    return result


def build_payload(results: Sequence[CheckResult], scan_target: str | Path) -> dict[str, Any]:
    """The document printed by ``vigil scan --json``."""
    return {
        "vigil_version": __version__,
        "scan_target": str(scan_target),
        "results": [r.model_dump(mode="json") for r in results],
    }


def write_report(results: Sequence[CheckResult], scan_target: str | Path, output_path: Path) -> None:
    """Write the results as canonical JSON to a file."""
    content = to_canonical_json(build_payload(results, scan_target))

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(content, encoding="utf-8", newline="\n")
    logger.info("Wrote report to %s", output_path)
