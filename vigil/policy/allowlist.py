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

"""Allowlist rules that suppress individual filesystem findings.

Three rule forms are accepted, all against root-relative paths with
forward slashes:

- ``path:LINE``  exact path and 1-based line number
- ``path:TEXT``  exact path, and the line's source contains TEXT
- ``GLOB``       fnmatch over the path; ``dir/**`` covers everything below dir
"""

from __future__ import annotations

import fnmatch
import logging
from dataclasses import dataclass
from typing import Iterable, Optional

logger = logging.getLogger(__name__)


def _normalize(path: str) -> str:
    path = path.replace("\\", "/")
    return path[2:] if path.startswith("./") else path


@dataclass(frozen=True)
class AllowRule:
    """One parsed allowlist entry."""

    path: str
    line: Optional[int] = None
    text: Optional[str] = None

    @classmethod
    def parse(cls, raw: str) -> "AllowRule":
        raw = raw.strip()
        path, sep, rest = raw.partition(":")
        if not sep or not rest:
            return cls(path=_normalize(raw.rstrip(":")))
        if rest.isdigit():
            return cls(path=_normalize(path), line=int(rest))
        return cls(path=_normalize(path), text=rest)

    @property
    def is_glob(self) -> bool:
        return self.line is None and self.text is None

    def matches(self, rel_path: str, line_num: int, line_text: str) -> bool:
        rel_path = _normalize(rel_path)
        if self.is_glob:
            return fnmatch.fnmatchcase(rel_path, self.path)
        if rel_path != self.path:
            return False
        if self.line is not None:
            return line_num == self.line
        return self.text in line_text


class Allowlist:
    """An ordered collection of AllowRule; empty allows nothing."""

    def __init__(self, rules: Iterable[str] = ()) -> None:
        self.rules = tuple(AllowRule.parse(r) for r in rules if r and r.strip())

    def __bool__(self) -> bool:
        return bool(self.rules)

    def __len__(self) -> int:
        return len(self.rules)

    def allows(self, rel_path: str, line_num: int, line_text: str) -> bool:
        for rule in self.rules:
            if rule.matches(rel_path, line_num, line_text):
                logger.debug("Allowlisted %s:%d by rule %s", rel_path, line_num, rule)
                return True
        return False
