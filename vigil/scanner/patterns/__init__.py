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

"""Per-language regex registries, one module per detector family.

A registry maps a language id from ``vigil.scanner.languages`` to an
ordered tuple of compiled patterns. Registries are built once at import
time and exposed read-only; the order of patterns is the order in which a
detector tries them on each line.
"""

from __future__ import annotations

import re
from types import MappingProxyType
from typing import Mapping, Sequence

PatternRegistry = Mapping[str, tuple[re.Pattern[str], ...]]


def freeze_registry(patterns: dict[str, Sequence[re.Pattern[str]]]) -> PatternRegistry:
    """Turn a mutable {language: [patterns]} dict into a read-only registry."""
    return MappingProxyType({lang: tuple(pats) for lang, pats in patterns.items()})


# Shared building blocks, reused by several registries
PARENT_DIR = re.compile(r"""\.\./""")
HOME_DIR = re.compile(r"""~/""")
SYSTEM_DIR = re.compile(r"""["']/(etc|var|tmp|usr|bin|home|root)""")
EXTERNAL_URL = re.compile(r"""["']https?://[^"']+""")
