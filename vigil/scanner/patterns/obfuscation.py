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

"""Obfuscation patterns.

``COMMON`` applies to every scanned file, including config and script
files that have no language; the language-specific tuple is tried first.
"""

from __future__ import annotations

import re

from vigil.scanner.patterns import PatternRegistry, freeze_registry

COMMON = (
    # escape runs
    re.compile(r"""(\\x[0-9a-fA-F]{2}\s*){5,}"""),
    re.compile(r"""(\\u[0-9a-fA-F]{4}\s*){3,}"""),
    # long base64-shaped literal
    re.compile(r"""["'][A-Za-z0-9+/]{40,}={0,2}["']"""),
    # arrays of 10+ single-character strings
    re.compile(r"""\["[a-zA-Z0-9]"(?:\s*,\s*"[a-zA-Z0-9]"){10,}"""),
    re.compile(r"""['"][a-zA-Z0-9]['"](?:\s*,\s*['"][a-zA-Z0-9]['"]){10,}"""),
    # "abcde" + "fghij" + "klmno"
    re.compile(r"""["'][^"']{5,20}["']\s*\+\s*["'][^"']{5,20}["']\s*\+\s*["'][^"']{5,20}["']"""),
)

_NODE = [
    re.compile(r"""atob\s*\("""),
    re.compile(r"""btoa\s*\(\s*[a-zA-Z_$]\w*\s*\)"""),
    re.compile(r"""Buffer\.from\s*\(\s*["'][^"']{20,}["'],\s*["']"""),
    re.compile(r"""new Buffer\s*\("""),
    re.compile(r"""String\.fromCharCode\s*\(\s*[0-9]+"""),
    re.compile(r"""\\[xu][0-9a-fA-F]{2,4}"""),
]

_C = [
    re.compile(r"""\\x[0-9a-fA-F]{2}"""),
    re.compile(r"""\\[0-7]{3}"""),
    re.compile(r"""char\s+\w+\[\]\s*=\s*\{[^}]{50,}\}"""),
]

OBFUSCATION_PATTERNS: PatternRegistry = freeze_registry({
    "common": COMMON,
    "go": [
        re.compile(r"""\\x[0-9a-fA-F]{2}"""),
        # large byte slice literal
        re.compile(r"""\[\]byte\s*\{[^}]{50,}\}"""),
        re.compile(r"""string\(rune\(0x[0-9a-fA-F]+\)\)"""),
    ],
    "python": [
        re.compile(r"""\.encode\s*\(\s*["'](?:base64|hex|rot13)"""),
        re.compile(r"""\.decode\s*\(\s*["'](?:base64|hex|rot13)"""),
        re.compile(r"""bytes\.fromhex\s*\(\s*["'][0-9a-fA-F]{20,}"""),
        # builtin compile(), not re.compile()
        re.compile(r"""(?<![\w.])compile\s*\("""),
        re.compile(r"""types\.CodeType"""),
        re.compile(r"""["']\s*\.join\s*\(\s*\[[^\]]{50,}\]\)"""),
        re.compile(r"""chr\s*\(\s*0x[0-9a-fA-F]+"""),
    ],
    "node": _NODE,
    "typescript": _NODE,
    "java": [
        re.compile(r"""Base64\.getDecoder\(\)\.decode\s*\("""),
        re.compile(r"""DatatypeConverter\.parseBase64Binary\s*\("""),
        re.compile(r"""Integer\.parseInt\s*\([^)]+,\s*16\s*\)"""),
        re.compile(r"""Character\.toString\s*\([^)]+,\s*16\s*\)"""),
        re.compile(r"""StringBuilder\s*\("""),
    ],
    "ruby": [
        re.compile(r"""\.unpack\s*\(\s*["']"""),
        re.compile(r"""\.pack\s*\(\s*["']"""),
        re.compile(r"""\[[0-9]+(?:\s*,\s*[0-9]+){10,}\]"""),
        re.compile(r"""\*\s*\w+"""),
    ],
    "php": [
        re.compile(r"""base64_decode\s*\("""),
        re.compile(r"""str_rot13\s*\("""),
        re.compile(r"""pack\s*\(\s*["']"""),
        re.compile(r"""convert_uudecode\s*\("""),
    ],
    "rust": [
        re.compile(r"""b\s*["'][A-Za-z0-9+/]{30,}=?["']"""),
        re.compile(r"""String::from_utf8_lossy\s*\("""),
        re.compile(r"""as_bytes\s*\(\)\s*\."""),
    ],
    "c": _C,
    "cpp": _C,
    "swift": [
        re.compile(r"""\\u\{[0-9a-fA-F]+\}"""),
        re.compile(r"""Data\(base64Encoded:\s*"""),
        re.compile(r"""String\(data:\s*"""),
    ],
})
