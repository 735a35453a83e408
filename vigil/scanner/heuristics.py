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

"""Entropy and encoding heuristics used by the obfuscation detector.

All helpers are pure functions over a single string. They are tuned to
be cheap enough to run on every line of every scanned file.
"""

from __future__ import annotations

import base64
import binascii
import math
import re

# Random or encrypted payloads sit above this; code and prose sit well below
HIGH_ENTROPY_THRESHOLD = 7.5
MIN_ENTROPY_LENGTH = 16
MIN_LITERAL_LENGTH = 20
MIN_COMMENT_PAYLOAD_LENGTH = 40

_BASE64_RE = re.compile(r"""^[A-Za-z0-9+/=]+$""")
_HEX_RE = re.compile(r"""^[0-9a-fA-F]+$""")
_BASE64_ALPHABET = frozenset("ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/=")

_HEX_ESCAPE_RE = re.compile(r"""\\[xu][0-9a-fA-F]{2,4}""")
_HEX_ESCAPE_RUN_RE = re.compile(r"""(?:\\[xu][0-9a-fA-F]{2,4}\s*){3,}""")

_DOUBLE_QUOTED_RE = re.compile(r'''"(?:[^"\\]|\\.)*"''')
_SINGLE_QUOTED_RE = re.compile(r"""'(?:[^'\\]|\\.)*'""")
_BACKTICK_RE = re.compile(r"""`[^`]*`""")


def entropy(s: str) -> float:
    """Shannon entropy of ``s`` in bits per character."""
    if not s:
        return 0.0
    length = len(s)
    freq: dict[str, int] = {}
    for ch in s:
        freq[ch] = freq.get(ch, 0) + 1
    result = 0.0
    for count in freq.values():
        p = count / length
        result -= p * math.log2(p)
    return result


def is_high_entropy(s: str) -> bool:
    if len(s) < MIN_ENTROPY_LENGTH:
        return False
    return entropy(s) > HIGH_ENTROPY_THRESHOLD


def is_base64(s: str) -> bool:
    """Strict check: base64 alphabet, sane length, and actually decodes.

    Missing padding is tolerated.
    """
    if not _BASE64_RE.match(s):
        return False
    if len(s) % 4 not in (0, 1):
        return False
    try:
        base64.b64decode(s, validate=True)
        return True
    except (binascii.Error, ValueError):
        pass
    padded = s + "=" * ((4 - len(s) % 4) % 4)
    try:
        base64.b64decode(padded, validate=True)
        return True
    except (binascii.Error, ValueError):
        return False


def is_hex(s: str) -> bool:
    """Hex digits only, even length, at least 8 characters.

    Shorter hex-looking strings ("abcd", "cafe") are too ambiguous to flag.
    """
    if not _HEX_RE.match(s):
        return False
    return len(s) % 2 == 0 and len(s) >= 8


def looks_like_base64_in_code(s: str) -> bool:
    """Lenient base64 test for text that may carry quotes or stray characters."""
    s = s.strip("\"'").strip()
    if len(s) < MIN_ENTROPY_LENGTH:
        return False
    in_alphabet = sum(1 for ch in s if ch in _BASE64_ALPHABET)
    return in_alphabet / len(s) >= 0.9


def has_hex_escape_sequence(s: str) -> bool:
    """True for 4+ \\xNN / \\uNNNN escapes in total, or a run of 3+."""
    if len(_HEX_ESCAPE_RE.findall(s)) > 3:
        return True
    return _HEX_ESCAPE_RUN_RE.search(s) is not None


def extract_string_literals(line: str) -> list[str]:
    """Return the contents of every "..", '..' and `..` literal on a line.

    Quote styles are extracted independently, so a literal nested in
    another style's quotes is reported twice. That only matters for
    counting, which no caller does.
    """
    literals = [m.group(0).strip('"') for m in _DOUBLE_QUOTED_RE.finditer(line)]
    literals.extend(m.group(0).strip("'") for m in _SINGLE_QUOTED_RE.finditer(line))
    literals.extend(m.group(0).strip("`") for m in _BACKTICK_RE.finditer(line))
    return literals


def has_high_entropy_string(line: str) -> bool:
    """True if any literal of 20+ characters on the line is high-entropy."""
    return any(
        len(literal) >= MIN_LITERAL_LENGTH and is_high_entropy(literal)
        for literal in extract_string_literals(line)
    )


def is_suspicious_comment(line: str) -> bool:
    """Re-inspect a comment line for an encoded payload hidden in it."""
    trimmed = line.strip()
    if trimmed.startswith(("//", "#")):
        trimmed = trimmed.removeprefix("//").removeprefix("#").strip()

    if looks_like_base64_in_code(trimmed) and len(trimmed) > MIN_COMMENT_PAYLOAD_LENGTH:
        return True
    return has_hex_escape_sequence(trimmed)
