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

"""Language table, file classifier and comment filter.

One table drives everything that needs to know about a language: the
classifier maps extensions to language ids, the comment filter looks up
comment tokens, and each pattern registry is keyed by the same ids.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping


@dataclass(frozen=True)
class LanguageSpec:
    """Extensions and line-comment prefixes for one language."""

    extensions: tuple[str, ...]
    comment_tokens: tuple[str, ...]


LANGUAGE_TABLE: Mapping[str, LanguageSpec] = MappingProxyType({
    "go": LanguageSpec((".go",), ("//",)),
    "python": LanguageSpec((".py", ".pyx", ".pyi"), ("#",)),
    "node": LanguageSpec((".js", ".jsx", ".mjs"), ("//", "/*")),
    "typescript": LanguageSpec((".ts", ".tsx"), ("//", "/*")),
    "java": LanguageSpec((".java",), ("//", "/*")),
    "rust": LanguageSpec((".rs",), ("//", "/*")),
    "swift": LanguageSpec((".swift",), ("//", "/*")),
    "ruby": LanguageSpec((".rb",), ("#",)),
    "php": LanguageSpec((".php",), ("//", "#", "/*")),
    "c": LanguageSpec((".c", ".h"), ("//", "/*")),
    "cpp": LanguageSpec((".cpp", ".cc", ".cxx", ".hpp", ".hxx"), ("//", "/*")),
})

# Reverse index; extensions are unique across languages
_EXTENSION_TO_LANGUAGE: Mapping[str, str] = MappingProxyType({
    ext: lang
    for lang, spec in LANGUAGE_TABLE.items()
    for ext in spec.extensions
})

# Opened by the traversal engine even though they have no language
CONFIG_EXTENSIONS = frozenset({".yaml", ".yml", ".json", ".toml", ".xml", ".sh", ".bash"})

DEFAULT_COMMENT_TOKENS: tuple[str, ...] = ("//", "#", "/*")

TEST_FILE_MARKERS: tuple[str, ...] = ("_test.", ".test.", ".spec.")
TEST_FILE_PREFIX = "test_"

SKIP_NAME_MARKERS: tuple[str, ...] = ("example", "sample", "template", "mock", "fixture")
DOC_EXTENSIONS: tuple[str, ...] = (".md", ".txt", ".rst")


def _extension(path: str | os.PathLike[str]) -> str:
    return os.path.splitext(os.fspath(path))[1].lower()


def classify(path: str | os.PathLike[str]) -> str:
    """Return the language id for a path, or "" when the extension is unknown."""
    return _EXTENSION_TO_LANGUAGE.get(_extension(path), "")


def is_source_file(path: str | os.PathLike[str]) -> bool:
    """True if the file is worth opening: a language or config extension."""
    ext = _extension(path)
    return ext in _EXTENSION_TO_LANGUAGE or ext in CONFIG_EXTENSIONS


def is_test_file(name: str) -> bool:
    lower = os.path.basename(name).lower()
    return any(marker in lower for marker in TEST_FILE_MARKERS) or lower.startswith(TEST_FILE_PREFIX)


def should_skip_file(name: str) -> bool:
    """True for example/fixture-like names and documentation files.

    Substring matching also excludes production files such as
    ``example_usage.go``; that trade-off is intentional.
    """
    lower = os.path.basename(name).lower()
    if any(marker in lower for marker in SKIP_NAME_MARKERS):
        return True
    return lower.endswith(DOC_EXTENSIONS)


def comment_tokens(language: str) -> tuple[str, ...]:
    spec = LANGUAGE_TABLE.get(language)
    if spec is None:
        return DEFAULT_COMMENT_TOKENS
    return spec.comment_tokens


def is_comment_line(line: str, language: str) -> bool:
    """True if the trimmed line starts with a comment token of ``language``."""
    trimmed = line.strip()
    if not trimmed:
        return False
    return trimmed.startswith(comment_tokens(language))
