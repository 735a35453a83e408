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

"""Traversal-safe file access relative to a scan root."""

from __future__ import annotations

import os
from pathlib import Path

from vigil.exceptions import PathEscapeError


def safe_join(root: str | os.PathLike[str], rel_path: str | os.PathLike[str]) -> Path:
    """Join ``rel_path`` onto ``root``, refusing anything that escapes it.

    Absolute paths and ``..`` segments that climb out of the root raise
    PathEscapeError. Symlinks are resolved before the containment check.
    """
    abs_root = Path(root).resolve()
    rel = Path(rel_path)
    if rel.is_absolute():
        raise PathEscapeError(f"absolute paths not allowed: {rel_path}")

    joined = (abs_root / rel).resolve()
    if joined != abs_root and abs_root not in joined.parents:
        raise PathEscapeError(f"path escapes root directory: {rel_path}")
    return joined


def read_file(root: str | os.PathLike[str], rel_path: str | os.PathLike[str]) -> str:
    """Read a root-relative text file.

    Undecodable bytes are replaced rather than raising, so only I/O errors
    and PathEscapeError can escape.
    """
    path = safe_join(root, rel_path)
    return path.read_text(encoding="utf-8", errors="replace")
