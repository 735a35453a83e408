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

"""Exception hierarchy for Vigil.

Only failures that must reach the caller are modelled here. Per-file read
problems during a scan are swallowed by the traversal engine and never
become exceptions.
"""

from __future__ import annotations


class VigilError(Exception):
    """Base class for all Vigil errors."""


class ScanRootError(VigilError):
    """The scan root does not exist or is not a directory."""


class PathEscapeError(VigilError):
    """A root-relative path resolved outside of its root."""


class ConfigError(VigilError):
    """The configuration file is unreadable or does not match the schema."""
