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

"""Pydantic models for the .vigil.yaml configuration file."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class FileSystemConfig(BaseModel):
    """Settings for the filesystem check.

    ``allow`` rules suppress matching findings. Supported forms:
      - "pkg/tools/k8s.go:94"                      path and line number
      - "pkg/tools/k8s.go:os.ReadDir(chartsDir)"   path and source text
      - "pkg/generated/**"                         glob over the path
    """

    model_config = ConfigDict(extra="forbid")

    allow: list[str] = Field(default_factory=list)


class SecurityConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    filesystem: FileSystemConfig = Field(default_factory=FileSystemConfig)


class ChecksConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    disabled: list[str] = Field(default_factory=list)


class ExecutionConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    workers: int = Field(default=1, ge=1)


class VigilConfig(BaseModel):
    """The complete configuration. Every section is optional."""

    model_config = ConfigDict(extra="forbid")

    security: SecurityConfig = Field(default_factory=SecurityConfig)
    checks: ChecksConfig = Field(default_factory=ChecksConfig)
    execution: ExecutionConfig = Field(default_factory=ExecutionConfig)
