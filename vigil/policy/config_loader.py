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

"""Load the optional .vigil.yaml configuration file.

A missing file means defaults. Anything else that goes wrong (unreadable
file, invalid YAML, unknown keys, wrong types) raises ConfigError.
"""

from __future__ import annotations

import fnmatch
import logging
import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import ValidationError

from vigil.exceptions import ConfigError
from vigil.models.config import VigilConfig

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = ".vigil.yaml"


def find_config(root: str | os.PathLike[str]) -> Optional[Path]:
    """Return the config path under ``root`` if one exists."""
    candidate = Path(root) / CONFIG_FILE_NAME
    return candidate if candidate.is_file() else None


def load_config_file(config_path: str | os.PathLike[str]) -> VigilConfig:
    """Parse and validate a configuration file."""
    path = Path(config_path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping at the top level")

    try:
        config = VigilConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {path}: {e}") from e

    logger.debug("Loaded configuration from %s", path)
    return config


def load_config(
    root: str | os.PathLike[str],
    config_path: str | os.PathLike[str] | None = None,
) -> VigilConfig:
    """Load the configuration for a scan of ``root``.

    An explicit ``config_path`` must exist. Without one, ``.vigil.yaml``
    under the root is used when present, otherwise defaults.
    """
    if config_path is not None:
        if not Path(config_path).is_file():
            raise ConfigError(f"Config file not found: {config_path}")
        return load_config_file(config_path)

    found = find_config(root)
    if found is None:
        logger.debug("No %s under %s, using defaults", CONFIG_FILE_NAME, root)
        return VigilConfig()
    return load_config_file(found)


def is_disabled(check_id: str, config: VigilConfig) -> bool:
    """True if ``check_id`` matches an id or wildcard in checks.disabled."""
    return any(fnmatch.fnmatchcase(check_id, pattern) for pattern in config.checks.disabled)
