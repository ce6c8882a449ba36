"""Configuration loading from multirelease.toml."""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from multirelease.config.models import MultiReleaseConfig
from multirelease.exceptions import ConfigNotFoundError, ConfigValidationError

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "multirelease.toml"


def find_config_file(start: Path | None = None) -> Path:
    """Find multirelease.toml in ``start`` or one of its parents.

    Raises:
        ConfigNotFoundError: If no configuration file exists
    """
    current = (start or Path.cwd()).resolve()

    for directory in (current, *current.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate

    raise ConfigNotFoundError(f"No {CONFIG_FILENAME} found in {current} or its parents")


def load_toml(path: Path) -> dict[str, Any]:
    """Parse a TOML file.

    Raises:
        ConfigNotFoundError: If the file does not exist
        ConfigValidationError: If the file is not valid TOML
    """
    if not path.is_file():
        raise ConfigNotFoundError(f"Configuration file not found: {path}")

    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigValidationError(f"Invalid TOML in {path}: {e}") from e


def load_config(path: Path | None = None) -> MultiReleaseConfig:
    """Load configuration for a project.

    Args:
        path: Project directory or explicit configuration file. A
            directory without multirelease.toml yields the defaults.

    Returns:
        Validated configuration

    Raises:
        ConfigValidationError: If the configuration is invalid
    """
    path = path or Path.cwd()

    if path.is_dir():
        config_path = path / CONFIG_FILENAME
        if not config_path.is_file():
            logger.debug("No %s in %s, using defaults", CONFIG_FILENAME, path)
            return MultiReleaseConfig()
    else:
        config_path = path

    data = load_toml(config_path)

    try:
        return MultiReleaseConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigValidationError(f"Invalid configuration in {config_path}:\n{e}") from e
