# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Config loader: YAML on disk -> validated, frozen GithubMeConfig.

No config file is the normal case. `load_config(None)` returns the built-in
defaults, which is what `github-me` with no arguments runs with.
"""

from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import ValidationError

from github_me.config.exceptions import ConfigLoadError, ConfigValidationError
from github_me.config.schema import GithubMeConfig


def _read_yaml_file(config_path: Path) -> dict[str, Any]:
    """
    Read a YAML file and return the parsed mapping.

    An empty file is treated as an empty mapping.

    Raises:
        ConfigLoadError: The file is missing, unreadable, not YAML, or its
            root is not a mapping.
    """
    if not config_path.exists():
        raise ConfigLoadError(f"Config file not found: {config_path}")

    if not config_path.is_file():
        raise ConfigLoadError(f"Config path is not a file: {config_path}")

    try:
        raw_text = config_path.read_text(encoding="utf-8")
    except OSError as err:
        raise ConfigLoadError(f"Cannot read config file {config_path}: {err}") from err

    try:
        parsed = yaml.safe_load(raw_text)
    except yaml.YAMLError as err:
        raise ConfigLoadError(f"Invalid YAML in {config_path}: {err}") from err

    if parsed is None:
        return {}

    if not isinstance(parsed, dict):
        raise ConfigLoadError(
            f"Config file must contain a YAML mapping (dict), got {type(parsed).__name__}"
        )

    return parsed


def load_config(config_path: Optional[Path] = None) -> GithubMeConfig:
    """
    Load and validate a config file, or return the defaults.

    Args:
        config_path: Path to a YAML config file, or None for the defaults.

    Returns:
        A frozen GithubMeConfig.

    Raises:
        ConfigLoadError: File I/O or YAML parse failures.
        ConfigValidationError: Schema violations.
    """
    raw_data: dict[str, Any] = {} if config_path is None else _read_yaml_file(config_path)

    try:
        return GithubMeConfig.model_validate(raw_data)
    except ValidationError as err:
        source = config_path if config_path is not None else "<defaults>"
        raise ConfigValidationError(f"Config validation failed for {source}:\n{err}") from err
