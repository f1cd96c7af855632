# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Configuration errors.

Kept apart from the loader so the CLI can catch config failures without
pulling in yaml and pydantic.
"""


class ConfigError(Exception):
    """Base for all configuration errors."""


class ConfigLoadError(ConfigError):
    """The config file is missing, unreadable, not YAML, or not a mapping."""


class ConfigValidationError(ConfigError):
    """
    The file parsed but does not match the schema: unknown keys, wrong types,
    unsupported architecture or profile, bad target names.
    """
