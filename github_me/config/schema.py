# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Type-safe configuration schemas for github-me.

Every section is a frozen pydantic model:
  - frozen=True: no mutation after load
  - extra="forbid": unknown keys fail immediately
  - validate_default=True: defaults are type-checked too

The defaults reproduce the fixed release setup exactly, so running with no
config file at all builds `api` and `job` for arm64 in release mode and stages
them as ~/Downloads/github-me-<target>.zip.
"""

import re
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

_TARGET_NAME_PATTERN = re.compile(r"^[a-z0-9][a-z0-9_-]*$")

Architecture = Literal["arm64", "x86-64"]
BuildProfile = Literal["release", "debug"]


class GlobalConfig(BaseModel):
    """Project identity and logging settings."""

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    config_version: str = Field(
        default="1.0.0",
        description="Schema version for compatibility tracking",
    )
    project_name: str = Field(
        default="github-me",
        min_length=1,
        description="Prefix of every destination archive name",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Package-wide log level",
    )
    log_file: Optional[str] = Field(
        default=None,
        description="Optional file that mirrors the JSON log lines",
    )

    @field_validator("project_name")
    @classmethod
    def _project_name_is_a_file_stem(cls, value: str) -> str:
        if "/" in value or "\\" in value or value in {".", ".."}:
            raise ValueError(f"project_name must be usable as a file name, got {value!r}")
        return value


class ReleaseConfig(BaseModel):
    """
    How to build, validate, and stage the Lambda targets.

    Removal and staging walk `targets` in order. Validation walks them in
    reverse, which for the default list gives job first, then api.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    config_version: str = Field(default="1.0.0", description="Schema version")
    targets: list[str] = Field(
        default_factory=lambda: ["api", "job"],
        min_length=1,
        description="Binary names built and packaged by the pipeline",
    )
    architecture: Architecture = Field(
        default="arm64",
        description="cargo-lambda target architecture flag",
    )
    profile: BuildProfile = Field(
        default="release",
        description="Optimized release build or unoptimized debug build",
    )
    workspace_dir: str = Field(
        default=".",
        description="Cargo workspace the toolchain runs in",
    )
    build_root: str = Field(
        default="target/lambda",
        description="Where cargo-lambda leaves per-target output, relative to workspace_dir",
    )
    archive_name: str = Field(
        default="bootstrap.zip",
        description="File name of the archive inside each target's build directory",
    )
    destination_dir: str = Field(
        default="~/Downloads",
        description="Directory that receives <project>-<target>.zip; must already exist",
    )
    toolchain: list[str] = Field(
        default_factory=lambda: ["cargo", "lambda"],
        min_length=1,
        description="Command prefix for the cargo-lambda subcommands",
    )
    compile_timeout_seconds: Optional[int] = Field(
        default=None,
        ge=1,
        description="Kill the build after this many seconds; None waits forever",
    )
    validate_timeout_seconds: Optional[int] = Field(
        default=None,
        ge=1,
        description="Kill each dry-run deploy after this many seconds; None waits forever",
    )

    @field_validator("targets")
    @classmethod
    def _targets_are_unique_names(cls, value: list[str]) -> list[str]:
        for name in value:
            if not _TARGET_NAME_PATTERN.match(name):
                raise ValueError(
                    f"Target name {name!r} must be lowercase letters, digits, '-' or '_'"
                )
        duplicates = sorted({name for name in value if value.count(name) > 1})
        if duplicates:
            raise ValueError(f"Duplicate target names: {', '.join(duplicates)}")
        return value

    @field_validator("archive_name")
    @classmethod
    def _archive_name_is_plain(cls, value: str) -> str:
        if not value or "/" in value or "\\" in value:
            raise ValueError(f"archive_name must be a plain file name, got {value!r}")
        return value


class GithubMeConfig(BaseModel):
    """
    Top-level config container.

    Both sections are optional in YAML. A missing section takes its defaults,
    so an empty mapping is a complete config.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    global_config: GlobalConfig = Field(default_factory=GlobalConfig, alias="global")
    release: ReleaseConfig = Field(default_factory=ReleaseConfig)
