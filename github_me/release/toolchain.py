# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
cargo-lambda invocations.

Only two commands are ever run:

    cargo lambda build --arm64 --release
    cargo lambda deploy --dry --binary-name <target>

Both inherit stdin/stdout/stderr, so cargo's progress and error output reach
the terminal untouched. The only thing we look at is the exit code. No
shell=True; arguments are always passed as a list.
"""

import shutil
import subprocess
from pathlib import Path
from typing import Optional

from github_me.logging.logger import get_logger
from github_me.release.errors import CompileError, ToolFailure, ValidationError
from github_me.release.steps import PipelineStep

logger = get_logger(__name__)

_ARCHITECTURE_FLAGS = {
    "arm64": "--arm64",
    "x86-64": "--x86-64",
}


def build_command(toolchain: list[str], architecture: str, profile: str) -> list[str]:
    """The argv for compiling every binary in the workspace."""
    command = [*toolchain, "build", _ARCHITECTURE_FLAGS[architecture]]
    if profile == "release":
        command.append("--release")
    return command


def deploy_dry_run_command(toolchain: list[str], target: str) -> list[str]:
    """The argv for the non-destructive deploy check of one binary."""
    return [*toolchain, "deploy", "--dry", "--binary-name", target]


def toolchain_available(toolchain: list[str]) -> bool:
    """True when the toolchain's executable can be found on PATH."""
    return shutil.which(toolchain[0]) is not None


def _run_tool(
    command: list[str],
    cwd: Path,
    timeout_seconds: Optional[int],
    step: PipelineStep,
    error_type: type[ToolFailure],
) -> None:
    """
    Run one external command to completion and fail on anything but exit 0.

    Raises:
        error_type: Non-zero exit, timeout, or missing executable.
    """
    logger.debug(
        "Running tool",
        extra={"command": command, "cwd": str(cwd), "step": step.ordinal},
    )

    try:
        result = subprocess.run(command, cwd=str(cwd), timeout=timeout_seconds, check=False)
    except subprocess.TimeoutExpired as err:
        raise error_type(
            f"{' '.join(command)} timed out after {timeout_seconds}s",
            step=step,
        ) from err
    except FileNotFoundError as err:
        raise error_type(
            f"{command[0]} executable not found. Is the Rust toolchain with cargo-lambda installed?",
            step=step,
        ) from err

    if result.returncode != 0:
        raise error_type(
            f"{' '.join(command)} exited with code {result.returncode}",
            step=step,
            returncode=result.returncode,
        )


def compile_targets(
    toolchain: list[str],
    architecture: str,
    profile: str,
    workspace_dir: Path,
    step: PipelineStep,
    timeout_seconds: Optional[int] = None,
) -> None:
    """
    Build every Lambda binary in one invocation.

    Raises:
        CompileError: If any binary fails to build.
    """
    command = build_command(toolchain, architecture, profile)
    _run_tool(command, workspace_dir, timeout_seconds, step, CompileError)


def validate_deployable(
    toolchain: list[str],
    target: str,
    workspace_dir: Path,
    step: PipelineStep,
    timeout_seconds: Optional[int] = None,
) -> None:
    """
    Confirm a binary packages and deploys cleanly without uploading anything.

    cargo-lambda writes the target's bootstrap.zip as part of this check.

    Raises:
        ValidationError: If the dry run fails.
    """
    command = deploy_dry_run_command(toolchain, target)
    _run_tool(command, workspace_dir, timeout_seconds, step, ValidationError)
