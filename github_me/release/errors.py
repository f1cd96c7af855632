# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Release pipeline errors.

Every failure is fatal. Nothing in the release package catches these; they
travel up to the CLI, which logs them once and exits with `exit_code`.
"""

from typing import Optional

from github_me.cli.exit_codes import RUNTIME_ERROR
from github_me.release.steps import PipelineStep


class ReleaseError(Exception):
    """
    Base for all pipeline failures.

    Attributes:
        step: The pipeline step that failed, when known.
        exit_code: Process exit code the CLI should use.
    """

    def __init__(
        self,
        message: str,
        step: Optional[PipelineStep] = None,
        exit_code: int = RUNTIME_ERROR,
    ) -> None:
        super().__init__(message)
        self.step = step
        self.exit_code = exit_code


class ToolFailure(ReleaseError):
    """
    An external tool failed. The tool's own non-zero exit code is propagated
    when there is one; timeouts, signals and a missing executable map to
    RUNTIME_ERROR.
    """

    def __init__(
        self,
        message: str,
        step: Optional[PipelineStep] = None,
        returncode: Optional[int] = None,
    ) -> None:
        exit_code = returncode if returncode is not None and returncode > 0 else RUNTIME_ERROR
        super().__init__(message, step=step, exit_code=exit_code)
        self.returncode = returncode


class CompileError(ToolFailure):
    """The toolchain could not build one or more targets."""


class ValidationError(ToolFailure):
    """The dry-run deploy rejected a target."""


class StagingError(ReleaseError):
    """Removing a stale archive or copying a fresh one failed."""
