# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
The release pipeline.

A fixed, linear sequence (see `plan_steps`):

    compile all -> remove every stale archive -> validate every target
    -> stage every target

The first failing step raises and nothing after it runs. There is no retry
and no rollback. A failure during validation or staging therefore leaves the
stale archives already deleted and the fresh ones not yet written. That is
the intended behaviour: a half-finished run should never leave an old archive
lying around looking current.
"""

import time
from dataclasses import dataclass, field

from github_me.config.schema import GithubMeConfig
from github_me.logging.logger import get_logger
from github_me.release.staging import StagedArchive, remove_stale, stage_archive
from github_me.release.steps import PipelineStep, StepKind, plan_steps
from github_me.release.targets import ReleaseLayout, resolve_layout
from github_me.release.toolchain import (
    build_command,
    compile_targets,
    deploy_dry_run_command,
    validate_deployable,
)

logger = get_logger(__name__)


@dataclass(frozen=True)
class ReleaseReport:
    """What a successful run did."""

    project_name: str
    targets: list[str]
    removed: list[str] = field(default_factory=list)
    staged: list[StagedArchive] = field(default_factory=list)
    completed_steps: list[str] = field(default_factory=list)
    elapsed_seconds: float = 0.0


@dataclass(frozen=True)
class PlannedStep:
    """A step as it would run, for plan mode and `info`."""

    ordinal: int
    name: str
    action: str


def describe_plan(config: GithubMeConfig, layout: ReleaseLayout | None = None) -> list[PlannedStep]:
    """Render every step as a human-readable action without running anything."""
    layout = layout or resolve_layout(config)
    release = config.release

    planned: list[PlannedStep] = []
    for step in plan_steps(layout.target_names):
        if step.kind is StepKind.COMPILE:
            action = " ".join(build_command(release.toolchain, release.architecture, release.profile))
        elif step.kind is StepKind.REMOVE_STALE:
            action = f"rm -f {layout.target(step.target).destination_archive}"
        elif step.kind is StepKind.VALIDATE:
            action = " ".join(deploy_dry_run_command(release.toolchain, step.target))
        else:
            target = layout.target(step.target)
            action = f"cp {target.build_archive} {target.destination_archive}"
        planned.append(PlannedStep(ordinal=step.ordinal, name=step.name, action=action))
    return planned


def _run_step(
    step: PipelineStep,
    config: GithubMeConfig,
    layout: ReleaseLayout,
    removed: list[str],
    staged: list[StagedArchive],
) -> None:
    release = config.release

    if step.kind is StepKind.COMPILE:
        compile_targets(
            release.toolchain,
            release.architecture,
            release.profile,
            layout.workspace_dir,
            step,
            timeout_seconds=release.compile_timeout_seconds,
        )
    elif step.kind is StepKind.REMOVE_STALE:
        archive = layout.target(step.target).destination_archive
        if remove_stale(archive, step=step):
            removed.append(str(archive))
    elif step.kind is StepKind.VALIDATE:
        validate_deployable(
            release.toolchain,
            step.target,
            layout.workspace_dir,
            step,
            timeout_seconds=release.validate_timeout_seconds,
        )
    else:
        staged.append(stage_archive(layout.target(step.target), step=step))


def run_release(config: GithubMeConfig) -> ReleaseReport:
    """
    Build, validate, and stage every target.

    Args:
        config: Validated config. The defaults reproduce the standard
            api/job arm64 release.

    Returns:
        ReleaseReport describing the staged archives.

    Raises:
        CompileError: The build failed. No archive has been touched.
        ValidationError: A dry-run deploy failed.
        StagingError: An archive could not be removed or copied.
    """
    layout = resolve_layout(config)
    steps = plan_steps(layout.target_names)
    start = time.monotonic()

    logger.info(
        "Release started",
        extra={
            "project": layout.project_name,
            "targets": layout.target_names,
            "architecture": config.release.architecture,
            "profile": config.release.profile,
            "steps": len(steps),
        },
    )

    removed: list[str] = []
    staged: list[StagedArchive] = []
    completed: list[str] = []

    for step in steps:
        logger.info("Step started", extra={"step": step.ordinal, "step_name": step.name})
        step_start = time.monotonic()
        _run_step(step, config, layout, removed, staged)
        completed.append(step.name)
        logger.info(
            "Step finished",
            extra={
                "step": step.ordinal,
                "step_name": step.name,
                "elapsed_seconds": round(time.monotonic() - step_start, 3),
            },
        )

    elapsed = time.monotonic() - start
    logger.info(
        "Release complete",
        extra={
            "project": layout.project_name,
            "staged": [archive.destination for archive in staged],
            "elapsed_seconds": round(elapsed, 3),
        },
    )

    return ReleaseReport(
        project_name=layout.project_name,
        targets=layout.target_names,
        removed=removed,
        staged=staged,
        completed_steps=completed,
        elapsed_seconds=elapsed,
    )
