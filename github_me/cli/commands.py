# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Subcommand handlers for the github-me CLI.

Each handler takes the parsed argparse namespace and returns an exit code.
This is the only layer that catches ReleaseError and ConfigError: everything
below raises and lets the failure travel up here.

No print() calls. Everything goes through the structured logger.
"""

import argparse
import logging
from pathlib import Path

from github_me.cli.exit_codes import CONFIG_ERROR, RUNTIME_ERROR, SUCCESS, VALIDATION_ERROR
from github_me.config.exceptions import ConfigError
from github_me.config.loader import load_config
from github_me.config.schema import GithubMeConfig
from github_me.logging.logger import get_logger
from github_me.release.errors import ReleaseError
from github_me.runtime.bootstrap import bootstrap


def _load_and_bootstrap(
    args: argparse.Namespace,
    command_name: str,
) -> tuple[int, GithubMeConfig | None, logging.Logger]:
    """
    Shared setup: load config (or defaults), then bootstrap.

    Returns (exit_code, config, logger). config is None when loading failed,
    and the caller returns exit_code as is.
    """
    logger = get_logger(f"github_me.cli.{command_name}")

    config_path = Path(args.config) if args.config is not None else None
    try:
        config = load_config(config_path)
    except ConfigError as err:
        logger.error(
            "Configuration error",
            extra={"command": command_name, "error": str(err)},
        )
        return CONFIG_ERROR, None, logger

    bootstrap(config.global_config, log_level=args.log_level)
    return SUCCESS, config, logger


def _release_failure(logger: logging.Logger, command_name: str, err: ReleaseError) -> int:
    extra: dict[str, object] = {
        "command": command_name,
        "error": str(err),
        "error_type": type(err).__name__,
        "exit_code": err.exit_code,
    }
    if err.step is not None:
        extra["step"] = err.step.ordinal
        extra["step_name"] = err.step.name
    logger.error("Release failed", extra=extra)
    return err.exit_code


def handle_release(args: argparse.Namespace) -> int:
    """Compile, validate, and stage every target."""
    exit_code, config, logger = _load_and_bootstrap(args, "release")
    if config is None:
        return exit_code

    from github_me.release.pipeline import describe_plan, run_release

    if args.dry_run:
        for planned in describe_plan(config):
            logger.info(
                "Planned step",
                extra={"step": planned.ordinal, "step_name": planned.name, "action": planned.action},
            )
        logger.info("Dry run complete, nothing was executed", extra={"command": "release"})
        return SUCCESS

    try:
        report = run_release(config)
    except ReleaseError as err:
        return _release_failure(logger, "release", err)

    logger.info(
        "Archives ready for upload",
        extra={"archives": [archive.destination for archive in report.staged]},
    )
    return SUCCESS


def handle_clean(args: argparse.Namespace) -> int:
    """Remove the destination archives left by a previous release."""
    exit_code, config, logger = _load_and_bootstrap(args, "clean")
    if config is None:
        return exit_code

    from github_me.release.staging import clean_destinations
    from github_me.release.targets import resolve_layout

    layout = resolve_layout(config)

    if args.dry_run:
        logger.info(
            "Dry run, would remove",
            extra={"paths": [str(t.destination_archive) for t in layout.targets]},
        )
        return SUCCESS

    try:
        clean_destinations(layout)
    except ReleaseError as err:
        return _release_failure(logger, "clean", err)
    return SUCCESS


def handle_verify(args: argparse.Namespace) -> int:
    """Check the staged destination archives."""
    exit_code, config, logger = _load_and_bootstrap(args, "verify")
    if config is None:
        return exit_code

    from github_me.release.targets import resolve_layout
    from github_me.release.verification import verify_archives

    try:
        report = verify_archives(resolve_layout(config))
    except Exception as err:
        logger.error("Verification failed", extra={"error": str(err)}, exc_info=True)
        return RUNTIME_ERROR

    if not report.is_valid:
        logger.error(
            "Archives failed verification",
            extra={"failed_targets": report.failed_targets},
        )
        return VALIDATION_ERROR
    return SUCCESS


def handle_info(args: argparse.Namespace) -> int:
    """Log environment details and the resolved release plan."""
    exit_code, config, logger = _load_and_bootstrap(args, "info")
    if config is None:
        return exit_code

    from github_me import __version__
    from github_me.release.pipeline import describe_plan
    from github_me.release.targets import resolve_layout
    from github_me.release.toolchain import toolchain_available
    from github_me.runtime.environment import get_system_info

    system_info = get_system_info()
    layout = resolve_layout(config)

    logger.info(
        "System information",
        extra={
            "github_me_version": __version__,
            "python_version": system_info.python_version,
            "platform": system_info.platform,
            "architecture": system_info.architecture,
            "toolchain": config.release.toolchain,
            "toolchain_available": toolchain_available(config.release.toolchain),
            "config": args.config,
        },
    )
    logger.info(
        "Release layout",
        extra={
            "project": layout.project_name,
            "workspace_dir": str(layout.workspace_dir),
            "build_root": str(layout.build_root),
            "destination_dir": str(layout.destination_dir),
            "destination_dir_exists": layout.destination_dir.is_dir(),
            "targets": layout.target_names,
        },
    )
    for planned in describe_plan(config, layout):
        logger.info(
            "Planned step",
            extra={"step": planned.ordinal, "step_name": planned.name, "action": planned.action},
        )
    return SUCCESS
