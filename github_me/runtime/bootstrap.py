# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Runtime bootstrap: the one-time setup every CLI command goes through.

  1. Validate the interpreter
  2. Configure package-wide logging from config (CLI flag wins)
  3. Log a startup line with the system snapshot
"""

from pathlib import Path
from typing import Optional

from github_me.config.schema import GlobalConfig
from github_me.logging.logger import configure_logging, get_logger
from github_me.runtime.environment import check_minimum_python, get_system_info


def bootstrap(config: GlobalConfig, log_level: Optional[str] = None) -> None:
    """
    Put the process into a known state before any release work.

    Args:
        config: The validated global section.
        log_level: Level from the command line; overrides config.log_level.
    """
    check_minimum_python()

    log_file = Path(config.log_file).expanduser() if config.log_file is not None else None
    configure_logging(log_level=log_level or config.log_level, log_file=log_file)

    system_info = get_system_info()
    get_logger("github_me.runtime").debug(
        "Bootstrap complete",
        extra={
            "project": config.project_name,
            "python_version": system_info.python_version,
            "platform": system_info.platform,
            "architecture": system_info.architecture,
        },
    )
