# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Destination archive verification, run by `github-me verify`.

For each target:
  - the Destination Archive exists
  - it is a readable zip file
  - it contains a `bootstrap` entry (the Lambda custom runtime entry point)
  - it matches the current Build Output Archive, when that still exists

Failures are collected, not raised, so one run reports every problem.
"""

import zipfile
from dataclasses import dataclass, field

from github_me.logging.logger import get_logger
from github_me.release.targets import ReleaseLayout, ReleaseTarget
from github_me.utils.hashing import files_match

logger = get_logger(__name__)

BOOTSTRAP_ENTRY = "bootstrap"


@dataclass(frozen=True)
class ArchiveCheck:
    """Outcome of checking one target's Destination Archive."""

    target: str
    path: str
    passed: bool
    problems: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class VerificationReport:
    """Outcome of checking every target."""

    is_valid: bool
    checks: list[ArchiveCheck] = field(default_factory=list)

    @property
    def failed_targets(self) -> list[str]:
        return [check.target for check in self.checks if not check.passed]


def _zip_problems(target: ReleaseTarget) -> list[str]:
    path = target.destination_archive
    try:
        with zipfile.ZipFile(path) as archive:
            names = archive.namelist()
            corrupt_member = archive.testzip()
    except (zipfile.BadZipFile, OSError) as err:
        return [f"not a readable zip file: {err}"]

    problems: list[str] = []
    if BOOTSTRAP_ENTRY not in names:
        problems.append(f"missing '{BOOTSTRAP_ENTRY}' entry")
    if corrupt_member is not None:
        problems.append(f"corrupt member: {corrupt_member}")
    return problems


def check_archive(target: ReleaseTarget) -> ArchiveCheck:
    """Run every check against one target's Destination Archive."""
    path = target.destination_archive

    if not path.is_file():
        return ArchiveCheck(
            target=target.name,
            path=str(path),
            passed=False,
            problems=["destination archive not found"],
        )

    problems = _zip_problems(target)

    if target.build_archive.is_file():
        try:
            if not files_match(path, target.build_archive):
                problems.append(f"differs from build output {target.build_archive}")
        except OSError as err:
            problems.append(f"cannot compare with build output: {err}")

    return ArchiveCheck(
        target=target.name,
        path=str(path),
        passed=not problems,
        problems=problems,
    )


def verify_archives(layout: ReleaseLayout) -> VerificationReport:
    """Check every target and log one line per failure."""
    checks = [check_archive(target) for target in layout.targets]
    report = VerificationReport(is_valid=all(c.passed for c in checks), checks=checks)

    for check in checks:
        if not check.passed:
            logger.warning(
                "Archive check failed",
                extra={"target": check.target, "path": check.path, "problems": check.problems},
            )

    logger.info(
        "Archive verification finished",
        extra={"is_valid": report.is_valid, "checked": len(checks)},
    )
    return report
