# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Destination archive handling: removing stale copies and staging fresh ones.

Removal is idempotent. A missing archive counts as already removed. Staging
never creates the destination directory; if it is gone that is an error the
user has to fix, not something to paper over.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from github_me.logging.logger import get_logger
from github_me.release.errors import StagingError
from github_me.release.steps import PipelineStep
from github_me.release.targets import ReleaseLayout, ReleaseTarget
from github_me.utils.filesystem import atomic_copy, safe_delete
from github_me.utils.hashing import compute_sha256

logger = get_logger(__name__)


@dataclass(frozen=True)
class StagedArchive:
    """A Destination Archive written by this run."""

    target: str
    source: str
    destination: str
    sha256: str
    size_bytes: int


def remove_stale(archive: Path, step: Optional[PipelineStep] = None) -> bool:
    """
    Delete a Destination Archive left over from a previous run.

    Returns:
        True if a file was removed, False if there was nothing to remove.

    Raises:
        StagingError: The path exists but can't be removed.
    """
    try:
        removed = safe_delete(archive)
    except OSError as err:
        raise StagingError(f"Cannot remove stale archive {archive}: {err}", step=step) from err

    logger.debug("Stale archive checked", extra={"path": str(archive), "removed": removed})
    return removed


def stage_archive(target: ReleaseTarget, step: Optional[PipelineStep] = None) -> StagedArchive:
    """
    Copy a target's Build Output Archive to its Destination Archive.

    The copy is verified by SHA256 before returning.

    Raises:
        StagingError: Missing source, missing destination directory,
            permission problems, or a checksum mismatch after the copy.
    """
    source = target.build_archive
    destination = target.destination_archive

    try:
        atomic_copy(source, destination)
        source_hash = compute_sha256(source)
        destination_hash = compute_sha256(destination)
        size_bytes = destination.stat().st_size
    except OSError as err:
        raise StagingError(
            f"Cannot stage {target.name} archive {source} -> {destination}: {err}",
            step=step,
        ) from err

    if source_hash != destination_hash:
        raise StagingError(
            f"Staged archive {destination} does not match {source} "
            f"(sha256 {destination_hash[:16]}... != {source_hash[:16]}...)",
            step=step,
        )

    logger.info(
        "Archive staged",
        extra={
            "target": target.name,
            "destination": str(destination),
            "sha256": source_hash[:16] + "...",
            "size_bytes": size_bytes,
        },
    )

    return StagedArchive(
        target=target.name,
        source=str(source),
        destination=str(destination),
        sha256=source_hash,
        size_bytes=size_bytes,
    )


def clean_destinations(layout: ReleaseLayout) -> list[str]:
    """
    Remove every target's Destination Archive, in target order.

    Returns:
        Paths that were actually removed.

    Raises:
        StagingError: On the first archive that can't be removed.
    """
    removed: list[str] = []
    for target in layout.targets:
        if remove_stale(target.destination_archive):
            removed.append(str(target.destination_archive))

    logger.info(
        "Destination archives cleaned",
        extra={"removed": len(removed), "destination_dir": str(layout.destination_dir)},
    )
    return removed
