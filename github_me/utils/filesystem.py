# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Filesystem operations used by the release pipeline.

Copies go through a temporary file in the destination directory followed by a
rename. Rename within one filesystem is atomic on POSIX, so the destination is
either the complete new file or absent, never half-written. A crash can leave
a `.github_me_tmp_*` file behind instead.
"""

import shutil
import tempfile
from pathlib import Path

TEMP_PREFIX = ".github_me_tmp_"


def safe_delete(file_path: Path) -> bool:
    """
    Delete a file if it exists. Returns whether anything was deleted.

    A missing file is not an error.

    Raises:
        IsADirectoryError: If the path is a directory.
        OSError: If the file exists but can't be deleted.
    """
    try:
        file_path.unlink()
    except FileNotFoundError:
        return False
    return True


def atomic_copy(source: Path, destination: Path) -> None:
    """
    Copy `source` to `destination` atomically.

    The destination directory must already exist; it is not created.

    Raises:
        FileNotFoundError: If the source or the destination directory is missing.
        OSError: If the copy or rename fails.
    """
    if not source.is_file():
        raise FileNotFoundError(f"Source file not found: {source}")
    if not destination.parent.is_dir():
        raise FileNotFoundError(f"Destination directory not found: {destination.parent}")

    temp_fd = tempfile.NamedTemporaryFile(
        mode="wb",
        dir=str(destination.parent),
        prefix=TEMP_PREFIX,
        suffix=".tmp",
        delete=False,
    )
    temp_path = Path(temp_fd.name)

    try:
        with open(source, "rb") as src:
            shutil.copyfileobj(src, temp_fd)
        temp_fd.flush()
        temp_fd.close()
        shutil.copystat(source, temp_path)
        temp_path.replace(destination)
    except BaseException:
        temp_fd.close()
        if temp_path.exists():
            temp_path.unlink()
        raise
