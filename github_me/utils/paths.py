# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""Path helpers for turning config strings into absolute paths."""

from pathlib import Path
from typing import Optional


def expand_path(raw: str, base: Optional[Path] = None) -> Path:
    """
    Expand `~` and make a config path absolute.

    Relative paths are taken against `base` (the current directory when
    None). The result is not required to exist.
    """
    path = Path(raw).expanduser()
    if not path.is_absolute():
        path = (base if base is not None else Path.cwd()) / path
    return path.resolve()
