"""Path and filesystem helper functions."""

from __future__ import annotations

import os
import stat
from pathlib import Path
from uuid import uuid4

EXECUTE_BITS = stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH


def atomic_temp_path(target_path: Path) -> Path:
    """Return a hidden temp path beside target_path for atomic replacement."""

    return target_path.parent / f".{target_path.name}.{uuid4().hex}.tmp"


def is_executable(path: Path) -> bool:
    """Return True if any user/group/other execute bit is set."""

    return bool(path.stat().st_mode & EXECUTE_BITS)


def clear_execute_bits(path: Path) -> bool:
    """Drop execute permission for all principals; return True if anything changed."""

    mode = stat.S_IMODE(path.stat().st_mode)
    if not mode & EXECUTE_BITS:
        return False
    os.chmod(path, mode & ~EXECUTE_BITS)
    return True
