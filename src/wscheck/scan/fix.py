"""In-place repair of executable bits and whitespace problems."""

from __future__ import annotations

import logging
import os
import re
import shutil
from pathlib import Path

from wscheck.errors import FixWriteError
from wscheck.models import ExtensionSets, FixOutcome, RunOptions
from wscheck.scan.extensions import matches_extension
from wscheck.scan.inspect import has_content_issue
from wscheck.utils.paths import atomic_temp_path, clear_execute_bits

LOGGER = logging.getLogger(__name__)

TAB_WIDTH = 4
TRAILING_BLANKS_RE = re.compile(rb"[ \t]+$", re.MULTILINE)


def expand_tabs(data: bytes, width: int = TAB_WIDTH) -> bytes:
    """Replace tabs with spaces up to the next multiple of width.

    Columns restart only after LF; every other byte, CR included, takes one
    column, matching ``expand -t``.
    """

    lines: list[bytes] = []
    for line in data.split(b"\n"):
        if b"\t" not in line:
            lines.append(line)
            continue
        out = bytearray()
        column = 0
        for byte in line:
            if byte == 0x09:
                pad = width - column % width
                out += b" " * pad
                column += pad
            else:
                out.append(byte)
                column += 1
        lines.append(bytes(out))
    return b"\n".join(lines)


def fix_content(data: bytes) -> bytes:
    """Expand tabs, drop carriage returns, and trim trailing blanks on every line."""

    expanded = expand_tabs(data)
    without_cr = expanded.replace(b"\r", b"")
    return TRAILING_BLANKS_RE.sub(b"", without_cr)


def _write_replacement(file_path: Path, content: bytes, logger: logging.Logger) -> None:
    """Write content beside file_path, then atomically move it over file_path."""

    temp_path = atomic_temp_path(file_path)
    try:
        temp_path.write_bytes(content)
    except OSError as exc:
        logger.error("fix.temp_write_failed path=%s temp=%s error=%s", file_path, temp_path, exc)
        if temp_path.exists():
            temp_path.unlink()
        raise FixWriteError(str(file_path), str(temp_path)) from exc

    if not temp_path.exists():
        logger.error("fix.temp_missing path=%s temp=%s", file_path, temp_path)
        raise FixWriteError(str(file_path), str(temp_path))

    try:
        shutil.copymode(file_path, temp_path)
        os.replace(temp_path, file_path)
    finally:
        if temp_path.exists():
            temp_path.unlink()


def fix_file(
    path: str,
    options: RunOptions,
    extensions: ExtensionSets | None = None,
    logger: logging.Logger | None = None,
) -> FixOutcome:
    """Clear a stray executable bit and rewrite dirty content for one path.

    Raises FixWriteError when the replacement file cannot be created; callers
    are expected to stop the whole batch on it.
    """

    effective_logger = logger or LOGGER
    file_path = Path(path)

    executable_cleared = False
    if options.check_executable:
        executable_cleared = clear_execute_bits(file_path)
        if executable_cleared:
            effective_logger.info("fix.execute_cleared path=%s", path)

    content_rewritten = False
    if matches_extension(file_path, options.extended_extensions, extensions):
        original = file_path.read_bytes()
        if has_content_issue(original):
            _write_replacement(file_path, fix_content(original), effective_logger)
            content_rewritten = True
            effective_logger.info("fix.content_rewritten path=%s", path)

    return FixOutcome(
        path=path,
        executable_cleared=executable_cleared,
        content_rewritten=content_rewritten,
    )
