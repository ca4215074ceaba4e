"""Batch orchestration over candidate paths in check or fix mode."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable

from wscheck.models import CLEAN_LABEL, BatchMode, ExtensionSets, RunOptions
from wscheck.scan.fix import fix_file
from wscheck.scan.inspect import inspect_file

LOGGER = logging.getLogger(__name__)

PROG_NAME = "wscheck"
EXIT_CLEAN = 0
EXIT_ISSUES = 1
EXIT_FATAL = 3

Echo = Callable[[str], None]


@dataclass(frozen=True, slots=True)
class BatchResult:
    """Counters and verdict for one batch run."""

    mode: BatchMode
    paths_seen: int
    paths_missing: int
    failures: int
    file_errors: int
    fix_command: str

    @property
    def exit_code(self) -> int:
        return EXIT_ISSUES if self.failures > 0 else EXIT_CLEAN

    @property
    def summary(self) -> str | None:
        """Closing message, or None when the run was clean."""

        if self.failures == 0:
            return None
        if self.mode == "fix":
            return f"Corrected {self.failures} file(s)."
        return f"Found issues in {self.failures} file(s). To fix, run: {self.fix_command}"


def fix_command_for(options: RunOptions, prog_name: str = PROG_NAME) -> str:
    """Return the command line that repairs what a check run with options reports."""

    flags = [flag for flag in options.command_flags() if flag != "-F"]
    return " ".join([prog_name, *flags, "-F"])


def _check_path(path: str, options: RunOptions, extensions: ExtensionSets, echo: Echo, logger: logging.Logger) -> bool:
    result = inspect_file(path, options, extensions, logger=logger)
    if result.label != CLEAN_LABEL:
        echo(f"{path} {result.label}")
    elif options.chatty:
        echo(f"{path} :OK")
    return result.failed


def _fix_path(path: str, options: RunOptions, extensions: ExtensionSets, echo: Echo, logger: logging.Logger) -> bool:
    outcome = fix_file(path, options, extensions, logger=logger)
    if outcome.executable_cleared:
        echo(f"{path}: execute corrected")
    if outcome.content_rewritten:
        echo(f"{path}: fixed")
    if not outcome.changed and options.chatty:
        echo(f"{path}: no change")
    return outcome.changed


def run_batch(
    paths: Iterable[str],
    options: RunOptions,
    *,
    extensions: ExtensionSets | None = None,
    echo: Echo = print,
    logger: logging.Logger | None = None,
) -> BatchResult:
    """Inspect or fix every path and count the ones with problems.

    FixWriteError from the fixer is not handled here and ends the batch.
    """

    effective_logger = logger or LOGGER
    effective_extensions = extensions or ExtensionSets()
    process = _fix_path if options.fix else _check_path

    paths_seen = 0
    paths_missing = 0
    failures = 0
    file_errors = 0

    for path in paths:
        paths_seen += 1
        if not Path(path).is_file():
            paths_missing += 1
            effective_logger.debug("batch.skip_missing path=%s", path)
            continue
        try:
            if process(path, options, effective_extensions, echo, effective_logger):
                failures += 1
        except OSError as exc:
            file_errors += 1
            failures += 1
            effective_logger.error("batch.file_error path=%s error=%s", path, exc)
            echo(f"{path}: error {exc.strerror or exc}")

    result = BatchResult(
        mode=options.mode,
        paths_seen=paths_seen,
        paths_missing=paths_missing,
        failures=failures,
        file_errors=file_errors,
        fix_command=fix_command_for(options),
    )
    effective_logger.info(
        "batch.summary mode=%s paths_seen=%s paths_missing=%s failures=%s file_errors=%s",
        result.mode,
        result.paths_seen,
        result.paths_missing,
        result.failures,
        result.file_errors,
    )
    return result
