"""Read-only classification of whitespace problems in a single file."""

from __future__ import annotations

import logging
import re
from pathlib import Path

from wscheck.models import CheckResult, ContentIssue, ExtensionSets, RunOptions
from wscheck.scan.extensions import matches_extension
from wscheck.utils.paths import is_executable

LOGGER = logging.getLogger(__name__)

# Blank means space or tab only; "$" stops before LF and at end of data, never before CR.
ANY_ISSUE_RE = re.compile(rb"\t|[ \t]$|\r", re.MULTILINE)
TAB_RE = re.compile(rb"\t")
TRAILING_BLANK_RE = re.compile(rb"[ \t]$", re.MULTILINE)
CR_RE = re.compile(rb"\r")

_ISSUE_PATTERNS: tuple[tuple[ContentIssue, re.Pattern[bytes]], ...] = (
    (ContentIssue.TABS, TAB_RE),
    (ContentIssue.TRAILING_WHITESPACE, TRAILING_BLANK_RE),
    (ContentIssue.DOS, CR_RE),
)


def has_content_issue(data: bytes) -> bool:
    """Combined test: tab, blank before a line end, or carriage return."""

    return ANY_ISSUE_RE.search(data) is not None


def classify_content(data: bytes) -> frozenset[ContentIssue]:
    """Return the set of content issues present in data."""

    if not has_content_issue(data):
        return frozenset()
    return frozenset(issue for issue, pattern in _ISSUE_PATTERNS if pattern.search(data))


def inspect_file(
    path: str,
    options: RunOptions,
    extensions: ExtensionSets | None = None,
    logger: logging.Logger | None = None,
) -> CheckResult:
    """Inspect path for executable-bit and content problems without modifying it."""

    effective_logger = logger or LOGGER
    file_path = Path(path)

    executable = options.check_executable and is_executable(file_path)

    issues: frozenset[ContentIssue] = frozenset()
    if matches_extension(file_path, options.extended_extensions, extensions):
        issues = classify_content(file_path.read_bytes())
    else:
        effective_logger.debug("inspect.skip_content path=%s reason=extension", path)

    result = CheckResult(path=path, executable=executable, issues=issues)
    effective_logger.debug("inspect.result path=%s label=%s", path, result.label)
    return result
