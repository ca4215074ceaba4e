"""Per-file scanning: extension matching, inspection, and fixing."""

from wscheck.scan.extensions import matches_extension
from wscheck.scan.fix import TAB_WIDTH, expand_tabs, fix_content, fix_file
from wscheck.scan.inspect import classify_content, has_content_issue, inspect_file

__all__ = [
    "matches_extension",
    "has_content_issue",
    "classify_content",
    "inspect_file",
    "TAB_WIDTH",
    "expand_tabs",
    "fix_content",
    "fix_file",
]
