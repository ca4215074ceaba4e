"""Typed models for run configuration and per-file scan outcomes."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Literal

from wscheck.config import BASE_EXTENSIONS, EXTRA_EXTENSIONS, ExtensionsConfig

BatchMode = Literal["check", "fix"]

CLEAN_LABEL = ":"
EXECUTABLE_LABEL = "executable"


class ContentIssue(str, Enum):
    """Content problems, declared in report order."""

    TABS = "tabs"
    TRAILING_WHITESPACE = "trailingWhitespace"
    DOS = "DOS"


@dataclass(frozen=True, slots=True)
class RunOptions:
    """Immutable flags for one wscheck run."""

    verbose: bool = False
    debug: bool = False
    fix: bool = False
    check_executable: bool = False
    extended_extensions: bool = False
    all_files: bool = False
    from_stdin: bool = False
    revision: str | None = None

    @property
    def mode(self) -> BatchMode:
        return "fix" if self.fix else "check"

    @property
    def chatty(self) -> bool:
        """Whether OK / no-change lines are printed."""

        return self.verbose or self.debug

    def command_flags(self) -> list[str]:
        """Rebuild the short-flag command line that selects these options."""

        flags: list[str] = []
        if self.all_files:
            flags.append("-a")
        if self.verbose:
            flags.append("-v")
        if self.debug:
            flags.append("-V")
        if self.from_stdin:
            flags.append("-S")
        if self.extended_extensions:
            flags.append("-E")
        if self.fix:
            flags.append("-F")
        if self.revision is not None:
            flags.extend(["-r", self.revision])
        if self.check_executable:
            flags.append("-x")
        return flags


@dataclass(frozen=True, slots=True)
class ExtensionSets:
    """Base and extended suffix sets consulted by the extension matcher."""

    base: frozenset[str] = frozenset(BASE_EXTENSIONS)
    extra: frozenset[str] = frozenset(EXTRA_EXTENSIONS)

    @classmethod
    def from_config(cls, config: ExtensionsConfig) -> "ExtensionSets":
        return cls(base=frozenset(config.base), extra=frozenset(config.extra))

    def selected(self, extended: bool) -> frozenset[str]:
        return self.base | self.extra if extended else self.base


@dataclass(frozen=True, slots=True)
class CheckResult:
    """Outcome of inspecting one path without modifying it."""

    path: str
    executable: bool = False
    issues: frozenset[ContentIssue] = field(default_factory=frozenset)

    @property
    def label(self) -> str:
        names: list[str] = []
        if self.executable:
            names.append(EXECUTABLE_LABEL)
        names.extend(issue.value for issue in ContentIssue if issue in self.issues)
        if not names:
            return CLEAN_LABEL
        return "".join(f"{name}:" for name in names)

    @property
    def failed(self) -> bool:
        return self.label != CLEAN_LABEL


@dataclass(frozen=True, slots=True)
class FixOutcome:
    """Outcome of fixing one path."""

    path: str
    executable_cleared: bool = False
    content_rewritten: bool = False

    @property
    def changed(self) -> bool:
        """A path earns at most one unit of credit, whatever was corrected."""

        return self.executable_cleared or self.content_rewritten
