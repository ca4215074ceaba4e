"""Exception types raised by wscheck components."""

from __future__ import annotations


class WscheckError(Exception):
    """Base class for wscheck failures."""


class FixWriteError(WscheckError):
    """The fixer could not produce its temporary output file.

    This aborts the whole batch; files already fixed are left as they are.
    """

    def __init__(self, path: str, temp_path: str) -> None:
        super().__init__(f"temporary file {temp_path} was not created while fixing {path}")
        self.path = path
        self.temp_path = temp_path


class VcsError(WscheckError):
    """A version-control command failed or its binary is missing."""

    def __init__(self, command: list[str], detail: str) -> None:
        super().__init__(f"{' '.join(command)}: {detail}")
        self.command = command
        self.detail = detail


class SourceUnavailableError(WscheckError):
    """An explicitly requested file source could not be listed."""
