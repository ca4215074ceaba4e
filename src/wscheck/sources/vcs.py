"""Version-control collaborators that list candidate file paths."""

from __future__ import annotations

import logging
import os
import subprocess
from pathlib import Path
from typing import Callable, Protocol

from wscheck.config import VcsConfig
from wscheck.errors import VcsError

LOGGER = logging.getLogger(__name__)

MERCURIAL_FILES_TEMPLATE = "{join(files, '\\n')}\\n"
MQ_REVSET = "qbase:qtip"
HG_OUTGOING_REVSET = "outgoing()"
GIT_OUTGOING_RANGE = "@{upstream}..HEAD"

CommandRunner = Callable[[list[str], Path | None], str]


def run_command(command: list[str], cwd: Path | None = None) -> str:
    """Run command and return its stdout; raise VcsError on any failure."""

    try:
        completed = subprocess.run(
            command,
            cwd=cwd,
            capture_output=True,
            text=True,
            check=True,
        )
    except FileNotFoundError as exc:
        raise VcsError(command, f"executable not found: {exc.filename or command[0]}") from exc
    except subprocess.CalledProcessError as exc:
        detail = (exc.stderr or "").strip() or f"exit status {exc.returncode}"
        raise VcsError(command, detail) from exc
    return completed.stdout


def split_lines(output: str) -> list[str]:
    """One entry per non-blank output line, in order."""

    return [line for line in output.splitlines() if line.strip()]


def unique_in_order(paths: list[str]) -> list[str]:
    seen: set[str] = set()
    result: list[str] = []
    for path in paths:
        if path not in seen:
            seen.add(path)
            result.append(path)
    return result


class VcsClient(Protocol):
    """Narrow interface the file source resolver needs from a VCS."""

    def tracked_files(self) -> list[str]: ...

    def modified_files(self) -> list[str]: ...

    def applied_patches(self) -> list[str]: ...

    def patch_queue_files(self) -> list[str]: ...

    def outgoing_files(self) -> list[str]: ...

    def revision_files(self, spec: str) -> list[str]: ...


class _CommandClient:
    """Shared plumbing for clients backed by a command-line binary.

    Commands run at the repository root and the paths they print are
    rebased onto the caller's working directory, so a run started from a
    subdirectory still opens the right files.
    """

    default_executable = ""
    root_args: tuple[str, ...] = ()

    def __init__(
        self,
        executable: str | None = None,
        root: Path | None = None,
        runner: CommandRunner = run_command,
        logger: logging.Logger | None = None,
    ) -> None:
        self.executable = executable or self.default_executable
        self._root = root
        self._runner = runner
        self._logger = logger or LOGGER

    def repository_root(self) -> Path:
        """Return the repository root, asking the VCS on first use."""

        if self._root is None:
            command = [self.executable, *self.root_args]
            self._logger.debug("vcs.run command=%s", command)
            output = self._runner(command, None).strip()
            if not output:
                raise VcsError(command, "no repository root reported")
            self._root = Path(output)
        return self._root

    def _lines(self, *args: str) -> list[str]:
        root = self.repository_root()
        command = [self.executable, *args]
        self._logger.debug("vcs.run command=%s cwd=%s", command, root)
        return split_lines(self._runner(command, root))

    def _paths(self, *args: str) -> list[str]:
        """Root-relative output lines as paths usable from the current directory."""

        root = self.repository_root()
        return [os.path.relpath(root / line) for line in self._lines(*args)]


class MercurialClient(_CommandClient):
    """Mercurial backend, including the MQ patch queue."""

    default_executable = "hg"
    root_args = ("root",)

    def tracked_files(self) -> list[str]:
        return self._paths("manifest")

    def modified_files(self) -> list[str]:
        # Run at the root, status prints root-relative names like manifest and log.
        return self._paths("status", "--modified", "--added", "--no-status")

    def applied_patches(self) -> list[str]:
        return self._lines("qapplied")

    def patch_queue_files(self) -> list[str]:
        return self.revision_files(MQ_REVSET)

    def outgoing_files(self) -> list[str]:
        return self.revision_files(HG_OUTGOING_REVSET)

    def revision_files(self, spec: str) -> list[str]:
        return unique_in_order(self._paths("log", "-r", spec, "--template", MERCURIAL_FILES_TEMPLATE))


class GitClient(_CommandClient):
    """Git backend. Git has no patch queue, so that source is always empty."""

    default_executable = "git"
    root_args = ("rev-parse", "--show-toplevel")

    def tracked_files(self) -> list[str]:
        return self._paths("ls-files")

    def modified_files(self) -> list[str]:
        return self._paths("diff", "--name-only", "--diff-filter=AM", "HEAD")

    def applied_patches(self) -> list[str]:
        return []

    def patch_queue_files(self) -> list[str]:
        return []

    def outgoing_files(self) -> list[str]:
        return self.revision_files(GIT_OUTGOING_RANGE)

    def revision_files(self, spec: str) -> list[str]:
        return unique_in_order(self._paths("log", "--pretty=format:", "--name-only", spec))


def build_vcs_client(config: VcsConfig, root: Path | None = None, logger: logging.Logger | None = None) -> VcsClient:
    """Return the client for the configured backend."""

    if config.backend == "git":
        return GitClient(executable=config.executable, root=root, logger=logger)
    return MercurialClient(executable=config.executable, root=root, logger=logger)
