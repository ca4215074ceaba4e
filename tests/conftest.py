"""Shared fixtures for wscheck tests."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable

import pytest

from wscheck.errors import VcsError
from wscheck.logging_utils import PACKAGE_LOGGER


class FakeVcs:
    """In-memory VcsClient; a source set to None fails like a broken command."""

    def __init__(
        self,
        tracked: list[str] | None = None,
        modified: list[str] | None = None,
        patches: list[str] | None = None,
        queued: list[str] | None = None,
        outgoing: list[str] | None = None,
        revisions: dict[str, list[str]] | None = None,
    ) -> None:
        self.tracked = tracked
        self.modified = modified
        self.patches = patches
        self.queued = queued
        self.outgoing = outgoing
        self.revisions = revisions or {}
        self.calls: list[str] = []

    def _answer(self, name: str, value: list[str] | None) -> list[str]:
        self.calls.append(name)
        if value is None:
            raise VcsError(["fake", name], "not available")
        return list(value)

    def tracked_files(self) -> list[str]:
        return self._answer("tracked", self.tracked)

    def modified_files(self) -> list[str]:
        return self._answer("modified", self.modified)

    def applied_patches(self) -> list[str]:
        return self._answer("patches", self.patches)

    def patch_queue_files(self) -> list[str]:
        return self._answer("queued", self.queued)

    def outgoing_files(self) -> list[str]:
        return self._answer("outgoing", self.outgoing)

    def revision_files(self, spec: str) -> list[str]:
        return self._answer(f"revision:{spec}", self.revisions.get(spec))


@pytest.fixture
def fake_vcs_factory() -> Callable[..., FakeVcs]:
    return FakeVcs


@pytest.fixture
def write_file(tmp_path: Path) -> Callable[..., Path]:
    """Create a file under tmp_path with raw bytes and an optional mode."""

    def _write(name: str, content: bytes, mode: int = 0o644) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
        path.chmod(mode)
        return path

    return _write


@pytest.fixture(autouse=True)
def _reset_package_logger():
    yield
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture(autouse=True)
def _isolate_settings(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep user environment and repository settings out of tests."""

    for name in ("WSCHECK_SETTINGS_FILE", "WSCHECK_VCS__BACKEND", "WSCHECK_LOGGING__LEVEL"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("WSCHECK_SETTINGS_FILE", str(tmp_path / "absent-settings.yaml"))
