"""Pick the candidate path source for a run and stream its paths."""

from __future__ import annotations

import logging
from typing import Callable, Iterator, TextIO

from wscheck.errors import SourceUnavailableError, VcsError
from wscheck.models import RunOptions
from wscheck.sources.vcs import VcsClient

LOGGER = logging.getLogger(__name__)


def read_path_list(stream: TextIO) -> Iterator[str]:
    """Yield one path per non-blank line of stream, without the line break."""

    for line in stream:
        path = line.rstrip("\r\n")
        if path.strip():
            yield path


def _explicit_source(name: str, lister: Callable[[], list[str]], logger: logging.Logger) -> list[str]:
    try:
        paths = lister()
    except VcsError as exc:
        raise SourceUnavailableError(f"cannot list {name} files: {exc}") from exc
    logger.info("resolve.source name=%s count=%s", name, len(paths))
    return paths


def _default_chain(vcs: VcsClient, logger: logging.Logger) -> list[str]:
    """Uncommitted changes, then the applied patch queue, then outgoing changesets."""

    try:
        modified = vcs.modified_files()
    except VcsError as exc:
        logger.info("resolve.unavailable name=modified error=%s", exc)
        modified = []
    if modified:
        logger.info("resolve.source name=modified count=%s", len(modified))
        return modified

    try:
        patches = vcs.applied_patches()
    except VcsError as exc:
        logger.info("resolve.unavailable name=patch_queue error=%s", exc)
        patches = []
    if patches:
        try:
            queued = vcs.patch_queue_files()
        except VcsError as exc:
            logger.info("resolve.unavailable name=patch_queue error=%s", exc)
        else:
            logger.info("resolve.source name=patch_queue patches=%s count=%s", len(patches), len(queued))
            return queued

    try:
        outgoing = vcs.outgoing_files()
    except VcsError as exc:
        logger.info("resolve.unavailable name=outgoing error=%s", exc)
        return []
    logger.info("resolve.source name=outgoing count=%s", len(outgoing))
    return outgoing


def resolve_paths(
    options: RunOptions,
    vcs: VcsClient,
    stdin: TextIO | None = None,
    logger: logging.Logger | None = None,
) -> Iterator[str]:
    """Yield candidate paths from the source selected by options.

    Priority: stdin list, full manifest, explicit revision range, then the
    default chain. The VCS is only queried once iteration starts.
    """

    effective_logger = logger or LOGGER

    if options.from_stdin:
        if stdin is None:
            raise SourceUnavailableError("stdin file list requested but no stream was given")
        effective_logger.info("resolve.source name=stdin")
        yield from read_path_list(stdin)
        return

    if options.all_files:
        yield from _explicit_source("tracked", vcs.tracked_files, effective_logger)
        return

    if options.revision is not None:
        revision = options.revision
        yield from _explicit_source(f"revision {revision}", lambda: vcs.revision_files(revision), effective_logger)
        return

    yield from _default_chain(vcs, effective_logger)
