"""Decide whether a path's suffix puts it in the content-checked set."""

from __future__ import annotations

from pathlib import PurePath

from wscheck.models import ExtensionSets

DEFAULT_EXTENSION_SETS = ExtensionSets()


def matches_extension(
    path: str | PurePath,
    extended: bool = False,
    extensions: ExtensionSets | None = None,
) -> bool:
    """Return True if the final path component ends with a checked suffix.

    The comparison is case-sensitive and the name is not normalized, so
    ``Foo.C`` is not a ``.c`` file and ``.c`` alone is treated as a name
    ending in ``.c``.
    """

    name = PurePath(path).name
    suffixes = (extensions or DEFAULT_EXTENSION_SETS).selected(extended)
    return any(name.endswith(suffix) for suffix in suffixes)
