"""Candidate path sources: stdin lists and version-control collaborators."""

from wscheck.sources.resolve import read_path_list, resolve_paths
from wscheck.sources.vcs import GitClient, MercurialClient, VcsClient, build_vcs_client, run_command

__all__ = [
    "read_path_list",
    "resolve_paths",
    "VcsClient",
    "MercurialClient",
    "GitClient",
    "build_vcs_client",
    "run_command",
]
