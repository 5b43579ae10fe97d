"""Version control access for git-semver."""

from __future__ import annotations

from git_semver.vcs.credentials import BasicAuth
from git_semver.vcs.git import Commit, GitRepository

__all__ = [
    "BasicAuth",
    "Commit",
    "GitRepository",
]
