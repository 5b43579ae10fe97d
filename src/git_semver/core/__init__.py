"""Core business logic for git-semver.

This module contains the fundamental building blocks:
- Version parsing and manipulation (semver 2.0)
- Conventional commit parsing and increment resolution
- Release tag discovery and naming
- Release orchestration
"""

from __future__ import annotations

from git_semver.core.commits import (
    ParsedCommit,
    calculate_bump,
    classify_message,
    filter_skip_release_commits,
    parse_commits,
    resolve_increment,
)
from git_semver.core.project import BumpResult, Project
from git_semver.core.tags import ReleaseTag, find_release_tags, tag_name, tag_pattern
from git_semver.core.version import BumpType, Version, parse_version

__all__ = [
    # Version
    "BumpType",
    "Version",
    "parse_version",
    # Commits
    "ParsedCommit",
    "calculate_bump",
    "classify_message",
    "filter_skip_release_commits",
    "parse_commits",
    "resolve_increment",
    # Tags
    "ReleaseTag",
    "find_release_tags",
    "tag_name",
    "tag_pattern",
    # Project
    "BumpResult",
    "Project",
]
