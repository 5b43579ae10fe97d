"""Project file manipulation."""

from __future__ import annotations

from git_semver.project.version_file import (
    VersionFile,
    parse_version_files,
    update_version_files,
)

__all__ = [
    "VersionFile",
    "parse_version_files",
    "update_version_files",
]
