"""Exception hierarchy for git-semver.

All errors raised by the library derive from :class:`GitSemverError`,
so the command layer can report any failure with a single handler.
"""

from __future__ import annotations


class GitSemverError(Exception):
    """Base error for git-semver."""


# =============================================================================
# Configuration
# =============================================================================


class ConfigError(GitSemverError):
    """Configuration could not be loaded."""


class ConfigNotFoundError(ConfigError):
    """Configuration file does not exist."""


class ConfigValidationError(ConfigError):
    """Configuration content is invalid."""


# =============================================================================
# Versions
# =============================================================================


class InvalidVersionError(GitSemverError):
    """Text is not a valid semantic version."""

    def __init__(self, text: str, reason: str | None = None) -> None:
        message = f"Invalid version: {text!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
        self.text = text


class NoReleasedVersionsError(GitSemverError):
    """No release tag matches the project."""

    def __init__(self, directory: str = "") -> None:
        where = f" for project {directory!r}" if directory else ""
        super().__init__(f"No released versions found{where}")
        self.directory = directory


class NoChangesDetectedError(GitSemverError):
    """Commits since the last release do not require a new version."""

    def __init__(self, latest: str) -> None:
        super().__init__(f"No changes requiring a release since {latest}")
        self.latest = latest


# =============================================================================
# Version files
# =============================================================================


class MalformedVersionFileSpecError(GitSemverError):
    """A version file argument is not in the `filename:key` format."""

    def __init__(self, spec: str) -> None:
        super().__init__(f"{spec!r} is not correctly formatted. Should be `filename:key`")
        self.spec = spec


class VersionFileError(GitSemverError):
    """A version file could not be read or written."""


class VersionNotFoundError(VersionFileError):
    """The current version was not found after the key in a version file."""


# =============================================================================
# Git
# =============================================================================


class NotARepositoryError(GitSemverError):
    """Path is not inside a git repository."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Not a git repository: {path}")
        self.path = path


class GitOperationError(GitSemverError):
    """A git operation (commit, tag, push, ...) failed."""

    def __init__(self, operation: str, detail: str) -> None:
        super().__init__(f"git {operation} failed: {detail}")
        self.operation = operation
        self.detail = detail
