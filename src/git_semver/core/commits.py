"""Conventional commit parsing and increment resolution.

A commit header looks like ``type(scope)!: description``. The increment
a commit asks for is the highest of:

- MAJOR when the header carries ``!`` or any line is a breaking-change footer
- the increment mapped to its type (``feat`` -> MINOR, ``fix`` -> PATCH)

Everything else, including non-conventional messages, asks for nothing.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

from git_semver.config.models import CommitsConfig
from git_semver.core.version import BumpType

if TYPE_CHECKING:
    from git_semver.vcs.git import Commit

HEADER_PATTERN = re.compile(
    r"^(?P<type>\w+)(?:\((?P<scope>[^()]*)\))?(?P<breaking>!)?:\s*(?P<description>.*)$"
)


@dataclass(frozen=True)
class ParsedCommit:
    """A commit message split into its conventional parts."""

    message: str
    commit_type: str | None
    scope: str | None
    description: str
    is_breaking: bool
    sha: str = ""

    @property
    def is_conventional(self) -> bool:
        return self.commit_type is not None

    @classmethod
    def from_message(cls, message: str, breaking_pattern: str, sha: str = "") -> ParsedCommit:
        """Parse a raw commit message.

        Args:
            message: Full commit message (subject, body and footers)
            breaking_pattern: Regex matched against every line to find
                breaking-change footers
            sha: Commit sha, kept for reference
        """
        header = message.strip().split("\n", 1)[0].strip()
        has_breaking_footer = (
            re.search(breaking_pattern, message, re.IGNORECASE | re.MULTILINE) is not None
        )

        match = HEADER_PATTERN.match(header)
        if match is None:
            return cls(
                message=message,
                commit_type=None,
                scope=None,
                description=header,
                is_breaking=has_breaking_footer,
                sha=sha,
            )

        return cls(
            message=message,
            commit_type=match.group("type").lower(),
            scope=match.group("scope"),
            description=match.group("description").strip(),
            is_breaking=bool(match.group("breaking")) or has_breaking_footer,
            sha=sha,
        )

    @classmethod
    def from_commit(cls, commit: Commit, breaking_pattern: str) -> ParsedCommit:
        return cls.from_message(commit.message, breaking_pattern, sha=commit.sha)

    def bump_type(self, config: CommitsConfig) -> BumpType:
        """Highest increment requested by this commit."""
        bumps = [BumpType.NONE]
        if self.is_breaking:
            bumps.append(BumpType.MAJOR)
        if self.commit_type in config.types_major:
            bumps.append(BumpType.MAJOR)
        if self.commit_type in config.types_minor:
            bumps.append(BumpType.MINOR)
        if self.commit_type in config.types_patch:
            bumps.append(BumpType.PATCH)
        return max(bumps)


def parse_commits(commits: Iterable[Commit], config: CommitsConfig) -> list[ParsedCommit]:
    return [ParsedCommit.from_commit(c, config.breaking_pattern) for c in commits]


def classify_message(message: str, config: CommitsConfig | None = None) -> BumpType:
    """Return the increment a single commit message asks for."""
    config = config or CommitsConfig()
    return ParsedCommit.from_message(message, config.breaking_pattern).bump_type(config)


def calculate_bump(parsed: Iterable[ParsedCommit], config: CommitsConfig) -> BumpType:
    """Return the dominant increment across parsed commits.

    The result is the maximum of the per-commit increments, so it does not
    depend on commit order. An empty sequence yields ``BumpType.NONE``.
    """
    return max((pc.bump_type(config) for pc in parsed), default=BumpType.NONE)


def resolve_increment(commits: Iterable[Commit], config: CommitsConfig | None = None) -> BumpType:
    """Classify every commit and return the dominant increment."""
    config = config or CommitsConfig()
    return calculate_bump(parse_commits(commits, config), config)


def filter_skip_release_commits(commits: Sequence[Commit], patterns: Sequence[str]) -> list[Commit]:
    """Drop commits whose message contains one of the skip markers.

    Markers are plain text, matched case-insensitively anywhere in the message.
    """
    if not patterns:
        return list(commits)
    markers = [p.lower() for p in patterns]
    return [c for c in commits if not any(m in c.message.lower() for m in markers)]
