"""Release orchestration for a repository or one of its sub-projects.

The bump workflow runs these phases in order and stops at the first
error, leaving earlier side effects in place:

1. discover the latest release tag and the commits made since
2. resolve the increment (fail if nothing requires a release)
3. rewrite version files and commit them
4. create the annotated release tag
5. push the tag (and the bump commit) to the remote
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

import structlog

from git_semver.config.models import CommitsConfig
from git_semver.core.commits import filter_skip_release_commits, resolve_increment
from git_semver.core.tags import ReleaseTag, find_release_tags, normalize_directory, tag_name
from git_semver.core.version import INITIAL_VERSION, BumpType, Version
from git_semver.exceptions import NoChangesDetectedError, NoReleasedVersionsError
from git_semver.project.version_file import update_version_files
from git_semver.vcs.git import BRANCH_REF_PREFIX, TAG_REF_PREFIX, GitRepository

if TYPE_CHECKING:
    from git_semver.project.version_file import VersionFile
    from git_semver.vcs.credentials import BasicAuth
    from git_semver.vcs.git import Commit

logger = structlog.get_logger()

BUMP_COMMIT_MESSAGE = "bump: {latest} -> {next}"
TAG_MESSAGE = "Release {tag}"


@dataclass
class BumpResult:
    """What a bump did."""

    latest: Version
    next: Version
    increment: BumpType
    files: list[Path] = field(default_factory=list)
    commit_sha: str | None = None
    tag: str | None = None
    pushed: list[str] = field(default_factory=list)


class Project:
    """A repository, optionally scoped to a sub-project directory."""

    def __init__(
        self,
        repo: GitRepository,
        directory: str = "",
        commits_config: CommitsConfig | None = None,
    ) -> None:
        self.repo = repo
        self.directory = normalize_directory(directory)
        self.commits_config = commits_config or CommitsConfig()

    @classmethod
    def open(
        cls,
        root: Path | str,
        directory: str = "",
        commits_config: CommitsConfig | None = None,
    ) -> Project:
        """Open the repository containing ``root``.

        Raises:
            NotARepositoryError: If ``root`` is not inside a git repository
        """
        return cls(GitRepository(root), directory, commits_config)

    @property
    def is_subproject(self) -> bool:
        return bool(self.directory)

    # =========================================================================
    # Discovery
    # =========================================================================

    def releases(self) -> list[ReleaseTag]:
        """Release tags of this project, by ascending version."""
        releases = find_release_tags(self.repo.list_tags(), self.directory)
        logger.debug("releases_found", project=self.directory or ".", count=len(releases))
        return releases

    def tags(self) -> list[str]:
        return [release.name for release in self.releases()]

    def versions(self) -> list[Version]:
        return [release.version for release in self.releases()]

    def latest_release(self) -> ReleaseTag | None:
        releases = self.releases()
        return releases[-1] if releases else None

    def latest_version(self) -> Version:
        """Latest released version.

        Raises:
            NoReleasedVersionsError: If the project has no release tag
        """
        release = self.latest_release()
        if release is None:
            raise NoReleasedVersionsError(self.directory)
        return release.version

    def latest_version_or_initial(self, v_prefix: bool = False) -> Version:
        """Latest released version, or ``0.0.0`` for an unreleased project."""
        release = self.latest_release()
        if release is None:
            return INITIAL_VERSION.with_v_prefix(v_prefix)
        return release.version

    def tag_name(self, version: Version) -> str:
        return tag_name(self.directory, version)

    def commits_since_release(self, release: ReleaseTag | None = None) -> list[Commit]:
        """Commits after the latest release, or all commits when unreleased."""
        if release is None:
            release = self.latest_release()
        if release is None:
            return self.repo.list_all_commits()
        return self.repo.list_commits_in_range(f"{TAG_REF_PREFIX}{release.name}", "HEAD")

    # =========================================================================
    # Increment
    # =========================================================================

    def next_increment(self, release: ReleaseTag | None = None) -> BumpType:
        commits = filter_skip_release_commits(
            self.commits_since_release(release),
            self.commits_config.skip_release_patterns,
        )
        increment = resolve_increment(commits, self.commits_config)
        logger.debug("increment_resolved", commits=len(commits), increment=str(increment))
        return increment

    def next_version(self, v_prefix: bool = False) -> Version:
        """Version the next release would get.

        Without changes requiring a release this is the latest version.
        """
        latest, next_version, _ = self._plan(v_prefix)
        if next_version is not None:
            return next_version
        return latest.with_v_prefix() if v_prefix else latest

    def _plan(self, v_prefix: bool) -> tuple[Version, Version | None, BumpType]:
        release = self.latest_release()
        latest = release.version if release else INITIAL_VERSION.with_v_prefix(v_prefix)
        increment = self.next_increment(release)
        if increment == BumpType.NONE:
            return latest, None, increment

        next_version = latest.bump(increment)
        if v_prefix:
            next_version = next_version.with_v_prefix()
        return latest, next_version, increment

    # =========================================================================
    # Bump
    # =========================================================================

    def bump(
        self,
        version_files: Sequence[VersionFile] = (),
        *,
        credentials: BasicAuth | None = None,
        v_prefix: bool = False,
        skip_tag: bool = False,
        push: bool = True,
        remote: str = "origin",
    ) -> BumpResult:
        """Release the next version.

        Args:
            version_files: Files whose version string is rewritten and committed
            credentials: Basic-auth credentials for the push
            v_prefix: Give the next version a leading ``v``
            skip_tag: Rewrite and commit files, but neither tag nor push
            push: Push to ``remote`` (skipped when the remote does not exist)
            remote: Name of the remote to push to

        Raises:
            NoChangesDetectedError: If no commit since the last release requires one
            VersionFileError: If a version file cannot be rewritten
            GitOperationError: If committing, tagging or pushing fails
        """
        latest, next_version, increment = self._plan(v_prefix)
        if next_version is None:
            raise NoChangesDetectedError(str(latest))

        result = BumpResult(latest=latest, next=next_version, increment=increment)

        if version_files:
            result.files = update_version_files(version_files, latest, next_version)
            message = BUMP_COMMIT_MESSAGE.format(
                latest=latest.semver_text, next=next_version.semver_text
            )
            result.commit_sha = self.repo.create_commit(message)
            logger.info("bump_committed", sha=result.commit_sha, message=message)

        if skip_tag:
            return result

        name = self.tag_name(next_version)
        self.repo.create_tag(name, TAG_MESSAGE.format(tag=name))
        result.tag = name
        logger.info("tag_created", tag=name)

        if push:
            result.pushed = self._push(result, remote, credentials)

        return result

    def _push(self, result: BumpResult, remote: str, credentials: BasicAuth | None) -> list[str]:
        if not self.repo.has_remote(remote):
            logger.warning("push_skipped", reason="remote not found", remote=remote, tag=result.tag)
            return []

        refspecs = [f"{TAG_REF_PREFIX}{result.tag}:{TAG_REF_PREFIX}{result.tag}"]
        branch = self.repo.current_branch()
        if result.commit_sha and branch:
            refspecs.insert(0, f"{BRANCH_REF_PREFIX}{branch}:{BRANCH_REF_PREFIX}{branch}")

        self.repo.push(refspecs, remote=remote, credentials=credentials)
        logger.info("pushed", remote=remote, refspecs=refspecs)
        return refspecs
