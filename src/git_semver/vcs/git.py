"""Git repository access via pygit2.

This is the only module that talks to git. It exposes the small set of
operations the release workflow needs and maps every pygit2 failure to
:class:`~git_semver.exceptions.GitOperationError`.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pygit2
from pygit2.enums import ObjectType, SortMode

from git_semver.exceptions import GitOperationError, NotARepositoryError
from git_semver.vcs.credentials import BasicAuth, PushCallbacks

TAG_REF_PREFIX = "refs/tags/"
BRANCH_REF_PREFIX = "refs/heads/"

_WALK_ORDER = SortMode.TOPOLOGICAL | SortMode.TIME


@dataclass(frozen=True)
class Commit:
    """A commit as seen by the release workflow."""

    sha: str
    message: str
    author_name: str
    author_email: str
    date: datetime

    @property
    def subject(self) -> str:
        return self.message.split("\n", 1)[0].strip()

    @classmethod
    def from_pygit2(cls, commit: pygit2.Commit) -> Commit:
        tz = timezone(timedelta(minutes=commit.commit_time_offset))
        return cls(
            sha=str(commit.id),
            message=commit.message,
            author_name=commit.author.name,
            author_email=commit.author.email,
            date=datetime.fromtimestamp(commit.commit_time, tz=tz),
        )


class GitRepository:
    """Owns a pygit2.Repository and exposes release-related operations."""

    def __init__(self, path: Path | str) -> None:
        self._requested_path = Path(path)
        discovered = pygit2.discover_repository(str(self._requested_path))
        if discovered is None:
            raise NotARepositoryError(str(self._requested_path))
        try:
            self._repo = pygit2.Repository(discovered)
        except pygit2.GitError as e:
            raise NotARepositoryError(str(self._requested_path)) from e
        if self._repo.workdir is None:
            raise NotARepositoryError(f"{self._requested_path} (bare repository)")

    @property
    def path(self) -> Path:
        """Working tree root."""
        return Path(self._repo.workdir)

    @property
    def repo(self) -> pygit2.Repository:
        return self._repo

    # =========================================================================
    # Read Operations
    # =========================================================================

    def list_tags(self) -> list[str]:
        """Return all tag names, without the ``refs/tags/`` prefix."""
        return sorted(
            name[len(TAG_REF_PREFIX) :]
            for name in self._repo.references
            if name.startswith(TAG_REF_PREFIX)
        )

    def list_all_commits(self) -> list[Commit]:
        """Return every commit reachable from HEAD, most recent first."""
        if self._repo.head_is_unborn:
            return []
        head = self._resolve_commit("HEAD")
        return [Commit.from_pygit2(c) for c in self._repo.walk(head.id, _WALK_ORDER)]

    def list_commits_in_range(self, from_ref: str, to_ref: str = "HEAD") -> list[Commit]:
        """Return commits in ``from_ref..to_ref``, most recent first.

        ``from_ref`` is excluded and ``to_ref`` included, as in ``git log A..B``.
        """
        start = self._resolve_commit(to_ref)
        stop = self._resolve_commit(from_ref)
        walker = self._repo.walk(start.id, _WALK_ORDER)
        walker.hide(stop.id)
        return [Commit.from_pygit2(c) for c in walker]

    def current_branch(self) -> str | None:
        """Name of the checked-out branch, or None when HEAD is detached or unborn."""
        if self._repo.head_is_unborn or self._repo.head_is_detached:
            return None
        return self._repo.head.shorthand

    def has_remote(self, name: str) -> bool:
        return name in [r.name for r in self._repo.remotes]

    # =========================================================================
    # Write Operations
    # =========================================================================

    def create_commit(self, message: str) -> str:
        """Stage all working-tree changes and commit them on HEAD. Returns the sha."""
        signature = self._default_signature()
        try:
            index = self._repo.index
            index.add_all()
            index.write()
            tree = index.write_tree()
            parents = [] if self._repo.head_is_unborn else [self._resolve_commit("HEAD").id]
            oid = self._repo.create_commit("HEAD", signature, signature, message, tree, parents)
        except pygit2.GitError as e:
            raise GitOperationError("commit", str(e)) from e
        return str(oid)

    def create_tag(self, name: str, message: str) -> str:
        """Create an annotated tag at HEAD. Returns the tag object sha."""
        signature = self._default_signature()
        target = self._resolve_commit("HEAD")
        if f"{TAG_REF_PREFIX}{name}" in self._repo.references:
            raise GitOperationError("tag", f"tag {name!r} already exists")
        try:
            oid = self._repo.create_tag(name, target.id, ObjectType.COMMIT, signature, message)
        except (pygit2.GitError, ValueError) as e:
            raise GitOperationError("tag", str(e)) from e
        return str(oid)

    def push(
        self,
        refspecs: Sequence[str],
        remote: str = "origin",
        credentials: BasicAuth | None = None,
    ) -> None:
        """Push refspecs to a remote."""
        if not self.has_remote(remote):
            raise GitOperationError("push", f"remote {remote!r} not found")
        callbacks = PushCallbacks(credentials)
        try:
            self._repo.remotes[remote].push(list(refspecs), callbacks=callbacks)
        except pygit2.GitError as e:
            raise GitOperationError("push", str(e)) from e
        callbacks.raise_for_rejected()

    # =========================================================================
    # Helpers
    # =========================================================================

    def _resolve_commit(self, ref: str) -> pygit2.Commit:
        try:
            obj = self._repo.revparse_single(ref)
            commit = obj.peel(pygit2.Commit)
        except (pygit2.GitError, KeyError, ValueError) as e:
            raise GitOperationError("rev-parse", f"cannot resolve {ref!r} to a commit") from e
        return commit

    def _default_signature(self) -> pygit2.Signature:
        try:
            return self._repo.default_signature
        except (pygit2.GitError, KeyError) as e:
            raise GitOperationError(
                "signature", "user.name and user.email must be configured"
            ) from e
