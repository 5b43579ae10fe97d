"""End-to-end tests for release discovery and bumping."""

from __future__ import annotations

from pathlib import Path

import pygit2
import pytest

from git_semver.config.models import CommitsConfig
from git_semver.core.project import Project
from git_semver.core.version import BumpType, Version
from git_semver.exceptions import (
    NoChangesDetectedError,
    NoReleasedVersionsError,
    VersionNotFoundError,
)
from git_semver.project.version_file import VersionFile


def _head_commit(repo: pygit2.Repository) -> pygit2.Commit:
    return repo[repo.head.target]


def _tag_target(repo: pygit2.Repository, name: str) -> pygit2.Oid:
    return repo.revparse_single(f"refs/tags/{name}").peel(pygit2.Commit).id


def _add_file(repo: pygit2.Repository, name: str, content: str) -> Path:
    path = Path(repo.workdir) / name
    path.write_text(content)
    repo.index.add(name)
    repo.index.write()
    return path


class TestDiscovery:
    """Tests for latest and next version discovery."""

    def test_latest_version(self, temp_repo, make_commit, make_tag):
        """The highest release tag is the latest version."""
        make_tag("1.0.0")
        make_commit("feat: a")
        make_tag("1.1.0")
        make_commit("fix: b")
        make_tag("unrelated")

        project = Project.open(temp_repo.workdir)

        assert project.latest_version() == Version(1, 1, 0)
        assert project.tags() == ["1.0.0", "1.1.0"]

    def test_latest_is_idempotent(self, temp_repo, make_tag):
        """Repeated queries give the same answer and change nothing."""
        make_tag("1.0.0")
        project = Project.open(temp_repo.workdir)
        refs_before = sorted(temp_repo.references)

        assert project.latest_version() == project.latest_version()
        assert sorted(temp_repo.references) == refs_before

    def test_no_release(self, temp_repo):
        """A project without release tags has no latest version."""
        with pytest.raises(NoReleasedVersionsError):
            Project.open(temp_repo.workdir).latest_version()

    def test_next_version(self, temp_repo, make_commit, make_tag):
        """feat and fix after 1.0.0 give 1.1.0."""
        make_tag("1.0.0")
        make_commit("feat: add login")
        make_commit("fix: typo")

        project = Project.open(temp_repo.workdir)

        assert project.next_increment() == BumpType.MINOR
        assert project.next_version() == Version(1, 1, 0)

    def test_next_version_breaking(self, temp_repo, make_commit, make_tag):
        """A breaking change gives a major release."""
        make_tag("1.4.2")
        make_commit("fix: typo")
        make_commit("refactor!: drop python 3.10")

        assert str(Project.open(temp_repo.workdir).next_version()) == "2.0.0"

    def test_commits_before_release_are_ignored(self, temp_repo, make_commit, make_tag):
        """Only commits after the latest release count."""
        make_commit("feat!: old breaking change")
        make_tag("1.0.0")
        make_commit("fix: typo")

        assert str(Project.open(temp_repo.workdir).next_version()) == "1.0.1"

    def test_unreleased_project_starts_at_zero(self, temp_repo, make_commit):
        """Without tags all commits count, starting from 0.0.0."""
        make_commit("feat: first feature")

        assert str(Project.open(temp_repo.workdir).next_version()) == "0.1.0"

    def test_next_without_changes_is_latest(self, temp_repo, make_commit, make_tag):
        """Nothing to release means the next version is the latest."""
        make_tag("1.0.0")
        make_commit("docs: readme")

        assert Project.open(temp_repo.workdir).next_version() == Version(1, 0, 0)

    def test_v_prefix_is_inherited(self, temp_repo, make_commit, make_tag):
        """The next version keeps the v of the latest tag."""
        make_tag("v1.0.0")
        make_commit("feat: x")

        assert str(Project.open(temp_repo.workdir).next_version()) == "v1.1.0"

    def test_v_prefix_forced(self, temp_repo, make_commit, make_tag):
        """The v prefix can be forced on."""
        make_tag("1.0.0")
        make_commit("feat: x")

        assert str(Project.open(temp_repo.workdir).next_version(v_prefix=True)) == "v1.1.0"

    def test_floating_major_tag_is_ignored(self, temp_repo, make_commit, make_tag):
        """A v1 tag next to v1.2.0 does not break discovery."""
        make_tag("v1.2.0")
        make_tag("v1")
        make_commit("fix: x")

        project = Project.open(temp_repo.workdir)

        assert str(project.latest_version()) == "v1.2.0"
        assert str(project.next_version()) == "v1.2.1"

    def test_v_prefix_forced_without_changes(self, temp_repo, make_commit, make_tag):
        """The forced v prefix also applies when nothing is to be released."""
        make_tag("1.0.0")
        make_commit("docs: readme")

        assert str(Project.open(temp_repo.workdir).next_version(v_prefix=True)) == "v1.0.0"

    def test_skip_release_commits(self, temp_repo, make_commit, make_tag):
        """Commits with a skip marker do not count."""
        make_tag("1.0.0")
        make_commit("feat: experimental [skip release]")
        make_commit("fix: typo")

        project = Project.open(
            temp_repo.workdir, commits_config=CommitsConfig(skip_release_patterns=["[skip release]"])
        )

        assert str(project.next_version()) == "1.0.1"


class TestSubProjects:
    """Tests for monorepo sub-projects."""

    def test_scoped_discovery(self, temp_repo, make_commit, make_tag):
        """A sub-project only sees its own tags."""
        make_tag("packages/api/1.0.0")
        make_tag("2.0.0")
        make_tag("packages/web/3.0.0")
        make_commit("feat: endpoint", path="packages/api/app.txt")

        project = Project.open(temp_repo.workdir, "packages/api")

        assert project.is_subproject
        assert project.latest_version() == Version(1, 0, 0)
        assert str(project.next_version()) == "1.1.0"

    def test_root_ignores_subproject_tags(self, temp_repo, make_tag):
        """Root releases are bare versions only."""
        make_tag("packages/api/1.0.0")

        with pytest.raises(NoReleasedVersionsError):
            Project.open(temp_repo.workdir).latest_version()

    def test_scoped_bump_tag_name(self, temp_repo, make_commit, make_tag):
        """Sub-project tags carry the directory prefix."""
        make_tag("packages/api/1.0.0")
        make_commit("fix: x")

        result = Project.open(temp_repo.workdir, "./packages/api/").bump(push=False)

        assert result.tag == "packages/api/1.0.1"
        assert "refs/tags/packages/api/1.0.1" in temp_repo.references


class TestBump:
    """Tests for Project.bump()."""

    def test_bump_tags_and_pushes(self, repo_with_remote, bare_repo, make_commit, make_tag):
        """Bump tags HEAD with the next version and pushes the tag."""
        make_tag("1.0.0")
        make_commit("feat: add login")
        make_commit("fix: typo")

        result = Project.open(repo_with_remote.workdir).bump()

        assert result.latest == Version(1, 0, 0)
        assert result.next == Version(1, 1, 0)
        assert result.increment == BumpType.MINOR
        assert result.tag == "1.1.0"
        assert result.commit_sha is None
        assert result.pushed == ["refs/tags/1.1.0:refs/tags/1.1.0"]

        assert _tag_target(repo_with_remote, "1.1.0") == repo_with_remote.head.target
        tag = repo_with_remote.revparse_single("refs/tags/1.1.0")
        assert tag.message.strip() == "Release 1.1.0"
        assert "refs/tags/1.1.0" in bare_repo.references

    def test_bump_makes_next_the_latest(self, temp_repo, make_commit, make_tag):
        """After a bump, latest reports the new version."""
        make_tag("1.0.0")
        make_commit("feat: x")
        project = Project.open(temp_repo.workdir)

        result = project.bump(push=False)

        assert project.latest_version() == result.next

    def test_nothing_to_release(self, temp_repo, make_commit, make_tag):
        """No qualifying commit raises and creates no tag."""
        make_tag("1.0.0")
        make_commit("docs: readme")
        make_commit("chore: deps")

        with pytest.raises(NoChangesDetectedError, match="1.0.0"):
            Project.open(temp_repo.workdir).bump()

        assert Project.open(temp_repo.workdir).tags() == ["1.0.0"]

    def test_first_release(self, temp_repo, make_commit):
        """An unreleased project gets its first tag."""
        make_commit("feat: first")

        result = Project.open(temp_repo.workdir).bump(push=False)

        assert result.latest == Version(0, 0, 0)
        assert result.tag == "0.1.0"

    def test_v_prefix_tag(self, temp_repo, make_commit, make_tag):
        """A v-prefixed release is tagged with the prefix."""
        make_tag("1.0.0")
        make_commit("fix: x")

        result = Project.open(temp_repo.workdir).bump(v_prefix=True, push=False)

        assert result.tag == "v1.0.1"

    def test_version_files_are_committed(self, temp_repo, make_commit, make_tag):
        """Version files are rewritten and committed before tagging."""
        package_json = _add_file(temp_repo, "package.json", '{\n  "version": "1.0.0"\n}\n')
        make_commit("chore: add package.json")
        make_tag("1.0.0")
        make_commit("feat: add login")

        result = Project.open(temp_repo.workdir).bump(
            [VersionFile(package_json, '"version"')], push=False
        )

        assert package_json.read_text() == '{\n  "version": "1.1.0"\n}\n'
        assert result.files == [package_json]
        head = _head_commit(temp_repo)
        assert head.message == "bump: 1.0.0 -> 1.1.0"
        assert str(head.id) == result.commit_sha
        assert _tag_target(temp_repo, "1.1.0") == head.id

    def test_bump_commit_message_has_no_v_prefix(self, temp_repo, make_commit, make_tag):
        """The bump commit names bare versions even for v-prefixed tags."""
        version = _add_file(temp_repo, "VERSION", "version v1.0.0\n")
        make_commit("chore: add VERSION")
        make_tag("v1.0.0")
        make_commit("feat: x")

        result = Project.open(temp_repo.workdir).bump([VersionFile(version, "version")], push=False)

        assert _head_commit(temp_repo).message == "bump: 1.0.0 -> 1.1.0"
        assert version.read_text() == "version v1.1.0\n"
        assert result.tag == "v1.1.0"

    def test_version_files_with_branch_push(
        self, repo_with_remote, bare_repo, make_commit, make_tag
    ):
        """The bump commit's branch is pushed together with the tag."""
        version = _add_file(repo_with_remote, "VERSION", "version 1.0.0\n")
        make_commit("chore: add VERSION")
        make_tag("1.0.0")
        make_commit("fix: x")

        result = Project.open(repo_with_remote.workdir).bump([VersionFile(version, "version")])

        assert result.pushed == [
            "refs/heads/main:refs/heads/main",
            "refs/tags/1.0.1:refs/tags/1.0.1",
        ]
        assert bare_repo.references["refs/heads/main"].target == repo_with_remote.head.target

    def test_skip_tag(self, temp_repo, make_commit, make_tag):
        """skip_tag commits version files but neither tags nor pushes."""
        version = _add_file(temp_repo, "VERSION", "version 1.0.0\n")
        make_commit("chore: add VERSION")
        make_tag("1.0.0")
        make_commit("feat: x")

        result = Project.open(temp_repo.workdir).bump([VersionFile(version, "version")], skip_tag=True)

        assert result.tag is None
        assert result.commit_sha is not None
        assert result.pushed == []
        assert Project.open(temp_repo.workdir).tags() == ["1.0.0"]

    def test_failed_version_file_stops_before_commit(self, temp_repo, make_commit, make_tag):
        """A version file without the current version aborts the bump."""
        version = _add_file(temp_repo, "VERSION", "version 0.9.0\n")
        make_commit("chore: add VERSION")
        make_tag("1.0.0")
        make_commit("feat: x")
        head_before = temp_repo.head.target

        with pytest.raises(VersionNotFoundError):
            Project.open(temp_repo.workdir).bump([VersionFile(version, "version")])

        assert temp_repo.head.target == head_before
        assert Project.open(temp_repo.workdir).tags() == ["1.0.0"]

    def test_push_skipped_without_remote(self, temp_repo, make_commit, make_tag):
        """Without the remote the tag is created but not pushed."""
        make_tag("1.0.0")
        make_commit("fix: x")

        result = Project.open(temp_repo.workdir).bump()

        assert result.tag == "1.0.1"
        assert result.pushed == []
