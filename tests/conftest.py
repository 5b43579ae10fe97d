"""Shared test fixtures."""

from __future__ import annotations

from collections.abc import Callable, Generator
from datetime import datetime
from pathlib import Path

import pygit2
import pytest

from git_semver.vcs.git import Commit

# =============================================================================
# Commit records
# =============================================================================


def _commit(sha: str, message: str) -> Commit:
    return Commit(sha, message, "Test", "test@test.com", datetime.now())


@pytest.fixture
def feat_commit() -> Commit:
    return _commit("feat123", "feat: add user authentication")


@pytest.fixture
def fix_commit() -> Commit:
    return _commit("fix456", "fix(core): handle empty config")


@pytest.fixture
def breaking_commit() -> Commit:
    return _commit(
        "break789",
        "refactor(api): rename endpoints\n\nBREAKING CHANGE: /v1 routes were removed",
    )


@pytest.fixture
def sample_commits(feat_commit: Commit, fix_commit: Commit, breaking_commit: Commit) -> list[Commit]:
    return [
        feat_commit,
        fix_commit,
        _commit("docs001", "docs: update readme"),
        _commit("chore002", "chore: bump dependencies"),
        breaking_commit,
    ]


# =============================================================================
# Repositories
# =============================================================================

CommitFactory = Callable[..., pygit2.Oid]


@pytest.fixture
def temp_repo(tmp_path: Path) -> Generator[pygit2.Repository, None, None]:
    """Create a temporary git repository with initial commit."""
    repo_path = tmp_path / "repo"
    repo_path.mkdir()

    repo = pygit2.init_repository(str(repo_path), initial_head="main")

    repo.config["user.name"] = "Test User"
    repo.config["user.email"] = "test@example.com"

    (repo_path / "README.md").write_text("# Test Repo\n")
    repo.index.add("README.md")
    repo.index.write()
    tree = repo.index.write_tree()
    sig = pygit2.Signature("Test User", "test@example.com")
    repo.create_commit("refs/heads/main", sig, sig, "Initial commit", tree, [])
    repo.set_head("refs/heads/main")

    yield repo


@pytest.fixture
def make_commit(temp_repo: pygit2.Repository) -> CommitFactory:
    """Commit a change to a file in ``temp_repo`` with the given message."""
    workdir = Path(temp_repo.workdir)
    counter = {"n": 0}

    def _make(message: str, path: str = "changes.txt") -> pygit2.Oid:
        counter["n"] += 1
        target = workdir / path
        target.parent.mkdir(parents=True, exist_ok=True)
        with target.open("a") as f:
            f.write(f"change {counter['n']}\n")
        temp_repo.index.add(path)
        temp_repo.index.write()
        tree = temp_repo.index.write_tree()
        sig = temp_repo.default_signature
        return temp_repo.create_commit("HEAD", sig, sig, message, tree, [temp_repo.head.target])

    return _make


@pytest.fixture
def make_tag(temp_repo: pygit2.Repository) -> Callable[..., None]:
    """Tag HEAD, annotated by default."""

    def _make(name: str, annotated: bool = True) -> None:
        if annotated:
            temp_repo.create_tag(
                name,
                temp_repo.head.target,
                pygit2.enums.ObjectType.COMMIT,
                temp_repo.default_signature,
                f"Release {name}",
            )
        else:
            temp_repo.references.create(f"refs/tags/{name}", temp_repo.head.target)

    return _make


@pytest.fixture
def bare_repo(tmp_path: Path) -> Generator[pygit2.Repository, None, None]:
    """Create a bare repository for remote testing."""
    bare_path = tmp_path / "bare.git"
    yield pygit2.init_repository(str(bare_path), bare=True)


@pytest.fixture
def repo_with_remote(
    temp_repo: pygit2.Repository,
    bare_repo: pygit2.Repository,
) -> pygit2.Repository:
    """Repository with a configured ``origin`` remote."""
    temp_repo.remotes.create("origin", str(Path(bare_repo.path).resolve()))

    remote = temp_repo.remotes["origin"]
    remote.push(["refs/heads/main:refs/heads/main"])

    return temp_repo
