"""Helpers shared by the command implementations."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, NoReturn

from rich.markup import escape

from git_semver.config import GitSemverConfig, load_config
from git_semver.core.project import Project
from git_semver.exceptions import GitSemverError

if TYPE_CHECKING:
    from rich.console import Console


def fail(err_console: Console, message: str, error: BaseException | None = None) -> NoReturn:
    """Print an error and exit with status 1."""
    err_console.print(f"[red]{message}[/] {escape(str(error))}" if error else f"[red]{message}[/]")
    raise SystemExit(1) from error


def open_project(
    path: str | None,
    directory: str,
    err_console: Console,
) -> tuple[Project, GitSemverConfig]:
    """Open the project and load its configuration, exiting on failure."""
    cwd = Path(path) if path else Path.cwd()

    try:
        project = Project.open(cwd, directory)
    except GitSemverError as e:
        fail(err_console, "Error:", e)

    try:
        config = load_config(project.repo.path)
    except GitSemverError as e:
        fail(err_console, "Error loading config:", e)

    project.commits_config = config.commits
    return project, config
