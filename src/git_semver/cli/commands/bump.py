"""Implementation of the 'bump' command.

The bump command releases the next version: it rewrites version files,
commits them, tags HEAD and pushes the release to the remote.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from git_semver.cli.commands.common import fail, open_project
from git_semver.exceptions import GitSemverError, NoChangesDetectedError
from git_semver.project.version_file import parse_version_files
from git_semver.vcs.credentials import BasicAuth

if TYPE_CHECKING:
    from rich.console import Console


def run_bump(
    path: str | None,
    directory: str,
    version_files: list[str],
    username: str | None,
    password: str | None,
    v_prefix: bool,
    skip_tag: bool,
    push: bool | None,
    console: Console,
    err_console: Console,
) -> None:
    """Run the bump command.

    Command-line values take precedence over ``[tool.git-semver]``.

    Args:
        path: Directory inside the repository (defaults to the working directory)
        directory: Sub-project directory, empty for the repository root
        version_files: ``filename:key`` descriptors, relative to the working directory
        username: Username for pushing over HTTPS
        password: Password or token for pushing over HTTPS
        v_prefix: Give the next version a leading ``v``
        skip_tag: Rewrite and commit version files, but neither tag nor push
        push: Push the release; None defers to the configuration
        console: Console for standard output
        err_console: Console for error output
    """
    project, config = open_project(path, directory, err_console)

    config = config.model_copy(
        update={
            "v_prefix": v_prefix or config.v_prefix,
            "skip_tag": skip_tag or config.skip_tag,
            "push": config.push if push is None else push,
        }
    )

    # Version files from the command line are relative to the working
    # directory, those from the configuration to the repository root
    try:
        if version_files:
            files = parse_version_files(version_files, Path(path) if path else Path.cwd())
        else:
            files = parse_version_files(config.version_files, project.repo.path)
    except GitSemverError as e:
        fail(err_console, "Error:", e)

    credentials = BasicAuth(username, password or "") if username else None

    try:
        result = project.bump(
            files,
            credentials=credentials,
            v_prefix=config.v_prefix,
            skip_tag=config.skip_tag,
            push=config.push,
            remote=config.remote,
        )
    except NoChangesDetectedError as e:
        fail(err_console, "Nothing to release:", e)
    except GitSemverError as e:
        fail(err_console, "Error:", e)

    for file in result.files:
        err_console.print(f"  [green]✓[/] Updated version in {file}")
    if result.commit_sha:
        err_console.print(f"  [green]✓[/] Committed {result.commit_sha[:8]}")
    if result.tag:
        err_console.print(f"  [green]✓[/] Tagged {result.tag}")
    if result.pushed:
        err_console.print(f"  [green]✓[/] Pushed to {config.remote}")

    console.print(
        f"bump {project.directory or '.'} from {result.latest} to {result.next}",
        markup=False,
        highlight=False,
    )
