"""Implementation of the 'latest' command.

Prints the latest released version of the project.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from git_semver.cli.commands.common import fail, open_project
from git_semver.exceptions import GitSemverError

if TYPE_CHECKING:
    from rich.console import Console


def run_latest(
    path: str | None,
    directory: str,
    console: Console,
    err_console: Console,
) -> None:
    """Run the latest command.

    Args:
        path: Directory inside the repository (defaults to the working directory)
        directory: Sub-project directory, empty for the repository root
        console: Console for standard output
        err_console: Console for error output
    """
    project, _ = open_project(path, directory, err_console)

    try:
        latest = project.latest_version()
    except GitSemverError as e:
        fail(err_console, "Error:", e)

    console.print(str(latest), markup=False, highlight=False)
