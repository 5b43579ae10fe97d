"""Implementation of the 'next' command.

Prints the version the next release would get, without changing anything.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from git_semver.cli.commands.common import fail, open_project
from git_semver.exceptions import GitSemverError

if TYPE_CHECKING:
    from rich.console import Console


def run_next(
    path: str | None,
    directory: str,
    v_prefix: bool,
    console: Console,
    err_console: Console,
) -> None:
    """Run the next command.

    Args:
        path: Directory inside the repository (defaults to the working directory)
        directory: Sub-project directory, empty for the repository root
        v_prefix: Give the next version a leading ``v``
        console: Console for standard output
        err_console: Console for error output
    """
    project, config = open_project(path, directory, err_console)

    try:
        next_version = project.next_version(v_prefix=v_prefix or config.v_prefix)
    except GitSemverError as e:
        fail(err_console, "Error:", e)

    console.print(str(next_version), markup=False, highlight=False)
