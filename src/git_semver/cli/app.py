"""git-semver command-line application."""

from __future__ import annotations

import typer
from rich.console import Console

from git_semver import __version__
from git_semver.cli.commands import run_bump, run_latest, run_next
from git_semver.log import configure_logging

app = typer.Typer(
    name="git-semver",
    help="Easily manage your project's versions.",
    no_args_is_help=True,
    add_completion=False,
)

console = Console()
err_console = Console(stderr=True)

PROJECT_HELP = "Sub-project directory, relative to the repository root (empty for the root)"


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"git-semver {__version__}", highlight=False)
        raise typer.Exit()


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit",
    ),
) -> None:
    """Easily manage your project's versions."""
    configure_logging(level="DEBUG" if verbose else "WARNING")


@app.command()
def bump(
    project: str = typer.Option("", "--project", "-p", help=PROJECT_HELP),
    version_file: list[str] | None = typer.Option(
        None,
        "--version-file",
        "-f",
        help="Version file to update, as `filename:key` (i.e. `package.json:\"version\"`)",
    ),
    username: str | None = typer.Option(
        None, "--username", "-u", envvar="GIT_SEMVER_USERNAME", help="Username for the push"
    ),
    password: str | None = typer.Option(
        None,
        "--password",
        "-P",
        envvar="GIT_SEMVER_PASSWORD",
        help="Password or token for the push",
    ),
    v_prefix: bool = typer.Option(False, "--v-prefix", help="Prefix the version with `v`"),
    skip_tag: bool = typer.Option(
        False, "--skip-tag", help="Update and commit version files without tagging or pushing"
    ),
    no_push: bool = typer.Option(False, "--no-push", help="Do not push the release"),
) -> None:
    """Bumps the latest version to the next version and tags it."""
    run_bump(
        path=None,
        directory=project,
        version_files=version_file or [],
        username=username,
        password=password,
        v_prefix=v_prefix,
        skip_tag=skip_tag,
        push=False if no_push else None,
        console=console,
        err_console=err_console,
    )


@app.command("next")
def next_(
    project: str = typer.Option("", "--project", "-p", help=PROJECT_HELP),
    v_prefix: bool = typer.Option(False, "--v-prefix", help="Prefix the version with `v`"),
) -> None:
    """Outputs the next unreleased version."""
    run_next(
        path=None,
        directory=project,
        v_prefix=v_prefix,
        console=console,
        err_console=err_console,
    )


@app.command()
def latest(
    project: str = typer.Option("", "--project", "-p", help=PROJECT_HELP),
) -> None:
    """Outputs the latest released version."""
    run_latest(
        path=None,
        directory=project,
        console=console,
        err_console=err_console,
    )


def main() -> None:
    app()
