"""Command implementations for the git-semver CLI."""

from __future__ import annotations

from git_semver.cli.commands.bump import run_bump
from git_semver.cli.commands.latest import run_latest
from git_semver.cli.commands.next import run_next

__all__ = [
    "run_bump",
    "run_latest",
    "run_next",
]
