"""Command-line interface for git-semver."""

from __future__ import annotations

from git_semver.cli.app import app, main

__all__ = ["app", "main"]
