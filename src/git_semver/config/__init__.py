"""Configuration management for git-semver."""

from __future__ import annotations

from git_semver.config.loader import load_config
from git_semver.config.models import CommitsConfig, GitSemverConfig

__all__ = [
    "CommitsConfig",
    "GitSemverConfig",
    "load_config",
]
