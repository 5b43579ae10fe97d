"""git-semver: semantic versions from conventional commits and git tags."""

from __future__ import annotations

__version__ = "0.1.0"
