"""Load git-semver configuration from pyproject.toml."""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from git_semver.config.models import GitSemverConfig
from git_semver.exceptions import ConfigNotFoundError, ConfigValidationError

TOOL_KEY = "git-semver"


def load_pyproject_toml(path: Path) -> dict[str, Any]:
    """Read and parse a pyproject.toml file.

    Raises:
        ConfigNotFoundError: If the file does not exist
        ConfigValidationError: If the file is not valid TOML
    """
    if not path.is_file():
        raise ConfigNotFoundError(f"Configuration file not found: {path}")

    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigValidationError(f"Invalid TOML in {path}: {e}") from e


def extract_git_semver_config(pyproject: dict[str, Any]) -> dict[str, Any]:
    """Return the ``[tool.git-semver]`` table, or an empty dict."""
    section = pyproject.get("tool", {}).get(TOOL_KEY, {})
    if not isinstance(section, dict):
        raise ConfigValidationError(f"[tool.{TOOL_KEY}] must be a table")
    return section


def load_config(root: Path) -> GitSemverConfig:
    """Load configuration for the repository at ``root``.

    Missing pyproject.toml or a missing ``[tool.git-semver]`` table yields
    the defaults.

    Raises:
        ConfigValidationError: If the table contains invalid settings
    """
    pyproject_path = root / "pyproject.toml"
    try:
        pyproject = load_pyproject_toml(pyproject_path)
    except ConfigNotFoundError:
        return GitSemverConfig()

    data = extract_git_semver_config(pyproject)
    try:
        return GitSemverConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigValidationError(f"Invalid [tool.{TOOL_KEY}] in {pyproject_path}:\n{e}") from e
