"""Configuration models for git-semver.

Values come from the ``[tool.git-semver]`` table of the repository's
pyproject.toml, with command-line flags merged on top.
"""

from __future__ import annotations

import re

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CommitsConfig(BaseModel):
    """How commit messages map to version increments."""

    model_config = ConfigDict(extra="forbid")

    types_major: list[str] = Field(default_factory=list)
    types_minor: list[str] = Field(default_factory=lambda: ["feat"])
    types_patch: list[str] = Field(default_factory=lambda: ["fix"])
    breaking_pattern: str = r"^BREAKING[ -]CHANGE:"
    skip_release_patterns: list[str] = Field(default_factory=list)

    @field_validator("types_major", "types_minor", "types_patch")
    @classmethod
    def _lowercase_types(cls, value: list[str]) -> list[str]:
        return [t.lower() for t in value]

    @field_validator("breaking_pattern")
    @classmethod
    def _valid_regex(cls, value: str) -> str:
        try:
            re.compile(value)
        except re.error as e:
            raise ValueError(f"invalid regular expression: {e}") from e
        return value


class GitSemverConfig(BaseModel):
    """Top-level configuration."""

    model_config = ConfigDict(extra="forbid")

    version_files: list[str] = Field(default_factory=list)
    v_prefix: bool = False
    skip_tag: bool = False
    push: bool = True
    remote: str = "origin"
    commits: CommitsConfig = Field(default_factory=CommitsConfig)
