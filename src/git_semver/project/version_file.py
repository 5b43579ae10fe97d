"""Version string replacement in project files.

A version file is described as ``filename:key``, for example
``package.json:"version"`` or ``pyproject.toml:version``. The first
occurrence of the current version that follows the key on the same line
is replaced with the next version.

Formatting and comments are preserved by using a targeted regex
replacement rather than parsing the file format.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

import structlog

from git_semver.exceptions import (
    MalformedVersionFileSpecError,
    VersionFileError,
    VersionNotFoundError,
)

if TYPE_CHECKING:
    from git_semver.core.version import Version

logger = structlog.get_logger()

# The version must not be part of a longer one: 1.2.3 matches neither 11.2.3 nor 1.2.30
_VERSION_START = r"(?<![0-9.])"
_VERSION_END = r"(?![0-9A-Za-z+-]|\.[0-9A-Za-z])"


@dataclass(frozen=True)
class VersionFile:
    """Where a version string has to be rewritten."""

    filename: Path
    key: str

    @classmethod
    def parse(cls, spec: str, base_dir: Path | None = None) -> VersionFile:
        """Parse a ``filename:key`` argument.

        Args:
            spec: The argument, split on its first ``:``
            base_dir: Directory relative filenames are resolved against

        Raises:
            MalformedVersionFileSpecError: If the separator, the filename or
                the key is missing
        """
        filename, sep, key = spec.partition(":")
        if not sep or not filename.strip() or not key:
            raise MalformedVersionFileSpecError(spec)

        path = Path(filename.strip())
        if base_dir is not None and not path.is_absolute():
            path = base_dir / path
        return cls(filename=path, key=key)

    def pattern(self, current: Version) -> re.Pattern[str]:
        key = re.escape(self.key)
        version = re.escape(current.semver_text)
        return re.compile(rf"{key}.*?{_VERSION_START}(?P<version>{version}){_VERSION_END}")

    def render(self, content: str, current: Version, next_version: Version) -> str:
        """Return ``content`` with the version after the key replaced.

        Raises:
            VersionNotFoundError: If the key is not followed by the current version
        """
        match = self.pattern(current).search(content)
        if match is None:
            raise VersionNotFoundError(
                f"Could not find version {current.semver_text} "
                f"after {self.key!r} in {self.filename}"
            )
        start, end = match.span("version")
        return f"{content[:start]}{next_version.semver_text}{content[end:]}"

    def read(self) -> str:
        if not self.filename.is_file():
            raise VersionFileError(f"Version file not found: {self.filename}")
        try:
            return self.filename.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise VersionFileError(f"Could not read {self.filename}: {e}") from e

    def write(self, content: str) -> None:
        try:
            self.filename.write_text(content, encoding="utf-8")
        except OSError as e:
            raise VersionFileError(f"Could not write {self.filename}: {e}") from e


def parse_version_files(specs: Sequence[str], base_dir: Path | None = None) -> list[VersionFile]:
    return [VersionFile.parse(spec, base_dir) for spec in specs]


def update_version_files(
    version_files: Sequence[VersionFile],
    current: Version,
    next_version: Version,
) -> list[Path]:
    """Rewrite the version in every file.

    All files are read and matched before the first one is written, so a
    missing file or a missing version leaves every file untouched.

    Returns:
        Paths of the rewritten files, in the given order

    Raises:
        VersionFileError: If a file cannot be read or written
        VersionNotFoundError: If a file does not contain the current version
    """
    planned: dict[Path, tuple[VersionFile, str]] = {}
    for vf in version_files:
        # several keys may target the same file
        content = planned[vf.filename][1] if vf.filename in planned else vf.read()
        planned[vf.filename] = (vf, vf.render(content, current, next_version))

    for vf, content in planned.values():
        vf.write(content)
        logger.info("version_file_updated", path=str(vf.filename), version=next_version.semver_text)

    return list(planned)
