"""Semantic version values.

Parsing and precedence are delegated to the ``semver`` package; this
module adds the pieces git-semver needs on top of it: the ``v`` prefix
used by many release tags and the ordered :class:`BumpType` increment.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from enum import IntEnum
from functools import total_ordering

import semver

from git_semver.exceptions import InvalidVersionError


class BumpType(IntEnum):
    """Magnitude of a version increment, ordered by significance."""

    NONE = 0
    PATCH = 1
    MINOR = 2
    MAJOR = 3

    def __str__(self) -> str:
        return self.name.lower()


@total_ordering
@dataclass(frozen=True, eq=False)
class Version:
    """A semantic version.

    Ordering follows semver 2.0 precedence: build metadata is ignored and
    a pre-release sorts below the same release. The ``v`` prefix only
    affects rendering, so ``v1.2.3 == 1.2.3``.
    """

    major: int
    minor: int
    patch: int
    prerelease: str | None = None
    build: str | None = None
    v_prefix: bool = False

    @classmethod
    def parse(cls, text: str) -> Version:
        """Parse ``[v]MAJOR.MINOR.PATCH[-prerelease][+build]``.

        Raises:
            InvalidVersionError: If the text is not a strict semantic version
        """
        v_prefix = text.startswith("v")
        body = text[1:] if v_prefix else text
        try:
            parsed = semver.Version.parse(body)
        except (TypeError, ValueError) as e:
            raise InvalidVersionError(text) from e

        return cls(
            major=parsed.major,
            minor=parsed.minor,
            patch=parsed.patch,
            prerelease=parsed.prerelease,
            build=parsed.build,
            v_prefix=v_prefix,
        )

    @property
    def semver_text(self) -> str:
        """Version text without the ``v`` prefix."""
        return str(self._to_semver())

    def _to_semver(self) -> semver.Version:
        return semver.Version(
            self.major,
            self.minor,
            self.patch,
            prerelease=self.prerelease,
            build=self.build,
        )

    def compare(self, other: Version) -> int:
        """Return -1, 0 or 1 as this version has lower, equal or higher precedence."""
        return self._to_semver().compare(other._to_semver())

    def bump(self, bump_type: BumpType) -> Version:
        """Return the version incremented by ``bump_type``.

        Pre-release and build metadata are dropped; the ``v`` prefix is kept.
        """
        if bump_type == BumpType.MAJOR:
            return Version(self.major + 1, 0, 0, v_prefix=self.v_prefix)
        if bump_type == BumpType.MINOR:
            return Version(self.major, self.minor + 1, 0, v_prefix=self.v_prefix)
        if bump_type == BumpType.PATCH:
            return Version(self.major, self.minor, self.patch + 1, v_prefix=self.v_prefix)
        return self

    def with_v_prefix(self, enabled: bool = True) -> Version:
        return dataclasses.replace(self, v_prefix=enabled)

    def __str__(self) -> str:
        prefix = "v" if self.v_prefix else ""
        return f"{prefix}{self.semver_text}"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.compare(other) == 0

    def __lt__(self, other: Version) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.compare(other) < 0

    def __hash__(self) -> int:
        return hash((self.major, self.minor, self.patch, self.prerelease))


INITIAL_VERSION = Version(0, 0, 0)


def parse_version(text: str) -> Version:
    """Parse a version string. See :meth:`Version.parse`."""
    return Version.parse(text)
