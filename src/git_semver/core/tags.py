"""Release tag discovery and naming.

A release of the repository root is tagged with the bare version
(``1.2.3`` or ``v1.2.3``). A release of a sub-project is tagged with the
sub-project directory in front (``packages/api/1.2.3``), which keeps the
version histories of sibling projects apart.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from typing import NamedTuple

from git_semver.core.version import Version
from git_semver.exceptions import InvalidVersionError

# Short tags (v1, 2024) are not releases; matching tags must then pass strict parsing.
SEMVER_TAG_PATTERN = (
    r"v?[0-9]+\.[0-9]+\.[0-9]+"
    r"(?:-[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*)?"
    r"(?:\+[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*)?"
)


class ReleaseTag(NamedTuple):
    name: str
    version: Version


def normalize_directory(directory: str | None) -> str:
    """Normalize a sub-project directory; the repository root becomes ``""``."""
    if not directory:
        return ""
    normalized = directory.replace("\\", "/").strip()
    while normalized.startswith("./"):
        normalized = normalized[2:]
    normalized = normalized.strip("/")
    return "" if normalized == "." else normalized


def tag_pattern(directory: str = "") -> re.Pattern[str]:
    """Regex matching release tags of the project at ``directory``.

    The version part is captured in the ``version`` group.
    """
    directory = normalize_directory(directory)
    prefix = f"{re.escape(directory)}/" if directory else ""
    return re.compile(rf"^{prefix}(?P<version>{SEMVER_TAG_PATTERN})$")


def find_release_tags(tag_names: Iterable[str], directory: str = "") -> list[ReleaseTag]:
    """Select the release tags of a project, sorted by ascending version.

    Raises:
        InvalidVersionError: If a tag looks like a release of the project
            but its version is not a strict semantic version
    """
    pattern = tag_pattern(directory)
    releases = []
    for name in tag_names:
        match = pattern.match(name)
        if match is None:
            continue
        try:
            version = Version.parse(match.group("version"))
        except InvalidVersionError as e:
            raise InvalidVersionError(name, "release tag is not a semantic version") from e
        releases.append(ReleaseTag(name, version))

    # stable sort keeps tag order for versions of equal precedence
    return sorted(releases, key=lambda release: release.version)


def tag_name(directory: str, version: Version) -> str:
    """Tag name under which ``version`` of the project is released."""
    directory = normalize_directory(directory)
    if directory:
        return f"{directory}/{version}"
    return str(version)
