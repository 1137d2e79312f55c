"""Semantic versions and the release version policy.

Versions follow SemVer 2.0.0: ``MAJOR.MINOR.PATCH`` with optional
pre-release and build metadata. Ordering uses SemVer precedence, so
build metadata never affects comparisons.

The policy that picks the next version treats everything below 1.0.0
as unstable: a breaking change only bumps the minor component and a
new feature only bumps the patch component.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import StrEnum
from functools import total_ordering
from typing import TYPE_CHECKING

from changelogger.exceptions import InvalidVersionError, VersionNotGreaterError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from changelogger.core.commits import CommitCategory

logger = logging.getLogger(__name__)

_SEMVER_RE = re.compile(
    r"(?P<major>0|[1-9]\d*)\.(?P<minor>0|[1-9]\d*)\.(?P<patch>0|[1-9]\d*)"
    r"(?:-(?P<prerelease>(?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*)"
    r"(?:\.(?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*))*))?"
    r"(?:\+(?P<build>[0-9a-zA-Z-]+(?:\.[0-9a-zA-Z-]+)*))?"
)


class BumpType(StrEnum):
    """Component of a version to increment."""

    MAJOR = "major"
    MINOR = "minor"
    PATCH = "patch"


@total_ordering
@dataclass(frozen=True, eq=False)
class Version:
    """A semantic version.

    Attributes:
        major: Major component
        minor: Minor component
        patch: Patch component
        prerelease: Dot-separated pre-release identifiers, e.g. ``rc.1``
        build: Dot-separated build metadata, ignored for ordering
    """

    major: int
    minor: int
    patch: int
    prerelease: str | None = None
    build: str | None = None

    @classmethod
    def parse(cls, text: str) -> Version:
        """Parse a strict SemVer string such as ``1.2.3`` or ``1.0.0-rc.1+b5``.

        Raises:
            InvalidVersionError: If the text is not a valid version
        """
        match = _SEMVER_RE.fullmatch(text)
        if match is None:
            raise InvalidVersionError(f"Invalid semantic version: {text!r}")
        return cls(
            major=int(match.group("major")),
            minor=int(match.group("minor")),
            patch=int(match.group("patch")),
            prerelease=match.group("prerelease"),
            build=match.group("build"),
        )

    @property
    def is_unstable(self) -> bool:
        """True for versions below 1.0.0, which carry no compatibility promise."""
        return self < STABLE

    def bump(self, bump_type: BumpType) -> Version:
        """Return the version incremented by ``bump_type``.

        The result never carries pre-release or build metadata.
        """
        if bump_type == BumpType.MAJOR:
            return Version(self.major + 1, 0, 0)
        if bump_type == BumpType.MINOR:
            return Version(self.major, self.minor + 1, 0)
        return Version(self.major, self.minor, self.patch + 1)

    def _precedence_key(self) -> tuple:
        if self.prerelease is None:
            return (self.major, self.minor, self.patch, 1, ())
        identifiers = tuple(
            (0, int(part), "") if part.isdigit() else (1, 0, part)
            for part in self.prerelease.split(".")
        )
        return (self.major, self.minor, self.patch, 0, identifiers)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._precedence_key() == other._precedence_key()

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._precedence_key() < other._precedence_key()

    def __hash__(self) -> int:
        return hash(self._precedence_key())

    def __str__(self) -> str:
        text = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            text += f"-{self.prerelease}"
        if self.build:
            text += f"+{self.build}"
        return text


ZERO = Version(0, 0, 0)
STABLE = Version(1, 0, 0)


def parse_version(text: str, prefix: str = "v") -> Version:
    """Parse a version, accepting an optional leading ``prefix`` (e.g. ``v1.2.3``).

    Raises:
        InvalidVersionError: If the remainder is not a valid version
    """
    text = text.strip()
    if prefix:
        text = text.removeprefix(prefix)
    return Version.parse(text)


def determine_bump(last_version: Version, categories: Iterable[CommitCategory]) -> BumpType:
    """Pick the version component to bump for the categories present.

    Args:
        last_version: Previous release
        categories: Categories of the commits going into the release

    Returns:
        The bump type; PATCH when neither MAJOR nor MINOR is present
    """
    from changelogger.core.commits import CommitCategory

    present = set(categories)
    unstable = last_version.is_unstable

    if CommitCategory.MAJOR in present:
        return BumpType.MINOR if unstable else BumpType.MAJOR
    if CommitCategory.MINOR in present:
        return BumpType.PATCH if unstable else BumpType.MINOR
    return BumpType.PATCH


def next_version(last_version: Version, categories: Iterable[CommitCategory]) -> Version:
    """Compute the next release version, e.g. 2.1.4 with a MINOR commit gives 2.2.0."""
    bump_type = determine_bump(last_version, categories)
    new_version = last_version.bump(bump_type)
    logger.debug("Bumping %s (%s) -> %s", last_version, bump_type, new_version)
    return new_version


def resolve_new_version(
    last_version: Version,
    categories: Iterable[CommitCategory],
    explicit: str | None = None,
) -> Version:
    """Use the explicit version when given, otherwise compute the next one.

    Args:
        last_version: Previous release
        categories: Categories of the commits going into the release
        explicit: Version requested by the user, e.g. ``"2.0.0"`` or ``"v2.0.0"``

    Raises:
        InvalidVersionError: If ``explicit`` is not a valid version
        VersionNotGreaterError: If ``explicit`` is not greater than ``last_version``
    """
    if explicit is None:
        return next_version(last_version, categories)

    requested = parse_version(explicit)
    if requested <= last_version:
        raise VersionNotGreaterError(
            f"New version {requested} must be greater than previous version {last_version}"
        )
    return requested
