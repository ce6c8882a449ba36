"""Semantic version triples and bump types.

Versions managed by multi-release are strict MAJOR.MINOR.PATCH
triples of non-negative integers. Anything else is rejected with
InvalidVersionError rather than coerced.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import StrEnum

from multirelease.exceptions import InvalidVersionError

_VERSION_RE = re.compile(r"^(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)$")

_LEVELS = {"none": 0, "patch": 1, "minor": 2, "major": 3}


class BumpType(StrEnum):
    """Severity of a change, ordered NONE < PATCH < MINOR < MAJOR."""

    NONE = "none"
    PATCH = "patch"
    MINOR = "minor"
    MAJOR = "major"

    @property
    def level(self) -> int:
        return _LEVELS[self.value]

    def escalate(self, other: BumpType) -> BumpType:
        """Return the more severe of the two bump types."""
        return other if other.level > self.level else self


@dataclass(frozen=True, order=True)
class Version:
    """A MAJOR.MINOR.PATCH version.

    Attributes:
        major: Major component
        minor: Minor component
        patch: Patch component
    """

    major: int
    minor: int
    patch: int

    def __post_init__(self) -> None:
        for part in (self.major, self.minor, self.patch):
            if isinstance(part, bool) or not isinstance(part, int) or part < 0:
                raise InvalidVersionError(f"{self.major}.{self.minor}.{self.patch}")

    @classmethod
    def parse(cls, value: str, module: str | None = None) -> Version:
        """Parse a version string.

        Args:
            value: Version string such as "1.2.3"
            module: Owning module name, used only in the error message

        Returns:
            Parsed Version

        Raises:
            InvalidVersionError: If the string is not a three-integer triple
        """
        match = _VERSION_RE.match(value.strip()) if isinstance(value, str) else None
        if match is None:
            raise InvalidVersionError(str(value), module)
        major, minor, patch = (int(part) for part in match.groups())
        return cls(major, minor, patch)

    def bump(self, bump_type: BumpType) -> Version:
        """Return the version incremented by the given bump type.

        NONE returns the version unchanged.
        """
        if bump_type == BumpType.MAJOR:
            return Version(self.major + 1, 0, 0)
        if bump_type == BumpType.MINOR:
            return Version(self.major, self.minor + 1, 0)
        if bump_type == BumpType.PATCH:
            return Version(self.major, self.minor, self.patch + 1)
        return self

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


def parse_version(value: str) -> Version:
    """Parse a version string into a Version."""
    return Version.parse(value)
