"""Tests for version parsing and bumping."""

from __future__ import annotations

import pytest

from multirelease.core.version import BumpType, Version, parse_version
from multirelease.exceptions import InvalidVersionError


class TestVersionParse:
    """Tests for Version.parse()."""

    def test_parse_simple(self):
        """Parse a plain triple."""
        assert Version.parse("1.2.3") == Version(1, 2, 3)

    def test_parse_strips_whitespace(self):
        """Surrounding whitespace is ignored."""
        assert parse_version(" 0.1.0\n") == Version(0, 1, 0)

    @pytest.mark.parametrize(
        "value",
        ["1.2", "1.2.3.4", "v1.2.3", "1.2.x", "", "1.2.3-beta", "01.2.3", "-1.0.0"],
    )
    def test_parse_invalid_raises(self, value: str):
        """Anything but MAJOR.MINOR.PATCH is rejected."""
        with pytest.raises(InvalidVersionError):
            Version.parse(value)

    def test_invalid_error_names_module(self):
        """The error carries the offending module name."""
        with pytest.raises(InvalidVersionError, match=":core") as exc_info:
            Version.parse("latest", module=":core")

        assert exc_info.value.module == ":core"
        assert exc_info.value.version == "latest"

    def test_negative_component_rejected(self):
        """Constructing a negative version fails."""
        with pytest.raises(InvalidVersionError):
            Version(1, -1, 0)


class TestVersionBump:
    """Tests for Version.bump()."""

    def test_bump_major(self):
        """Major bump resets minor and patch."""
        assert Version(1, 4, 7).bump(BumpType.MAJOR) == Version(2, 0, 0)

    def test_bump_minor(self):
        """Minor bump resets patch and keeps major."""
        assert Version(1, 4, 7).bump(BumpType.MINOR) == Version(1, 5, 0)

    def test_bump_patch(self):
        """Patch bump only increments patch."""
        assert Version(1, 4, 7).bump(BumpType.PATCH) == Version(1, 4, 8)

    def test_bump_none(self):
        """NONE leaves the version unchanged."""
        assert Version(1, 4, 7).bump(BumpType.NONE) == Version(1, 4, 7)

    def test_double_patch_bump(self):
        """Two patch bumps add exactly two to patch."""
        version = Version(3, 9, 1)
        bumped = version.bump(BumpType.PATCH).bump(BumpType.PATCH)

        assert bumped == Version(3, 9, 3)

    def test_str(self):
        """Versions render as dotted triples."""
        assert str(Version(2, 2, 0)) == "2.2.0"


class TestBumpType:
    """Tests for BumpType ordering."""

    def test_levels_are_ordered(self):
        """NONE < PATCH < MINOR < MAJOR."""
        levels = [b.level for b in (BumpType.NONE, BumpType.PATCH, BumpType.MINOR, BumpType.MAJOR)]
        assert levels == sorted(levels)
        assert len(set(levels)) == 4

    def test_escalate_never_lowers(self):
        """escalate() keeps the more severe value."""
        assert BumpType.MINOR.escalate(BumpType.PATCH) == BumpType.MINOR
        assert BumpType.PATCH.escalate(BumpType.MAJOR) == BumpType.MAJOR
        assert BumpType.NONE.escalate(BumpType.NONE) == BumpType.NONE

    def test_str_value(self):
        """BumpType renders as its lowercase name."""
        assert str(BumpType.MAJOR) == "major"
