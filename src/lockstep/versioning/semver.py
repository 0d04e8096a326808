"""Semantic version parsing and bumping."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

from lockstep.errors import InvalidSemverError

SEMVER_PATTERN = re.compile(r"([0-9]+)\.([0-9]+)\.([0-9]+)(-.+)?")

# Checked in order: ">=" must not be shadowed by "=".
RANGE_OPERATORS = ("^", "~", ">=", "=")


class BumpType(str, Enum):
    """Version bump level."""

    PATCH = "patch"
    MINOR = "minor"
    MAJOR = "major"


@dataclass(frozen=True, slots=True)
class Version:
    """A MAJOR.MINOR.PATCH version.

    Attributes:
        major: Major component.
        minor: Minor component.
        patch: Patch component.
        suffix: Raw pre-release/build suffix (including the leading ``-``).
            Kept for inspection only; it is not serialized.
    """

    major: int
    minor: int
    patch: int
    suffix: str | None = None

    @classmethod
    def parse(cls, value: object) -> Version:
        """Parse a version string.

        Args:
            value: String such as ``1.2.3`` or ``1.2.3-alpha.1``.

        Returns:
            Parsed version.

        Raises:
            InvalidSemverError: If the string is not a strict numeric triple.
        """
        if not isinstance(value, str):
            raise InvalidSemverError(str(value))
        match = SEMVER_PATTERN.fullmatch(value)
        if not match:
            raise InvalidSemverError(value)
        major, minor, patch, suffix = match.groups()
        return cls(int(major), int(minor), int(patch), suffix)

    def bump(self, bump_type: BumpType) -> Version:
        """Return the next version for a bump level. The suffix is always dropped."""
        if bump_type == BumpType.MAJOR:
            return Version(self.major + 1, 0, 0)
        if bump_type == BumpType.MINOR:
            return Version(self.major, self.minor + 1, 0)
        return Version(self.major, self.minor, self.patch + 1)

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


def bump_version(current: str, bump_type: BumpType) -> str:
    """Bump a version string.

    Args:
        current: Current version.
        bump_type: Bump level.

    Returns:
        Clean ``MAJOR.MINOR.PATCH`` string.

    Raises:
        InvalidSemverError: If ``current`` is malformed.
    """
    return str(Version.parse(current).bump(bump_type))


def preserve_operator(old_range: str, new_version: str) -> str:
    """Rewrite a dependency range to a new version, keeping a simple operator.

    ``^``, ``~``, ``>=`` and ``=`` are carried over. Exact pins, wildcards and
    compound ranges become the bare new version.

    Args:
        old_range: Existing range expression.
        new_version: Version to point at.

    Returns:
        New range expression.
    """
    for operator in RANGE_OPERATORS:
        if old_range.startswith(operator):
            return f"{operator}{new_version}"
    return new_version
