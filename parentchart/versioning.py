"""Semantic version parsing, comparison and increment."""

import logging
import re
from typing import Iterable, NamedTuple

from .errors import VersionParseError
from .models import DiffSeverity

logger = logging.getLogger(__name__)

SEMVER_PATTERN = re.compile(r"^(v?)(\d+)\.(\d+)\.(\d+)$")


class SemVer(NamedTuple):
    """Semantic version representation.

    Equality and ordering only look at the numeric components, so
    ``1.2.3``, ``v1.2.3`` and ``01.2.3`` are the same version.
    """

    major: int
    minor: int
    patch: int
    prefixed: bool = False

    @classmethod
    def parse(cls, version: str) -> "SemVer":
        """Parse ``[v]major.minor.patch`` or raise VersionParseError."""
        match = SEMVER_PATTERN.match(str(version).strip())
        if not match:
            raise VersionParseError(f"'{version}' is not a major.minor.patch version")
        prefix, major, minor, patch = match.groups()
        return cls(int(major), int(minor), int(patch), prefixed=bool(prefix))

    @property
    def core(self) -> tuple[int, int, int]:
        return (self.major, self.minor, self.patch)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SemVer):
            return self.core == other.core
        return NotImplemented

    def __ne__(self, other: object) -> bool:
        if isinstance(other, SemVer):
            return self.core != other.core
        return NotImplemented

    def __lt__(self, other: "SemVer") -> bool:
        return self.core < other.core

    def __le__(self, other: "SemVer") -> bool:
        return self.core <= other.core

    def __gt__(self, other: "SemVer") -> bool:
        return self.core > other.core

    def __ge__(self, other: "SemVer") -> bool:
        return self.core >= other.core

    def __hash__(self) -> int:
        return hash(self.core)

    def __str__(self) -> str:
        prefix = "v" if self.prefixed else ""
        return f"{prefix}{self.major}.{self.minor}.{self.patch}"

    def bump(self, severity: DiffSeverity) -> "SemVer":
        """Increment the component at `severity` and reset the lower ones."""
        if severity == DiffSeverity.MAJOR:
            return SemVer(self.major + 1, 0, 0, self.prefixed)
        if severity == DiffSeverity.MINOR:
            return SemVer(self.major, self.minor + 1, 0, self.prefixed)
        return SemVer(self.major, self.minor, self.patch + 1, self.prefixed)


def parse_semver(version: str | None) -> SemVer | None:
    """Parse a version string, returning None when it does not conform."""
    if version is None:
        return None
    try:
        return SemVer.parse(version)
    except VersionParseError:
        return None


def _coerce(version: "SemVer | str") -> SemVer:
    if isinstance(version, SemVer):
        return version
    return SemVer.parse(version)


def diff_versions(existing: "SemVer | str | None", observed: "SemVer | str") -> DiffSeverity | None:
    """
    Classify the change from `existing` to `observed`.

    Args:
        existing: Version currently pinned, or None if the dependency is new.
        observed: Version declared by the sub-chart.

    Returns:
        MINOR for a new dependency, the severity of the first differing
        component otherwise, or None when both versions are equal.
    """
    new = _coerce(observed)
    if existing is None:
        return DiffSeverity.MINOR

    old = _coerce(existing)
    if old == new:
        return None
    if new < old:
        logger.warning(f"Version goes backwards: {old} -> {new}")

    if old.major != new.major:
        return DiffSeverity.MAJOR
    if old.minor != new.minor:
        return DiffSeverity.MINOR
    return DiffSeverity.PATCH


def aggregate_severity(severities: Iterable[DiffSeverity | None]) -> DiffSeverity:
    """Return the highest severity seen, starting from PATCH."""
    result = DiffSeverity.PATCH
    for severity in severities:
        if severity is not None and severity > result:
            result = severity
    return result


def bump_version(version: str, severity: DiffSeverity) -> str:
    """Bump a version string, e.g. ``bump_version("1.2.3", MINOR) == "1.3.0"``."""
    return str(SemVer.parse(version).bump(severity))
