"""Data models for the parent chart updater."""

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from pathlib import Path


class DiffSeverity(IntEnum):
    """How significant a dependency version change is."""

    PATCH = 0
    MINOR = 1
    MAJOR = 2

    @property
    def label(self) -> str:
        return self.name.lower()


class ChangeAction(str, Enum):
    """What happened to a dependency during a run."""

    ADDED = "added"
    UPGRADED = "upgraded"


@dataclass
class DependencyEntry:
    """A sub-chart pinned in the parent chart's dependency list."""

    name: str
    alias: str
    version: str
    repository: str
    condition: str

    @classmethod
    def for_service(cls, name: str, version: str, alias: str, repository: str) -> "DependencyEntry":
        """Build an entry that is toggled by `<alias>.enabled` in values."""
        return cls(
            name=name,
            alias=alias,
            version=version,
            repository=repository,
            condition=f"{alias}.enabled",
        )

    def to_dict(self) -> dict[str, str]:
        return {
            "name": self.name,
            "alias": self.alias,
            "version": self.version,
            "repository": self.repository,
            "condition": self.condition,
        }


@dataclass
class SubChart:
    """A controller's own chart found while scanning the workspace."""

    service_name: str
    chart_path: Path
    name: str
    version: str

    @property
    def alias(self) -> str:
        return self.service_name


@dataclass
class DependencyChange:
    """A dependency that was added or upgraded during a run."""

    name: str
    action: ChangeAction
    new_version: str
    old_version: str | None = None
    severity: DiffSeverity = DiffSeverity.PATCH

    def describe(self) -> str:
        if self.action == ChangeAction.ADDED:
            return f"Add {self.name} {self.new_version}"
        return f"Upgrade {self.name} {self.old_version} -> {self.new_version} ({self.severity.label})"


@dataclass
class UpdateResult:
    """Outcome of comparing sub-charts against the parent chart."""

    old_chart_version: str
    new_chart_version: str
    severity: DiffSeverity = DiffSeverity.PATCH
    changes: list[DependencyChange] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        """Check if any dependency was added or upgraded."""
        return bool(self.changes)

    @property
    def added(self) -> list[DependencyChange]:
        return [c for c in self.changes if c.action == ChangeAction.ADDED]

    @property
    def upgraded(self) -> list[DependencyChange]:
        return [c for c in self.changes if c.action == ChangeAction.UPGRADED]
