"""Read and mutate the parent chart's Chart.yaml."""

import logging
import re
from pathlib import Path

from ruamel.yaml import YAML
from ruamel.yaml.comments import CommentedMap, CommentedSeq
from ruamel.yaml.error import YAMLError

from ..errors import ChartManifestError, DependencyExistsError, VersionParseError
from ..models import DependencyEntry, DiffSeverity
from ..versioning import SemVer

logger = logging.getLogger(__name__)


DEPENDENCY_LIST_PATTERN = re.compile(r"^( *)dependencies:[ \t]*\n(?:[ \t]*(?:#.*)?\n)*( *)- ", re.MULTILINE)


def _sequence_offset(text: str) -> int:
    """How far the dependency list dashes are indented past their key."""
    match = DEPENDENCY_LIST_PATTERN.search(text)
    if not match:
        return 0
    return max(len(match.group(2)) - len(match.group(1)), 0)


def _round_trip_yaml(sequence_offset: int = 0) -> YAML:
    yaml = YAML()
    yaml.preserve_quotes = True
    yaml.width = 4096  # Don't introduce line breaks
    yaml.indent(mapping=2, sequence=sequence_offset + 2, offset=sequence_offset)
    return yaml


class ParentChart:
    """
    The parent chart manifest, loaded in round-trip mode.

    Comments, key order and quoting of the file survive every mutation.
    With `autosave` enabled the file is rewritten after each structural
    change, so an interrupted run leaves every completed step on disk.
    """

    def __init__(
        self,
        path: str | Path,
        doc: CommentedMap,
        repository: str,
        autosave: bool = True,
        sequence_offset: int = 0,
    ):
        self.path = Path(path)
        self.doc = doc
        self.repository = repository
        self.autosave = autosave
        self._yaml = _round_trip_yaml(sequence_offset)

    @classmethod
    def load(cls, path: str | Path, repository: str, autosave: bool = True) -> "ParentChart":
        path = Path(path)
        try:
            text = path.read_text()
        except OSError as e:
            raise ChartManifestError(f"Cannot read chart manifest {path}: {e}") from e

        try:
            doc = _round_trip_yaml().load(text)
        except YAMLError as e:
            raise ChartManifestError(f"Invalid YAML in {path}: {e}") from e

        if not isinstance(doc, dict):
            raise ChartManifestError(f"{path} is not a chart manifest")
        return cls(path, doc, repository, autosave=autosave, sequence_offset=_sequence_offset(text))

    def save(self) -> None:
        self._yaml.dump(self.doc, self.path)
        logger.debug(f"Wrote {self.path}")

    def _persist(self) -> None:
        if self.autosave:
            self.save()

    @property
    def name(self) -> str:
        return str(self.doc.get("name", ""))

    @property
    def version(self) -> str:
        return str(self.doc.get("version", ""))

    @property
    def dependencies(self) -> list[dict]:
        return list(self.doc.get("dependencies") or [])

    def get_dependency_version(self, name: str) -> str | None:
        """Return the version pinned for dependency `name`, if any."""
        for dep in self.dependencies:
            if dep.get("name") == name:
                version = dep.get("version")
                return None if version is None else str(version)
        return None

    def add_dependency(self, name: str, version: str, alias: str) -> DependencyEntry:
        """Append a new sub-chart dependency."""
        if any(dep.get("name") == name for dep in self.dependencies):
            raise DependencyExistsError(f"Dependency {name} already exists in {self.path}")

        entry = DependencyEntry.for_service(name, version, alias, self.repository)

        deps = self.doc.get("dependencies")
        if deps is None:
            deps = CommentedSeq()
            self.doc["dependencies"] = deps
        deps.append(CommentedMap(entry.to_dict()))

        logger.debug(f"Added dependency {name} {version}")
        self._persist()
        return entry

    def remove_dependency(self, name: str) -> int:
        """Delete every dependency called `name`; returns how many were removed."""
        deps = self.doc.get("dependencies")
        if not deps:
            return 0

        removed = 0
        for idx in reversed(range(len(deps))):
            if deps[idx].get("name") == name:
                del deps[idx]
                removed += 1

        if removed:
            logger.debug(f"Removed dependency {name}")
            self._persist()
        return removed

    def upgrade_dependency(self, name: str, version: str, alias: str) -> DependencyEntry:
        """Replace the entry for `name` with a freshly built one."""
        self.remove_dependency(name)
        return self.add_dependency(name, version, alias)

    def bump_version(self, severity: DiffSeverity) -> tuple[str, str]:
        """Increment the chart's own version; returns (old, new)."""
        current = self.version
        try:
            semver = SemVer.parse(current)
        except VersionParseError as e:
            raise VersionParseError(f"Invalid chart version in {self.path}: {e}") from e

        new_version = str(semver.bump(severity))
        self.doc["version"] = new_version
        logger.info(f"Bumped {self.name or 'chart'} version {current} -> {new_version}")
        self._persist()
        return current, new_version
