"""Update the parent chart from its controller sub-charts and publish it."""

import logging
import shutil

from .config import Config
from .errors import PreconditionError
from .git_client import GitClient
from .helm.chart import ParentChart
from .helm.registry import DependencyRebuilder
from .helm.scanner import ControllerScanner
from .models import ChangeAction, DependencyChange, DiffSeverity, UpdateResult
from .versioning import aggregate_severity, diff_versions

logger = logging.getLogger(__name__)

REQUIRED_BINARIES = ("helm", "git", "aws")


def ensure_binaries(binaries: tuple[str, ...] = REQUIRED_BINARIES) -> None:
    """Fail before doing any work if an external tool is not installed."""
    missing = [name for name in binaries if shutil.which(name) is None]
    if missing:
        raise PreconditionError(f"Required binaries not installed: {', '.join(missing)}")


def update_chart(config: Config, dry_run: bool = False) -> UpdateResult:
    """
    Sync the parent chart's dependencies with the controllers' sub-charts.

    New sub-charts are appended as dependencies and force at least a minor
    bump; changed ones are replaced and contribute the severity of their
    version change. The parent chart version is then bumped once by the
    highest severity seen.

    Args:
        config: Application configuration.
        dry_run: Compute the result without writing Chart.yaml.

    Returns:
        UpdateResult describing every change and the version transition.
    """
    chart = ParentChart.load(config.parent_chart_path, config.repository_uri, autosave=not dry_run)
    scanner = ControllerScanner(config.controller_suffix, config.sub_chart_path)

    changes: list[DependencyChange] = []

    for sub_chart in scanner.scan(config.workspace_dir):
        existing = chart.get_dependency_version(sub_chart.name)
        severity = diff_versions(existing, sub_chart.version)

        if existing is None:
            logger.info(f"Adding {sub_chart.name} as a new dependency\t{sub_chart.version}")
            chart.add_dependency(sub_chart.name, sub_chart.version, sub_chart.alias)
            changes.append(DependencyChange(
                name=sub_chart.name,
                action=ChangeAction.ADDED,
                new_version=sub_chart.version,
                severity=DiffSeverity.MINOR,
            ))
        elif severity is not None:
            logger.info(f"Upgrading {sub_chart.name}\t{existing} -> {sub_chart.version}")
            chart.upgrade_dependency(sub_chart.name, sub_chart.version, sub_chart.alias)
            changes.append(DependencyChange(
                name=sub_chart.name,
                action=ChangeAction.UPGRADED,
                new_version=sub_chart.version,
                old_version=existing,
                severity=severity,
            ))

    severity = aggregate_severity(c.severity for c in changes)
    old_version, new_version = chart.bump_version(severity)
    logger.info(f"Updating chart from version {old_version} to {new_version}")

    return UpdateResult(
        old_chart_version=old_version,
        new_chart_version=new_version,
        severity=severity,
        changes=changes,
    )


def build_commit_message(result: UpdateResult, subject: str = "Updating chart dependencies") -> str:
    """Describe the dependency changes and the chart version bump."""
    lines = [subject, ""]
    lines.append(f"Chart version: {result.old_chart_version} -> {result.new_chart_version} ({result.severity.label})")
    if result.changes:
        lines.append("")
        lines.extend(f"- {change.describe()}" for change in result.changes)
    return "\n".join(lines)


def run(config: Config, dry_run: bool = False) -> UpdateResult:
    """Update the chart, rebuild its dependencies and push the commit."""
    if dry_run:
        return update_chart(config, dry_run=True)

    ensure_binaries()
    if not config.github_token:
        raise PreconditionError("GITHUB_TOKEN must be set to push chart changes")

    result = update_chart(config)

    DependencyRebuilder(config).rebuild()

    GitClient(config).publish(build_commit_message(result, config.commit_message))
    return result
