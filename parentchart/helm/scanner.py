"""Scanner for controller sub-charts living next to the parent chart."""

import logging
from pathlib import Path

import yaml

from ..models import SubChart
from ..versioning import parse_semver

logger = logging.getLogger(__name__)


class ControllerScanner:
    """Finds GA sub-charts in `<workspace>/<service>-controller/helm/Chart.yaml`."""

    def __init__(self, suffix: str = "-controller", chart_path: str = "helm/Chart.yaml"):
        self.suffix = suffix
        self.chart_path = chart_path

    def discover(self, base_dir: str | Path) -> list[tuple[str, Path]]:
        """List (service name, chart manifest path) for each controller directory."""
        base_dir = Path(base_dir)
        found = []

        for entry in sorted(base_dir.iterdir()):
            if not entry.is_dir() or not entry.name.endswith(self.suffix):
                continue

            manifest = entry / self.chart_path
            if not manifest.is_file():
                logger.debug(f"Skipping {entry.name}: no {self.chart_path}")
                continue

            service_name = entry.name[: -len(self.suffix)]
            found.append((service_name, manifest))

        return found

    def scan(self, base_dir: str | Path) -> list[SubChart]:
        """Load every discovered sub-chart that is generally available."""
        charts = []

        for service_name, manifest in self.discover(base_dir):
            chart = self._load_chart(service_name, manifest)
            if chart:
                charts.append(chart)

        logger.info(f"Found {len(charts)} eligible sub-charts in {base_dir}")
        return charts

    def _load_chart(self, service_name: str, manifest: Path) -> SubChart | None:
        """Read name and version from a sub-chart manifest."""
        try:
            doc = yaml.safe_load(manifest.read_text())
        except yaml.YAMLError as e:
            logger.warning(f"Skipping {manifest}: invalid YAML: {e}")
            return None

        if not isinstance(doc, dict):
            doc = {}

        name = doc.get("name")
        version = doc.get("version")
        if not name or version is None:
            logger.warning(f"Skipping {manifest}: missing name or version")
            return None

        version = str(version)
        semver = parse_semver(version)
        if semver is None:
            logger.warning(f"Skipping {manifest}: '{version}' is not a semantic version")
            return None

        # Charts are not aggregated before their first GA release
        if semver.major == 0:
            logger.info(f"Skipping {name} {version}: not yet GA")
            return None

        return SubChart(
            service_name=service_name,
            chart_path=manifest,
            name=str(name),
            version=version,
        )
