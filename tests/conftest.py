"""Shared fixtures for chart workspace tests."""

from pathlib import Path

import pytest

from parentchart.config import Config

PARENT_CHART = """\
# Parent chart for all ACK controllers
apiVersion: v2
name: ack-chart
description: A Helm chart for all ACK controllers
version: 1.4.2
dependencies:
- name: s3-chart
  alias: s3
  version: 1.0.5
  repository: oci://public.ecr.aws/aws-controllers-k8s
  condition: s3.enabled
- name: ecr-chart
  alias: ecr
  version: 1.1.0
  repository: oci://public.ecr.aws/aws-controllers-k8s
  condition: ecr.enabled
"""


def _write_sub_chart(workspace: Path, controller: str, name: str, version: str) -> Path:
    helm_dir = workspace / controller / "helm"
    helm_dir.mkdir(parents=True, exist_ok=True)
    chart = helm_dir / "Chart.yaml"
    chart.write_text(f"apiVersion: v1\nname: {name}\nversion: {version}\nappVersion: {version}\n")
    return chart


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """Workspace holding the parent chart repo next to controller repos."""
    repo = tmp_path / "ack-chart"
    repo.mkdir()
    (repo / "Chart.yaml").write_text(PARENT_CHART)
    return tmp_path


@pytest.fixture
def config(workspace: Path) -> Config:
    return Config(
        repo_path=workspace / "ack-chart",
        workspace_dir=workspace,
        github_token="ghp_secret",
    )


@pytest.fixture
def write_sub_chart():
    """Create `<workspace>/<controller>/helm/Chart.yaml`."""
    return _write_sub_chart
