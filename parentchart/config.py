"""Configuration management via environment variables."""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

DEFAULT_GITHUB_ORG = "aws-controllers-k8s"
DEFAULT_GITHUB_REPO = "ack-parent-chart"
DEFAULT_COMMIT_TARGET_BRANCH = "main"


@dataclass
class Config:
    """Application configuration loaded from environment variables."""

    # Chart layout
    repo_path: Path = Path(".")
    workspace_dir: Path | None = None
    chart_file: str = "Chart.yaml"
    controller_suffix: str = "-controller"
    sub_chart_path: str = "helm/Chart.yaml"

    # GitHub settings
    github_org: str = DEFAULT_GITHUB_ORG
    github_repo: str = DEFAULT_GITHUB_REPO
    github_token: str | None = None
    commit_target_branch: str = DEFAULT_COMMIT_TARGET_BRANCH
    local_branch: str = "main"
    git_remote: str = "upstream"
    commit_message: str = "Updating chart dependencies"

    # OCI registry settings
    registry_host: str = "public.ecr.aws"
    registry_org: str = "aws-controllers-k8s"
    registry_region: str = "us-east-1"
    registry_username: str = "AWS"

    def __post_init__(self) -> None:
        self.repo_path = Path(self.repo_path)
        if self.workspace_dir is None:
            self.workspace_dir = self.repo_path.resolve().parent
        else:
            self.workspace_dir = Path(self.workspace_dir)

    @property
    def parent_chart_path(self) -> Path:
        return self.repo_path / self.chart_file

    @property
    def repository_uri(self) -> str:
        """OCI repository that every sub-chart is published to."""
        return f"oci://{self.registry_host}/{self.registry_org}"

    @property
    def github_url(self) -> str:
        return f"https://github.com/{self.github_org}/{self.github_repo}.git"

    @property
    def push_url(self) -> str:
        """Token-authenticated URL used for pushing."""
        if not self.github_token:
            raise ValueError("GITHUB_TOKEN must be set to push chart changes")
        return f"https://{self.github_token}@github.com/{self.github_org}/{self.github_repo}.git"

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        load_dotenv()

        workspace_dir = os.getenv("CHART_WORKSPACE_DIR")
        suffix = os.getenv("CONTROLLER_SUFFIX", "-controller")
        if not suffix:
            raise ValueError("CONTROLLER_SUFFIX must not be empty")

        return cls(
            repo_path=Path(os.getenv("CHART_REPO_PATH", ".")),
            workspace_dir=Path(workspace_dir) if workspace_dir else None,
            controller_suffix=suffix,
            github_org=os.getenv("GITHUB_ORG") or DEFAULT_GITHUB_ORG,
            github_repo=os.getenv("GITHUB_REPO") or DEFAULT_GITHUB_REPO,
            github_token=os.getenv("GITHUB_TOKEN") or None,
            commit_target_branch=os.getenv("COMMIT_TARGET_BRANCH") or DEFAULT_COMMIT_TARGET_BRANCH,
            local_branch=os.getenv("LOCAL_GIT_BRANCH", "main"),
            git_remote=os.getenv("GIT_REMOTE", "upstream"),
            registry_host=os.getenv("CHART_REGISTRY_HOST", "public.ecr.aws"),
            registry_org=os.getenv("CHART_REGISTRY_ORG", "aws-controllers-k8s"),
            registry_region=os.getenv("CHART_REGISTRY_REGION", "us-east-1"),
            registry_username=os.getenv("CHART_REGISTRY_USERNAME", "AWS"),
        )
