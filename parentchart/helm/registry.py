"""Registry login and chart dependency rebuild via the aws and helm CLIs."""

import logging
import subprocess

from ..config import Config
from ..errors import DependencyFetchError, RegistryAuthError

logger = logging.getLogger(__name__)


class DependencyRebuilder:
    """Fetches the parent chart's dependencies from the OCI registry."""

    def __init__(self, config: Config):
        self.config = config
        self.chart_dir = config.parent_chart_path.parent

    def _run(self, *cmd: str, stdin: str | None = None) -> subprocess.CompletedProcess:
        logger.debug(f"Running: {' '.join(cmd)}")
        return subprocess.run(
            list(cmd),
            cwd=self.chart_dir,
            input=stdin,
            capture_output=True,
            text=True,
            check=False,
        )

    def login(self) -> None:
        """Log helm in to the registry with a short-lived ECR Public password."""
        cmd = ["aws", "ecr-public", "get-login-password", "--region", self.config.registry_region]
        result = self._run(*cmd)
        if result.returncode != 0:
            raise RegistryAuthError(
                "Failed to get registry password", command=cmd, returncode=result.returncode, stderr=result.stderr
            )

        cmd = [
            "helm", "registry", "login",
            "-u", self.config.registry_username,
            "--password-stdin",
            self.config.registry_host,
        ]
        result = self._run(*cmd, stdin=result.stdout.strip())
        if result.returncode != 0:
            raise RegistryAuthError(
                f"Failed to log in to {self.config.registry_host}",
                command=cmd,
                returncode=result.returncode,
                stderr=result.stderr,
            )
        logger.info(f"Logged in to {self.config.registry_host}")

    def update_dependencies(self) -> None:
        """Run `helm dependency update` for the parent chart."""
        cmd = ["helm", "dependency", "update"]
        result = self._run(*cmd)
        if result.returncode != 0:
            raise DependencyFetchError(
                "helm dependency update failed", command=cmd, returncode=result.returncode, stderr=result.stderr
            )
        logger.info(f"Updated chart dependencies in {self.chart_dir}")

    def rebuild(self) -> None:
        self.login()
        self.update_dependencies()
