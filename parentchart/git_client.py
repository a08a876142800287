"""Git integration for committing and pushing the updated chart."""

import logging
import subprocess

from .config import Config
from .errors import GitOperationError, PreconditionError

logger = logging.getLogger(__name__)


class GitClient:
    """Client for the git operations that publish a chart update."""

    def __init__(self, config: Config):
        self.config = config
        self.repo_path = config.repo_path
        self.remote = config.git_remote
        self.target_branch = config.commit_target_branch
        self.local_branch = config.local_branch

    def _redact(self, text: str) -> str:
        token = self.config.github_token
        if token:
            return text.replace(token, "***")
        return text

    def _run_git(self, *args: str, check: bool = True) -> subprocess.CompletedProcess:
        """Run a git command in the repo directory."""
        cmd = ["git", *args]
        logger.debug(f"Running: {self._redact(' '.join(cmd))}")
        result = subprocess.run(
            cmd,
            cwd=self.repo_path,
            capture_output=True,
            text=True,
            check=False,
        )
        if check and result.returncode != 0:
            raise GitOperationError(
                f"git {self._redact(' '.join(args))} failed",
                command=[self._redact(part) for part in cmd],
                returncode=result.returncode,
                stderr=self._redact(result.stderr or result.stdout),
            )
        return result

    def add_remote(self) -> None:
        """Add the target repository as a remote unless it already exists."""
        logger.info(f"Adding git remote {self.remote} ...")
        result = self._run_git("remote", "add", self.remote, self.config.github_url, check=False)
        if result.returncode != 0:
            if "already exists" in result.stderr:
                logger.debug(f"Remote {self.remote} already exists")
                return
            raise GitOperationError(
                f"git remote add {self.remote} failed",
                command=["git", "remote", "add", self.remote, self.config.github_url],
                returncode=result.returncode,
                stderr=result.stderr,
            )

    def fetch_all(self) -> None:
        self._run_git("fetch", "--all")

    def checkout_target_branch(self) -> None:
        """Create a local branch tracking the target branch, or keep the current one."""
        result = self._run_git(
            "checkout", "-b", self.target_branch, f"{self.remote}/{self.target_branch}", check=False
        )
        if result.returncode != 0:
            logger.debug(f"Reusing existing branch: {result.stderr.strip()}")

    def stage_all(self) -> None:
        self._run_git("add", ".")

    def commit(self, message: str) -> None:
        logger.info(f"Adding commit with message: '{message.splitlines()[0]}' ...")
        self._run_git("commit", "-m", message)

    def pull_rebase(self) -> None:
        self._run_git("pull", "--rebase")

    def push(self) -> None:
        """Force the local branch onto the target branch of the GitHub repository."""
        if not self.config.github_token:
            raise PreconditionError("GITHUB_TOKEN must be set to push chart changes")

        logger.info(f"Pushing changes to branch '{self.target_branch}' ...")
        self._run_git("push", "--force", self.config.push_url, f"{self.local_branch}:{self.target_branch}")

    def publish(self, message: str) -> None:
        """Stage, commit, rebase and push all working tree changes."""
        self.add_remote()
        self.fetch_all()
        self.checkout_target_branch()
        self.stage_all()
        self.commit(message)
        self.pull_rebase()
        self.push()
        logger.info(f"Published chart update to {self.config.github_org}/{self.config.github_repo}")
