"""Tests for Git client."""

import subprocess

import pytest

from parentchart.config import Config
from parentchart.errors import GitOperationError, PreconditionError
from parentchart.git_client import GitClient


class FakeGit:
    """Records git invocations and fails the ones listed in `failures`."""

    def __init__(self, failures: dict[str, str] | None = None):
        self.calls: list[list[str]] = []
        self.failures = failures or {}

    def __call__(self, cmd, **kwargs):
        self.calls.append(cmd)
        subcommand = cmd[1]
        if subcommand in self.failures:
            return subprocess.CompletedProcess(cmd, 1, stdout="", stderr=self.failures[subcommand])
        return subprocess.CompletedProcess(cmd, 0, stdout="", stderr="")


@pytest.fixture
def fake_git(monkeypatch) -> FakeGit:
    fake = FakeGit()
    monkeypatch.setattr(subprocess, "run", fake)
    return fake


class TestPublish:
    def test_runs_full_sequence(self, config: Config, fake_git: FakeGit):
        GitClient(config).publish("Updating chart dependencies")

        assert [c[1] for c in fake_git.calls] == [
            "remote", "fetch", "checkout", "add", "commit", "pull", "push",
        ]
        assert fake_git.calls[0] == [
            "git", "remote", "add", "upstream",
            "https://github.com/aws-controllers-k8s/ack-parent-chart.git",
        ]
        assert fake_git.calls[2] == ["git", "checkout", "-b", "main", "upstream/main"]
        assert fake_git.calls[-1] == [
            "git", "push", "--force",
            "https://ghp_secret@github.com/aws-controllers-k8s/ack-parent-chart.git",
            "main:main",
        ]

    def test_custom_target_branch(self, workspace, fake_git: FakeGit):
        config = Config(
            repo_path=workspace / "ack-chart",
            github_org="my-org",
            github_repo="my-chart",
            github_token="tok",
            commit_target_branch="release",
        )

        GitClient(config).publish("msg")

        assert fake_git.calls[2] == ["git", "checkout", "-b", "release", "upstream/release"]
        assert fake_git.calls[-1][-1] == "main:release"
        assert "my-org/my-chart" in fake_git.calls[-1][-2]

    def test_existing_remote_is_ignored(self, config: Config, fake_git: FakeGit):
        fake_git.failures["remote"] = "error: remote upstream already exists."

        GitClient(config).publish("msg")

        assert fake_git.calls[-1][1] == "push"

    def test_existing_branch_is_reused(self, config: Config, fake_git: FakeGit):
        fake_git.failures["checkout"] = "fatal: a branch named 'main' already exists"

        GitClient(config).publish("msg")

        assert fake_git.calls[-1][1] == "push"

    def test_remote_add_failure(self, config: Config, fake_git: FakeGit):
        fake_git.failures["remote"] = "fatal: not a git repository"

        with pytest.raises(GitOperationError, match="not a git repository"):
            GitClient(config).publish("msg")

    def test_rebase_conflict_is_fatal(self, config: Config, fake_git: FakeGit):
        fake_git.failures["pull"] = "CONFLICT (content): Merge conflict in Chart.yaml"

        with pytest.raises(GitOperationError) as exc_info:
            GitClient(config).publish("msg")

        assert exc_info.value.returncode == 1
        assert "CONFLICT" in exc_info.value.stderr
        assert [c[1] for c in fake_git.calls][-1] == "pull"

    def test_push_failure_redacts_token(self, config: Config, fake_git: FakeGit):
        fake_git.failures["push"] = "remote: rejected https://ghp_secret@github.com"

        with pytest.raises(GitOperationError) as exc_info:
            GitClient(config).publish("msg")

        assert "ghp_secret" not in str(exc_info.value)
        assert "ghp_secret" not in " ".join(exc_info.value.command)

    def test_push_requires_token(self, workspace, fake_git: FakeGit):
        config = Config(repo_path=workspace / "ack-chart")

        with pytest.raises(PreconditionError):
            GitClient(config).push()

        assert fake_git.calls == []
