"""Tests for registry login and dependency rebuild."""

import subprocess

import pytest

from parentchart.config import Config
from parentchart.errors import DependencyFetchError, RegistryAuthError
from parentchart.helm.registry import DependencyRebuilder


@pytest.fixture
def calls(monkeypatch) -> list[dict]:
    recorded = []

    def fake_run(cmd, **kwargs):
        recorded.append({"cmd": cmd, **kwargs})
        return subprocess.CompletedProcess(cmd, 0, stdout="s3cr3t\n", stderr="")

    monkeypatch.setattr(subprocess, "run", fake_run)
    return recorded


def test_rebuild_logs_in_then_updates(config: Config, calls: list[dict]):
    DependencyRebuilder(config).rebuild()

    assert calls[0]["cmd"] == ["aws", "ecr-public", "get-login-password", "--region", "us-east-1"]
    assert calls[1]["cmd"] == ["helm", "registry", "login", "-u", "AWS", "--password-stdin", "public.ecr.aws"]
    assert calls[1]["input"] == "s3cr3t"
    assert calls[2]["cmd"] == ["helm", "dependency", "update"]
    assert calls[2]["cwd"] == config.repo_path


def test_password_failure(config: Config, monkeypatch):
    def fake_run(cmd, **kwargs):
        return subprocess.CompletedProcess(cmd, 255, stdout="", stderr="Unable to locate credentials")

    monkeypatch.setattr(subprocess, "run", fake_run)

    with pytest.raises(RegistryAuthError, match="Unable to locate credentials"):
        DependencyRebuilder(config).rebuild()


def test_dependency_update_failure(config: Config, monkeypatch):
    def fake_run(cmd, **kwargs):
        code = 1 if cmd[:2] == ["helm", "dependency"] else 0
        return subprocess.CompletedProcess(cmd, code, stdout="pw", stderr="chart not found")

    monkeypatch.setattr(subprocess, "run", fake_run)

    with pytest.raises(DependencyFetchError) as exc_info:
        DependencyRebuilder(config).rebuild()

    assert exc_info.value.command == ["helm", "dependency", "update"]
