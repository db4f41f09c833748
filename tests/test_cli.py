"""Tests for the ``codedeck`` command line."""

from __future__ import annotations

import pytest
from click.testing import CliRunner

from codedeck.cli import main
from codedeck.workspace_runtime import app as app_module
from codedeck.workspace_runtime import log as log_module
from codedeck.workspace_runtime.errors import RemoteUnavailableError
from codedeck.workspace_runtime.remote.memory import InMemoryRemoteHost


@pytest.fixture
def use_host(monkeypatch):
    # The runner swaps stderr per invocation; keep loguru off it.
    monkeypatch.setattr(log_module, "setup_logging", lambda *args, **kwargs: None)

    def _use(host: InMemoryRemoteHost) -> None:
        monkeypatch.setattr(app_module, "create_remote_host", lambda settings: host)

    return _use


def test_pull_prints_tree(memory_host: InMemoryRemoteHost, use_host) -> None:
    use_host(memory_host)

    result = CliRunner().invoke(main, ["pull", "octo", "demo"])

    assert result.exit_code == 0, result.output
    assert "README.md" in result.output
    assert "src/\n  app.js\n  lib/\n    util.ts" in result.output
    assert "4 files loaded, 0 failed" in result.output


def test_pull_reports_failed_files(memory_host: InMemoryRemoteHost, use_host, monkeypatch) -> None:
    async def broken(owner: str, repo: str, path: str, branch: str) -> str:
        if path == "index.html":
            raise RemoteUnavailableError("rate limited")
        return "ok"

    monkeypatch.setattr(memory_host, "get_file_content", broken)
    use_host(memory_host)

    result = CliRunner().invoke(main, ["pull", "octo", "demo", "--branch", "main"])

    assert result.exit_code == 0, result.output
    assert "4 files loaded, 1 failed" in result.output
    assert "failed: /index.html" in result.output


def test_pull_missing_repository(memory_host: InMemoryRemoteHost, use_host) -> None:
    use_host(memory_host)

    result = CliRunner().invoke(main, ["pull", "octo", "missing", "--branch", "main"])

    assert result.exit_code == 1
    assert "Repository not found" in result.output
