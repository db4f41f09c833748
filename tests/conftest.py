"""Shared test fixtures.

Everything runs in-process: workspaces are plain objects and the remote host
is ``InMemoryRemoteHost``.  No network or Docker is required.
"""

from __future__ import annotations

import os
from collections.abc import Iterator

import pytest

from codedeck.workspace_runtime.remote.memory import InMemoryRemoteHost
from codedeck.workspace_runtime.settings import get_settings
from codedeck.workspace_runtime.workspace import Workspace

REPO_FILES = {
    "README.md": "# Demo\n",
    "index.html": "<html></html>",
    "src/app.js": "console.log('hi');",
    "src/lib/util.ts": "export const x = 1;",
}


@pytest.fixture(autouse=True)
def _clean_settings() -> Iterator[None]:
    """Drop cached settings and CODEDECK_* overrides between tests."""
    saved = {k: v for k, v in os.environ.items() if k.startswith("CODEDECK_")}
    get_settings.cache_clear()
    yield
    for key in [k for k in os.environ if k.startswith("CODEDECK_")]:
        del os.environ[key]
    os.environ.update(saved)
    get_settings.cache_clear()


@pytest.fixture
def workspace() -> Workspace:
    """Workspace holding the starter project."""
    return Workspace.seeded()


@pytest.fixture
def memory_host() -> InMemoryRemoteHost:
    """In-memory host with one repository, ``octo/demo`` on ``main``."""
    host = InMemoryRemoteHost(default_branch="main")
    host.put_repository("octo", "demo", REPO_FILES)
    return host
