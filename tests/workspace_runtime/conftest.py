"""Shared fixtures for workspace-runtime HTTP tests."""

from __future__ import annotations

from collections.abc import AsyncIterator

import pytest
from httpx import ASGITransport, AsyncClient

from codedeck.workspace_runtime.app import app
from codedeck.workspace_runtime.managers.sync import RemoteSyncAdapter
from codedeck.workspace_runtime.registry import WorkspaceRegistry
from codedeck.workspace_runtime.remote.memory import InMemoryRemoteHost


@pytest.fixture
def registry() -> WorkspaceRegistry:
    return WorkspaceRegistry()


@pytest.fixture
async def client(registry: WorkspaceRegistry, memory_host: InMemoryRemoteHost) -> AsyncIterator[AsyncClient]:
    """Async HTTP client wired to the app with a fresh registry.

    The app lifespan does NOT run under ``ASGITransport``, so state fields
    are pre-set here.
    """
    app.state.registry = registry
    app.state.sync_adapter = RemoteSyncAdapter(memory_host, push_delay=0)

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.state.registry = None
    app.state.sync_adapter = None
