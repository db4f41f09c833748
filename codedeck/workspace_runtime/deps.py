"""FastAPI dependency injection for the workspace registry and remote sync.

Usage in route handlers::

    @router.post("/{workspace_id}/files/create")
    async def create_file(workspace_id: str, registry: Registry) -> ...:
        ...

``get_sync`` raises HTTP 503 if no remote host was configured.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status

from codedeck.workspace_runtime.managers.sync import RemoteSyncAdapter
from codedeck.workspace_runtime.registry import WorkspaceRegistry


def get_registry(request: Request) -> WorkspaceRegistry:
    return request.app.state.registry


def get_sync(request: Request) -> RemoteSyncAdapter:
    adapter: RemoteSyncAdapter | None = request.app.state.sync_adapter
    if adapter is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Remote host not configured.",
        )
    return adapter


# -- Annotated type aliases for concise route signatures ---------------------

Registry = Annotated[WorkspaceRegistry, Depends(get_registry)]
"""Annotated dependency: the process-wide workspace registry."""

SyncAdapter = Annotated[RemoteSyncAdapter, Depends(get_sync)]
"""Annotated dependency: remote sync adapter bound to the configured host."""
