"""Domain exception -> HTTP status translation shared by the routers."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from fastapi import HTTPException, status

from codedeck.workspace_runtime.errors import (
    IndexMismatchError,
    InvalidPathError,
    PathCollisionError,
    RemoteConflictError,
    RemoteUnavailableError,
    RootRemovalError,
    WorkspaceNotFoundError,
)
from codedeck.workspace_runtime.registry import WorkspaceRegistry
from codedeck.workspace_runtime.workspace import Workspace


def get_workspace_or_404(registry: WorkspaceRegistry, workspace_id: str) -> Workspace:
    try:
        return registry.get(workspace_id)
    except WorkspaceNotFoundError:
        raise HTTPException(status.HTTP_404_NOT_FOUND, detail=f"Workspace '{workspace_id}' not found.") from None


@contextmanager
def domain_errors() -> Iterator[None]:
    """Re-raise workspace and remote exceptions as ``HTTPException``."""
    try:
        yield
    except (InvalidPathError, RootRemovalError, IndexMismatchError) as exc:
        raise HTTPException(status.HTTP_400_BAD_REQUEST, detail=str(exc)) from None
    except (PathCollisionError, RemoteConflictError) as exc:
        raise HTTPException(status.HTTP_409_CONFLICT, detail=str(exc)) from None
    except RemoteUnavailableError as exc:
        raise HTTPException(status.HTTP_502_BAD_GATEWAY, detail=str(exc)) from None
    except LookupError as exc:
        raise HTTPException(status.HTTP_404_NOT_FOUND, detail=str(exc)) from None
