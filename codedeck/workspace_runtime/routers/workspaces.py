"""Workspace endpoints (RPC-style).

Thin HTTP adapter over ``Workspace`` operations.  All write operations use
POST; reads use GET.
"""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, status

from codedeck.workspace_runtime.deps import Registry
from codedeck.workspace_runtime.models.api import (
    ActiveFileUpdate,
    ContentUpdate,
    DeleteResponse,
    FileCreate,
    FolderCreate,
    NodeCreated,
    PathRequest,
    ToggleResponse,
    ViewUpdate,
    WorkspaceCreate,
    WorkspaceSummary,
)
from codedeck.workspace_runtime.models.enums import NodeKind
from codedeck.workspace_runtime.models.tree import File
from codedeck.workspace_runtime.models.workspace import ViewSettings, WorkspaceSnapshot
from codedeck.workspace_runtime.paths import join, normalize
from codedeck.workspace_runtime.routers.common import domain_errors, get_workspace_or_404

router = APIRouter(prefix="/workspaces", tags=["workspaces"])


# -- Workspaces ----------------------------------------------------------------


@router.post("/create", response_model=WorkspaceSnapshot, status_code=status.HTTP_201_CREATED)
async def create_workspace(body: WorkspaceCreate, registry: Registry) -> WorkspaceSnapshot:
    """Create a new workspace."""
    try:
        workspace = registry.create(seed=body.seed, workspace_id=body.workspace_id)
    except ValueError:
        raise HTTPException(
            status.HTTP_409_CONFLICT, detail=f"Workspace '{body.workspace_id}' already exists."
        ) from None
    return workspace.snapshot()


@router.get("/list", response_model=list[WorkspaceSummary])
async def list_workspaces(registry: Registry) -> list[WorkspaceSummary]:
    return [
        WorkspaceSummary(
            workspace_id=ws.workspace_id,
            file_count=len(ws.files()),
            active_file_id=ws.active_file_id,
        )
        for ws in registry.all_workspaces()
    ]


@router.get("/{workspace_id}/get", response_model=WorkspaceSnapshot)
async def get_workspace(workspace_id: str, registry: Registry) -> WorkspaceSnapshot:
    """Full snapshot: tree, files, active file and view settings."""
    return get_workspace_or_404(registry, workspace_id).snapshot()


@router.post("/{workspace_id}/delete", status_code=status.HTTP_204_NO_CONTENT)
async def delete_workspace(workspace_id: str, registry: Registry) -> None:
    get_workspace_or_404(registry, workspace_id)
    registry.remove(workspace_id)


# -- Files ---------------------------------------------------------------------


@router.post("/{workspace_id}/files/create", response_model=NodeCreated, status_code=status.HTTP_201_CREATED)
async def create_file(workspace_id: str, body: FileCreate, registry: Registry) -> NodeCreated:
    workspace = get_workspace_or_404(registry, workspace_id)
    with domain_errors():
        file_id = workspace.create_file(body.name, body.parent_path, body.content)
    return NodeCreated(id=file_id, kind=NodeKind.FILE, path=join(body.parent_path, body.name))


@router.get("/{workspace_id}/files/{file_id}/get", response_model=File)
async def get_file(workspace_id: str, file_id: str, registry: Registry) -> File:
    workspace = get_workspace_or_404(registry, workspace_id)
    with domain_errors():
        return workspace.get_file(file_id)


@router.post("/{workspace_id}/files/{file_id}/update", status_code=status.HTTP_204_NO_CONTENT)
async def update_file_content(workspace_id: str, file_id: str, body: ContentUpdate, registry: Registry) -> None:
    """Editor change event: replace one file's content."""
    workspace = get_workspace_or_404(registry, workspace_id)
    with domain_errors():
        workspace.update_file_content(file_id, body.content)


@router.post("/{workspace_id}/files/delete", response_model=DeleteResponse)
async def delete_file(workspace_id: str, body: PathRequest, registry: Registry) -> DeleteResponse:
    workspace = get_workspace_or_404(registry, workspace_id)
    with domain_errors():
        removed = workspace.delete_file(body.path)
    return DeleteResponse(removed_file_ids=removed, active_file_id=workspace.active_file_id)


@router.post("/{workspace_id}/active", response_model=ActiveFileUpdate)
async def set_active_file(workspace_id: str, body: ActiveFileUpdate, registry: Registry) -> ActiveFileUpdate:
    workspace = get_workspace_or_404(registry, workspace_id)
    workspace.set_active_file(body.file_id)
    return ActiveFileUpdate(file_id=workspace.active_file_id)


# -- Folders -------------------------------------------------------------------


@router.post("/{workspace_id}/folders/create", response_model=NodeCreated, status_code=status.HTTP_201_CREATED)
async def create_folder(workspace_id: str, body: FolderCreate, registry: Registry) -> NodeCreated:
    workspace = get_workspace_or_404(registry, workspace_id)
    with domain_errors():
        folder_id = workspace.create_folder(body.name, body.parent_path)
    return NodeCreated(id=folder_id, kind=NodeKind.FOLDER, path=join(body.parent_path, body.name))


@router.post("/{workspace_id}/folders/delete", response_model=DeleteResponse)
async def delete_folder(workspace_id: str, body: PathRequest, registry: Registry) -> DeleteResponse:
    """Delete a folder and its whole subtree.  The root is rejected with 400."""
    workspace = get_workspace_or_404(registry, workspace_id)
    with domain_errors():
        removed = workspace.delete_folder(body.path)
    return DeleteResponse(removed_file_ids=removed, active_file_id=workspace.active_file_id)


@router.post("/{workspace_id}/folders/toggle", response_model=ToggleResponse)
async def toggle_folder(workspace_id: str, body: PathRequest, registry: Registry) -> ToggleResponse:
    workspace = get_workspace_or_404(registry, workspace_id)
    expanded = workspace.toggle_expanded(body.path)
    if expanded is None:
        raise HTTPException(status.HTTP_404_NOT_FOUND, detail=f"Folder '{body.path}' not found.")
    return ToggleResponse(path=normalize(body.path), expanded=expanded)


# -- View ----------------------------------------------------------------------


@router.post("/{workspace_id}/view", response_model=ViewSettings)
async def update_view(workspace_id: str, body: ViewUpdate, registry: Registry) -> ViewSettings:
    """Partially update split position, preview visibility or theme."""
    workspace = get_workspace_or_404(registry, workspace_id)
    changes = body.model_dump(exclude_unset=True, exclude_none=True)
    if not changes:
        return workspace.view
    return workspace.update_view(**changes)
