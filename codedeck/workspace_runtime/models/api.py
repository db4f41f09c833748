"""API request / response schemas for the workspace endpoints.

These thin schemas sit between HTTP and the ``Workspace`` operations.  Read
responses reuse the domain models (``WorkspaceSnapshot``, ``File``,
``PushReport``) directly.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, SecretStr

from codedeck.workspace_runtime.models.enums import NodeKind, Theme
from codedeck.workspace_runtime.models.remote import RemoteLocation
from codedeck.workspace_runtime.models.workspace import WorkspaceSnapshot

# ---------------------------------------------------------------------------
# Workspace
# ---------------------------------------------------------------------------


class WorkspaceCreate(BaseModel):
    workspace_id: str | None = Field(default=None, description="Optional; auto-generated if omitted.")
    seed: bool = Field(default=True, description="Start from the starter project instead of an empty tree.")


class WorkspaceSummary(BaseModel):
    workspace_id: str
    file_count: int
    active_file_id: str | None = None


# ---------------------------------------------------------------------------
# Nodes
# ---------------------------------------------------------------------------


class FileCreate(BaseModel):
    name: str
    parent_path: str = "/"
    content: str = ""


class FolderCreate(BaseModel):
    name: str
    parent_path: str = "/"


class NodeCreated(BaseModel):
    id: str
    kind: NodeKind
    path: str


class ContentUpdate(BaseModel):
    content: str


class PathRequest(BaseModel):
    path: str


class DeleteResponse(BaseModel):
    removed_file_ids: list[str] = Field(default_factory=list)
    active_file_id: str | None = None


class ToggleResponse(BaseModel):
    path: str
    expanded: bool


class ActiveFileUpdate(BaseModel):
    file_id: str | None = None


class ViewUpdate(BaseModel):
    """Partial view-settings update; only fields set by the caller apply."""

    split_position: float | None = Field(default=None, ge=0.0, le=100.0)
    show_preview: bool | None = None
    theme: Theme | None = None


# ---------------------------------------------------------------------------
# Remote
# ---------------------------------------------------------------------------


class RemoteLoadRequest(RemoteLocation):
    activate_first: bool = True


class RemoteLoadResponse(BaseModel):
    location: RemoteLocation
    workspace: WorkspaceSnapshot


class RemotePushRequest(RemoteLocation):
    message: str | None = Field(default=None, description="Commit message; dated default if omitted.")


# ---------------------------------------------------------------------------
# Remote account
# ---------------------------------------------------------------------------


class AuthLogin(BaseModel):
    token: SecretStr = Field(description="GitHub access token.")


class AuthStatus(BaseModel):
    authenticated: bool
    username: str | None = None


class RepositoryCreate(BaseModel):
    name: str = Field(min_length=1)
    description: str = ""
    private: bool = False
