"""Data models for the workspace runtime."""

from codedeck.workspace_runtime.models.api import (
    ActiveFileUpdate,
    AuthLogin,
    AuthStatus,
    ContentUpdate,
    DeleteResponse,
    FileCreate,
    FolderCreate,
    NodeCreated,
    PathRequest,
    RemoteLoadRequest,
    RemoteLoadResponse,
    RemotePushRequest,
    RepositoryCreate,
    ToggleResponse,
    ViewUpdate,
    WorkspaceCreate,
    WorkspaceSummary,
)
from codedeck.workspace_runtime.models.enums import Language, NodeKind, PushStatus, RemoteEntryType, Theme
from codedeck.workspace_runtime.models.remote import PushReport, PushResult, RemoteEntry, RemoteLocation, RemoteWrite
from codedeck.workspace_runtime.models.tree import File, Folder, Node, Tree
from codedeck.workspace_runtime.models.workspace import ViewSettings, WorkspaceSnapshot

__all__ = [
    "ActiveFileUpdate",
    "AuthLogin",
    "AuthStatus",
    "ContentUpdate",
    "DeleteResponse",
    "File",
    "FileCreate",
    "Folder",
    "FolderCreate",
    "Language",
    "Node",
    "NodeCreated",
    "NodeKind",
    "PathRequest",
    "PushReport",
    "PushResult",
    "PushStatus",
    "RemoteEntry",
    "RemoteEntryType",
    "RemoteLoadRequest",
    "RemoteLoadResponse",
    "RemoteLocation",
    "RemotePushRequest",
    "RemoteWrite",
    "RepositoryCreate",
    "Theme",
    "ToggleResponse",
    "Tree",
    "ViewSettings",
    "ViewUpdate",
    "WorkspaceCreate",
    "WorkspaceSnapshot",
    "WorkspaceSummary",
]
