"""Workspace snapshot and view settings models."""

from __future__ import annotations

from pydantic import BaseModel, Field

from codedeck.workspace_runtime.models.enums import Theme
from codedeck.workspace_runtime.models.tree import File, Tree


class ViewSettings(BaseModel):
    """Editor presentation preferences held alongside the tree."""

    split_position: float = Field(default=50.0, ge=0.0, le=100.0, description="Editor/preview split, in percent")
    show_preview: bool = True
    theme: Theme = Theme.DARK


class WorkspaceSnapshot(BaseModel):
    """A consistent, detached copy of a workspace's state.

    ``files`` is keyed by file id and holds exactly the files reachable in
    ``tree``.
    """

    workspace_id: str
    tree: Tree
    files: dict[str, File] = Field(default_factory=dict)
    active_file_id: str | None = None
    view: ViewSettings = Field(default_factory=ViewSettings)

    @property
    def active_file(self) -> File | None:
        if self.active_file_id is None:
            return None
        return self.files.get(self.active_file_id)
