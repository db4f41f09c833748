"""In-process workspace registry.

Owns every live ``Workspace`` by id.  Ephemeral -- empty on process restart;
durable copies live only on the remote host.
"""

from __future__ import annotations

from loguru import logger

from codedeck.workspace_runtime.errors import WorkspaceNotFoundError
from codedeck.workspace_runtime.workspace import Workspace


class WorkspaceRegistry:
    def __init__(self) -> None:
        self._workspaces: dict[str, Workspace] = {}

    # -- Mutation --------------------------------------------------------------

    def create(self, *, seed: bool = True, workspace_id: str | None = None) -> Workspace:
        """Create and register a workspace, seeded with the starter project by default."""
        if workspace_id is not None and workspace_id in self._workspaces:
            msg = f"Workspace already exists: {workspace_id}"
            raise ValueError(msg)
        workspace = Workspace.seeded(workspace_id) if seed else Workspace(workspace_id=workspace_id)
        self._workspaces[workspace.workspace_id] = workspace
        logger.debug("Registry: created workspace {} (seed={})", workspace.workspace_id, seed)
        return workspace

    def remove(self, workspace_id: str) -> Workspace:
        """Unregister a workspace.  Raises ``WorkspaceNotFoundError``."""
        workspace = self._workspaces.pop(workspace_id, None)
        if workspace is None:
            raise WorkspaceNotFoundError(workspace_id)
        logger.debug("Registry: removed workspace {}", workspace_id)
        return workspace

    def clear(self) -> None:
        self._workspaces.clear()

    # -- Query -----------------------------------------------------------------

    def get(self, workspace_id: str) -> Workspace:
        """Return a workspace.  Raises ``WorkspaceNotFoundError``."""
        workspace = self._workspaces.get(workspace_id)
        if workspace is None:
            raise WorkspaceNotFoundError(workspace_id)
        return workspace

    def all_workspaces(self) -> list[Workspace]:
        return list(self._workspaces.values())

    @property
    def count(self) -> int:
        return len(self._workspaces)
