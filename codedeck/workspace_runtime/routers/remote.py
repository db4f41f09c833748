"""Remote repository endpoints: load a repository into a workspace, push back.

Remote failures map to 409 (revision conflict on a single write) and 502
(host unavailable).  Bulk push always answers 200 with per-file statuses.
The account endpoints (login, logout, repositories) need a GitHub host.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, HTTPException, status
from loguru import logger

from codedeck.workspace_runtime.deps import Registry, SyncAdapter
from codedeck.workspace_runtime.errors import RemoteError
from codedeck.workspace_runtime.models.api import (
    AuthLogin,
    AuthStatus,
    RemoteLoadRequest,
    RemoteLoadResponse,
    RemotePushRequest,
    RepositoryCreate,
)
from codedeck.workspace_runtime.models.remote import PushReport, RemoteLocation
from codedeck.workspace_runtime.remote.github import GitHubClient
from codedeck.workspace_runtime.routers.common import domain_errors, get_workspace_or_404

router = APIRouter(tags=["remote"])


@router.post("/workspaces/{workspace_id}/remote/load", response_model=RemoteLoadResponse)
async def load_repository(
    workspace_id: str,
    body: RemoteLoadRequest,
    registry: Registry,
    sync: SyncAdapter,
) -> RemoteLoadResponse:
    """Replace the workspace's tree with a remote repository's files."""
    workspace = get_workspace_or_404(registry, workspace_id)
    location = RemoteLocation(owner=body.owner, repo=body.repo, branch=body.branch)
    with domain_errors():
        resolved = await sync.load_into(workspace, location, activate_first=body.activate_first)
    return RemoteLoadResponse(location=resolved, workspace=workspace.snapshot())


@router.post("/workspaces/{workspace_id}/remote/push", response_model=PushReport)
async def push_repository(
    workspace_id: str,
    body: RemotePushRequest,
    registry: Registry,
    sync: SyncAdapter,
) -> PushReport:
    """Write every file of the workspace to the remote, one at a time."""
    workspace = get_workspace_or_404(registry, workspace_id)
    location = RemoteLocation(owner=body.owner, repo=body.repo, branch=body.branch)
    with domain_errors():
        return await sync.push_all(workspace, location, body.message)


# -- GitHub account ------------------------------------------------------------


def _github(sync: SyncAdapter) -> GitHubClient:
    if not isinstance(sync.host, GitHubClient):
        raise HTTPException(status.HTTP_501_NOT_IMPLEMENTED, detail="Configured remote host is not GitHub.")
    return sync.host


def _repository_summary(r: dict[str, Any]) -> dict[str, Any]:
    return {
        "full_name": r.get("full_name"),
        "name": r.get("name"),
        "owner": (r.get("owner") or {}).get("login"),
        "default_branch": r.get("default_branch"),
        "visibility": r.get("visibility"),
    }


@router.post("/remote/auth/login", response_model=AuthStatus)
async def login(body: AuthLogin, sync: SyncAdapter) -> AuthStatus:
    """Store a GitHub token after checking it against the user endpoint.

    A rejected token is cleared again and answered with 401.
    """
    client = _github(sync)
    client.set_token(body.token.get_secret_value())
    try:
        user = await client.get_current_user()
    except RemoteError as exc:
        client.clear_token()
        raise HTTPException(status.HTTP_401_UNAUTHORIZED, detail=str(exc)) from None
    logger.info("GitHub login as {}", user.get("login"))
    return AuthStatus(authenticated=True, username=user.get("login"))


@router.post("/remote/auth/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(sync: SyncAdapter) -> None:
    _github(sync).clear_token()


@router.get("/remote/auth/get", response_model=AuthStatus)
async def get_auth_status(sync: SyncAdapter) -> AuthStatus:
    return AuthStatus(authenticated=_github(sync).is_authenticated)


@router.get("/remote/user/get")
async def get_remote_user(sync: SyncAdapter) -> dict[str, Any]:
    client = _github(sync)
    with domain_errors():
        user = await client.get_current_user()
    return {"username": user.get("login"), "avatar_url": user.get("avatar_url")}


@router.get("/remote/repos/list")
async def list_remote_repositories(sync: SyncAdapter) -> list[dict[str, Any]]:
    """Repositories of the authenticated user, most recently updated first."""
    client = _github(sync)
    with domain_errors():
        repos = await client.list_repositories()
    return [_repository_summary(r) for r in repos]


@router.post("/remote/repos/create", status_code=status.HTTP_201_CREATED)
async def create_remote_repository(body: RepositoryCreate, sync: SyncAdapter) -> dict[str, Any]:
    """Create a repository (with an initial README) for the authenticated user.

    A name that is already taken answers 409.
    """
    client = _github(sync)
    with domain_errors():
        repository = await client.create_repository(body.name, body.description, body.private)
    return _repository_summary(repository)
