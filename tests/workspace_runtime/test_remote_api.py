"""HTTP tests for the remote load / push and GitHub account endpoints."""

from __future__ import annotations

import json

import httpx
from httpx import AsyncClient

from codedeck.workspace_runtime.app import app
from codedeck.workspace_runtime.managers.sync import RemoteSyncAdapter
from codedeck.workspace_runtime.registry import WorkspaceRegistry
from codedeck.workspace_runtime.remote.github import GitHubClient
from codedeck.workspace_runtime.remote.memory import InMemoryRemoteHost


async def test_load_repository(client: AsyncClient, registry: WorkspaceRegistry) -> None:
    registry.create(workspace_id="ws")

    resp = await client.post("/api/workspaces/ws/remote/load", json={"owner": "octo", "repo": "demo"})

    assert resp.status_code == 200, resp.text
    data = resp.json()
    assert data["location"] == {"owner": "octo", "repo": "demo", "branch": "main"}
    paths = [f["path"] for f in data["workspace"]["files"].values()]
    assert sorted(paths) == ["/README.md", "/index.html", "/src/app.js", "/src/lib/util.ts"]
    assert data["workspace"]["files"][data["workspace"]["active_file_id"]]["path"] == "/README.md"


async def test_load_missing_repository(client: AsyncClient, registry: WorkspaceRegistry) -> None:
    ws = registry.create(workspace_id="ws")
    before = ws.snapshot()

    resp = await client.post("/api/workspaces/ws/remote/load", json={"owner": "octo", "repo": "nope"})

    assert resp.status_code == 502
    assert ws.snapshot() == before


async def test_push_repository(
    client: AsyncClient, registry: WorkspaceRegistry, memory_host: InMemoryRemoteHost
) -> None:
    registry.create(workspace_id="ws")
    await client.post("/api/workspaces/ws/remote/load", json={"owner": "octo", "repo": "demo"})
    memory_host.put_repository("octo", "demo", {**memory_host.files("octo", "demo"), "README.md": "# Changed\n"})

    resp = await client.post(
        "/api/workspaces/ws/remote/push", json={"owner": "octo", "repo": "demo", "message": "sync"}
    )

    assert resp.status_code == 200
    report = resp.json()
    statuses = {r["path"]: r["status"] for r in report["results"]}
    assert statuses == {
        "/README.md": "conflict",
        "/index.html": "success",
        "/src/app.js": "success",
        "/src/lib/util.ts": "success",
    }
    assert report["succeeded"] == 3
    assert report["failed"] == 1
    assert report["all_succeeded"] is False


async def test_remote_unknown_workspace(client: AsyncClient) -> None:
    resp = await client.post("/api/workspaces/nope/remote/push", json={"owner": "octo", "repo": "demo"})
    assert resp.status_code == 404


async def test_remote_not_configured(client: AsyncClient, registry: WorkspaceRegistry) -> None:
    registry.create(workspace_id="ws")
    app.state.sync_adapter = None

    resp = await client.post("/api/workspaces/ws/remote/load", json={"owner": "octo", "repo": "demo"})

    assert resp.status_code == 503


async def test_github_account_endpoints_need_github(client: AsyncClient) -> None:
    resp = await client.get("/api/remote/user/get")
    assert resp.status_code == 501


def _use_github(handler, token: str | None = "tok") -> GitHubClient:
    github = GitHubClient(token, base_url="https://api.test", transport=httpx.MockTransport(handler))
    app.state.sync_adapter = RemoteSyncAdapter(github, push_delay=0)
    return github


def _github_api(request: httpx.Request) -> httpx.Response:
    if request.url.path == "/user":
        if request.headers.get("Authorization") != "token good":
            return httpx.Response(401, json={"message": "Bad credentials"})
        return httpx.Response(200, json={"login": "octocat", "avatar_url": "https://example.com/a.png"})
    if request.method == "POST" and request.url.path == "/user/repos":
        name = json.loads(request.content)["name"]
        if name == "taken":
            return httpx.Response(422, json={"message": "name already exists on this account"})
        return httpx.Response(201, json={"full_name": f"octocat/{name}", "name": name, "owner": {"login": "octocat"}})
    repo = {"full_name": "octocat/demo", "name": "demo", "owner": {"login": "octocat"}, "default_branch": "main"}
    return httpx.Response(200, json=[repo])


async def test_github_account_endpoints(client: AsyncClient) -> None:
    _use_github(_github_api, token="good")

    user = (await client.get("/api/remote/user/get")).json()
    repos = (await client.get("/api/remote/repos/list")).json()

    assert user == {"username": "octocat", "avatar_url": "https://example.com/a.png"}
    assert repos[0]["full_name"] == "octocat/demo"
    assert repos[0]["owner"] == "octocat"


async def test_login_and_logout(client: AsyncClient) -> None:
    github = _use_github(_github_api, token=None)
    assert (await client.get("/api/remote/auth/get")).json() == {"authenticated": False, "username": None}

    resp = await client.post("/api/remote/auth/login", json={"token": "good"})
    assert resp.status_code == 200
    assert resp.json() == {"authenticated": True, "username": "octocat"}
    assert github.is_authenticated

    resp = await client.post("/api/remote/auth/logout")
    assert resp.status_code == 204
    assert github.is_authenticated is False
    assert (await client.get("/api/remote/auth/get")).json()["authenticated"] is False


async def test_login_rejected_token_is_cleared(client: AsyncClient) -> None:
    github = _use_github(_github_api, token=None)

    resp = await client.post("/api/remote/auth/login", json={"token": "bad"})

    assert resp.status_code == 401
    assert github.is_authenticated is False


async def test_create_repository(client: AsyncClient) -> None:
    _use_github(_github_api)

    resp = await client.post("/api/remote/repos/create", json={"name": "fresh", "private": True})

    assert resp.status_code == 201
    assert resp.json()["full_name"] == "octocat/fresh"
    assert resp.json()["owner"] == "octocat"


async def test_create_repository_errors(client: AsyncClient) -> None:
    _use_github(_github_api)

    assert (await client.post("/api/remote/repos/create", json={"name": "taken"})).status_code == 409
    assert (await client.post("/api/remote/repos/create", json={"name": ""})).status_code == 422


async def test_auth_endpoints_need_github(client: AsyncClient) -> None:
    assert (await client.post("/api/remote/auth/login", json={"token": "x"})).status_code == 501
    assert (await client.post("/api/remote/repos/create", json={"name": "x"})).status_code == 501
