from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.routing import APIRouter
from loguru import logger

from codedeck.workspace_runtime.log import setup_logging
from codedeck.workspace_runtime.managers.sync import RemoteSyncAdapter
from codedeck.workspace_runtime.registry import WorkspaceRegistry
from codedeck.workspace_runtime.remote.base import RemoteHost
from codedeck.workspace_runtime.remote.github import GitHubClient
from codedeck.workspace_runtime.remote.memory import InMemoryRemoteHost
from codedeck.workspace_runtime.settings import CodedeckSettings, get_settings


def create_remote_host(settings: CodedeckSettings) -> RemoteHost:
    """Create the remote host client based on configuration."""
    if settings.remote_host == "memory":
        return InMemoryRemoteHost(default_branch=settings.default_branch)
    token = settings.github_token.get_secret_value() if settings.github_token else None
    return GitHubClient(token, base_url=settings.github_api_url, timeout=settings.request_timeout)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    # -- Startup ---------------------------------------------------------------
    settings = get_settings()
    setup_logging(settings.log_level, json_logs=settings.log_json)

    logger.info("Workspace runtime starting (host={}, port={})", settings.host, settings.port)

    registry = WorkspaceRegistry()
    _app.state.registry = registry
    if settings.seed_workspace:
        workspace = registry.create(seed=True)
        logger.info("Seed workspace: {}", workspace.workspace_id)

    # -- Remote host -----------------------------------------------------------
    host = create_remote_host(settings)
    if settings.remote_host == "github" and not settings.github_token:
        logger.warning("CODEDECK_GITHUB_TOKEN not set -- remote load/push will fail until configured")
    _app.state.sync_adapter = RemoteSyncAdapter(
        host,
        push_delay=settings.push_delay,
        default_branch=settings.default_branch,
    )
    logger.info("Remote host: {}", settings.remote_host)

    yield

    # -- Shutdown --------------------------------------------------------------
    logger.info("Workspace runtime shutting down (workspaces={})", registry.count)
    await host.aclose()
    registry.clear()


app = FastAPI(title="Codedeck Workspace Runtime", lifespan=lifespan)

# ---------------------------------------------------------------------------
# API router -- all backend endpoints live under /api
# ---------------------------------------------------------------------------
api = APIRouter(prefix="/api")


@api.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}


from codedeck.workspace_runtime.routers.remote import router as remote_router  # noqa: E402
from codedeck.workspace_runtime.routers.workspaces import router as workspaces_router  # noqa: E402

api.include_router(workspaces_router)
api.include_router(remote_router)

app.include_router(api)
