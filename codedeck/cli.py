import click


@click.group()
def main() -> None:
    """Codedeck - in-browser coding workspace backend."""


@main.command()
@click.option("--host", default=None, help="Bind host (default: from CODEDECK_HOST or 0.0.0.0).")
@click.option("--port", default=None, type=int, help="Bind port (default: from CODEDECK_PORT or 8000).")
@click.option("--reload", is_flag=True, default=False, help="Enable auto-reload for development.")
def serve(host: str | None, port: int | None, reload: bool) -> None:
    """Start the workspace runtime server."""
    import uvicorn

    from codedeck.workspace_runtime.settings import CodedeckSettings

    settings = CodedeckSettings()

    uvicorn.run(
        "codedeck.workspace_runtime.app:app",
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
        log_level="warning",  # uvicorn's own logging is intercepted by loguru
    )


@main.command()
@click.argument("owner")
@click.argument("repo")
@click.option("--branch", default=None, help="Branch to load (default: the repository's default branch).")
def pull(owner: str, repo: str, branch: str | None) -> None:
    """Load OWNER/REPO into a fresh workspace and print its tree."""
    import asyncio

    from codedeck.workspace_runtime.app import create_remote_host
    from codedeck.workspace_runtime.errors import RemoteError
    from codedeck.workspace_runtime.log import setup_logging
    from codedeck.workspace_runtime.managers.sync import FAILED_CONTENT, RemoteSyncAdapter
    from codedeck.workspace_runtime.models.remote import RemoteLocation
    from codedeck.workspace_runtime.settings import CodedeckSettings
    from codedeck.workspace_runtime.workspace import Workspace

    settings = CodedeckSettings()
    setup_logging(settings.log_level, json_logs=settings.log_json)

    async def _pull() -> Workspace:
        host = create_remote_host(settings)
        adapter = RemoteSyncAdapter(host, push_delay=settings.push_delay, default_branch=settings.default_branch)
        workspace = Workspace()
        try:
            await adapter.load_into(workspace, RemoteLocation(owner=owner, repo=repo, branch=branch))
        finally:
            await host.aclose()
        return workspace

    try:
        workspace = asyncio.run(_pull())
    except RemoteError as exc:
        raise click.ClickException(str(exc)) from None

    click.echo(workspace.render())
    failed = [f.path for f in workspace.files() if f.content == FAILED_CONTENT]
    click.echo(f"{len(workspace.files())} files loaded, {len(failed)} failed")
    for path in failed:
        click.echo(f"  failed: {path}")


if __name__ == "__main__":
    main()
