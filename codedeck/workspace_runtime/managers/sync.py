"""Remote sync: build a tree from a remote listing, push files back.

Loading favours partial success.  A file whose content cannot be fetched is
still created, holding ``FAILED_CONTENT``; a folder whose listing fails is
kept without children.  Only a failure to list the repository root aborts a
load, because nothing would be salvageable.

Pushing never swallows a failure: every file gets its own ``PushResult``.
Files are written one at a time with ``push_delay`` seconds between calls to
stay under host rate limits.
"""

from __future__ import annotations

import contextlib
from collections.abc import Awaitable, Callable
from datetime import date

import anyio
from loguru import logger

from codedeck.workspace_runtime import paths
from codedeck.workspace_runtime.errors import (
    InvalidPathError,
    NodeNotFoundError,
    PathCollisionError,
    RemoteConflictError,
    RemoteError,
)
from codedeck.workspace_runtime.fs.index import FileIndex
from codedeck.workspace_runtime.fs.tree import insert, new_tree
from codedeck.workspace_runtime.languages import language_for
from codedeck.workspace_runtime.log import workspace_logger
from codedeck.workspace_runtime.models.enums import PushStatus, RemoteEntryType
from codedeck.workspace_runtime.models.remote import PushReport, PushResult, RemoteEntry, RemoteLocation, RemoteWrite
from codedeck.workspace_runtime.models.tree import File, Folder, Node, Tree
from codedeck.workspace_runtime.remote.base import RemoteHost
from codedeck.workspace_runtime.workspace import Workspace

FAILED_CONTENT = "// Failed to load content"

ListDirectory = Callable[[str], Awaitable[list[RemoteEntry]]]
FetchContent = Callable[[str], Awaitable[str]]


def default_commit_message(today: date | None = None) -> str:
    return f"Update code - {(today or date.today()).isoformat()}"


# ---------------------------------------------------------------------------
# Listing -> tree
# ---------------------------------------------------------------------------


async def build_tree_from_listing(
    root_listing: list[RemoteEntry],
    fetch_content: FetchContent,
    list_directory: ListDirectory,
) -> Tree:
    """Materialize a remote listing (and everything beneath it) as a tree.

    Walks depth-first with an explicit stack.  Children keep the order the
    host listed them in.  ``fetch_content`` and ``list_directory`` take a
    host-relative path.
    """
    tree = new_tree()
    stack: list[tuple[Folder, str | None]] = [(tree.root, None)]

    while stack:
        folder, remote_path = stack.pop()
        if remote_path is None:
            entries = root_listing
        else:
            try:
                entries = await list_directory(remote_path)
            except Exception as exc:
                logger.warning("Failed to list folder {}: {}", remote_path, exc)
                continue

        subfolders: list[tuple[Folder, str]] = []
        for entry in entries:
            node = await _materialize(entry, folder.path, fetch_content)
            if node is None:
                continue
            try:
                insert(tree, folder.path, node)
            except (PathCollisionError, InvalidPathError) as exc:
                logger.warning("Skipping remote entry {}: {}", entry.path, exc)
                continue
            if isinstance(node, Folder):
                subfolders.append((node, entry.path))

        stack.extend(reversed(subfolders))

    return tree


async def _materialize(entry: RemoteEntry, parent_path: str, fetch_content: FetchContent) -> Node | None:
    try:
        path = paths.join(parent_path, entry.name)
    except InvalidPathError as exc:
        logger.warning("Skipping remote entry {!r}: {}", entry.path, exc)
        return None

    match entry.type:
        case RemoteEntryType.DIR:
            return Folder(name=entry.name, path=path)
        case RemoteEntryType.FILE:
            try:
                content = await fetch_content(entry.path)
            except Exception as exc:
                logger.warning("Failed to load file {}: {}", entry.path, exc)
                # No revision: pushing the sentinel must not overwrite the real file.
                return File(name=entry.name, path=path, content=FAILED_CONTENT, language=language_for(entry.name))
            return File(
                name=entry.name,
                path=path,
                content=content,
                language=language_for(entry.name),
                remote_revision=entry.revision or None,
            )
        case _:
            return None


# ---------------------------------------------------------------------------
# Adapter
# ---------------------------------------------------------------------------


class RemoteSyncAdapter:
    """Moves whole trees between a remote host and workspaces.

    Holds no workspace state of its own; every effect on a workspace goes
    through the workspace's own operations.
    """

    def __init__(self, host: RemoteHost, *, push_delay: float = 0.3, default_branch: str | None = None) -> None:
        self._host = host
        self._push_delay = push_delay
        self._default_branch = default_branch

    @property
    def host(self) -> RemoteHost:
        return self._host

    async def resolve(self, location: RemoteLocation) -> RemoteLocation:
        """Fill in the branch: explicit, else the repository default."""
        if location.branch:
            return location
        try:
            branch = await self._host.get_default_branch(location.owner, location.repo)
        except RemoteError:
            if self._default_branch is None:
                raise
            logger.warning(
                "Could not resolve default branch of {}/{}, using {}",
                location.owner,
                location.repo,
                self._default_branch,
            )
            branch = self._default_branch
        return location.model_copy(update={"branch": branch})

    # -- Load ------------------------------------------------------------------

    async def load(self, location: RemoteLocation) -> tuple[Tree, RemoteLocation]:
        """Fetch a repository as a tree.  Root listing failures propagate."""
        resolved = await self.resolve(location)
        owner, repo, branch = resolved.owner, resolved.repo, resolved.branch
        assert branch is not None

        logger.info("Loading {}/{}@{}", owner, repo, branch)
        root_listing = await self._host.list_directory(owner, repo, "", branch)
        tree = await build_tree_from_listing(
            root_listing,
            fetch_content=_bind(self._host.get_file_content, owner, repo, branch),
            list_directory=_bind(self._host.list_directory, owner, repo, branch),
        )
        return tree, resolved

    async def load_into(
        self,
        workspace: Workspace,
        location: RemoteLocation,
        *,
        activate_first: bool = True,
    ) -> RemoteLocation:
        """Replace *workspace*'s tree with the remote repository's.

        The workspace is untouched if the load fails.  With *activate_first*
        the first file in tree order becomes active.
        """
        tree, resolved = await self.load(location)
        index = FileIndex.from_tree(tree)
        first = next(iter(index), None)
        active = first.id if activate_first and first is not None else None
        workspace.replace_all(tree, index, active_file_id=active)
        log = workspace_logger(workspace.workspace_id)
        log.info("Loaded {}/{}@{}", resolved.owner, resolved.repo, resolved.branch)
        return resolved

    # -- Push ------------------------------------------------------------------

    async def push_file(self, location: RemoteLocation, file: File, message: str) -> str:
        """Write one file and return its new revision.

        The file's ``remote_revision`` (if any) is sent as the precondition.
        Raises ``RemoteConflictError`` or ``RemoteUnavailableError``.
        """
        resolved = await self.resolve(location)
        assert resolved.branch is not None
        write = RemoteWrite(
            content=file.content,
            message=message,
            branch=resolved.branch,
            revision=file.remote_revision,
        )
        return await self._host.write_file(resolved.owner, resolved.repo, paths.to_remote(file.path), write)

    async def push_all(
        self,
        workspace: Workspace,
        location: RemoteLocation,
        message: str | None = None,
    ) -> PushReport:
        """Push every indexed file in order, recording one result per file."""
        resolved = await self.resolve(location)
        message = message or default_commit_message()
        report = PushReport(location=resolved)
        log = workspace_logger(workspace.workspace_id)

        for i, file in enumerate(workspace.files()):
            if i:
                await anyio.sleep(self._push_delay)
            try:
                revision = await self.push_file(resolved, file, message)
            except RemoteConflictError as exc:
                log.warning("Push conflict for {}: {}", file.path, exc)
                report.results.append(
                    PushResult(file_id=file.id, path=file.path, status=PushStatus.CONFLICT, message=str(exc))
                )
                continue
            except RemoteError as exc:
                log.warning("Push failed for {}: {}", file.path, exc)
                report.results.append(
                    PushResult(file_id=file.id, path=file.path, status=PushStatus.UNAVAILABLE, message=str(exc))
                )
                continue

            # The file may have been deleted while the write was in flight.
            with contextlib.suppress(NodeNotFoundError):
                workspace.record_remote_revision(file.id, revision)
            report.results.append(
                PushResult(file_id=file.id, path=file.path, status=PushStatus.SUCCESS, revision=revision)
            )
            log.info("Pushed {} ({})", file.path, revision)

        log.info(
            "Push to {}/{}@{}: {} succeeded, {} failed",
            resolved.owner,
            resolved.repo,
            resolved.branch,
            report.succeeded,
            report.failed,
        )
        return report


def _bind(method: Callable[[str, str, str, str], Awaitable], owner: str, repo: str, branch: str) -> Callable:
    """Adapt a host method to the single-argument (path) callables the builder takes."""

    async def call(path: str):  # noqa: ANN202
        return await method(owner, repo, path, branch)

    return call
