"""In-process remote host.

Holds repositories as ``{path: content}`` maps per branch and derives
directory listings from the file paths.  Revisions are git blob hashes of
the content, so a write carrying a stale revision is rejected exactly as a
real host would reject it.

Used for offline runs (``CODEDECK_REMOTE_HOST=memory``) and in tests.
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass

from codedeck.workspace_runtime.errors import RemoteConflictError, RemoteUnavailableError
from codedeck.workspace_runtime.models.enums import RemoteEntryType
from codedeck.workspace_runtime.models.remote import RemoteEntry, RemoteWrite


def blob_revision(content: str) -> str:
    """Git blob sha of *content*."""
    data = content.encode("utf-8")
    return hashlib.sha1(b"blob %d\x00" % len(data) + data).hexdigest()  # noqa: S324


@dataclass
class _Blob:
    content: str
    revision: str


class InMemoryRemoteHost:
    """In-memory implementation of the RemoteHost protocol."""

    def __init__(self, default_branch: str = "main") -> None:
        self._default_branch = default_branch
        # (owner, repo) -> branch -> path -> blob
        self._repos: dict[tuple[str, str], dict[str, dict[str, _Blob]]] = {}

    def put_repository(self, owner: str, repo: str, files: dict[str, str], branch: str | None = None) -> None:
        """Create (or reset) a branch of a repository with the given files."""
        branches = self._repos.setdefault((owner, repo), {})
        branches[branch or self._default_branch] = {
            path.strip("/"): _Blob(content, blob_revision(content)) for path, content in files.items()
        }

    def files(self, owner: str, repo: str, branch: str | None = None) -> dict[str, str]:
        """Current ``{path: content}`` of a branch."""
        blobs = self._branch(owner, repo, branch or self._default_branch)
        return {path: blob.content for path, blob in blobs.items()}

    def _branch(self, owner: str, repo: str, branch: str) -> dict[str, _Blob]:
        branches = self._repos.get((owner, repo))
        if branches is None:
            msg = f"Repository not found: {owner}/{repo}"
            raise RemoteUnavailableError(msg)
        blobs = branches.get(branch)
        if blobs is None:
            msg = f"Branch not found: {owner}/{repo}@{branch}"
            raise RemoteUnavailableError(msg)
        return blobs

    # -- RemoteHost ------------------------------------------------------------

    async def get_default_branch(self, owner: str, repo: str) -> str:
        if (owner, repo) not in self._repos:
            msg = f"Repository not found: {owner}/{repo}"
            raise RemoteUnavailableError(msg)
        return self._default_branch

    async def list_directory(self, owner: str, repo: str, path: str, branch: str) -> list[RemoteEntry]:
        blobs = self._branch(owner, repo, branch)
        prefix = path.strip("/")
        entries: dict[str, RemoteEntry] = {}
        for file_path, blob in blobs.items():
            if prefix:
                if not file_path.startswith(prefix + "/"):
                    continue
                rest = file_path[len(prefix) + 1 :]
            else:
                rest = file_path
            head, _, tail = rest.partition("/")
            entry_path = f"{prefix}/{head}" if prefix else head
            if entry_path in entries:
                continue
            if tail:
                entries[entry_path] = RemoteEntry(path=entry_path, type=RemoteEntryType.DIR)
            else:
                entries[entry_path] = RemoteEntry(
                    path=entry_path,
                    type=RemoteEntryType.FILE,
                    revision=blob.revision,
                    size=len(blob.content.encode("utf-8")),
                )
        if prefix and not entries:
            msg = f"Directory not found: {owner}/{repo}/{prefix}"
            raise RemoteUnavailableError(msg)
        return list(entries.values())

    async def get_file_content(self, owner: str, repo: str, path: str, branch: str) -> str:
        blob = self._branch(owner, repo, branch).get(path.strip("/"))
        if blob is None:
            msg = f"File not found: {owner}/{repo}/{path}"
            raise RemoteUnavailableError(msg)
        return blob.content

    async def write_file(self, owner: str, repo: str, path: str, write: RemoteWrite) -> str:
        blobs = self._branch(owner, repo, write.branch)
        key = path.strip("/")
        existing = blobs.get(key)
        current = existing.revision if existing is not None else None
        if write.revision != current:
            msg = f"Revision mismatch for {key}: expected {current!r}, got {write.revision!r}"
            raise RemoteConflictError(msg)
        blob = _Blob(write.content, blob_revision(write.content))
        blobs[key] = blob
        return blob.revision

    async def aclose(self) -> None:
        return None
