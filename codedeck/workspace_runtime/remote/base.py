"""Remote host interface.

The sync adapter only needs a GitHub-shaped contract: list one directory,
fetch one file's text, and write one file guarded by a revision token.
Content transfer encoding (base64 for GitHub) stays inside the client.

Implementations raise ``RemoteConflictError`` when a write precondition is
rejected and ``RemoteUnavailableError`` for everything else that fails.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from codedeck.workspace_runtime.models.remote import RemoteEntry, RemoteWrite


@runtime_checkable
class RemoteHost(Protocol):
    """Async protocol for reading and writing a remote repository's files.

    Paths are host-relative (no leading slash); ``""`` is the repository root.
    """

    async def get_default_branch(self, owner: str, repo: str) -> str:
        """Return the repository's default branch name."""
        ...

    async def list_directory(self, owner: str, repo: str, path: str, branch: str) -> list[RemoteEntry]:
        """List the immediate entries of a directory."""
        ...

    async def get_file_content(self, owner: str, repo: str, path: str, branch: str) -> str:
        """Return a file's decoded text content."""
        ...

    async def write_file(self, owner: str, repo: str, path: str, write: RemoteWrite) -> str:
        """Create or update a file and return its new revision token."""
        ...

    async def aclose(self) -> None:
        """Release any held connections."""
        ...
