"""Remote host data models.

These mirror the read/write contract the sync adapter needs from a
GitHub-shaped host: a directory listing, separately fetched file content,
and revision-guarded writes.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, computed_field

from codedeck.workspace_runtime.models.enums import PushStatus, RemoteEntryType


class RemoteEntry(BaseModel):
    """One entry of a remote directory listing."""

    path: str = Field(description="Host-relative path, no leading slash")
    type: RemoteEntryType
    revision: str = Field(default="", description="Opaque version token (e.g. blob sha)")
    size: int | None = None

    @property
    def name(self) -> str:
        return self.path.rstrip("/").split("/")[-1]


class RemoteLocation(BaseModel):
    """Repository coordinates.  ``branch=None`` means the repository default."""

    owner: str
    repo: str
    branch: str | None = None


class RemoteWrite(BaseModel):
    """Payload for creating or updating a single remote file.

    ``revision`` omitted means create; present means update guarded by the
    given precondition.
    """

    content: str
    message: str
    branch: str
    revision: str | None = None


class PushResult(BaseModel):
    file_id: str
    path: str
    status: PushStatus
    revision: str | None = None
    message: str | None = None


class PushReport(BaseModel):
    """Per-file outcomes of a bulk push, in push order."""

    location: RemoteLocation
    results: list[PushResult] = Field(default_factory=list)

    @computed_field
    @property
    def succeeded(self) -> int:
        return sum(1 for r in self.results if r.status == PushStatus.SUCCESS)

    @computed_field
    @property
    def failed(self) -> int:
        return len(self.results) - self.succeeded

    @computed_field
    @property
    def all_succeeded(self) -> bool:
        return self.failed == 0
