"""GitHub contents-API client.

Implements the RemoteHost protocol over ``httpx.AsyncClient``.  File content
travels base64-encoded on the wire; callers only ever see text.

Status mapping for writes: 409 and 422 mean the ``sha`` precondition was
rejected, or the repository name is taken (``RemoteConflictError``).  Every
other failure, including transport errors, missing auth and 404, is
``RemoteUnavailableError``.

The contents API only inlines files up to 1 MB.  Larger files come back with
``encoding: none`` and are read through the git blobs API instead, so a file
is never materialized with empty content and a valid ``sha``.
"""

from __future__ import annotations

import base64
import binascii
from typing import Any
from urllib.parse import quote

import httpx
from loguru import logger

from codedeck.workspace_runtime.errors import RemoteConflictError, RemoteUnavailableError
from codedeck.workspace_runtime.models.enums import RemoteEntryType
from codedeck.workspace_runtime.models.remote import RemoteEntry, RemoteWrite

API_BASE_URL = "https://api.github.com"

_CONFLICT_STATUSES = frozenset({409, 422})
_WRITE_METHODS = frozenset({"PUT", "POST"})


def encode_content(text: str) -> str:
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


def decode_content(data: str) -> str:
    """Decode GitHub's base64 payload (which wraps lines) to text."""
    try:
        raw = base64.b64decode("".join(data.split()), validate=True)
        return raw.decode("utf-8")
    except (binascii.Error, UnicodeDecodeError) as exc:
        msg = f"File content is not base64-encoded UTF-8 text: {exc}"
        raise RemoteUnavailableError(msg) from None


class GitHubClient:
    """Token-authenticated GitHub REST client.

    Pass ``transport`` to route requests through a custom httpx transport
    (``httpx.MockTransport`` in tests).
    """

    def __init__(
        self,
        token: str | None = None,
        *,
        base_url: str = API_BASE_URL,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._token = token
        self._client = httpx.AsyncClient(base_url=base_url, timeout=timeout, transport=transport)

    # -- Auth ------------------------------------------------------------------

    @property
    def is_authenticated(self) -> bool:
        return bool(self._token)

    def set_token(self, token: str) -> None:
        self._token = token

    def clear_token(self) -> None:
        self._token = None

    def _headers(self) -> dict[str, str]:
        if not self._token:
            msg = "Not authenticated with GitHub"
            raise RemoteUnavailableError(msg)
        return {
            "Authorization": f"token {self._token}",
            "Accept": "application/vnd.github.v3+json",
        }

    # -- Transport -------------------------------------------------------------

    async def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        headers = self._headers()
        try:
            response = await self._client.request(method, url, headers=headers, **kwargs)
        except httpx.HTTPError as exc:
            logger.warning("GitHub {} {} failed: {}", method, url, exc)
            msg = f"GitHub request failed: {exc}"
            raise RemoteUnavailableError(msg) from exc

        if response.is_success:
            return response

        detail = _error_detail(response)
        msg = f"GitHub API error: {response.status_code} - {detail}"
        if method in _WRITE_METHODS and response.status_code in _CONFLICT_STATUSES:
            raise RemoteConflictError(msg)
        raise RemoteUnavailableError(msg)

    async def aclose(self) -> None:
        await self._client.aclose()

    # -- Account / repositories ------------------------------------------------

    async def get_current_user(self) -> dict[str, Any]:
        response = await self._request("GET", "/user")
        return response.json()

    async def list_repositories(self) -> list[dict[str, Any]]:
        """Repositories of the authenticated user, most recently updated first."""
        response = await self._request("GET", "/user/repos", params={"sort": "updated", "per_page": 100})
        return response.json()

    async def get_repository(self, owner: str, repo: str) -> dict[str, Any]:
        response = await self._request("GET", f"/repos/{owner}/{repo}")
        return response.json()

    async def get_default_branch(self, owner: str, repo: str) -> str:
        repository = await self.get_repository(owner, repo)
        return repository.get("default_branch") or "main"

    async def create_repository(self, name: str, description: str = "", private: bool = False) -> dict[str, Any]:
        """Create a repository for the authenticated user, initialised with a README."""
        body = {"name": name, "description": description, "private": private, "auto_init": True}
        response = await self._request("POST", "/user/repos", json=body)
        logger.info("Created repository {}", name)
        return response.json()

    # -- Contents --------------------------------------------------------------

    @staticmethod
    def _contents_url(owner: str, repo: str, path: str) -> str:
        # Each segment is escaped on its own: '#' or '?' in a name must not end the path.
        encoded = "/".join(quote(segment, safe="") for segment in path.strip("/").split("/") if segment)
        base = f"/repos/{owner}/{repo}/contents"
        return f"{base}/{encoded}" if encoded else base

    async def list_directory(self, owner: str, repo: str, path: str, branch: str) -> list[RemoteEntry]:
        response = await self._request("GET", self._contents_url(owner, repo, path), params={"ref": branch})
        payload = response.json()
        if isinstance(payload, dict):
            msg = f"Not a directory: {owner}/{repo}/{path}"
            raise RemoteUnavailableError(msg)

        entries: list[RemoteEntry] = []
        for item in payload:
            # Symlinks and submodules have no text content to edit.
            if item.get("type") not in (RemoteEntryType.FILE, RemoteEntryType.DIR):
                logger.debug("Skipping {} entry {}", item.get("type"), item.get("path"))
                continue
            entries.append(
                RemoteEntry(
                    path=item["path"],
                    type=item["type"],
                    revision=item.get("sha", ""),
                    size=item.get("size"),
                )
            )
        return entries

    async def get_file_content(self, owner: str, repo: str, path: str, branch: str) -> str:
        response = await self._request("GET", self._contents_url(owner, repo, path), params={"ref": branch})
        payload = response.json()
        if not isinstance(payload, dict) or "content" not in payload:
            msg = f"Not a file: {owner}/{repo}/{path}"
            raise RemoteUnavailableError(msg)

        encoding = payload.get("encoding", "base64")
        if encoding == "base64":
            if not payload["content"] and payload.get("size"):
                msg = f"GitHub returned no content for non-empty file {owner}/{repo}/{path}"
                raise RemoteUnavailableError(msg)
            return decode_content(payload["content"])
        if encoding == "none" and payload.get("sha"):
            logger.debug("{}/{}/{} too large for the contents API, reading blob", owner, repo, path)
            return await self.get_blob_content(owner, repo, payload["sha"])
        msg = f"Unsupported content encoding {encoding!r} for {owner}/{repo}/{path}"
        raise RemoteUnavailableError(msg)

    async def get_blob_content(self, owner: str, repo: str, sha: str) -> str:
        """Read a file through the git blobs API (no 1 MB limit)."""
        response = await self._request("GET", f"/repos/{owner}/{repo}/git/blobs/{sha}")
        payload = response.json()
        if not isinstance(payload, dict) or payload.get("encoding") != "base64" or "content" not in payload:
            msg = f"Unexpected blob payload for {owner}/{repo}@{sha}"
            raise RemoteUnavailableError(msg)
        return decode_content(payload["content"])

    async def write_file(self, owner: str, repo: str, path: str, write: RemoteWrite) -> str:
        body: dict[str, Any] = {
            "message": write.message,
            "content": encode_content(write.content),
            "branch": write.branch,
        }
        if write.revision:
            body["sha"] = write.revision

        response = await self._request("PUT", self._contents_url(owner, repo, path), json=body)
        try:
            return response.json()["content"]["sha"]
        except (KeyError, TypeError, ValueError):
            msg = f"Unexpected GitHub response writing {owner}/{repo}/{path}"
            raise RemoteUnavailableError(msg) from None


def _error_detail(response: httpx.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(payload, dict):
        return payload.get("message", response.reason_phrase)
    return response.reason_phrase
