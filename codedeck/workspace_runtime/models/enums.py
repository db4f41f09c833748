"""Shared enumerations used across the workspace runtime."""

from __future__ import annotations

from enum import StrEnum

# -- Files -------------------------------------------------------------------


class Language(StrEnum):
    """Editor language of a file, derived from its extension at creation."""

    JAVASCRIPT = "javascript"
    TYPESCRIPT = "typescript"
    JSX = "jsx"
    TSX = "tsx"
    HTML = "html"
    CSS = "css"
    JSON = "json"
    MARKDOWN = "markdown"
    PYTHON = "python"


class NodeKind(StrEnum):
    FILE = "file"
    FOLDER = "folder"


# -- View --------------------------------------------------------------------


class Theme(StrEnum):
    DARK = "dark"
    LIGHT = "light"


# -- Remote ------------------------------------------------------------------


class RemoteEntryType(StrEnum):
    """Entry type reported by a remote directory listing."""

    FILE = "file"
    DIR = "dir"


class PushStatus(StrEnum):
    """Outcome of pushing a single file to the remote host."""

    SUCCESS = "success"
    CONFLICT = "conflict"
    UNAVAILABLE = "unavailable"
